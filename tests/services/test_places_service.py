# -*- coding: utf-8 -*-
"""
Tests for LocationResolutionService.

Tests cover:
- Autocomplete degradation to an empty list
- Place details parsing
- Atomic resolution into the draft
"""

import pytest
import requests
from unittest.mock import MagicMock, patch

from models.subject import DraftSubjectProfile
from models.submission import PlaceSuggestion
from services.exceptions import LocationResolutionError
from services.places_service import LocationResolutionService


def _response(payload, status_code=200):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(f"{status_code}")
    return response


DETAILS_OK = {
    "status": "OK",
    "result": {
        "geometry": {"location": {"lat": 48.8566, "lng": 2.3522}},
        "formatted_address": "Paris, France",
    },
}


@pytest.fixture
def service():
    return LocationResolutionService(api_key="test-key", base_url="https://maps.test/api")


@pytest.fixture
def suggestion():
    return PlaceSuggestion(description="Paris, France", place_id="place-paris")


class TestSearchPlaces:

    def test_empty_text_makes_no_request(self, service):
        with patch("services.places_service.requests.get") as mock_get:
            assert service.search_places("") == []
            assert service.search_places("   ") == []
        mock_get.assert_not_called()

    def test_missing_key_yields_empty_list(self):
        service = LocationResolutionService(api_key="")
        with patch("services.places_service.requests.get") as mock_get:
            assert service.search_places("Paris") == []
        mock_get.assert_not_called()

    def test_predictions_become_suggestions(self, service):
        payload = {
            "status": "OK",
            "predictions": [
                {"description": "Paris, France", "place_id": "p1"},
                {"description": "Paris, TX, USA", "place_id": "p2"},
            ],
        }
        with patch("services.places_service.requests.get", return_value=_response(payload)) as mock_get:
            suggestions = service.search_places("Paris")

        assert suggestions == [
            PlaceSuggestion("Paris, France", "p1"),
            PlaceSuggestion("Paris, TX, USA", "p2"),
        ]
        params = mock_get.call_args.kwargs["params"]
        assert params["input"] == "Paris"
        assert params["types"] == "(cities)"
        assert params["key"] == "test-key"

    def test_non_ok_status_yields_empty_list(self, service):
        with patch("services.places_service.requests.get",
                   return_value=_response({"status": "ZERO_RESULTS"})):
            assert service.search_places("Xyzzy") == []

    def test_request_failure_yields_empty_list(self, service):
        with patch("services.places_service.requests.get",
                   side_effect=requests.exceptions.ConnectionError("down")):
            assert service.search_places("Paris") == []


class TestSelectPlace:

    def test_success_sets_all_three_fields(self, service, suggestion):
        draft = DraftSubjectProfile()
        draft.set_location_query("par")

        with patch("services.places_service.requests.get", return_value=_response(DETAILS_OK)):
            place = service.select_place(suggestion, draft)

        assert place.formatted_address == "Paris, France"
        assert draft.location.query_text == "Paris, France"
        assert draft.location.latitude == 48.8566
        assert draft.location.longitude == 2.3522
        assert draft.location.formatted_address == "Paris, France"

    @pytest.mark.parametrize("payload", [
        {"status": "NOT_FOUND"},
        {"status": "OK", "result": {"formatted_address": "Paris, France"}},
        {"status": "OK", "result": {"geometry": {"location": {"lat": 1.0, "lng": 2.0}}}},
        {"status": "OK", "result": {"geometry": {"location": {"lat": "abc", "lng": 2.0}},
                                    "formatted_address": "Paris, France"}},
    ])
    def test_bad_details_leave_draft_unresolved(self, service, suggestion, valid_draft, payload):
        with patch("services.places_service.requests.get", return_value=_response(payload)):
            with pytest.raises(LocationResolutionError):
                service.select_place(suggestion, valid_draft)

        location = valid_draft.location
        assert (location.latitude, location.longitude, location.formatted_address) == (None, None, None)
        assert location.query_text == "Paris, France"

    def test_http_error_leaves_draft_unresolved(self, service, suggestion):
        draft = DraftSubjectProfile()
        with patch("services.places_service.requests.get", return_value=_response({}, 500)):
            with pytest.raises(LocationResolutionError):
                service.select_place(suggestion, draft)
        assert draft.location.is_resolved is False

    def test_missing_key_raises(self, suggestion):
        service = LocationResolutionService(api_key="")
        with pytest.raises(LocationResolutionError):
            service.fetch_place_details(suggestion.place_id)
