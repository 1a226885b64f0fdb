# -*- coding: utf-8 -*-
"""
Location Resolution Service - Google Places lookups for the birth place.
=========================================================================

- Autocomplete: free text -> city suggestions
- Place details: suggestion -> coordinates + formatted address

Suggestion failures degrade to an empty list. Selection failures leave
the draft location unresolved; a partial location is never written.
"""

from typing import Any, Dict, List, Optional

import requests

from app.config import Config
from models.subject import DraftSubjectProfile
from models.submission import PlaceSuggestion, ResolvedPlace
from services.exceptions import LocationResolutionError
from utils.logger import get_logger

logger = get_logger(__name__)


class LocationResolutionService:
    """Turns place queries into suggestions and suggestions into coordinates."""

    AUTOCOMPLETE_PATH = "/place/autocomplete/json"
    DETAILS_PATH = "/place/details/json"

    def __init__(self, api_key: Optional[str] = None, base_url: Optional[str] = None,
                 timeout: Optional[int] = None):
        self.api_key = Config.GOOGLE_API_KEY if api_key is None else api_key
        self.base_url = (base_url or Config.GOOGLE_MAPS_BASE_URL).rstrip('/')
        self.timeout = timeout or Config.API_TIMEOUT

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def _get(self, path: str, params: Dict[str, Any]) -> Dict[str, Any]:
        """GET a Maps endpoint; the key is appended here and never logged."""
        logger.info(f"[API REQ] GET {path} {params}")
        response = requests.get(
            f"{self.base_url}{path}",
            params={**params, "key": self.api_key},
            timeout=self.timeout
        )
        logger.info(f"[API RES] {response.status_code} {path}")
        response.raise_for_status()
        return response.json()

    # ==================== Autocomplete ====================

    def search_places(self, query_text: str) -> List[PlaceSuggestion]:
        """
        City suggestions for the typed text.

        Empty text, a missing API key, a non-OK status or any request
        failure all yield an empty list.
        """
        if not query_text or not query_text.strip() or not self.is_configured:
            return []

        try:
            data = self._get(self.AUTOCOMPLETE_PATH, {
                "input": query_text,
                "types": Config.PLACE_TYPES_FILTER,
            })
        except (requests.exceptions.RequestException, ValueError) as e:
            logger.warning(f"Place autocomplete failed: {e}")
            return []

        if data.get("status") != "OK":
            logger.debug(f"Place autocomplete status: {data.get('status')}")
            return []

        return [
            PlaceSuggestion.from_prediction(prediction)
            for prediction in data.get("predictions", [])
        ]

    # ==================== Place details ====================

    def fetch_place_details(self, place_id: str) -> ResolvedPlace:
        """
        Coordinates and formatted address for a place id.

        Raises:
            LocationResolutionError: on request failure, non-OK status or
                a response missing any of the three fields
        """
        if not self.is_configured:
            raise LocationResolutionError("Geocoding API key is not configured")

        try:
            data = self._get(self.DETAILS_PATH, {"place_id": place_id})
        except (requests.exceptions.RequestException, ValueError) as e:
            raise LocationResolutionError(f"Place details request failed: {e}", e)

        if data.get("status") != "OK":
            raise LocationResolutionError(f"Place details status: {data.get('status')}")

        result = data.get("result") or {}
        location = (result.get("geometry") or {}).get("location") or {}
        lat = location.get("lat")
        lng = location.get("lng")
        address = result.get("formatted_address")
        if lat is None or lng is None or not address:
            raise LocationResolutionError("Place details response is incomplete")

        try:
            latitude, longitude = float(lat), float(lng)
        except (TypeError, ValueError) as e:
            raise LocationResolutionError(f"Place details coordinates are not numeric: {lat}, {lng}", e)

        return ResolvedPlace(latitude=latitude, longitude=longitude, formatted_address=address)

    def select_place(self, suggestion: PlaceSuggestion, draft: DraftSubjectProfile) -> ResolvedPlace:
        """
        Resolve a chosen suggestion into the draft.

        The suggestion description replaces the typed query immediately;
        the coordinates and address are written together only once the
        lookup succeeds.

        Raises:
            LocationResolutionError: the draft is left unresolved
        """
        draft.set_location_query(suggestion.description)

        try:
            place = self.fetch_place_details(suggestion.place_id)
        except LocationResolutionError as e:
            logger.warning(f"Could not resolve '{suggestion.description}': {e}")
            draft.clear_resolved_location()
            raise

        draft.apply_resolved_location(
            place.latitude, place.longitude, place.formatted_address, suggestion.description
        )
        logger.info(f"Birth place resolved: {place.formatted_address}")
        return place
