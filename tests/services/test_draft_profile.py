# -*- coding: utf-8 -*-
"""
Tests for the draft subject profile model.

Tests cover:
- Single setter surface
- All-or-none resolved location
- 12h to 24h wire time
- Snapshots
"""

import pytest

from models.subject import BirthLocation, BirthTime, DraftSubjectProfile, LocalImageRef


class TestSetterSurface:

    def test_update_sets_fields(self):
        draft = DraftSubjectProfile()
        draft.update(first_name="Ada", birth_hour=7, meridiem="AM")
        assert draft.first_name == "Ada"
        assert draft.birth_time.hour12 == 7
        assert draft.birth_time.meridiem == "AM"

    def test_resolved_fields_are_not_editable(self):
        draft = DraftSubjectProfile()
        with pytest.raises(KeyError):
            draft.update(latitude=1.0)

    def test_unknown_fields_rejected(self):
        with pytest.raises(KeyError):
            DraftSubjectProfile().update(nickname="x")

    def test_rejected_update_writes_nothing(self):
        draft = DraftSubjectProfile()
        draft.update(first_name="Ada")

        with pytest.raises(KeyError):
            draft.update(first_name="Grace", birth_hour=9, nickname="x")

        assert draft.first_name == "Ada"
        assert draft.birth_time.hour12 is None


class TestLocationAtomicity:

    def test_partial_location_cannot_be_built(self):
        with pytest.raises(ValueError):
            BirthLocation(query_text="x", latitude=1.0)

    def test_apply_sets_all_three_and_echoes_description(self):
        draft = DraftSubjectProfile()
        draft.set_location_query("lond")
        draft.apply_resolved_location(51.5, -0.12, "London, UK", "London, United Kingdom")

        assert draft.location.query_text == "London, United Kingdom"
        assert draft.location.latitude == 51.5
        assert draft.location.longitude == -0.12
        assert draft.location.formatted_address == "London, UK"

    def test_typing_clears_resolution(self, valid_draft):
        valid_draft.set_location_query("Par")
        location = valid_draft.location
        assert location.query_text == "Par"
        assert (location.latitude, location.longitude, location.formatted_address) == (None, None, None)

    def test_clear_keeps_query(self, valid_draft):
        valid_draft.clear_resolved_location()
        assert valid_draft.location.query_text == "London, UK"
        assert valid_draft.location.is_resolved is False


class TestBirthTime:

    @pytest.mark.parametrize("hour12, meridiem, expected", [
        (12, "AM", "00:05"),
        (12, "PM", "12:05"),
        (1, "AM", "01:05"),
        (11, "PM", "23:05"),
    ])
    def test_wire_time(self, hour12, meridiem, expected):
        assert BirthTime(hour12=hour12, minute=5, meridiem=meridiem).wire_time() == expected

    def test_unknown_time_has_no_wire_time(self):
        assert BirthTime(hour12=3, minute=15, unknown=True).wire_time() is None

    def test_timezone_wall_time_uses_sentinel_when_unknown(self, valid_draft):
        valid_draft.update(unknown_time=True)
        assert valid_draft.timezone_wall_time("12:00") == "12:00"

    def test_toggling_unknown_back_restores_time(self, valid_draft):
        valid_draft.update(unknown_time=True)
        valid_draft.update(unknown_time=False)
        assert valid_draft.birth_time.wire_time() == "14:30"


class TestSnapshot:

    def test_snapshot_is_independent(self, valid_draft):
        snapshot = valid_draft.snapshot()
        valid_draft.update(first_name="Changed", birth_minute=45)
        valid_draft.set_location_query("Elsewhere")

        assert snapshot.first_name == "Ada"
        assert snapshot.birth_time.minute == 30
        assert snapshot.location.is_resolved is True

    def test_local_image_path_strips_scheme(self):
        ref = LocalImageRef(uri="file:///tmp/photo.jpg", mime_type="image/jpeg")
        assert ref.path == "/tmp/photo.jpg"

    def test_wire_date(self, valid_draft):
        assert valid_draft.wire_date() == "1990-03-05"
