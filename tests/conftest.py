# -*- coding: utf-8 -*-
"""Shared fixtures for the onboarding pipeline tests."""

import os

import pytest

# No display is needed; the wizard layer only uses QObject signals
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from models.subject import DraftSubjectProfile
from services.api_client import reset_api_client
from services.session_store import SessionStore


@pytest.fixture(autouse=True)
def clean_singletons():
    """Fresh session state and API client for every test."""
    SessionStore().reset()
    reset_api_client()
    yield
    SessionStore().reset()
    reset_api_client()


def build_valid_draft(unknown_time: bool = False) -> DraftSubjectProfile:
    """Draft that passes every step: 1990-03-05 2:30 PM, London."""
    draft = DraftSubjectProfile()
    draft.update(
        first_name="Ada",
        last_name="Lovelace",
        gender="female",
        birth_year=1990,
        birth_month=3,
        birth_day=5,
        birth_hour=2,
        birth_minute=30,
        meridiem="PM",
        unknown_time=unknown_time,
    )
    draft.apply_resolved_location(51.5074, -0.1278, "London, UK", "London, UK")
    return draft


@pytest.fixture
def valid_draft():
    return build_valid_draft()


@pytest.fixture
def unknown_time_draft():
    return build_valid_draft(unknown_time=True)
