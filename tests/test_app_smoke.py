# -*- coding: utf-8 -*-
"""
Smoke tests to ensure the application doesn't break after changes.
These tests verify basic wiring works.
"""
import pytest

from app.config import Config


def test_imports():
    """Test that all main modules can be imported."""
    try:
        from models import DraftSubjectProfile, SubmissionResult
        from controllers import SubmissionOrchestrator, build_submission_orchestrator
        from services.places_service import LocationResolutionService
        from services.timezone_service import TimezoneResolutionService
        from services.credits_gate import CreditsGate
        from services.photo_upload_service import MediaUploadPipeline
        from ui.wizards.subject_onboarding import SubjectOnboardingWizard
        assert True
    except ImportError as e:
        pytest.fail(f"Import failed: {e}")


def test_models_instantiation():
    """Test that models can be instantiated."""
    from models import DraftSubjectProfile, SubmissionResult

    draft = DraftSubjectProfile()
    assert draft.location.is_resolved is False
    assert draft.birth_time.unknown is False

    result = SubmissionResult.failed("x")
    assert result.to_dict() == {"success": False, "photoUploadOutcome": "skipped", "errorMessage": "x"}


def test_config_defaults():
    assert Config.MIN_BIRTH_YEAR == 1900
    assert Config.UNKNOWN_TIME_SENTINEL == "12:00"
    assert "image/webp" in Config.ACCEPTED_PHOTO_TYPES


def test_ensure_directories(tmp_path, monkeypatch):
    monkeypatch.setattr(Config, "DATA_DIR", tmp_path / "data")
    monkeypatch.setattr(Config, "LOGS_DIR", tmp_path / "logs")
    monkeypatch.setattr(Config, "UPLOAD_TEMP_DIR", tmp_path / "data" / "uploads")

    Config.ensure_directories()

    assert (tmp_path / "data" / "uploads").is_dir()
    assert (tmp_path / "logs").is_dir()


def test_wizard_builds(qapp):
    from services.session_store import SessionStore
    from ui.wizards.subject_onboarding import SubjectOnboardingWizard

    wizard = SubjectOnboardingWizard(session=SessionStore())
    assert wizard.navigator.get_step_count() == 4
    assert wizard.can_go_next() is False


def test_logger_setup(tmp_path, monkeypatch):
    import logging
    from utils import logger as app_logger

    monkeypatch.setattr(Config, "LOGS_DIR", tmp_path / "logs")
    monkeypatch.setattr(Config, "LOG_PATH", tmp_path / "logs" / "app.log")
    monkeypatch.setattr(Config, "LOG_LEVEL", "warning")

    root = app_logger.setup_logger()
    try:
        console = [h for h in root.handlers if type(h) is logging.StreamHandler][0]
        assert console.level == logging.WARNING
        assert (tmp_path / "logs").is_dir()
        assert app_logger.get_logger("services.places_service").name == "stellium.services.places_service"
    finally:
        for handler in root.handlers:
            handler.close()
        monkeypatch.undo()
        app_logger.setup_logger()
