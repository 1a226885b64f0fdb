# -*- coding: utf-8 -*-
"""
Step validation for the Subject Onboarding Wizard.

Pure checks over a DraftSubjectProfile, one per step. Nothing here
mutates the draft; validity is recomputed on every call.
"""

from typing import Callable, Dict, List, Tuple

from app.config import Config
from models.subject import DraftSubjectProfile, Gender
from services.translation_manager import tr
from utils.datetime_utils import current_year, days_in_month


def validate_name_gender(draft: DraftSubjectProfile) -> List[str]:
    errors = []
    if not (draft.first_name or "").strip():
        errors.append(tr("validation.first_name_required"))
    if not (draft.last_name or "").strip():
        errors.append(tr("validation.last_name_required"))
    if draft.gender not in Gender.values():
        errors.append(tr("validation.gender_required"))
    return errors


def validate_location(draft: DraftSubjectProfile) -> List[str]:
    # All three resolved fields come from a place lookup, never typed
    if not draft.location.is_resolved:
        return [tr("validation.location_required")]
    return []


def validate_birth_date(draft: DraftSubjectProfile) -> List[str]:
    year, month, day = draft.birth_year, draft.birth_month, draft.birth_day
    if year is None or month is None or day is None:
        return [tr("validation.date_required")]

    if not Config.MIN_BIRTH_YEAR <= year <= current_year():
        return [tr("validation.year_invalid")]
    if not 1 <= month <= 12:
        return [tr("validation.month_invalid")]

    days = days_in_month(year, month)
    if not 1 <= day <= days:
        return [tr("validation.day_invalid", month=month, year=year, days=days)]
    return []


def validate_birth_time(draft: DraftSubjectProfile) -> List[str]:
    if draft.birth_time.unknown:
        return []
    if not draft.birth_time.is_complete:
        return [tr("validation.time_required")]
    return []


def validate_birth_datetime(draft: DraftSubjectProfile) -> List[str]:
    return validate_birth_date(draft) + validate_birth_time(draft)


def validate_all(draft: DraftSubjectProfile) -> List[str]:
    """Every data step at once, as checked before submission."""
    return (
        validate_name_gender(draft)
        + validate_location(draft)
        + validate_birth_datetime(draft)
    )


class StepValidator:
    """Validates wizard steps by index."""

    # Step constants
    STEP_NAME_GENDER = 0
    STEP_LOCATION = 1
    STEP_DATETIME = 2
    STEP_REVIEW = 3

    VALIDATORS: Dict[int, Callable[[DraftSubjectProfile], List[str]]] = {
        STEP_NAME_GENDER: validate_name_gender,
        STEP_LOCATION: validate_location,
        STEP_DATETIME: validate_birth_datetime,
        # Review has nothing of its own to fill in
        STEP_REVIEW: lambda draft: [],
    }

    @staticmethod
    def collect_errors(step_index: int, draft: DraftSubjectProfile) -> List[str]:
        validator = StepValidator.VALIDATORS.get(step_index)
        if validator is None:
            return []
        return validator(draft)

    @staticmethod
    def validate_step(step_index: int, draft: DraftSubjectProfile) -> Tuple[bool, str]:
        """
        Validate one step of the draft.

        Returns:
            Tuple of (is_valid, error_message)
        """
        errors = StepValidator.collect_errors(step_index, draft)
        if errors:
            return False, " | ".join(errors)
        return True, ""

    @staticmethod
    def is_step_valid(step_index: int, draft: DraftSubjectProfile) -> bool:
        return not StepValidator.collect_errors(step_index, draft)
