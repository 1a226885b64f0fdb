# -*- coding: utf-8 -*-
"""
Steps of the subject onboarding wizard, declared as descriptors.

    0  name & gender
    1  birth location
    2  birth date & time
    3  review (photo is attached here)
"""

from typing import List

from app.config import Vocabularies
from models.subject import DraftSubjectProfile
from services.translation_manager import tr
from services.wizard.step_validator import (
    StepValidator, validate_birth_datetime, validate_location, validate_name_gender
)
from ui.wizards.framework import ReviewLine, StepDescriptor
from utils.datetime_utils import format_date_display, format_time_display


def render_name_gender(draft: DraftSubjectProfile) -> List[ReviewLine]:
    return [
        ReviewLine(tr("review.name"), draft.full_name, StepValidator.STEP_NAME_GENDER),
        ReviewLine(tr("review.gender"), Vocabularies.get_gender_display(draft.gender),
                   StepValidator.STEP_NAME_GENDER),
    ]


def render_location(draft: DraftSubjectProfile) -> List[ReviewLine]:
    location = draft.location
    value = location.formatted_address if location.is_resolved else location.query_text
    return [ReviewLine(tr("review.birth_place"), value or "", StepValidator.STEP_LOCATION)]


def render_birth_datetime(draft: DraftSubjectProfile) -> List[ReviewLine]:
    date_value = ""
    if draft.has_real_birth_date:
        date_value = format_date_display(draft.birth_year, draft.birth_month, draft.birth_day)

    birth_time = draft.birth_time
    if birth_time.unknown:
        time_value = tr("review.time_unknown")
    elif birth_time.is_complete:
        time_value = format_time_display(birth_time.hour12, birth_time.minute, birth_time.meridiem)
    else:
        time_value = ""

    return [
        ReviewLine(tr("review.birth_date"), date_value, StepValidator.STEP_DATETIME),
        ReviewLine(tr("review.birth_time"), time_value, StepValidator.STEP_DATETIME),
    ]


def render_review(draft: DraftSubjectProfile) -> List[ReviewLine]:
    lines = (
        render_name_gender(draft)
        + render_location(draft)
        + render_birth_datetime(draft)
    )
    photo = tr("review.photo_attached") if draft.local_image else tr("review.photo_none")
    lines.append(ReviewLine(tr("review.photo"), photo, StepValidator.STEP_REVIEW))
    return lines


def build_onboarding_steps() -> List[StepDescriptor]:
    """Ordered step arena; position in the list is the step index."""
    return [
        StepDescriptor(
            key="name_gender",
            title_key="step.name_gender",
            validator=validate_name_gender,
            render=render_name_gender,
            edit_target=StepValidator.STEP_NAME_GENDER,
        ),
        StepDescriptor(
            key="birth_location",
            title_key="step.birth_location",
            validator=validate_location,
            render=render_location,
            edit_target=StepValidator.STEP_LOCATION,
        ),
        StepDescriptor(
            key="birth_datetime",
            title_key="step.birth_datetime",
            validator=validate_birth_datetime,
            render=render_birth_datetime,
            edit_target=StepValidator.STEP_DATETIME,
        ),
        StepDescriptor(
            key="review",
            title_key="step.review",
            validator=lambda draft: [],
            render=render_review,
            edit_target=StepValidator.STEP_REVIEW,
        ),
    ]
