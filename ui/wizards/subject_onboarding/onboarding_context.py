# -*- coding: utf-8 -*-
"""
Onboarding Context - field state for the subject onboarding wizard.

Wraps the single DraftSubjectProfile the steps write into, plus the
place suggestions currently on offer. Every change notifies listeners
so the flow controller can recompute validity.
"""

from typing import Any, Callable, Dict, List, Optional

from models.subject import DraftSubjectProfile, LocalImageRef, SubjectMode
from models.submission import PlaceSuggestion
from services.photo_upload_service import validate_image
from ui.wizards.framework import WizardContext
from utils.logger import get_logger

logger = get_logger(__name__)


class OnboardingContext(WizardContext):
    """FieldStateStore of the onboarding wizard."""

    def __init__(self, mode: SubjectMode = SubjectMode.SELF):
        super().__init__()
        self.mode = mode
        self.draft = DraftSubjectProfile()
        self.suggestions: List[PlaceSuggestion] = []
        self._listeners: List[Callable[[], None]] = []

    def on_change(self, listener: Callable[[], None]):
        self._listeners.append(listener)

    def _changed(self):
        self.touch()
        for listener in list(self._listeners):
            listener()

    # ==================== Field setters ====================

    def set_fields(self, **fields):
        """Write editable draft fields (see DraftSubjectProfile.update)."""
        self.draft.update(**fields)
        self._changed()

    def set_place_query(self, text: str):
        """Typing replaces the query and drops any resolved place."""
        self.draft.set_location_query(text)
        self._changed()

    def set_suggestions(self, suggestions: List[PlaceSuggestion]):
        self.suggestions = list(suggestions)

    def set_image(self, image_ref: Optional[LocalImageRef], file_size: Optional[int] = None):
        """
        Attach or clear the photo.

        Raises:
            ValidationException: unsupported type or too large
        """
        if image_ref is not None:
            validate_image(image_ref, file_size)
        self.draft.update(local_image=image_ref)
        self._changed()

    def location_changed(self):
        """Announce a resolution written by LocationResolutionService."""
        self.suggestions = []
        self._changed()

    def reset(self):
        self.draft = DraftSubjectProfile()
        self.suggestions = []
        self.completed_steps = set()
        self.current_step_index = 0
        self.set_status("draft")
        self._changed()

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["mode"] = self.mode.value
        data["draft"] = self.draft.to_dict()
        return data
