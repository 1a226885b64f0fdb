# -*- coding: utf-8 -*-
"""
Subject Onboarding Wizard.

Headless wizard object the screens drive: field edits go into the
context, place lookups go through LocationResolutionService, Next/Back/
Edit go through the flow controller, and completion runs the submission
orchestrator and writes the outcome into the session.
"""

from typing import List, Optional

from PyQt5.QtCore import QObject, pyqtSignal

from app.config import Screens
from controllers.submission_orchestrator import (
    SubmissionOrchestrator, build_submission_orchestrator
)
from models.subject import DraftSubjectProfile, SubjectMode
from models.submission import PhotoUploadOutcome, PlaceSuggestion, SubmissionResult
from services.error_mapper import map_exception
from services.exceptions import LocationResolutionError
from services.places_service import LocationResolutionService
from services.session_store import SessionStore, get_session_store
from services.translation_manager import tr
from ui.wizards.framework import ReviewLine, WizardFlowController
from utils.logger import get_logger

from .onboarding_context import OnboardingContext
from .steps import build_onboarding_steps

logger = get_logger(__name__)


class SubjectOnboardingWizard(QObject):
    """
    Onboarding wizard for the account holder (SELF) or a guest (GUEST).

    Signals:
        error_occurred(str): user-facing message for a failed lookup
        submission_succeeded(SubmissionResult)
        submission_failed(str)
        photo_upload_failed(str, str): title, message
        paywall_requested()
    """

    error_occurred = pyqtSignal(str)
    submission_succeeded = pyqtSignal(object)
    submission_failed = pyqtSignal(str)
    photo_upload_failed = pyqtSignal(str, str)
    paywall_requested = pyqtSignal()

    def __init__(
        self,
        mode: SubjectMode = SubjectMode.SELF,
        session: Optional[SessionStore] = None,
        location_service: Optional[LocationResolutionService] = None,
        orchestrator: Optional[SubmissionOrchestrator] = None,
        parent=None
    ):
        super().__init__(parent)
        self.mode = mode
        self.session = session or get_session_store()
        self.location_service = location_service or LocationResolutionService()
        self.orchestrator = orchestrator or build_submission_orchestrator(
            on_route=self.session.navigate_to
        )

        self.context = OnboardingContext(mode)
        self.context.user_id = self.session.user_id
        self.steps = build_onboarding_steps()
        self.navigator = WizardFlowController(self.context, self.steps, on_complete=self.submit)

        self.context.on_change(self.navigator.refresh)
        self.orchestrator.loading_changed.connect(self.navigator.set_busy)

    @property
    def draft(self) -> DraftSubjectProfile:
        return self.context.draft

    # ==================== Navigation ====================

    def next(self) -> bool:
        return self.navigator.next_step()

    def back(self) -> bool:
        return self.navigator.previous_step()

    def edit_jump(self, index: int) -> bool:
        return self.navigator.edit_jump(index)

    def can_go_next(self) -> bool:
        return self.navigator.can_go_next()

    def step_title(self, index: Optional[int] = None) -> str:
        if index is None:
            index = self.navigator.current_index
        return tr(self.steps[index].title_key)

    def review_lines(self) -> List[ReviewLine]:
        return self.steps[-1].review_lines(self.draft)

    # ==================== Birth place ====================

    def on_place_query_changed(self, text: str) -> List[PlaceSuggestion]:
        """Record typed text and fetch fresh suggestions for it."""
        self.context.set_place_query(text)
        suggestions = self.location_service.search_places(text)
        self.context.set_suggestions(suggestions)
        return suggestions

    def select_suggestion(self, suggestion: PlaceSuggestion) -> bool:
        """Resolve a suggestion; on failure the place stays unresolved."""
        try:
            self.location_service.select_place(suggestion, self.draft)
        except LocationResolutionError as e:
            self.error_occurred.emit(map_exception(e))
            return False
        finally:
            self.context.location_changed()
        return True

    # ==================== Submission ====================

    def submit(self) -> SubmissionResult:
        """Run the orchestrator on the current draft and route the outcome."""
        self.session.navigation_target = None
        self.context.set_status("submitting")

        draft = self.draft
        result = self.orchestrator.submit(
            draft,
            mode=self.mode,
            user_id=self.session.user_id,
            firebase_uid=self.session.firebase_uid,
        )

        if result.success:
            self._record_success(draft, result)
        elif result.declined_by_gate:
            self.context.set_status("draft")
            if not self.session.navigation_target:
                self.session.navigate_to(Screens.PAYWALL)
            self.paywall_requested.emit()
        else:
            # Draft kept so the user can fix the problem and retry
            self.context.set_status("draft")
            self.submission_failed.emit(result.error_message or "")
        return result

    def _record_success(self, draft: DraftSubjectProfile, result: SubmissionResult):
        if self.mode == SubjectMode.GUEST:
            self.session.add_guest_subject(result.subject_id)
        else:
            self.session.set_user_data(self._user_data(draft, result))
            self.session.navigate_to(Screens.MAIN)

        if result.photo_upload_outcome == PhotoUploadOutcome.FAILED:
            self.photo_upload_failed.emit(
                tr("photo.upload_failed.title"),
                result.photo_error_message or tr("photo.upload_failed")
            )

        self.submission_succeeded.emit(result)

        # The draft is discarded once its result is recorded
        self.context.reset()
        self.context.set_status("completed")
        self.navigator.reset()

    @staticmethod
    def _user_data(draft: DraftSubjectProfile, result: SubmissionResult) -> dict:
        birth_time = draft.birth_time
        user_data = dict(result.subject)
        user_data.update({
            "id": result.subject_id,
            "name": draft.full_name,
            "birthYear": draft.birth_year,
            "birthMonth": draft.birth_month,
            "birthDay": draft.birth_day,
            "birthHour": 12 if birth_time.unknown else birth_time.hour24,
            "birthMinute": 0 if birth_time.unknown else birth_time.minute,
            "birthLocation": draft.location.formatted_address,
        })
        if result.photo is not None:
            user_data["profilePhotoUrl"] = result.photo.profile_photo_url
            user_data["profilePhotoKey"] = result.photo.profile_photo_key
        return user_data
