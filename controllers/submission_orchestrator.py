# -*- coding: utf-8 -*-
"""
Submission Orchestrator
=======================
Runs one onboarding submission end to end:

    validate -> credits gate -> timezone -> create subject -> photo

Each attempt works on its own snapshot of the draft. Nothing is retried
automatically. A photo failure never turns a created subject into a
failed submission.

Known gap: the create calls carry no idempotency key, so resubmitting
after a create that succeeded server-side but whose response was lost
produces a duplicate subject.
"""

from typing import Optional

from PyQt5.QtCore import pyqtSignal

from controllers.base_controller import BaseController
from models.subject import DraftSubjectProfile, SubjectMode
from models.submission import PhotoUploadOutcome, SubmissionResult
from services.api_client import get_api_client
from services.credit_service import (
    CREATE_GUEST_PROFILE, CREATE_SELF_PROFILE, CreditFlowManager, CreditService
)
from services.credits_gate import CreditsGate, GateDecision
from services.error_mapper import is_insufficient_credits_error, map_exception
from services.exceptions import (
    ApiException, NetworkException, PhotoUploadError,
    SubjectCreationError, TimezoneResolutionError
)
from services.photo_upload_service import MediaUploadPipeline
from services.subject_submission_service import SubjectSubmissionService
from services.timezone_service import TimezoneResolutionService
from services.translation_manager import tr
from services.wizard.step_validator import validate_all
from utils.logger import get_logger

logger = get_logger(__name__)


class SubmissionOrchestrator(BaseController):
    """
    Sequences the submission pipeline and reports one SubmissionResult.

    Signals:
        submission_finished(SubmissionResult)
    """

    OPERATION = "submit_subject"

    submission_finished = pyqtSignal(object)

    def __init__(
        self,
        credits_gate: CreditsGate,
        timezone_service: TimezoneResolutionService,
        submission_service: SubjectSubmissionService,
        upload_pipeline: MediaUploadPipeline,
        parent=None
    ):
        super().__init__(parent)
        self.credits_gate = credits_gate
        self.timezone_service = timezone_service
        self.submission_service = submission_service
        self.upload_pipeline = upload_pipeline
        self._is_submitting = False

    @property
    def is_submitting(self) -> bool:
        return self._is_submitting

    def submit(
        self,
        draft: DraftSubjectProfile,
        mode: SubjectMode = SubjectMode.SELF,
        user_id: Optional[str] = None,
        firebase_uid: Optional[str] = None
    ) -> SubmissionResult:
        """
        Submit the draft.

        Args:
            draft: Draft collected by the wizard (snapshotted, never mutated)
            mode: SELF for the account holder, GUEST for a third party
            user_id: Signed-in account; owner of guest subjects
            firebase_uid: Auth uid sent with self profiles
        """
        if self._is_submitting:
            logger.warning("Submission already in flight, ignoring")
            return SubmissionResult.failed(tr("error.submission.in_progress"))

        snapshot = draft.snapshot()
        errors = validate_all(snapshot)
        if errors:
            logger.warning(f"Submission blocked by validation: {errors}")
            return self._finish(SubmissionResult.failed(" | ".join(errors)))

        self._is_submitting = True
        self._emit_started(self.OPERATION)
        self._log_operation(self.OPERATION, mode=mode.value, unknown_time=snapshot.unknown_time,
                            has_photo=snapshot.local_image is not None)
        try:
            result = self._run(snapshot, mode, user_id, firebase_uid)
        except Exception as e:
            self._emit_error(self.OPERATION, map_exception(e, context=self.OPERATION))
            raise
        finally:
            self._is_submitting = False

        if result.success:
            self._emit_completed(self.OPERATION, True)
        else:
            self._emit_error(self.OPERATION, result.error_message or "")
        return self._finish(result)

    def _finish(self, result: SubmissionResult) -> SubmissionResult:
        self.submission_finished.emit(result)
        return result

    def _run(self, draft: DraftSubjectProfile, mode: SubjectMode,
             user_id: Optional[str], firebase_uid: Optional[str]) -> SubmissionResult:
        action = CREATE_GUEST_PROFILE if mode == SubjectMode.GUEST else CREATE_SELF_PROFILE

        # Pre-flight: nothing below runs unless the gate allows it
        try:
            decision = self.credits_gate.check(action, user_id)
        except (ApiException, NetworkException) as e:
            return SubmissionResult.failed(map_exception(e, context="credits_check"))
        if not decision:
            logger.info(f"Credits gate declined {action} (route: {decision.route})")
            return SubmissionResult.declined(tr("error.credits.insufficient"))

        self.credits_gate.commit(action)

        try:
            tzone = self.timezone_service.resolve_for_draft(draft)
            created = self.submission_service.create(
                draft, tzone, mode=mode, owner_user_id=user_id, firebase_uid=firebase_uid
            )
        except TimezoneResolutionError as e:
            self._settle(decision, user_id)
            return SubmissionResult.failed(map_exception(e))
        except SubjectCreationError as e:
            if is_insufficient_credits_error(e):
                self.credits_gate.handle_backend_rejection(e, action, user_id)
                return SubmissionResult.declined(tr("error.credits.insufficient"))
            self._settle(decision, user_id)
            return SubmissionResult.failed(map_exception(e))

        self._settle(decision, user_id)
        result = SubmissionResult(success=True, subject_id=created.subject_id, subject=created.data)

        if draft.local_image is None:
            return result

        try:
            result.photo = self.upload_pipeline.upload(created.subject_id, draft.local_image)
            result.photo_upload_outcome = PhotoUploadOutcome.SUCCESS
        except PhotoUploadError as e:
            logger.warning(f"Subject {created.subject_id} created without photo: {e}")
            result.photo_upload_outcome = PhotoUploadOutcome.FAILED
            result.photo_error_message = map_exception(e)

        return result

    def _settle(self, decision: GateDecision, user_id: Optional[str]):
        if decision.cost:
            self.credits_gate.settle(user_id)


def build_submission_orchestrator(api_client=None, on_route=None, parent=None) -> SubmissionOrchestrator:
    """Orchestrator wired to the shared API client and the configured Google services."""
    api = api_client or get_api_client()
    gate = CreditsGate(CreditService(api), CreditFlowManager(on_route=on_route))
    return SubmissionOrchestrator(
        credits_gate=gate,
        timezone_service=TimezoneResolutionService(),
        submission_service=SubjectSubmissionService(api),
        upload_pipeline=MediaUploadPipeline(api),
        parent=parent,
    )
