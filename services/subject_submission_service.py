# -*- coding: utf-8 -*-
"""
Subject Submission Service
==========================

Maps a draft profile onto the backend's create-subject contract.

The backend is bimodal: a known birth time and an unknown birth time go
to different endpoints, for both the account holder (self) and guest
subjects. Creation is not idempotent; a retry after a lost response
creates a second subject.
"""

from typing import Any, Dict, Optional

from models.subject import DraftSubjectProfile, SubjectMode
from models.submission import CreatedSubject
from services.api_client import StelliumApiClient, get_api_client
from services.exceptions import ApiException, NetworkException, SubjectCreationError
from utils.logger import get_logger

logger = get_logger(__name__)

# Response fields that may carry the new subject's id, in priority order
SUBJECT_ID_FIELDS = ("_id", "userId", "id")


def extract_subject_id(response: Dict[str, Any]) -> Optional[str]:
    """First non-empty id field of a create response."""
    for key in SUBJECT_ID_FIELDS:
        value = (response or {}).get(key)
        if value:
            return str(value)
    return None


class SubjectSubmissionService:
    """Builds create-subject payloads and performs the creation call."""

    def __init__(self, api_client: Optional[StelliumApiClient] = None):
        self.api = api_client or get_api_client()

    def build_payload(
        self,
        draft: DraftSubjectProfile,
        tzone: float,
        mode: SubjectMode = SubjectMode.SELF,
        owner_user_id: Optional[str] = None,
        firebase_uid: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Request body for the create call.

        Known time carries `time` (24h HH:MM) and `unknownTime: False`;
        unknown time omits `time` entirely and sends `unknownTime: True`.
        """
        payload: Dict[str, Any] = {
            "firstName": draft.first_name.strip(),
            "lastName": draft.last_name.strip(),
            "gender": draft.gender,
            "dateOfBirth": draft.wire_date(),
            "placeOfBirth": draft.location.formatted_address,
            "lat": draft.location.latitude,
            "lon": draft.location.longitude,
            "tzone": tzone,
        }

        if draft.unknown_time:
            payload["unknownTime"] = True
        else:
            payload["time"] = draft.birth_time.wire_time()
            payload["unknownTime"] = False

        if mode == SubjectMode.GUEST:
            payload["ownerUserId"] = owner_user_id
        else:
            if draft.unknown_time:
                # Email is not collected during onboarding
                payload["email"] = ""
            if firebase_uid:
                payload["firebaseUid"] = firebase_uid

        return payload

    def create(
        self,
        draft: DraftSubjectProfile,
        tzone: float,
        mode: SubjectMode = SubjectMode.SELF,
        owner_user_id: Optional[str] = None,
        firebase_uid: Optional[str] = None
    ) -> CreatedSubject:
        """
        Create the subject and return its identifier.

        Raises:
            SubjectCreationError: on network failure, backend rejection or
                a response without an id; the original error is attached
        """
        if mode == SubjectMode.GUEST and not owner_user_id:
            raise SubjectCreationError("Guest subjects need an owning account")

        payload = self.build_payload(draft, tzone, mode, owner_user_id, firebase_uid)
        endpoint = self._endpoint_for(mode, draft.unknown_time)
        logger.info(f"Creating {mode.value} subject (unknown time: {draft.unknown_time})")

        try:
            response = endpoint(payload)
        except (ApiException, NetworkException) as e:
            logger.error(f"Subject creation failed: {e}")
            raise SubjectCreationError(str(e), e)

        subject_id = extract_subject_id(response)
        if not subject_id:
            logger.error(f"Create response carried no subject id: {response}")
            raise SubjectCreationError("Create response carried no subject id")

        logger.info(f"Subject created: {subject_id}")
        return CreatedSubject(subject_id=subject_id, data=response)

    def _endpoint_for(self, mode: SubjectMode, unknown_time: bool):
        if mode == SubjectMode.GUEST:
            if unknown_time:
                return self.api.create_guest_subject_unknown_time
            return self.api.create_guest_subject
        if unknown_time:
            return self.api.create_user_unknown_time
        return self.api.create_user
