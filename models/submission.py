# -*- coding: utf-8 -*-
"""
Value objects exchanged by the submission pipeline.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class PlaceSuggestion:
    """One place autocomplete prediction."""
    description: str
    place_id: str

    @classmethod
    def from_prediction(cls, prediction: Dict[str, Any]) -> "PlaceSuggestion":
        return cls(
            description=prediction.get("description", ""),
            place_id=prediction.get("place_id", ""),
        )


@dataclass(frozen=True)
class ResolvedPlace:
    """Coordinates and address of a selected suggestion."""
    latitude: float
    longitude: float
    formatted_address: str


@dataclass(frozen=True)
class UploadTicket:
    """
    Short-lived authorization to write one object directly to storage.

    Issued once per upload attempt and never reused.
    """
    subject_id: str
    object_key: str
    upload_url: str
    content_type: str
    expires_in: Optional[int] = None


@dataclass(frozen=True)
class PhotoConfirmation:
    """Canonical photo location returned after a confirmed upload."""
    profile_photo_url: str
    profile_photo_key: str
    updated_at: Optional[str] = None


class PhotoUploadOutcome(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class SubmissionResult:
    """Aggregate outcome of one submission attempt."""
    success: bool
    subject_id: Optional[str] = None
    photo_upload_outcome: PhotoUploadOutcome = PhotoUploadOutcome.SKIPPED
    error_message: Optional[str] = None

    # True when the credits gate declined before any mutating call
    declined_by_gate: bool = False
    photo: Optional[PhotoConfirmation] = None
    photo_error_message: Optional[str] = None
    subject: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def failed(cls, message: str) -> "SubmissionResult":
        return cls(success=False, error_message=message)

    @classmethod
    def declined(cls, message: str = "") -> "SubmissionResult":
        return cls(success=False, declined_by_gate=True, error_message=message or None)

    def to_dict(self) -> dict:
        result = {
            "success": self.success,
            "photoUploadOutcome": self.photo_upload_outcome.value,
        }
        if self.subject_id:
            result["subjectId"] = self.subject_id
        if self.error_message:
            result["errorMessage"] = self.error_message
        return result


@dataclass(frozen=True)
class CreatedSubject:
    """Identifier and raw document of a newly created subject."""
    subject_id: str
    data: Dict[str, Any] = field(default_factory=dict)
