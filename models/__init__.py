# -*- coding: utf-8 -*-
"""
Stellium Data Models
"""

from .subject import (
    BirthLocation, BirthTime, DraftSubjectProfile, Gender, LocalImageRef,
    Meridiem, SubjectMode
)
from .submission import (
    CreatedSubject, PhotoConfirmation, PhotoUploadOutcome, PlaceSuggestion, ResolvedPlace,
    SubmissionResult, UploadTicket
)

__all__ = [
    "BirthLocation",
    "BirthTime",
    "DraftSubjectProfile",
    "Gender",
    "LocalImageRef",
    "Meridiem",
    "SubjectMode",
    "CreatedSubject",
    "PhotoConfirmation",
    "PhotoUploadOutcome",
    "PlaceSuggestion",
    "ResolvedPlace",
    "SubmissionResult",
    "UploadTicket",
]
