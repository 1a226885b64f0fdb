# -*- coding: utf-8 -*-
"""
Stellium Service Layer
"""

# Lazy imports to avoid circular dependencies
__all__ = [
    "LocationResolutionService",
    "TimezoneResolutionService",
    "CreditService",
    "CreditsGate",
    "SubjectSubmissionService",
    "MediaUploadPipeline",
    "SessionStore",
]


def __getattr__(name):
    """Lazy import to avoid circular dependencies."""
    if name == "LocationResolutionService":
        from .places_service import LocationResolutionService
        return LocationResolutionService
    elif name == "TimezoneResolutionService":
        from .timezone_service import TimezoneResolutionService
        return TimezoneResolutionService
    elif name == "CreditService":
        from .credit_service import CreditService
        return CreditService
    elif name == "CreditsGate":
        from .credits_gate import CreditsGate
        return CreditsGate
    elif name == "SubjectSubmissionService":
        from .subject_submission_service import SubjectSubmissionService
        return SubjectSubmissionService
    elif name == "MediaUploadPipeline":
        from .photo_upload_service import MediaUploadPipeline
        return MediaUploadPipeline
    elif name == "SessionStore":
        from .session_store import SessionStore
        return SessionStore
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
