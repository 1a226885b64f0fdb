# -*- coding: utf-8 -*-
"""Custom exceptions for the application."""


class ApiException(Exception):
    """Exception raised for API errors."""

    def __init__(self, message: str, status_code: int = None,
                 response_data: dict = None, context: str = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response_data = response_data or {}
        self.context = context

    def __str__(self):
        if self.status_code:
            return f"[{self.status_code}] {self.message}"
        return self.message


class ValidationException(Exception):
    """Exception raised for validation errors."""

    def __init__(self, message: str, field: str = None,
                 errors: list = None, context: str = None):
        super().__init__(message)
        self.message = message
        self.field = field
        self.errors = errors or []
        self.context = context


class NetworkException(Exception):
    """Exception raised for network/connection errors."""

    def __init__(self, message: str, original_error: Exception = None,
                 context: str = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error
        self.context = context


# ==================== Submission pipeline ====================

class PipelineError(Exception):
    """Base class for submission pipeline failures."""

    def __init__(self, message: str, original_error: Exception = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class LocationResolutionError(PipelineError):
    """A place suggestion could not be resolved to coordinates."""


class TimezoneResolutionError(PipelineError):
    """The UTC offset for the birth place could not be determined."""


class SubjectCreationError(PipelineError):
    """The backend did not create the subject."""


class PhotoUploadError(PipelineError):
    """One of the photo upload phases failed."""

    PHASE_TICKET = "ticket"
    PHASE_TRANSFER = "transfer"
    PHASE_CONFIRM = "confirm"

    def __init__(self, message: str, phase: str, original_error: Exception = None):
        super().__init__(message, original_error)
        self.phase = phase

    def __str__(self):
        return f"[{self.phase}] {self.message}"


class InsufficientCreditsError(Exception):
    """Raised when an action costs more credits than are available."""

    def __init__(self, action: str, required: int = 0, available: int = 0):
        super().__init__(f"Insufficient credits for {action}: {available}/{required}")
        self.action = action
        self.required = required
        self.available = available
