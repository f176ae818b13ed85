"""
Unified exception hierarchy for the AI tutor backend.

All domain exceptions inherit from TutorError and carry:
- error_code: machine-readable string (e.g. "TOPIC_NOT_FOUND")
- status_code: HTTP status code
- message: human-readable, user-safe description
- context: optional structured metadata dict
"""

from typing import Optional, Dict, Any


class TutorError(Exception):
    """Base exception for all tutor domain errors."""

    def __init__(
        self,
        message: str,
        error_code: str = "INTERNAL_ERROR",
        status_code: int = 500,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.context = context or {}
        super().__init__(message)


class ValidationError(TutorError):
    """400-level validation / bad-request errors."""

    def __init__(
        self,
        message: str,
        error_code: str = "VALIDATION_ERROR",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, error_code=error_code, status_code=400, context=context)


class AuthenticationError(TutorError):
    """401 missing or invalid bearer credential."""

    def __init__(
        self,
        message: str = "Not authorized, no token",
        error_code: str = "NOT_AUTHENTICATED",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, error_code=error_code, status_code=401, context=context)


class ForbiddenError(TutorError):
    """403 requester does not own the resource."""

    def __init__(
        self,
        message: str = "Not authorized",
        error_code: str = "NOT_AUTHORIZED",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, error_code=error_code, status_code=403, context=context)


class NotFoundError(TutorError):
    """404 resource-not-found errors."""

    def __init__(
        self,
        message: str,
        error_code: str = "NOT_FOUND",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, error_code=error_code, status_code=404, context=context)


class ContentGenerationError(TutorError):
    """500-level failure to generate structured lesson/quiz/flashcard content."""

    def __init__(
        self,
        message: str,
        error_code: str = "GENERATION_FAILED",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, error_code=error_code, status_code=500, context=context)


class AIServiceError(TutorError):
    """
    Completion provider failure on a freeform request.

    Defaults to 500; the doubt workflow re-raises it as 503 so clients can
    tell "AI down" apart from a server bug.
    """

    def __init__(
        self,
        message: str,
        error_code: str = "AI_SERVICE_ERROR",
        status_code: int = 500,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, error_code=error_code, status_code=status_code, context=context)


class StorageError(TutorError):
    """500-level database / storage failures."""

    def __init__(
        self,
        message: str,
        error_code: str = "STORAGE_ERROR",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, error_code=error_code, status_code=500, context=context)
