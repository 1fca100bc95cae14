"""
Error kinds raised by the scoring pipeline, webhook ingestion and caches.

Each kind carries the HTTP status the web layer answers with
(see web.backend.exceptions).
"""
from typing import Optional


class ServiceException(Exception):
    """Base exception for service layer errors."""
    status_code = 500


class NotFound(ServiceException):
    """Referenced entity does not exist (or is not visible to the tenant)."""
    status_code = 404


class Unauthorized(ServiceException):
    """Missing or invalid webhook credentials."""
    status_code = 401


class ValidationError(ServiceException):
    """Malformed request body or parameters."""
    status_code = 400


class RateLimited(ServiceException):
    """Caller exceeded its request budget for the current window."""
    status_code = 429

    def __init__(self, message: str, reset_seconds: int = 0):
        super().__init__(message)
        self.reset_seconds = reset_seconds


class ScoringUnavailable(ServiceException):
    """Scoring backend failed or timed out. No score was recorded."""
    status_code = 500


class PersistenceError(ServiceException):
    """
    A required write failed.

    ``partial`` is True when earlier writes of the same run were already
    committed (scores saved, stage not advanced).
    """
    status_code = 500

    def __init__(self, message: str, partial: bool = False, step: Optional[str] = None):
        super().__init__(message)
        self.partial = partial
        self.step = step
