# app/shared/exceptions.py
"""
Domain error taxonomy.

Services raise these; the handlers registered in app.main turn them into
``{"detail": message}`` responses with the matching status code.
"""
from typing import Optional


class WorkflowError(Exception):
    status_code: int = 500
    default_detail: str = "Internal server error"

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class Unauthenticated(WorkflowError):
    status_code = 401
    default_detail = "Authentication required"


class Forbidden(WorkflowError):
    status_code = 403
    default_detail = "Access denied"


class NotFound(WorkflowError):
    status_code = 404
    default_detail = "Not found"


class InvalidTransition(WorkflowError):
    status_code = 409
    default_detail = "Invalid status transition"


class ValidationFailed(WorkflowError):
    status_code = 422
    default_detail = "Validation failed"


class UpstreamUnavailable(WorkflowError):
    """Text generation failed. Recovered locally by the assistant."""

    status_code = 503
    default_detail = "AI service temporarily unavailable"


class InternalError(WorkflowError):
    status_code = 500
