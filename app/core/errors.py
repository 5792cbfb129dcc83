from __future__ import annotations

from typing import Any, Dict, Optional


class AppError(Exception):
    """Base error for the matchmaking service.

    Rendered by the global exception handler in app.main as
    {"error": {"code", "message", "details"}}.
    """

    status_code: int = 500
    code: str = "INTERNAL_ERROR"
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, *, details: Optional[Dict[str, Any]] = None):
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": {"code": self.code, "message": self.message, "details": self.details}}


class UnauthorizedError(AppError):
    status_code = 401
    code = "UNAUTHORIZED"
    default_message = "Unauthorized"


class ForbiddenError(UnauthorizedError):
    """Authenticated, but not allowed (wrong role, not approved, not owner)."""

    status_code = 403
    code = "FORBIDDEN"
    default_message = "Forbidden"


class NotFoundError(AppError):
    status_code = 404
    code = "NOT_FOUND"
    default_message = "Not found"


class InvalidOperationError(AppError):
    status_code = 400
    code = "INVALID_OPERATION"
    default_message = "Invalid operation"


class ConflictError(AppError):
    status_code = 409
    code = "CONFLICT"
    default_message = "Conflict"


class RateLimitedError(AppError):
    status_code = 429
    code = "RATE_LIMIT_EXCEEDED"
    default_message = "Too many requests"


class InternalError(AppError):
    pass
