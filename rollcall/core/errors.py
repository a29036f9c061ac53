"""Application error variants and their HTTP mapping.

Services raise one of these; the app factory registers a single handler that
renders them into the failure envelope::

    {"success": false, "error": {"message": ..., "status": ..., **extra}}
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class AppError(Exception):
    """Base class for every error a service may surface to a client."""

    status = 500
    default_message = "Server error"

    def __init__(self, message: Optional[str] = None, **extra: Any) -> None:
        self.message = message or self.default_message
        self.extra: Dict[str, Any] = extra
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.message, "status": self.status, **self.extra}


class BadRequest(AppError):
    """Missing or invalid input (400)."""

    status = 400
    default_message = "Bad request"


class Unauthorized(AppError):
    """Bad credentials or an invalid, expired or revoked token (401)."""

    status = 401
    default_message = "Unauthorized"


class NotFound(AppError):
    status = 404
    default_message = "Not found"


class Conflict(AppError):
    """Duplicate natural key. Reported as 400 to match the public API."""

    status = 400
    default_message = "Duplicate entry"


class ServerError(AppError):
    status = 500
    default_message = "Server error"


__all__ = [
    "AppError",
    "BadRequest",
    "Unauthorized",
    "NotFound",
    "Conflict",
    "ServerError",
]
