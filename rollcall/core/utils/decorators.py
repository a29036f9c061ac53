"""Reusable decorators for controllers."""

from __future__ import annotations

from functools import wraps
from typing import Callable, TypeVar

from flask import g
from flask_jwt_extended import get_jwt, verify_jwt_in_request
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt import PyJWTError

from rollcall.core.auth.tokens import ACCESS_TOKEN_TYPE, TokenError, claims_from_payload
from rollcall.core.errors import Unauthorized

F = TypeVar("F", bound=Callable)


def require_auth(fn: F) -> F:
    """Verify the Bearer access token and pass ``auth=AuthContext`` to the view."""

    @wraps(fn)
    def wrapper(*args, **kwargs):  # type: ignore[misc]
        try:
            verify_jwt_in_request()
            auth = claims_from_payload(get_jwt(), ACCESS_TOKEN_TYPE)
        except (JWTExtendedException, PyJWTError, TokenError) as exc:
            raise Unauthorized() from exc
        # Exposed to the request logger only; views receive ``auth`` explicitly.
        g.auth_user_id = auth.user_id
        return fn(*args, auth=auth, **kwargs)

    return wrapper  # type: ignore[return-value]
