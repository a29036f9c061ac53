"""Auth HTTP controllers (API only)."""

from __future__ import annotations

from flask import Blueprint, current_app

from rollcall.core.auth import auth_service
from rollcall.core.auth.schemas import (
    AccessTokenResponse,
    AuthResponse,
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
)
from rollcall.core.auth.tokens import AuthContext
from rollcall.core.utils.decorators import require_auth
from rollcall.core.utils.responses import success
from rollcall.core.utils.validation import parse_body
from rollcall.extensions import limiter

auth_bp = Blueprint("auth_api", __name__)


def _auth_rate_limit() -> str:
    return current_app.config.get("AUTH_RATE_LIMIT", "100/15 minutes")


@auth_bp.post("/register")
@limiter.limit(_auth_rate_limit)
def register():
    data = parse_body(RegisterRequest)
    result = auth_service.register(data)
    return success(AuthResponse(**result))


@auth_bp.post("/login")
@limiter.limit(_auth_rate_limit)
def login():
    data = parse_body(LoginRequest)
    result = auth_service.login(data)
    return success(AuthResponse(**result))


@auth_bp.post("/refresh")
def refresh():
    data = parse_body(RefreshRequest)
    result = auth_service.refresh(data.refresh_token)
    return success(AccessTokenResponse(**result))


@auth_bp.post("/logout")
@require_auth
def logout(auth: AuthContext):
    result = auth_service.logout(auth.user_id)
    return success({"loggedOut": result["logged_out"]})


@auth_bp.get("/me")
@require_auth
def me(auth: AuthContext):
    result = auth_service.get_me(auth.user_id)
    return success({"user": result["user"].to_wire()})
