"""Authentication service layer."""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from rollcall.core.auth.models import RefreshToken
from rollcall.core.auth.password import hash_password, hash_token, token_matches, verify_password
from rollcall.core.auth.schemas import LoginRequest, RegisterRequest
from rollcall.core.auth.tokens import TokenError, issue_token_pair, sign_access_token, verify_refresh_token
from rollcall.core.errors import Conflict, NotFound, Unauthorized
from rollcall.core.users.models import User
from rollcall.core.users.schemas import serialize_user
from rollcall.extensions import db

logger = logging.getLogger(__name__)


def find_user_by_email(email: str) -> Optional[User]:
    normalized = (email or "").strip().lower()
    return User.query.filter(func.lower(User.email) == normalized).first()


def authenticate_user(email: str, password: str) -> Optional[User]:
    """Return the user if credentials are valid."""
    user = find_user_by_email(email)
    if not user:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def _store_refresh_hash(user_id: int, refresh_token: str) -> None:
    """Upsert the single refresh-token row for ``user_id`` (caller commits)."""
    row = db.session.get(RefreshToken, user_id)
    if row is None:
        row = RefreshToken(user_id=user_id)
        db.session.add(row)
    row.token_hash = hash_token(refresh_token)


def _session_payload(user: User) -> dict:
    tokens = issue_token_pair(user.id, user.email)
    _store_refresh_hash(user.id, tokens["refresh_token"])
    return {"user": serialize_user(user), **tokens}


def register(payload: RegisterRequest) -> dict:
    """Create a user and sign them in; Conflict if the email is taken."""
    if find_user_by_email(payload.email):
        raise Conflict("Email already in use")

    user = User(
        email=payload.email,
        name=payload.name,
        phone=payload.phone,
        area_id=(payload.area_id or "").strip(),
        device_token="",
        password_hash=hash_password(payload.password),
    )
    db.session.add(user)
    try:
        db.session.flush()  # ensure user.id for token claims
    except IntegrityError as exc:
        # A concurrent registration claimed the email after the lookup above.
        db.session.rollback()
        raise Conflict("Email already in use") from exc

    result = _session_payload(user)
    db.session.commit()
    logger.info("auth.register user_id=%s area=%s", user.id, user.area_id or "-")
    return result


def login(payload: LoginRequest) -> dict:
    user = authenticate_user(payload.email, payload.password)
    if not user:
        raise Unauthorized("Invalid credentials")

    result = _session_payload(user)
    db.session.commit()
    return result


def refresh(refresh_token: str) -> dict:
    """Exchange a live refresh token for a new access token (no rotation)."""
    try:
        claims = verify_refresh_token(refresh_token)
    except TokenError as exc:
        raise Unauthorized("Invalid refresh token") from exc

    row = db.session.get(RefreshToken, claims.user_id)
    if row is None:
        raise Unauthorized("Refresh token revoked")
    if not token_matches(refresh_token, row.token_hash):
        raise Unauthorized("Invalid refresh token")

    return {"access_token": sign_access_token(claims.user_id, claims.email)}


def logout(user_id: int) -> dict:
    """Forget the stored refresh hash; a missing row is not an error."""
    RefreshToken.query.filter_by(user_id=user_id).delete(synchronize_session=False)
    db.session.commit()
    return {"logged_out": True}


def get_me(user_id: int) -> dict:
    user = db.session.get(User, user_id)
    if not user:
        raise NotFound("User not found")
    return {"user": serialize_user(user)}
