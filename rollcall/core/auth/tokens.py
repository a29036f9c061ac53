"""Access/refresh token signing and verification.

Access tokens go through Flask-JWT-Extended so ``require_auth`` can reuse its
header parsing; the key loaders below bind them to ``JWT_ACCESS_SECRET``.
Refresh tokens are signed with PyJWT against ``JWT_REFRESH_SECRET`` so that a
leaked access secret cannot mint refresh tokens and vice versa.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import uuid4

import jwt as pyjwt
from flask import current_app
from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException

from rollcall.extensions import jwt

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


class TokenError(Exception):
    """Token failed verification (bad signature, expired, wrong type, no secret)."""


@dataclass(frozen=True)
class AuthContext:
    """Authenticated caller identity handed to views by ``require_auth``."""

    user_id: int
    email: str


def _secret(name: str) -> str:
    return current_app.config.get(name) or ""


@jwt.encode_key_loader
def _access_encode_key(identity) -> str:
    secret = _secret("JWT_ACCESS_SECRET")
    if not secret:
        raise RuntimeError("JWT_ACCESS_SECRET is missing")
    return secret


@jwt.decode_key_loader
def _access_decode_key(jwt_header: dict, jwt_data: dict) -> str:
    secret = _secret("JWT_ACCESS_SECRET")
    if not secret:
        raise pyjwt.InvalidTokenError("JWT_ACCESS_SECRET is missing")
    return secret


def sign_access_token(user_id: int, email: str) -> str:
    return create_access_token(identity=str(user_id), additional_claims={"email": email})


def sign_refresh_token(user_id: int, email: str) -> str:
    secret = _secret("JWT_REFRESH_SECRET")
    if not secret:
        raise RuntimeError("JWT_REFRESH_SECRET is missing")
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "email": email,
        "type": REFRESH_TOKEN_TYPE,
        # Unique per issue so a re-login always invalidates the previous token's hash.
        "jti": uuid4().hex,
        "iat": now,
        "nbf": now,
        "exp": now + current_app.config["JWT_REFRESH_TOKEN_EXPIRES"],
    }
    return pyjwt.encode(payload, secret, algorithm=current_app.config.get("JWT_ALGORITHM", "HS256"))


def issue_token_pair(user_id: int, email: str) -> dict[str, str]:
    """Sign a fresh access/refresh pair for ``{userId, email}``."""
    return {
        "access_token": sign_access_token(user_id, email),
        "refresh_token": sign_refresh_token(user_id, email),
    }


def claims_from_payload(decoded: dict, expected_type: str) -> AuthContext:
    if decoded.get("type") != expected_type:
        raise TokenError("wrong_token_type")
    try:
        user_id = int(decoded["sub"])
    except (KeyError, TypeError, ValueError) as exc:
        raise TokenError("invalid_subject") from exc
    return AuthContext(user_id=user_id, email=decoded.get("email") or "")


def verify_access_token(token: str) -> AuthContext:
    try:
        decoded = decode_token(token)
    except (pyjwt.PyJWTError, JWTExtendedException) as exc:
        raise TokenError(str(exc)) from exc
    return claims_from_payload(decoded, ACCESS_TOKEN_TYPE)


def verify_refresh_token(token: str) -> AuthContext:
    secret = _secret("JWT_REFRESH_SECRET")
    if not secret:
        raise TokenError("JWT_REFRESH_SECRET is missing")
    try:
        decoded = pyjwt.decode(
            token,
            secret,
            algorithms=[current_app.config.get("JWT_ALGORITHM", "HS256")],
        )
    except pyjwt.PyJWTError as exc:
        raise TokenError(str(exc)) from exc
    return claims_from_payload(decoded, REFRESH_TOKEN_TYPE)
