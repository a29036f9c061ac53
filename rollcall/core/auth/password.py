"""Password and token hashing helpers."""

import hmac
from hashlib import sha256

from rollcall.extensions import bcrypt


def hash_password(plain_password: str) -> str:
    """Hash a plaintext password using bcrypt."""
    return bcrypt.generate_password_hash(plain_password).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Validate a plaintext password against a stored hash."""
    if not hashed_password:
        return False
    try:
        return bcrypt.check_password_hash(hashed_password, plain_password)
    except ValueError:
        # Malformed stored hash (e.g. seeded placeholder) never matches.
        return False


def hash_token(raw: str) -> str:
    """SHA-256 digest for long random tokens (bcrypt truncates at 72 bytes)."""
    return sha256(raw.encode("utf-8")).hexdigest()


def token_matches(raw: str, hashed: str) -> bool:
    return hmac.compare_digest(hash_token(raw), hashed or "")
