"""Authentication models."""

from __future__ import annotations

from sqlalchemy.orm import Mapped, mapped_column

from rollcall.core.users.models import TimestampMixin
from rollcall.extensions import db


class RefreshToken(db.Model, TimestampMixin):
    """Hash of the single live refresh token per user; deleted on logout."""

    __tablename__ = "auth_refresh_token"

    user_id: Mapped[int] = mapped_column(
        db.ForeignKey("user.id", ondelete="CASCADE"), primary_key=True
    )
    token_hash: Mapped[str] = mapped_column(db.String(64), nullable=False)
