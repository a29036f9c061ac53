"""User and device models."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column

from rollcall.extensions import db


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)


class User(db.Model, TimestampMixin):
    __tablename__ = "user"

    id: Mapped[int] = mapped_column(primary_key=True)
    email: Mapped[str] = mapped_column(db.String(255), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(db.String(255), nullable=False)
    name: Mapped[str] = mapped_column(db.String(120), nullable=False, default="")
    phone: Mapped[str | None] = mapped_column(db.String(32))
    # Free-form area identifier; the current value decides dashboard membership.
    area_id: Mapped[str] = mapped_column(db.String(120), nullable=False, default="", index=True)
    device_token: Mapped[str] = mapped_column(db.Text, nullable=False, default="")
