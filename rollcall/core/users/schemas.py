"""Typed schemas for user IO."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, TYPE_CHECKING

from pydantic import Field, field_validator

from rollcall.core.utils.schemas import CamelModel

if TYPE_CHECKING:
    from rollcall.core.users.models import User


class RegisterDeviceRequest(CamelModel):
    area_id: str = Field(min_length=1, max_length=120)
    device_token: str = Field(min_length=1, max_length=4096)
    name: Optional[str] = Field(default=None, min_length=1, max_length=120)

    @field_validator("area_id", "device_token")
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("name")
    @classmethod
    def blank_name_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None


class UserResponse(CamelModel):
    """Public profile; never carries the credential hash."""

    id: int
    email: str
    name: str
    phone: Optional[str] = None
    area_id: str
    device_token: str
    created_at: Optional[datetime] = None


def serialize_user(user: "User") -> UserResponse:
    return UserResponse(
        id=user.id,
        email=user.email,
        name=user.name or "",
        phone=user.phone,
        area_id=user.area_id or "",
        device_token=user.device_token or "",
        created_at=user.created_at,
    )
