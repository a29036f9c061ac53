"""Schemas for auth flows (register, login, refresh)."""

from __future__ import annotations

from typing import Optional

from pydantic import EmailStr, Field, field_validator

from rollcall.core.users.schemas import UserResponse
from rollcall.core.utils.schemas import CamelModel


class RegisterRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=6, max_length=72)
    name: str = Field(min_length=1, max_length=120)
    phone: Optional[str] = Field(default=None, max_length=32)
    area_id: Optional[str] = Field(default=None, max_length=120)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name is required")
        return v


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class RefreshRequest(CamelModel):
    refresh_token: str = Field(min_length=1)


class AuthResponse(CamelModel):
    user: UserResponse
    access_token: str
    refresh_token: str


class AccessTokenResponse(CamelModel):
    access_token: str
