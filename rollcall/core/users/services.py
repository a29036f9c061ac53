"""User/device service layer."""

from __future__ import annotations

import logging
from typing import List, Optional

from rollcall.core.errors import NotFound
from rollcall.core.users.models import User
from rollcall.core.users.schemas import UserResponse, serialize_user
from rollcall.extensions import db

logger = logging.getLogger(__name__)


def get_user(user_id: int) -> Optional[User]:
    return db.session.get(User, user_id)


def register_device(
    user_id: int,
    *,
    area_id: str,
    device_token: str,
    name: Optional[str] = None,
) -> UserResponse:
    """Overwrite the user's area and push token; keep the old name unless given."""
    user = get_user(user_id)
    if not user:
        raise NotFound("User not found")

    previous_area = user.area_id
    user.area_id = area_id.strip()
    user.device_token = device_token.strip()
    if name:
        user.name = name.strip()
    db.session.commit()

    if previous_area != user.area_id:
        logger.info("users.area_changed user_id=%s from=%s to=%s", user.id, previous_area or "-", user.area_id)
    return serialize_user(user)


def list_area_members(area_id: str) -> List[UserResponse]:
    """Everyone currently assigned to ``area_id``, ordered by name."""
    if not area_id:
        return []
    users = User.query.filter(User.area_id == area_id).order_by(User.name, User.id).all()
    return [serialize_user(user) for user in users]
