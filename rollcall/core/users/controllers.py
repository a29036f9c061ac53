"""User/device JSON API controllers."""

from __future__ import annotations

from flask import Blueprint

from rollcall.core.auth.tokens import AuthContext
from rollcall.core.errors import NotFound
from rollcall.core.users import services as user_services
from rollcall.core.users.schemas import RegisterDeviceRequest
from rollcall.core.utils.decorators import require_auth
from rollcall.core.utils.responses import success
from rollcall.core.utils.validation import parse_body

user_api_bp = Blueprint("user_api", __name__)


@user_api_bp.post("/device")
@user_api_bp.post("/register-device")
@require_auth
def register_device(auth: AuthContext):
    data = parse_body(RegisterDeviceRequest)
    user = user_services.register_device(
        auth.user_id,
        area_id=data.area_id,
        device_token=data.device_token,
        name=data.name,
    )
    return success({"user": user.to_wire()})


@user_api_bp.get("/team")
@require_auth
def team(auth: AuthContext):
    user = user_services.get_user(auth.user_id)
    if not user:
        raise NotFound("User not found")
    members = user_services.list_area_members(user.area_id)
    return success({"areaId": user.area_id, "members": [m.to_wire() for m in members]})
