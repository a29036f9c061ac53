"""Alerts JSON API controllers (thin, schema-validated)."""

from __future__ import annotations

from flask import Blueprint

from rollcall.core.auth.tokens import AuthContext
from rollcall.core.errors import NotFound
from rollcall.core.users.services import get_user
from rollcall.core.utils.decorators import require_auth
from rollcall.core.utils.responses import success
from rollcall.core.utils.validation import parse_body
from rollcall.domains.alerts.schemas import TriggerAlertRequest
from rollcall.domains.alerts.services import alert_service

alert_api_bp = Blueprint("alert_api", __name__)


@alert_api_bp.post("/trigger")
@require_auth
def trigger(auth: AuthContext):
    data = parse_body(TriggerAlertRequest)
    result = alert_service.trigger_alert(data.area_id, triggered_by_user_id=auth.user_id)
    return success(result)


@alert_api_bp.get("")
@require_auth
def list_events(auth: AuthContext):
    user = get_user(auth.user_id)
    if not user:
        raise NotFound("User not found")
    events = alert_service.list_area_events(user.area_id)
    return success({"areaId": user.area_id, "events": [e.to_wire() for e in events]})
