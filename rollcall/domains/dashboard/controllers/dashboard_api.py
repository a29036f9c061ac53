"""Dashboard JSON API controllers."""

from __future__ import annotations

from flask import Blueprint

from rollcall.core.auth.tokens import AuthContext
from rollcall.core.utils.decorators import require_auth
from rollcall.core.utils.responses import success
from rollcall.domains.dashboard.services import dashboard_service

dashboard_api_bp = Blueprint("dashboard_api", __name__)


@dashboard_api_bp.get("/events/<int:event_id>")
@require_auth
def event_status(event_id: int, auth: AuthContext):
    return success(dashboard_service.get_event_status(event_id))
