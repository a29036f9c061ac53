"""Responses JSON API controllers."""

from __future__ import annotations

from flask import Blueprint

from rollcall.core.auth.tokens import AuthContext
from rollcall.core.utils.decorators import require_auth
from rollcall.core.utils.responses import success
from rollcall.core.utils.validation import parse_body
from rollcall.domains.responses.schemas import SubmitResponseRequest
from rollcall.domains.responses.services import response_service

response_api_bp = Blueprint("response_api", __name__)


@response_api_bp.post("")
@require_auth
def submit(auth: AuthContext):
    data = parse_body(SubmitResponseRequest)
    response = response_service.submit_response(
        auth.user_id,
        data.event_id,
        data.status,
        notes=data.notes,
    )
    return success(response)


@response_api_bp.get("/my")
@require_auth
def my_responses(auth: AuthContext):
    items = response_service.list_user_responses(auth.user_id)
    return success({"responses": [item.to_wire() for item in items]})
