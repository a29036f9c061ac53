"""Response service: one OK/HELP answer per user per alert event."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy.exc import IntegrityError

from rollcall.core.errors import BadRequest, NotFound
from rollcall.core.events.event_service import log_event
from rollcall.domains.alerts.models import AlertEvent
from rollcall.domains.alerts.schemas import serialize_event
from rollcall.domains.responses.events import RESPONSES_RESPONSE_SUBMITTED
from rollcall.domains.responses.models import RESPONSE_STATUSES, Response
from rollcall.domains.responses.schemas import MyResponseItem, ResponseResponse, serialize_response
from rollcall.extensions import db

logger = logging.getLogger(__name__)

DEFAULT_MY_RESPONSES_LIMIT = 50


def submit_response(
    user_id: int,
    event_id: int,
    status: str,
    notes: Optional[str] = None,
) -> ResponseResponse:
    """Insert or overwrite the caller's response to ``event_id``.

    Last write wins: a second submission updates status, notes and
    timestamp on the existing row instead of inserting another.
    """
    if status not in RESPONSE_STATUSES:
        raise BadRequest("status must be OK or HELP")

    event = db.session.get(AlertEvent, event_id)
    if not event:
        raise NotFound("Event not found")

    now = datetime.utcnow()
    response = _find_response(user_id, event_id)
    updated = response is not None
    if response is None:
        response, updated = _insert_or_load(user_id, event_id, status, now)
    response.status = status
    response.notes = notes
    response.responded_at = now
    db.session.commit()

    log_event(
        RESPONSES_RESPONSE_SUBMITTED,
        {
            "response_id": response.id,
            "event_id": event_id,
            "user_id": user_id,
            "status": status,
            "responded_at": now.isoformat(),
            "updated": updated,
        },
        user_id=user_id,
    )
    return serialize_response(response)


def _find_response(user_id: int, event_id: int) -> Optional[Response]:
    return Response.query.filter_by(user_id=user_id, event_id=event_id).first()


def _insert_or_load(user_id: int, event_id: int, status: str, now: datetime) -> Tuple[Response, bool]:
    """Insert a new row, or return the row a concurrent submission inserted first."""
    candidate = Response(user_id=user_id, event_id=event_id, status=status, responded_at=now)
    try:
        with db.session.begin_nested():
            db.session.add(candidate)
    except IntegrityError:
        logger.info("responses.insert_conflict user_id=%s event_id=%s", user_id, event_id)
        return Response.query.filter_by(user_id=user_id, event_id=event_id).one(), True
    return candidate, False


def list_user_responses(user_id: int, limit: int = DEFAULT_MY_RESPONSES_LIMIT) -> List[MyResponseItem]:
    rows = (
        db.session.query(Response, AlertEvent)
        .join(AlertEvent, Response.event_id == AlertEvent.id)
        .filter(Response.user_id == user_id)
        .order_by(Response.responded_at.desc(), Response.id.desc())
        .limit(limit)
        .all()
    )
    return [
        MyResponseItem(**serialize_response(response).model_dump(), event=serialize_event(event))
        for response, event in rows
    ]
