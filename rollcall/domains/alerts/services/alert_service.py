"""Alert trigger flow: persist the event, then push to the area."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import func

from rollcall.core.errors import BadRequest
from rollcall.core.events.event_service import log_event
from rollcall.core.users.models import User
from rollcall.domains.alerts.events import ALERTS_EVENT_TRIGGERED
from rollcall.domains.alerts.models import AlertEvent
from rollcall.domains.alerts.schemas import (
    ActiveAlertItem,
    PushTally,
    TriggeredBy,
    TriggerAlertResponse,
    serialize_event,
)
from rollcall.domains.alerts.services import push_service
from rollcall.domains.responses.models import Response
from rollcall.extensions import db

logger = logging.getLogger(__name__)

DEFAULT_EVENT_LIST_LIMIT = 100


def trigger_alert(area_id: str, triggered_by_user_id: Optional[int] = None) -> TriggerAlertResponse:
    """Create an AlertEvent for ``area_id`` and broadcast it.

    The event is committed before delivery so that push failures never roll
    it back; an area with no members still gets an event.
    """
    area = (area_id or "").strip()
    if not area:
        raise BadRequest("areaId is required")

    event = AlertEvent(
        area_id=area,
        triggered_at=datetime.utcnow(),
        triggered_by_user_id=triggered_by_user_id,
    )
    db.session.add(event)
    db.session.commit()
    logger.info("alerts.triggered event_id=%s area=%s by=%s", event.id, area, triggered_by_user_id or "-")

    tally = push_service.send_push_to_area(area, event.id)

    log_event(
        ALERTS_EVENT_TRIGGERED,
        {
            "event_id": event.id,
            "area_id": area,
            "triggered_at": event.triggered_at.isoformat(),
            "triggered_by_user_id": triggered_by_user_id,
            "sent": tally["sent"],
            "failed": tally["failed"],
        },
        user_id=triggered_by_user_id,
    )
    return TriggerAlertResponse(event=serialize_event(event), push=PushTally(**tally))


def get_event(event_id: int) -> Optional[AlertEvent]:
    return db.session.get(AlertEvent, event_id)


def list_area_events(area_id: str, limit: int = DEFAULT_EVENT_LIST_LIMIT) -> List[ActiveAlertItem]:
    """Still-open events for ``area_id``, newest first.

    An event is open while it has fewer responses than the area has members;
    an area without members has no open events.
    """
    if not area_id:
        return []
    member_count = User.query.filter(User.area_id == area_id).count()
    if member_count == 0:
        return []

    response_count = func.count(Response.id)
    rows = (
        db.session.query(AlertEvent, User.name)
        .outerjoin(User, AlertEvent.triggered_by_user_id == User.id)
        .outerjoin(Response, Response.event_id == AlertEvent.id)
        .filter(AlertEvent.area_id == area_id)
        .group_by(AlertEvent.id, User.name)
        .having(response_count < member_count)
        .order_by(AlertEvent.triggered_at.desc(), AlertEvent.id.desc())
        .limit(limit)
        .all()
    )
    items: List[ActiveAlertItem] = []
    for event, triggered_by_name in rows:
        triggered_by = None
        if event.triggered_by_user_id is not None:
            triggered_by = TriggeredBy(id=event.triggered_by_user_id, name=triggered_by_name or "")
        items.append(ActiveAlertItem(**serialize_event(event).model_dump(), triggered_by=triggered_by))
    return items
