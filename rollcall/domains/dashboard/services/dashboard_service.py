"""Per-event roll-call aggregation."""

from __future__ import annotations

from typing import Dict, List

from rollcall.core.errors import NotFound
from rollcall.core.users.models import User
from rollcall.core.users.schemas import serialize_user
from rollcall.domains.alerts.models import AlertEvent
from rollcall.domains.alerts.schemas import serialize_event
from rollcall.domains.dashboard.schemas import EventStatusItem, EventStatusResponse, StatusCounts
from rollcall.domains.responses.models import RESPONSE_STATUS_OK, Response
from rollcall.extensions import db

PENDING = "PENDING"


def get_event_status(event_id: int) -> EventStatusResponse:
    """Classify every current member of the event's area as OK, HELP or PENDING.

    Membership is the area assignment at query time: a user who answered and
    then moved to another area is not listed, and ``ok + help + pending``
    always equals the number of listed members.
    """
    event = db.session.get(AlertEvent, event_id)
    if not event:
        raise NotFound("Event not found")

    members: List[User] = (
        User.query.filter(User.area_id == event.area_id).order_by(User.name, User.id).all()
    )
    responses: List[Response] = Response.query.filter(Response.event_id == event.id).all()
    by_user: Dict[int, Response] = {response.user_id: response for response in responses}

    counts = StatusCounts()
    items: List[EventStatusItem] = []
    for member in members:
        response = by_user.get(member.id)
        if response is None:
            counts.pending += 1
            items.append(EventStatusItem(user=serialize_user(member), response_status=PENDING))
            continue

        if response.status == RESPONSE_STATUS_OK:
            counts.ok += 1
        else:
            counts.help += 1
        items.append(
            EventStatusItem(
                user=serialize_user(member),
                response_status=response.status,
                notes=response.notes,
                responded_at=response.responded_at,
            )
        )

    return EventStatusResponse(event=serialize_event(event), counts=counts, list=items)
