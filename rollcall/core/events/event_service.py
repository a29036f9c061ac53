"""Event persistence and dispatch."""

from __future__ import annotations

import logging
from typing import Optional

from rollcall.core.events.event_bus import event_bus
from rollcall.core.events.event_models import EventRecord
from rollcall.domains.alerts.events import ALERTS_EVENT_TRIGGERED
from rollcall.domains.responses.events import RESPONSES_RESPONSE_SUBMITTED
from rollcall.extensions import db

logger = logging.getLogger(__name__)


def log_event(event_type: str, payload: dict, user_id: Optional[int] = None) -> EventRecord:
    """Persist an event and publish to subscribers."""
    record = EventRecord(event_type=event_type, payload=payload, user_id=user_id)
    db.session.add(record)
    db.session.commit()
    event_bus.publish(record)
    return record


def _log_domain_event(event: EventRecord) -> None:
    logger.info("event %s user_id=%s payload=%s", event.event_type, event.user_id or "-", event.payload)


def register_subscriptions() -> None:
    """Attach the default subscribers; safe to call once per app."""
    for event_type in (ALERTS_EVENT_TRIGGERED, RESPONSES_RESPONSE_SUBMITTED):
        event_bus.subscribe(event_type, _log_domain_event)
