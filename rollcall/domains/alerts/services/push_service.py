"""Push delivery: fan an alert out to every registered device in an area."""

from __future__ import annotations

import logging
from typing import Dict, List

from firebase_admin import messaging
from flask import current_app

from rollcall.core.firebase import get_firebase_app
from rollcall.core.users.models import User
from rollcall.extensions import db

logger = logging.getLogger(__name__)

ALERT_MESSAGE_TYPE = "ALERT_EVENT"
# FCM rejects multicast messages with more than 500 tokens.
MULTICAST_BATCH_SIZE = 500


def collect_area_tokens(area_id: str) -> List[str]:
    """Device tokens of every user currently assigned to ``area_id``."""
    rows = (
        db.session.query(User.device_token)
        .filter(User.area_id == area_id, User.device_token != "")
        .order_by(User.id)
        .all()
    )
    return [token for (token,) in rows if token]


def build_alert_message(tokens: List[str], area_id: str, event_id: int) -> messaging.MulticastMessage:
    return messaging.MulticastMessage(
        tokens=tokens,
        notification=messaging.Notification(
            title=current_app.config.get("PUSH_TITLE", "Emergency roll-call"),
            body=current_app.config.get("PUSH_BODY", "Please report your status: OK or HELP"),
        ),
        # FCM data values must be strings.
        data={"type": ALERT_MESSAGE_TYPE, "eventId": str(event_id), "areaId": area_id},
        android=messaging.AndroidConfig(priority="high"),
    )


def send_push_to_area(area_id: str, event_id: int) -> Dict[str, int]:
    """Multicast the alert and return ``{"sent": n, "failed": m}``.

    Returns zeros without touching the provider when nobody in the area has a
    device. A provider exception marks every token of that batch as failed.
    """
    tokens = collect_area_tokens(area_id)
    if not tokens:
        logger.info("push.skipped area=%s event_id=%s reason=no_devices", area_id, event_id)
        return {"sent": 0, "failed": 0}

    sent = 0
    failed = 0
    for start in range(0, len(tokens), MULTICAST_BATCH_SIZE):
        batch = tokens[start : start + MULTICAST_BATCH_SIZE]
        try:
            response = messaging.send_each_for_multicast(
                build_alert_message(batch, area_id, event_id),
                app=get_firebase_app(),
            )
        except Exception:
            logger.exception(
                "push.provider_error area=%s event_id=%s batch_size=%s", area_id, event_id, len(batch)
            )
            failed += len(batch)
            continue
        sent += response.success_count
        failed += response.failure_count

    logger.info("push.delivered area=%s event_id=%s sent=%s failed=%s", area_id, event_id, sent, failed)
    return {"sent": sent, "failed": failed}
