"""Alerts domain event catalog."""

from __future__ import annotations

ALERTS_EVENT_TRIGGERED = "alerts.event.triggered"

EVENT_CATALOG = {
    ALERTS_EVENT_TRIGGERED: {
        "version": "v1",
        "payload": {
            "event_id": "int",
            "area_id": "str",
            "triggered_at": "datetime",
            "triggered_by_user_id": "int?",
            "sent": "int",
            "failed": "int",
        },
    },
}

__all__ = ["EVENT_CATALOG", "ALERTS_EVENT_TRIGGERED"]
