"""Responses domain event catalog."""

from __future__ import annotations

RESPONSES_RESPONSE_SUBMITTED = "responses.response.submitted"

EVENT_CATALOG = {
    RESPONSES_RESPONSE_SUBMITTED: {
        "version": "v1",
        "payload": {
            "response_id": "int",
            "event_id": "int",
            "user_id": "int",
            "status": "str",
            "responded_at": "datetime",
            "updated": "bool",
        },
    },
}

__all__ = ["EVENT_CATALOG", "RESPONSES_RESPONSE_SUBMITTED"]
