"""Alert DTOs and schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, TYPE_CHECKING

from pydantic import Field

from rollcall.core.utils.schemas import CamelModel

if TYPE_CHECKING:
    from rollcall.domains.alerts.models import AlertEvent


class TriggerAlertRequest(CamelModel):
    area_id: str = Field(min_length=1, max_length=120)


class AlertEventResponse(CamelModel):
    id: int
    area_id: str
    triggered_at: datetime
    triggered_by_user_id: Optional[int] = None


class TriggeredBy(CamelModel):
    id: int
    name: str


class ActiveAlertItem(AlertEventResponse):
    triggered_by: Optional[TriggeredBy] = None


class PushTally(CamelModel):
    sent: int = 0
    failed: int = 0


class TriggerAlertResponse(CamelModel):
    event: AlertEventResponse
    push: PushTally


def serialize_event(event: "AlertEvent") -> AlertEventResponse:
    return AlertEventResponse(
        id=event.id,
        area_id=event.area_id,
        triggered_at=event.triggered_at,
        triggered_by_user_id=event.triggered_by_user_id,
    )
