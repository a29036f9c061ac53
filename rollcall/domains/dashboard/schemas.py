"""Dashboard DTOs."""

from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from rollcall.core.users.schemas import UserResponse
from rollcall.core.utils.schemas import CamelModel
from rollcall.domains.alerts.schemas import AlertEventResponse

MemberStatus = Literal["OK", "HELP", "PENDING"]


class StatusCounts(CamelModel):
    ok: int = 0
    help: int = 0
    pending: int = 0


class EventStatusItem(CamelModel):
    user: UserResponse
    response_status: MemberStatus
    notes: Optional[str] = None
    responded_at: Optional[datetime] = None


class EventStatusResponse(CamelModel):
    event: AlertEventResponse
    counts: StatusCounts
    list: List[EventStatusItem]
