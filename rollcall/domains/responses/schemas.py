"""Response DTOs and schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional, TYPE_CHECKING

from pydantic import Field, field_validator

from rollcall.core.utils.schemas import CamelModel
from rollcall.domains.alerts.schemas import AlertEventResponse

if TYPE_CHECKING:
    from rollcall.domains.responses.models import Response

ResponseStatus = Literal["OK", "HELP"]


class SubmitResponseRequest(CamelModel):
    event_id: int = Field(ge=1)
    status: ResponseStatus
    notes: Optional[str] = Field(default=None, max_length=1000)

    @field_validator("notes")
    @classmethod
    def blank_notes_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None


class ResponseResponse(CamelModel):
    id: int
    user_id: int
    event_id: int
    status: ResponseStatus
    notes: Optional[str] = None
    responded_at: datetime


class MyResponseItem(ResponseResponse):
    event: AlertEventResponse


def serialize_response(response: "Response") -> ResponseResponse:
    return ResponseResponse(
        id=response.id,
        user_id=response.user_id,
        event_id=response.event_id,
        status=response.status,
        notes=response.notes,
        responded_at=response.responded_at,
    )
