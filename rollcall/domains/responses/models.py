"""Roll-call response model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column

from rollcall.extensions import db

RESPONSE_STATUS_OK = "OK"
RESPONSE_STATUS_HELP = "HELP"
RESPONSE_STATUSES = (RESPONSE_STATUS_OK, RESPONSE_STATUS_HELP)


class Response(db.Model):
    __tablename__ = "responses_response"
    __table_args__ = (
        db.UniqueConstraint("user_id", "event_id", name="uq_responses_response_user_event"),
        db.Index("ix_responses_response_event", "event_id"),
        db.Index("ix_responses_response_user_responded_at", "user_id", "responded_at"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(db.ForeignKey("user.id", ondelete="CASCADE"), nullable=False)
    event_id: Mapped[int] = mapped_column(
        db.ForeignKey("alerts_alert_event.id", ondelete="CASCADE"), nullable=False
    )
    status: Mapped[str] = mapped_column(db.String(8), nullable=False)
    notes: Mapped[str | None] = mapped_column(db.Text)
    responded_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, nullable=False)
