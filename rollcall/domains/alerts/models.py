"""Alert event model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column

from rollcall.extensions import db


class AlertEvent(db.Model):
    """One broadcast to an area. Never updated after insert."""

    __tablename__ = "alerts_alert_event"
    __table_args__ = (db.Index("ix_alerts_alert_event_area_triggered_at", "area_id", "triggered_at"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    area_id: Mapped[str] = mapped_column(db.String(120), nullable=False)
    triggered_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, nullable=False)
    triggered_by_user_id: Mapped[int | None] = mapped_column(
        db.ForeignKey("user.id", ondelete="SET NULL"), nullable=True
    )
