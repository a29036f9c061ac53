"""rollcall initial schema

Revision ID: 20261017_rollcall_initial
Revises:
Create Date: 2026-10-17
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20261017_rollcall_initial"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column(
            "updated_at",
            sa.DateTime(),
            nullable=False,
            server_default=sa.func.now(),
            onupdate=sa.func.now(),
        ),
    ]


def upgrade():
    op.create_table(
        "user",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=120), nullable=False, server_default=""),
        sa.Column("phone", sa.String(length=32)),
        sa.Column("area_id", sa.String(length=120), nullable=False, server_default=""),
        sa.Column("device_token", sa.Text(), nullable=False, server_default=""),
        *_timestamps(),
    )
    op.create_index("ix_user_email", "user", ["email"], unique=True)
    op.create_index("ix_user_area_id", "user", ["area_id"])

    op.create_table(
        "auth_refresh_token",
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("user.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("token_hash", sa.String(length=64), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "alerts_alert_event",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("area_id", sa.String(length=120), nullable=False),
        sa.Column("triggered_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column(
            "triggered_by_user_id",
            sa.Integer(),
            sa.ForeignKey("user.id", ondelete="SET NULL"),
            nullable=True,
        ),
    )
    op.create_index(
        "ix_alerts_alert_event_area_triggered_at",
        "alerts_alert_event",
        ["area_id", "triggered_at"],
    )

    op.create_table(
        "responses_response",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("user.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "event_id",
            sa.Integer(),
            sa.ForeignKey("alerts_alert_event.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("status", sa.String(length=8), nullable=False),
        sa.Column("notes", sa.Text()),
        sa.Column("responded_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("user_id", "event_id", name="uq_responses_response_user_event"),
    )
    op.create_index("ix_responses_response_event", "responses_response", ["event_id"])
    op.create_index(
        "ix_responses_response_user_responded_at",
        "responses_response",
        ["user_id", "responded_at"],
    )

    op.create_table(
        "event_record",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("event_type", sa.String(length=128), nullable=False),
        sa.Column("payload", sa.JSON(), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("user.id", ondelete="SET NULL")),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_event_record_event_type", "event_record", ["event_type"])
    op.create_index("ix_event_record_user_id", "event_record", ["user_id"])
    op.create_index("ix_event_record_created_at", "event_record", ["created_at"])
    op.create_index("ix_event_record_user_created_at", "event_record", ["user_id", "created_at"])


def downgrade():
    op.drop_index("ix_event_record_user_created_at", table_name="event_record")
    op.drop_index("ix_event_record_created_at", table_name="event_record")
    op.drop_index("ix_event_record_user_id", table_name="event_record")
    op.drop_index("ix_event_record_event_type", table_name="event_record")
    op.drop_table("event_record")

    op.drop_index("ix_responses_response_user_responded_at", table_name="responses_response")
    op.drop_index("ix_responses_response_event", table_name="responses_response")
    op.drop_table("responses_response")

    op.drop_index("ix_alerts_alert_event_area_triggered_at", table_name="alerts_alert_event")
    op.drop_table("alerts_alert_event")

    op.drop_table("auth_refresh_token")

    op.drop_index("ix_user_area_id", table_name="user")
    op.drop_index("ix_user_email", table_name="user")
    op.drop_table("user")
