"""matchmaking schema: events, participants, interest selections, admins, audit

Revision ID: 0001_matchmaking_schema
Revises:
Create Date: 2026-10-18 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "0001_matchmaking_schema"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps(*, with_updated: bool = True):
    cols = [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]
    if with_updated:
        cols.append(
            sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False)
        )
    return cols


def upgrade():
    op.create_table(
        "events",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=256), nullable=False),
        sa.Column("event_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("location", sa.String(length=256), nullable=True),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="upcoming"),
        sa.Column("max_participants", sa.Integer(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            "status IN ('upcoming', 'active', 'completed', 'cancelled')",
            name="ck_events_status",
        ),
    )
    op.create_index("ix_events_status_date", "events", ["status", "event_date"])

    op.create_table(
        "participants",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("participant_number", sa.Integer(), nullable=False),
        sa.Column("full_name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("phone", sa.String(length=32), nullable=False),
        sa.Column("gender", sa.String(length=16), nullable=False),
        sa.Column("age", sa.Integer(), nullable=True),
        sa.Column("occupation", sa.String(length=128), nullable=True),
        sa.Column("background_check_status", sa.String(length=16), nullable=False, server_default="pending"),
        sa.Column("qr_code_data", sa.Text(), nullable=True),
        sa.Column(
            "event_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("events.id", ondelete="SET NULL"),
            nullable=True,
        ),
        *_timestamps(),
        sa.UniqueConstraint("event_id", "participant_number", name="uq_participant_event_number"),
        sa.UniqueConstraint("event_id", "email", name="uq_participant_event_email"),
        sa.CheckConstraint("gender IN ('male', 'female')", name="ck_participant_gender"),
        sa.CheckConstraint(
            "background_check_status IN ('pending', 'approved', 'rejected')",
            name="ck_participant_background_check_status",
        ),
    )
    op.create_index(
        "ix_participants_event_status", "participants", ["event_id", "background_check_status"]
    )

    op.create_table(
        "interest_selections",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
        sa.Column(
            "selector_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("participants.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "selected_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("participants.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "event_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("events.id", ondelete="SET NULL"),
            nullable=True,
        ),
        *_timestamps(with_updated=False),
        sa.UniqueConstraint("selector_id", "selected_id", name="uq_selection_selector_selected"),
        sa.CheckConstraint("selector_id <> selected_id", name="ck_selection_not_self"),
    )
    op.create_index("ix_selections_selector", "interest_selections", ["selector_id"])
    op.create_index("ix_selections_selected", "interest_selections", ["selected_id"])
    op.create_index("ix_selections_event", "interest_selections", ["event_id"])

    op.create_table(
        "admin_users",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(length=256), nullable=False),
        sa.Column("name", sa.String(length=256), nullable=True),
        sa.Column("role", sa.String(length=32), nullable=False, server_default="admin"),
        *_timestamps(),
    )

    op.create_table(
        "audit_logs",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("action", sa.String(length=96), nullable=False),
        sa.Column("actor_id", sa.String(length=128), nullable=False),
        sa.Column("actor_email", sa.String(length=320), nullable=True),
        sa.Column("resource_type", sa.String(length=64), nullable=True),
        sa.Column("resource_id", sa.String(length=128), nullable=True),
        sa.Column("details_json", sa.JSON(), nullable=False),
        sa.Column("request_id", sa.String(length=128), nullable=True),
        sa.Column("ip_address", sa.String(length=64), nullable=True),
        sa.Column("user_agent", sa.String(length=512), nullable=True),
    )
    op.create_index("ix_audit_action", "audit_logs", ["action"])
    op.create_index("ix_audit_created_at", "audit_logs", ["created_at"])


def downgrade():
    op.drop_index("ix_audit_created_at", table_name="audit_logs")
    op.drop_index("ix_audit_action", table_name="audit_logs")
    op.drop_table("audit_logs")
    op.drop_table("admin_users")
    op.drop_index("ix_selections_event", table_name="interest_selections")
    op.drop_index("ix_selections_selected", table_name="interest_selections")
    op.drop_index("ix_selections_selector", table_name="interest_selections")
    op.drop_table("interest_selections")
    op.drop_index("ix_participants_event_status", table_name="participants")
    op.drop_table("participants")
    op.drop_index("ix_events_status_date", table_name="events")
    op.drop_table("events")
