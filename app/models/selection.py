# app/models/selection.py
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import (
    DateTime,
    ForeignKey,
    UniqueConstraint,
    CheckConstraint,
    Index,
    Uuid,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


UQ_SELECTION_PAIR = "uq_selection_selector_selected"


class Selection(Base):
    """
    One directed interest edge: selector -> selected.

    Mutuality is never stored here; it is derived on read from the edge set.
    """
    __tablename__ = "interest_selections"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )

    selector_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("participants.id", ondelete="CASCADE"),
        nullable=False,
    )
    selected_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("participants.id", ondelete="CASCADE"),
        nullable=False,
    )

    event_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("events.id", ondelete="SET NULL"),
        nullable=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    __table_args__ = (
        # authoritative duplicate guard; application code relies on this rejecting inserts
        UniqueConstraint("selector_id", "selected_id", name=UQ_SELECTION_PAIR),
        CheckConstraint("selector_id <> selected_id", name="ck_selection_not_self"),
        Index("ix_selections_selector", "selector_id"),
        Index("ix_selections_selected", "selected_id"),
        Index("ix_selections_event", "event_id"),
    )
