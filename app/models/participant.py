# app/models/participant.py

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import (
    String,
    Text,
    DateTime,
    Integer,
    ForeignKey,
    Index,
    UniqueConstraint,
    CheckConstraint,
    Uuid,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.models.enums import BackgroundCheckStatus


class Participant(Base):
    __tablename__ = "participants"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )

    # human-facing number, printed on the badge / QR
    participant_number: Mapped[int] = mapped_column(Integer, nullable=False)

    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    phone: Mapped[str] = mapped_column(String(32), nullable=False)
    gender: Mapped[str] = mapped_column(String(16), nullable=False)
    age: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    occupation: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)

    background_check_status: Mapped[str] = mapped_column(
        String(16), nullable=False, default=BackgroundCheckStatus.pending.value
    )

    qr_code_data: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    event_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("events.id", ondelete="SET NULL"),
        nullable=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    @property
    def is_approved(self) -> bool:
        return self.background_check_status == BackgroundCheckStatus.approved.value

    __table_args__ = (
        UniqueConstraint("event_id", "participant_number", name="uq_participant_event_number"),
        UniqueConstraint("event_id", "email", name="uq_participant_event_email"),
        CheckConstraint("gender IN ('male', 'female')", name="ck_participant_gender"),
        CheckConstraint(
            "background_check_status IN ('pending', 'approved', 'rejected')",
            name="ck_participant_background_check_status",
        ),
        Index("ix_participants_event_status", "event_id", "background_check_status"),
    )
