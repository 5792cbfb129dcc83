from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import String, DateTime, Index, JSON, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class AuditLog(Base):
    """
    Admin action trail.
    - Append-only (never UPDATE)
    - details_json holds a safe summary, never full participant records.
    """
    __tablename__ = "audit_logs"

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())

    # What happened
    action: Mapped[str] = mapped_column(String(96), nullable=False)  # e.g., participant.deleted

    # Actor
    actor_id: Mapped[str] = mapped_column(String(128), nullable=False)
    actor_email: Mapped[Optional[str]] = mapped_column(String(320), nullable=True)

    # Target
    resource_type: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    resource_id: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)

    details_json: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    # Correlation
    request_id: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)
    ip_address: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    user_agent: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)

    __table_args__ = (
        Index("ix_audit_action", "action"),
        Index("ix_audit_created_at", "created_at"),
    )
