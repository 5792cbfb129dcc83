# app/services/event_service.py
from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from app.core.errors import InvalidOperationError, NotFoundError
from app.models.enums import EventStatus
from app.models.event import Event

logger = logging.getLogger(__name__)

EVENT_FIELDS = ("name", "event_date", "location", "description", "status", "max_participants")


class EventService:
    def get(self, db: Session, event_id: uuid.UUID) -> Event:
        ev = db.get(Event, event_id)
        if ev is None:
            raise NotFoundError("Event not found")
        return ev

    def create(
        self,
        db: Session,
        *,
        name: str,
        event_date: datetime,
        location: Optional[str],
        description: Optional[str] = None,
        status: Optional[str] = None,
        max_participants: Optional[int] = None,
    ) -> Event:
        ev = Event(
            name=name,
            event_date=event_date,
            location=location,
            description=description or "",
            status=status or EventStatus.upcoming.value,
            max_participants=max_participants,
        )
        db.add(ev)
        db.commit()
        db.refresh(ev)
        logger.info("event.created", extra={"event_id": str(ev.id)})
        return ev

    def update(self, db: Session, event_id: uuid.UUID, changes: Dict[str, Any]) -> Event:
        updates = {k: v for k, v in changes.items() if k in EVENT_FIELDS and v is not None}
        if not updates:
            raise InvalidOperationError("No valid fields to update")

        ev = self.get(db, event_id)
        for k, v in updates.items():
            setattr(ev, k, v.value if hasattr(v, "value") else v)
        db.commit()
        db.refresh(ev)
        return ev
