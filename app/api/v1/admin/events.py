# app/api/v1/admin/events.py
from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.auth_deps import require_admin_action
from app.db.session import get_db
from app.models.event import Event
from app.policies.rbac import ACTION_MANAGE_PARTICIPANTS, ACTION_VIEW_MATCHES, Principal
from app.schemas.events import EventCreate, EventUpdate
from app.services.event_service import EventService
from app.services.stats_service import StatsService

router = APIRouter(prefix="/admin/events", tags=["admin"])


def event_out(ev: Event) -> dict:
    return {
        "id": str(ev.id),
        "name": ev.name,
        "event_date": ev.event_date.isoformat() if ev.event_date else None,
        "location": ev.location,
        "description": ev.description,
        "status": ev.status,
        "max_participants": ev.max_participants,
        "created_at": ev.created_at.isoformat() if ev.created_at else None,
    }


# event history: every event with its counts
@router.get("")
def list_events(
    db: Session = Depends(get_db),
    _principal: Principal = Depends(require_admin_action(ACTION_VIEW_MATCHES)),
):
    return {
        "events": [
            {**event_out(ev), "stats": stats.to_dict()}
            for ev, stats in StatsService().list_events_with_stats(db)
        ]
    }


@router.post("", status_code=201)
def create_event(
    req: EventCreate,
    db: Session = Depends(get_db),
    _principal: Principal = Depends(require_admin_action(ACTION_MANAGE_PARTICIPANTS)),
):
    ev = EventService().create(
        db,
        name=req.name,
        event_date=req.event_date,
        location=req.location,
        description=req.description,
        status=req.status.value if req.status else None,
        max_participants=req.max_participants,
    )
    return {"event": event_out(ev)}


@router.patch("/{event_id}")
def update_event(
    event_id: uuid.UUID,
    req: EventUpdate,
    db: Session = Depends(get_db),
    _principal: Principal = Depends(require_admin_action(ACTION_MANAGE_PARTICIPANTS)),
):
    ev = EventService().update(db, event_id, req.model_dump(exclude_unset=True))
    return {"event": event_out(ev)}


@router.get("/{event_id}/stats")
def get_event_stats(
    event_id: uuid.UUID,
    db: Session = Depends(get_db),
    _principal: Principal = Depends(require_admin_action(ACTION_VIEW_MATCHES)),
):
    return StatsService().compute_event_stats(db, event_id).to_dict()
