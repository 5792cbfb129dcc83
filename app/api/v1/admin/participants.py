# app/api/v1/admin/participants.py
from __future__ import annotations

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from app.api.v1._params import parse_uuid
from app.core.auth_deps import require_admin_action
from app.db.session import get_db
from app.models.enums import BackgroundCheckStatus
from app.models.participant import Participant
from app.policies.rbac import ACTION_MANAGE_PARTICIPANTS, Principal
from app.schemas.participants import ParticipantUpdate
from app.services.audit_service import AuditAction, audit_event
from app.services.participant_service import ParticipantFilter, ParticipantService

router = APIRouter(prefix="/admin/participants", tags=["admin"])

_STATUS_ACTIONS = {
    BackgroundCheckStatus.approved.value: AuditAction.PARTICIPANT_APPROVED,
    BackgroundCheckStatus.rejected.value: AuditAction.PARTICIPANT_REJECTED,
}


def participant_out(p: Participant) -> dict:
    return {
        "id": str(p.id),
        "participant_number": p.participant_number,
        "full_name": p.full_name,
        "email": p.email,
        "phone": p.phone,
        "gender": p.gender,
        "age": p.age,
        "occupation": p.occupation,
        "background_check_status": p.background_check_status,
        "event_id": str(p.event_id) if p.event_id else None,
        "qr_code_data": p.qr_code_data,
        "created_at": p.created_at.isoformat() if p.created_at else None,
        "updated_at": p.updated_at.isoformat() if p.updated_at else None,
    }


@router.get("")
def list_participants(
    status: Optional[str] = Query(None),
    search: Optional[str] = Query(None, max_length=255),
    eventId: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    _principal: Principal = Depends(require_admin_action(ACTION_MANAGE_PARTICIPANTS)),
):
    filters = ParticipantFilter(status=status, search=search, event_id=parse_uuid(eventId))
    rows = ParticipantService().list_participants(db, filters)
    return {"participants": [participant_out(p) for p in rows], "total": len(rows)}


@router.get("/{participant_id}")
def get_participant(
    participant_id: uuid.UUID,
    db: Session = Depends(get_db),
    _principal: Principal = Depends(require_admin_action(ACTION_MANAGE_PARTICIPANTS)),
):
    return {"participant": participant_out(ParticipantService().get(db, participant_id))}


@router.patch("/{participant_id}")
def update_participant(
    participant_id: uuid.UUID,
    req: ParticipantUpdate,
    request: Request,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_admin_action(ACTION_MANAGE_PARTICIPANTS)),
):
    changes = req.model_dump(exclude_unset=True)
    p = ParticipantService().update(db, participant_id, changes)

    action = _STATUS_ACTIONS.get(
        p.background_check_status if "background_check_status" in changes else None,
        AuditAction.PARTICIPANT_UPDATED,
    )
    audit_event(
        db,
        request=request,
        actor=principal,
        action=action,
        resource_type="participant",
        resource_id=str(participant_id),
        details={"fields": sorted(changes.keys())},
    )
    return {"success": True, "participant": participant_out(p)}


@router.delete("/{participant_id}")
def delete_participant(
    participant_id: uuid.UUID,
    request: Request,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_admin_action(ACTION_MANAGE_PARTICIPANTS)),
):
    removed = ParticipantService().delete(db, participant_id)
    audit_event(
        db,
        request=request,
        actor=principal,
        action=AuditAction.PARTICIPANT_DELETED,
        resource_type="participant",
        resource_id=str(participant_id),
        details={"selections_removed": removed},
    )
    return {"success": True, "selections_removed": removed}
