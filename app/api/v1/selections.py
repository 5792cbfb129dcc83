# app/api/v1/selections.py
from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.auth_deps import require_participant
from app.db.session import get_db
from app.policies.rbac import Principal
from app.schemas.selections import SelectionCreate
from app.services.selection_service import SelectionService

router = APIRouter(prefix="/selections")


def _iso(dt):
    return dt.isoformat() if dt else None


@router.get("")
def list_my_selections(
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_participant),
):
    rows = SelectionService().list_my_selections(db, selector_id=uuid.UUID(principal.actor_id))
    return {
        "selections": [
            {
                "id": str(s.id),
                "selected_id": str(s.selected_id),
                "created_at": _iso(s.created_at),
                "participant": {
                    "participant_number": p.participant_number,
                    "full_name": p.full_name,
                    "gender": p.gender,
                },
            }
            for s, p in rows
        ]
    }


@router.post("", status_code=201)
def create_selection(
    req: SelectionCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_participant),
):
    s = SelectionService().create_selection(
        db,
        selector_id=uuid.UUID(principal.actor_id),
        selected_participant_number=req.selected_participant_number,
    )
    # no is_mutual here: matches are only revealed to admins
    return {
        "success": True,
        "message": "Selection created",
        "selection": {
            "id": str(s.id),
            "selector_id": str(s.selector_id),
            "selected_id": str(s.selected_id),
            "event_id": str(s.event_id) if s.event_id else None,
            "created_at": _iso(s.created_at),
        },
    }


@router.delete("/{selection_id}")
def revoke_selection(
    selection_id: uuid.UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_participant),
):
    SelectionService().revoke_selection(
        db,
        requester_id=uuid.UUID(principal.actor_id),
        selection_id=selection_id,
    )
    return {"success": True, "message": "Selection removed"}
