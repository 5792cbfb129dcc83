# app/api/v1/admin/reset.py
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.core.auth_deps import require_admin_action
from app.db.session import get_db
from app.policies.rbac import ACTION_RESET, Principal
from app.services.audit_service import AuditAction, audit_event
from app.services.participant_service import ParticipantService
from app.services.selection_service import SelectionService

router = APIRouter(prefix="/admin/reset", tags=["admin"])


@router.post("/selections")
def reset_selections(
    request: Request,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_admin_action(ACTION_RESET)),
):
    removed = SelectionService().reset_all_selections(db)
    audit_event(
        db,
        request=request,
        actor=principal,
        action=AuditAction.SELECTIONS_RESET,
        details={"selections_removed": removed},
    )
    return {"success": True, "selections_removed": removed}


# ⚠️ wipes every participant (and with them every selection)
@router.post("/participants")
def reset_participants(
    request: Request,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_admin_action(ACTION_RESET)),
):
    counts = ParticipantService().reset_all(db)
    audit_event(
        db,
        request=request,
        actor=principal,
        action=AuditAction.DATABASE_RESET,
        details={"participants_removed": counts["participants"], "selections_removed": counts["selections"]},
    )
    return {
        "success": True,
        "participants_removed": counts["participants"],
        "selections_removed": counts["selections"],
    }
