from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.auth_deps import require_admin_action
from app.db.session import get_db
from app.policies.rbac import ACTION_RESET, Principal
from app.services.audit_service import list_audit_events

router = APIRouter(prefix="/admin/audit")


@router.get("")
def get_audit_log(
    limit: int = Query(100, ge=1, le=1000),
    db: Session = Depends(get_db),
    _principal: Principal = Depends(require_admin_action(ACTION_RESET)),
):
    return {
        "events": [
            {
                "id": str(e.id),
                "action": e.action,
                "actor_id": e.actor_id,
                "actor_email": e.actor_email,
                "resource_type": e.resource_type,
                "resource_id": e.resource_id,
                "details": e.details_json,
                "request_id": e.request_id,
                "created_at": e.created_at.isoformat() if e.created_at else None,
            }
            for e in list_audit_events(db, limit=limit)
        ]
    }
