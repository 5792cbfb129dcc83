# app/api/v1/admin/selections.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.v1._params import selection_filter
from app.core.auth_deps import require_admin_action
from app.db.session import get_db
from app.policies.rbac import ACTION_VIEW_MATCHES, Principal
from app.services.match_service import MatchQueryService, SelectionFilter

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/selections")
def list_selections(
    filters: SelectionFilter = Depends(selection_filter),
    db: Session = Depends(get_db),
    _principal: Principal = Depends(require_admin_action(ACTION_VIEW_MATCHES)),
):
    return MatchQueryService().list_annotated_selections(db, filters)


@router.get("/matches")
def list_matches(
    filters: SelectionFilter = Depends(selection_filter),
    db: Session = Depends(get_db),
    _principal: Principal = Depends(require_admin_action(ACTION_VIEW_MATCHES)),
):
    matches = MatchQueryService().list_mutual_pairs(db, filters)
    return {"matches": matches, "total": len(matches)}
