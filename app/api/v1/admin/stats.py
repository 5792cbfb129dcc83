# app/api/v1/admin/stats.py
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.v1._params import parse_uuid
from app.core.auth_deps import require_admin_action
from app.db.session import get_db
from app.policies.rbac import ACTION_VIEW_MATCHES, Principal
from app.schemas.stats import StatsResponse
from app.services.stats_service import StatsService

router = APIRouter(prefix="/admin/stats", tags=["admin"])


@router.get("", response_model=StatsResponse)
def get_stats(
    eventId: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    _principal: Principal = Depends(require_admin_action(ACTION_VIEW_MATCHES)),
):
    event_id = parse_uuid(eventId)
    svc = StatsService()
    stats = svc.compute_event_stats(db, event_id) if event_id else svc.compute_global_stats(db)
    return stats.to_dict()
