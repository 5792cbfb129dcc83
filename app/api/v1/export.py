from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from app.api.v1._params import selection_filter
from app.core.auth_deps import require_admin_action
from app.core.streaming import csv_stream, json_array_stream
from app.db.session import get_db
from app.policies.rbac import ACTION_EXPORT, Principal
from app.services.audit_service import AuditAction, audit_event
from app.services.export_selections_service import ExportSelectionsService
from app.services.match_service import SelectionFilter

router = APIRouter(prefix="/admin/export")


@router.get("/selections")
def export_selections(
    request: Request,
    format: str = Query("csv", pattern="^(csv|json)$"),
    filters: SelectionFilter = Depends(selection_filter),
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_admin_action(ACTION_EXPORT)),
):
    svc = ExportSelectionsService()
    # materialized before the audit commit so the session state can't shift under the stream
    rows = list(svc.iter_rows(db, filters=filters))

    audit_event(
        db,
        request=request,
        actor=principal,
        action=AuditAction.DATA_EXPORTED,
        resource_type="selections",
        resource_id=str(filters.event_id) if filters.event_id else None,
        details={"format": format, "rows": len(rows)},
    )

    filename = f"selections_{date.today().isoformat()}.{format}"
    headers = {"Content-Disposition": f'attachment; filename="{filename}"'}
    if format == "json":
        return StreamingResponse(
            json_array_stream("selections", rows),
            media_type="application/json",
            headers=headers,
        )
    return StreamingResponse(
        csv_stream(rows, svc.fieldnames()),
        media_type="text/csv; charset=utf-8",
        headers=headers,
    )
