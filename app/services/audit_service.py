from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from sqlalchemy import select, desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.requests import Request

from app.core.config import get_settings
from app.core.middleware_rate_limit import client_identity
from app.models.audit_log import AuditLog
from app.policies.rbac import Principal

logger = logging.getLogger(__name__)


class AuditAction:
    # Participants
    PARTICIPANT_UPDATED = "participant.updated"
    PARTICIPANT_APPROVED = "participant.approved"
    PARTICIPANT_REJECTED = "participant.rejected"
    PARTICIPANT_DELETED = "participant.deleted"

    # Selections
    SELECTIONS_RESET = "selections.reset"

    # Data
    DATABASE_RESET = "database.reset"
    DATA_EXPORTED = "data.exported"

    # Admin
    ADMIN_LOGIN = "admin.login"


def _client_ip(request: Optional[Request]) -> Optional[str]:
    if request is None:
        return None
    return client_identity(request, get_settings().trusted_proxies)


def audit_event(
    db: Session,
    *,
    request: Optional[Request],
    actor: Principal,
    action: str,
    resource_type: Optional[str] = None,
    resource_id: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
) -> Optional[AuditLog]:
    """
    Append-only audit record insert.

    The admin action has already been committed when this runs, so a failed
    audit write is logged and rolled back rather than surfaced to the caller.
    details MUST be safe: ids and counts, not participant contact data.
    """
    row = AuditLog(
        action=action,
        actor_id=actor.actor_id,
        actor_email=actor.email,
        resource_type=resource_type,
        resource_id=resource_id,
        details_json=details or {},
        request_id=getattr(request.state, "request_id", None) if request is not None else None,
        ip_address=_client_ip(request),
        user_agent=request.headers.get("user-agent") if request is not None else None,
    )
    try:
        db.add(row)
        db.commit()
        db.refresh(row)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("audit.write_failed", extra={"action": action, "resource_id": resource_id})
        return None
    return row


def list_audit_events(db: Session, *, limit: int = 100):
    return (
        db.execute(select(AuditLog).order_by(desc(AuditLog.created_at)).limit(limit))
        .scalars()
        .all()
    )
