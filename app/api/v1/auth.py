#app/api/v1/auth.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.api.v1._params import parse_uuid
from app.core.auth_deps import get_current_principal
from app.core.errors import UnauthorizedError
from app.db.session import get_db
from app.policies.rbac import Principal
from app.schemas.auth import AdminLoginRequest, ParticipantLoginRequest, TokenResponse
from app.services.audit_service import AuditAction, audit_event
from app.services.auth_service import authenticate_admin, issue_token, participant_principal
from app.services.participant_service import ParticipantService

router = APIRouter(prefix="/auth")


@router.post("/admin/login", response_model=TokenResponse)
def admin_login(req: AdminLoginRequest, request: Request, db: Session = Depends(get_db)):
    principal = authenticate_admin(db, req.email, req.password)
    if not principal:
        raise UnauthorizedError("Invalid credentials.")

    audit_event(db, request=request, actor=principal, action=AuditAction.ADMIN_LOGIN)
    return TokenResponse(access_token=issue_token(principal))


@router.post("/participant/login")
def participant_login(req: ParticipantLoginRequest, db: Session = Depends(get_db)):
    p = ParticipantService().login(
        db,
        participant_number=req.participant_number,
        event_id=parse_uuid(req.event_id, field="event_id"),
    )
    principal = participant_principal(p)
    return {
        "access_token": issue_token(principal),
        "token_type": "bearer",
        "participant": {
            "id": str(p.id),
            "participant_number": p.participant_number,
            "full_name": p.full_name,
            "gender": p.gender,
        },
    }


@router.get("/me")
def get_me(principal: Principal = Depends(get_current_principal)):
    return {
        "actor_id": principal.actor_id,
        "role": principal.role.value,
        "display_name": principal.display_name,
        "email": principal.email,
        "participant_number": principal.participant_number,
    }
