# app/services/auth_service.py
from __future__ import annotations

from typing import Optional

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.security import create_access_token, hash_password, verify_password
from app.models.admin_user import AdminUser
from app.models.enums import ActorRole
from app.models.participant import Participant
from app.policies.rbac import Principal


def authenticate_admin(db: Session, email: str, password: str) -> Principal | None:
    admin = db.execute(
        select(AdminUser).where(func.lower(AdminUser.email) == email.lower())
    ).scalar_one_or_none()

    if not admin:
        return None

    if not verify_password(password, admin.password_hash):
        return None

    return Principal(
        actor_id=str(admin.id),
        role=ActorRole.ADMIN,
        display_name=admin.name or admin.email,
        email=admin.email,
    )


def create_admin(db: Session, *, email: str, password: str, name: Optional[str] = None) -> AdminUser:
    admin = AdminUser(email=email, password_hash=hash_password(password), name=name)
    db.add(admin)
    db.commit()
    db.refresh(admin)
    return admin


def participant_principal(p: Participant) -> Principal:
    return Principal(
        actor_id=str(p.id),
        role=ActorRole.PARTICIPANT,
        display_name=p.full_name,
        participant_number=p.participant_number,
    )


def issue_token(principal: Principal) -> str:
    settings = get_settings()
    claims = {
        "actor_id": principal.actor_id,
        "role": principal.role.value,
        "display_name": principal.display_name,
    }
    expires = None
    if principal.email:
        claims["email"] = principal.email
    if principal.participant_number is not None:
        claims["participant_number"] = principal.participant_number
    if principal.role == ActorRole.PARTICIPANT:
        expires = settings.participant_token_minutes
    return create_access_token(subject=principal.actor_id, claims=claims, expires_minutes=expires)
