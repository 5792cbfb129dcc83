#app/core/auth_deps.py
from __future__ import annotations

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.errors import ForbiddenError, UnauthorizedError
from app.core.security import decode_token
from app.models.enums import ActorRole
from app.policies.rbac import ACTION_SELECT, Principal, require_action

bearer = HTTPBearer(auto_error=False)


def get_current_principal(
    request: Request,
    creds: HTTPAuthorizationCredentials | None = Depends(bearer),
) -> Principal:
    """
    Canonical authentication dependency.

    Guarantees:
    - JWT is valid
    - actor_id and role are present
    - role is a valid ActorRole
    """
    if creds is None or not creds.credentials:
        raise UnauthorizedError()

    try:
        payload = decode_token(creds.credentials)
    except Exception:
        raise UnauthorizedError("Invalid or expired token.")

    role = payload.get("role")
    actor_id = payload.get("actor_id")

    if not role or not actor_id:
        raise UnauthorizedError("Token missing required claims.")

    try:
        role_enum = ActorRole(role)
    except ValueError:
        raise UnauthorizedError("Invalid role in token.")

    principal = Principal(
        actor_id=str(actor_id),
        role=role_enum,
        display_name=str(payload.get("display_name") or "Unknown"),
        email=payload.get("email"),
        participant_number=payload.get("participant_number"),
    )

    # Make principal available to downstream middleware / handlers
    request.state.principal = principal

    return principal


def require_admin(principal: Principal = Depends(get_current_principal)) -> Principal:
    if principal.role != ActorRole.ADMIN:
        raise ForbiddenError("Admin only")
    return principal


def require_admin_action(action: str):
    """Dependency factory: admin principal that may perform `action`."""

    def _dep(principal: Principal = Depends(require_admin)) -> Principal:
        require_action(principal, action)
        return principal

    return _dep


def require_participant(principal: Principal = Depends(get_current_principal)) -> Principal:
    if principal.role != ActorRole.PARTICIPANT:
        raise ForbiddenError("Participant only")
    require_action(principal, ACTION_SELECT)
    return principal
