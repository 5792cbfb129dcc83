#app/policies/rbac.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Set

from app.core.errors import ForbiddenError
from app.models.enums import ActorRole


@dataclass(frozen=True)
class Principal:
    actor_id: str
    role: ActorRole
    display_name: str
    email: Optional[str] = None
    participant_number: Optional[int] = None


# --- Core action constants ---
ACTION_SELECT = "SELECT"
ACTION_VIEW_MATCHES = "VIEW_MATCHES"
ACTION_MANAGE_PARTICIPANTS = "MANAGE_PARTICIPANTS"
ACTION_EXPORT = "EXPORT"
ACTION_RESET = "RESET"


def allowed_actions(role: ActorRole) -> Set[str]:
    """
    Pure RBAC: which actions a role may attempt.
    Mutual matches are an admin-only view; participants only ever see
    their own outgoing selections.
    """

    if role == ActorRole.PARTICIPANT:
        return {ACTION_SELECT}

    if role == ActorRole.ADMIN:
        return {
            ACTION_VIEW_MATCHES,
            ACTION_MANAGE_PARTICIPANTS,
            ACTION_EXPORT,
            ACTION_RESET,
        }

    return set()


def require_action(principal: Principal, action: str) -> None:
    if action not in allowed_actions(principal.role):
        raise ForbiddenError(
            f"Role {principal.role.value} not permitted for action {action}."
        )
