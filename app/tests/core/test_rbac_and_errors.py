import pytest

from app.core.errors import ConflictError, ForbiddenError, NotFoundError, UnauthorizedError
from app.models.enums import ActorRole
from app.policies.rbac import (
    ACTION_EXPORT,
    ACTION_SELECT,
    ACTION_VIEW_MATCHES,
    Principal,
    allowed_actions,
    require_action,
)


def test_participants_can_only_select():
    assert allowed_actions(ActorRole.PARTICIPANT) == {ACTION_SELECT}


def test_admin_cannot_select_but_can_view_matches():
    admin = Principal(actor_id="a", role=ActorRole.ADMIN, display_name="Admin")
    require_action(admin, ACTION_VIEW_MATCHES)
    require_action(admin, ACTION_EXPORT)
    with pytest.raises(ForbiddenError):
        require_action(admin, ACTION_SELECT)


def test_participant_cannot_view_matches():
    p = Principal(actor_id="p", role=ActorRole.PARTICIPANT, display_name="P", participant_number=101)
    with pytest.raises(ForbiddenError):
        require_action(p, ACTION_VIEW_MATCHES)


def test_error_envelope():
    err = ConflictError("You have already selected this participant", details={"selected": 102})
    assert err.status_code == 409
    assert err.to_dict() == {
        "error": {
            "code": "CONFLICT",
            "message": "You have already selected this participant",
            "details": {"selected": 102},
        }
    }


def test_default_message_and_hierarchy():
    assert NotFoundError().message == "Not found"
    assert issubclass(ForbiddenError, UnauthorizedError)
    assert ForbiddenError.status_code == 403
