import uuid

import pytest
from sqlalchemy import select, func

from app.core.errors import (
    ConflictError,
    ForbiddenError,
    InvalidOperationError,
    NotFoundError,
    UnauthorizedError,
)
from app.models.selection import Selection
from app.services.match_service import MatchQueryService, SelectionFilter
from app.services.selection_service import SelectionService


def count_selections(db):
    return db.execute(select(func.count()).select_from(Selection)).scalar_one()


def test_create_selection(db, make_participant):
    a = make_participant(101)
    b = make_participant(102, gender="female")

    s = SelectionService().create_selection(db, selector_id=a.id, selected_participant_number=102)

    assert s.selector_id == a.id
    assert s.selected_id == b.id
    assert s.event_id == a.event_id
    assert s.created_at is not None


def test_cannot_select_yourself(db, make_participant):
    a = make_participant(101)

    with pytest.raises(InvalidOperationError):
        SelectionService().create_selection(db, selector_id=a.id, selected_participant_number=101)

    assert count_selections(db) == 0


def test_self_selection_rejected_even_when_pending(db, make_participant):
    a = make_participant(101, status="pending")

    with pytest.raises(InvalidOperationError):
        SelectionService().create_selection(db, selector_id=a.id, selected_participant_number=101)


def test_duplicate_selection_conflicts_and_leaves_one_row(db, make_participant):
    a = make_participant(101)
    make_participant(102, gender="female")
    svc = SelectionService()

    svc.create_selection(db, selector_id=a.id, selected_participant_number=102)
    with pytest.raises(ConflictError):
        svc.create_selection(db, selector_id=a.id, selected_participant_number=102)

    assert count_selections(db) == 1


def test_unknown_target_not_found(db, make_participant):
    a = make_participant(101)

    with pytest.raises(NotFoundError):
        SelectionService().create_selection(db, selector_id=a.id, selected_participant_number=999)


def test_pending_target_is_hidden(db, make_participant):
    a = make_participant(101)
    make_participant(102, gender="female", status="pending")

    with pytest.raises(NotFoundError):
        SelectionService().create_selection(db, selector_id=a.id, selected_participant_number=102)


def test_unapproved_selector_forbidden(db, make_participant):
    a = make_participant(101, status="rejected")
    make_participant(102, gender="female")

    with pytest.raises(ForbiddenError) as ei:
        SelectionService().create_selection(db, selector_id=a.id, selected_participant_number=102)

    # Forbidden is an Unauthorized variant
    assert isinstance(ei.value, UnauthorizedError)
    assert count_selections(db) == 0


def test_missing_selector_not_found(db, make_participant):
    make_participant(102, gender="female")

    with pytest.raises(NotFoundError):
        SelectionService().create_selection(db, selector_id=uuid.uuid4(), selected_participant_number=102)


def test_target_lookup_is_scoped_to_selector_event(db, make_event, make_participant):
    other = make_event(name="Other Night")
    a = make_participant(101)
    make_participant(102, gender="female", event_id=other.id)

    with pytest.raises(NotFoundError):
        SelectionService().create_selection(db, selector_id=a.id, selected_participant_number=102)


def test_list_my_selections(db, make_participant):
    a = make_participant(101)
    make_participant(102, gender="female")
    make_participant(103, gender="female")
    svc = SelectionService()
    svc.create_selection(db, selector_id=a.id, selected_participant_number=102)
    svc.create_selection(db, selector_id=a.id, selected_participant_number=103)

    rows = svc.list_my_selections(db, selector_id=a.id)

    assert sorted(p.participant_number for _, p in rows) == [102, 103]
    assert all(s.selector_id == a.id for s, _ in rows)


# ---------------------------
# REVOCATION
# ---------------------------

def test_revoke_breaks_mutuality(db, make_participant):
    a = make_participant(101)
    b = make_participant(102, gender="female")
    svc = SelectionService()
    s_ab = svc.create_selection(db, selector_id=a.id, selected_participant_number=102)
    svc.create_selection(db, selector_id=b.id, selected_participant_number=101)

    assert MatchQueryService().resolve(db, SelectionFilter()).mutual_pair_count == 1

    assert svc.revoke_selection(db, requester_id=a.id, selection_id=s_ab.id) is True

    r = MatchQueryService().resolve(db, SelectionFilter())
    assert r.total == 1
    assert r.mutual_pair_count == 0
    assert r.edges[0].is_mutual is False


def test_revoke_is_idempotent(db, make_participant):
    a = make_participant(101)
    make_participant(102, gender="female")
    svc = SelectionService()
    s = svc.create_selection(db, selector_id=a.id, selected_participant_number=102)

    assert svc.revoke_selection(db, requester_id=a.id, selection_id=s.id) is True
    assert svc.revoke_selection(db, requester_id=a.id, selection_id=s.id) is False
    assert svc.revoke_selection(db, requester_id=a.id, selection_id=uuid.uuid4()) is False
    assert count_selections(db) == 0


def test_cannot_revoke_someone_elses_selection(db, make_participant):
    a = make_participant(101)
    b = make_participant(102, gender="female")
    svc = SelectionService()
    s = svc.create_selection(db, selector_id=a.id, selected_participant_number=102)

    with pytest.raises(ForbiddenError):
        svc.revoke_selection(db, requester_id=b.id, selection_id=s.id)

    assert count_selections(db) == 1


def test_reset_all_selections(db, make_participant):
    a = make_participant(101)
    b = make_participant(102, gender="female")
    svc = SelectionService()
    svc.create_selection(db, selector_id=a.id, selected_participant_number=102)
    svc.create_selection(db, selector_id=b.id, selected_participant_number=101)

    assert svc.reset_all_selections(db) == 2
    assert count_selections(db) == 0
