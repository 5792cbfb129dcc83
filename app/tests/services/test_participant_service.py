import json
import uuid

import pytest
from sqlalchemy import select, func

from app.core.errors import ConflictError, ForbiddenError, InvalidOperationError, NotFoundError
from app.models.participant import Participant
from app.models.selection import Selection
from app.services.participant_service import ParticipantFilter, ParticipantService
from app.services.selection_service import SelectionService


def register(db, number, *, email=None, event_id=None, gender="male"):
    return ParticipantService().register(
        db,
        participant_number=number,
        full_name=f"Person {number}",
        email=email or f"person{number}@example.com",
        phone="5551234567",
        gender=gender,
        age=28,
        occupation="Engineer",
        event_id=event_id,
    )


def test_register_defaults_to_upcoming_event(db, event):
    p = register(db, 101)

    assert p.event_id == event.id
    assert p.background_check_status == "pending"
    qr = json.loads(p.qr_code_data)
    assert qr == {"participantId": str(p.id), "participantNumber": 101, "eventId": str(event.id)}


def test_register_without_any_event_fails(db):
    with pytest.raises(InvalidOperationError):
        register(db, 101)


def test_register_unknown_event_not_found(db, event):
    with pytest.raises(NotFoundError):
        register(db, 101, event_id=uuid.uuid4())


def test_register_duplicate_number_conflicts(db, event):
    register(db, 101)
    with pytest.raises(ConflictError):
        register(db, 101, email="someone.else@example.com")


def test_register_duplicate_email_conflicts_case_insensitive(db, event):
    register(db, 101, email="Same@Example.com")
    with pytest.raises(ConflictError):
        register(db, 102, email="same@example.com")


def test_update_email_conflicts_case_insensitive(db, event):
    register(db, 101, email="x@example.com")
    b = register(db, 102, email="b@example.com")
    svc = ParticipantService()

    with pytest.raises(ConflictError):
        svc.update(db, b.id, {"email": "X@Example.com"})

    db.expire_all()
    assert svc.get(db, b.id).email == "b@example.com"

    # changing only the case of your own email is fine
    assert svc.update(db, b.id, {"email": "B@Example.com"}).email == "B@Example.com"


def test_update_email_in_other_event_is_allowed(db, event, make_event):
    other = make_event(name="Second Night")
    register(db, 101, email="x@example.com")
    b = register(db, 101, email="b@example.com", event_id=other.id)

    assert ParticipantService().update(db, b.id, {"email": "X@Example.com"}).email == "X@Example.com"


def test_update_can_clear_optional_fields(db, event):
    p = register(db, 101)
    svc = ParticipantService()

    updated = svc.update(db, p.id, {"age": None, "occupation": None})
    assert updated.age is None
    assert updated.occupation is None


def test_update_cannot_clear_required_fields(db, event):
    p = register(db, 101)

    with pytest.raises(InvalidOperationError) as ei:
        ParticipantService().update(db, p.id, {"full_name": None, "phone": None})

    assert ei.value.details == {"fields": ["full_name", "phone"]}



def test_same_number_allowed_in_different_events(db, event, make_event):
    other = make_event(name="Second Night")
    register(db, 101)
    p = register(db, 101, event_id=other.id)
    assert p.event_id == other.id


def test_login_requires_approval(db, event):
    p = register(db, 101)
    svc = ParticipantService()

    with pytest.raises(ForbiddenError):
        svc.login(db, participant_number=101)

    svc.update(db, p.id, {"background_check_status": "approved"})
    assert svc.login(db, participant_number=101).id == p.id


def test_login_unknown_number(db, event):
    with pytest.raises(NotFoundError):
        ParticipantService().login(db, participant_number=404)


def test_update_ignores_unknown_fields(db, event):
    p = register(db, 101)
    svc = ParticipantService()

    with pytest.raises(InvalidOperationError):
        svc.update(db, p.id, {"participant_number": 5, "id": uuid.uuid4()})

    updated = svc.update(db, p.id, {"occupation": "Chef", "participant_number": 5})
    assert updated.occupation == "Chef"
    assert updated.participant_number == 101


def test_list_filters(db, make_participant):
    make_participant(101, name="Alice Smith", status="approved")
    make_participant(102, name="Bob Jones", status="pending")
    make_participant(103, name="Carol Smith", status="rejected")
    svc = ParticipantService()

    assert len(svc.list_participants(db, ParticipantFilter())) == 3
    assert len(svc.list_participants(db, ParticipantFilter(status="all"))) == 3
    assert [p.participant_number for p in svc.list_participants(db, ParticipantFilter(status="pending"))] == [102]
    assert {p.participant_number for p in svc.list_participants(db, ParticipantFilter(search="smith"))} == {101, 103}
    assert [p.participant_number for p in svc.list_participants(db, ParticipantFilter(search="102"))] == [102]


def test_list_approved_excludes_self_and_pending(db, make_participant):
    me = make_participant(101)
    make_participant(102, gender="female")
    make_participant(103, gender="female", status="pending")

    rows = ParticipantService().list_approved(db, exclude_id=me.id)
    assert [p.participant_number for p in rows] == [102]


def test_delete_cascades_selections_both_directions(db, make_participant):
    a = make_participant(101)
    b = make_participant(102, gender="female")
    c = make_participant(103, gender="female")
    sel = SelectionService()
    sel.create_selection(db, selector_id=a.id, selected_participant_number=102)
    sel.create_selection(db, selector_id=b.id, selected_participant_number=101)
    sel.create_selection(db, selector_id=c.id, selected_participant_number=101)
    sel.create_selection(db, selector_id=b.id, selected_participant_number=103)

    removed = ParticipantService().delete(db, a.id)

    assert removed == 3
    remaining = db.execute(select(Selection)).scalars().all()
    assert [(s.selector_id, s.selected_id) for s in remaining] == [(b.id, c.id)]
    assert db.get(Participant, a.id) is None


def test_delete_unknown_participant(db, event):
    with pytest.raises(NotFoundError):
        ParticipantService().delete(db, uuid.uuid4())


def test_reset_all(db, make_participant):
    a = make_participant(101)
    make_participant(102, gender="female")
    SelectionService().create_selection(db, selector_id=a.id, selected_participant_number=102)

    counts = ParticipantService().reset_all(db)

    assert counts == {"participants": 2, "selections": 1}
    assert db.execute(select(func.count()).select_from(Participant)).scalar_one() == 0
