# app/services/participant_service.py
from __future__ import annotations

import json
import logging
import uuid
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from sqlalchemy import select, delete, asc, desc, or_, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import ConflictError, ForbiddenError, InvalidOperationError, NotFoundError
from app.models.enums import BackgroundCheckStatus, EventStatus
from app.models.event import Event
from app.models.participant import Participant
from app.models.selection import Selection

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = (
    "full_name",
    "email",
    "phone",
    "gender",
    "age",
    "occupation",
    "background_check_status",
)

# may be cleared with an explicit null
NULLABLE_FIELDS = ("age", "occupation")


@dataclass(frozen=True)
class ParticipantFilter:
    """Optional admin list filters; None means 'not filtered'."""
    status: Optional[str] = None
    search: Optional[str] = None
    event_id: Optional[uuid.UUID] = None


def build_qr_payload(participant: Participant) -> str:
    """Data encoded into the participant's QR code (rendering happens client-side)."""
    return json.dumps(
        {
            "participantId": str(participant.id),
            "participantNumber": participant.participant_number,
            "eventId": str(participant.event_id) if participant.event_id else None,
        },
        separators=(",", ":"),
    )


class ParticipantService:
    # ---------------------------
    # READS
    # ---------------------------

    def get(self, db: Session, participant_id: uuid.UUID) -> Participant:
        p = db.get(Participant, participant_id)
        if p is None:
            raise NotFoundError("Participant not found")
        return p

    def list_participants(self, db: Session, filters: ParticipantFilter) -> List[Participant]:
        stmt = select(Participant)

        if filters.status and filters.status != "all":
            stmt = stmt.where(Participant.background_check_status == filters.status)

        if filters.event_id is not None:
            stmt = stmt.where(Participant.event_id == filters.event_id)

        if filters.search:
            term = filters.search.strip()
            like = f"%{term.lower()}%"
            clauses = [
                func.lower(Participant.full_name).like(like),
                func.lower(Participant.email).like(like),
            ]
            if term.isdigit():
                clauses.append(Participant.participant_number == int(term))
            stmt = stmt.where(or_(*clauses))

        stmt = stmt.order_by(desc(Participant.created_at), desc(Participant.participant_number))
        return list(db.execute(stmt).scalars().all())

    def list_approved(self, db: Session, *, exclude_id: uuid.UUID) -> List[Participant]:
        """
        Approved participants a selector may pick from (never themselves).
        Scoped to the caller's event.
        """
        me = db.get(Participant, exclude_id)
        stmt = select(Participant).where(
            Participant.background_check_status == BackgroundCheckStatus.approved.value,
            Participant.id != exclude_id,
        )
        if me is not None and me.event_id is not None:
            stmt = stmt.where(Participant.event_id == me.event_id)
        stmt = stmt.order_by(asc(Participant.participant_number))
        return list(db.execute(stmt).scalars().all())

    # ---------------------------
    # REGISTRATION / LOGIN
    # ---------------------------

    def _default_event_id(self, db: Session) -> uuid.UUID:
        event_id = db.execute(
            select(Event.id)
            .where(Event.status == EventStatus.upcoming.value)
            .order_by(asc(Event.event_date))
            .limit(1)
        ).scalar_one_or_none()
        if event_id is None:
            raise InvalidOperationError("No active event found")
        return event_id

    def register(
        self,
        db: Session,
        *,
        participant_number: int,
        full_name: str,
        email: str,
        phone: str,
        gender: str,
        age: Optional[int] = None,
        occupation: Optional[str] = None,
        event_id: Optional[uuid.UUID] = None,
    ) -> Participant:
        if event_id is None:
            event_id = self._default_event_id(db)
        elif db.get(Event, event_id) is None:
            raise NotFoundError("Event not found")

        email_taken = db.execute(
            select(Participant.id).where(
                Participant.event_id == event_id,
                func.lower(Participant.email) == email.lower(),
            )
        ).first()
        if email_taken:
            raise ConflictError("Email already registered for this event")

        number_taken = db.execute(
            select(Participant.id).where(
                Participant.event_id == event_id,
                Participant.participant_number == participant_number,
            )
        ).first()
        if number_taken:
            raise ConflictError("This participant number is already taken")

        p = Participant(
            id=uuid.uuid4(),
            participant_number=participant_number,
            full_name=full_name,
            email=email,
            phone=phone,
            gender=gender,
            age=age,
            occupation=occupation,
            event_id=event_id,
            background_check_status=BackgroundCheckStatus.pending.value,
        )
        p.qr_code_data = build_qr_payload(p)

        db.add(p)
        try:
            db.commit()
        except IntegrityError:
            # concurrent registration won the (event, number|email) race
            db.rollback()
            raise ConflictError("Participant number or email already registered for this event")
        db.refresh(p)

        logger.info(
            "participant.registered",
            extra={"participant_id": str(p.id), "participant_number": p.participant_number, "event_id": str(event_id)},
        )
        return p

    def login(self, db: Session, *, participant_number: int, event_id: Optional[uuid.UUID] = None) -> Participant:
        stmt = select(Participant).where(Participant.participant_number == participant_number)
        if event_id is not None:
            stmt = stmt.where(Participant.event_id == event_id)
        # newest registration wins when numbers repeat across events
        p = db.execute(stmt.order_by(desc(Participant.created_at)).limit(1)).scalar_one_or_none()
        if p is None:
            raise NotFoundError("Participant not found")
        if not p.is_approved:
            raise ForbiddenError("Your background check is still pending. Please wait for approval.")
        return p

    # ---------------------------
    # ADMIN MUTATIONS
    # ---------------------------

    def update(self, db: Session, participant_id: uuid.UUID, changes: Dict[str, Any]) -> Participant:
        """
        Partial update; `changes` holds only the fields the caller sent.
        None clears a nullable field and is rejected for required ones.
        """
        updates = {k: v for k, v in changes.items() if k in UPDATABLE_FIELDS}
        if not updates:
            raise InvalidOperationError("No valid fields to update")

        cleared = sorted(k for k, v in updates.items() if v is None and k not in NULLABLE_FIELDS)
        if cleared:
            raise InvalidOperationError(
                "Required fields cannot be cleared", details={"fields": cleared}
            )

        p = self.get(db, participant_id)

        new_email = updates.get("email")
        if new_email is not None:
            stmt = select(Participant.id).where(
                Participant.id != p.id,
                func.lower(Participant.email) == str(new_email).lower(),
            )
            if p.event_id is None:
                stmt = stmt.where(Participant.event_id.is_(None))
            else:
                stmt = stmt.where(Participant.event_id == p.event_id)
            email_taken = db.execute(stmt).first()
            if email_taken:
                raise ConflictError("Email already registered for this event")

        for k, v in updates.items():
            setattr(p, k, v.value if hasattr(v, "value") else v)

        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise ConflictError("Email already registered for this event")
        db.refresh(p)
        return p

    def delete(self, db: Session, participant_id: uuid.UUID) -> int:
        """
        Removes the participant and every selection that references it,
        as selector or as selected. Returns the number of selections removed.
        """
        self.get(db, participant_id)

        removed = db.execute(
            delete(Selection).where(
                or_(
                    Selection.selector_id == participant_id,
                    Selection.selected_id == participant_id,
                )
            )
        ).rowcount
        db.execute(delete(Participant).where(Participant.id == participant_id))
        db.commit()

        logger.info(
            "participant.deleted",
            extra={"participant_id": str(participant_id), "selections_removed": removed},
        )
        return removed or 0

    def reset_all(self, db: Session) -> Dict[str, int]:
        selections = db.execute(delete(Selection)).rowcount
        participants = db.execute(delete(Participant)).rowcount
        db.commit()
        logger.warning(
            "participants.reset",
            extra={"participants_removed": participants, "selections_removed": selections},
        )
        return {"participants": participants or 0, "selections": selections or 0}
