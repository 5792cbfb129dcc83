# app/services/selection_service.py
from __future__ import annotations

import logging
import uuid
from typing import List, Optional, Tuple

from sqlalchemy import select, delete, desc
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import (
    ConflictError,
    ForbiddenError,
    InternalError,
    InvalidOperationError,
    NotFoundError,
)
from app.models.participant import Participant
from app.models.selection import Selection, UQ_SELECTION_PAIR

logger = logging.getLogger(__name__)


def _is_unique_violation(exc: IntegrityError) -> bool:
    orig = getattr(exc, "orig", None)
    # postgres: SQLSTATE 23505 (psycopg2 .pgcode / psycopg3 .sqlstate)
    if getattr(orig, "pgcode", None) == "23505" or getattr(orig, "sqlstate", None) == "23505":
        return True
    msg = str(orig or exc).lower()
    return UQ_SELECTION_PAIR in msg or "unique constraint" in msg


class SelectionService:
    # ---------------------------
    # READS
    # ---------------------------

    def _get_participant(self, db: Session, participant_id: uuid.UUID) -> Optional[Participant]:
        return db.execute(
            select(Participant).where(Participant.id == participant_id)
        ).scalar_one_or_none()

    def _find_by_number(
        self, db: Session, *, participant_number: int, event_id: Optional[uuid.UUID]
    ) -> Optional[Participant]:
        """
        Numbers are unique per event, so the target is looked up within the
        selector's event (NULL event matches NULL event).
        """
        stmt = select(Participant).where(Participant.participant_number == participant_number)
        if event_id is None:
            stmt = stmt.where(Participant.event_id.is_(None))
        else:
            stmt = stmt.where(Participant.event_id == event_id)
        return db.execute(stmt.limit(1)).scalar_one_or_none()

    def list_my_selections(
        self, db: Session, *, selector_id: uuid.UUID
    ) -> List[Tuple[Selection, Participant]]:
        rows = db.execute(
            select(Selection, Participant)
            .join(Participant, Participant.id == Selection.selected_id)
            .where(Selection.selector_id == selector_id)
            .order_by(desc(Selection.created_at), desc(Participant.participant_number))
        ).all()
        return [(s, p) for s, p in rows]

    # ---------------------------
    # MUTATIONS
    # ---------------------------

    def create_selection(
        self,
        db: Session,
        *,
        selector_id: uuid.UUID,
        selected_participant_number: int,
    ) -> Selection:
        """
        Record selector -> participant #number.

        Order of checks:
        1. selector must still exist (re-resolved at write time)
        2. target number must exist in the selector's event
        3. target != selector               -> InvalidOperation
        4. target approved                  -> else NotFound
        5. selector approved                -> else Forbidden
        6. INSERT; the unique constraint on (selector_id, selected_id) is
           the duplicate guard, not a prior existence check.
        """
        selector = self._get_participant(db, selector_id)
        if selector is None:
            raise NotFoundError("Selector not found")

        target = self._find_by_number(
            db, participant_number=selected_participant_number, event_id=selector.event_id
        )

        if target is not None and target.id == selector.id:
            raise InvalidOperationError("Cannot select yourself")

        if target is None or not target.is_approved:
            raise NotFoundError("Participant not found or not approved")

        if not selector.is_approved:
            raise ForbiddenError("Only approved participants can make selections")

        selected_id = target.id
        row = Selection(
            selector_id=selector.id,
            selected_id=selected_id,
            event_id=selector.event_id,
        )
        db.add(row)
        try:
            db.commit()
        except IntegrityError as e:
            db.rollback()
            if _is_unique_violation(e):
                logger.info(
                    "selection.duplicate",
                    extra={"selector_id": str(selector_id), "selected_id": str(selected_id)},
                )
                raise ConflictError("You have already selected this participant")
            # FK failure: one side was deleted between lookup and insert
            logger.warning(
                "selection.participant_vanished",
                extra={"selector_id": str(selector_id), "selected_id": str(selected_id)},
            )
            raise NotFoundError("Participant not found or not approved")
        except SQLAlchemyError:
            db.rollback()
            logger.exception("selection.insert_failed", extra={"selector_id": str(selector_id)})
            raise InternalError("Failed to create selection")

        db.refresh(row)
        logger.info(
            "selection.created",
            extra={
                "selection_id": str(row.id),
                "selector_id": str(row.selector_id),
                "selected_id": str(row.selected_id),
                "event_id": str(row.event_id) if row.event_id else None,
            },
        )
        return row

    def revoke_selection(
        self,
        db: Session,
        *,
        requester_id: uuid.UUID,
        selection_id: uuid.UUID,
    ) -> bool:
        """
        Idempotent delete. Ownership is part of the DELETE predicate.
        Returns True when a row was removed, False when it was already gone.
        Raises Forbidden only when the row exists but belongs to someone else.
        """
        deleted = db.execute(
            delete(Selection).where(
                Selection.id == selection_id,
                Selection.selector_id == requester_id,
            )
        ).rowcount
        db.commit()

        if deleted:
            logger.info(
                "selection.revoked",
                extra={"selection_id": str(selection_id), "selector_id": str(requester_id)},
            )
            return True

        still_there = db.execute(
            select(Selection.id).where(Selection.id == selection_id)
        ).scalar_one_or_none()
        if still_there is not None:
            raise ForbiddenError("You can only remove your own selections")
        return False

    def reset_all_selections(self, db: Session) -> int:
        removed = db.execute(delete(Selection)).rowcount
        db.commit()
        logger.warning("selections.reset", extra={"selections_removed": removed})
        return removed or 0
