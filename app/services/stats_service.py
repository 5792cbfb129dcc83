# app/services/stats_service.py
from __future__ import annotations

import uuid
from collections import defaultdict
from dataclasses import dataclass, asdict
from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy import select, desc
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.core.mutual_match import resolve_mutual
from app.models.enums import BackgroundCheckStatus, Gender
from app.models.event import Event
from app.models.participant import Participant
from app.models.selection import Selection


@dataclass(frozen=True)
class EventStats:
    total_participants: int = 0
    pending_checks: int = 0
    approved_participants: int = 0
    rejected_participants: int = 0
    male_count: int = 0
    female_count: int = 0
    total_selections: int = 0
    mutual_matches: int = 0

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


@dataclass(frozen=True)
class _Edge:
    selector_id: uuid.UUID
    selected_id: uuid.UUID


def _aggregate(people: Iterable[Tuple[str, str]], edges: List[_Edge]) -> EventStats:
    """people: (gender, background_check_status) rows."""
    total = pending = approved = rejected = male = female = 0
    for gender, status in people:
        total += 1
        if status == BackgroundCheckStatus.pending.value:
            pending += 1
        elif status == BackgroundCheckStatus.approved.value:
            approved += 1
        elif status == BackgroundCheckStatus.rejected.value:
            rejected += 1
        if gender == Gender.male.value:
            male += 1
        elif gender == Gender.female.value:
            female += 1

    resolution = resolve_mutual(edges)
    return EventStats(
        total_participants=total,
        pending_checks=pending,
        approved_participants=approved,
        rejected_participants=rejected,
        male_count=male,
        female_count=female,
        total_selections=resolution.total,
        mutual_matches=resolution.mutual_pair_count,
    )


class StatsService:
    """
    Dashboard / history counts. Each entry point does one bulk read per
    table and aggregates in memory; match counts come from resolve_mutual.
    """

    def _participant_rows(self, db: Session, event_id: Optional[uuid.UUID]):
        stmt = select(Participant.gender, Participant.background_check_status)
        if event_id is not None:
            stmt = stmt.where(Participant.event_id == event_id)
        return db.execute(stmt).all()

    def _edge_rows(self, db: Session, event_id: Optional[uuid.UUID]) -> List[_Edge]:
        stmt = select(Selection.selector_id, Selection.selected_id)
        if event_id is not None:
            stmt = stmt.where(Selection.event_id == event_id)
        return [_Edge(a, b) for a, b in db.execute(stmt).all()]

    def compute_event_stats(self, db: Session, event_id: uuid.UUID) -> EventStats:
        if db.get(Event, event_id) is None:
            raise NotFoundError("Event not found")
        return _aggregate(
            self._participant_rows(db, event_id),
            self._edge_rows(db, event_id),
        )

    def compute_global_stats(self, db: Session) -> EventStats:
        return _aggregate(self._participant_rows(db, None), self._edge_rows(db, None))

    def list_events_with_stats(self, db: Session) -> List[Tuple[Event, EventStats]]:
        """
        All events, newest first, each with its stats.
        Two bulk reads total (participants, selections) regardless of event count.
        """
        events = db.execute(select(Event).order_by(desc(Event.event_date))).scalars().all()
        if not events:
            return []

        people_by_event: Dict[Optional[uuid.UUID], List[Tuple[str, str]]] = defaultdict(list)
        for event_id, gender, status in db.execute(
            select(Participant.event_id, Participant.gender, Participant.background_check_status)
        ).all():
            people_by_event[event_id].append((gender, status))

        edges_by_event: Dict[Optional[uuid.UUID], List[_Edge]] = defaultdict(list)
        for event_id, a, b in db.execute(
            select(Selection.event_id, Selection.selector_id, Selection.selected_id)
        ).all():
            edges_by_event[event_id].append(_Edge(a, b))

        return [
            (e, _aggregate(people_by_event.get(e.id, []), edges_by_event.get(e.id, [])))
            for e in events
        ]
