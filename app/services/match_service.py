# app/services/match_service.py
from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import select, desc
from sqlalchemy.orm import Session, aliased

from app.core.mutual_match import MutualResolution, resolve_mutual
from app.models.participant import Participant
from app.models.selection import Selection


@dataclass(frozen=True)
class SelectionFilter:
    """Optional scope for edge loading; None means all events."""
    event_id: Optional[uuid.UUID] = None


def participant_summary(p: Optional[Participant], *, with_contact: bool = True) -> Optional[Dict[str, Any]]:
    if p is None:
        return None
    out: Dict[str, Any] = {
        "id": str(p.id),
        "participant_number": p.participant_number,
        "full_name": p.full_name,
        "gender": p.gender,
    }
    if with_contact:
        out["email"] = p.email
        out["phone"] = p.phone
    return out


def _iso(dt: Optional[datetime]) -> Optional[str]:
    return dt.isoformat() if dt else None


class MatchQueryService:
    """
    Read side of the selection graph. Every admin view (list, pairs,
    export, stats) goes through resolve_mutual so they all agree on what a
    mutual match is.
    """

    def load_edges(self, db: Session, filters: SelectionFilter) -> List[Selection]:
        stmt = select(Selection)
        if filters.event_id is not None:
            stmt = stmt.where(Selection.event_id == filters.event_id)
        return list(db.execute(stmt.order_by(desc(Selection.created_at))).scalars().all())

    def resolve(self, db: Session, filters: SelectionFilter) -> MutualResolution[Selection]:
        return resolve_mutual(self.load_edges(db, filters))

    def _load_edges_with_people(self, db: Session, filters: SelectionFilter):
        selector = aliased(Participant)
        selected = aliased(Participant)
        stmt = (
            select(Selection, selector, selected)
            .join(selector, selector.id == Selection.selector_id)
            .join(selected, selected.id == Selection.selected_id)
        )
        if filters.event_id is not None:
            stmt = stmt.where(Selection.event_id == filters.event_id)
        stmt = stmt.order_by(desc(Selection.created_at))
        return db.execute(stmt).all()

    def annotated_rows(self, db: Session, filters: SelectionFilter):
        """
        (resolution, people) where people maps selection.id -> (selector, selected).
        Inner joins drop dangling edges; cascades mean there should be none.
        """
        rows = self._load_edges_with_people(db, filters)
        people = {s.id: (a, b) for s, a, b in rows}
        resolution = resolve_mutual([s for s, _, _ in rows])
        return resolution, people

    def list_annotated_selections(self, db: Session, filters: SelectionFilter) -> Dict[str, Any]:
        resolution, people = self.annotated_rows(db, filters)

        selections = []
        for item in resolution.edges:
            s = item.edge
            selector, selected = people[s.id]
            selections.append(
                {
                    "id": str(s.id),
                    "created_at": _iso(s.created_at),
                    "event_id": str(s.event_id) if s.event_id else None,
                    "selector": participant_summary(selector),
                    "selected": participant_summary(selected),
                    "is_mutual": item.is_mutual,
                }
            )

        return {
            "selections": selections,
            "total": resolution.total,
            "mutual_matches_count": resolution.mutual_pair_count,
        }

    def list_mutual_pairs(self, db: Session, filters: SelectionFilter) -> List[Dict[str, Any]]:
        """
        One entry per distinct mutual pair, with both directed selection
        timestamps. participant_1 is the one who selected first.
        """
        resolution, people = self.annotated_rows(db, filters)

        by_key: Dict[str, List[Selection]] = {}
        for item in resolution.edges:
            if item.is_mutual:
                by_key.setdefault(item.pair_key, []).append(item.edge)

        pairs = []
        for key, edges in by_key.items():
            edges.sort(key=lambda s: (_iso(s.created_at) or "", str(s.id)))
            first, second = edges[0], edges[-1]
            p1, p2 = people[first.id]
            pairs.append(
                {
                    "pair_key": key,
                    "participant_1": participant_summary(p1),
                    "participant_2": participant_summary(p2),
                    "first_selection_at": _iso(first.created_at),
                    "second_selection_at": _iso(second.created_at),
                    "match_completed_at": _iso(second.created_at),
                }
            )

        pairs.sort(key=lambda m: (m["match_completed_at"] or "", m["pair_key"]), reverse=True)
        return pairs
