from __future__ import annotations

from typing import Any, Dict, Iterator, List

from sqlalchemy.orm import Session

from app.services.match_service import MatchQueryService, SelectionFilter


SELECTION_EXPORT_FIELDS = [
    "selector_number", "selector_name", "selector_gender", "selector_email", "selector_phone",
    "selected_number", "selected_name", "selected_gender", "selected_email", "selected_phone",
    "mutual_match",
    "selected_at",
]


class ExportSelectionsService:
    """
    Flat, human-readable selection rows for download.
    Mutuality comes from MatchQueryService, the same path as the live admin list.
    """

    def __init__(self, matches: MatchQueryService | None = None):
        self.matches = matches or MatchQueryService()

    def iter_rows(self, db: Session, *, filters: SelectionFilter) -> Iterator[Dict[str, Any]]:
        resolution, people = self.matches.annotated_rows(db, filters)

        for item in resolution.edges:
            s = item.edge
            selector, selected = people[s.id]
            yield {
                "selector_number": selector.participant_number,
                "selector_name": selector.full_name,
                "selector_gender": selector.gender,
                "selector_email": selector.email,
                "selector_phone": selector.phone,
                "selected_number": selected.participant_number,
                "selected_name": selected.full_name,
                "selected_gender": selected.gender,
                "selected_email": selected.email,
                "selected_phone": selected.phone,
                "mutual_match": "Yes" if item.is_mutual else "No",
                "selected_at": s.created_at.isoformat() if s.created_at else None,
            }

    def fieldnames(self) -> List[str]:
        return SELECTION_EXPORT_FIELDS
