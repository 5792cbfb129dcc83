from __future__ import annotations

from pydantic import BaseModel


class StatsResponse(BaseModel):
    total_participants: int
    pending_checks: int
    approved_participants: int
    rejected_participants: int
    male_count: int
    female_count: int
    total_selections: int
    mutual_matches: int
