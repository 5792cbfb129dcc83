from __future__ import annotations

from pydantic import BaseModel, Field


class SelectionCreate(BaseModel):
    selected_participant_number: int = Field(..., gt=0)
