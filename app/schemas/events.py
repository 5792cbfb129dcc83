from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.models.enums import EventStatus


class EventCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=256)
    event_date: datetime
    location: str = Field(..., min_length=1, max_length=256)
    description: Optional[str] = None
    status: Optional[EventStatus] = None
    max_participants: Optional[int] = Field(None, gt=0)


class EventUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=256)
    event_date: Optional[datetime] = None
    location: Optional[str] = Field(None, min_length=1, max_length=256)
    description: Optional[str] = None
    status: Optional[EventStatus] = None
    max_participants: Optional[int] = Field(None, gt=0)
