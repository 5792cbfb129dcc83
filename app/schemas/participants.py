# app/schemas/participants.py
from __future__ import annotations

import uuid
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from app.models.enums import BackgroundCheckStatus, Gender


class ParticipantRegister(BaseModel):
    participant_number: int = Field(..., gt=0)
    full_name: str = Field(..., min_length=2, max_length=255)
    email: EmailStr
    phone: str = Field(..., min_length=10, max_length=20)
    gender: Gender
    age: Optional[int] = Field(None, ge=18, le=120)
    occupation: Optional[str] = Field(None, min_length=2, max_length=100)
    event_id: Optional[uuid.UUID] = None


class ParticipantUpdate(BaseModel):
    full_name: Optional[str] = Field(None, min_length=2, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, min_length=10, max_length=20)
    gender: Optional[Gender] = None
    age: Optional[int] = Field(None, ge=18, le=120)
    occupation: Optional[str] = Field(None, min_length=2, max_length=100)
    background_check_status: Optional[BackgroundCheckStatus] = None
