from __future__ import annotations
from pydantic import BaseModel, Field


class AdminLoginRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=1)


class ParticipantLoginRequest(BaseModel):
    participant_number: int = Field(..., gt=0)
    event_id: str | None = Field(None, description="optional event scope when numbers repeat across events")


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
