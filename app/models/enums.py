#app/models/enums.py
from __future__ import annotations
from enum import Enum


class ActorRole(str, Enum):
    ADMIN = "ADMIN"
    PARTICIPANT = "PARTICIPANT"


class Gender(str, Enum):
    male = "male"
    female = "female"


class BackgroundCheckStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class EventStatus(str, Enum):
    upcoming = "upcoming"
    active = "active"
    completed = "completed"
    cancelled = "cancelled"
