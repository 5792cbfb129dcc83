from __future__ import annotations

import uuid
from typing import Optional

from app.core.errors import InvalidOperationError
from app.services.match_service import SelectionFilter


def parse_uuid(raw: Optional[str], *, field: str = "eventId") -> Optional[uuid.UUID]:
    if raw is None or raw == "" or raw == "all":
        return None
    try:
        return uuid.UUID(str(raw))
    except ValueError:
        raise InvalidOperationError(f"{field} must be UUID.")


def selection_filter(eventId: Optional[str] = None) -> SelectionFilter:
    """Query-string dependency: ?eventId=<uuid> scopes to one event."""
    return SelectionFilter(event_id=parse_uuid(eventId))
