from app.db.base import Base
from .event import Event
from .participant import Participant
from .selection import Selection
from .admin_user import AdminUser
from .audit_log import AuditLog

__all__ = [
    "Base",
    "Event",
    "Participant",
    "Selection",
    "AdminUser",
    "AuditLog",
]
