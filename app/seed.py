import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.logging import configure_logging
from app.db.session import SessionLocal
from app.models.admin_user import AdminUser
from app.models.enums import EventStatus
from app.models.event import Event
from app.services.auth_service import create_admin
from app.services.event_service import EventService

logger = logging.getLogger(__name__)


def seed():
    settings = get_settings()
    db: Session = SessionLocal()

    try:
        existing = db.execute(
            select(AdminUser).where(func.lower(AdminUser.email) == settings.seed_admin_email.lower())
        ).scalar_one_or_none()
        if existing is None:
            create_admin(
                db,
                email=settings.seed_admin_email,
                password=settings.seed_admin_password,
                name=settings.seed_admin_name,
            )
            logger.info("seed.admin_created", extra={"email": settings.seed_admin_email})

        # registration needs at least one upcoming event
        upcoming = db.execute(
            select(Event.id).where(Event.status == EventStatus.upcoming.value).limit(1)
        ).scalar_one_or_none()
        if upcoming is None:
            ev = EventService().create(
                db,
                name="Speed Dating Night",
                event_date=datetime.now(timezone.utc) + timedelta(days=14),
                location="TBD",
            )
            logger.info("seed.event_created", extra={"event_id": str(ev.id)})
    finally:
        db.close()


if __name__ == "__main__":
    configure_logging(get_settings())
    seed()
