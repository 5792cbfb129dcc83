import os
import uuid

# settings are read once (lru_cache); set required env before any app import
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event as sa_event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# FORCE model registration
import app.models  # noqa
from app.db.base import Base
from app.db.session import get_db
from app.main import create_app
from app.models.enums import ActorRole, BackgroundCheckStatus
from app.models.event import Event
from app.models.participant import Participant
from app.services.auth_service import create_admin, issue_token, participant_principal
from app.policies.rbac import Principal

API = "/api/v1"


@pytest.fixture(scope="function")
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )

    @sa_event.listens_for(eng, "connect")
    def _fk_on(dbapi_connection, _record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=eng)
    try:
        yield eng
    finally:
        Base.metadata.drop_all(bind=eng)
        eng.dispose()


@pytest.fixture(scope="function")
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


@pytest.fixture(scope="function")
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(session_factory):
    app = create_app()

    def override_get_db():
        s = session_factory()
        try:
            yield s
        finally:
            s.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c


# ---------------------------
# DATA HELPERS
# ---------------------------

@pytest.fixture
def make_event(db):
    def _make(name="Speed Dating Night", status="upcoming"):
        from datetime import datetime, timedelta, timezone

        ev = Event(
            id=uuid.uuid4(),
            name=name,
            event_date=datetime.now(timezone.utc) + timedelta(days=7),
            location="Downtown Hall",
            status=status,
        )
        db.add(ev)
        db.commit()
        return ev

    return _make


@pytest.fixture
def event(make_event):
    return make_event()


@pytest.fixture
def make_participant(db, event):
    def _make(number, *, gender="male", status=BackgroundCheckStatus.approved.value, event_id=None, name=None):
        p = Participant(
            id=uuid.uuid4(),
            participant_number=number,
            full_name=name or f"Participant {number}",
            email=f"p{number}@example.com",
            phone="5550000000",
            gender=gender,
            age=30,
            background_check_status=status,
            event_id=event_id or event.id,
        )
        db.add(p)
        db.commit()
        return p

    return _make


# ---------------------------
# TOKEN HELPERS
# ---------------------------

def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def headers_for():
    def _headers(p: Participant) -> dict:
        return auth_headers(issue_token(participant_principal(p)))

    return _headers


@pytest.fixture
def admin_user(db):
    return create_admin(db, email="admin@example.com", password="s3cret-pass", name="Admin")


@pytest.fixture
def admin_headers(admin_user):
    principal = Principal(
        actor_id=str(admin_user.id),
        role=ActorRole.ADMIN,
        display_name=admin_user.name,
        email=admin_user.email,
    )
    return auth_headers(issue_token(principal))
