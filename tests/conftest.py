"""Pytest fixtures — SQLite database for fast, isolated tests."""
from datetime import date

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from attendance.database import Base, get_db
from attendance.main import app

# Import all models so they register with Base.metadata
from attendance.models.user import User                          # noqa: F401
from attendance.models.coordinator import Coordinator            # noqa: F401
from attendance.models.event import Event                        # noqa: F401
from attendance.models.day_keyword import DayKeyword             # noqa: F401
from attendance.models.enrollment import Enrollment              # noqa: F401
from attendance.models.attendance_record import AttendanceRecord  # noqa: F401
from attendance.models.certificate import Certificate            # noqa: F401

SQLITE_URL = "sqlite:///./test.db"

EVENT_START = date(2026, 3, 2)
EVENT_END = date(2026, 3, 3)


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh SQLite engine for each test."""
    engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})

    # WAL lets readers proceed while a check-in is being written
    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture(scope="function")
def db(session_factory):
    """Yield a database session, closed after the test."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(session_factory):
    """FastAPI TestClient with the database dependency overridden to use SQLite."""

    def _override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Helpers: build fixtures through the API, return response JSON dicts
# ---------------------------------------------------------------------------
def create_test_user(client: TestClient, email: str = "alice@example.com", name: str = "Alice",
                     registration_number: str = None, campus: str = None) -> dict:
    """Helper — POST /api/users and return response JSON."""
    resp = client.post("/api/users/", json={
        "email": email,
        "full_name": name,
        "registration_number": registration_number,
        "campus": campus,
    })
    assert resp.status_code == 201, resp.text
    return resp.json()


def create_test_event(client: TestClient, title: str = "Workshop X", start: date = EVENT_START,
                      end: date = EVENT_END, organizer: str = "org@example.com", approve: bool = True,
                      **approval) -> dict:
    """Helper — create an event request and, by default, approve it with a 100m geofence at (0, 0)."""
    resp = client.post("/api/events/", json={
        "title": title,
        "start_date": start.isoformat(),
        "end_date": end.isoformat(),
        "organizer_email": organizer,
        "campus": "Campus Central",
    })
    assert resp.status_code == 201, resp.text
    event = resp.json()
    if not approve:
        return event

    body = {"approver_email": "admin@example.com", "latitude": 0.0, "longitude": 0.0,
            "validation_radius_meters": 100, "workload_hours": 8}
    body.update(approval)
    resp = client.post(f"/api/events/{event['event_id']}/approve", json=body)
    assert resp.status_code == 200, resp.text
    return resp.json()


def enroll_confirmed(client: TestClient, event_id: str, email: str) -> dict:
    """Helper — enroll a user and confirm the enrollment."""
    resp = client.post(f"/api/events/{event_id}/enrollments", json={"user_email": email})
    assert resp.status_code == 201, resp.text
    enrollment = resp.json()
    resp = client.patch(
        f"/api/events/{event_id}/enrollments/{enrollment['enrollment_id']}",
        json={"status": "confirmed"},
    )
    assert resp.status_code == 200, resp.text
    return resp.json()


def generate_keyword(client: TestClient, event_id: str, day: date) -> str:
    """Helper — generate the keyword for one event day and return it."""
    resp = client.post(f"/api/events/{event_id}/keywords", json={"keyword_date": day.isoformat()})
    assert resp.status_code == 201, resp.text
    return resp.json()["keyword"]
