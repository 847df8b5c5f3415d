import os

# Configure an in-memory database before the application modules are imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["GUEST_MODE_ENABLED"] = "true"
os.environ["REJECT_DOUBLE_BOOKING"] = "false"

import datetime as dt  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from clinicdesk import models  # noqa: E402,F401
from clinicdesk.auth import get_current_owner  # noqa: E402
from clinicdesk.database import Base, SessionLocal, engine  # noqa: E402
from clinicdesk.domain.appointments.schemas import Appointment  # noqa: E402
from clinicdesk.domain.clients.schemas import Client  # noqa: E402
from clinicdesk.domain.staff.schemas import Staff  # noqa: E402
from clinicdesk.domain.statuses.schemas import AppStatus  # noqa: E402
from clinicdesk.domain.treatments.schemas import ServiceType  # noqa: E402
from clinicdesk.main import app  # noqa: E402
from clinicdesk.persistence import MemoryDocumentStore  # noqa: E402

OWNER_ID = "owner-1"


@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def guest_client():
    """Client acting as a guest session against a freshly seeded in-memory store"""
    with TestClient(app) as client:
        app.state.guest_store = MemoryDocumentStore.seeded("guest", today=dt.date.today())
        client.headers.update({"X-Guest-Session": "true"})
        yield client


@pytest.fixture
def owner_client():
    """Client authenticated as a regular owner, backed by the SQL store"""
    app.dependency_overrides[get_current_owner] = lambda: OWNER_ID
    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.clear()
        Base.metadata.drop_all(bind=engine)


# ============================================================================
# ENTITY FIXTURES
# ============================================================================


@pytest.fixture
def statuses():
    return [
        AppStatus(id="scheduled", name="Scheduled", is_initial=True),
        AppStatus(id="completed", name="Completed", is_billable=True, is_default=True),
        AppStatus(id="cancelled", name="Cancelled"),
    ]


@pytest.fixture
def botox():
    return ServiceType(id="s1", name="Botox", default_price=50.0, default_duration=60, recurrence_days=60)


@pytest.fixture
def cleaning():
    return ServiceType(id="s2", name="Dental Cleaning", default_price=80.0, default_duration=45, recurrence_days=180)


@pytest.fixture
def consultation():
    return ServiceType(id="s9", name="Consultation", default_price=30.0, recurrence_days=0)


@pytest.fixture
def fran():
    return Staff(id="staff1", name="Fran", default_rate=30.0, rates={"s1": 60.0})


@pytest.fixture
def ana():
    return Client(id="c1", name="Ana García", email="ana@example.com", phone="600 111 222")


@pytest.fixture
def make_appointment():
    """Factory for appointments; a billable Botox visit on 2024-01-01 unless overridden"""

    def factory(**overrides) -> Appointment:
        values = {
            "client_id": "c1",
            "service_type_id": "s1",
            "status_id": "completed",
            "date": dt.date(2024, 1, 1),
            "start_time": "10:00",
            "duration_minutes": 60,
            "base_price": 50.0,
            "price": 50.0,
        }
        values.update(overrides)
        return Appointment(**values)

    return factory
