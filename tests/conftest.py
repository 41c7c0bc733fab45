import pytest
from fastapi.testclient import TestClient

from diaristas.database import Base, Database
from diaristas.main import create_app
from diaristas.models import User
from diaristas.security_utils import create_jwt_token
from diaristas.services.notification_service import NotificationDispatcher

COORDINATOR_PHONE = "5567999583290"


class RecordingGateway:
    """Stands in for WhatsAppGateway and keeps every send it receives"""

    configured = True

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls = []

    async def send(self, to, body, priority="normal"):
        self.calls.append({"to": to, "body": body, "priority": priority})
        if self.fail:
            raise RuntimeError("gateway down")
        return True


@pytest.fixture
def database():
    db = Database("sqlite://")
    db.create_all()
    yield db
    Base.metadata.drop_all(bind=db.engine)
    db.engine.dispose()


@pytest.fixture
def session(database):
    db = database.session()
    yield db
    db.close()


@pytest.fixture
def gateway():
    return RecordingGateway()


@pytest.fixture
def dispatcher(gateway):
    return NotificationDispatcher(gateway, coordinator_phone=COORDINATOR_PHONE, cc_phones=[])


@pytest.fixture
def client(database, dispatcher):
    return TestClient(create_app(database, dispatcher))


def make_user(database, open_id, role="user", name=None, email=None):
    """Insert an account directly and return its id"""
    db = database.session()
    try:
        user = User(
            open_id=open_id,
            name=name or open_id,
            email=email or f"{open_id}@example.com",
            role=role,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user.id
    finally:
        db.close()


def auth_headers(open_id, name=None, email=None):
    token = create_jwt_token(
        {"sub": open_id, "name": name or open_id, "email": email or f"{open_id}@example.com"}
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def coordinator(database):
    make_user(database, "coord-ana", name="Ana")
    return auth_headers("coord-ana", name="Ana")


@pytest.fixture
def other_coordinator(database):
    make_user(database, "coord-bia", name="Bia")
    return auth_headers("coord-bia", name="Bia")


@pytest.fixture
def admin(database):
    make_user(database, "owner", role="admin", name="Owner")
    return auth_headers("owner", name="Owner")


@pytest.fixture
def specialty_id(client, coordinator):
    response = client.post("/specialties", json={"name": "Limpeza Residencial"}, headers=coordinator)
    assert response.status_code == 200
    return response.json()["id"]


@pytest.fixture
def maria(client, coordinator):
    response = client.post(
        "/staff",
        json={"name": "Maria", "phone": "5511999999999", "city": "São Paulo"},
        headers=coordinator,
    )
    assert response.status_code == 200
    return response.json()


def booking_payload(staff_member_id, specialty_id, **overrides):
    payload = {
        "staffMemberId": staff_member_id,
        "specialtyId": specialty_id,
        "serviceAddress": "Rua das Flores, 100",
        "startDate": "2024-03-10",
        "endDate": "2024-03-12",
        "dailyRate": 15000,
    }
    payload.update(overrides)
    return payload
