import pytest
from fastapi.testclient import TestClient

from conftest import auth_headers, booking_payload

from diaristas.database import Database, degrade_when_unavailable
from diaristas.exceptions import StoreUnavailableError
from diaristas.main import create_app


@pytest.fixture
def offline_client(dispatcher):
    return TestClient(create_app(Database(None), dispatcher))


def test_unconfigured_database_refuses_sessions():
    database = Database(None)
    assert database.available is False
    with pytest.raises(StoreUnavailableError):
        database.session()


def test_decorator_returns_fresh_default():
    @degrade_when_unavailable([])
    def list_things(db):
        return ["real"]

    first = list_things(None)
    first.append("mutated")
    assert list_things(None) == []
    assert list_things(object()) == ["real"]


def test_health_reports_missing_database(offline_client):
    assert offline_client.get("/health").json() == {"status": "healthy", "database": "unavailable"}


def test_reads_return_empty_results(offline_client):
    headers = auth_headers("coord-ana")

    assert offline_client.get("/bookings", headers=headers).json() == []
    assert offline_client.get("/payments", headers=headers).json() == []
    assert offline_client.get("/staff", headers=headers).json() == []


def test_writes_are_no_ops(offline_client, gateway):
    headers = auth_headers("coord-ana")

    booking = offline_client.post("/bookings", json=booking_payload(1, 1), headers=headers)
    payment = offline_client.post(
        "/payments",
        json={"staffMemberId": 1, "amount": 100, "paymentDate": "2024-03-15", "method": "cash"},
        headers=headers,
    )

    assert booking.status_code == 200
    assert booking.json() is None
    assert payment.status_code == 200
    assert payment.json() is None
    assert gateway.calls == []


def test_validation_still_applies_without_database(offline_client):
    payload = booking_payload(1, 1, startDate="2024-03-12", endDate="2024-03-10")
    response = offline_client.post("/bookings", json=payload, headers=auth_headers("coord-ana"))
    assert response.status_code == 422
