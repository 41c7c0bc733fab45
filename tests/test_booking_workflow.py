import asyncio
from datetime import date

import pytest
from conftest import COORDINATOR_PHONE, RecordingGateway, booking_payload

from diaristas.domain.bookings.schemas import BookingCreate
from diaristas.domain.bookings.service import BookingService
from diaristas.exceptions import ValidationError
from diaristas.models import Booking, Notification, Specialty, StaffMember, User
from diaristas.services.notification_service import NotificationDispatcher


def test_create_booking_notifies_coordinator_and_staff(client, coordinator, gateway, maria, specialty_id):
    response = client.post("/bookings", json=booking_payload(maria["id"], specialty_id), headers=coordinator)

    assert response.status_code == 200
    booking = response.json()
    assert booking["id"] is not None
    assert booking["status"] == "scheduled"
    assert booking["totalPrice"] == 45000
    assert booking["staffName"] == "Maria"
    assert booking["specialtyName"] == "Limpeza Residencial"

    assert [(call["to"], call["priority"]) for call in gateway.calls] == [
        (COORDINATOR_PHONE, "high"),
        ("5511999999999", "high"),
    ]
    assert "R$ 450,00" in gateway.calls[0]["body"]
    assert "10/03/2024 até 12/03/2024" in gateway.calls[1]["body"]


def test_booking_survives_gateway_failure(client, coordinator, gateway, maria, specialty_id):
    gateway.fail = True

    response = client.post("/bookings", json=booking_payload(maria["id"], specialty_id), headers=coordinator)

    assert response.status_code == 200
    booking_id = response.json()["id"]
    assert booking_id is not None
    assert len(gateway.calls) == 2
    assert client.get(f"/bookings/{booking_id}", headers=coordinator).status_code == 200


def test_supplied_total_is_replaced_by_computed_total(client, coordinator, maria, specialty_id):
    payload = booking_payload(maria["id"], specialty_id, totalPrice=1)
    response = client.post("/bookings", json=payload, headers=coordinator)

    assert response.json()["totalPrice"] == 45000


def test_zero_total_skips_whatsapp_but_feeds_admin(client, coordinator, gateway, maria, specialty_id):
    payload = booking_payload(maria["id"], specialty_id, dailyRate=0)
    response = client.post("/bookings", json=payload, headers=coordinator)

    assert response.status_code == 200
    assert gateway.calls == []
    feed = client.get("/notifications", headers=coordinator).json()
    assert [item["type"] for item in feed] == ["booking_created", "staff_registered"]


def test_inverted_range_is_rejected_before_persisting(client, coordinator, gateway, maria, specialty_id):
    payload = booking_payload(maria["id"], specialty_id, startDate="2024-03-12", endDate="2024-03-10")
    response = client.post("/bookings", json=payload, headers=coordinator)

    assert response.status_code == 422
    assert client.get("/bookings", headers=coordinator).json() == []
    assert gateway.calls == []


def test_blank_address_is_rejected(client, coordinator, maria, specialty_id):
    payload = booking_payload(maria["id"], specialty_id, serviceAddress="   ")
    response = client.post("/bookings", json=payload, headers=coordinator)

    assert response.status_code == 422
    assert response.json()["detail"] == "Service address is required"


def test_unknown_staff_member_is_rejected(client, coordinator, specialty_id):
    response = client.post("/bookings", json=booking_payload(999, specialty_id), headers=coordinator)

    assert response.status_code == 422
    assert client.get("/bookings", headers=coordinator).json() == []


def test_unknown_specialty_is_rejected(client, coordinator, maria):
    response = client.post("/bookings", json=booking_payload(maria["id"], 999), headers=coordinator)
    assert response.status_code == 422


def test_service_validates_before_writing(session):
    user = User(open_id="coord", name="Coord", role="user")
    staff = StaffMember(user_id=1, name="Maria", phone="5511999999999")
    specialty = Specialty(name="Passadoria")
    session.add_all([user, staff, specialty])
    session.commit()

    gateway = RecordingGateway()
    service = BookingService(session, NotificationDispatcher(gateway, COORDINATOR_PHONE))
    data = BookingCreate(
        staff_member_id=staff.id,
        specialty_id=specialty.id,
        service_address="Rua B, 20",
        start_date=date(2024, 3, 12),
        end_date=date(2024, 3, 10),
        daily_rate=15000,
    )

    with pytest.raises(ValidationError):
        asyncio.run(service.create_booking(data, user))

    assert session.query(Booking).count() == 0
    assert session.query(Notification).count() == 0
    assert gateway.calls == []


def test_update_recomputes_total(client, coordinator, maria, specialty_id):
    booking = client.post("/bookings", json=booking_payload(maria["id"], specialty_id), headers=coordinator).json()

    response = client.patch(
        f"/bookings/{booking['id']}", json={"endDate": "2024-03-14", "dailyRate": 10000}, headers=coordinator
    )

    assert response.status_code == 200
    assert response.json()["totalPrice"] == 50000


def test_update_rejects_inverted_range(client, coordinator, maria, specialty_id):
    booking = client.post("/bookings", json=booking_payload(maria["id"], specialty_id), headers=coordinator).json()

    response = client.patch(f"/bookings/{booking['id']}", json={"endDate": "2024-03-01"}, headers=coordinator)

    assert response.status_code == 422
    assert client.get(f"/bookings/{booking['id']}", headers=coordinator).json()["endDate"] == "2024-03-12"


@pytest.mark.parametrize(
    "field", ["startDate", "endDate", "dailyRate", "staffMemberId", "specialtyId", "serviceAddress"]
)
def test_update_rejects_null_for_required_field(client, coordinator, maria, specialty_id, field):
    booking = client.post("/bookings", json=booking_payload(maria["id"], specialty_id), headers=coordinator).json()

    response = client.patch(f"/bookings/{booking['id']}", json={field: None}, headers=coordinator)

    assert response.status_code == 422
    stored = client.get(f"/bookings/{booking['id']}", headers=coordinator).json()
    assert stored[field] == booking[field]
    assert stored["totalPrice"] == 45000


def test_update_clears_optional_fields(client, coordinator, maria, specialty_id):
    payload = booking_payload(maria["id"], specialty_id, notes="Levar escada")
    booking = client.post("/bookings", json=payload, headers=coordinator).json()

    response = client.patch(f"/bookings/{booking['id']}", json={"notes": None}, headers=coordinator)

    assert response.status_code == 200
    assert response.json()["notes"] is None


def test_status_transitions(client, coordinator, maria, specialty_id):
    booking = client.post("/bookings", json=booking_payload(maria["id"], specialty_id), headers=coordinator).json()

    canceled = client.post(f"/bookings/{booking['id']}/cancel", headers=coordinator)
    assert canceled.status_code == 200
    assert canceled.json()["status"] == "canceled"

    assert client.post(f"/bookings/{booking['id']}/complete", headers=coordinator).status_code == 422
    assert (
        client.patch(f"/bookings/{booking['id']}", json={"notes": "tarde"}, headers=coordinator).status_code
        == 422
    )


def test_list_filters_by_status_newest_first(client, coordinator, maria, specialty_id):
    first = client.post("/bookings", json=booking_payload(maria["id"], specialty_id), headers=coordinator).json()
    second = client.post(
        "/bookings",
        json=booking_payload(maria["id"], specialty_id, startDate="2024-04-01", endDate="2024-04-01"),
        headers=coordinator,
    ).json()
    client.post(f"/bookings/{first['id']}/complete", headers=coordinator)

    everything = client.get("/bookings", headers=coordinator).json()
    assert [b["id"] for b in everything] == [second["id"], first["id"]]

    completed = client.get("/bookings", params={"status": "completed"}, headers=coordinator).json()
    assert [b["id"] for b in completed] == [first["id"]]

    for_staff = client.get(f"/bookings/staff/{maria['id']}", headers=coordinator).json()
    assert len(for_staff) == 2


def test_delete_is_refused_when_payments_exist(client, coordinator, maria, specialty_id):
    booking = client.post("/bookings", json=booking_payload(maria["id"], specialty_id), headers=coordinator).json()
    client.post(
        "/payments",
        json={
            "staffMemberId": maria["id"],
            "bookingId": booking["id"],
            "amount": 45000,
            "paymentDate": "2024-03-12",
            "method": "pix",
            "status": "pending",
        },
        headers=coordinator,
    )

    assert client.delete(f"/bookings/{booking['id']}", headers=coordinator).status_code == 422


def test_delete_booking(client, coordinator, maria, specialty_id):
    booking = client.post("/bookings", json=booking_payload(maria["id"], specialty_id), headers=coordinator).json()

    response = client.delete(f"/bookings/{booking['id']}", headers=coordinator)

    assert response.status_code == 200
    assert client.get(f"/bookings/{booking['id']}", headers=coordinator).status_code == 404
