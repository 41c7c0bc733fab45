import pytest
from conftest import booking_payload

from diaristas.domain.notifications.service import NOTIFICATION_STYLES


@pytest.fixture
def booking(client, coordinator, maria, specialty_id, gateway):
    created = client.post("/bookings", json=booking_payload(maria["id"], specialty_id), headers=coordinator).json()
    gateway.calls.clear()
    return created


@pytest.fixture
def payment(client, coordinator, maria, booking, gateway):
    created = client.post(
        "/payments",
        json={
            "staffMemberId": maria["id"],
            "bookingId": booking["id"],
            "amount": 45000,
            "paymentDate": "2024-03-12",
            "method": "pix",
            "status": "paid",
        },
        headers=coordinator,
    ).json()
    gateway.calls.clear()
    return created


def test_rating_notifies_staff_member(client, coordinator, gateway, maria, booking):
    response = client.post(
        "/ratings",
        json={"staffMemberId": maria["id"], "bookingId": booking["id"], "score": 5, "comment": "Impecável"},
        headers=coordinator,
    )

    assert response.status_code == 200
    assert [call["to"] for call in gateway.calls] == ["5511999999999"]
    assert "⭐⭐⭐⭐⭐" in gateway.calls[0]["body"]
    assert "Impecável" in gateway.calls[0]["body"]


def test_rating_score_must_be_between_one_and_five(client, coordinator, maria, booking):
    for score in (0, 6):
        response = client.post(
            "/ratings",
            json={"staffMemberId": maria["id"], "bookingId": booking["id"], "score": score},
            headers=coordinator,
        )
        assert response.status_code == 422


def test_rating_requires_existing_booking(client, coordinator, maria):
    response = client.post(
        "/ratings", json={"staffMemberId": maria["id"], "bookingId": 999, "score": 4}, headers=coordinator
    )
    assert response.status_code == 404


def test_average_rating(client, coordinator, maria, booking):
    empty = client.get(f"/ratings/staff/{maria['id']}/average", headers=coordinator).json()
    assert empty == {"staffMemberId": maria["id"], "average": 0.0, "count": 0}

    for score in (5, 4):
        client.post(
            "/ratings",
            json={"staffMemberId": maria["id"], "bookingId": booking["id"], "score": score},
            headers=coordinator,
        )

    average = client.get(f"/ratings/staff/{maria['id']}/average", headers=coordinator).json()
    assert average["average"] == 4.5
    assert average["count"] == 2
    assert len(client.get(f"/ratings/staff/{maria['id']}", headers=coordinator).json()) == 2


def test_update_rating(client, coordinator, maria, booking):
    rating = client.post(
        "/ratings",
        json={"staffMemberId": maria["id"], "bookingId": booking["id"], "score": 3},
        headers=coordinator,
    ).json()

    response = client.patch(f"/ratings/{rating['id']}", json={"score": 4}, headers=coordinator)
    assert response.json()["score"] == 4


def test_update_rating_clears_comment_but_not_score(client, coordinator, maria, booking):
    rating = client.post(
        "/ratings",
        json={"staffMemberId": maria["id"], "bookingId": booking["id"], "score": 5, "comment": "Impecável"},
        headers=coordinator,
    ).json()

    cleared = client.patch(f"/ratings/{rating['id']}", json={"comment": None}, headers=coordinator)
    assert cleared.status_code == 200
    assert cleared.json()["comment"] is None

    rejected = client.patch(f"/ratings/{rating['id']}", json={"score": None}, headers=coordinator)
    assert rejected.status_code == 422
    assert rejected.json()["detail"] == "score cannot be null"


def test_issue_and_sign_receipt(client, coordinator, maria, booking, payment):
    response = client.post(
        "/receipts",
        json={
            "bookingId": booking["id"],
            "paymentId": payment["id"],
            "staffMemberId": maria["id"],
            "documentUrl": "https://files.example.com/recibo-1.pdf",
        },
        headers=coordinator,
    )
    assert response.status_code == 200
    receipt = response.json()
    assert receipt["signed"] is False

    signed = client.post(f"/receipts/{receipt['id']}/sign", headers=coordinator).json()
    assert signed["signed"] is True
    assert signed["signedAt"] is not None

    assert client.post(f"/receipts/{receipt['id']}/sign", headers=coordinator).status_code == 422

    feed = client.get("/notifications", headers=coordinator).json()
    assert "receipt_issued" in [item["type"] for item in feed]


def test_feed_types_match_presentation_styles(client, coordinator, maria, booking, payment):
    client.post(
        "/receipts",
        json={
            "bookingId": booking["id"],
            "paymentId": payment["id"],
            "staffMemberId": maria["id"],
            "documentUrl": "https://files.example.com/recibo-2.pdf",
        },
        headers=coordinator,
    )

    feed = client.get("/notifications", headers=coordinator).json()

    assert {item["type"] for item in feed} == set(NOTIFICATION_STYLES)
    for item in feed:
        assert (item["icon"], item["color"]) == NOTIFICATION_STYLES[item["type"]]


def test_receipt_requires_existing_payment(client, coordinator, maria, booking):
    response = client.post(
        "/receipts",
        json={
            "bookingId": booking["id"],
            "paymentId": 999,
            "staffMemberId": maria["id"],
            "documentUrl": "https://files.example.com/recibo-1.pdf",
        },
        headers=coordinator,
    )
    assert response.status_code == 404


def test_receipts_are_scoped_by_payment_owner(client, coordinator, other_coordinator, admin, maria, booking, payment):
    client.post(
        "/receipts",
        json={
            "bookingId": booking["id"],
            "paymentId": payment["id"],
            "staffMemberId": maria["id"],
            "documentUrl": "https://files.example.com/recibo-1.pdf",
        },
        headers=coordinator,
    )

    assert len(client.get("/receipts", headers=coordinator).json()) == 1
    assert client.get("/receipts", headers=other_coordinator).json() == []
    assert len(client.get("/receipts", headers=admin).json()) == 1


def test_payment_with_receipt_cannot_be_deleted(client, coordinator, maria, booking, payment):
    client.post(
        "/receipts",
        json={
            "bookingId": booking["id"],
            "paymentId": payment["id"],
            "staffMemberId": maria["id"],
            "documentUrl": "https://files.example.com/recibo-1.pdf",
        },
        headers=coordinator,
    )

    assert client.delete(f"/payments/{payment['id']}", headers=coordinator).status_code == 422
