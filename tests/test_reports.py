import csv
from io import StringIO

from conftest import booking_payload


def test_summary_counts_visible_records(client, coordinator, other_coordinator, admin, maria, specialty_id):
    client.post("/bookings", json=booking_payload(maria["id"], specialty_id), headers=coordinator)
    client.post("/bookings", json=booking_payload(maria["id"], specialty_id), headers=other_coordinator)
    client.post(
        "/payments",
        json={"staffMemberId": maria["id"], "amount": 45000, "paymentDate": "2024-03-12", "method": "pix", "status": "paid"},
        headers=coordinator,
    )
    client.post(
        "/payments",
        json={"staffMemberId": maria["id"], "amount": 1000, "paymentDate": "2024-03-13", "method": "cash"},
        headers=coordinator,
    )

    summary = client.get("/reports/summary", headers=coordinator).json()
    assert summary["bookingsByStatus"] == {"scheduled": 1, "completed": 0, "canceled": 0}
    assert summary["totalBookings"] == 1
    assert summary["totalPaid"] == 45000
    assert summary["totalPending"] == 1000
    assert summary["paymentsByMethod"]["pix"] == {"total": 45000, "count": 1}
    assert summary["paymentsByMethod"]["card"] == {"total": 0, "count": 0}
    assert summary["activeStaff"] == 1

    assert client.get("/reports/summary", headers=admin).json()["totalBookings"] == 2


def test_payment_csv_export(client, coordinator, maria):
    client.post(
        "/payments",
        json={"staffMemberId": maria["id"], "amount": 123456, "paymentDate": "2024-03-12", "method": "bank_transfer", "status": "paid"},
        headers=coordinator,
    )

    response = client.get("/reports/payments/export", headers=coordinator)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    rows = list(csv.reader(StringIO(response.text)))
    assert rows[0][:4] == ["ID", "Diarista", "Agendamento", "Valor"]
    assert rows[1][1:] == ["Maria", "", "R$ 1.234,56", "12/03/2024", "Transferência", "paid", ""]
