import asyncio
from datetime import date

from conftest import COORDINATOR_PHONE, RecordingGateway

from diaristas.models import WhatsAppNotification
from diaristas.services.notification_service import (
    NotificationDispatcher,
    WorkflowEvent,
    render_booking_coordinator_message,
    render_payment_staff_message,
    run_post_commit_hooks,
)


def test_booking_message_formats_dates_and_currency():
    message = render_booking_coordinator_message(
        "Maria", "Limpeza Residencial", "Rua das Flores, 100", date(2024, 3, 10), date(2024, 3, 12), 45000
    )
    assert "*Diarista:* Maria" in message
    assert "10/03/2024 até 12/03/2024" in message
    assert "R$ 450,00" in message


def test_payment_message_uses_method_label():
    message = render_payment_staff_message(15000, "bank_transfer", date(2024, 3, 15))
    assert "R$ 150,00" in message
    assert "Transferência" in message


def test_coordinator_notice_is_copied_to_cc_list():
    gateway = RecordingGateway()
    dispatcher = NotificationDispatcher(gateway, COORDINATOR_PHONE, ["(67) 98888-7777"])

    sent = asyncio.run(
        dispatcher.notify_coordinator_new_booking(
            "Maria", "Limpeza", "Rua A", date(2024, 3, 10), date(2024, 3, 12), 45000
        )
    )

    assert sent is True
    assert [call["to"] for call in gateway.calls] == [COORDINATOR_PHONE, "5567988887777"]
    assert gateway.calls[0]["priority"] == "high"
    assert gateway.calls[1]["body"].startswith("📁 *[CÓPIA]*")


def test_missing_coordinator_still_sends_copies():
    gateway = RecordingGateway()
    dispatcher = NotificationDispatcher(gateway, None, ["5567988887777"])

    sent = asyncio.run(
        dispatcher.notify_coordinator_new_booking(
            "Maria", "Limpeza", "Rua A", date(2024, 3, 10), date(2024, 3, 10), 15000
        )
    )

    assert sent is False
    assert [call["to"] for call in gateway.calls] == ["5567988887777"]


def test_invalid_phone_is_never_sent():
    gateway = RecordingGateway()
    dispatcher = NotificationDispatcher(gateway, COORDINATOR_PHONE)

    assert asyncio.run(dispatcher.send("123", "Olá")) is False
    assert gateway.calls == []


def test_payment_notices_are_independent():
    gateway = RecordingGateway(fail=True)
    dispatcher = NotificationDispatcher(gateway, COORDINATOR_PHONE)

    sent = asyncio.run(
        dispatcher.notify_payment_made("Maria", "5511999999999", 15000, "pix", date(2024, 3, 15))
    )

    assert sent is False
    assert len(gateway.calls) == 2
    assert [call["priority"] for call in gateway.calls] == ["normal", "high"]


def test_attempts_are_recorded(session):
    gateway = RecordingGateway()
    dispatcher = NotificationDispatcher(gateway, COORDINATOR_PHONE)

    asyncio.run(dispatcher.send("5511999999999", "Olá", db=session, kind="notice", staff_member_id=7))
    gateway.fail = True
    asyncio.run(dispatcher.send("5511999999999", "Olá de novo", db=session, kind="notice"))

    rows = session.query(WhatsAppNotification).order_by(WhatsAppNotification.id).all()
    assert [row.status for row in rows] == ["sent", "failed"]
    assert rows[0].staff_member_id == 7
    assert rows[0].sent_at is not None
    assert rows[1].sent_at is None


def test_failing_hook_does_not_stop_the_others():
    calls = []

    async def broken(event):
        raise RuntimeError("boom")

    async def working(event):
        calls.append(event)
        return True

    event = WorkflowEvent(db=None, dispatcher=NotificationDispatcher(RecordingGateway()), actor=None)
    results = asyncio.run(run_post_commit_hooks([broken, working], event))

    assert [result.name for result in results] == ["broken", "working"]
    assert results[0].delivered is False
    assert results[0].error == "boom"
    assert results[1].delivered is True
    assert calls == [event]
