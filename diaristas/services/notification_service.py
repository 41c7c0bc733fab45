"""
WhatsApp Notification Service
Renders workflow messages, dispatches them to the coordinator, the stakeholder
copy list and staff members, and runs the post-commit hook lists of the
booking, payment and rating workflows.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Awaitable, Callable, Optional, Sequence

from fastapi import Request
from sqlalchemy.orm import Session

from ..models import (
    Booking,
    Payment,
    Rating,
    Receipt,
    Specialty,
    StaffMember,
    User,
    WhatsAppNotification,
)
from ..shared.currency import format_brl
from ..shared.validators import normalize_br_phone
from .whatsapp_service import WhatsAppGateway

logger = logging.getLogger(__name__)

PAYMENT_METHOD_LABELS = {
    "cash": "Dinheiro",
    "pix": "PIX",
    "bank_transfer": "Transferência",
    "card": "Cartão",
}


def format_date(value: date) -> str:
    return value.strftime("%d/%m/%Y")


# ============================================================================
# MESSAGE TEMPLATES
# ============================================================================


def render_booking_coordinator_message(
    staff_name: str, specialty: str, address: str, start: date, end: date, amount: int
) -> str:
    return (
        "🗓️ *NOVO AGENDAMENTO CONFIRMADO*\n"
        "\n"
        f"👩 *Diarista:* {staff_name}\n"
        f"💼 *Especialidade:* {specialty}\n"
        f"📍 *Operação:* {address}\n"
        f"📅 *Período:* {format_date(start)} até {format_date(end)}\n"
        f"💵 *Valor a Receber:* {format_brl(amount)}\n"
        "\n"
        "Agendamento registrado no sistema."
    )


def render_booking_staff_message(
    specialty: str,
    address: str,
    start: date,
    end: date,
    amount: int,
    description: Optional[str] = None,
) -> str:
    lines = [
        "✅ *NOVO AGENDAMENTO CONFIRMADO*",
        "",
        f"💼 *Especialidade:* {specialty}",
        f"📍 *Operação:* {address}",
        f"📅 *Período:* {format_date(start)} até {format_date(end)}",
    ]
    if description:
        lines.append(f"📄 *Descrição:* {description}")
    lines += [
        f"💵 *Valor a Receber:* {format_brl(amount)}",
        "",
        "Confirme seu comparecimento respondendo a esta mensagem. 🙏",
    ]
    return "\n".join(lines)


def render_payment_coordinator_message(
    staff_name: str, amount: int, method: str, paid_on: date
) -> str:
    return (
        "💰 *PAGAMENTO REALIZADO*\n"
        "\n"
        f"*Diarista:* {staff_name}\n"
        f"*Valor:* {format_brl(amount)}\n"
        f"*Método:* {PAYMENT_METHOD_LABELS.get(method, method)}\n"
        f"*Data:* {format_date(paid_on)}\n"
        "\n"
        "✨ Que haja prosperidade e abundância para todos! ✨"
    )


def render_payment_staff_message(amount: int, method: str, paid_on: date) -> str:
    return (
        "✅ *PAGAMENTO CONFIRMADO*\n"
        "\n"
        f"Seu pagamento de {format_brl(amount)} foi realizado com sucesso!\n"
        f"*Método:* {PAYMENT_METHOD_LABELS.get(method, method)}\n"
        f"*Data:* {format_date(paid_on)}\n"
        "\n"
        "✨ Que haja prosperidade e abundância em sua vida! ✨\n"
        "Obrigado pelo seu trabalho! 🙏"
    )


def render_rating_staff_message(score: int, comment: Optional[str] = None) -> str:
    lines = [
        f"{'⭐' * score} *NOVA AVALIAÇÃO RECEBIDA*",
        "",
        f"Você recebeu uma avaliação de {score} estrelas!",
    ]
    if comment:
        lines.append(f"*Comentário:* {comment}")
    lines += ["", "Continue com o excelente trabalho!"]
    return "\n".join(lines)


# ============================================================================
# DISPATCHER
# ============================================================================


class NotificationDispatcher:
    """Sends workflow messages and records each delivery attempt"""

    def __init__(
        self,
        gateway: WhatsAppGateway,
        coordinator_phone: Optional[str] = None,
        cc_phones: Sequence[str] = (),
    ):
        self.gateway = gateway
        self.coordinator_phone = coordinator_phone
        self.cc_phones = list(cc_phones)

    async def send(
        self,
        to: Optional[str],
        body: str,
        priority: str = "normal",
        *,
        db: Optional[Session] = None,
        kind: str = "notice",
        booking_id: Optional[int] = None,
        payment_id: Optional[int] = None,
        staff_member_id: Optional[int] = None,
    ) -> bool:
        """Send one message; never raises, the outcome is logged and returned"""
        try:
            channel = normalize_br_phone(to)
        except ValueError:
            logger.warning(f"⚠️ Invalid phone number for {kind} notification: {to}")
            return False

        if not channel:
            logger.debug(f"⚠️ No phone number for {kind} notification")
            return False

        try:
            delivered = await self.gateway.send(channel, body, priority)
        except Exception as e:
            logger.error(f"❌ Failed to send {kind} notification to {channel}: {e}")
            delivered = False

        if delivered:
            logger.info(f"✅ {kind} notification sent to {channel}")
        else:
            logger.warning(f"⚠️ {kind} notification not delivered to {channel}")

        self._record(db, channel, body, kind, delivered, booking_id, payment_id, staff_member_id)
        return delivered

    def _record(
        self,
        db: Optional[Session],
        phone: str,
        body: str,
        kind: str,
        delivered: bool,
        booking_id: Optional[int],
        payment_id: Optional[int],
        staff_member_id: Optional[int],
    ) -> None:
        if db is None:
            return
        try:
            db.add(
                WhatsAppNotification(
                    booking_id=booking_id,
                    payment_id=payment_id,
                    staff_member_id=staff_member_id,
                    phone=phone,
                    type=kind,
                    message=body,
                    status="sent" if delivered else "failed",
                    sent_at=datetime.now() if delivered else None,
                )
            )
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(f"❌ Failed to record {kind} notification to {phone}: {e}")

    async def notify_coordinator_new_booking(
        self,
        staff_name: str,
        specialty: str,
        address: str,
        start: date,
        end: date,
        amount: int,
        *,
        db: Optional[Session] = None,
        booking_id: Optional[int] = None,
    ) -> bool:
        """Notify the coordinator (high priority) and send copies to the CC list"""
        message = render_booking_coordinator_message(staff_name, specialty, address, start, end, amount)

        if self.coordinator_phone:
            sent = await self.send(
                self.coordinator_phone, message, "high", db=db, kind="booking", booking_id=booking_id
            )
        else:
            logger.warning("⚠️ Coordinator phone not configured, booking notice skipped")
            sent = False

        for phone in self.cc_phones:
            await self.send(
                phone, f"📁 *[CÓPIA]* {message}", db=db, kind="booking", booking_id=booking_id
            )

        return sent

    async def notify_staff_new_booking(
        self,
        staff_phone: str,
        specialty: str,
        address: str,
        start: date,
        end: date,
        amount: int,
        description: Optional[str] = None,
        *,
        db: Optional[Session] = None,
        booking_id: Optional[int] = None,
        staff_member_id: Optional[int] = None,
    ) -> bool:
        """Ask the staff member to confirm the new booking"""
        message = render_booking_staff_message(specialty, address, start, end, amount, description)
        return await self.send(
            staff_phone,
            message,
            "high",
            db=db,
            kind="booking",
            booking_id=booking_id,
            staff_member_id=staff_member_id,
        )

    async def notify_payment_made(
        self,
        staff_name: str,
        staff_phone: str,
        amount: int,
        method: str,
        paid_on: date,
        *,
        db: Optional[Session] = None,
        payment_id: Optional[int] = None,
        staff_member_id: Optional[int] = None,
    ) -> bool:
        """
        Notify coordinator and staff member about a payment.

        Both sends are attempted independently; the result is True only when both
        were delivered and is meant for logging.
        """
        if self.coordinator_phone:
            coordinator_notified = await self.send(
                self.coordinator_phone,
                render_payment_coordinator_message(staff_name, amount, method, paid_on),
                db=db,
                kind="payment",
                payment_id=payment_id,
            )
        else:
            logger.warning("⚠️ Coordinator phone not configured, payment notice skipped")
            coordinator_notified = False

        staff_notified = await self.send(
            staff_phone,
            render_payment_staff_message(amount, method, paid_on),
            "high",
            db=db,
            kind="payment",
            payment_id=payment_id,
            staff_member_id=staff_member_id,
        )

        return coordinator_notified and staff_notified

    async def notify_staff_rating(
        self,
        staff_phone: str,
        score: int,
        comment: Optional[str] = None,
        *,
        db: Optional[Session] = None,
        booking_id: Optional[int] = None,
        staff_member_id: Optional[int] = None,
    ) -> bool:
        return await self.send(
            staff_phone,
            render_rating_staff_message(score, comment),
            db=db,
            kind="rating",
            booking_id=booking_id,
            staff_member_id=staff_member_id,
        )


# ============================================================================
# POST-COMMIT HOOKS
# ============================================================================


@dataclass
class WorkflowEvent:
    """Everything a post-commit hook may need about a committed write"""

    db: Optional[Session]
    dispatcher: NotificationDispatcher
    actor: User
    staff_member: Optional[StaffMember] = None
    specialty: Optional[Specialty] = None
    booking: Optional[Booking] = None
    payment: Optional[Payment] = None
    rating: Optional[Rating] = None
    receipt: Optional[Receipt] = None


@dataclass
class HookResult:
    name: str
    delivered: bool
    error: Optional[str] = field(default=None)


PostCommitHook = Callable[[WorkflowEvent], Awaitable[bool]]


async def run_post_commit_hooks(
    hooks: Sequence[PostCommitHook], event: WorkflowEvent
) -> list[HookResult]:
    """
    Run hooks in order after the write has been committed.

    Every hook is attempted; a failing hook is logged and recorded in its result
    and never interrupts the others or the caller.
    """
    results = []
    for hook in hooks:
        name = getattr(hook, "__name__", repr(hook))
        try:
            delivered = bool(await hook(event))
            results.append(HookResult(name=name, delivered=delivered))
            logger.info(f"🔔 Hook {name}: {'delivered' if delivered else 'not delivered'}")
        except Exception as e:
            logger.error(f"❌ Hook {name} failed: {e}")
            results.append(HookResult(name=name, delivered=False, error=str(e)))
    return results


async def dispatch_booking_to_coordinator(event: WorkflowEvent) -> bool:
    booking = event.booking
    return await event.dispatcher.notify_coordinator_new_booking(
        staff_name=event.staff_member.name,
        specialty=event.specialty.name if event.specialty else "",
        address=booking.service_address,
        start=booking.start_date,
        end=booking.end_date,
        amount=booking.total_price or 0,
        db=event.db,
        booking_id=booking.id,
    )


async def dispatch_booking_to_staff(event: WorkflowEvent) -> bool:
    booking = event.booking
    return await event.dispatcher.notify_staff_new_booking(
        staff_phone=event.staff_member.phone,
        specialty=event.specialty.name if event.specialty else "",
        address=booking.service_address,
        start=booking.start_date,
        end=booking.end_date,
        amount=booking.total_price or 0,
        description=booking.description,
        db=event.db,
        booking_id=booking.id,
        staff_member_id=event.staff_member.id,
    )


async def dispatch_payment_notices(event: WorkflowEvent) -> bool:
    payment = event.payment
    return await event.dispatcher.notify_payment_made(
        staff_name=event.staff_member.name,
        staff_phone=event.staff_member.phone,
        amount=payment.amount,
        method=payment.method,
        paid_on=payment.payment_date,
        db=event.db,
        payment_id=payment.id,
        staff_member_id=event.staff_member.id,
    )


async def dispatch_rating_to_staff(event: WorkflowEvent) -> bool:
    rating = event.rating
    return await event.dispatcher.notify_staff_rating(
        staff_phone=event.staff_member.phone,
        score=rating.score,
        comment=rating.comment,
        db=event.db,
        booking_id=rating.booking_id,
        staff_member_id=event.staff_member.id,
    )


def get_dispatcher(request: Request) -> NotificationDispatcher:
    """Dependency returning the dispatcher built by the app factory"""
    return request.app.state.dispatcher
