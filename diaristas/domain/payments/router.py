"""Payment router - FastAPI endpoints for payment operations"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from ...services.notification_service import NotificationDispatcher, get_dispatcher
from ...shared.schemas import MessageResponse
from .schemas import (
    AmountExtractionRequest,
    AmountExtractionResponse,
    PaymentCreate,
    PaymentResponse,
    PaymentUpdate,
)
from .service import PaymentService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/payments", tags=["Payments"])


def get_payment_service(
    db: Optional[Session] = Depends(get_db),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> PaymentService:
    """Dependency injection for PaymentService"""
    return PaymentService(db, dispatcher)


@router.get("", response_model=list[PaymentResponse])
async def get_payments(
    current_user: User = Depends(get_current_user),
    service: PaymentService = Depends(get_payment_service),
):
    """Get payments (every payment for admins, own payments otherwise)"""
    return service.get_payments(current_user)


@router.get("/staff/{staff_member_id}", response_model=list[PaymentResponse])
async def get_staff_payments(
    staff_member_id: int,
    current_user: User = Depends(get_current_user),
    service: PaymentService = Depends(get_payment_service),
):
    return service.get_payments_for_staff(staff_member_id, current_user)


@router.post("/extract-amount", response_model=AmountExtractionResponse)
async def extract_amount(
    data: AmountExtractionRequest,
    current_user: User = Depends(get_current_user),
):
    """Find the paid amount in the OCR text of a proof of payment"""
    return PaymentService.extract_amount(data.text)


@router.get("/{payment_id}", response_model=PaymentResponse)
async def get_payment(
    payment_id: int,
    current_user: User = Depends(get_current_user),
    service: PaymentService = Depends(get_payment_service),
):
    return service.get_payment(payment_id, current_user)


@router.post("", response_model=Optional[PaymentResponse])
async def create_payment(
    data: PaymentCreate,
    current_user: User = Depends(get_current_user),
    service: PaymentService = Depends(get_payment_service),
):
    """Register a payment; paid payments are announced on WhatsApp"""
    return await service.create_payment(data, current_user)


@router.patch("/{payment_id}", response_model=PaymentResponse)
async def update_payment(
    payment_id: int,
    data: PaymentUpdate,
    current_user: User = Depends(get_current_user),
    service: PaymentService = Depends(get_payment_service),
):
    return service.update_payment(payment_id, data, current_user)


@router.delete("/{payment_id}", response_model=MessageResponse)
async def delete_payment(
    payment_id: int,
    current_user: User = Depends(get_current_user),
    service: PaymentService = Depends(get_payment_service),
):
    return service.delete_payment(payment_id, current_user)
