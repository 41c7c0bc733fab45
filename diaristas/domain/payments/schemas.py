"""Payment domain schemas - Pydantic models for validation"""

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import Field

from ...shared.schemas import CamelModel

PaymentMethod = Literal["cash", "pix", "bank_transfer", "card"]
PaymentStatus = Literal["pending", "paid", "canceled"]


class PaymentCreate(CamelModel):
    """Schema for registering a payment; amount is in cents"""

    staff_member_id: int
    booking_id: Optional[int] = None
    amount: int = Field(ge=0)
    payment_date: date
    method: PaymentMethod
    status: Optional[PaymentStatus] = None  # Stored as "pending" when omitted
    description: Optional[str] = None
    proof_reference: Optional[str] = None


class PaymentUpdate(CamelModel):
    amount: Optional[int] = Field(default=None, ge=0)
    payment_date: Optional[date] = None
    method: Optional[PaymentMethod] = None
    status: Optional[PaymentStatus] = None
    description: Optional[str] = None
    proof_reference: Optional[str] = None


class PaymentResponse(CamelModel):
    id: int
    user_id: int
    staff_member_id: int
    booking_id: Optional[int] = None
    amount: int
    payment_date: date
    method: PaymentMethod
    status: PaymentStatus
    description: Optional[str] = None
    proof_reference: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AmountExtractionRequest(CamelModel):
    """OCR text of a proof of payment"""

    text: str


class AmountExtractionResponse(CamelModel):
    amount_cents: Optional[int] = None
    formatted: Optional[str] = None
