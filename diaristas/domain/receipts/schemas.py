"""Receipt domain schemas"""

from datetime import datetime
from typing import Optional

from pydantic import field_validator

from ...shared.schemas import CamelModel


class ReceiptCreate(CamelModel):
    booking_id: int
    payment_id: int
    staff_member_id: int
    document_url: str

    @field_validator("document_url")
    @classmethod
    def validate_document_url(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Document URL is required")
        return v.strip()


class ReceiptResponse(CamelModel):
    id: int
    booking_id: int
    payment_id: int
    staff_member_id: int
    document_url: str
    signed: bool
    signed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
