"""Receipt router"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from ...services.notification_service import NotificationDispatcher, get_dispatcher
from .schemas import ReceiptCreate, ReceiptResponse
from .service import ReceiptService

router = APIRouter(prefix="/receipts", tags=["Receipts"])


def get_receipt_service(
    db: Optional[Session] = Depends(get_db),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> ReceiptService:
    return ReceiptService(db, dispatcher)


@router.get("", response_model=list[ReceiptResponse])
async def get_receipts(
    staff_member_id: Optional[int] = Query(None, alias="staffMemberId"),
    current_user: User = Depends(get_current_user),
    service: ReceiptService = Depends(get_receipt_service),
):
    return service.get_receipts(current_user, staff_member_id)


@router.get("/{receipt_id}", response_model=ReceiptResponse)
async def get_receipt(
    receipt_id: int,
    current_user: User = Depends(get_current_user),
    service: ReceiptService = Depends(get_receipt_service),
):
    return service.get_receipt(receipt_id, current_user)


@router.post("", response_model=Optional[ReceiptResponse])
async def issue_receipt(
    data: ReceiptCreate,
    current_user: User = Depends(get_current_user),
    service: ReceiptService = Depends(get_receipt_service),
):
    return await service.issue_receipt(data, current_user)


@router.post("/{receipt_id}/sign", response_model=ReceiptResponse)
async def sign_receipt(
    receipt_id: int,
    current_user: User = Depends(get_current_user),
    service: ReceiptService = Depends(get_receipt_service),
):
    """Mark a receipt as signed by the staff member"""
    return service.sign_receipt(receipt_id, current_user)
