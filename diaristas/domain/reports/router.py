"""Report router"""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from .schemas import SummaryResponse
from .service import ReportService

router = APIRouter(prefix="/reports", tags=["Reports"])


def get_report_service(db: Optional[Session] = Depends(get_db)) -> ReportService:
    return ReportService(db)


@router.get("/summary", response_model=SummaryResponse)
async def get_summary(
    current_user: User = Depends(get_current_user),
    service: ReportService = Depends(get_report_service),
):
    return service.get_summary(current_user)


@router.get("/payments/export")
async def export_payments_csv(
    current_user: User = Depends(get_current_user),
    service: ReportService = Depends(get_report_service),
):
    """Download payments as a CSV file"""
    return service.export_payments_csv(current_user)
