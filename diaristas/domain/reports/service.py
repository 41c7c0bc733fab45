"""Report service - Summary statistics and CSV export"""

import csv
import logging
from datetime import datetime
from io import StringIO
from typing import Optional

from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from ...access import can_list_all
from ...models import BOOKING_STATUSES, PAYMENT_METHODS, PAYMENT_STATUSES, User
from ...services.notification_service import PAYMENT_METHOD_LABELS, format_date
from ...shared.currency import format_brl
from .repository import ReportRepository

logger = logging.getLogger(__name__)


class ReportService:
    def __init__(self, db: Optional[Session]):
        self.db = db
        self.repo = ReportRepository()

    def get_summary(self, user: User) -> dict:
        """Bookings per status and payment totals, over the records the user may see"""
        owner = None if can_list_all(user.role) else user.id

        bookings = dict.fromkeys(BOOKING_STATUSES, 0)
        for status, count in self.repo.count_bookings_by_status(self.db, owner):
            bookings[status] = count

        payments = dict.fromkeys(PAYMENT_STATUSES, 0)
        for status, total in self.repo.sum_payments_by_status(self.db, owner):
            payments[status] = int(total)

        by_method = {method: {"total": 0, "count": 0} for method in PAYMENT_METHODS}
        for method, total, count in self.repo.sum_payments_by_method(self.db, owner):
            by_method[method] = {"total": int(total), "count": count}

        return {
            "bookings_by_status": bookings,
            "total_bookings": sum(bookings.values()),
            "payments_by_status": payments,
            "payments_by_method": by_method,
            "total_paid": payments["paid"],
            "total_pending": payments["pending"],
            "active_staff": self.repo.count_active_staff(self.db),
        }

    def export_payments_csv(self, user: User) -> StreamingResponse:
        """Export payments as CSV"""
        logger.info(f"📊 Payment CSV export requested by user {user.id}")
        owner = None if can_list_all(user.role) else user.id
        rows = self.repo.get_payments_with_staff(self.db, owner)

        output = StringIO()
        writer = csv.writer(output)
        writer.writerow(["ID", "Diarista", "Agendamento", "Valor", "Data", "Método", "Status", "Descrição"])
        for payment, staff_name in rows:
            writer.writerow(
                [
                    payment.id,
                    staff_name or f"#{payment.staff_member_id}",
                    payment.booking_id or "",
                    format_brl(payment.amount),
                    format_date(payment.payment_date),
                    PAYMENT_METHOD_LABELS.get(payment.method, payment.method),
                    payment.status,
                    payment.description or "",
                ]
            )

        filename = f"pagamentos_{datetime.now().strftime('%Y%m%d_%H%M%S')}.csv"
        logger.info(f"✅ CSV export successful: {filename} ({len(rows)} payments)")

        return StreamingResponse(
            iter([output.getvalue()]),
            media_type="text/csv",
            headers={
                "Content-Disposition": f"attachment; filename={filename}",
                "Cache-Control": "no-cache",
            },
        )
