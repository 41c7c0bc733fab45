from ...shared.schemas import CamelModel


class MethodTotals(CamelModel):
    total: int
    count: int


class SummaryResponse(CamelModel):
    """Counts and amounts (in cents) over the caller's visible records"""

    bookings_by_status: dict[str, int]
    total_bookings: int
    payments_by_status: dict[str, int]
    payments_by_method: dict[str, MethodTotals]
    total_paid: int
    total_pending: int
    active_staff: int
