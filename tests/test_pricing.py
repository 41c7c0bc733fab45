from datetime import date, datetime

import pytest

from diaristas.domain.pricing import compute_total, days_between_inclusive
from diaristas.exceptions import ValidationError


def test_same_day_counts_as_one_day():
    assert days_between_inclusive(date(2024, 3, 10), date(2024, 3, 10)) == 1


def test_three_day_booking_total():
    assert days_between_inclusive(date(2024, 3, 10), date(2024, 3, 12)) == 3
    assert compute_total(15000, date(2024, 3, 10), date(2024, 3, 12)) == 45000


def test_partial_day_rounds_up():
    start = datetime(2024, 3, 10, 8, 0)
    end = datetime(2024, 3, 11, 9, 0)
    assert days_between_inclusive(start, end) == 3


def test_range_across_month_end():
    assert days_between_inclusive(date(2024, 2, 28), date(2024, 3, 1)) == 3


def test_zero_rate_gives_zero_total():
    assert compute_total(0, date(2024, 3, 10), date(2024, 3, 12)) == 0


def test_inverted_range_is_rejected():
    with pytest.raises(ValidationError):
        compute_total(15000, date(2024, 3, 12), date(2024, 3, 10))


def test_negative_rate_is_rejected():
    with pytest.raises(ValidationError):
        compute_total(-1, date(2024, 3, 10), date(2024, 3, 10))
