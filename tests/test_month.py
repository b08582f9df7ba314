"""Tests for the Month value type."""

import pytest
from datetime import date, datetime

from networth.domain.month import Month, iter_months


class TestMonth:
    """Tests for Month."""

    def test_of_date_and_datetime(self):
        assert Month.of(date(2024, 3, 31)) == Month(2024, 3)
        assert Month.of(datetime(2024, 3, 1, 23, 59)) == Month(2024, 3)

    def test_of_strings(self):
        assert Month.of("2024-03") == Month(2024, 3)
        assert Month.of("2024-03-15") == Month(2024, 3)
        assert Month.of("2024-03-31T23:30:00Z") == Month(2024, 3)
        assert Month.of("March 2024") == Month(2024, 3)

    def test_of_month_returns_same(self):
        month = Month(2024, 3)
        assert Month.of(month) is month

    def test_of_invalid_string(self):
        with pytest.raises(ValueError):
            Month.of("garbage")

    def test_invalid_month_number(self):
        with pytest.raises(ValueError):
            Month(2024, 13)

    def test_ordering(self):
        assert Month(2023, 12) < Month(2024, 1) < Month(2024, 2)
        assert max([Month(2024, 1), Month(2023, 12)]) == Month(2024, 1)

    def test_hashable(self):
        assert {Month(2024, 1): "a"}[Month.of("2024-01-20")] == "a"

    def test_shift_across_years(self):
        assert Month(2024, 1).shift(-1) == Month(2023, 12)
        assert Month(2024, 11).shift(3) == Month(2025, 2)
        assert Month(2024, 6).shift(-24) == Month(2022, 6)
        assert Month(2023, 12).next() == Month(2024, 1)

    def test_current(self):
        assert Month.current(date(2024, 6, 15)) == Month(2024, 6)

    def test_rendering(self):
        month = Month(2024, 1)
        assert str(month) == "2024-01-01"
        assert month.label() == "January 2024"
        assert month.first_day() == date(2024, 1, 1)


def test_iter_months_inclusive():
    months = list(iter_months(Month(2023, 11), Month(2024, 2)))
    assert months == [Month(2023, 11), Month(2023, 12), Month(2024, 1), Month(2024, 2)]


def test_iter_months_empty_when_reversed():
    assert list(iter_months(Month(2024, 2), Month(2024, 1))) == []
