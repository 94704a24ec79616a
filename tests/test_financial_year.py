"""Tests for Indian financial year helpers."""

from datetime import date, datetime, timedelta, timezone

import pytest

from trubalance.domain.errors import InvalidInputError
from trubalance.domain.services.financial_year import (
    as_date,
    financial_year_bounds,
    financial_year_for,
    fy_label,
    in_financial_year,
    parse_day,
)


class TestFinancialYearFor:
    def test_march_belongs_to_previous_year(self):
        assert financial_year_for(date(2025, 3, 15)) == 2024

    def test_april_first_starts_new_year(self):
        assert financial_year_for(date(2025, 4, 1)) == 2025

    def test_last_instant_of_march(self):
        assert financial_year_for(datetime(2025, 3, 31, 23, 59, 59)) == 2024

    def test_december(self):
        assert financial_year_for(date(2025, 12, 31)) == 2025

    def test_defaults_to_today(self):
        assert financial_year_for() == financial_year_for(date.today())


class TestBounds:
    def test_bounds_are_inclusive_april_to_march(self):
        start, end = financial_year_bounds(2024)
        assert start == datetime(2024, 4, 1)
        assert end == datetime(2025, 3, 31, 23, 59, 59, 999999)

    def test_in_financial_year_edges(self):
        assert in_financial_year(date(2024, 4, 1), 2024)
        assert in_financial_year(date(2025, 3, 31), 2024)
        assert not in_financial_year(date(2025, 4, 1), 2024)
        assert not in_financial_year(date(2024, 3, 31), 2024)

    def test_aware_datetime_compared_as_wall_clock(self):
        ist = timezone(timedelta(hours=5, minutes=30))
        assert in_financial_year(datetime(2025, 3, 31, 23, 30, tzinfo=ist), 2024)

    def test_missing_date(self):
        assert not in_financial_year(None, 2024)
        assert not in_financial_year("", 2024)

    def test_iso_strings(self):
        assert in_financial_year("2025-05-01", 2025)
        assert in_financial_year("2025-03-31T23:59:59", 2024)
        assert not in_financial_year("2025-04-01T00:00:00", 2024)

    def test_unparsable_string(self):
        with pytest.raises(InvalidInputError):
            in_financial_year("31/03/2025", 2024)


class TestDateCoercion:
    def test_as_date(self):
        assert as_date("2025-09-02T10:00:00") == date(2025, 9, 2)
        assert as_date(datetime(2025, 9, 2, 10)) == date(2025, 9, 2)
        assert as_date(date(2025, 9, 2)) == date(2025, 9, 2)
        assert as_date(None) is None

    def test_parse_day_keeps_time(self):
        assert parse_day("2025-09-02T10:30:00") == datetime(2025, 9, 2, 10, 30)


class TestLabel:
    def test_label(self):
        assert fy_label(2025) == "2025-26"

    def test_century_rollover(self):
        assert fy_label(2099) == "2099-00"
