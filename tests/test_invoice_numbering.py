"""Tests for INV-<FY>-<NNNN> formatting, parsing and sequence derivation."""

from datetime import date, datetime

import pytest

from trubalance.config.settings import settings
from trubalance.domain.errors import InvalidInputError, MalformedInvoiceNumberError
from trubalance.domain.models.invoice import IssuedInvoice
from trubalance.domain.services.invoice_numbering import (
    MalformedPolicy,
    current_max_sequence,
    format_invoice_number,
    is_valid_invoice_number,
    next_invoice_number,
    parse_invoice_number,
)

USER = "user-1"


def _inv(number, day, user_id=USER):
    return {"invoice_number": number, "invoice_date": day, "user_id": user_id}


class TestFormatAndParse:
    def test_format_pads_to_four_digits(self):
        assert format_invoice_number(2025, 1) == "INV-2025-0001"
        assert format_invoice_number(2025, 42) == "INV-2025-0042"

    def test_sequence_beyond_four_digits(self):
        assert format_invoice_number(2025, 12345) == "INV-2025-12345"
        assert parse_invoice_number("INV-2025-12345") == (2025, 12345)

    def test_sequence_must_be_positive(self):
        with pytest.raises(InvalidInputError):
            format_invoice_number(2025, 0)

    def test_parse(self):
        assert parse_invoice_number(" INV-2024-0007 ") == (2024, 7)

    @pytest.mark.parametrize("number", [None, "", "INV-2024-7", "inv-2024-0007", "INV-24-0007", "BILL-2024-0007"])
    def test_parse_rejects_malformed(self, number):
        with pytest.raises(MalformedInvoiceNumberError):
            parse_invoice_number(number)
        assert not is_valid_invoice_number(number)


class TestNextInvoiceNumber:
    def test_first_invoice_of_year(self):
        assert next_invoice_number(USER, [], today=date(2025, 6, 1)) == "INV-2025-0001"

    def test_increments_highest_sequence(self):
        existing = [
            _inv("INV-2025-0003", date(2025, 5, 1)),
            _inv("INV-2025-0007", date(2025, 7, 1)),
            _inv("INV-2025-0005", date(2025, 6, 1)),
        ]
        assert next_invoice_number(USER, existing, today=date(2025, 8, 1)) == "INV-2025-0008"

    def test_march_invoice_counts_towards_previous_year(self):
        existing = [_inv("INV-2024-0003", date(2025, 3, 15))]
        assert next_invoice_number(USER, existing, today=date(2025, 3, 20)) == "INV-2024-0004"

    def test_numbering_restarts_on_april_first(self):
        existing = [_inv("INV-2024-0050", datetime(2025, 3, 31, 18, 0))]
        assert next_invoice_number(USER, existing, today=date(2025, 4, 1)) == "INV-2025-0001"

    def test_other_users_invoices_ignored(self):
        existing = [
            _inv("INV-2025-0009", date(2025, 5, 1), user_id="someone-else"),
            _inv("INV-2025-0002", date(2025, 5, 2)),
        ]
        assert next_invoice_number(USER, existing, today=date(2025, 5, 3)) == "INV-2025-0003"

    def test_accepts_dataclass_records(self):
        existing = [IssuedInvoice("INV-2025-0011", date(2025, 9, 9))]
        assert next_invoice_number(USER, existing, today=date(2025, 10, 1)) == "INV-2025-0012"

    def test_iso_string_dates(self):
        existing = [
            {"invoice_number": "INV-2025-0007", "invoice_date": "2025-05-01"},
            {"invoice_number": "INV-2024-0099", "invoice_date": "2025-03-31T18:00:00"},
        ]
        assert next_invoice_number("u", existing, today=date(2025, 8, 1)) == "INV-2025-0008"

    def test_unparsable_date_is_invalid_input(self):
        existing = [_inv("INV-2025-0007", "1st May")]
        with pytest.raises(InvalidInputError):
            next_invoice_number(USER, existing, today=date(2025, 8, 1))

    def test_idempotent(self):
        existing = [_inv("INV-2025-0001", date(2025, 4, 2))]
        first = next_invoice_number(USER, existing, today=date(2025, 4, 3))
        assert next_invoice_number(USER, existing, today=date(2025, 4, 3)) == first


class TestMalformedPolicy:
    EXISTING = [
        _inv("INV-2025-0004", date(2025, 5, 1)),
        _inv("garbage", date(2025, 6, 1)),
    ]

    def test_error_by_default(self):
        with pytest.raises(MalformedInvoiceNumberError):
            next_invoice_number(USER, self.EXISTING, today=date(2025, 7, 1))

    def test_skip_keeps_scanning(self):
        result = next_invoice_number(USER, self.EXISTING, today=date(2025, 7, 1), malformed=MalformedPolicy.SKIP)
        assert result == "INV-2025-0005"

    def test_policy_from_settings(self, monkeypatch):
        monkeypatch.setattr(settings, "MALFORMED_INVOICE_POLICY", "skip")
        assert next_invoice_number(USER, self.EXISTING, today=date(2025, 7, 1)) == "INV-2025-0005"

    def test_malformed_outside_year_not_inspected(self):
        existing = [_inv("garbage", date(2024, 6, 1))]
        assert next_invoice_number(USER, existing, today=date(2025, 7, 1)) == "INV-2025-0001"

    def test_unknown_policy(self):
        with pytest.raises(InvalidInputError):
            current_max_sequence(USER, [], 2025, malformed="ignore")
