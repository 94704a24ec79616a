# trubalance/domain/services/invoice_numbering.py
"""
Invoice numbers: ``INV-<FY>-<NNNN>``.

FY is the 4-digit start year of the Indian financial year the invoice is
issued in; NNNN is a per-(user, FY) sequence, zero-padded to four digits.
Numbering restarts at 0001 every April 1.

``next_invoice_number`` derives the next number from the invoices a user
already has. It is deterministic but not safe against two concurrent
creators; the API allocates through the atomic counter in
``invoice_number_service`` instead and uses this module for parsing,
formatting and seeding.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from datetime import date, datetime
from enum import Enum
from typing import Any

from trubalance.config.settings import settings
from trubalance.domain.errors import InvalidInputError, MalformedInvoiceNumberError
from trubalance.domain.services.financial_year import financial_year_for, in_financial_year
from trubalance.domain.services.money import field_of

logger = logging.getLogger("invoice_numbering")

INVOICE_PREFIX = "INV"
SEQUENCE_WIDTH = 4
INVOICE_NUMBER_REGEX = re.compile(r"^INV-(\d{4})-(\d{4,})$")


class MalformedPolicy(str, Enum):
    """What to do with an existing invoice number that cannot be parsed."""
    ERROR = "error"
    SKIP = "skip"


def _resolve_policy(policy: MalformedPolicy | str | None) -> MalformedPolicy:
    value = policy if policy is not None else settings.MALFORMED_INVOICE_POLICY
    try:
        return MalformedPolicy(value)
    except ValueError:
        raise InvalidInputError(f"Unknown malformed-invoice policy: {value!r}")


# ---------------------------------------------------------------------------
# Format / parse
# ---------------------------------------------------------------------------

def format_invoice_number(fy: int, sequence: int) -> str:
    if sequence < 1:
        raise InvalidInputError(f"Invoice sequence must start at 1, got {sequence}")
    return f"{INVOICE_PREFIX}-{fy:04d}-{sequence:0{SEQUENCE_WIDTH}d}"


def is_valid_invoice_number(invoice_number: str | None) -> bool:
    if not invoice_number:
        return False
    return bool(INVOICE_NUMBER_REGEX.match(invoice_number.strip()))


def parse_invoice_number(invoice_number: str | None) -> tuple[int, int]:
    """``"INV-2025-0012"`` → ``(2025, 12)``."""
    m = INVOICE_NUMBER_REGEX.match((invoice_number or "").strip())
    if not m:
        raise MalformedInvoiceNumberError(
            f"Invoice number {invoice_number!r} does not match INV-YYYY-NNNN"
        )
    return int(m.group(1)), int(m.group(2))


# ---------------------------------------------------------------------------
# Sequence derivation
# ---------------------------------------------------------------------------

def current_max_sequence(
    user_id: Any,
    invoices: Iterable[Any],
    fy: int,
    malformed: MalformedPolicy | str | None = None,
) -> int:
    """
    Highest sequence among ``user_id``'s invoices dated inside FY ``fy``.

    Invoices may be mappings or objects exposing ``invoice_number`` and
    ``invoice_date`` (and optionally ``user_id``; rows of another user are
    ignored). Returns 0 when there is none.
    """
    policy = _resolve_policy(malformed)
    highest = 0

    for inv in invoices:
        owner = field_of(inv, "user_id")
        if owner is not None and str(owner) != str(user_id):
            continue
        if not in_financial_year(field_of(inv, "invoice_date"), fy):
            continue

        number = field_of(inv, "invoice_number")
        try:
            _, sequence = parse_invoice_number(number)
        except MalformedInvoiceNumberError:
            if policy is MalformedPolicy.SKIP:
                logger.warning("Skipping malformed invoice number %r for user %s", number, user_id)
                continue
            raise

        highest = max(highest, sequence)

    return highest


def next_invoice_number(
    user_id: Any,
    existing_invoices: Iterable[Any],
    *,
    today: date | datetime | None = None,
    malformed: MalformedPolicy | str | None = None,
) -> str:
    """
    Next ``INV-<FY>-<NNNN>`` for ``user_id`` given the invoices they already have.

    Raises :class:`MalformedInvoiceNumberError` for an unparsable number in
    the current FY unless ``malformed`` (or the ``MALFORMED_INVOICE_POLICY``
    setting) is ``"skip"``.
    """
    fy = financial_year_for(today)
    sequence = current_max_sequence(user_id, existing_invoices, fy, malformed) + 1
    return format_invoice_number(fy, sequence)
