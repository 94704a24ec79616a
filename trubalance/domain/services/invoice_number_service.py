# trubalance/domain/services/invoice_number_service.py
"""
Race-free invoice number allocation.

The sequence for (user, FY) lives in the ``invoice_counters`` table and is
advanced by a single atomic upsert, so concurrent invoice creations for the
same user always get distinct numbers. Invoices numbered before the counter
existed can be passed in to seed it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date, datetime
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from trubalance.domain.services.financial_year import financial_year_for
from trubalance.domain.services.invoice_numbering import (
    MalformedPolicy,
    current_max_sequence,
    format_invoice_number,
)

logger = logging.getLogger("invoice_number_service")


async def allocate_invoice_number(
    user_id: Any,
    db: AsyncSession,
    *,
    existing_invoices: Iterable[Any] = (),
    today: date | datetime | None = None,
    malformed: MalformedPolicy | str | None = None,
) -> str:
    """Reserve and return the next ``INV-<FY>-<NNNN>`` for ``user_id``."""
    from trubalance.infrastructure.db.repositories import InvoiceCounterRepository

    fy = financial_year_for(today)
    floor = current_max_sequence(user_id, existing_invoices, fy, malformed)

    repo = InvoiceCounterRepository(db)
    sequence = await repo.next_sequence(str(user_id), fy, floor=floor)
    number = format_invoice_number(fy, sequence)

    logger.info("Allocated invoice number %s for user %s (floor=%d)", number, user_id, floor)
    return number


async def last_issued_invoice_number(
    user_id: Any,
    db: AsyncSession,
    *,
    today: date | datetime | None = None,
) -> str | None:
    """Most recently allocated number this FY, or ``None`` if none yet."""
    from trubalance.infrastructure.db.repositories import InvoiceCounterRepository

    fy = financial_year_for(today)
    sequence = await InvoiceCounterRepository(db).get_current(str(user_id), fy)
    if sequence < 1:
        return None
    return format_invoice_number(fy, sequence)
