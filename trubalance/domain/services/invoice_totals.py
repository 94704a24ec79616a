# trubalance/domain/services/invoice_totals.py
"""
Invoice line pricing and invoice-level roll-ups.

    item_total = quantity * rate - discount        (>= 0, rounded to paisa)
    tax_amount = item_total * gst_percentage / 100 (rounded to paisa)
    subtotal   = sum(item_total)
    tax_amount = sum(tax_amount)
    total      = subtotal + tax_amount
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from decimal import Decimal

from trubalance.domain.errors import InvalidLineItemError
from trubalance.domain.models.invoice import (
    InvoiceLine,
    InvoiceSummary,
    InvoiceTotals,
    LineItem,
    LineItemAmounts,
    TaxBreakup,
)
from trubalance.domain.services.gst_calculator import calculate_gst, is_intra_state, validate_gst_rate
from trubalance.domain.services.money import HUNDRED, ZERO, round2, to_decimal

logger = logging.getLogger("invoice_totals")


def _validated(item: LineItem) -> tuple[Decimal, Decimal, Decimal, Decimal]:
    quantity = to_decimal(item.quantity, "quantity", InvalidLineItemError)
    if quantity != quantity.to_integral_value() or quantity < 1:
        raise InvalidLineItemError(f"Quantity must be a whole number of at least 1, got {item.quantity!r}")

    rate = to_decimal(item.rate, "rate", InvalidLineItemError)
    if rate < ZERO:
        raise InvalidLineItemError("Rate cannot be negative")

    discount = to_decimal(
        item.discount if item.discount is not None else ZERO,
        "discount",
        InvalidLineItemError,
    )
    if discount < ZERO:
        raise InvalidLineItemError("Discount cannot be negative")

    gst = Decimal(validate_gst_rate(item.gst_percentage, InvalidLineItemError).value)
    return quantity, rate, discount, gst


def compute_line_item(item: LineItem) -> LineItemAmounts:
    """Price one line. Raises :class:`InvalidLineItemError` on bad input."""
    quantity, rate, discount, gst = _validated(item)

    item_total = round2(quantity * rate - discount)
    if item_total < ZERO:
        raise InvalidLineItemError(
            f"Discount {discount} exceeds line value {quantity * rate} for {item.item_name!r}"
        )

    return LineItemAmounts(
        item_total=item_total,
        tax_amount=round2(item_total * gst / HUNDRED),
    )


def compute_invoice_totals(items: Iterable[LineItem]) -> InvoiceTotals:
    """Sum line totals and tax. An empty invoice is all zeros."""
    subtotal = round2(ZERO)
    tax = round2(ZERO)
    for item in items:
        amounts = compute_line_item(item)
        subtotal += amounts.item_total
        tax += amounts.tax_amount

    return InvoiceTotals(subtotal=subtotal, tax_amount=tax, total_amount=subtotal + tax)


def summarize_invoice(
    seller_state: str,
    buyer_state: str,
    items: Iterable[LineItem],
) -> InvoiceSummary:
    """
    Price every line, split each line's GST by place of supply, and roll the
    lines up into invoice totals plus an invoice-level CGST/SGST/IGST breakup.
    """
    summary = InvoiceSummary(intra_state=is_intra_state(seller_state, buyer_state))
    breakup = TaxBreakup(
        cgst=round2(ZERO), sgst=round2(ZERO), igst=round2(ZERO), total_tax=round2(ZERO),
    )
    subtotal = round2(ZERO)
    tax = round2(ZERO)

    for item in items:
        amounts = compute_line_item(item)
        line_breakup = calculate_gst(seller_state, buyer_state, amounts.item_total, item.gst_percentage)
        summary.lines.append(InvoiceLine(item=item, amounts=amounts, tax_breakup=line_breakup))

        subtotal += amounts.item_total
        tax += amounts.tax_amount
        breakup = breakup + line_breakup

    summary.totals = InvoiceTotals(subtotal=subtotal, tax_amount=tax, total_amount=subtotal + tax)
    summary.tax_breakup = breakup

    logger.debug(
        "Invoice summarized: lines=%d subtotal=%s tax=%s total=%s",
        len(summary.lines), subtotal, tax, summary.totals.total_amount,
    )
    return summary
