# trubalance/domain/models/invoice.py
"""
Domain dataclasses for invoice calculations.

LineItem / LineItemAmounts: one billed row and its derived money.
InvoiceTotals / TaxBreakup: invoice-level roll-ups.
IssuedInvoice: the minimum we need to know about an already-numbered invoice.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any

ZERO = Decimal("0")


@dataclass
class LineItem:
    item_name: str
    quantity: Any = 1
    rate: Any = ZERO
    discount: Any = ZERO
    gst_percentage: Any = 18
    description: str | None = None


@dataclass
class LineItemAmounts:
    item_total: Decimal = ZERO
    tax_amount: Decimal = ZERO


@dataclass
class InvoiceTotals:
    subtotal: Decimal = ZERO
    tax_amount: Decimal = ZERO
    total_amount: Decimal = ZERO

    def to_dict(self) -> dict[str, Decimal]:
        return asdict(self)


@dataclass
class TaxBreakup:
    """CGST/SGST/IGST split for one line, or summed across an invoice."""
    cgst: Decimal = ZERO
    sgst: Decimal = ZERO
    igst: Decimal = ZERO
    total_tax: Decimal = ZERO

    def to_dict(self) -> dict[str, Decimal]:
        return asdict(self)

    def __add__(self, other: "TaxBreakup") -> "TaxBreakup":
        return TaxBreakup(
            cgst=self.cgst + other.cgst,
            sgst=self.sgst + other.sgst,
            igst=self.igst + other.igst,
            total_tax=self.total_tax + other.total_tax,
        )


@dataclass
class InvoiceLine:
    item: LineItem
    amounts: LineItemAmounts
    tax_breakup: TaxBreakup


@dataclass
class InvoiceSummary:
    """Everything the invoice document needs after its lines are priced."""
    intra_state: bool
    lines: list[InvoiceLine] = field(default_factory=list)
    totals: InvoiceTotals = field(default_factory=InvoiceTotals)
    tax_breakup: TaxBreakup = field(default_factory=TaxBreakup)


@dataclass
class IssuedInvoice:
    invoice_number: str
    invoice_date: date | datetime
    user_id: str | None = None
