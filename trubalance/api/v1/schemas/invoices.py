# trubalance/api/v1/schemas/invoices.py
"""Request and response schemas for invoice endpoints."""

from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field

from trubalance.api.v1.schemas.gst import TaxBreakupSchema
from trubalance.domain.models.invoice import IssuedInvoice, LineItem


class LineItemSchema(BaseModel):
    """One billed row. Quantity must be a whole number of at least 1."""

    item_name: str = Field(min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=500)
    quantity: Decimal = Decimal("1")
    rate: Decimal = Decimal("0")
    discount: Decimal = Decimal("0")
    gst_percentage: Decimal = Decimal("18")

    def to_line_item(self) -> LineItem:
        return LineItem(
            item_name=self.item_name,
            description=self.description,
            quantity=self.quantity,
            rate=self.rate,
            discount=self.discount,
            gst_percentage=self.gst_percentage,
        )


class InvoiceCalculateRequest(BaseModel):
    seller_state: str
    buyer_state: str
    items: list[LineItemSchema] = Field(default_factory=list)


class LineResultSchema(BaseModel):
    item_name: str
    item_total: Decimal
    tax_amount: Decimal
    tax_breakup: TaxBreakupSchema


class InvoiceCalculateResponse(BaseModel):
    supply_type: str
    items: list[LineResultSchema]
    subtotal: Decimal
    tax_amount: Decimal
    total_amount: Decimal
    tax_breakup: TaxBreakupSchema


# ---------------------------------------------------------------------------
# Numbering
# ---------------------------------------------------------------------------

class ExistingInvoiceSchema(BaseModel):
    invoice_number: str = Field(max_length=50)
    invoice_date: dt.date

    def to_issued(self, user_id: str) -> IssuedInvoice:
        return IssuedInvoice(
            invoice_number=self.invoice_number,
            invoice_date=self.invoice_date,
            user_id=user_id,
        )


class InvoiceNumberRequest(BaseModel):
    """
    ``existing_invoices`` are the caller's invoices numbered so far; they seed
    the counter the first time a financial year is used. ``invoice_date``
    defaults to today and decides the financial year.
    """

    existing_invoices: list[ExistingInvoiceSchema] = Field(default_factory=list)
    invoice_date: dt.date | None = None
    malformed_policy: Literal["error", "skip"] | None = None


class InvoiceNumberResponse(BaseModel):
    invoice_number: str | None
    financial_year: int
    financial_year_label: str
