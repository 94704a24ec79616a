# trubalance/api/v1/routes/invoices.py
"""
Invoice endpoints: line pricing / totals and financial-year invoice numbers.
"""

from __future__ import annotations

import logging
from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from trubalance.api.v1.deps import get_current_user_id
from trubalance.api.v1.envelope import ok
from trubalance.api.v1.schemas.gst import TaxBreakupSchema
from trubalance.api.v1.schemas.invoices import (
    InvoiceCalculateRequest,
    InvoiceCalculateResponse,
    InvoiceNumberRequest,
    InvoiceNumberResponse,
    LineResultSchema,
)
from trubalance.core.db import get_db
from trubalance.domain.services.financial_year import financial_year_for, fy_label
from trubalance.domain.services.invoice_totals import summarize_invoice

logger = logging.getLogger("api.v1.invoices")

router = APIRouter(prefix="/invoices", tags=["Invoices"])


def _number_response(number: str | None, day: date | None) -> dict:
    fy = financial_year_for(day)
    return InvoiceNumberResponse(
        invoice_number=number,
        financial_year=fy,
        financial_year_label=fy_label(fy),
    ).model_dump()


@router.post("/calculate", response_model=dict)
async def calculate_invoice(body: InvoiceCalculateRequest):
    """Price each line item and roll the invoice up into totals and a GST breakup."""
    summary = summarize_invoice(
        body.seller_state,
        body.buyer_state,
        [item.to_line_item() for item in body.items],
    )

    resp = InvoiceCalculateResponse(
        supply_type="intra_state" if summary.intra_state else "inter_state",
        items=[
            LineResultSchema(
                item_name=line.item.item_name,
                item_total=line.amounts.item_total,
                tax_amount=line.amounts.tax_amount,
                tax_breakup=TaxBreakupSchema(**line.tax_breakup.to_dict()),
            )
            for line in summary.lines
        ],
        tax_breakup=TaxBreakupSchema(**summary.tax_breakup.to_dict()),
        **summary.totals.to_dict(),
    )
    return ok(data=resp.model_dump())


@router.post("/numbers", response_model=dict)
async def allocate_number(
    body: InvoiceNumberRequest = InvoiceNumberRequest(),
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """
    Reserve the next invoice number for the caller.

    Allocation goes through the per-(user, FY) counter, so concurrent
    requests never receive the same number.
    """
    from trubalance.domain.services.invoice_number_service import allocate_invoice_number

    number = await allocate_invoice_number(
        user_id,
        db,
        existing_invoices=[inv.to_issued(user_id) for inv in body.existing_invoices],
        today=body.invoice_date,
        malformed=body.malformed_policy,
    )
    logger.info("Reserved invoice number %s for user %s", number, user_id)
    return ok(data=_number_response(number, body.invoice_date), message=f"Invoice number {number} reserved")


@router.post("/numbers/preview", response_model=dict)
async def preview_number(
    body: InvoiceNumberRequest = InvoiceNumberRequest(),
    user_id: str = Depends(get_current_user_id),
):
    """Next number derived from ``existing_invoices`` alone. Nothing is reserved."""
    from trubalance.domain.services.invoice_numbering import next_invoice_number

    number = next_invoice_number(
        user_id,
        [inv.to_issued(user_id) for inv in body.existing_invoices],
        today=body.invoice_date,
        malformed=body.malformed_policy,
    )
    return ok(data=_number_response(number, body.invoice_date))


@router.get("/numbers/current", response_model=dict)
async def current_number(
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Last number reserved for the caller in the current financial year, if any."""
    from trubalance.domain.services.invoice_number_service import last_issued_invoice_number

    number = await last_issued_invoice_number(user_id, db)
    return ok(data=_number_response(number, None))
