# trubalance/api/v1/schemas/gst.py
"""Request and response schemas for GST endpoints."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Tax split
# ---------------------------------------------------------------------------

class GstCalculateRequest(BaseModel):
    seller_state: str = Field(description="Supplier's state name, matched case-insensitively")
    buyer_state: str = Field(description="Recipient's state name (place of supply)")
    amount: Decimal = Field(description="Taxable value")
    gst_rate: Decimal = Field(description="GST slab in percent: 0, 5, 12, 18 or 28")


class TaxBreakupSchema(BaseModel):
    cgst: Decimal = Decimal("0")
    sgst: Decimal = Decimal("0")
    igst: Decimal = Decimal("0")
    total_tax: Decimal = Decimal("0")


class GstCalculateResponse(TaxBreakupSchema):
    supply_type: str  # "intra_state" | "inter_state"


# ---------------------------------------------------------------------------
# States / identifiers
# ---------------------------------------------------------------------------

class StateCodeSchema(BaseModel):
    code: str
    name: str


class GstValidateRequest(BaseModel):
    """Any subset of identifiers; omitted ones are reported as ``None``."""

    gstin: str | None = Field(default=None, max_length=20)
    pan: str | None = Field(default=None, max_length=15)
    pincode: str | None = Field(default=None, max_length=10)
    ifsc: str | None = Field(default=None, max_length=15)


class GstValidateResponse(BaseModel):
    gstin_valid: bool | None = None
    state_code: str | None = None
    state_name: str | None = None
    pan_valid: bool | None = None
    pincode_valid: bool | None = None
    ifsc_valid: bool | None = None
