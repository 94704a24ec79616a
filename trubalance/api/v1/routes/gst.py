# trubalance/api/v1/routes/gst.py
"""
GST endpoints: CGST/SGST/IGST split, state code table, identifier checks.
"""

from __future__ import annotations

from fastapi import APIRouter

from trubalance.api.v1.envelope import ok
from trubalance.api.v1.schemas.gst import (
    GstCalculateRequest,
    GstCalculateResponse,
    GstValidateRequest,
    GstValidateResponse,
    StateCodeSchema,
)
from trubalance.domain.services.gst_calculator import (
    STATE_CODE_MAP,
    calculate_gst,
    is_intra_state,
    state_name_from_code,
)
from trubalance.domain.services.gstin_pan_validation import (
    is_valid_gstin,
    is_valid_ifsc,
    is_valid_pan,
    is_valid_pincode,
    state_code_from_gstin,
)

router = APIRouter(prefix="/gst", tags=["GST"])


@router.post("/calculate", response_model=dict)
async def calculate(body: GstCalculateRequest):
    """Split GST on a taxable amount by place of supply."""
    breakup = calculate_gst(body.seller_state, body.buyer_state, body.amount, body.gst_rate)
    intra = is_intra_state(body.seller_state, body.buyer_state)

    resp = GstCalculateResponse(
        supply_type="intra_state" if intra else "inter_state",
        **breakup.to_dict(),
    )
    return ok(data=resp.model_dump())


@router.get("/states", response_model=dict)
async def states():
    """GST state codes (first two digits of a GSTIN) and their names."""
    items = [StateCodeSchema(code=code, name=name).model_dump() for code, name in STATE_CODE_MAP.items()]
    return ok(data=items)


@router.post("/validate", response_model=dict)
async def validate_identifiers(body: GstValidateRequest):
    """Format-check GSTIN / PAN / pincode / IFSC; a valid GSTIN also yields its state."""
    resp = GstValidateResponse()

    if body.gstin is not None:
        resp.gstin_valid = is_valid_gstin(body.gstin)
        if resp.gstin_valid:
            resp.state_code = state_code_from_gstin(body.gstin)
            resp.state_name = state_name_from_code(resp.state_code)
    if body.pan is not None:
        resp.pan_valid = is_valid_pan(body.pan)
    if body.pincode is not None:
        resp.pincode_valid = is_valid_pincode(body.pincode)
    if body.ifsc is not None:
        resp.ifsc_valid = is_valid_ifsc(body.ifsc)

    return ok(data=resp.model_dump())
