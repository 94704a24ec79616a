# trubalance/domain/services/gst_calculator.py
"""
GST split for a single taxable amount.

Intra-state supply (seller and buyer in the same state) is taxed as
CGST + SGST, each carrying half the rate. Inter-state supply is taxed as
IGST at the full rate. Amounts are rounded half-up to the paisa.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any

from trubalance.domain.errors import CalculatorError, InvalidInputError
from trubalance.domain.models.categories import GstRate
from trubalance.domain.models.invoice import TaxBreakup
from trubalance.domain.services.money import HUNDRED, ZERO, round2, to_decimal

logger = logging.getLogger("gst_calculator")

_TWO_HUNDRED = Decimal("200")


# ---------------------------------------------------------------------------
# State codes (first two digits of a GSTIN)
# ---------------------------------------------------------------------------

STATE_CODE_MAP: dict[str, str] = {
    "01": "Jammu and Kashmir",
    "02": "Himachal Pradesh",
    "03": "Punjab",
    "04": "Chandigarh",
    "05": "Uttarakhand",
    "06": "Haryana",
    "07": "Delhi",
    "08": "Rajasthan",
    "09": "Uttar Pradesh",
    "10": "Bihar",
    "11": "Sikkim",
    "12": "Arunachal Pradesh",
    "13": "Nagaland",
    "14": "Manipur",
    "15": "Mizoram",
    "16": "Tripura",
    "17": "Meghalaya",
    "18": "Assam",
    "19": "West Bengal",
    "20": "Jharkhand",
    "21": "Odisha",
    "22": "Chhattisgarh",
    "23": "Madhya Pradesh",
    "24": "Gujarat",
    "25": "Daman and Diu",
    "26": "Dadra and Nagar Haveli",
    "27": "Maharashtra",
    "28": "Andhra Pradesh",
    "29": "Karnataka",
    "30": "Goa",
    "31": "Lakshadweep",
    "32": "Kerala",
    "33": "Tamil Nadu",
    "34": "Puducherry",
    "35": "Andaman and Nicobar Islands",
    "36": "Telangana",
    "37": "Andhra Pradesh",
    "38": "Ladakh",
}


def state_name_from_code(state_code: str | None) -> str:
    if not state_code:
        return "Unknown"
    return STATE_CODE_MAP.get(state_code.strip().zfill(2), "Unknown")


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------

def normalize_state(state: Any, role: str = "state") -> str:
    """Trim + case-fold a state name; empty or non-string input is rejected."""
    if not isinstance(state, str) or not state.strip():
        raise InvalidInputError(f"{role} is required for GST calculation")
    return state.strip().casefold()


def validate_gst_rate(gst_rate: Any, error: type[CalculatorError] = InvalidInputError) -> GstRate:
    """Coerce a GST rate (``18``, ``"18"``, ``18.0``) to a :class:`GstRate` slab."""
    rate = to_decimal(gst_rate, "gst_rate", error)
    allowed = ", ".join(f"{r.value}%" for r in GstRate)
    if rate != rate.to_integral_value():
        raise error(f"GST rate must be one of {allowed}, got {gst_rate!r}")
    try:
        return GstRate(int(rate))
    except ValueError:
        raise error(f"GST rate must be one of {allowed}, got {gst_rate!r}")


def is_intra_state(seller_state: Any, buyer_state: Any) -> bool:
    return normalize_state(seller_state, "seller_state") == normalize_state(buyer_state, "buyer_state")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def calculate_gst(
    seller_state: Any,
    buyer_state: Any,
    amount: Any,
    gst_rate: Any,
) -> TaxBreakup:
    """
    Split GST on ``amount`` at ``gst_rate`` percent.

    Returns a :class:`TaxBreakup` whose ``total_tax`` is ``cgst + sgst + igst``.
    Raises :class:`InvalidInputError` for a missing state, a missing or
    negative amount, or a rate outside 0/5/12/18/28.
    """
    intra = is_intra_state(seller_state, buyer_state)

    taxable = to_decimal(amount, "amount")
    if taxable < ZERO:
        raise InvalidInputError("Taxable amount cannot be negative")

    rate = Decimal(validate_gst_rate(gst_rate).value)

    if intra:
        half = round2(taxable * rate / _TWO_HUNDRED)
        breakup = TaxBreakup(cgst=half, sgst=half, igst=round2(ZERO))
    else:
        breakup = TaxBreakup(
            cgst=round2(ZERO),
            sgst=round2(ZERO),
            igst=round2(taxable * rate / HUNDRED),
        )

    breakup.total_tax = breakup.cgst + breakup.sgst + breakup.igst
    logger.debug(
        "GST (%s-state) on %s @ %s%%: cgst=%s sgst=%s igst=%s",
        "intra" if intra else "inter", taxable, rate,
        breakup.cgst, breakup.sgst, breakup.igst,
    )
    return breakup
