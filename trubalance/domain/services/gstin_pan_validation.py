# trubalance/domain/services/gstin_pan_validation.py

import re

from trubalance.domain.errors import InvalidInputError

PAN_REGEX = re.compile(r"^[A-Z]{5}[0-9]{4}[A-Z]$")
GSTIN_REGEX = re.compile(r"^[0-9]{2}[A-Z]{5}[0-9]{4}[A-Z][1-9A-Z]Z[0-9A-Z]$")
PINCODE_REGEX = re.compile(r"^[1-9][0-9]{5}$")
IFSC_REGEX = re.compile(r"^[A-Z]{4}0[A-Z0-9]{6}$")


def is_valid_pan(pan: str | None) -> bool:
    if not pan:
        return False
    pan = pan.strip().upper()
    return bool(PAN_REGEX.match(pan))


def is_valid_gstin(gstin: str | None) -> bool:
    if not gstin:
        return False
    gstin = gstin.strip().upper()
    if not GSTIN_REGEX.match(gstin):
        return False

    # Extra: check PAN part inside GSTIN
    pan_part = gstin[2:12]  # chars 3–12
    return is_valid_pan(pan_part)


def state_code_from_gstin(gstin: str | None) -> str:
    """Return the 2-digit state code a GSTIN starts with.

    Raises ``InvalidInputError`` when the GSTIN itself is not well formed.
    """
    if not is_valid_gstin(gstin):
        raise InvalidInputError(f"Invalid GSTIN format: {gstin!r}")
    return gstin.strip()[:2]


def is_valid_pincode(pincode: str | None) -> bool:
    if not pincode:
        return False
    return bool(PINCODE_REGEX.match(pincode.strip()))


def is_valid_ifsc(ifsc: str | None) -> bool:
    if not ifsc:
        return False
    return bool(IFSC_REGEX.match(ifsc.strip().upper()))
