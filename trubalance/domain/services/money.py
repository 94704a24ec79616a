# trubalance/domain/services/money.py
"""
Fixed-point money helpers.

Every amount is a ``Decimal``; rounding is half-up at the paisa (0.01) level,
or at whole-rupee / nearest-10 granularity for budget figures.
"""

from __future__ import annotations

from decimal import ROUND_FLOOR, ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from trubalance.domain.errors import CalculatorError, InvalidInputError

ZERO = Decimal("0")
HALF = Decimal("0.5")
PAISA = Decimal("0.01")
RUPEE = Decimal("1")
TEN = Decimal("10")
HUNDRED = Decimal("100")


def to_decimal(
    value: Any,
    field: str = "amount",
    error: type[CalculatorError] = InvalidInputError,
) -> Decimal:
    """
    Strict conversion of int / float / str / Decimal to a finite Decimal.

    Floats go through ``str()`` so 0.1 stays 0.1. Raises ``error`` for
    ``None``, booleans, unparsable strings, NaN and infinities.
    """
    if value is None:
        raise error(f"{field} is required")
    if isinstance(value, bool):
        raise error(f"{field} must be a number")

    if isinstance(value, Decimal):
        dec = value
    else:
        try:
            dec = Decimal(str(value).strip())
        except (InvalidOperation, TypeError, ValueError):
            raise error(f"{field} must be a number, got {value!r}")

    if not dec.is_finite():
        raise error(f"{field} must be a finite number")
    return dec


def safe_decimal(value: Any) -> Decimal:
    """Lenient conversion for stored records: anything unusable counts as zero."""
    if value is None or isinstance(value, bool):
        return ZERO
    try:
        dec = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        return ZERO
    return dec if dec.is_finite() else ZERO


def round2(value: Decimal) -> Decimal:
    return value.quantize(PAISA, rounding=ROUND_HALF_UP)


def round_whole(value: Decimal) -> Decimal:
    return value.quantize(RUPEE, rounding=ROUND_HALF_UP)


def round_to_10(value: Decimal) -> Decimal:
    """Round to the nearest multiple of 10; halves go up, so -35 becomes -30."""
    return (value / TEN + HALF).quantize(RUPEE, rounding=ROUND_FLOOR) * TEN


def format_inr(value: Decimal) -> str:
    """Whole rupees with Indian digit grouping: 100300 → "1,00,300"."""
    n = int(round_whole(value))
    digits = str(abs(n))
    if len(digits) > 3:
        head, tail = digits[:-3], digits[-3:]
        pairs = []
        while len(head) > 2:
            pairs.insert(0, head[-2:])
            head = head[:-2]
        if head:
            pairs.insert(0, head)
        digits = ",".join(pairs + [tail])
    return f"-{digits}" if n < 0 else digits


def field_of(record: Any, name: str, default: Any = None) -> Any:
    """Read ``name`` from a mapping or an attribute-style record (ORM row, dataclass)."""
    if isinstance(record, dict):
        return record.get(name, default)
    return getattr(record, name, default)
