from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

TWOPLACES = Decimal("0.01")
ZERO = Decimal("0")


def d(val) -> Decimal:
    """Coerce incoming values to Decimal; missing or unparsable input is zero."""
    if isinstance(val, Decimal):
        return val if val.is_finite() else ZERO
    if val is None or val == "":
        return ZERO
    try:
        result = Decimal(str(val))
    except (InvalidOperation, ValueError):
        return ZERO
    return result if result.is_finite() else ZERO


def q2(amount) -> Decimal:
    """Round a money amount half-up to two places."""
    return d(amount).quantize(TWOPLACES, rounding=ROUND_HALF_UP)
