"""
Freight calculation.

Freight in calculated mode is charged per 1000 kg plus the delivery charge:

    freight = max(0, weight / 1000 * rate + delivery_charge)

In fixed mode the freight is whatever the user typed in and the rate is
shown as the "Fix" token instead of a number.
"""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional, Tuple

from fleetbook.models.shipment import RateMode

FIXED_RATE_TOKEN = "Fix"
CENTS = Decimal("0.01")
ZERO = Decimal("0")
KG_PER_RATE_UNIT = Decimal("1000")
# Largest value a Numeric(10, 2) column holds
MAX_AMOUNT = Decimal("99999999.99")


def to_decimal(value: Any) -> Decimal:
    """Coerce a form/DB value to Decimal. Anything unusable becomes zero."""
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        result = value
    else:
        text = str(value).strip().replace(",", "")
        if not text:
            return ZERO
        try:
            result = Decimal(text)
        except (InvalidOperation, ValueError):
            return ZERO
    if not result.is_finite():
        return ZERO
    return result


def quantize_money(value: Decimal) -> Decimal:
    try:
        return value.quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        # Too many digits to carry cents at context precision
        return value


def is_fixed_rate_token(value: Any) -> bool:
    return isinstance(value, str) and value.strip().lower() == FIXED_RATE_TOKEN.lower()


def parse_rate(value: Any, mode: Optional[RateMode] = None) -> Tuple[RateMode, Optional[Decimal]]:
    """Split a submitted rate into (mode, numeric rate).

    The "Fix" token, or an explicit fixed mode, yields (FIXED, None).
    """
    if mode == RateMode.FIXED or is_fixed_rate_token(value):
        return RateMode.FIXED, None
    return RateMode.CALCULATED, to_decimal(value)


def calculate_freight(
    weight: Any,
    rate: Any,
    delivery_charge: Any,
    mode: RateMode = RateMode.CALCULATED,
    fixed_freight: Any = None,
) -> Decimal:
    if mode == RateMode.FIXED:
        return quantize_money(to_decimal(fixed_freight))

    amount = to_decimal(weight) / KG_PER_RATE_UNIT * to_decimal(rate) + to_decimal(delivery_charge)
    return quantize_money(max(ZERO, amount))


def display_rate(rate: Any, mode: RateMode) -> Any:
    if mode == RateMode.FIXED:
        return FIXED_RATE_TOKEN
    return quantize_money(to_decimal(rate))
