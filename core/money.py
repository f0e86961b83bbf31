"""
Money and quantity parsing boundary.

Form inputs arrive as strings, floats or nothing at all. Everything that
feeds the calculator passes through here first, so the arithmetic only
ever sees finite, non-negative Decimal amounts and positive integer
quantities. Invalid values are clamped to zero, never raised.
"""

import logging
from decimal import Decimal, InvalidOperation, ROUND_DOWN, ROUND_HALF_EVEN
from typing import Any

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
CENT = Decimal("0.01")

_CURRENCY_SYMBOLS = ("₹", "Rs.", "Rs", "INR")


def _to_decimal(raw: Any) -> Decimal | None:
    """Best-effort Decimal conversion. Returns None when not a number."""
    if raw is None or isinstance(raw, bool):
        return None

    if isinstance(raw, Decimal):
        return raw

    if isinstance(raw, int):
        return Decimal(raw)

    if isinstance(raw, float):
        # str() keeps the shortest repr so 0.1 becomes Decimal("0.1")
        return Decimal(str(raw))

    if isinstance(raw, str):
        text = raw.strip()
        for symbol in _CURRENCY_SYMBOLS:
            if text.startswith(symbol):
                text = text[len(symbol):].strip()
                break
        text = text.replace(",", "")
        if not text:
            return None
        try:
            return Decimal(text)
        except InvalidOperation:
            return None

    return None


def to_money(raw: Any) -> Decimal:
    """
    Parse a raw form value into a non-negative money amount.

    Empty, non-numeric, non-finite and negative values become 0.

    Examples:
        to_money("1,250.50") -> Decimal("1250.50")
        to_money("₹ 99")     -> Decimal("99")
        to_money("-5")       -> Decimal("0")
        to_money("abc")      -> Decimal("0")
    """
    value = _to_decimal(raw)

    if value is None or not value.is_finite():
        if raw not in (None, ""):
            logger.debug(f"Clamping non-numeric money value {raw!r} to 0")
        return ZERO

    if value < 0:
        logger.debug(f"Clamping negative money value {raw!r} to 0")
        return ZERO

    return value


def to_quantity(raw: Any) -> int:
    """
    Parse a raw form value into a whole, non-negative quantity.

    Fractions are truncated toward zero; anything invalid becomes 0.
    Callers reject zero quantities in form validation.
    """
    value = _to_decimal(raw)

    if value is None or not value.is_finite() or value < 0:
        if raw not in (None, ""):
            logger.debug(f"Clamping invalid quantity {raw!r} to 0")
        return 0

    return int(value.to_integral_value(rounding=ROUND_DOWN))


def quantize_money(value: Decimal) -> Decimal:
    """Round to 2 fraction digits using banker's rounding."""
    return value.quantize(CENT, rounding=ROUND_HALF_EVEN)


def format_money(value: Decimal, symbol: str = "₹") -> str:
    """
    Format an amount for display.

    Examples:
        format_money(Decimal("1234.5"))  -> "₹1,234.50"
        format_money(Decimal("-12"))     -> "-₹12.00"
    """
    amount = quantize_money(value)
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"
