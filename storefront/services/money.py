"""
Money Utilities - Safe Decimal operations for monetary values.

Avoids float precision issues by using Decimal throughout. Prices are kept at
full precision internally and only rounded for display or minor-unit hand-off.
"""
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Optional, Union

Number = Union[str, int, float, Decimal, None]

# Default precision for money operations (2 decimal places)
MONEY_PRECISION = Decimal("0.01")

# Precision for display of integer-style amounts
INTEGER_PRECISION = Decimal("1")

DEFAULT_CURRENCY = "NGN"

CURRENCY_SYMBOLS = {
    "NGN": "₦",
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
}

# Currencies shown without fractional digits
INTEGER_CURRENCIES = {"NGN"}

# Largest unit price the cart accepts; anything above is treated as invalid
MAX_UNIT_PRICE = Decimal("100000000")

# Display and minor-unit conversion are clamped to this magnitude
MAX_AMOUNT = Decimal("1000000000000000")


def parse_decimal(value: object) -> Optional[Decimal]:
    """
    Parse a value into a finite Decimal.

    Returns None for None, booleans, unparsable strings, NaN and infinities,
    so callers can tell "missing" apart from a real zero.
    """
    if value is None or isinstance(value, bool):
        return None

    try:
        if isinstance(value, Decimal):
            result = value
        elif isinstance(value, float):
            # Use string representation to preserve precision
            result = Decimal(str(value))
        elif isinstance(value, (int, str)):
            result = Decimal(value)
        else:
            return None
    except (InvalidOperation, ValueError, TypeError):
        return None

    if not result.is_finite():
        return None
    return result


def to_decimal(value: Number) -> Decimal:
    """
    Convert any value to Decimal safely.

    Args:
        value: Value to convert (str, int, float, Decimal, or None)

    Returns:
        Decimal representation of the value, or Decimal("0") if None/invalid
    """
    result = parse_decimal(value)
    return result if result is not None else Decimal("0")


def to_price(value: Number) -> Decimal:
    """Coerce a unit price: invalid, negative or out-of-range input becomes zero."""
    result = to_decimal(value)
    if result <= 0 or result > MAX_UNIT_PRICE:
        return Decimal("0")
    return result


def clamp_amount(value: Number) -> Decimal:
    """Bound an amount to +/-MAX_AMOUNT so rounding stays within Decimal precision."""
    decimal_value = to_decimal(value)
    return max(-MAX_AMOUNT, min(decimal_value, MAX_AMOUNT))


def to_kobo(value: Number) -> int:
    """
    Convert a decimal amount to minor units (kobo/cents).

    Used for payment hand-off, which expects integer minor units.

    Args:
        value: Amount in major units (e.g., 1575.5 NGN)

    Returns:
        Amount in minor units (e.g., 157550 kobo)
    """
    decimal_value = clamp_amount(value)
    return int((decimal_value * 100).to_integral_value(rounding=ROUND_HALF_UP))


def round_money(value: Number, to_int: bool = False) -> Decimal:
    """
    Round monetary value to appropriate precision.

    Args:
        value: Value to round
        to_int: If True, round to integer

    Returns:
        Rounded Decimal value
    """
    decimal_value = clamp_amount(value)
    precision = INTEGER_PRECISION if to_int else MONEY_PRECISION
    return decimal_value.quantize(precision, rounding=ROUND_HALF_UP)


def format_money(value: Number, currency: str = DEFAULT_CURRENCY) -> str:
    """
    Format monetary value with currency symbol.

    Args:
        value: Value to format
        currency: Currency code (NGN, USD, EUR, ...)

    Returns:
        Formatted string with currency symbol, e.g. "₦6,450"
    """
    decimal_value = clamp_amount(value)
    symbol = CURRENCY_SYMBOLS.get(currency, currency)

    if currency in INTEGER_CURRENCIES:
        formatted = f"{int(round_money(decimal_value, to_int=True)):,}"
    else:
        formatted = f"{round_money(decimal_value):,.2f}"

    if currency in CURRENCY_SYMBOLS:
        return f"{symbol}{formatted}"
    return f"{formatted} {symbol}"


def to_json_number(value: Number) -> Union[int, float]:
    """
    Convert Decimal to a JSON number.

    Whole amounts stay integers so persisted payloads read naturally.
    Use only at serialization boundaries, not for internal calculations.
    """
    decimal_value = clamp_amount(value)
    if decimal_value == decimal_value.to_integral_value():
        return int(decimal_value)
    return float(decimal_value)


def to_float(value: Number) -> float:
    """
    Convert Decimal to float for JSON responses.

    Use only at API boundaries, not for internal calculations.
    """
    return float(to_decimal(value))


def multiply(value: Number, factor: Number) -> Decimal:
    """Safe multiplication of monetary value by a factor."""
    return to_decimal(value) * to_decimal(factor)
