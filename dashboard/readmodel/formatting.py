"""
Money Formatting

Amounts travel as integer minor units (cents). These helpers render them for
display and convert them for edit forms, using Babel for currency precision
and locale-aware symbols.
"""

from decimal import Decimal
from typing import Optional, Union

from babel.numbers import (
    NumberFormatError,
    format_currency as babel_format_currency,
    get_currency_precision,
    get_currency_symbol,
    parse_decimal,
)

DEFAULT_LOCALE = "en_US"

Amount = Union[int, Decimal, str]


def _to_minor_units(value: Optional[Amount]) -> int:
    # SUM() comes back as Decimal on some drivers and NULL over no rows
    if value is None:
        return 0
    if isinstance(value, bool):
        raise TypeError("Amount must be an integer number of minor units")
    if isinstance(value, int):
        return value
    return int(Decimal(value))


def from_minor_units(minor_units: int, currency: str = "USD") -> Decimal:
    """Amount in major units, scaled by the currency's precision."""
    precision = get_currency_precision(currency.upper())
    return Decimal(minor_units) / (10 ** precision)


def format_currency(
    minor_units: Optional[Amount],
    currency: str = "USD",
    locale: str = DEFAULT_LOCALE,
) -> str:
    """
    Format an amount in minor units as a localized currency string.
    
    Args:
        minor_units: Amount in the currency's minor unit. None is treated as zero.
        currency: ISO currency code
        locale: Babel locale used for symbol and separators
        
    Returns:
        Formatted string like "$1,234.56", "-$1.50" or "¥150"
    """
    code = currency.upper()
    amount = from_minor_units(_to_minor_units(minor_units), code)
    return babel_format_currency(amount, code, locale=locale)


def parse_currency(
    text: str,
    currency: str = "USD",
    locale: str = DEFAULT_LOCALE,
) -> int:
    """
    Parse a string produced by format_currency back into minor units.
    
    Raises:
        ValueError: If the text is not a formatted amount
    """
    code = currency.upper()
    cleaned = text.strip()
    negative = cleaned.startswith("-")
    if negative:
        cleaned = cleaned[1:]
    
    symbol = get_currency_symbol(code, locale=locale)
    if cleaned.startswith(symbol):
        cleaned = cleaned[len(symbol):]
    cleaned = cleaned.strip()
    
    if not cleaned or cleaned[0] in "+-":
        raise ValueError(f"Not a currency amount: {text!r}")
    
    try:
        major = parse_decimal(cleaned, locale=locale, strict=True)
    except NumberFormatError:
        raise ValueError(f"Not a currency amount: {text!r}") from None
    
    precision = get_currency_precision(code)
    if not major.is_finite() or major.as_tuple().exponent < -precision:
        raise ValueError(f"Not a currency amount: {text!r}")
    
    minor = int(major.scaleb(precision))
    return -minor if negative else minor


def to_major_units(minor_units: int, currency: str = "USD") -> float:
    """Convert minor units to a fractional amount in major units (dollars)."""
    return float(from_minor_units(minor_units, currency))
