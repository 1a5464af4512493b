#!/usr/bin/env python3
"""
Currency Conversion and Handling Utilities

Euro amount handling for the family budget report.
All ledger arithmetic uses integer cents to avoid floating-point errors.

Currency Systems:
- Moneybird returns prices as decimal strings: "-45.99", "1250.0"
- Internal calculations use cents: 100 cents = €1.00
- Display uses euro strings: "€12.34"

Key Principles:
- Never use floating-point arithmetic for currency calculations
- Parse API strings with Decimal, then hold integer cents
- Rate-based math (VAT, income tax) goes through Decimal and rounds half-up
"""

import re
from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")

_PRICE_PATTERN = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)$")


class InvalidAmountError(ValueError):
    """Raised when a textual amount cannot be parsed."""


def parse_price_to_cents(price: str) -> int:
    """
    Parse a Moneybird price string to integer cents.

    Accepts an optional leading sign and an optional fractional part.
    Fractions with more than two digits are rounded half-up to cents.

    Args:
        price: Price string such as "-45.99", "+12", "100.5"

    Returns:
        Amount in cents

    Raises:
        InvalidAmountError: If the string is not a plain decimal number

    Examples:
        parse_price_to_cents("-45.99") -> -4599
        parse_price_to_cents("12.5") -> 1250
        parse_price_to_cents("+7") -> 700
    """
    clean = str(price).strip()
    if not _PRICE_PATTERN.match(clean):
        raise InvalidAmountError(f"Not a valid amount: {price!r}")

    return decimal_to_cents(Decimal(clean))


def decimal_to_cents(amount: Decimal) -> int:
    """Round a Decimal euro amount half-up to integer cents."""
    return int((amount.quantize(CENT, rounding=ROUND_HALF_UP) * 100).to_integral_value())


def cents_to_decimal(cents: int) -> Decimal:
    """Convert integer cents to a Decimal euro amount."""
    return Decimal(cents) / 100


def cents_to_euros_str(cents: int) -> str:
    """
    Convert cents to euro string using pure integer arithmetic.

    Args:
        cents: Amount in cents

    Returns:
        Formatted euro string without currency symbol

    Example:
        cents_to_euros_str(4599) -> "45.99"
        cents_to_euros_str(-5) -> "-0.05"
    """
    is_negative = cents < 0
    abs_cents = abs(int(cents))

    euros = abs_cents // 100
    remainder = abs_cents % 100

    if is_negative:
        return f"-{euros}.{remainder:02d}"
    return f"{euros}.{remainder:02d}"


def format_cents(cents: int) -> str:
    """Format cents as euro string with € prefix."""
    return f"€{cents_to_euros_str(cents)}"
