#!/usr/bin/env python3
"""
Money Primitive Type

Immutable currency value wrapper that uses integer cents internally.
Prevents floating-point errors and provides type-safe currency operations.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from .currency import (
    InvalidAmountError,
    cents_to_decimal,
    cents_to_euros_str,
    decimal_to_cents,
    parse_price_to_cents,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Money:
    """
    Immutable money value in cents (EUR).

    Supports both positive (income/inflows) and negative (expense/outflows) amounts.
    Uses integer arithmetic throughout to prevent floating-point errors.

    Examples:
        >>> income = Money.from_cents(1234)
        >>> str(income)
        '€12.34'

        >>> expense = Money.from_price("-45.99")  # Moneybird booking
        >>> expense.to_cents()
        -4599

        >>> net = income + expense
        >>> str(net)
        '€-33.65'

        >>> (-expense).to_cents()
        4599
    """

    cents: int

    @classmethod
    def zero(cls) -> "Money":
        """Zero euros."""
        return cls(cents=0)

    @classmethod
    def from_cents(cls, cents: int) -> "Money":
        """Create Money from cents."""
        return cls(cents=cents)

    @classmethod
    def from_price(cls, price: str | None) -> "Money":
        """
        Parse a Moneybird price string.

        Unparsable or missing prices become zero with a logged warning so a
        single malformed record cannot abort a whole report.

        Args:
            price: Price string like "-45.99" or "1250.0"

        Returns:
            Money object with sign preserved
        """
        if price is None or str(price).strip() == "":
            logger.warning("Missing amount treated as zero")
            return cls.zero()
        try:
            return cls(cents=parse_price_to_cents(price))
        except InvalidAmountError:
            logger.warning("Unparsable amount %r treated as zero", price)
            return cls.zero()

    @classmethod
    def from_decimal(cls, amount: Decimal) -> "Money":
        """Create Money from a Decimal euro amount, rounding half-up to cents."""
        return cls(cents=decimal_to_cents(amount))

    @classmethod
    def sum(cls, values: Iterable["Money"]) -> "Money":
        """Sum an iterable of Money values (empty sums to zero)."""
        return sum(values, cls.zero())

    def to_cents(self) -> int:
        """Get value in cents."""
        return self.cents

    def to_decimal(self) -> Decimal:
        """Get value as a Decimal euro amount."""
        return cents_to_decimal(self.cents)

    def to_float(self) -> float:
        """Get value as float euros, for charting only."""
        return self.cents / 100

    def abs(self) -> "Money":
        """Return absolute value of Money."""
        return Money(cents=abs(self.cents))

    def __add__(self, other: "Money") -> "Money":
        """Add two Money objects."""
        return Money(cents=self.cents + other.cents)

    def __sub__(self, other: "Money") -> "Money":
        """Subtract two Money objects."""
        return Money(cents=self.cents - other.cents)

    def __neg__(self) -> "Money":
        """Flip the sign."""
        return Money(cents=-self.cents)

    def __lt__(self, other: "Money") -> bool:
        return self.cents < other.cents

    def __le__(self, other: "Money") -> bool:
        return self.cents <= other.cents

    def __gt__(self, other: "Money") -> bool:
        return self.cents > other.cents

    def __ge__(self, other: "Money") -> bool:
        return self.cents >= other.cents

    def __str__(self) -> str:
        """Format as euro string."""
        return f"€{cents_to_euros_str(self.cents)}"

    def __repr__(self) -> str:
        return f"Money(cents={self.cents})"
