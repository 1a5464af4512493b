#!/usr/bin/env python3
"""Tests for Money primitive type."""

import logging
from decimal import Decimal

import pytest

from familybudget.core.money import Money


class TestMoneyConstruction:
    """Test Money class construction."""

    @pytest.mark.currency
    def test_from_cents(self):
        m = Money.from_cents(1234)
        assert m.to_cents() == 1234

    @pytest.mark.currency
    @pytest.mark.parametrize(
        "price,expected_cents",
        [
            ("-45.99", -4599),
            ("45.99", 4599),
            ("+12.5", 1250),
            ("1250.0", 125000),
            ("7", 700),
            ("0.05", 5),
            ("-0.05", -5),
        ],
    )
    def test_from_price(self, price, expected_cents):
        """Test parsing Moneybird price strings with sign and short fractions."""
        assert Money.from_price(price).to_cents() == expected_cents

    @pytest.mark.currency
    @pytest.mark.parametrize("price", ["abc", "12,50", "€12.50", "1.2.3", "--5", None, ""])
    def test_from_price_invalid_is_zero(self, price, caplog):
        """Unparsable amounts become zero and are logged, not raised."""
        with caplog.at_level(logging.WARNING, logger="familybudget.core.money"):
            m = Money.from_price(price)

        assert m == Money.zero()
        assert caplog.records

    @pytest.mark.currency
    def test_from_decimal_rounds_half_up(self):
        assert Money.from_decimal(Decimal("10.005")).to_cents() == 1001
        assert Money.from_decimal(Decimal("-10.005")).to_cents() == -1001
        assert Money.from_decimal(Decimal("10.004")).to_cents() == 1000


class TestMoneyArithmetic:
    """Test Money arithmetic operations."""

    @pytest.mark.currency
    def test_addition_and_subtraction(self):
        a = Money.from_cents(100)
        b = Money.from_cents(30)
        assert (a + b).to_cents() == 130
        assert (a - b).to_cents() == 70

    @pytest.mark.currency
    def test_negation(self):
        assert (-Money.from_cents(4599)).to_cents() == -4599

    @pytest.mark.currency
    def test_sum(self):
        values = [Money.from_cents(100), Money.from_cents(-250), Money.from_cents(5)]
        assert Money.sum(values) == Money.from_cents(-145)
        assert Money.sum([]) == Money.zero()

    @pytest.mark.currency
    def test_scaling_is_not_supported(self):
        with pytest.raises(TypeError):
            Money.from_cents(100) * 2

    @pytest.mark.currency
    def test_to_decimal(self):
        assert Money.from_cents(-156278).to_decimal() == Decimal("-1562.78")


class TestMoneyFormatting:
    """Test Money string formatting."""

    @pytest.mark.currency
    def test_str_positive(self):
        assert str(Money.from_cents(1234)) == "€12.34"

    @pytest.mark.currency
    def test_str_negative(self):
        assert str(Money.from_cents(-4599)) == "€-45.99"

    @pytest.mark.currency
    def test_comparison(self):
        assert Money.from_cents(50) < Money.from_cents(100)
        assert Money.from_cents(100) >= Money.from_cents(100)
        assert Money.from_cents(100) == Money.from_cents(100)
