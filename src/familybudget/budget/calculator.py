#!/usr/bin/env python3
"""
Budget Calculator

Derives the disposable family budget from gross revenue:

    revenue_excl_vat = gross_revenue / (1 + vat_rate)
    vat_amount       = gross_revenue - revenue_excl_vat
    income_tax       = revenue_excl_vat * income_tax_rate
    family_budget    = revenue_excl_vat - income_tax + business_expense_total
    remaining        = family_budget + family_spending_total
    percent_used     = -(family_spending_total / family_budget) * 100

Business expenses and family spending are negative totals, so they are
added rather than subtracted. Rate math runs on Decimal and rounds half-up
to cents.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

from ..core.money import Money

DEFAULT_VAT_RATE = Decimal("0.21")
DEFAULT_INCOME_TAX_RATE = Decimal("0.30")


class RevenueSource(Enum):
    """Where the gross revenue figure came from."""

    COMPUTED = "computed"
    MANUAL = "manual"


class BudgetStatus(Enum):
    """Outcome of the month so far."""

    UNDER_BUDGET = "under_budget"
    ON_BUDGET = "on_budget"
    OVER_BUDGET = "over_budget"
    NO_BUDGET = "no_budget"  # family_budget <= 0, percent used undefined


@dataclass(frozen=True)
class BudgetFigures:
    """Tax-adjusted budget derived once per run."""

    gross_revenue: Money
    revenue_source: RevenueSource
    vat_rate: Decimal
    income_tax_rate: Decimal
    vat_amount: Money
    revenue_excl_vat: Money
    income_tax: Money
    business_expenses: Money
    family_budget: Money
    family_spending: Money
    remaining: Money
    percent_used: Decimal | None
    status: BudgetStatus

    @property
    def over_budget(self) -> Money:
        """Amount spent beyond the budget (zero when within budget)."""
        return -self.remaining if self.remaining.cents < 0 else Money.zero()

    def to_dict(self) -> dict:
        return {
            "gross_revenue": self.gross_revenue.to_cents(),
            "revenue_source": self.revenue_source.value,
            "vat_rate": str(self.vat_rate),
            "income_tax_rate": str(self.income_tax_rate),
            "vat_amount": self.vat_amount.to_cents(),
            "revenue_excl_vat": self.revenue_excl_vat.to_cents(),
            "income_tax": self.income_tax.to_cents(),
            "business_expenses": self.business_expenses.to_cents(),
            "family_budget": self.family_budget.to_cents(),
            "family_spending": self.family_spending.to_cents(),
            "remaining": self.remaining.to_cents(),
            "percent_used": str(self.percent_used) if self.percent_used is not None else None,
            "status": self.status.value,
        }


def select_gross_revenue(computed: Money, override: Money | None) -> tuple[Money, RevenueSource]:
    """
    Pick the revenue figure used for the budget math.

    A manual override always wins; the computed figure is then only shown in
    the categorized totals, even if the two disagree (e.g. an invoice paid
    late).
    """
    if override is not None:
        return override, RevenueSource.MANUAL
    return computed, RevenueSource.COMPUTED


def calculate_budget(
    gross_revenue: Money,
    business_expense_total: Money,
    family_spending_total: Money = Money.zero(),
    vat_rate: Decimal = DEFAULT_VAT_RATE,
    income_tax_rate: Decimal = DEFAULT_INCOME_TAX_RATE,
    revenue_source: RevenueSource = RevenueSource.COMPUTED,
) -> BudgetFigures:
    """
    Compute the family budget figures.

    Args:
        gross_revenue: Revenue including VAT
        business_expense_total: Sum of business expense accounts (negative)
        family_spending_total: Sum of family (equity) accounts (negative)
        vat_rate: VAT fraction included in gross revenue
        income_tax_rate: Income tax fraction of revenue excluding VAT
        revenue_source: Whether gross_revenue was computed or supplied manually

    Returns:
        BudgetFigures; percent_used is None and status NO_BUDGET when the
        family budget is zero or negative
    """
    revenue_excl_vat = Money.from_decimal(gross_revenue.to_decimal() / (1 + vat_rate))
    vat_amount = gross_revenue - revenue_excl_vat
    income_tax = Money.from_decimal(revenue_excl_vat.to_decimal() * income_tax_rate)
    family_budget = revenue_excl_vat - income_tax + business_expense_total
    remaining = family_budget + family_spending_total

    if family_budget.cents <= 0:
        percent_used = None
        status = BudgetStatus.NO_BUDGET
    else:
        percent_used = (
            -(family_spending_total.to_decimal() / family_budget.to_decimal()) * 100
        ).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
        if remaining.cents > 0:
            status = BudgetStatus.UNDER_BUDGET
        elif remaining.cents == 0:
            status = BudgetStatus.ON_BUDGET
        else:
            status = BudgetStatus.OVER_BUDGET

    return BudgetFigures(
        gross_revenue=gross_revenue,
        revenue_source=revenue_source,
        vat_rate=vat_rate,
        income_tax_rate=income_tax_rate,
        vat_amount=vat_amount,
        revenue_excl_vat=revenue_excl_vat,
        income_tax=income_tax,
        business_expenses=business_expense_total,
        family_budget=family_budget,
        family_spending=family_spending_total,
        remaining=remaining,
        percent_used=percent_used,
        status=status,
    )
