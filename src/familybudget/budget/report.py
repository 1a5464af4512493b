#!/usr/bin/env python3
"""
Monthly Budget Report

Groups categorized totals by account kind, assembles the monthly report and
formats it as the text summary posted to Slack and echoed by the CLI.
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

import pandas as pd

from ..core.dates import DateRange
from ..core.json_utils import write_json_with_defaults
from ..core.money import Money
from ..moneybird.models import AccountKind, FinancialMutation
from .accounts import AccountTable
from .calculator import BudgetFigures, BudgetStatus, RevenueSource
from .categorizer import CategorizationResult
from .hierarchy import RootTotals

logger = logging.getLogger(__name__)

KIND_SECTIONS = [
    (AccountKind.EQUITY, "Family Expenses (detailed)"),
    (AccountKind.REVENUE, "Revenue"),
    (AccountKind.EXPENSES, "Business Expenses"),
]


def totals_frame(totals: Mapping[str, Money], accounts: AccountTable) -> pd.DataFrame:
    """
    Categorized totals as a DataFrame joined with account names and kinds.

    Accounts missing from the table are left out.

    Returns:
        DataFrame with columns account_id, name, kind, cents
    """
    rows = [
        {
            "account_id": account_id,
            "name": accounts[account_id].name,
            "kind": accounts[account_id].kind.value,
            "cents": amount.to_cents(),
        }
        for account_id, amount in totals.items()
        if account_id in accounts
    ]
    return pd.DataFrame(rows, columns=["account_id", "name", "kind", "cents"])


def summarize_by_kind(
    totals: Mapping[str, Money], accounts: AccountTable
) -> dict[AccountKind, list[tuple[str, Money]]]:
    """
    Sum totals per account kind and display name.

    Accounts sharing a name within a kind are merged. Each kind's entries
    are ordered by descending absolute amount.
    """
    df = totals_frame(totals, accounts)
    summary: dict[AccountKind, list[tuple[str, Money]]] = {}
    if df.empty:
        return summary

    grouped = df.groupby(["kind", "name"], sort=True)["cents"].sum().reset_index()
    grouped["magnitude"] = grouped["cents"].abs()
    grouped = grouped.sort_values(["kind", "magnitude", "name"], ascending=[True, False, True])

    for kind_value, group in grouped.groupby("kind", sort=False):
        summary[AccountKind(kind_value)] = [
            (row.name, Money.from_cents(int(row.cents))) for row in group.itertuples(index=False)
        ]
    return summary


def kind_total(summary: Mapping[AccountKind, Sequence[tuple[str, Money]]], kind: AccountKind) -> Money:
    """Total of one kind in a summarize_by_kind() result (zero when absent)."""
    return Money.sum(amount for _, amount in summary.get(kind, []))


@dataclass
class MonthlyReport:
    """Everything a run produces for presentation."""

    period: DateRange
    mutation_count: int
    categorization: CategorizationResult
    kind_totals: dict[AccountKind, list[tuple[str, Money]]]
    root_totals: RootTotals
    budget: BudgetFigures
    computed_revenue: Money
    documents_requested: int = 0
    documents_mapped: int = 0
    low_confidence_accounts: list[str] = field(default_factory=list)

    @property
    def is_degraded(self) -> bool:
        """True when some input could not be fully classified."""
        return bool(
            self.categorization.payments_skipped
            or self.documents_mapped < self.documents_requested
            or self.low_confidence_accounts
        )

    def to_dict(self) -> dict:
        return {
            "period_start": self.period.start.isoformat(),
            "period_end": self.period.end.isoformat(),
            "mutation_count": self.mutation_count,
            "totals": {
                kind.value: {name: amount.to_cents() for name, amount in entries}
                for kind, entries in self.kind_totals.items()
            },
            "root_totals": {name: amount.to_cents() for name, amount in self.root_totals.ordered()},
            "computed_revenue": self.computed_revenue.to_cents(),
            "budget": self.budget.to_dict(),
            "bookings_processed": self.categorization.bookings_processed,
            "payments_processed": self.categorization.payments_processed,
            "payments_skipped": self.categorization.payments_skipped,
            "documents_requested": self.documents_requested,
            "documents_mapped": self.documents_mapped,
            "low_confidence_accounts": self.low_confidence_accounts,
        }


def _section(title: str, entries: Sequence[tuple[str, Money]]) -> list[str]:
    lines = [f"*{title}:*"]
    lines.extend(f"   {name}: {amount}" for name, amount in entries)
    lines.append(f"   TOTAL: {Money.sum(amount for _, amount in entries)}")
    return lines


def format_summary(report: MonthlyReport) -> str:
    """
    Render the report as plain text with Slack-style emphasis.

    Degraded inputs are stated in the summary rather than hidden.
    """
    budget = report.budget
    lines = [f"*Monthly Summary: {report.period.month_label()}* ({report.period})", ""]

    lines.append("*Family Expenses (by root category):*")
    for name, amount in report.root_totals.ordered():
        lines.append(f"   {name}: {amount}")
    lines.append(f"   TOTAL: {report.root_totals.total}")

    for kind, title in KIND_SECTIONS:
        if kind in report.kind_totals:
            lines.append("")
            lines.extend(_section(title, report.kind_totals[kind]))

    lines.append("")
    lines.append("*Family Budget Calculation*")
    if budget.revenue_source is RevenueSource.MANUAL:
        lines.append(f"Using manual revenue: {budget.gross_revenue} (computed: {report.computed_revenue})")
    lines.append(f"Gross Revenue: {budget.gross_revenue}")
    lines.append(f"VAT ({budget.vat_rate * 100:.0f}%): {-budget.vat_amount}")
    lines.append(f"Revenue excl. VAT: {budget.revenue_excl_vat}")
    lines.append(f"Income Tax ({budget.income_tax_rate * 100:.0f}%): {-budget.income_tax}")
    lines.append(f"Business Expenses: {budget.business_expenses}")
    lines.append(f"💰 Available Family Budget: {budget.family_budget}")
    lines.append("")
    lines.append(f"💸 Family Spending: {budget.family_spending}")
    if budget.status is BudgetStatus.NO_BUDGET:
        lines.append("⚠️ Budget Used: n/a (no available family budget this period)")
    else:
        lines.append(f"📊 Budget Used: {budget.percent_used:.1f}%")
    if budget.remaining.cents < 0:
        lines.append(f"🚨 Over Budget: {budget.over_budget}")
    else:
        lines.append(f"💵 Remaining: {budget.remaining}")

    notes = _degraded_notes(report)
    if notes:
        lines.append("")
        lines.append("*Data notes:*")
        lines.extend(f"   • {note}" for note in notes)

    return "\n".join(lines)


def _degraded_notes(report: MonthlyReport) -> list[str]:
    notes = []
    if report.documents_mapped < report.documents_requested:
        notes.append(f"Mapped {report.documents_mapped}/{report.documents_requested} linked documents")
    if report.categorization.payments_skipped:
        notes.append(f"{report.categorization.payments_skipped} payment(s) could not be categorized")
    if report.low_confidence_accounts:
        notes.append(
            "Low-confidence totals (booked on payment account): " + ", ".join(report.low_confidence_accounts)
        )
    return notes


def save_detailed_data(
    report: MonthlyReport, mutations: Sequence[FinancialMutation], output_dir: Path
) -> Path:
    """
    Write period, mutations and report figures to financial_data_YYYY-MM.json.

    Returns:
        Path of the written file
    """
    output_file = output_dir / f"financial_data_{report.period.month_key()}.json"
    data = report.to_dict()
    data["mutations"] = [mutation.to_dict() for mutation in mutations]
    write_json_with_defaults(output_file, data)
    logger.info("Detailed data saved to %s", output_file)
    return output_file
