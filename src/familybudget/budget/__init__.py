"""
Family Budget Package

Categorization, hierarchy rollup and budget math on top of Moneybird data.

Key Components:
- categorizer: Bookings and payments → signed per-account totals
- hierarchy: Family account totals rolled up to root categories
- calculator: VAT and income-tax adjusted family budget
- report: Kind grouping, text summary and detailed data export
- monthly: Sequential orchestration of a report run
"""

from .accounts import AccountTable
from .calculator import (
    BudgetFigures,
    BudgetStatus,
    RevenueSource,
    calculate_budget,
    select_gross_revenue,
)
from .categorizer import CategorizationContext, CategorizationResult, CategoryTotals, categorize
from .hierarchy import RootTotals, aggregate_root_totals, find_root
from .monthly import MonthlyBudgetRun, RunResult
from .report import MonthlyReport, format_summary, save_detailed_data, summarize_by_kind

__all__ = [
    "AccountTable",
    "BudgetFigures",
    "BudgetStatus",
    "CategorizationContext",
    "CategorizationResult",
    "CategoryTotals",
    "MonthlyBudgetRun",
    "MonthlyReport",
    "RevenueSource",
    "RootTotals",
    "RunResult",
    "aggregate_root_totals",
    "calculate_budget",
    "categorize",
    "find_root",
    "format_summary",
    "save_detailed_data",
    "select_gross_revenue",
    "summarize_by_kind",
]
