#!/usr/bin/env python3
"""
Monthly Budget Run

Orchestrates one sequential report run: load ledger accounts, fetch
mutations chunk by chunk, resolve documents, categorize, roll up, and
compute the budget.
"""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field

from ..core.config import BudgetConfig, MoneybirdConfig
from ..core.dates import DateRange
from ..core.money import Money
from ..moneybird.client import MoneybirdClient
from ..moneybird.documents import resolve_documents
from ..moneybird.fetcher import fetch_mutations
from ..moneybird.models import AccountKind, FinancialMutation
from .accounts import AccountTable
from .calculator import calculate_budget, select_gross_revenue
from .categorizer import CategorizationContext, categorize
from .hierarchy import aggregate_root_totals
from .report import MonthlyReport, kind_total, summarize_by_kind

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """Report plus the raw inputs it was built from."""

    report: MonthlyReport
    mutations: list[FinancialMutation] = field(default_factory=list)


class MonthlyBudgetRun:
    """
    Builds the monthly budget report from Moneybird data.

    Any failure loading accounts or a mutation chunk, or a missing revenue
    account, raises before a report exists. Document batch failures only
    degrade the report.
    """

    def __init__(
        self,
        client: MoneybirdClient,
        moneybird_config: MoneybirdConfig | None = None,
        budget_config: BudgetConfig | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.client = client
        self.moneybird_config = moneybird_config or MoneybirdConfig()
        self.budget_config = budget_config or BudgetConfig()
        self.sleep = sleep

    def run(
        self,
        period: DateRange,
        revenue_override: Money | None = None,
        revenue_account_name: str | None = None,
    ) -> RunResult:
        """
        Produce the report for ``period``.

        Args:
            period: Inclusive reporting period
            revenue_override: Manual gross revenue; replaces the computed figure in the budget math
            revenue_account_name: Override of the configured revenue account name

        Returns:
            RunResult with the report and fetched mutations
        """
        logger.info("Fetching financial data for %s", period.month_label())

        accounts = AccountTable(self.client.get_ledger_accounts())
        logger.info("Found %d ledger accounts", len(accounts))

        name = revenue_account_name or self.budget_config.revenue_account_name
        revenue_account = accounts.find_by_name(name, AccountKind(self.budget_config.revenue_account_type))

        mutations = fetch_mutations(
            self.client,
            period,
            chunk_days=self.moneybird_config.chunk_days,
            delay=self.moneybird_config.rate_limit_delay,
            sleep=self.sleep,
        )

        documents = resolve_documents(self.client, mutations)

        context = CategorizationContext(
            accounts=accounts,
            documents=documents,
            revenue_account_id=revenue_account.id,
        )
        categorization = categorize(mutations, context)

        kind_totals = summarize_by_kind(categorization.totals, accounts)
        root_totals = aggregate_root_totals(categorization.totals, accounts)

        computed_revenue = kind_total(kind_totals, AccountKind.REVENUE)
        gross_revenue, revenue_source = select_gross_revenue(computed_revenue, revenue_override)
        if revenue_override is not None:
            logger.info("Using manual revenue: %s (computed: %s)", gross_revenue, computed_revenue)

        budget = calculate_budget(
            gross_revenue=gross_revenue,
            business_expense_total=kind_total(kind_totals, AccountKind.EXPENSES),
            family_spending_total=kind_total(kind_totals, AccountKind.EQUITY),
            vat_rate=self.budget_config.vat_rate,
            income_tax_rate=self.budget_config.income_tax_rate,
            revenue_source=revenue_source,
        )
        logger.info(
            "Available family budget %s, remaining %s (%s)",
            budget.family_budget,
            budget.remaining,
            budget.status.value,
        )

        report = MonthlyReport(
            period=period,
            mutation_count=len(mutations),
            categorization=categorization,
            kind_totals=kind_totals,
            root_totals=root_totals,
            budget=budget,
            computed_revenue=computed_revenue,
            documents_requested=documents.requested,
            documents_mapped=len(documents),
            low_confidence_accounts=sorted(
                accounts.name_of(account_id) for account_id in categorization.totals.low_confidence_ids
            ),
        )
        return RunResult(report=report, mutations=mutations)
