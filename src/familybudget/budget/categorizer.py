#!/usr/bin/env python3
"""
Categorization Engine

Turns financial mutations into signed per-ledger-account totals.

Moneybird classifies a bank mutation in one of two ways:

1. Ledger account bookings: the mutation is booked straight onto an account.
   The price is already signed (expenses negative, income positive) and is
   added as-is.
2. Payments: the mutation pays an invoice or document. Sales invoice payments
   count as revenue. Generic document payments are resolved through the
   document's line items, whose prices are positive for expense lines, so
   each line is SUBTRACTED from its account to land on the booking sign
   convention. Any other payment falls back to its own ledger account, which
   is usually a bank or clearing account; those totals are low-confidence.
"""

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field

from ..core.money import Money
from ..moneybird.models import FinancialMutation, PaymentKind
from .accounts import AccountTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CategorizationContext:
    """Everything the engine needs besides the mutations themselves."""

    accounts: AccountTable
    documents: Mapping[str, tuple]
    revenue_account_id: str


class CategoryTotals(Mapping[str, Money]):
    """
    Account id → accumulated signed amount.

    Only accounts that received at least one contribution have an entry.
    Accounts fed by the fallback payment path are tracked separately.
    """

    def __init__(self) -> None:
        self._totals: dict[str, Money] = {}
        self._low_confidence: set[str] = set()

    def add(self, account_id: str, amount: Money, low_confidence: bool = False) -> None:
        self._totals[account_id] = self._totals.get(account_id, Money.zero()) + amount
        if low_confidence:
            self._low_confidence.add(account_id)

    def subtract(self, account_id: str, amount: Money) -> None:
        self.add(account_id, -amount)

    def __getitem__(self, account_id: str) -> Money:
        return self._totals[account_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._totals)

    def __len__(self) -> int:
        return len(self._totals)

    @property
    def low_confidence_ids(self) -> frozenset[str]:
        """Accounts credited through the fallback payment path."""
        return frozenset(self._low_confidence)

    def is_low_confidence(self, account_id: str) -> bool:
        return account_id in self._low_confidence

    def __repr__(self) -> str:
        return f"CategoryTotals({len(self)} accounts)"


@dataclass
class CategorizationResult:
    """Category totals plus processing counters for the report."""

    totals: CategoryTotals
    bookings_processed: int = 0
    payments_processed: int = 0
    payments_skipped: int = 0
    missing_document_ids: list[str] = field(default_factory=list)
    unknown_account_ids: set[str] = field(default_factory=set)


def categorize(mutations: Iterable[FinancialMutation], context: CategorizationContext) -> CategorizationResult:
    """
    Aggregate mutations into per-account totals.

    Args:
        mutations: All mutations of the period
        context: Account table, document cache and revenue account id

    Returns:
        CategorizationResult with deterministic totals for fixed inputs
    """
    totals = CategoryTotals()
    result = CategorizationResult(totals=totals)

    for mutation in mutations:
        for booking in mutation.ledger_account_bookings:
            totals.add(booking.ledger_account_id, booking.price)
            result.bookings_processed += 1

        for payment in mutation.payments:
            kind = payment.kind

            if kind is PaymentKind.SALES_INVOICE:
                totals.add(context.revenue_account_id, payment.price)
                result.payments_processed += 1

            elif kind is PaymentKind.DOCUMENT:
                details = context.documents.get(payment.invoice_id)
                if details is None:
                    logger.debug(
                        "Skipping payment %s: document %s not resolved", payment.id, payment.invoice_id
                    )
                    result.payments_skipped += 1
                    result.missing_document_ids.append(payment.invoice_id)
                    continue
                for detail in details:
                    if detail.ledger_account_id:
                        totals.subtract(detail.ledger_account_id, detail.price)
                result.payments_processed += 1

            elif payment.ledger_account_id:
                logger.debug(
                    "Payment %s (%s) credited to fallback account %s",
                    payment.id,
                    payment.invoice_type or "no invoice type",
                    payment.ledger_account_id,
                )
                totals.add(payment.ledger_account_id, payment.price, low_confidence=True)
                result.payments_processed += 1

            else:
                result.payments_skipped += 1

    result.unknown_account_ids = {account_id for account_id in totals if account_id not in context.accounts}
    if result.unknown_account_ids:
        logger.warning(
            "%d categorized account(s) not found in ledger accounts: %s",
            len(result.unknown_account_ids),
            ", ".join(sorted(result.unknown_account_ids)),
        )
    if totals.low_confidence_ids:
        logger.warning(
            "Fallback classification used for %d account(s): %s",
            len(totals.low_confidence_ids),
            ", ".join(sorted(context.accounts.name_of(i) for i in totals.low_confidence_ids)),
        )

    logger.info(
        "Processed %d bookings and %d payments (%d skipped); aggregated into %d categories",
        result.bookings_processed,
        result.payments_processed,
        result.payments_skipped,
        len(totals),
    )
    return result
