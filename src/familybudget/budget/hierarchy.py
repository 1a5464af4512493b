#!/usr/bin/env python3
"""
Hierarchy Aggregator

Rolls family (equity) account totals up to their root category.
"""

import logging
from collections.abc import Iterator, Mapping

from ..core.money import Money
from ..moneybird.models import AccountKind, LedgerAccount
from .accounts import AccountTable

logger = logging.getLogger(__name__)


class RootTotals(Mapping[str, Money]):
    """Root display name → rolled-up amount, presented largest magnitude first."""

    def __init__(self, totals: Mapping[str, Money] | None = None):
        self._totals: dict[str, Money] = dict(totals or {})

    def __getitem__(self, name: str) -> Money:
        return self._totals[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._totals)

    def __len__(self) -> int:
        return len(self._totals)

    def ordered(self) -> list[tuple[str, Money]]:
        """(name, amount) pairs sorted by descending absolute amount, then name."""
        return sorted(self._totals.items(), key=lambda item: (-item[1].abs().cents, item[0]))

    @property
    def total(self) -> Money:
        return Money.sum(self._totals.values())

    def __repr__(self) -> str:
        return f"RootTotals({dict(self.ordered())!r})"


def find_root(account: LedgerAccount, accounts: AccountTable) -> LedgerAccount:
    """
    Walk the parent chain up to the root account.

    Stops at an account without a parent or whose parent id is unknown.
    If the chain loops back on itself, the last account visited before
    re-entry is treated as the root and a warning is logged.
    """
    current = account
    visited = {current.id}

    while current.parent_id:
        parent = accounts.get(current.parent_id)
        if parent is None:
            logger.debug("Parent %s of account %s not found; treating as root", current.parent_id, current.name)
            break
        if parent.id in visited:
            logger.warning(
                "Cycle in parent chain of account %s at %s; treating %s as root",
                account.name,
                parent.name,
                current.name,
            )
            break
        visited.add(parent.id)
        current = parent

    return current


def aggregate_root_totals(totals: Mapping[str, Money], accounts: AccountTable) -> RootTotals:
    """
    Sum equity account totals by root category name.

    A root with its own direct total has it added to its descendants' totals.
    Roots sharing a display name are merged.

    Args:
        totals: Category totals (account id → signed amount)
        accounts: Account table for the run

    Returns:
        RootTotals for equity accounts only
    """
    rolled: dict[str, Money] = {}
    for account_id, amount in totals.items():
        account = accounts.get(account_id)
        if account is None or account.kind is not AccountKind.EQUITY:
            continue

        root = find_root(account, accounts)
        rolled[root.name] = rolled.get(root.name, Money.zero()) + amount

    return RootTotals(rolled)
