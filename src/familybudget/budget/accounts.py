#!/usr/bin/env python3
"""
Account Table

Immutable id → ledger account lookup shared by categorization, hierarchy
rollup and reporting within a single run.
"""

from collections.abc import Iterable, Iterator, Mapping

from ..core.errors import RevenueAccountNotFoundError
from ..moneybird.models import AccountKind, LedgerAccount


class AccountTable(Mapping[str, LedgerAccount]):
    """Ledger accounts of one administration, keyed by id."""

    def __init__(self, accounts: Iterable[LedgerAccount]):
        self._accounts: dict[str, LedgerAccount] = {}
        for account in accounts:
            self._accounts[account.id] = account

    def __getitem__(self, account_id: str) -> LedgerAccount:
        return self._accounts[account_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._accounts)

    def __len__(self) -> int:
        return len(self._accounts)

    def of_kind(self, kind: AccountKind) -> list[LedgerAccount]:
        """All accounts of the given kind, in load order."""
        return [account for account in self._accounts.values() if account.kind is kind]

    def find_by_name(self, name: str, kind: AccountKind) -> LedgerAccount:
        """
        Find the first account with this display name and kind.

        Raises:
            RevenueAccountNotFoundError: If no account matches
        """
        for account in self._accounts.values():
            if account.name == name and account.kind is kind:
                return account
        raise RevenueAccountNotFoundError(name, kind.value)

    def name_of(self, account_id: str) -> str:
        """Display name for an id, falling back to the id itself."""
        account = self._accounts.get(account_id)
        return account.name if account else account_id

    def __repr__(self) -> str:
        return f"AccountTable({len(self)} accounts)"
