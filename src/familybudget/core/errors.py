"""
Exception hierarchy for the family budget report.

Anything derived from BudgetError stops a run before a report is sent,
unless the caller explicitly treats it as degraded input (document batches).
"""


class BudgetError(Exception):
    """Base class for errors that end a budget run."""


class ConfigurationError(BudgetError, ValueError):
    """Configuration is missing or invalid."""


class MoneybirdAPIError(BudgetError):
    """A Moneybird API request failed or returned an unexpected payload."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class RevenueAccountNotFoundError(BudgetError):
    """The designated revenue ledger account does not exist."""

    def __init__(self, name: str, kind: str):
        super().__init__(f"Revenue account {name!r} of type {kind!r} not found among ledger accounts")
        self.name = name
        self.kind = kind


class SlackError(BudgetError):
    """Posting the summary to Slack failed."""
