"""
Core Utilities Package

Shared primitives used across the budget report.

This package provides:
- Currency handling with integer cents for precision
- Date primitives and bounded period chunking
- Configuration management for environment-specific settings
- The exception hierarchy for fatal and degraded conditions
"""

from .config import (
    BudgetConfig,
    ChartConfig,
    Config,
    Environment,
    MoneybirdConfig,
    SlackConfig,
    get_config,
    reload_config,
)
from .currency import format_cents, parse_price_to_cents
from .dates import DateRange, FinancialDate, PeriodChunks
from .errors import (
    BudgetError,
    ConfigurationError,
    MoneybirdAPIError,
    RevenueAccountNotFoundError,
    SlackError,
)
from .money import Money

__all__ = [
    "BudgetConfig",
    "BudgetError",
    "ChartConfig",
    "Config",
    "ConfigurationError",
    "DateRange",
    "Environment",
    "FinancialDate",
    "Money",
    "MoneybirdAPIError",
    "MoneybirdConfig",
    "PeriodChunks",
    "RevenueAccountNotFoundError",
    "SlackConfig",
    "SlackError",
    "format_cents",
    "get_config",
    "parse_price_to_cents",
    "reload_config",
]
