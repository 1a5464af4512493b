"""
Family Budget - Monthly Moneybird Budget Report

Pulls a month of Moneybird financial mutations, reclassifies them into a
family-budget model, computes the disposable family budget after VAT and
income tax, renders a pie chart and posts a summary to Slack.

Domain Packages:
- core: Money, dates, configuration, errors
- moneybird: API client, models, chunked fetching, document resolution
- budget: Categorization, hierarchy rollup, budget math, report
- analysis: Pie chart rendering
- notify: Slack delivery
- cli: Command-line interface

Example Usage:
    from familybudget.budget import calculate_budget
    from familybudget.core import Money

    figures = calculate_budget(Money.from_price("12100.00"), Money.from_price("-2000.00"))
"""

__version__ = "0.1.0"
__author__ = "Family Budget Maintainers"

from .core.config import Environment, get_config
from .core.money import Money

__all__ = [
    "Environment",
    "Money",
    "get_config",
]
