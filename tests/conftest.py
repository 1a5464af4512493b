"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

import tempfile
from pathlib import Path
from typing import Any

import pytest

import familybudget.core.config as config_module
from familybudget.budget.accounts import AccountTable
from familybudget.moneybird.models import FinancialMutation, LedgerAccount


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_path:
        yield Path(temp_path)


@pytest.fixture
def ledger_accounts_data() -> list[dict[str, Any]]:
    """Ledger accounts as returned by ledger_accounts.json."""
    return [
        {"id": "100", "name": "Omzet", "account_type": "revenue", "parent_id": None},
        {"id": "200", "name": "Software", "account_type": "expenses", "parent_id": None},
        {"id": "201", "name": "Kantoorkosten", "account_type": "expenses", "parent_id": None},
        {"id": "300", "name": "Huishouden", "account_type": "equity", "parent_id": None},
        {"id": "301", "name": "Boodschappen", "account_type": "equity", "parent_id": "300"},
        {"id": "302", "name": "Drogist", "account_type": "equity", "parent_id": "300"},
        {"id": "310", "name": "Vervoer", "account_type": "equity", "parent_id": None},
        {"id": "311", "name": "Brandstof", "account_type": "equity", "parent_id": "310"},
        {"id": "900", "name": "Bankrekening", "account_type": "current_assets", "parent_id": None},
    ]


@pytest.fixture
def accounts(ledger_accounts_data) -> AccountTable:
    """AccountTable built from the sample ledger accounts."""
    return AccountTable(LedgerAccount.from_dict(item) for item in ledger_accounts_data)


@pytest.fixture
def sample_mutation_data() -> dict[str, Any]:
    """A mutation with one direct booking and one document payment."""
    return {
        "id": "m-1",
        "date": "2025-01-06",
        "amount": "-150.00",
        "message": "Albert Heijn",
        "state": "processed",
        "ledger_account_bookings": [
            {"id": "b-1", "ledger_account_id": "301", "price": "-45.99", "description": "Groceries"},
        ],
        "payments": [
            {
                "id": "p-1",
                "invoice_type": "Document",
                "invoice_id": "doc-1",
                "price": "104.01",
                "ledger_account_id": "900",
            },
        ],
    }


@pytest.fixture
def sample_mutation(sample_mutation_data) -> FinancialMutation:
    return FinancialMutation.from_dict(sample_mutation_data)


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch, tmp_path):
    """Set up test environment variables and reset cached configuration."""
    # Ensure tests don't use real credentials or data
    monkeypatch.setenv("BUDGET_ENV", "test")
    monkeypatch.setenv("BUDGET_DATA_DIR", str(tmp_path / "data"))

    monkeypatch.setenv("MONEYBIRD_API_TOKEN", "test-token")
    monkeypatch.setenv("MONEYBIRD_ADMINISTRATION_ID", "123456")
    monkeypatch.setenv("MONEYBIRD_RATE_LIMIT_DELAY", "0")
    monkeypatch.delenv("SLACK_BOT_TOKEN", raising=False)
    monkeypatch.delenv("SLACK_CHANNEL_ID", raising=False)
    monkeypatch.delenv("REVENUE_ACCOUNT_NAME", raising=False)
    monkeypatch.delenv("VAT_RATE", raising=False)
    monkeypatch.delenv("INCOME_TAX_RATE", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)

    monkeypatch.setattr(config_module, "_config", None)


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests for complete workflows")
    config.addinivalue_line("markers", "currency: Tests for currency handling and precision")
    config.addinivalue_line("markers", "moneybird: Tests for the Moneybird integration")
    config.addinivalue_line("markers", "budget: Tests for categorization and budget math")
    config.addinivalue_line("markers", "slow: Tests that take significant time to run")
