#!/usr/bin/env python3
"""Tests for the categorization engine."""

import logging

import pytest

from familybudget.budget.accounts import AccountTable
from familybudget.budget.categorizer import CategorizationContext, categorize
from familybudget.core.errors import RevenueAccountNotFoundError
from familybudget.core.money import Money
from familybudget.moneybird.models import AccountKind, Document, FinancialMutation, LedgerAccount


def _mutation(mutation_id: str, bookings=(), payments=()) -> FinancialMutation:
    return FinancialMutation.from_dict(
        {
            "id": mutation_id,
            "date": "2025-01-15",
            "amount": "0.00",
            "ledger_account_bookings": list(bookings),
            "payments": list(payments),
        }
    )


def _booking(account_id: str, price: str) -> dict:
    return {"id": f"b-{account_id}-{price}", "ledger_account_id": account_id, "price": price}


def _payment(invoice_type: str, invoice_id: str, price: str, account_id: str = "900") -> dict:
    return {
        "id": f"p-{invoice_id}",
        "invoice_type": invoice_type,
        "invoice_id": invoice_id,
        "price": price,
        "ledger_account_id": account_id,
    }


def _details(document_id: str, *lines: tuple[str, str]):
    return Document.from_dict(
        {
            "id": document_id,
            "details": [{"ledger_account_id": account, "price": price} for account, price in lines],
        }
    ).details


@pytest.fixture
def context(accounts):
    return CategorizationContext(
        accounts=accounts,
        documents={
            "doc-1": _details("doc-1", ("301", "100.00"), ("302", "50.00")),
            "doc-2": _details("doc-2", ("200", "19.99")),
        },
        revenue_account_id="100",
    )


@pytest.mark.budget
class TestDirectBookings:
    """Direct bookings keep their sign."""

    def test_bookings_are_summed_per_account(self, context):
        mutations = [
            _mutation("m-1", bookings=[_booking("301", "-45.99"), _booking("311", "-60.00")]),
            _mutation("m-2", bookings=[_booking("301", "-12.01")]),
        ]

        result = categorize(mutations, context)

        assert result.totals["301"] == Money.from_cents(-5800)
        assert result.totals["311"] == Money.from_cents(-6000)
        assert result.bookings_processed == 3

    def test_positive_booking_stays_positive(self, context):
        result = categorize([_mutation("m-1", bookings=[_booking("301", "20.00")])], context)
        assert result.totals["301"] == Money.from_cents(2000)

    def test_untouched_accounts_have_no_entry(self, context):
        result = categorize([_mutation("m-1", bookings=[_booking("301", "-1.00")])], context)
        assert "302" not in result.totals
        assert len(result.totals) == 1


@pytest.mark.budget
class TestPayments:
    """Payments are routed by invoice type."""

    def test_document_lines_are_subtracted(self, context):
        result = categorize([_mutation("m-1", payments=[_payment("Document", "doc-1", "150.00")])], context)

        assert result.totals["301"] == Money.from_cents(-10000)
        assert result.totals["302"] == Money.from_cents(-5000)
        assert "900" not in result.totals
        assert result.payments_processed == 1

    def test_same_document_paid_twice_counts_twice(self, context):
        mutations = [
            _mutation("m-1", payments=[_payment("Document", "doc-2", "19.99")]),
            _mutation("m-2", payments=[_payment("Document", "doc-2", "19.99")]),
        ]
        result = categorize(mutations, context)
        assert result.totals["200"] == Money.from_cents(-3998)

    def test_sales_invoice_goes_to_revenue_account(self, context):
        result = categorize([_mutation("m-1", payments=[_payment("SalesInvoice", "inv-7", "500.00")])], context)

        assert result.totals["100"] == Money.from_cents(50000)
        assert "900" not in result.totals

    def test_unresolved_document_is_skipped(self, context):
        result = categorize([_mutation("m-1", payments=[_payment("Document", "doc-404", "10.00")])], context)

        assert len(result.totals) == 0
        assert result.payments_skipped == 1
        assert result.missing_document_ids == ["doc-404"]

    def test_other_payment_falls_back_and_is_low_confidence(self, context, caplog):
        mutation = _mutation("m-1", payments=[_payment("ExternalSalesInvoice", "x-1", "75.00", account_id="900")])

        with caplog.at_level(logging.WARNING):
            result = categorize([mutation], context)

        assert result.totals["900"] == Money.from_cents(7500)
        assert result.totals.is_low_confidence("900")
        assert result.totals.low_confidence_ids == frozenset({"900"})
        assert "Bankrekening" in caplog.text

    def test_other_payment_without_account_is_skipped(self, context):
        mutation = _mutation("m-1", payments=[_payment("ExternalSalesInvoice", "x-1", "75.00", account_id="")])
        result = categorize([mutation], context)

        assert len(result.totals) == 0
        assert result.payments_skipped == 1

    def test_mixed_mutation(self, context, sample_mutation):
        context = CategorizationContext(
            accounts=context.accounts,
            documents={"doc-1": _details("doc-1", ("302", "104.01"))},
            revenue_account_id="100",
        )
        result = categorize([sample_mutation], context)

        assert result.totals["301"] == Money.from_cents(-4599)
        assert result.totals["302"] == Money.from_cents(-10401)


@pytest.mark.budget
class TestUnknownAccounts:
    """Totals on accounts missing from the ledger are reported."""

    def test_unknown_account_is_reported(self, context, caplog):
        with caplog.at_level(logging.WARNING):
            result = categorize([_mutation("m-1", bookings=[_booking("999", "-5.00")])], context)

        assert result.unknown_account_ids == {"999"}
        assert result.totals["999"] == Money.from_cents(-500)
        assert "999" in caplog.text

    def test_deterministic(self, context):
        mutations = [
            _mutation("m-1", bookings=[_booking("301", "-1.10")], payments=[_payment("Document", "doc-1", "1")]),
            _mutation("m-2", payments=[_payment("SalesInvoice", "s", "2.20")]),
        ]
        first = categorize(mutations, context).totals
        second = categorize(mutations, context).totals
        assert dict(first) == dict(second)


@pytest.mark.budget
class TestAccountTable:
    """Test account lookups."""

    def test_find_by_name(self, accounts):
        assert accounts.find_by_name("Omzet", AccountKind.REVENUE).id == "100"

    def test_find_by_name_requires_matching_kind(self, accounts):
        with pytest.raises(RevenueAccountNotFoundError, match="Software"):
            accounts.find_by_name("Software", AccountKind.REVENUE)

    def test_of_kind(self, accounts):
        assert [a.id for a in accounts.of_kind(AccountKind.EXPENSES)] == ["200", "201"]

    def test_name_of_unknown_falls_back_to_id(self, accounts):
        assert accounts.name_of("301") == "Boodschappen"
        assert accounts.name_of("999") == "999"

    def test_later_duplicate_id_wins(self, accounts):
        table = AccountTable([*accounts.values(), LedgerAccount("301", "Food", AccountKind.EQUITY, "equity")])
        assert table["301"].name == "Food"
