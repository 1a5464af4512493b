#!/usr/bin/env python3
"""Tests for document id collection and batch resolution."""

import logging
from unittest.mock import MagicMock

import pytest

from familybudget.core.errors import MoneybirdAPIError
from familybudget.core.money import Money
from familybudget.moneybird.client import MoneybirdClient
from familybudget.moneybird.documents import collect_document_ids, resolve_documents
from familybudget.moneybird.models import Document, FinancialMutation


def _mutation(mutation_id: str, payments: list[dict]) -> FinancialMutation:
    return FinancialMutation.from_dict(
        {"id": mutation_id, "date": "2025-01-10", "amount": "-10.00", "payments": payments}
    )


def _payment(invoice_type: str, invoice_id: str) -> dict:
    return {"id": f"p-{invoice_id}", "invoice_type": invoice_type, "invoice_id": invoice_id, "price": "10.00"}


def _document(document_id: str, *lines: tuple[str, str]) -> Document:
    return Document.from_dict(
        {
            "id": document_id,
            "details": [
                {"id": f"{document_id}-{i}", "ledger_account_id": account, "price": price}
                for i, (account, price) in enumerate(lines)
            ],
        }
    )


class FakeDocumentSource:
    """Returns canned documents per collection and records each call."""

    def __init__(self, responses: dict, failing: tuple[str, ...] = ()):
        self.responses = responses
        self.failing = failing
        self.calls: list[tuple[list[str], str]] = []

    def get_documents_batch(self, document_ids, document_type):
        self.calls.append((list(document_ids), document_type))
        if document_type in self.failing:
            raise MoneybirdAPIError("server error", status_code=500)
        return self.responses.get(document_type, [])


@pytest.mark.moneybird
class TestCollectDocumentIds:
    """Test which payments contribute document ids."""

    def test_dedupes_in_first_seen_order(self):
        mutations = [
            _mutation("m-1", [_payment("Document", "d2"), _payment("Document", "d1")]),
            _mutation("m-2", [_payment("Document", "d2"), _payment("Document", "d3")]),
        ]
        assert collect_document_ids(mutations) == ["d2", "d1", "d3"]

    def test_ignores_sales_invoices_and_empty_ids(self):
        mutations = [
            _mutation("m-1", [_payment("SalesInvoice", "s1"), _payment("Document", "")]),
        ]
        assert collect_document_ids(mutations) == []


@pytest.mark.moneybird
class TestResolveDocuments:
    """Test the two-call batch resolution."""

    def test_no_document_payments_makes_no_calls(self):
        source = FakeDocumentSource({})
        cache = resolve_documents(source, [_mutation("m-1", [_payment("SalesInvoice", "s1")])])

        assert len(cache) == 0
        assert cache.requested == 0
        assert source.calls == []

    def test_one_call_per_collection_with_all_ids(self):
        source = FakeDocumentSource(
            {
                "purchase_invoices": [_document("d1", ("200", "100.00"))],
                "receipts": [_document("d2", ("301", "4.01"))],
            }
        )
        mutations = [_mutation("m-1", [_payment("Document", "d1"), _payment("Document", "d2")])]

        cache = resolve_documents(source, mutations)

        assert source.calls == [(["d1", "d2"], "purchase_invoices"), (["d1", "d2"], "receipts")]
        assert set(cache) == {"d1", "d2"}
        assert cache["d1"][0].ledger_account_id == "200"
        assert cache.requested == 2
        assert cache.missing == 0

    def test_failed_collection_does_not_stop_the_other(self, caplog):
        source = FakeDocumentSource(
            {"receipts": [_document("d1", ("301", "4.01"))]}, failing=("purchase_invoices",)
        )
        mutations = [_mutation("m-1", [_payment("Document", "d1"), _payment("Document", "d9")])]

        with caplog.at_level(logging.WARNING):
            cache = resolve_documents(source, mutations)

        assert [call[1] for call in source.calls] == ["purchase_invoices", "receipts"]
        assert list(cache) == ["d1"]
        assert cache.missing == 1
        assert "purchase_invoices" in caplog.text

    def test_later_collection_wins(self):
        source = FakeDocumentSource(
            {
                "purchase_invoices": [_document("d1", ("200", "1.00"))],
                "receipts": [_document("d1", ("201", "2.00"))],
            }
        )
        cache = resolve_documents(source, [_mutation("m-1", [_payment("Document", "d1")])])
        assert cache["d1"][0].ledger_account_id == "201"

    def test_documents_without_lines_are_skipped(self):
        source = FakeDocumentSource({"purchase_invoices": [_document("d1")]})
        cache = resolve_documents(source, [_mutation("m-1", [_payment("Document", "d1")])])

        assert "d1" not in cache
        assert cache.missing == 1

    def test_malformed_batch_is_treated_as_empty(self):
        session = MagicMock()
        session.headers = {}
        responses = {
            "purchase_invoices": [{"details": []}],
            "receipts": [{"id": "d1", "details": [{"ledger_account_id": "301", "price": "4.01"}]}],
        }

        def request(method, url, **kwargs):
            collection = url.split("/documents/")[1].split("/")[0]
            response = MagicMock(status_code=200)
            response.json.return_value = responses[collection]
            return response

        session.request.side_effect = request
        client = MoneybirdClient("secret", "123456", session=session)

        cache = resolve_documents(client, [_mutation("m-1", [_payment("Document", "d1")])])

        assert session.request.call_count == 2
        assert list(cache) == ["d1"]
        assert cache["d1"][0].price == Money.from_cents(401)
