"""
Moneybird Integration Package

Client, domain models and fetch helpers for the Moneybird bookkeeping API.

Key Components:
- client: Blocking REST client (ledger accounts, mutations, document batches)
- models: Typed ledger accounts, mutations, payments and documents
- fetcher: Chunked, rate-limited mutation retrieval
- documents: Batched document resolution into a line-item cache
"""

from .client import PURCHASE_INVOICES, RECEIPTS, MoneybirdClient
from .documents import DocumentCache, collect_document_ids, resolve_documents
from .fetcher import fetch_mutations
from .models import (
    AccountKind,
    Document,
    DocumentDetail,
    FinancialMutation,
    LedgerAccount,
    LedgerAccountBooking,
    Payment,
    PaymentKind,
)

__all__ = [
    "PURCHASE_INVOICES",
    "RECEIPTS",
    "AccountKind",
    "Document",
    "DocumentCache",
    "DocumentDetail",
    "FinancialMutation",
    "LedgerAccount",
    "LedgerAccountBooking",
    "MoneybirdClient",
    "Payment",
    "PaymentKind",
    "collect_document_ids",
    "fetch_mutations",
    "resolve_documents",
]
