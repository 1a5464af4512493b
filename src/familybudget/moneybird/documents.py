#!/usr/bin/env python3
"""
Document Resolver

Finds the documents referenced by document-linked payments and fetches them
in two batch calls (purchase invoices, then receipts). Individual document
fetches would trip the Moneybird rate limit.
"""

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Protocol

from ..core.errors import MoneybirdAPIError
from .client import PURCHASE_INVOICES, RECEIPTS
from .models import Document, DocumentDetail, FinancialMutation, PaymentKind

logger = logging.getLogger(__name__)

DOCUMENT_COLLECTIONS = (PURCHASE_INVOICES, RECEIPTS)


class DocumentSource(Protocol):
    """Anything that can batch-fetch documents of one collection."""

    def get_documents_batch(self, document_ids: list[str], document_type: str) -> list[Document]: ...


class DocumentCache(Mapping[str, tuple[DocumentDetail, ...]]):
    """Read-only document id → line items lookup for one run."""

    def __init__(self, entries: Mapping[str, tuple[DocumentDetail, ...]] | None = None, requested: int = 0):
        self._entries = dict(entries or {})
        self.requested = requested

    def __getitem__(self, document_id: str) -> tuple[DocumentDetail, ...]:
        return self._entries[document_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def missing(self) -> int:
        """Number of requested documents that could not be mapped."""
        return max(self.requested - len(self._entries), 0)

    def __repr__(self) -> str:
        return f"DocumentCache({len(self)}/{self.requested} documents)"


def collect_document_ids(mutations: Iterable[FinancialMutation]) -> list[str]:
    """
    Collect unique ids of documents referenced by generic-document payments.

    Sales invoice payments need no document. Order of first appearance is
    kept so batch requests are deterministic.
    """
    seen: dict[str, None] = {}
    for mutation in mutations:
        for payment in mutation.payments:
            if payment.kind is PaymentKind.DOCUMENT and payment.invoice_id:
                seen.setdefault(payment.invoice_id, None)
    return list(seen)


def resolve_documents(client: DocumentSource, mutations: Iterable[FinancialMutation]) -> DocumentCache:
    """
    Build the document cache for a set of mutations.

    Issues at most two batch calls, one per document collection, each with
    the full id list. A failing collection is logged and treated as empty;
    the other collection is still tried. When both collections return the
    same id, the later one wins. Documents without line items are left out.

    Args:
        client: Document source (normally MoneybirdClient)
        mutations: All mutations of the period

    Returns:
        DocumentCache keyed by document id
    """
    document_ids = collect_document_ids(mutations)
    if not document_ids:
        logger.info("No document-linked payments; skipping document fetch")
        return DocumentCache()

    logger.info("Fetching %d unique documents", len(document_ids))

    entries: dict[str, tuple[DocumentDetail, ...]] = {}
    for collection in DOCUMENT_COLLECTIONS:
        try:
            documents = client.get_documents_batch(document_ids, collection)
        except MoneybirdAPIError as e:
            logger.warning("Fetching %s failed, treating as none found: %s", collection, e)
            continue

        logger.info("Found %d %s", len(documents), collection.replace("_", " "))
        for document in documents:
            if document.details:
                entries[document.id] = document.details

    cache = DocumentCache(entries, requested=len(document_ids))
    logger.info("Successfully mapped %d/%d documents", len(cache), len(document_ids))
    return cache
