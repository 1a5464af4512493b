#!/usr/bin/env python3
"""
Moneybird API Client

Thin blocking client over the Moneybird REST API (v2). Every request is
made synchronously with a per-call timeout; nothing is retried.
"""

import logging
from collections.abc import Callable
from datetime import date
from typing import Any, TypeVar

import requests

from ..core.config import MoneybirdConfig
from ..core.errors import ConfigurationError, MoneybirdAPIError
from .models import Document, FinancialMutation, LedgerAccount

logger = logging.getLogger(__name__)

PURCHASE_INVOICES = "purchase_invoices"
RECEIPTS = "receipts"

T = TypeVar("T")


class MoneybirdClient:
    """Moneybird API client for a single administration."""

    def __init__(
        self,
        api_token: str,
        administration_id: str,
        base_url: str = "https://moneybird.com/api/v2",
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ):
        self.administration_id = administration_id
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"Bearer {api_token}",
                "Content-Type": "application/json",
            }
        )

    @classmethod
    def from_config(cls, config: MoneybirdConfig) -> "MoneybirdClient":
        """Build a client from configuration, failing fast on missing credentials."""
        if not config.api_token:
            raise ConfigurationError("MONEYBIRD_API_TOKEN environment variable not set")
        if not config.administration_id:
            raise ConfigurationError("MONEYBIRD_ADMINISTRATION_ID environment variable not set")
        return cls(
            api_token=config.api_token,
            administration_id=config.administration_id,
            base_url=config.base_url,
            timeout=config.timeout,
        )

    def _url(self, endpoint: str) -> str:
        return f"{self.base_url}/{self.administration_id}/{endpoint}"

    def _request(self, method: str, endpoint: str, **kwargs: Any) -> Any:
        """Perform an authenticated request and return the decoded JSON body."""
        url = self._url(endpoint)
        logger.debug("%s %s", method, url)

        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise MoneybirdAPIError(f"Request to {endpoint} failed: {e}") from e

        if response.status_code != 200:
            raise MoneybirdAPIError(
                f"API error (status {response.status_code}) on {endpoint}: {response.text}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise MoneybirdAPIError(f"Invalid JSON from {endpoint}: {e}") from e

    def _request_list(self, method: str, endpoint: str, **kwargs: Any) -> list[dict[str, Any]]:
        data = self._request(method, endpoint, **kwargs)
        if not isinstance(data, list):
            raise MoneybirdAPIError(f"Expected a JSON array from {endpoint}, got {type(data).__name__}")
        return data

    def _decode(
        self, endpoint: str, items: list[dict[str, Any]], decode: Callable[[dict[str, Any]], T]
    ) -> list[T]:
        """Turn raw records into models; a malformed record fails the whole call."""
        try:
            return [decode(item) for item in items]
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise MoneybirdAPIError(f"Unexpected payload from {endpoint}: {e!r}") from e

    def get_ledger_accounts(self) -> list[LedgerAccount]:
        """Fetch all ledger accounts of the administration."""
        items = self._request_list("GET", "ledger_accounts.json")
        return self._decode("ledger_accounts.json", items, LedgerAccount.from_dict)

    def get_financial_mutations(self, start: date, end: date) -> list[FinancialMutation]:
        """
        Fetch financial mutations for an inclusive period.

        The period filter is rejected or truncated upstream for long ranges,
        so callers should pass chunks from DateRange.chunks().
        """
        params = {"filter": f"period:{start.isoformat()}..{end.isoformat()}"}
        items = self._request_list("GET", "financial_mutations.json", params=params)
        return self._decode("financial_mutations.json", items, FinancialMutation.from_dict)

    def get_documents_batch(self, document_ids: list[str], document_type: str) -> list[Document]:
        """
        Fetch several documents of one type in a single call.

        Uses the synchronization endpoint, which accepts a list of ids.

        Args:
            document_ids: Document ids to fetch
            document_type: Collection name, e.g. "purchase_invoices" or "receipts"

        Returns:
            Documents found in that collection (ids of other types are ignored upstream)
        """
        if not document_ids:
            return []

        endpoint = f"documents/{document_type}/synchronization.json"
        items = self._request_list("POST", endpoint, json={"ids": list(document_ids)})
        return self._decode(endpoint, items, Document.from_dict)
