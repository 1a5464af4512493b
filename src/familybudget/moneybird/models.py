#!/usr/bin/env python3
"""
Moneybird Domain Models

Type-safe models representing Moneybird API data structures.
These models stay close to the API field names and use Money/FinancialDate primitives.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..core.dates import FinancialDate
from ..core.money import Money

# Payment invoice types
SALES_INVOICE = "SalesInvoice"
GENERIC_DOCUMENT = "Document"


class AccountKind(Enum):
    """Ledger account categories relevant to the family budget."""

    REVENUE = "revenue"
    EXPENSES = "expenses"
    EQUITY = "equity"  # Private/family withdrawals
    OTHER = "other"

    @classmethod
    def from_account_type(cls, account_type: str | None) -> "AccountKind":
        """Map a Moneybird ``account_type`` onto a kind; unknown types become OTHER."""
        try:
            return cls(account_type)
        except ValueError:
            return cls.OTHER


class PaymentKind(Enum):
    """How a payment record is classified."""

    SALES_INVOICE = "sales_invoice"
    DOCUMENT = "document"
    OTHER = "other"


@dataclass(frozen=True)
class LedgerAccount:
    """
    Moneybird ledger account.

    A node in the category tree; ``parent_id`` is None for root accounts.
    """

    id: str
    name: str
    kind: AccountKind
    account_type: str
    parent_id: str | None = None

    @property
    def is_root(self) -> bool:
        return not self.parent_id

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LedgerAccount":
        """
        Create LedgerAccount from API dict.

        Args:
            data: Dictionary from ledger_accounts.json

        Returns:
            LedgerAccount instance
        """
        account_type = data.get("account_type") or ""
        return cls(
            id=str(data["id"]),
            name=data.get("name") or "",
            kind=AccountKind.from_account_type(account_type),
            account_type=account_type,
            parent_id=str(data["parent_id"]) if data.get("parent_id") else None,
        )


@dataclass(frozen=True)
class LedgerAccountBooking:
    """A direct booking: amount already signed (expenses negative, income positive)."""

    id: str
    ledger_account_id: str
    price: Money
    description: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LedgerAccountBooking":
        return cls(
            id=str(data.get("id", "")),
            ledger_account_id=str(data.get("ledger_account_id") or ""),
            price=Money.from_price(data.get("price")),
            description=data.get("description") or "",
        )


@dataclass(frozen=True)
class Payment:
    """
    A payment linked to an invoice or document.

    ``price`` uses the unsigned convention; ``ledger_account_id`` is a
    fallback that normally points at a bank or clearing account.
    """

    id: str
    invoice_type: str
    invoice_id: str
    price: Money
    ledger_account_id: str = ""
    payment_date: str | None = None

    @property
    def kind(self) -> PaymentKind:
        if self.invoice_type == SALES_INVOICE:
            return PaymentKind.SALES_INVOICE
        if self.invoice_type == GENERIC_DOCUMENT:
            return PaymentKind.DOCUMENT
        return PaymentKind.OTHER

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Payment":
        return cls(
            id=str(data.get("id", "")),
            invoice_type=data.get("invoice_type") or "",
            invoice_id=str(data.get("invoice_id") or ""),
            price=Money.from_price(data.get("price")),
            ledger_account_id=str(data.get("ledger_account_id") or ""),
            payment_date=data.get("payment_date"),
        )


@dataclass(frozen=True)
class FinancialMutation:
    """
    Moneybird financial mutation (one bank-ledger event).

    Carries direct bookings, document-linked payments, or both.
    """

    id: str
    date: FinancialDate
    amount: Money
    message: str = ""
    contra_account_name: str = ""
    state: str = ""
    payments: tuple[Payment, ...] = field(default_factory=tuple)
    ledger_account_bookings: tuple[LedgerAccountBooking, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FinancialMutation":
        """
        Create FinancialMutation from API dict.

        Args:
            data: Dictionary from financial_mutations.json

        Returns:
            FinancialMutation instance
        """
        return cls(
            id=str(data["id"]),
            date=FinancialDate.from_string(data["date"]),
            amount=Money.from_price(data.get("amount")),
            message=data.get("message") or "",
            contra_account_name=data.get("contra_account_name") or "",
            state=data.get("state") or "",
            payments=tuple(Payment.from_dict(p) for p in data.get("payments") or []),
            ledger_account_bookings=tuple(
                LedgerAccountBooking.from_dict(b) for b in data.get("ledger_account_bookings") or []
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serializable summary used by the detailed data export."""
        return {
            "id": self.id,
            "date": str(self.date),
            "amount": self.amount.to_cents(),
            "message": self.message,
            "contra_account_name": self.contra_account_name,
            "state": self.state,
            "payments": [
                {
                    "id": p.id,
                    "invoice_type": p.invoice_type,
                    "invoice_id": p.invoice_id,
                    "price": p.price.to_cents(),
                    "ledger_account_id": p.ledger_account_id,
                }
                for p in self.payments
            ],
            "ledger_account_bookings": [
                {
                    "id": b.id,
                    "ledger_account_id": b.ledger_account_id,
                    "price": b.price.to_cents(),
                    "description": b.description,
                }
                for b in self.ledger_account_bookings
            ],
        }


@dataclass(frozen=True)
class DocumentDetail:
    """Document line item; ``price`` is positive for revenue and expense lines alike."""

    id: str
    ledger_account_id: str
    price: Money

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DocumentDetail":
        return cls(
            id=str(data.get("id", "")),
            ledger_account_id=str(data.get("ledger_account_id") or ""),
            price=Money.from_price(data.get("price")),
        )


@dataclass(frozen=True)
class Document:
    """Moneybird document (purchase invoice or receipt)."""

    id: str
    details: tuple[DocumentDetail, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Document":
        return cls(
            id=str(data["id"]),
            details=tuple(DocumentDetail.from_dict(d) for d in data.get("details") or []),
        )
