"""Invoice aggregate returned by the invoice generator."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from invoicing.models.invoice_item import InvoiceItem, generate_uuid


@dataclass
class Invoice:
    """An account's invoice for a target date and its line items."""

    account_id: UUID
    invoice_date: datetime
    target_date: datetime
    currency: str
    items: list[InvoiceItem] = field(default_factory=list)
    id: UUID = field(default_factory=generate_uuid)

    def add_invoice_items(self, items: Iterable[InvoiceItem]) -> None:
        self.items.extend(items)

    @property
    def number_of_items(self) -> int:
        return len(self.items)

    @property
    def total_amount(self) -> Decimal:
        return sum((item.amount for item in self.items), Decimal("0"))

    @property
    def charged_amount(self) -> Decimal:
        """Sum of positive line amounts."""
        return sum((item.amount for item in self.items if item.amount > 0), Decimal("0"))

    @property
    def credited_amount(self) -> Decimal:
        """Sum of credit amounts, as a positive number."""
        return sum((-item.amount for item in self.items if item.amount < 0), Decimal("0"))

    def items_for_subscription(self, subscription_id: UUID) -> list[InvoiceItem]:
        return [item for item in self.items if item.subscription_id == subscription_id]
