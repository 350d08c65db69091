"""Invoice items produced by the invoice generator.

Items carry a surrogate ``id`` for storage and back-references, but two items
are considered the same charge when their :meth:`InvoiceItem.equality_key`
match. This is what lets a re-run recognise charges that were already billed
by an earlier run with different ids and timestamps.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, ClassVar
from uuid import UUID


class InvoiceItemType(str, Enum):
    FIXED = "fixed"
    RECURRING = "recurring"


def generate_uuid() -> uuid.UUID:
    """Generate a new UUID."""
    return uuid.uuid4()


EqualityKey = tuple[InvoiceItemType, UUID, str, str, datetime, datetime | None, Decimal]


@dataclass(frozen=True, eq=False)
class InvoiceItem:
    """Base invoice line item."""

    item_type: ClassVar[InvoiceItemType]

    invoice_id: UUID
    subscription_id: UUID
    plan_name: str
    phase_name: str
    start_date: datetime
    end_date: datetime | None
    amount: Decimal
    currency: str
    created_date: datetime
    id: UUID = field(default_factory=generate_uuid)

    def equality_key(self) -> EqualityKey:
        return (
            self.item_type,
            self.subscription_id,
            self.plan_name,
            self.phase_name,
            self.start_date,
            self.end_date,
            self.amount,
        )

    def sort_key(self) -> tuple[str, datetime, tuple[bool, datetime], str]:
        # Open-ended items sort after dated ones
        end = (self.end_date is None, self.end_date or self.start_date)
        return (str(self.subscription_id), self.start_date, end, self.item_type.value)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, InvoiceItem):
            return NotImplemented
        return self.equality_key() == other.equality_key()

    def __hash__(self) -> int:
        return hash(self.equality_key())

    def __lt__(self, other: InvoiceItem) -> bool:
        if not isinstance(other, InvoiceItem):
            return NotImplemented
        return self.sort_key() < other.sort_key()


@dataclass(frozen=True, eq=False)
class FixedPriceInvoiceItem(InvoiceItem):
    """One-time charge for a plan phase."""

    item_type: ClassVar[InvoiceItemType] = InvoiceItemType.FIXED


@dataclass(frozen=True, eq=False)
class RecurringInvoiceItem(InvoiceItem):
    """Charge for one (possibly prorated) recurring billing period.

    A credit is a recurring item with a negated amount whose
    ``reversed_item_id`` points at the charge it cancels.
    """

    item_type: ClassVar[InvoiceItemType] = InvoiceItemType.RECURRING

    rate: Decimal = Decimal("0")
    reversed_item_id: UUID | None = None

    @property
    def reverses_item(self) -> bool:
        return self.reversed_item_id is not None

    def as_credit(self, invoice_id: UUID, created_date: datetime) -> RecurringInvoiceItem:
        return replace(
            self,
            id=generate_uuid(),
            invoice_id=invoice_id,
            amount=-self.amount,
            created_date=created_date,
            reversed_item_id=self.id,
        )
