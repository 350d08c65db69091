"""Reconcile newly proposed invoice items against items already invoiced.

All functions are pure: they return new lists and never mutate their inputs.
"""

from collections import defaultdict, deque
from collections.abc import Sequence
from datetime import datetime
from uuid import UUID

from invoicing.models.invoice_item import EqualityKey, InvoiceItem, RecurringInvoiceItem


def remove_cancelling_items(existing_items: Sequence[InvoiceItem]) -> list[InvoiceItem]:
    """Drop credits together with the charges they reverse."""
    ids_to_remove: set[UUID] = set()
    for item in existing_items:
        if isinstance(item, RecurringInvoiceItem) and item.reversed_item_id is not None:
            ids_to_remove.add(item.id)
            ids_to_remove.add(item.reversed_item_id)

    return [item for item in existing_items if item.id not in ids_to_remove]


def remove_duplicated_items(
    proposed_items: Sequence[InvoiceItem],
    existing_items: Sequence[InvoiceItem],
) -> tuple[list[InvoiceItem], list[InvoiceItem]]:
    """Remove charges present on both sides.

    Each proposed item consumes at most one semantically equal existing item,
    the earliest one in ``existing_items``; both are dropped.

    Returns:
        Tuple of (remaining_proposed, remaining_existing), in input order.
    """
    positions: defaultdict[EqualityKey, deque[int]] = defaultdict(deque)
    for position, item in enumerate(existing_items):
        positions[item.equality_key()].append(position)

    matched: set[int] = set()
    remaining_proposed: list[InvoiceItem] = []
    for item in proposed_items:
        candidates = positions.get(item.equality_key())
        if candidates:
            matched.add(candidates.popleft())
        else:
            remaining_proposed.append(item)

    remaining_existing = [
        item for position, item in enumerate(existing_items) if position not in matched
    ]
    return remaining_proposed, remaining_existing


def credit_unmatched_items(
    existing_items: Sequence[InvoiceItem],
    invoice_id: UUID,
    created_date: datetime,
) -> list[RecurringInvoiceItem]:
    """Credits for previously billed recurring items that no longer apply.

    Fixed-price items are not credited.
    """
    return [
        item.as_credit(invoice_id, created_date)
        for item in existing_items
        if isinstance(item, RecurringInvoiceItem)
    ]


def reconcile(
    proposed_items: Sequence[InvoiceItem],
    existing_items: Sequence[InvoiceItem],
    invoice_id: UUID,
    created_date: datetime,
) -> list[InvoiceItem]:
    """Return the items that belong on the new invoice.

    Runs, in order: cancelling-pair removal on the existing items, duplicate
    removal across both sides, then credits for whatever existing recurring
    items are left over.
    """
    existing = remove_cancelling_items(existing_items)
    proposed, existing = remove_duplicated_items(proposed_items, existing)
    return proposed + credit_unmatched_items(existing, invoice_id, created_date)
