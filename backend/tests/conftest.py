"""Shared test fixtures for all test modules."""

import uuid
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

import pytest

from invoicing.core.clock import FixedClock
from invoicing.core.config import InvoicingConfig
from invoicing.models.billing_event import BillingEvent, BillingModeType, BillingPeriod
from invoicing.models.invoice_item import FixedPriceInvoiceItem, RecurringInvoiceItem

# Well-known identifiers used across all tests
ACCOUNT_ID = uuid.UUID("00000000-0000-0000-0000-000000000001")
SUBSCRIPTION_ID = uuid.UUID("00000000-0000-0000-0000-0000000000a1")
OTHER_SUBSCRIPTION_ID = uuid.UUID("00000000-0000-0000-0000-0000000000b2")
INVOICE_ID = uuid.UUID("00000000-0000-0000-0000-0000000000c3")

NOW = datetime(2020, 1, 1, tzinfo=UTC)


def utc(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, tzinfo=UTC)


def make_event(**kwargs: Any) -> BillingEvent:
    """Create a monthly in-advance billing event with sensible defaults."""
    defaults: dict[str, Any] = {
        "subscription_id": SUBSCRIPTION_ID,
        "plan_name": "pro-monthly",
        "phase_name": "pro-monthly-evergreen",
        "effective_date": utc(2020, 1, 1),
        "billing_period": BillingPeriod.MONTHLY,
        "billing_mode": BillingModeType.IN_ADVANCE,
        "bill_cycle_day": 1,
        "fixed_price": None,
        "recurring_price": Decimal("30.00"),
        "phase_duration": None,
    }
    defaults.update(kwargs)
    return BillingEvent(**defaults)


def make_recurring_item(**kwargs: Any) -> RecurringInvoiceItem:
    defaults: dict[str, Any] = {
        "invoice_id": INVOICE_ID,
        "subscription_id": SUBSCRIPTION_ID,
        "plan_name": "pro-monthly",
        "phase_name": "pro-monthly-evergreen",
        "start_date": utc(2020, 1, 1),
        "end_date": utc(2020, 2, 1),
        "amount": Decimal("30.00"),
        "currency": "USD",
        "created_date": NOW,
        "rate": Decimal("30.00"),
    }
    defaults.update(kwargs)
    return RecurringInvoiceItem(**defaults)


def make_fixed_item(**kwargs: Any) -> FixedPriceInvoiceItem:
    defaults: dict[str, Any] = {
        "invoice_id": INVOICE_ID,
        "subscription_id": SUBSCRIPTION_ID,
        "plan_name": "pro-monthly",
        "phase_name": "pro-monthly-trial",
        "start_date": utc(2020, 1, 1),
        "end_date": utc(2020, 1, 31),
        "amount": Decimal("10.00"),
        "currency": "USD",
        "created_date": NOW,
    }
    defaults.update(kwargs)
    return FixedPriceInvoiceItem(**defaults)


@pytest.fixture
def clock():
    return FixedClock(NOW)


@pytest.fixture
def config():
    return InvoicingConfig()
