"""Billing events: recorded changes to a subscription's billing terms."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from decimal import Decimal
from enum import Enum
from typing import overload
from uuid import UUID

from invoicing.core.dates import add_months


class BillingPeriod(str, Enum):
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    ANNUAL = "annual"
    NO_BILLING_PERIOD = "no_billing_period"

    @property
    def number_of_months(self) -> int:
        return _MONTHS_PER_PERIOD[self]


_MONTHS_PER_PERIOD = {
    BillingPeriod.MONTHLY: 1,
    BillingPeriod.QUARTERLY: 3,
    BillingPeriod.ANNUAL: 12,
    BillingPeriod.NO_BILLING_PERIOD: 0,
}


class BillingModeType(str, Enum):
    IN_ADVANCE = "in_advance"
    IN_ARREAR = "in_arrear"


class TimeUnit(str, Enum):
    DAYS = "days"
    MONTHS = "months"
    YEARS = "years"
    UNLIMITED = "unlimited"


@dataclass(frozen=True)
class Duration:
    """Length of a plan phase."""

    unit: TimeUnit
    number: int | None = None

    def add_to(self, dt: datetime) -> datetime | None:
        """Return ``dt`` advanced by this duration, or None when unlimited."""
        if self.unit == TimeUnit.UNLIMITED:
            return None
        if self.number is None:
            return dt
        if self.unit == TimeUnit.DAYS:
            return dt + timedelta(days=self.number)
        if self.unit == TimeUnit.MONTHS:
            return add_months(dt, self.number)
        return add_months(dt, 12 * self.number)


@dataclass(frozen=True)
class BillingEvent:
    """One change in a subscription's billing terms, effective at a point in time."""

    subscription_id: UUID
    plan_name: str
    phase_name: str
    effective_date: datetime
    billing_period: BillingPeriod = BillingPeriod.NO_BILLING_PERIOD
    billing_mode: BillingModeType = BillingModeType.IN_ADVANCE
    bill_cycle_day: int = 1
    fixed_price: Decimal | None = None
    recurring_price: Decimal | None = None
    phase_duration: Duration | None = None
    total_ordering: int = 0

    def __post_init__(self) -> None:
        if not 1 <= self.bill_cycle_day <= 31:
            raise ValueError(f"Invalid bill cycle day: {self.bill_cycle_day}")

    def sort_key(self) -> tuple[datetime, int, str]:
        return (self.effective_date, self.total_ordering, str(self.subscription_id))

    def __lt__(self, other: BillingEvent) -> bool:
        if not isinstance(other, BillingEvent):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    @property
    def has_recurring_period(self) -> bool:
        return self.billing_period != BillingPeriod.NO_BILLING_PERIOD


@dataclass(frozen=True)
class BillingEventSet(Sequence[BillingEvent]):
    """Time-ordered, read-only view over an account's billing events.

    Events of several subscriptions may be interleaved; successors are looked
    up per subscription.
    """

    _events: tuple[BillingEvent, ...] = field(default=())

    @classmethod
    def of(cls, events: Iterable[BillingEvent] | None) -> BillingEventSet:
        return cls(tuple(sorted(events or (), key=BillingEvent.sort_key)))

    @overload
    def __getitem__(self, index: int) -> BillingEvent: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[BillingEvent]: ...

    def __getitem__(self, index: int | slice) -> BillingEvent | Sequence[BillingEvent]:
        return self._events[index]

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[BillingEvent]:
        return iter(self._events)

    def next_in_subscription(self, index: int) -> BillingEvent | None:
        """Closest event after position ``index`` for the same subscription."""
        subscription_id = self._events[index].subscription_id
        for candidate in self._events[index + 1 :]:
            if candidate.subscription_id == subscription_id:
                return candidate
        return None
