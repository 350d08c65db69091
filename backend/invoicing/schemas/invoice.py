"""Invoice generation request and response schemas."""

from datetime import UTC, datetime
from decimal import Decimal
from typing import Annotated
from uuid import UUID

from pydantic import AfterValidator, BaseModel, Field

from invoicing.models.billing_event import (
    BillingEvent,
    BillingModeType,
    BillingPeriod,
    Duration,
    TimeUnit,
)
from invoicing.models.invoice import Invoice
from invoicing.models.invoice_item import (
    FixedPriceInvoiceItem,
    InvoiceItem,
    InvoiceItemType,
    RecurringInvoiceItem,
)


def _to_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


# Naive datetimes are read as UTC; aware ones are converted
UTCDateTime = Annotated[datetime, AfterValidator(_to_utc)]


class DurationSchema(BaseModel):
    unit: TimeUnit
    number: int | None = Field(default=None, ge=0)


class BillingEventSchema(BaseModel):
    subscription_id: UUID
    plan_name: str
    phase_name: str
    effective_date: UTCDateTime
    billing_period: BillingPeriod = BillingPeriod.NO_BILLING_PERIOD
    billing_mode: BillingModeType = BillingModeType.IN_ADVANCE
    bill_cycle_day: int = Field(default=1, ge=1, le=31)
    fixed_price: Decimal | None = None
    recurring_price: Decimal | None = None
    phase_duration: DurationSchema | None = None
    total_ordering: int = 0

    def to_domain(self) -> BillingEvent:
        duration = self.phase_duration
        return BillingEvent(
            subscription_id=self.subscription_id,
            plan_name=self.plan_name,
            phase_name=self.phase_name,
            effective_date=self.effective_date,
            billing_period=self.billing_period,
            billing_mode=self.billing_mode,
            bill_cycle_day=self.bill_cycle_day,
            fixed_price=self.fixed_price,
            recurring_price=self.recurring_price,
            phase_duration=Duration(duration.unit, duration.number) if duration else None,
            total_ordering=self.total_ordering,
        )


class InvoiceItemSchema(BaseModel):
    """A line item, as issued on an earlier invoice or returned in a response."""

    id: UUID
    item_type: InvoiceItemType
    invoice_id: UUID
    subscription_id: UUID
    plan_name: str
    phase_name: str
    start_date: UTCDateTime
    end_date: UTCDateTime | None = None
    amount: Decimal
    currency: str = Field(min_length=3, max_length=3)
    created_date: UTCDateTime
    rate: Decimal | None = None
    reversed_item_id: UUID | None = None

    @classmethod
    def from_domain(cls, item: InvoiceItem) -> "InvoiceItemSchema":
        rate = None
        reversed_item_id = None
        if isinstance(item, RecurringInvoiceItem):
            rate = item.rate
            reversed_item_id = item.reversed_item_id
        return cls(
            id=item.id,
            item_type=item.item_type,
            invoice_id=item.invoice_id,
            subscription_id=item.subscription_id,
            plan_name=item.plan_name,
            phase_name=item.phase_name,
            start_date=item.start_date,
            end_date=item.end_date,
            amount=item.amount,
            currency=item.currency,
            created_date=item.created_date,
            rate=rate,
            reversed_item_id=reversed_item_id,
        )

    def to_domain(self) -> InvoiceItem:
        if self.item_type == InvoiceItemType.RECURRING:
            return RecurringInvoiceItem(
                id=self.id,
                invoice_id=self.invoice_id,
                subscription_id=self.subscription_id,
                plan_name=self.plan_name,
                phase_name=self.phase_name,
                start_date=self.start_date,
                end_date=self.end_date,
                amount=self.amount,
                currency=self.currency,
                created_date=self.created_date,
                rate=self.rate if self.rate is not None else Decimal("0"),
                reversed_item_id=self.reversed_item_id,
            )
        return FixedPriceInvoiceItem(
            id=self.id,
            invoice_id=self.invoice_id,
            subscription_id=self.subscription_id,
            plan_name=self.plan_name,
            phase_name=self.phase_name,
            start_date=self.start_date,
            end_date=self.end_date,
            amount=self.amount,
            currency=self.currency,
            created_date=self.created_date,
        )


class ExistingInvoiceSchema(BaseModel):
    id: UUID
    account_id: UUID
    invoice_date: UTCDateTime
    target_date: UTCDateTime
    currency: str = Field(min_length=3, max_length=3)
    items: list[InvoiceItemSchema] = Field(default_factory=list)

    def to_domain(self) -> Invoice:
        return Invoice(
            id=self.id,
            account_id=self.account_id,
            invoice_date=self.invoice_date,
            target_date=self.target_date,
            currency=self.currency,
            items=[item.to_domain() for item in self.items],
        )


class InvoiceGenerationRequest(BaseModel):
    """Request body for a dry-run invoice generation."""

    account_id: UUID
    target_date: UTCDateTime
    currency: str = Field(default="USD", min_length=3, max_length=3)
    events: list[BillingEventSchema] = Field(default_factory=list)
    existing_invoices: list[ExistingInvoiceSchema] = Field(default_factory=list)
    now: UTCDateTime | None = None


class InvoiceResponse(BaseModel):
    id: UUID
    account_id: UUID
    invoice_date: UTCDateTime
    target_date: UTCDateTime
    currency: str
    items: list[InvoiceItemSchema]
    total_amount: Decimal
    charged_amount: Decimal
    credited_amount: Decimal

    @classmethod
    def from_domain(cls, invoice: Invoice) -> "InvoiceResponse":
        return cls(
            id=invoice.id,
            account_id=invoice.account_id,
            invoice_date=invoice.invoice_date,
            target_date=invoice.target_date,
            currency=invoice.currency,
            items=[InvoiceItemSchema.from_domain(item) for item in invoice.items],
            total_amount=invoice.total_amount,
            charged_amount=invoice.charged_amount,
            credited_amount=invoice.credited_amount,
        )
