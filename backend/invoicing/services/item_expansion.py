"""Expand billing events into the invoice items they imply."""

from datetime import datetime
from uuid import UUID

from invoicing.core.clock import Clock, SystemClock
from invoicing.core.config import InvoicingConfig
from invoicing.models.billing_event import BillingEvent, BillingEventSet
from invoicing.models.invoice_item import (
    FixedPriceInvoiceItem,
    InvoiceItem,
    RecurringInvoiceItem,
)
from invoicing.services.billing_modes.factory import get_billing_mode


class InvoiceItemExpander:
    """Walks an account's events and emits fixed-price and recurring items."""

    def __init__(self, config: InvoicingConfig | None = None, clock: Clock | None = None):
        self.config = config or InvoicingConfig()
        self.clock = clock or SystemClock()

    def expand(
        self,
        invoice_id: UUID,
        events: BillingEventSet,
        target_date: datetime,
        currency: str,
    ) -> list[InvoiceItem]:
        """Generate the items for every event up to the target date.

        Each event is billed until the next event of the same subscription,
        or open-ended when it is the subscription's last event.

        Returns:
            Items in event order, then billing period order.

        Raises:
            InvalidDateSequenceError: If a billing mode cannot prorate an event.
            UnsupportedBillingModeError: If an event uses an unregistered mode.
        """
        items: list[InvoiceItem] = []
        for index, event in enumerate(events):
            next_event = events.next_in_subscription(index)
            items.extend(self._process_event(invoice_id, event, next_event, target_date, currency))
        return items

    def _process_event(
        self,
        invoice_id: UUID,
        event: BillingEvent,
        next_event: BillingEvent | None,
        target_date: datetime,
        currency: str,
    ) -> list[InvoiceItem]:
        items: list[InvoiceItem] = []

        fixed_item = self._generate_fixed_price_item(invoice_id, event, target_date, currency)
        if fixed_item is not None:
            items.append(fixed_item)

        if event.has_recurring_period and event.effective_date <= target_date:
            items.extend(
                self._generate_recurring_items(invoice_id, event, next_event, target_date, currency)
            )

        return items

    def _generate_fixed_price_item(
        self,
        invoice_id: UUID,
        event: BillingEvent,
        target_date: datetime,
        currency: str,
    ) -> FixedPriceInvoiceItem | None:
        if event.effective_date > target_date or event.fixed_price is None:
            return None

        end_date = (
            event.phase_duration.add_to(event.effective_date)
            if event.phase_duration is not None
            else None
        )
        return FixedPriceInvoiceItem(
            invoice_id=invoice_id,
            subscription_id=event.subscription_id,
            plan_name=event.plan_name,
            phase_name=event.phase_name,
            start_date=event.effective_date,
            end_date=end_date,
            amount=event.fixed_price,
            currency=currency,
            created_date=self.clock.now(),
        )

    def _generate_recurring_items(
        self,
        invoice_id: UUID,
        event: BillingEvent,
        next_event: BillingEvent | None,
        target_date: datetime,
        currency: str,
    ) -> list[RecurringInvoiceItem]:
        billing_mode = get_billing_mode(event.billing_mode)
        end_date = next_event.effective_date if next_event is not None else None

        item_data = billing_mode.calculate_invoice_item_data(
            event.effective_date,
            end_date,
            target_date,
            event.bill_cycle_day,
            event.billing_period,
        )

        rate = event.recurring_price
        if rate is None:
            return []

        items: list[RecurringInvoiceItem] = []
        for datum in item_data:
            amount = (datum.number_of_cycles * rate).quantize(
                self.config.quantum, rounding=self.config.rounding_mode
            )
            items.append(
                RecurringInvoiceItem(
                    invoice_id=invoice_id,
                    subscription_id=event.subscription_id,
                    plan_name=event.plan_name,
                    phase_name=event.phase_name,
                    start_date=datum.start_date,
                    end_date=datum.end_date,
                    amount=amount,
                    currency=currency,
                    created_date=self.clock.now(),
                    rate=rate,
                )
            )
        return items
