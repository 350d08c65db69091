from abc import ABC, abstractmethod
from datetime import datetime

from invoicing.models.billing_event import BillingPeriod
from invoicing.models.recurring_item_data import RecurringInvoiceItemData


class BillingMode(ABC):
    """Splits a subscription's billable span into prorated billing periods."""

    @abstractmethod
    def calculate_invoice_item_data(
        self,
        start_date: datetime,
        end_date: datetime | None,
        target_date: datetime,
        bill_cycle_day: int,
        billing_period: BillingPeriod,
    ) -> list[RecurringInvoiceItemData]:
        """Return the periods to bill, in chronological order.

        Args:
            start_date: Effective date of the billing event.
            end_date: Effective date of the subscription's next event, or None
                when billing is open-ended.
            target_date: Date through which charges are computed.
            bill_cycle_day: Day of month that anchors period boundaries.
            billing_period: Length of a full billing cycle.

        Raises:
            InvalidDateSequenceError: If the dates cannot be prorated.
        """
