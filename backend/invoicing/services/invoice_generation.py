import logging
from collections.abc import Iterable
from datetime import datetime
from uuid import UUID

from invoicing.core.clock import Clock, SystemClock
from invoicing.core.config import InvoicingConfig
from invoicing.core.dates import months_between
from invoicing.core.exceptions import TargetDateTooFarInFutureError
from invoicing.models.billing_event import BillingEvent, BillingEventSet
from invoicing.models.invoice import Invoice
from invoicing.models.invoice_item import InvoiceItem
from invoicing.services.item_expansion import InvoiceItemExpander
from invoicing.services.reconciliation import reconcile

logger = logging.getLogger(__name__)


class InvoiceGenerator:
    """Computes the items an account must be invoiced for a target date."""

    def __init__(self, config: InvoicingConfig | None = None, clock: Clock | None = None):
        self.config = config or InvoicingConfig()
        self.clock = clock or SystemClock()
        self.expander = InvoiceItemExpander(self.config, self.clock)

    def generate_invoice(
        self,
        account_id: UUID,
        events: Iterable[BillingEvent] | None,
        existing_invoices: Iterable[Invoice] | None,
        target_date: datetime,
        target_currency: str,
    ) -> Invoice | None:
        """Generate the next invoice for an account.

        Charges already present on ``existing_invoices`` are not billed again;
        previously billed recurring charges that the current event history no
        longer produces are credited back.

        Args:
            account_id: The account being invoiced.
            events: The account's billing events, in any order.
            existing_invoices: Invoices already issued to the account.
            target_date: Date through which charges are computed. Raised to
                the latest target date among existing invoices.
            target_currency: Currency of the generated items.

        Returns:
            The invoice, or None when there is nothing to bill.

        Raises:
            TargetDateTooFarInFutureError: If target_date is beyond the horizon.
            InvalidDateSequenceError: If an event's dates cannot be prorated.
        """
        event_set = BillingEventSet.of(events)
        if not event_set:
            return None

        self._validate_target_date(target_date)

        invoices = list(existing_invoices or [])
        existing_items: list[InvoiceItem] = sorted(
            (item for invoice in invoices for item in invoice.items),
            key=InvoiceItem.sort_key,
        )

        target_date = self._adjust_target_date(invoices, target_date)
        logger.debug(
            "Generating invoice for account %s through %s (%d events, %d existing items)",
            account_id,
            target_date.isoformat(),
            len(event_set),
            len(existing_items),
        )

        invoice = Invoice(
            account_id=account_id,
            invoice_date=self.clock.now(),
            target_date=target_date,
            currency=target_currency,
        )
        proposed_items = self.expander.expand(invoice.id, event_set, target_date, target_currency)
        items = reconcile(proposed_items, existing_items, invoice.id, self.clock.now())

        if not items:
            logger.info("Nothing to bill for account %s through %s", account_id, target_date)
            return None

        invoice.add_invoice_items(items)
        logger.info(
            "Generated invoice %s for account %s with %d items",
            invoice.id,
            account_id,
            invoice.number_of_items,
        )
        return invoice

    def _validate_target_date(self, target_date: datetime) -> None:
        max_months = self.config.max_number_of_months_in_future
        if months_between(self.clock.now(), target_date) > max_months:
            raise TargetDateTooFarInFutureError(target_date, max_months)

    @staticmethod
    def _adjust_target_date(invoices: list[Invoice], target_date: datetime) -> datetime:
        """Never bill through an earlier date than an existing invoice did."""
        max_date = target_date
        for invoice in invoices:
            if invoice.target_date > max_date:
                max_date = invoice.target_date
        return max_date
