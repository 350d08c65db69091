from invoicing.models.billing_event import (
    BillingEvent,
    BillingEventSet,
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
from invoicing.models.recurring_item_data import RecurringInvoiceItemData

__all__ = [
    "BillingEvent",
    "BillingEventSet",
    "BillingModeType",
    "BillingPeriod",
    "Duration",
    "FixedPriceInvoiceItem",
    "Invoice",
    "InvoiceItem",
    "InvoiceItemType",
    "RecurringInvoiceItem",
    "RecurringInvoiceItemData",
    "TimeUnit",
]
