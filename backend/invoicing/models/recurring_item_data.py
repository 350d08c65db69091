from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class RecurringInvoiceItemData:
    """A single proration unit: a period and how many billing cycles it spans."""

    start_date: datetime
    end_date: datetime
    number_of_cycles: Decimal
