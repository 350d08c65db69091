"""Bill-in-advance mode: each cycle is charged at its start."""

from datetime import datetime
from decimal import Decimal

from invoicing.core.dates import add_months_on_day, days_between, with_day_of_month
from invoicing.core.exceptions import InvalidDateSequenceError
from invoicing.models.billing_event import BillingPeriod
from invoicing.models.recurring_item_data import RecurringInvoiceItemData
from invoicing.services.billing_modes.base import BillingMode


def first_billing_cycle_date(start_date: datetime, bill_cycle_day: int) -> datetime:
    """First date on or after ``start_date`` falling on the bill cycle day."""
    candidate = with_day_of_month(start_date, bill_cycle_day)
    if candidate < start_date:
        candidate = add_months_on_day(start_date, 1, bill_cycle_day)
    return candidate


def effective_end_date(
    first_bcd: datetime,
    target_date: datetime,
    end_date: datetime | None,
    months_per_period: int,
    bill_cycle_day: int,
) -> datetime:
    """End of the span to bill: the cycle containing the target, capped by end_date."""
    if end_date is not None and end_date <= target_date:
        return end_date

    proposed = first_bcd
    periods = 0
    while proposed <= target_date:
        periods += 1
        proposed = add_months_on_day(first_bcd, periods * months_per_period, bill_cycle_day)

    if end_date is not None and end_date < proposed:
        return end_date
    return proposed


def _ratio(numerator_days: int, denominator_days: int) -> Decimal:
    return Decimal(numerator_days) / Decimal(denominator_days)


class InAdvanceBillingMode(BillingMode):
    def calculate_invoice_item_data(
        self,
        start_date: datetime,
        end_date: datetime | None,
        target_date: datetime,
        bill_cycle_day: int,
        billing_period: BillingPeriod,
    ) -> list[RecurringInvoiceItemData]:
        if end_date is not None and end_date < start_date:
            raise InvalidDateSequenceError(start_date, end_date, target_date)
        if target_date < start_date:
            raise InvalidDateSequenceError(start_date, end_date, target_date)

        months = billing_period.number_of_months
        if months == 0:
            raise ValueError(f"Billing period {billing_period.value} has no recurring cycle")

        first_bcd = first_billing_cycle_date(start_date, bill_cycle_day)
        end = effective_end_date(first_bcd, target_date, end_date, months, bill_cycle_day)
        items: list[RecurringInvoiceItemData] = []

        # Leading stub up to the first bill cycle day
        if start_date < first_bcd:
            stub_end = min(first_bcd, end)
            stub_days = days_between(start_date, stub_end)
            if stub_days > 0:
                previous_bcd = add_months_on_day(first_bcd, -months, bill_cycle_day)
                items.append(
                    RecurringInvoiceItemData(
                        start_date=start_date,
                        end_date=stub_end,
                        number_of_cycles=_ratio(stub_days, days_between(previous_bcd, first_bcd)),
                    )
                )

        # Whole cycles
        periods = 0
        period_start = first_bcd
        period_end = add_months_on_day(first_bcd, months, bill_cycle_day)
        while period_end <= end:
            items.append(
                RecurringInvoiceItemData(
                    start_date=period_start,
                    end_date=period_end,
                    number_of_cycles=Decimal(1),
                )
            )
            periods += 1
            period_start = period_end
            period_end = add_months_on_day(first_bcd, (periods + 1) * months, bill_cycle_day)

        # Trailing stub when the subscription ends mid-cycle
        if period_start < end:
            stub_days = days_between(period_start, end)
            if stub_days > 0:
                items.append(
                    RecurringInvoiceItemData(
                        start_date=period_start,
                        end_date=end,
                        number_of_cycles=_ratio(stub_days, days_between(period_start, period_end)),
                    )
                )

        return items
