"""Errors raised while generating invoices."""

from datetime import datetime
from enum import Enum


class ErrorCode(str, Enum):
    INVOICE_TARGET_DATE_TOO_FAR_IN_THE_FUTURE = "invoice_target_date_too_far_in_the_future"
    INVOICE_INVALID_DATE_SEQUENCE = "invoice_invalid_date_sequence"


class InvoiceApiError(ValueError):
    """Business error that aborts invoice generation.

    Subclasses ``ValueError`` so API layers can map it to a 400 response the
    same way as other validation failures.
    """

    def __init__(self, code: ErrorCode, message: str):
        super().__init__(message)
        self.code = code


class TargetDateTooFarInFutureError(InvoiceApiError):
    def __init__(self, target_date: datetime, max_months: int):
        super().__init__(
            ErrorCode.INVOICE_TARGET_DATE_TOO_FAR_IN_THE_FUTURE,
            f"Target date {target_date.isoformat()} is more than "
            f"{max_months} months in the future",
        )
        self.target_date = target_date
        self.max_months = max_months


class InvalidDateSequenceError(InvoiceApiError):
    def __init__(
        self,
        start_date: datetime,
        end_date: datetime | None,
        target_date: datetime,
    ):
        end = end_date.isoformat() if end_date is not None else "none"
        super().__init__(
            ErrorCode.INVOICE_INVALID_DATE_SEQUENCE,
            f"Invalid date sequence: start {start_date.isoformat()}, "
            f"end {end}, target {target_date.isoformat()}",
        )
        self.start_date = start_date
        self.end_date = end_date
        self.target_date = target_date


class UnsupportedBillingModeError(NotImplementedError):
    """No billing mode strategy is registered for the requested selector."""
