from invoicing.schemas.invoice import (
    BillingEventSchema,
    DurationSchema,
    ExistingInvoiceSchema,
    InvoiceGenerationRequest,
    InvoiceItemSchema,
    InvoiceResponse,
)

__all__ = [
    "BillingEventSchema",
    "DurationSchema",
    "ExistingInvoiceSchema",
    "InvoiceGenerationRequest",
    "InvoiceItemSchema",
    "InvoiceResponse",
]
