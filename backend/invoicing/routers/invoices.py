from fastapi import APIRouter, Depends, HTTPException, Response

from invoicing.core.clock import Clock, FixedClock, SystemClock
from invoicing.core.config import InvoicingConfig, settings
from invoicing.core.exceptions import InvoiceApiError
from invoicing.schemas.invoice import InvoiceGenerationRequest, InvoiceResponse
from invoicing.services.invoice_generation import InvoiceGenerator

router = APIRouter()


def get_invoicing_config() -> InvoicingConfig:
    return InvoicingConfig.from_settings(settings)


@router.post(
    "/generate",
    response_model=InvoiceResponse,
    summary="Generate invoice (dry run)",
    responses={
        204: {"description": "Nothing to bill"},
        400: {"description": "Target date too far in the future or invalid date sequence"},
    },
)
async def generate_invoice(
    data: InvoiceGenerationRequest,
    config: InvoicingConfig = Depends(get_invoicing_config),
) -> InvoiceResponse | Response:
    """Compute the next invoice for an account without persisting anything."""
    clock: Clock = FixedClock(data.now) if data.now is not None else SystemClock()
    generator = InvoiceGenerator(config=config, clock=clock)
    try:
        invoice = generator.generate_invoice(
            account_id=data.account_id,
            events=[event.to_domain() for event in data.events],
            existing_invoices=[invoice.to_domain() for invoice in data.existing_invoices],
            target_date=data.target_date,
            target_currency=data.currency,
        )
    except InvoiceApiError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None

    if invoice is None:
        return Response(status_code=204)
    return InvoiceResponse.from_domain(invoice)
