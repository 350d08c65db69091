from fastapi import FastAPI

from invoicing.core.config import settings
from invoicing.routers import invoices

OPENAPI_TAGS = [
    {"name": "Invoices", "description": "Compute subscription invoices from billing events."},
]

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.version,
    debug=settings.DEBUG,
    description=(
        "Subscription invoice generation. Expands billing events into fixed and "
        "recurring charges and reconciles them against previously issued invoices."
    ),
    openapi_tags=OPENAPI_TAGS,
)

app.include_router(invoices.router, prefix="/v1/invoices", tags=["Invoices"])


@app.get("/")
async def root() -> dict[str, str]:
    return {
        "app": settings.APP_NAME,
        "version": settings.version,
        "status": "running",
    }
