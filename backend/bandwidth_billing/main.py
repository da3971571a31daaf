from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from bandwidth_billing.routers import (
    catalog,
    categories,
    collections,
    counterparties,
    pricing,
    provider_payments,
    purchase_bills,
    reports,
    sales_invoices
)
from bandwidth_billing.config import settings
import logging
import sys

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)

logger = logging.getLogger(__name__)

logger.info("=" * 60)
logger.info("Starting Bandwidth Billing API")
logger.info("=" * 60)
logger.info(f"Default currency: {settings.default_currency}")
logger.info(f"Money precision: {settings.money_decimal_places} decimal places")
logger.info("=" * 60)

# Tables are created by Alembic migrations (alembic upgrade head)

app = FastAPI(
    title="Bandwidth Billing API",
    description="Purchase bills, sales invoices and payment ledger for bandwidth resellers",
    version="1.0.0"
)


def parse_cors_origins(origins_str: str) -> list:
    """Parse comma-separated CORS origins into a list"""
    return [origin.strip() for origin in origins_str.split(",") if origin.strip()]


app.add_middleware(
    CORSMiddleware,
    allow_origins=parse_cors_origins(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)

# Include routers
app.include_router(pricing.router)
app.include_router(categories.router)
app.include_router(catalog.router)
app.include_router(counterparties.router)
app.include_router(purchase_bills.router)
app.include_router(sales_invoices.router)
app.include_router(collections.router)
app.include_router(provider_payments.router)
app.include_router(reports.router)


@app.get("/")
def root():
    return {"message": "Bandwidth Billing API", "version": "1.0.0"}


@app.get("/health")
def health_check():
    return {"status": "healthy"}


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Return unexpected failures as JSON instead of a bare 500 page"""
    logger.error(f"Unhandled exception on {request.method} {request.url.path}: {str(exc)}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": f"Internal server error: {str(exc)}"}
    )
