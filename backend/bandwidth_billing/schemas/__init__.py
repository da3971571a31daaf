from bandwidth_billing.schemas.pricing import LineItemInput, LinePriceRequest, InvoicePriceRequest, InvoicePriceResponse
from bandwidth_billing.schemas.billing import PurchaseBillCreate, SalesInvoiceCreate, PurchaseBillResponse, SalesInvoiceResponse
from bandwidth_billing.schemas.ledger import CollectionCreate, CollectionUpdate, ProviderPaymentCreate, ProviderPaymentUpdate

__all__ = [
    "LineItemInput",
    "LinePriceRequest",
    "InvoicePriceRequest",
    "InvoicePriceResponse",
    "PurchaseBillCreate",
    "SalesInvoiceCreate",
    "PurchaseBillResponse",
    "SalesInvoiceResponse",
    "CollectionCreate",
    "CollectionUpdate",
    "ProviderPaymentCreate",
    "ProviderPaymentUpdate",
]
