from fastapi import APIRouter

from bandwidth_billing.schemas.pricing import (
    LinePriceRequest,
    LinePriceResponse,
    InvoicePriceRequest,
    InvoicePriceResponse
)
from bandwidth_billing.utils.pricing_rules import InvoiceTotals, Settlement, aggregate_invoice, price_line, settle

router = APIRouter(prefix="/api/pricing", tags=["pricing"])


def quote_response(totals: InvoiceTotals, settlement: Settlement) -> InvoicePriceResponse:
    return InvoicePriceResponse(
        subtotal=totals.subtotal,
        vat_amount=totals.vat_amount,
        discount=totals.discount,
        total_amount=totals.total_amount,
        paid_amount=settlement.paid_amount,
        due_amount=settlement.due_amount,
        payment_status=settlement.payment_status,
        lines=[LinePriceResponse.model_validate(line) for line in totals.lines]
    )


@router.post("/line", response_model=LinePriceResponse)
def price_single_line(line: LinePriceRequest):
    """Price one line (flat, or pro-rata when a valid date range is given)"""
    return LinePriceResponse.model_validate(
        price_line(line.rate, line.quantity, line.vat_percent, line.from_date, line.to_date)
    )


@router.post("/invoice", response_model=InvoicePriceResponse)
def price_invoice(request: InvoicePriceRequest):
    """Aggregate lines into invoice totals and derive the payment status for `paid_amount`"""
    totals = aggregate_invoice(request.lines, request.discount)
    return quote_response(totals, settle(totals.total_amount, request.paid_amount))
