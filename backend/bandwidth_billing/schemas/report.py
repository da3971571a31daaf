from pydantic import BaseModel
from typing import Dict
from decimal import Decimal


class BillingSummary(BaseModel):
    """Tenant-wide bandwidth billing figures"""
    total_providers: int
    total_clients: int
    total_purchases: Decimal
    total_sales: Decimal
    total_payable: Decimal
    total_receivable: Decimal
    total_collected: Decimal
    total_paid: Decimal
    purchase_bills_by_status: Dict[str, int] = {}
    sales_invoices_by_status: Dict[str, int] = {}
