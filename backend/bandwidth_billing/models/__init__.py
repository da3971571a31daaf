from bandwidth_billing.models.bandwidth_category import BandwidthCategory
from bandwidth_billing.models.bandwidth_item import BandwidthItem
from bandwidth_billing.models.counterparty import BandwidthProvider, BandwidthClient
from bandwidth_billing.models.purchase_bill import PurchaseBill
from bandwidth_billing.models.purchase_bill_item import PurchaseBillItem
from bandwidth_billing.models.sales_invoice import SalesInvoice
from bandwidth_billing.models.sales_invoice_item import SalesInvoiceItem
from bandwidth_billing.models.bill_collection import BillCollection
from bandwidth_billing.models.provider_payment import ProviderPayment
from bandwidth_billing.models.activity_log import ActivityLog

__all__ = ["BandwidthCategory", "BandwidthItem", "BandwidthProvider", "BandwidthClient", "PurchaseBill", "PurchaseBillItem", "SalesInvoice", "SalesInvoiceItem", "BillCollection", "ProviderPayment", "ActivityLog"]
