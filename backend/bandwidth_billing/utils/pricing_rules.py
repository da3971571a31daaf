"""
Pricing rules shared by purchase bills and sales invoices.

Everything here is pure arithmetic over values already in memory. Amounts are
returned un-rounded; use quantize_money() when a value is stored or shown.
Non-finite inputs come back as NaN or Infinity rather than raising.
"""
import calendar
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Context, Decimal, DivisionByZero, Overflow, ROUND_HALF_EVEN, ROUND_HALF_UP, localcontext
from enum import Enum
from typing import Iterable, List, Optional, Tuple, Union

logger = logging.getLogger(__name__)

DateLike = Union[date, datetime, str, None]
Number = Union[Decimal, int, float, str]

HUNDRED = Decimal("100")
ZERO = Decimal("0")

# Invalid operations (Infinity * 0, Infinity - Infinity) yield NaN instead of raising
NAN_PROPAGATING = Context(prec=28, rounding=ROUND_HALF_EVEN, traps=[DivisionByZero, Overflow])


class PaymentStatus(str, Enum):
    """Derived payment state of a bill or invoice"""
    PAID = "paid"
    PARTIAL = "partial"
    DUE = "due"


@dataclass(frozen=True)
class LinePrice:
    amount: Decimal
    vat_amount: Decimal
    total: Decimal
    prorated: bool = False
    days_count: Optional[int] = None  # Inclusive days billed, when prorated
    days_in_month: Optional[int] = None  # Length of the month containing from_date


@dataclass(frozen=True)
class InvoiceTotals:
    subtotal: Decimal
    vat_amount: Decimal
    discount: Decimal
    total_amount: Decimal
    lines: List[LinePrice] = field(default_factory=list)


@dataclass(frozen=True)
class Settlement:
    paid_amount: Decimal
    due_amount: Decimal
    payment_status: PaymentStatus


def to_decimal(value: Number) -> Decimal:
    """Convert a number to Decimal without picking up binary float noise"""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def parse_billing_date(value: DateLike) -> Optional[date]:
    """
    Parse a billing date.

    Accepts date/datetime objects and "YYYY-MM-DD" strings (a time part after
    the date is ignored). Returns None for anything else.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.strptime(value.strip()[:10], "%Y-%m-%d").date()
        except ValueError:
            return None
    return None


def days_in_month(day: date) -> int:
    """Number of days in the calendar month containing `day`"""
    return calendar.monthrange(day.year, day.month)[1]


def days_count(from_date: date, to_date: date) -> int:
    """Inclusive number of days between two dates (both ends billed)"""
    return (to_date - from_date).days + 1


def resolve_billing_period(from_date: DateLike, to_date: DateLike) -> Optional[Tuple[date, date]]:
    """
    Return the (from, to) pair when it describes a usable pro-rata period.

    Returns:
        (from_date, to_date) tuple, or None when either end is missing,
        unparseable, or the range runs backwards
    """
    start = parse_billing_date(from_date)
    end = parse_billing_date(to_date)
    if start is None or end is None:
        if from_date or to_date:
            logger.warning(f"Ignoring billing period {from_date!r}..{to_date!r}: unparseable date, using flat rate")
        return None
    if end < start:
        logger.warning(f"Ignoring billing period {start}..{end}: end before start, using flat rate")
        return None
    return start, end


def price_line(
    rate: Number,
    quantity: Number,
    vat_percent: Number,
    from_date: DateLike = None,
    to_date: DateLike = None
) -> LinePrice:
    """
    Price one bill/invoice line.

    With a valid period the rate is treated as a monthly price and charged
    per day actually covered, using the length of the month the period starts
    in: amount = rate / days_in_month * days_count * quantity. Without one
    (missing, invalid or reversed dates) the line is billed flat:
    amount = rate * quantity.

    Returns:
        LinePrice with amount, vat_amount and total (= amount + vat_amount)
    """
    rate = to_decimal(rate)
    quantity = to_decimal(quantity)
    vat_percent = to_decimal(vat_percent)

    period = resolve_billing_period(from_date, to_date)
    with localcontext(NAN_PROPAGATING):
        if period is not None:
            start, end = period
            month_days = days_in_month(start)
            billed_days = days_count(start, end)
            amount = (rate / month_days) * billed_days * quantity
        else:
            month_days = None
            billed_days = None
            amount = rate * quantity

        vat_amount = amount * (vat_percent / HUNDRED)
        total = amount + vat_amount

    return LinePrice(
        amount=amount,
        vat_amount=vat_amount,
        total=total,
        prorated=period is not None,
        days_count=billed_days,
        days_in_month=month_days
    )


def aggregate_invoice(lines: Iterable, discount: Number = 0) -> InvoiceTotals:
    """
    Sum priced lines into document totals.

    `lines` may hold LinePrice results or any objects exposing rate,
    quantity, vat_percent, from_date and to_date (those are priced here, each
    with its own period). The discount is a flat deduction; the total is not
    floored at zero.
    """
    discount = to_decimal(discount)
    priced = [line if isinstance(line, LinePrice) else price_line(
        line.rate,
        line.quantity,
        line.vat_percent,
        getattr(line, "from_date", None),
        getattr(line, "to_date", None)
    ) for line in lines]

    with localcontext(NAN_PROPAGATING):
        subtotal = sum((p.amount for p in priced), ZERO)
        vat_amount = sum((p.vat_amount for p in priced), ZERO)
        total_amount = subtotal + vat_amount - discount

    return InvoiceTotals(
        subtotal=subtotal,
        vat_amount=vat_amount,
        discount=discount,
        total_amount=total_amount,
        lines=priced
    )


def derive_payment_status(total_amount: Number, paid_amount: Number) -> PaymentStatus:
    """
    paid    - nothing left to pay (due <= 0)
    partial - something paid, something still due
    due     - nothing paid yet

    The status is recomputed from the numbers every time, so a paid document
    goes back to partial/due if payments are later reduced.
    """
    total_amount = to_decimal(total_amount)
    paid_amount = to_decimal(paid_amount)
    with localcontext(NAN_PROPAGATING):
        due_amount = total_amount - paid_amount
        if due_amount.is_nan():
            return PaymentStatus.DUE
        if due_amount <= 0:
            return PaymentStatus.PAID
        if paid_amount > 0:
            return PaymentStatus.PARTIAL
    return PaymentStatus.DUE


def settle(total_amount: Number, paid_amount: Number) -> Settlement:
    """Derive due amount and payment status from a document total and what was paid"""
    total_amount = to_decimal(total_amount)
    paid_amount = to_decimal(paid_amount)
    with localcontext(NAN_PROPAGATING):
        due_amount = total_amount - paid_amount
    return Settlement(
        paid_amount=paid_amount,
        due_amount=due_amount,
        payment_status=derive_payment_status(total_amount, paid_amount)
    )


def quantize_money(value: Number, places: int = 2) -> Decimal:
    """Round an amount to storage precision (half-up, like printed bills)"""
    exponent = Decimal(1).scaleb(-places)
    return to_decimal(value).quantize(exponent, rounding=ROUND_HALF_UP)
