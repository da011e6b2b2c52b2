"""Value objects - Immutable objects defined by their attributes."""

from invoice_ledger.domain.value_objects.invoice_id import InvoiceId
from invoice_ledger.domain.value_objects.money_amount import MoneyAmount
from invoice_ledger.domain.value_objects.payment_id import PaymentId
from invoice_ledger.domain.value_objects.payment_method import PaymentMethod

__all__ = [
    "InvoiceId",
    "MoneyAmount",
    "PaymentId",
    "PaymentMethod",
]
