"""Domain entities - Objects with identity and lifecycle."""

from invoice_ledger.domain.entities.invoice import Invoice, InvoiceStatus
from invoice_ledger.domain.entities.payment import Payment

__all__ = [
    "Invoice",
    "InvoiceStatus",
    "Payment",
]
