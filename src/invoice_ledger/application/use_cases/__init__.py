"""Use cases - Application workflows over the invoice aggregate."""

from invoice_ledger.application.use_cases.create_invoice import (
    CreateInvoiceRequest,
    CreateInvoiceUseCase,
)
from invoice_ledger.application.use_cases.delete_invoice import DeleteInvoiceUseCase
from invoice_ledger.application.use_cases.record_payment import (
    OverpaymentPolicy,
    RecordPaymentRequest,
    RecordPaymentResponse,
    RecordPaymentUseCase,
)

__all__ = [
    "CreateInvoiceRequest",
    "CreateInvoiceUseCase",
    "DeleteInvoiceUseCase",
    "OverpaymentPolicy",
    "RecordPaymentRequest",
    "RecordPaymentResponse",
    "RecordPaymentUseCase",
]
