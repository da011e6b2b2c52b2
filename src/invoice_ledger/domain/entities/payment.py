"""Payment entity: one remittance recorded against an invoice."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from invoice_ledger.domain.exceptions import InvalidAmountError
from invoice_ledger.domain.value_objects import InvoiceId, MoneyAmount, PaymentId, PaymentMethod

if TYPE_CHECKING:
    from datetime import datetime

    from invoice_ledger.application.dtos import PaymentRecord


@dataclass(frozen=True, slots=True)
class Payment:
    """A recorded payment. Immutable; there is no edit or void operation.

    Payments are created by ``Invoice.record_payment`` (or rehydrated by
    ``Invoice.load``), never directly by callers, so every Payment in the
    system has passed invoice-level validation and belongs to exactly one
    invoice.
    """

    id: PaymentId
    invoice_id: InvoiceId
    amount: MoneyAmount
    method: PaymentMethod
    created_at: datetime

    def __post_init__(self) -> None:
        if self.amount.is_zero():
            raise InvalidAmountError("Payment amount must be greater than 0")

    @classmethod
    def from_record(cls, record: PaymentRecord) -> Payment:
        """Build a Payment from a persistence record.

        Raises:
            InvalidAmountError: If the stored amount is not positive.
            UnknownPaymentMethodError: If the stored method_id is unknown.
        """
        return cls(
            id=PaymentId(value=record.payment_id),
            invoice_id=InvoiceId(value=record.invoice_id),
            amount=MoneyAmount.from_minor_units(record.amount_minor_units),
            method=PaymentMethod.from_method_id(record.method_id),
            created_at=record.created_at,
        )
