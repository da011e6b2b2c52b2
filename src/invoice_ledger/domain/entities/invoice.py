"""Invoice aggregate: a fixed total and the payments recorded against it.

Balance state machine (driven only by record_payment):
    unpaid → partially_paid → fully_paid
    unpaid → fully_paid (single payment covering the total)

No operation removes or reduces a payment, so status never moves backwards.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from invoice_ledger.domain.entities.payment import Payment
from invoice_ledger.domain.exceptions import InvalidAmountError, InvoiceNotFoundError
from invoice_ledger.domain.value_objects import InvoiceId, MoneyAmount, PaymentMethod

if TYPE_CHECKING:
    from datetime import datetime
    from decimal import Decimal

    from invoice_ledger.application.dtos import InvoiceRecord
    from invoice_ledger.application.ports import PersistenceGateway


class InvoiceStatus(Enum):
    """Invoice balance states."""

    UNPAID = "unpaid"
    PARTIALLY_PAID = "partially_paid"
    FULLY_PAID = "fully_paid"


class Invoice:
    """Invoice aggregate root.

    The total is fixed at creation. Payments are appended through
    ``record_payment`` only, and every balance query re-derives from the
    full payment set.

    An Invoice is bound to the PersistenceGateway it was created or loaded
    with; writes go through that gateway before in-memory state changes.
    """

    def __init__(
        self,
        id: InvoiceId,
        total: MoneyAmount,
        created_at: datetime,
        updated_at: datetime,
        gateway: PersistenceGateway,
        payments: list[Payment] | None = None,
    ) -> None:
        self._id = id
        self._total = total
        self._created_at = created_at
        self._updated_at = updated_at
        self._gateway = gateway
        self._payments: list[Payment] = list(payments or [])

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def create(
        cls,
        total: Decimal | int | float | str,
        gateway: PersistenceGateway,
    ) -> Invoice:
        """Create and persist a new invoice.

        Args:
            total: Invoice total in display units (dollars).
            gateway: Persistence collaborator that stores the invoice.

        Returns:
            The new Invoice with no payments.

        Raises:
            InvalidAmountError: If total is negative or non-numeric.
                Raised before the gateway is called.
            PersistenceError: If the gateway fails to store the invoice.
        """
        amount = MoneyAmount.from_decimal(total)
        record = gateway.save_invoice(amount.minor_units)
        return cls._from_record(record, gateway, payments=[])

    @classmethod
    def load(cls, invoice_id: InvoiceId, gateway: PersistenceGateway) -> Invoice:
        """Rehydrate an invoice and its payments from the gateway.

        Raises:
            InvoiceNotFoundError: If no invoice exists with this ID.
        """
        record = gateway.load_invoice(invoice_id)
        if record is None:
            raise InvoiceNotFoundError(f"Invoice not found: {invoice_id}")

        payments = [Payment.from_record(p) for p in gateway.load_payments(invoice_id)]
        return cls._from_record(record, gateway, payments=payments)

    @classmethod
    def _from_record(
        cls,
        record: InvoiceRecord,
        gateway: PersistenceGateway,
        payments: list[Payment],
    ) -> Invoice:
        return cls(
            id=InvoiceId(value=record.invoice_id),
            total=MoneyAmount.from_minor_units(record.total_minor_units),
            created_at=record.created_at,
            updated_at=record.updated_at,
            gateway=gateway,
            payments=payments,
        )

    # -------------------------------------------------------------------------
    # Attributes
    # -------------------------------------------------------------------------

    @property
    def id(self) -> InvoiceId:
        return self._id

    @property
    def total(self) -> MoneyAmount:
        return self._total

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    @property
    def payments(self) -> tuple[Payment, ...]:
        """Payments in the order they were recorded."""
        return tuple(self._payments)

    # -------------------------------------------------------------------------
    # Balance
    # -------------------------------------------------------------------------

    def amount_paid(self) -> MoneyAmount:
        return MoneyAmount.sum_of(payment.amount for payment in self._payments)

    def _paid_minor_units(self) -> int:
        return sum(payment.amount.minor_units for payment in self._payments)

    def amount_owed(self) -> MoneyAmount:
        """Remaining balance, clamped at zero when the invoice is overpaid."""
        balance = self._total.minor_units - self._paid_minor_units()
        return MoneyAmount.from_minor_units(max(balance, 0))

    def overpaid_amount(self) -> MoneyAmount:
        """How far recorded payments exceed the total (zero if they don't)."""
        excess = self._paid_minor_units() - self._total.minor_units
        return MoneyAmount.from_minor_units(max(excess, 0))

    def is_fully_paid(self) -> bool:
        return self.amount_owed().is_zero()

    def status(self) -> InvoiceStatus:
        if self.is_fully_paid():
            return InvoiceStatus.FULLY_PAID
        if self._paid_minor_units() == 0:
            return InvoiceStatus.UNPAID
        return InvoiceStatus.PARTIALLY_PAID

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def record_payment(
        self,
        amount: Decimal | int | float | str,
        method: PaymentMethod | str | int,
    ) -> Payment:
        """Record a payment against this invoice.

        The method is resolved first, then the amount. Both are validated
        before the gateway is called, and the payment joins the in-memory
        collection only after the gateway has stored it, so a failure at
        any step leaves the invoice unchanged.

        Args:
            amount: Payment amount in display units (dollars). Must be > 0.
            method: Payment method member, identifier, display name, or id.

        Returns:
            The recorded Payment.

        Raises:
            UnknownPaymentMethodError: If method is not a known payment method.
            InvalidAmountError: If amount is non-numeric, negative, or zero.
            PersistenceError: If the gateway fails to store the payment.
        """
        payment_method = PaymentMethod.parse(method)
        payment_amount = MoneyAmount.from_decimal(amount)
        if payment_amount.is_zero():
            raise InvalidAmountError(f"Payment amount must be greater than 0, got {amount!r}")

        record = self._gateway.save_payment(
            self._id, payment_amount.minor_units, payment_method.method_id
        )
        payment = Payment.from_record(record)
        self._payments.append(payment)
        return payment

    def delete(self) -> None:
        """Delete this invoice and all of its payments.

        Raises:
            InvoiceNotFoundError: If the invoice was already deleted.
            PersistenceError: If the gateway fails; payments are kept in memory.
        """
        self._gateway.delete_invoice_cascade(self._id)
        self._payments.clear()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Invoice):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return (
            f"Invoice(id={self._id}, total={self._total}, "
            f"payments={len(self._payments)}, amount_owed={self.amount_owed()})"
        )
