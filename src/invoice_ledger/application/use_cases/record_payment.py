from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from invoice_ledger.domain.entities import Invoice
from invoice_ledger.domain.exceptions import OverpaymentError, PersistenceError
from invoice_ledger.domain.value_objects import MoneyAmount, PaymentMethod
from invoice_ledger.logging_config import get_logger

if TYPE_CHECKING:
    from decimal import Decimal

    from invoice_ledger.application.ports import LockProvider, PersistenceGateway
    from invoice_ledger.domain.entities import Payment
    from invoice_ledger.domain.value_objects import InvoiceId

logger = get_logger("use_cases.record_payment")


class OverpaymentPolicy(Enum):
    """What to do with a payment larger than the amount owed.

    CLAMP: record it; amount_owed reports zero (default).
    REJECT: refuse it with OverpaymentError before anything is written.
    """

    CLAMP = "clamp"
    REJECT = "reject"


@dataclass(frozen=True, slots=True)
class RecordPaymentRequest:
    """Input DTO for record payment use case."""

    invoice_id: InvoiceId
    amount: Decimal | int | float | str
    method: PaymentMethod | str | int


@dataclass(frozen=True, slots=True)
class RecordPaymentResponse:
    """Output DTO for record payment use case."""

    payment: Payment
    amount_owed: MoneyAmount
    is_fully_paid: bool


class RecordPaymentUseCase:
    """Records a payment against a stored invoice.

    Responsibilities:
    - Acquire the per-invoice lock
    - Load the invoice and its payments INSIDE the lock
    - Apply the overpayment policy against that fresh balance
    - Delegate validation and the write to Invoice.record_payment

    Holding the lock across load, check and insert means two concurrent
    payments on the same invoice cannot both pass the REJECT check
    against the same stale balance.
    """

    def __init__(
        self,
        lock_provider: LockProvider,
        gateway: PersistenceGateway,
        overpayment_policy: OverpaymentPolicy = OverpaymentPolicy.CLAMP,
    ) -> None:
        self._lock_provider = lock_provider
        self._gateway = gateway
        self._policy = overpayment_policy

    def execute(self, request: RecordPaymentRequest) -> RecordPaymentResponse:
        """Execute the record payment workflow.

        Returns:
            RecordPaymentResponse with the payment and the updated balance.

        Raises:
            InvoiceNotFoundError: Invoice does not exist.
            UnknownPaymentMethodError: Method is not cash, check or charge.
            InvalidAmountError: Amount is non-numeric, negative or zero.
            OverpaymentError: Amount exceeds the balance under REJECT.
            PersistenceError: The gateway failed; nothing was recorded.
        """
        with self._lock_provider.acquire(str(request.invoice_id.value)):
            return self._execute_within_lock(request)

    def _execute_within_lock(self, request: RecordPaymentRequest) -> RecordPaymentResponse:
        invoice = Invoice.load(request.invoice_id, self._gateway)

        if self._policy is OverpaymentPolicy.REJECT:
            self._reject_overpayment(invoice, request)

        try:
            payment = invoice.record_payment(request.amount, request.method)
        except PersistenceError:
            logger.warning(
                "Payment not recorded: persistence failed",
                extra={"invoice_id": str(invoice.id)},
            )
            raise

        amount_owed = invoice.amount_owed()
        logger.info(
            "Payment recorded",
            extra={
                "invoice_id": str(invoice.id),
                "payment_id": str(payment.id),
                "amount_minor_units": payment.amount.minor_units,
                "method": payment.method.identifier,
                "amount_owed_minor_units": amount_owed.minor_units,
            },
        )
        return RecordPaymentResponse(
            payment=payment,
            amount_owed=amount_owed,
            is_fully_paid=invoice.is_fully_paid(),
        )

    def _reject_overpayment(self, invoice: Invoice, request: RecordPaymentRequest) -> None:
        """Raise OverpaymentError if the payment exceeds the current balance.

        Method and amount are validated first so a bad request reports its
        validation error, not an overpayment.
        """
        PaymentMethod.parse(request.method)
        amount = MoneyAmount.from_decimal(request.amount)
        amount_owed = invoice.amount_owed()

        if amount > amount_owed:
            logger.warning(
                "Payment rejected: exceeds amount owed",
                extra={
                    "invoice_id": str(invoice.id),
                    "amount_minor_units": amount.minor_units,
                    "amount_owed_minor_units": amount_owed.minor_units,
                },
            )
            raise OverpaymentError(
                f"Payment of {amount} exceeds amount owed {amount_owed} "
                f"on invoice {invoice.id}"
            )
