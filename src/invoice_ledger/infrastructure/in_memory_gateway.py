from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from invoice_ledger.application.dtos import InvoiceRecord, PaymentRecord
from invoice_ledger.application.ports import PersistenceGateway
from invoice_ledger.domain.exceptions import InvoiceNotFoundError, PersistenceError
from invoice_ledger.domain.value_objects import InvoiceId, PaymentId

if TYPE_CHECKING:
    from invoice_ledger.application.ports import TimeProvider


class InMemoryPersistenceGateway(PersistenceGateway):
    """Dict-backed gateway for tests and single-process use.

    Implementation notes:
    - Invoices keyed by UUID; payments kept per invoice in insertion order
    - Records are frozen dataclasses of immutable values, so returning the
      stored objects is safe; lists are copied so callers cannot reorder them
    - NOT thread-safe; relies on external LockProvider for serialization
    - fail_next_payment_save() makes the next save_payment raise
      PersistenceError without storing anything
    """

    def __init__(self, time_provider: TimeProvider) -> None:
        self._time_provider = time_provider
        self._invoices: dict[UUID, InvoiceRecord] = {}
        self._payments: dict[UUID, list[PaymentRecord]] = {}
        self._fail_next_payment_save = False

    def fail_next_payment_save(self) -> None:
        self._fail_next_payment_save = True

    def save_invoice(self, total_minor_units: int) -> InvoiceRecord:
        now = self._time_provider.now()
        record = InvoiceRecord(
            invoice_id=InvoiceId.generate().value,
            total_minor_units=total_minor_units,
            created_at=now,
            updated_at=now,
        )
        self._invoices[record.invoice_id] = record
        self._payments[record.invoice_id] = []
        return record

    def load_invoice(self, invoice_id: InvoiceId) -> InvoiceRecord | None:
        return self._invoices.get(invoice_id.value)

    def save_payment(
        self,
        invoice_id: InvoiceId,
        amount_minor_units: int,
        method_id: int,
    ) -> PaymentRecord:
        if invoice_id.value not in self._invoices:
            raise InvoiceNotFoundError(f"Invoice not found: {invoice_id}")

        if self._fail_next_payment_save:
            self._fail_next_payment_save = False
            raise PersistenceError(f"Simulated failure saving payment for invoice {invoice_id}")

        record = PaymentRecord(
            payment_id=PaymentId.generate().value,
            invoice_id=invoice_id.value,
            amount_minor_units=amount_minor_units,
            method_id=method_id,
            created_at=self._time_provider.now(),
        )
        self._payments[invoice_id.value].append(record)
        return record

    def load_payments(self, invoice_id: InvoiceId) -> list[PaymentRecord]:
        return list(self._payments.get(invoice_id.value, []))

    def delete_invoice_cascade(self, invoice_id: InvoiceId) -> None:
        if invoice_id.value not in self._invoices:
            raise InvoiceNotFoundError(f"Invoice not found: {invoice_id}")

        del self._payments[invoice_id.value]
        del self._invoices[invoice_id.value]
