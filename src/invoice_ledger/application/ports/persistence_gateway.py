from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from invoice_ledger.application.dtos import InvoiceRecord, PaymentRecord
    from invoice_ledger.domain.value_objects import InvoiceId


class PersistenceGateway(ABC):
    """Port for durable storage of invoices and their payments.

    Contract:
    - All amounts cross this boundary as integer minor units
    - Payment methods cross as their integer method_id
    - load_payments() returns payments in insertion order
    - delete_invoice_cascade() removes the invoice and all its payments atomically
    - Storage failures raise PersistenceError; nothing is partially written
    - Implementations are NOT required to be thread-safe; callers that need
      a balance check and an insert to be atomic must hold a LockProvider
      lock for the invoice

    The gateway performs no domain validation. Callers (Invoice) validate
    amounts and methods before any method here is invoked.
    """

    @abstractmethod
    def save_invoice(self, total_minor_units: int) -> InvoiceRecord:
        """Persist a new invoice.

        Args:
            total_minor_units: Invoice total in minor units (>= 0).

        Returns:
            The stored record, with its assigned ID and timestamps.

        Raises:
            PersistenceError: If the invoice could not be stored.
        """

    @abstractmethod
    def load_invoice(self, invoice_id: InvoiceId) -> InvoiceRecord | None:
        """Retrieve an invoice by ID.

        Returns:
            The InvoiceRecord if found, None otherwise.
        """

    @abstractmethod
    def save_payment(
        self,
        invoice_id: InvoiceId,
        amount_minor_units: int,
        method_id: int,
    ) -> PaymentRecord:
        """Persist a payment against an existing invoice.

        Args:
            invoice_id: The owning invoice.
            amount_minor_units: Payment amount in minor units (> 0).
            method_id: Storage id of the payment method.

        Returns:
            The stored record, with its assigned ID and creation timestamp.

        Raises:
            InvoiceNotFoundError: If the invoice does not exist.
            PersistenceError: If the payment could not be stored.
        """

    @abstractmethod
    def load_payments(self, invoice_id: InvoiceId) -> list[PaymentRecord]:
        """Return all payments for an invoice, oldest first.

        An unknown invoice has no payments; the result is an empty list.
        """

    @abstractmethod
    def delete_invoice_cascade(self, invoice_id: InvoiceId) -> None:
        """Delete an invoice together with all of its payments.

        Raises:
            InvoiceNotFoundError: If the invoice does not exist.
            PersistenceError: If the deletion could not be completed.
        """
