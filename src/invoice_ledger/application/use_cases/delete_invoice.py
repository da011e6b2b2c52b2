from __future__ import annotations

from typing import TYPE_CHECKING

from invoice_ledger.logging_config import get_logger

if TYPE_CHECKING:
    from invoice_ledger.application.ports import LockProvider, PersistenceGateway
    from invoice_ledger.domain.value_objects import InvoiceId

logger = get_logger("use_cases.delete_invoice")


class DeleteInvoiceUseCase:
    """Deletes an invoice and all of its payments.

    Runs under the same per-invoice lock as RecordPaymentUseCase so a
    payment cannot be inserted against an invoice mid-deletion.
    """

    def __init__(self, lock_provider: LockProvider, gateway: PersistenceGateway) -> None:
        self._lock_provider = lock_provider
        self._gateway = gateway

    def execute(self, invoice_id: InvoiceId) -> None:
        """Delete the invoice.

        Raises:
            InvoiceNotFoundError: Invoice does not exist.
            PersistenceError: The gateway failed; nothing was deleted.
        """
        with self._lock_provider.acquire(str(invoice_id.value)):
            self._gateway.delete_invoice_cascade(invoice_id)

        logger.info("Invoice deleted", extra={"invoice_id": str(invoice_id)})
