from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from invoice_ledger.domain.entities import Invoice
from invoice_ledger.logging_config import get_logger

if TYPE_CHECKING:
    from decimal import Decimal

    from invoice_ledger.application.ports import PersistenceGateway

logger = get_logger("use_cases.create_invoice")


@dataclass(frozen=True, slots=True)
class CreateInvoiceRequest:
    """Input DTO for create invoice use case."""

    total: Decimal | int | float | str


class CreateInvoiceUseCase:
    """Creates and stores a new invoice with no payments."""

    def __init__(self, gateway: PersistenceGateway) -> None:
        self._gateway = gateway

    def execute(self, request: CreateInvoiceRequest) -> Invoice:
        """Create the invoice.

        Raises:
            InvalidAmountError: Total is negative or non-numeric.
            PersistenceError: The gateway failed to store the invoice.
        """
        invoice = Invoice.create(request.total, self._gateway)
        logger.info(
            "Invoice created",
            extra={
                "invoice_id": str(invoice.id),
                "total_minor_units": invoice.total.minor_units,
            },
        )
        return invoice
