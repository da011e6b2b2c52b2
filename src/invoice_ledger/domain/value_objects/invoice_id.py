from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID, uuid4

from invoice_ledger.domain.exceptions import InvalidInvoiceIdError


@dataclass(frozen=True, slots=True)
class InvoiceId:
    """Value object for invoice identifiers.

    Invoice IDs are UUID v4 values assigned by the persistence gateway
    when the invoice is first saved.
    """

    value: UUID

    @classmethod
    def generate(cls) -> InvoiceId:
        """Generate a new unique InvoiceId."""
        return cls(value=uuid4())

    @classmethod
    def from_string(cls, id_str: str) -> InvoiceId:
        """Parse an InvoiceId from a string representation.

        Args:
            id_str: UUID string (with or without hyphens, any case).

        Returns:
            An InvoiceId instance.

        Raises:
            InvalidInvoiceIdError: If the string is not a valid UUID.
        """
        try:
            return cls(value=UUID(id_str))
        except (ValueError, AttributeError, TypeError) as e:
            raise InvalidInvoiceIdError(f"Invalid invoice ID: {id_str}") from e

    def __str__(self) -> str:
        return str(self.value)
