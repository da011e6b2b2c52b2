"""Data Transfer Objects exchanged with the persistence gateway.

Records carry raw storage values (UUIDs, integer minor units, integer
method ids) rather than domain objects, so gateway implementations never
need to import entities.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime
    from uuid import UUID


@dataclass(frozen=True, slots=True)
class InvoiceRecord:
    """Stored form of an invoice row."""

    invoice_id: UUID
    total_minor_units: int
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True, slots=True)
class PaymentRecord:
    """Stored form of a payment row."""

    payment_id: UUID
    invoice_id: UUID
    amount_minor_units: int
    method_id: int
    created_at: datetime
