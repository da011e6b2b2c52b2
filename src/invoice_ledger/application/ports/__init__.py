"""Ports - Abstract interfaces for external dependencies.

Ports define the contracts that infrastructure adapters must implement.
This allows the application layer to remain decoupled from concrete implementations.
"""

from invoice_ledger.application.ports.lock_provider import LockProvider
from invoice_ledger.application.ports.persistence_gateway import PersistenceGateway
from invoice_ledger.application.ports.time_provider import TimeProvider

__all__ = [
    "LockProvider",
    "PersistenceGateway",
    "TimeProvider",
]
