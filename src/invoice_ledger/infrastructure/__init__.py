"""Infrastructure layer - Concrete implementations of ports.

This layer contains:
- Persistence: in-memory and SQLAlchemy gateways, ORM schema
- Time Provider: Clock abstraction for testability
- Locking: per-invoice lock providers

Infrastructure adapters implement the ports defined in the application layer.
"""

from invoice_ledger.infrastructure.in_memory_gateway import InMemoryPersistenceGateway
from invoice_ledger.infrastructure.lock_provider import InMemoryLockProvider, NoOpLockProvider
from invoice_ledger.infrastructure.sqlalchemy_gateway import SqlAlchemyPersistenceGateway
from invoice_ledger.infrastructure.time_provider import FixedTimeProvider, SystemTimeProvider

__all__ = [
    "FixedTimeProvider",
    "InMemoryLockProvider",
    "InMemoryPersistenceGateway",
    "NoOpLockProvider",
    "SqlAlchemyPersistenceGateway",
    "SystemTimeProvider",
]
