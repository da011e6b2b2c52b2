"""Shared pytest fixtures for the test suite."""

from collections.abc import Iterator
from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy.engine import Engine

from invoice_ledger.infrastructure.in_memory_gateway import InMemoryPersistenceGateway
from invoice_ledger.infrastructure.lock_provider import NoOpLockProvider
from invoice_ledger.infrastructure.orm import create_ledger_engine, create_schema, drop_schema
from invoice_ledger.infrastructure.sqlalchemy_gateway import SqlAlchemyPersistenceGateway
from invoice_ledger.infrastructure.time_provider import FixedTimeProvider


@pytest.fixture
def fixed_time() -> datetime:
    """A fixed timestamp for deterministic testing."""
    return datetime(2024, 1, 15, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def time_provider(fixed_time: datetime) -> FixedTimeProvider:
    """A clock that ticks one second per read, starting at fixed_time."""
    return FixedTimeProvider(fixed_time, step=timedelta(seconds=1))


@pytest.fixture
def gateway(time_provider: FixedTimeProvider) -> InMemoryPersistenceGateway:
    return InMemoryPersistenceGateway(time_provider)


@pytest.fixture
def lock_provider() -> NoOpLockProvider:
    """Use NoOpLockProvider for unit tests (single-threaded)."""
    return NoOpLockProvider()


@pytest.fixture
def engine() -> Iterator[Engine]:
    """A fresh in-memory SQLite database with the ledger schema."""
    engine = create_ledger_engine("sqlite+pysqlite:///:memory:")
    create_schema(engine)
    yield engine
    drop_schema(engine)
    engine.dispose()


@pytest.fixture
def sql_gateway(engine: Engine, time_provider: FixedTimeProvider) -> SqlAlchemyPersistenceGateway:
    return SqlAlchemyPersistenceGateway(engine, time_provider)
