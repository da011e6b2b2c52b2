"""Wiring of gateways and use cases from LedgerSettings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from invoice_ledger.application.use_cases import (
    CreateInvoiceUseCase,
    DeleteInvoiceUseCase,
    RecordPaymentUseCase,
)
from invoice_ledger.config import LedgerSettings
from invoice_ledger.infrastructure import (
    InMemoryLockProvider,
    SqlAlchemyPersistenceGateway,
    SystemTimeProvider,
)
from invoice_ledger.infrastructure.orm import create_ledger_engine, create_schema
from invoice_ledger.logging_config import configure_logging

if TYPE_CHECKING:
    from invoice_ledger.application.ports import PersistenceGateway


@dataclass(frozen=True, slots=True)
class LedgerServices:
    gateway: PersistenceGateway
    create_invoice: CreateInvoiceUseCase
    record_payment: RecordPaymentUseCase
    delete_invoice: DeleteInvoiceUseCase


def build_services(settings: LedgerSettings | None = None) -> LedgerServices:
    """Build a SQLAlchemy-backed ledger, creating the schema if needed.

    Settings default to ``LedgerSettings.from_env()``.
    """
    if settings is None:
        settings = LedgerSettings.from_env()

    configure_logging(level=settings.log_level)

    engine = create_ledger_engine(settings.database_url, echo=settings.sql_echo)
    create_schema(engine)

    gateway = SqlAlchemyPersistenceGateway(engine, SystemTimeProvider())
    lock_provider = InMemoryLockProvider()

    return LedgerServices(
        gateway=gateway,
        create_invoice=CreateInvoiceUseCase(gateway),
        record_payment=RecordPaymentUseCase(
            lock_provider, gateway, overpayment_policy=settings.overpayment_policy
        ),
        delete_invoice=DeleteInvoiceUseCase(lock_provider, gateway),
    )
