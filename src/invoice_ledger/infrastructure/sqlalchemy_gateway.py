from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from invoice_ledger.application.dtos import InvoiceRecord, PaymentRecord
from invoice_ledger.application.ports import PersistenceGateway
from invoice_ledger.domain.exceptions import InvoiceNotFoundError, PersistenceError
from invoice_ledger.domain.value_objects import InvoiceId, PaymentId
from invoice_ledger.infrastructure.orm import InvoiceRow, PaymentRow
from invoice_ledger.logging_config import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy.engine import Engine

    from invoice_ledger.application.ports import TimeProvider

logger = get_logger("infrastructure.sqlalchemy_gateway")


class SqlAlchemyPersistenceGateway(PersistenceGateway):
    """Relational gateway backed by SQLAlchemy.

    Every method runs in its own transaction: it commits on success and
    rolls back on any exception. Database errors are wrapped in
    PersistenceError; domain errors (InvoiceNotFoundError) pass through.

    Cascade delete relies on the ORM relationship (delete-orphan) and the
    foreign key's ON DELETE CASCADE, so payments never outlive their invoice.
    """

    def __init__(self, engine: Engine, time_provider: TimeProvider) -> None:
        self._session_factory = sessionmaker(bind=engine)
        self._time_provider = time_provider

    @contextmanager
    def _session_scope(self) -> Iterator[Session]:
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.warning("Database operation failed", extra={"error": type(e).__name__})
            raise PersistenceError(str(e)) from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def save_invoice(self, total_minor_units: int) -> InvoiceRecord:
        now = self._time_provider.now()
        with self._session_scope() as session:
            row = InvoiceRow(
                id=InvoiceId.generate().value,
                invoice_total=total_minor_units,
                created_at=now,
                updated_at=now,
            )
            session.add(row)
            session.flush()
            record = _invoice_record(row)

        logger.debug("Invoice row inserted", extra={"invoice_id": str(record.invoice_id)})
        return record

    def load_invoice(self, invoice_id: InvoiceId) -> InvoiceRecord | None:
        with self._session_scope() as session:
            row = session.get(InvoiceRow, invoice_id.value)
            return None if row is None else _invoice_record(row)

    def save_payment(
        self,
        invoice_id: InvoiceId,
        amount_minor_units: int,
        method_id: int,
    ) -> PaymentRecord:
        now = self._time_provider.now()
        with self._session_scope() as session:
            if session.get(InvoiceRow, invoice_id.value) is None:
                raise InvoiceNotFoundError(f"Invoice not found: {invoice_id}")

            row = PaymentRow(
                id=PaymentId.generate().value,
                invoice_id=invoice_id.value,
                payment_method_id=method_id,
                amount=amount_minor_units,
                created_at=now,
                updated_at=now,
            )
            session.add(row)
            session.flush()
            record = _payment_record(row)

        logger.debug(
            "Payment row inserted",
            extra={"invoice_id": str(invoice_id), "payment_id": str(record.payment_id)},
        )
        return record

    def load_payments(self, invoice_id: InvoiceId) -> list[PaymentRecord]:
        stmt = (
            select(PaymentRow)
            .where(PaymentRow.invoice_id == invoice_id.value)
            .order_by(PaymentRow.seq)
        )
        with self._session_scope() as session:
            return [_payment_record(row) for row in session.scalars(stmt)]

    def delete_invoice_cascade(self, invoice_id: InvoiceId) -> None:
        with self._session_scope() as session:
            row = session.get(InvoiceRow, invoice_id.value)
            if row is None:
                raise InvoiceNotFoundError(f"Invoice not found: {invoice_id}")
            session.delete(row)


def _invoice_record(row: InvoiceRow) -> InvoiceRecord:
    return InvoiceRecord(
        invoice_id=row.id,
        total_minor_units=row.invoice_total,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _payment_record(row: PaymentRow) -> PaymentRecord:
    return PaymentRecord(
        payment_id=row.id,
        invoice_id=row.invoice_id,
        amount_minor_units=row.amount,
        method_id=row.payment_method_id,
        created_at=row.created_at,
    )
