"""Tests for CreateInvoiceUseCase and DeleteInvoiceUseCase."""

from decimal import Decimal

import pytest

from invoice_ledger.application.use_cases import (
    CreateInvoiceRequest,
    CreateInvoiceUseCase,
    DeleteInvoiceUseCase,
    RecordPaymentRequest,
    RecordPaymentUseCase,
)
from invoice_ledger.domain.entities import Invoice
from invoice_ledger.domain.exceptions import InvalidAmountError, InvoiceNotFoundError
from invoice_ledger.domain.value_objects import InvoiceId
from invoice_ledger.infrastructure.in_memory_gateway import InMemoryPersistenceGateway
from invoice_ledger.infrastructure.lock_provider import NoOpLockProvider


@pytest.fixture
def create_invoice(gateway: InMemoryPersistenceGateway) -> CreateInvoiceUseCase:
    return CreateInvoiceUseCase(gateway)


@pytest.fixture
def delete_invoice(
    lock_provider: NoOpLockProvider, gateway: InMemoryPersistenceGateway
) -> DeleteInvoiceUseCase:
    return DeleteInvoiceUseCase(lock_provider, gateway)


class TestCreateInvoice:
    def test_creates_invoice_owing_full_total(self, create_invoice: CreateInvoiceUseCase) -> None:
        invoice = create_invoice.execute(CreateInvoiceRequest(total=Decimal("75.25")))

        assert invoice.amount_owed().to_decimal() == Decimal("75.25")

    def test_invoice_can_be_loaded(
        self, create_invoice: CreateInvoiceUseCase, gateway: InMemoryPersistenceGateway
    ) -> None:
        invoice = create_invoice.execute(CreateInvoiceRequest(total=10))

        assert Invoice.load(invoice.id, gateway) == invoice

    def test_raises_for_negative_total(self, create_invoice: CreateInvoiceUseCase) -> None:
        with pytest.raises(InvalidAmountError):
            create_invoice.execute(CreateInvoiceRequest(total=-10))


class TestDeleteInvoice:
    def test_removes_invoice_and_payments(
        self,
        create_invoice: CreateInvoiceUseCase,
        delete_invoice: DeleteInvoiceUseCase,
        lock_provider: NoOpLockProvider,
        gateway: InMemoryPersistenceGateway,
    ) -> None:
        invoice = create_invoice.execute(CreateInvoiceRequest(total=200))
        record_payment = RecordPaymentUseCase(lock_provider, gateway)
        record_payment.execute(RecordPaymentRequest(invoice_id=invoice.id, amount=20, method="cash"))

        delete_invoice.execute(invoice.id)

        assert gateway.load_payments(invoice.id) == []
        with pytest.raises(InvoiceNotFoundError):
            Invoice.load(invoice.id, gateway)

    def test_payment_after_delete_raises(
        self,
        create_invoice: CreateInvoiceUseCase,
        delete_invoice: DeleteInvoiceUseCase,
        lock_provider: NoOpLockProvider,
        gateway: InMemoryPersistenceGateway,
    ) -> None:
        invoice = create_invoice.execute(CreateInvoiceRequest(total=200))
        delete_invoice.execute(invoice.id)

        with pytest.raises(InvoiceNotFoundError):
            RecordPaymentUseCase(lock_provider, gateway).execute(
                RecordPaymentRequest(invoice_id=invoice.id, amount=20, method="cash")
            )

    def test_raises_for_unknown_invoice(self, delete_invoice: DeleteInvoiceUseCase) -> None:
        with pytest.raises(InvoiceNotFoundError):
            delete_invoice.execute(InvoiceId.generate())
