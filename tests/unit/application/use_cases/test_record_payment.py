"""Tests for RecordPaymentUseCase.

Tests cover:
- Recording against a stored invoice and the returned balance
- CLAMP (default) and REJECT overpayment policies
- Validation errors take precedence over the overpayment check
- Concurrency: REJECT cannot be bypassed by simultaneous payments
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, wait
from decimal import Decimal

import pytest

from invoice_ledger.application.use_cases import (
    OverpaymentPolicy,
    RecordPaymentRequest,
    RecordPaymentUseCase,
)
from invoice_ledger.domain.entities import Invoice
from invoice_ledger.domain.exceptions import (
    InvalidAmountError,
    InvoiceNotFoundError,
    OverpaymentError,
    PersistenceError,
    UnknownPaymentMethodError,
)
from invoice_ledger.domain.value_objects import InvoiceId, MoneyAmount, PaymentMethod
from invoice_ledger.infrastructure.in_memory_gateway import InMemoryPersistenceGateway
from invoice_ledger.infrastructure.lock_provider import InMemoryLockProvider, NoOpLockProvider

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def use_case(
    lock_provider: NoOpLockProvider, gateway: InMemoryPersistenceGateway
) -> RecordPaymentUseCase:
    return RecordPaymentUseCase(lock_provider=lock_provider, gateway=gateway)


@pytest.fixture
def rejecting_use_case(
    lock_provider: NoOpLockProvider, gateway: InMemoryPersistenceGateway
) -> RecordPaymentUseCase:
    return RecordPaymentUseCase(
        lock_provider=lock_provider,
        gateway=gateway,
        overpayment_policy=OverpaymentPolicy.REJECT,
    )


@pytest.fixture
def invoice(gateway: InMemoryPersistenceGateway) -> Invoice:
    return Invoice.create(Decimal("200.00"), gateway)


# =============================================================================
# Success
# =============================================================================


class TestRecordPaymentSuccess:
    def test_records_payment_and_reports_balance(
        self, use_case: RecordPaymentUseCase, invoice: Invoice
    ) -> None:
        response = use_case.execute(
            RecordPaymentRequest(invoice_id=invoice.id, amount=100.00, method="charge")
        )

        assert response.payment.method is PaymentMethod.CHARGE
        assert response.amount_owed.to_decimal() == Decimal("100.00")
        assert response.is_fully_paid is False

    def test_second_payment_settles_invoice(
        self, use_case: RecordPaymentUseCase, invoice: Invoice, gateway: InMemoryPersistenceGateway
    ) -> None:
        use_case.execute(RecordPaymentRequest(invoice_id=invoice.id, amount=100.00, method="charge"))
        response = use_case.execute(
            RecordPaymentRequest(invoice_id=invoice.id, amount=100.00, method="cash")
        )

        assert response.is_fully_paid is True
        assert Invoice.load(invoice.id, gateway).is_fully_paid() is True

    def test_logs_recorded_payment(
        self, use_case: RecordPaymentUseCase, invoice: Invoice, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.INFO, logger="invoice_ledger"):
            use_case.execute(RecordPaymentRequest(invoice_id=invoice.id, amount=5, method="cash"))

        record = next(r for r in caplog.records if r.getMessage() == "Payment recorded")
        assert record.invoice_id == str(invoice.id)
        assert record.amount_minor_units == 500

    def test_raises_for_unknown_invoice(self, use_case: RecordPaymentUseCase) -> None:
        with pytest.raises(InvoiceNotFoundError):
            use_case.execute(
                RecordPaymentRequest(invoice_id=InvoiceId.generate(), amount=5, method="cash")
            )


# =============================================================================
# Overpayment policies
# =============================================================================


class TestClampPolicy:
    def test_overpayment_is_recorded(
        self, use_case: RecordPaymentUseCase, gateway: InMemoryPersistenceGateway
    ) -> None:
        invoice = Invoice.create(100.00, gateway)

        response = use_case.execute(
            RecordPaymentRequest(invoice_id=invoice.id, amount=150.00, method="check")
        )

        assert response.amount_owed == MoneyAmount.zero()
        assert response.is_fully_paid is True
        assert len(gateway.load_payments(invoice.id)) == 1


class TestRejectPolicy:
    def test_payment_up_to_balance_is_accepted(
        self, rejecting_use_case: RecordPaymentUseCase, invoice: Invoice
    ) -> None:
        response = rejecting_use_case.execute(
            RecordPaymentRequest(invoice_id=invoice.id, amount=200.00, method="cash")
        )

        assert response.is_fully_paid is True

    def test_overpayment_is_rejected_without_writing(
        self,
        rejecting_use_case: RecordPaymentUseCase,
        invoice: Invoice,
        gateway: InMemoryPersistenceGateway,
    ) -> None:
        with pytest.raises(OverpaymentError):
            rejecting_use_case.execute(
                RecordPaymentRequest(invoice_id=invoice.id, amount=Decimal("200.01"), method="cash")
            )

        assert gateway.load_payments(invoice.id) == []

    def test_any_payment_on_settled_invoice_is_rejected(
        self, rejecting_use_case: RecordPaymentUseCase, invoice: Invoice
    ) -> None:
        rejecting_use_case.execute(
            RecordPaymentRequest(invoice_id=invoice.id, amount=200, method="cash")
        )

        with pytest.raises(OverpaymentError):
            rejecting_use_case.execute(
                RecordPaymentRequest(invoice_id=invoice.id, amount=Decimal("0.01"), method="cash")
            )

    def test_unknown_method_reported_before_overpayment(
        self, rejecting_use_case: RecordPaymentUseCase, invoice: Invoice
    ) -> None:
        with pytest.raises(UnknownPaymentMethodError):
            rejecting_use_case.execute(
                RecordPaymentRequest(invoice_id=invoice.id, amount=1000, method="bitcoin")
            )

    def test_zero_amount_reported_as_invalid(
        self, rejecting_use_case: RecordPaymentUseCase, invoice: Invoice
    ) -> None:
        with pytest.raises(InvalidAmountError):
            rejecting_use_case.execute(
                RecordPaymentRequest(invoice_id=invoice.id, amount=0, method="cash")
            )


# =============================================================================
# Failure propagation
# =============================================================================


class TestPersistenceFailure:
    def test_persistence_error_propagates_unchanged(
        self,
        use_case: RecordPaymentUseCase,
        invoice: Invoice,
        gateway: InMemoryPersistenceGateway,
    ) -> None:
        gateway.fail_next_payment_save()

        with pytest.raises(PersistenceError):
            use_case.execute(RecordPaymentRequest(invoice_id=invoice.id, amount=5, method="cash"))

        assert gateway.load_payments(invoice.id) == []


# =============================================================================
# Concurrency
# =============================================================================


class TestRecordPaymentConcurrency:
    def test_concurrent_payments_cannot_overpay_under_reject(
        self, gateway: InMemoryPersistenceGateway
    ) -> None:
        """Ten threads each try to pay 50.00 on a 200.00 invoice; exactly four succeed."""
        invoice = Invoice.create(Decimal("200.00"), gateway)
        use_case = RecordPaymentUseCase(
            lock_provider=InMemoryLockProvider(),
            gateway=gateway,
            overpayment_policy=OverpaymentPolicy.REJECT,
        )
        outcomes: list[str] = []
        outcomes_lock = threading.Lock()

        def pay() -> None:
            try:
                use_case.execute(
                    RecordPaymentRequest(invoice_id=invoice.id, amount=Decimal("50.00"), method="cash")
                )
                result = "recorded"
            except OverpaymentError:
                result = "rejected"
            with outcomes_lock:
                outcomes.append(result)

        with ThreadPoolExecutor(max_workers=10) as executor:
            futures = [executor.submit(pay) for _ in range(10)]
            wait(futures)

        assert outcomes.count("recorded") == 4
        assert outcomes.count("rejected") == 6
        assert Invoice.load(invoice.id, gateway).amount_owed().is_zero()
