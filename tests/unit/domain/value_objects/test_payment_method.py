import pytest

from invoice_ledger.domain.exceptions import UnknownPaymentMethodError
from invoice_ledger.domain.value_objects import PaymentMethod


class TestPaymentMethodMembers:
    def test_has_exactly_three_methods(self) -> None:
        assert PaymentMethod.values() == frozenset(
            {PaymentMethod.CASH, PaymentMethod.CHECK, PaymentMethod.CHARGE}
        )

    def test_storage_ids_are_stable(self) -> None:
        assert PaymentMethod.CASH.method_id == 1
        assert PaymentMethod.CHECK.method_id == 2
        assert PaymentMethod.CHARGE.method_id == 3

    def test_display_names(self) -> None:
        assert PaymentMethod.CHARGE.display_name == "Charge"

    def test_str_is_identifier(self) -> None:
        assert str(PaymentMethod.CHECK) == "check"


class TestPaymentMethodParse:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("cash", PaymentMethod.CASH),
            ("check", PaymentMethod.CHECK),
            ("charge", PaymentMethod.CHARGE),
            ("Charge", PaymentMethod.CHARGE),
            ("  CASH ", PaymentMethod.CASH),
            (2, PaymentMethod.CHECK),
            (PaymentMethod.CHARGE, PaymentMethod.CHARGE),
        ],
    )
    def test_parses_known_values(self, raw: object, expected: PaymentMethod) -> None:
        assert PaymentMethod.parse(raw) is expected  # type: ignore[arg-type]

    @pytest.mark.parametrize("raw", ["bitcoin", "", "credit card", 0, 4, True, None, 1.0])
    def test_raises_for_unknown_values(self, raw: object) -> None:
        with pytest.raises(UnknownPaymentMethodError):
            PaymentMethod.parse(raw)  # type: ignore[arg-type]

    def test_error_keeps_raw_value(self) -> None:
        with pytest.raises(UnknownPaymentMethodError) as exc_info:
            PaymentMethod.parse("bitcoin")

        assert exc_info.value.raw == "bitcoin"
        assert "bitcoin" in str(exc_info.value)


class TestPaymentMethodFromMethodId:
    def test_resolves_stored_id(self) -> None:
        assert PaymentMethod.from_method_id(1) is PaymentMethod.CASH

    def test_raises_for_unknown_id(self) -> None:
        with pytest.raises(UnknownPaymentMethodError):
            PaymentMethod.from_method_id(99)
