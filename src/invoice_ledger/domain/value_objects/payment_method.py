from __future__ import annotations

from enum import Enum

from invoice_ledger.domain.exceptions import UnknownPaymentMethodError


class PaymentMethod(Enum):
    """Closed set of accepted payment methods.

    Each member carries:
        identifier: stable lowercase name (``"cash"``)
        method_id: compact integer used by storage
        display_name: human-readable label
    """

    CASH = ("cash", 1, "Cash")
    CHECK = ("check", 2, "Check")
    CHARGE = ("charge", 3, "Charge")

    def __init__(self, identifier: str, method_id: int, display_name: str) -> None:
        self.identifier = identifier
        self.method_id = method_id
        self.display_name = display_name

    @classmethod
    def parse(cls, raw: PaymentMethod | str | int) -> PaymentMethod:
        """Resolve a payment method from caller input.

        Accepts a member, an identifier or display name (case-insensitive,
        surrounding whitespace ignored), or a storage method_id. Nothing is
        ever coerced to a default.

        Raises:
            UnknownPaymentMethodError: If raw is not one of the closed set.
        """
        if isinstance(raw, PaymentMethod):
            return raw
        if isinstance(raw, bool):
            raise UnknownPaymentMethodError(raw)
        if isinstance(raw, int):
            return cls.from_method_id(raw)
        if isinstance(raw, str):
            key = raw.strip().lower()
            for method in cls:
                if key in (method.identifier, method.display_name.lower()):
                    return method
        raise UnknownPaymentMethodError(raw)

    @classmethod
    def from_method_id(cls, method_id: int) -> PaymentMethod:
        if not isinstance(method_id, bool):
            for method in cls:
                if method.method_id == method_id:
                    return method
        raise UnknownPaymentMethodError(method_id)

    @classmethod
    def values(cls) -> frozenset[PaymentMethod]:
        return frozenset(cls)

    def __str__(self) -> str:
        return self.identifier
