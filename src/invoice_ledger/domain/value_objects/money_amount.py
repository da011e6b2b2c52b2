"""Money amounts stored as integer minor units (cents).

User-facing amounts are decimal dollars and cents. Everything stored or
compared is an integer count of cents, so no arithmetic here ever touches
a float.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import TYPE_CHECKING

from invoice_ledger.domain.exceptions import InvalidAmountError, NegativeResultError

if TYPE_CHECKING:
    from collections.abc import Iterable

MINOR_UNIT_EXPONENT = 2
# Largest value a signed 64-bit storage column holds.
MAX_MINOR_UNITS = 2**63 - 1
_QUANTUM = Decimal(1).scaleb(-MINOR_UNIT_EXPONENT)  # Decimal("0.01")


@dataclass(frozen=True, slots=True, order=True)
class MoneyAmount:
    """Non-negative amount of money in minor units.

    Construct from display units with ``from_decimal`` or from an already
    stored value with ``from_minor_units``. Instances are immutable and
    hashable; ``add``/``subtract`` return new instances.
    """

    minor_units: int

    def __post_init__(self) -> None:
        if isinstance(self.minor_units, bool) or not isinstance(self.minor_units, int):
            raise InvalidAmountError(
                f"minor_units must be an integer, got {type(self.minor_units).__name__}"
            )
        if self.minor_units < 0:
            raise InvalidAmountError(f"Amount cannot be negative, got {self.minor_units} minor units")
        if self.minor_units > MAX_MINOR_UNITS:
            raise InvalidAmountError(
                f"Amount exceeds the largest storable value, got {self.minor_units} minor units"
            )

    @classmethod
    def zero(cls) -> MoneyAmount:
        return cls(minor_units=0)

    @classmethod
    def from_minor_units(cls, n: int) -> MoneyAmount:
        """Wrap a raw minor-unit integer (e.g. a value read from storage).

        Raises:
            InvalidAmountError: If n is not an integer, is negative, or exceeds
                MAX_MINOR_UNITS.
        """
        return cls(minor_units=n)

    @classmethod
    def from_decimal(cls, value: Decimal | int | float | str) -> MoneyAmount:
        """Convert a display-unit amount (dollars) into minor units.

        Rounds to the nearest minor unit, half away from zero, so
        ``19.995`` becomes 2000 cents rather than being truncated to 1999.
        Floats go through ``str()`` first so ``0.29`` is read as written.

        Args:
            value: Decimal, int, float, or numeric string.

        Returns:
            A MoneyAmount instance.

        Raises:
            InvalidAmountError: If value is not a finite, non-negative number
                or is too large to store.
        """
        amount = _to_decimal(value)

        if not amount.is_finite():
            raise InvalidAmountError(f"Amount must be a finite number, got {value!r}")
        if amount < 0:
            raise InvalidAmountError(f"Amount cannot be negative, got {value!r}")

        try:
            quantized = amount.quantize(_QUANTUM, rounding=ROUND_HALF_UP)
        except InvalidOperation as e:
            raise InvalidAmountError(f"Amount is out of range: {value!r}") from e

        return cls(minor_units=int(quantized.scaleb(MINOR_UNIT_EXPONENT)))

    @classmethod
    def sum_of(cls, amounts: Iterable[MoneyAmount]) -> MoneyAmount:
        return cls(minor_units=sum(amount.minor_units for amount in amounts))

    def to_decimal(self) -> Decimal:
        """Return the amount in display units, always with two places."""
        return Decimal(self.minor_units).scaleb(-MINOR_UNIT_EXPONENT)

    def is_zero(self) -> bool:
        return self.minor_units == 0

    def add(self, other: MoneyAmount) -> MoneyAmount:
        return MoneyAmount(minor_units=self.minor_units + other.minor_units)

    def subtract(self, other: MoneyAmount, *, signed: bool = False) -> MoneyAmount | int:
        """Subtract another amount.

        Args:
            other: The amount to subtract.
            signed: If True, return the raw signed difference in minor units
                (an int, possibly negative) instead of a MoneyAmount. Used
                for balance and overpayment reporting.

        Raises:
            NegativeResultError: If the result would be negative and
                signed is False.
        """
        difference = self.minor_units - other.minor_units
        if signed:
            return difference
        if difference < 0:
            raise NegativeResultError(
                f"Cannot subtract {other} from {self}: result would be negative"
            )
        return MoneyAmount(minor_units=difference)

    def __add__(self, other: object) -> MoneyAmount:
        if not isinstance(other, MoneyAmount):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: object) -> MoneyAmount:
        if not isinstance(other, MoneyAmount):
            return NotImplemented
        return self.subtract(other)  # type: ignore[return-value]

    def __str__(self) -> str:
        return str(self.to_decimal())


def _to_decimal(value: object) -> Decimal:
    if isinstance(value, bool):
        raise InvalidAmountError(f"Amount must be numeric, got {value!r}")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, str):
        try:
            return Decimal(value.strip())
        except InvalidOperation as e:
            raise InvalidAmountError(f"Amount must be numeric, got {value!r}") from e
    raise InvalidAmountError(f"Amount must be numeric, got {type(value).__name__}")
