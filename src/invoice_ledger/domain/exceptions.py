"""Domain exceptions for invoice-ledger.

Exception hierarchy:
    DomainException (base)
    ├── Validation Errors
    │   ├── InvalidAmountError
    │   ├── UnknownPaymentMethodError
    │   ├── InvalidInvoiceIdError
    │   └── InvalidPaymentIdError
    ├── Arithmetic Errors
    │   └── NegativeResultError
    ├── Not Found Errors
    │   └── InvoiceNotFoundError
    └── Policy Errors
        └── OverpaymentError

    PersistenceError (NOT a DomainException; raised by storage adapters)

Validation errors are always raised before any write reaches the
persistence gateway.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base exception for all domain-level errors.

    All domain exceptions inherit from this class to enable
    catching domain errors distinctly from infrastructure errors.
    """


# =============================================================================
# Validation Errors
# =============================================================================


class InvalidAmountError(DomainException):
    """Raised when a money amount fails validation.

    Covers non-numeric input, NaN/infinity, negative values, and zero
    where a positive amount is required (payments).
    """


class UnknownPaymentMethodError(DomainException):
    """Raised when a value is outside the closed set of payment methods.

    The rejected input is kept on ``raw`` for error reporting.
    """

    def __init__(self, raw: object) -> None:
        self.raw = raw
        super().__init__(f"Unknown payment method: {raw!r}")


class InvalidInvoiceIdError(DomainException):
    """Raised when an invoice ID is not a valid UUID."""


class InvalidPaymentIdError(DomainException):
    """Raised when a payment ID is not a valid UUID."""


# =============================================================================
# Arithmetic Errors
# =============================================================================


class NegativeResultError(DomainException):
    """Raised when a subtraction would produce a negative MoneyAmount.

    Callers that need a signed balance must ask for one explicitly
    (``MoneyAmount.subtract(other, signed=True)``).
    """


# =============================================================================
# Not Found Errors
# =============================================================================


class InvoiceNotFoundError(DomainException):
    """Raised when an invoice cannot be found by ID."""


# =============================================================================
# Policy Errors
# =============================================================================


class OverpaymentError(DomainException):
    """Raised when a payment exceeds the amount owed under the REJECT policy.

    The default policy (CLAMP) records overpayments and never raises this.
    """


# =============================================================================
# Infrastructure Errors
# =============================================================================


class PersistenceError(Exception):
    """Opaque failure reported by a persistence gateway.

    Propagated to the caller unchanged. The core never retries.
    """
