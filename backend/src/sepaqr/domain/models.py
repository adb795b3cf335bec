"""
Domain models for EPC (SEPA Credit Transfer) payment requests.

These models represent a payment description that has passed validation
and the structured errors reported when it has not.

Design Decisions:
- Using frozen dataclasses so a request has no identity beyond its values
- Every request re-checks its own invariants on construction
- Decimal for the amount to avoid floating-point rounding in the payload
- Error kinds are an enumeration; messages are for display only
"""

import re
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum


CURRENCY = "EUR"

# Limits from the EPC069-12 Quick Response Code guidelines
MAX_NAME_LENGTH = 70
MAX_REFERENCE_LENGTH = 140
MAX_INFORMATION_LENGTH = 70
MIN_AMOUNT = Decimal("0.01")
MAX_AMOUNT = Decimal("999999999.99")
AMOUNT_QUANTUM = Decimal("0.01")

IBAN_PATTERN = re.compile(r"^[A-Z]{2}[0-9]{2}[A-Z0-9]{1,30}$")
BIC_PATTERN = re.compile(r"^[A-Z]{6}[A-Z0-9]{2}([A-Z0-9]{3})?$")
PURPOSE_PATTERN = re.compile(r"^[A-Z]{4}$")


class PaymentField(str, Enum):
    """Input fields errors can be attached to."""
    NAME = "name"
    IBAN = "iban"
    AMOUNT = "amount"
    REFERENCE = "reference"
    BIC = "bic"
    PURPOSE = "purpose"
    INFORMATION = "information"
    PAYLOAD = "payload"
    GENERAL = "general"


class ErrorKind(str, Enum):
    """Reasons a payment description can be rejected."""
    MISSING_NAME = "missing_name"
    INVALID_NAME = "invalid_name"
    INVALID_IBAN = "invalid_iban"
    MISSING_AMOUNT = "missing_amount"
    INVALID_AMOUNT = "invalid_amount"
    INVALID_REFERENCE = "invalid_reference"
    INVALID_BIC = "invalid_bic"
    INVALID_PURPOSE = "invalid_purpose"
    INVALID_INFORMATION = "invalid_information"
    PAYLOAD_TOO_LARGE = "payload_too_large"
    GENERAL_FAILURE = "general_failure"


def is_permitted_text(value: str) -> bool:
    """
    Check that text only uses characters allowed in a payload line.

    The payload is declared UTF-8, so any printable character is fine.
    Line breaks and other control characters would split or corrupt
    the line structure and are refused.
    """
    return value.isprintable()


@dataclass(frozen=True)
class PaymentRequest:
    """
    A validated SEPA credit transfer description.

    Instances are built by the validator. Constructing one directly
    with a value that breaks a constraint raises ValueError.
    """
    name: str
    iban: str
    amount: Decimal
    reference: str | None = None
    bic: str | None = None
    purpose: str | None = None
    information: str | None = None

    def __post_init__(self) -> None:
        """Validate field invariants."""
        if not self.name or len(self.name) > MAX_NAME_LENGTH:
            raise ValueError(f"Invalid beneficiary name length: {len(self.name)}")
        if not is_permitted_text(self.name):
            raise ValueError(f"Beneficiary name has unsupported characters: {self.name!r}")

        if not IBAN_PATTERN.fullmatch(self.iban):
            raise ValueError(f"Invalid IBAN format: {self.iban}")

        if not isinstance(self.amount, Decimal) or not self.amount.is_finite():
            raise ValueError(f"Amount must be a finite Decimal, got {self.amount!r}")
        if self.amount.as_tuple().exponent != -2:
            raise ValueError(f"Amount must have exactly two decimal places: {self.amount}")
        if not MIN_AMOUNT <= self.amount <= MAX_AMOUNT:
            raise ValueError(f"Amount out of range: {self.amount}")

        if self.reference is not None:
            if not self.reference or len(self.reference) > MAX_REFERENCE_LENGTH:
                raise ValueError(f"Invalid reference length: {len(self.reference)}")
            if not is_permitted_text(self.reference):
                raise ValueError(f"Reference has unsupported characters: {self.reference!r}")

        if self.bic is not None and not BIC_PATTERN.fullmatch(self.bic):
            raise ValueError(f"Invalid BIC format: {self.bic}")

        if self.purpose is not None and not PURPOSE_PATTERN.fullmatch(self.purpose):
            raise ValueError(f"Invalid purpose code: {self.purpose}")

        if self.information is not None:
            if not self.information or len(self.information) > MAX_INFORMATION_LENGTH:
                raise ValueError(f"Invalid information length: {len(self.information)}")
            if not is_permitted_text(self.information):
                raise ValueError(f"Information has unsupported characters: {self.information!r}")

    @property
    def currency(self) -> str:
        return CURRENCY


@dataclass(frozen=True)
class FieldError:
    """A single rejected field."""
    field: PaymentField
    kind: ErrorKind
    message: str


class InvalidPaymentError(ValueError):
    """Raised by ValidationResult.unwrap() when validation failed."""

    def __init__(self, errors: dict[PaymentField, FieldError]) -> None:
        self.errors = errors
        summary = ", ".join(f"{f.value}: {e.kind.value}" for f, e in errors.items())
        super().__init__(f"Invalid payment request ({summary})")


@dataclass
class ValidationResult:
    """
    Outcome of validating raw payment input.

    Holds either a request or the full set of field errors, never both.
    """
    request: PaymentRequest | None = None
    errors: dict[PaymentField, FieldError] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        """True if a request was produced."""
        return self.request is not None and not self.errors

    @property
    def error_kinds(self) -> dict[PaymentField, ErrorKind]:
        """Map each rejected field to its error kind."""
        return {f: e.kind for f, e in self.errors.items()}

    def unwrap(self) -> PaymentRequest:
        """Return the validated request or raise InvalidPaymentError."""
        if self.request is None or self.errors:
            raise InvalidPaymentError(self.errors)
        return self.request
