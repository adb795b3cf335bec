"""
Domain package - Core payment logic with no external dependencies.

This package contains pure Python domain models, validation rules and
the EPC payload encoder for SEPA credit transfer QR codes.
"""

from .encoding import encode, format_amount, payload_size
from .iban import is_valid_iban, normalize_iban
from .models import (
    ErrorKind,
    FieldError,
    InvalidPaymentError,
    PaymentField,
    PaymentRequest,
    ValidationResult,
)
from .validation import validate

__all__ = [
    "ErrorKind",
    "FieldError",
    "InvalidPaymentError",
    "PaymentField",
    "PaymentRequest",
    "ValidationResult",
    "encode",
    "format_amount",
    "is_valid_iban",
    "normalize_iban",
    "payload_size",
    "validate",
]
