"""
Validation rules for raw payment input.

This module contains pure functions that turn the free-text fields of a
payment form into a PaymentRequest, or report every field that is wrong.
No side effects, no I/O - just field rule validation.

Design Decisions:
- Each field rule returns a FieldError or None and runs independently
- All rules are evaluated so callers can show every error in one pass
- Only optional fields are defaulted (blank becomes None)
- Payload size is checked here so that encoding never fails afterwards
"""

import logging
import re
from decimal import ROUND_HALF_EVEN, Context, Decimal, InvalidOperation

from .encoding import MAX_PAYLOAD_BYTES, EPCVersion, encode, payload_size
from .iban import is_valid_iban, normalize_iban
from .models import (
    AMOUNT_QUANTUM,
    BIC_PATTERN,
    MAX_AMOUNT,
    MAX_INFORMATION_LENGTH,
    MAX_NAME_LENGTH,
    MAX_REFERENCE_LENGTH,
    MIN_AMOUNT,
    PURPOSE_PATTERN,
    ErrorKind,
    FieldError,
    PaymentField,
    PaymentRequest,
    ValidationResult,
    is_permitted_text,
)

logger = logging.getLogger(__name__)


# Optional sign, digits and at most one decimal separator ("." or ",").
# Exponents, grouping separators, NaN and Infinity are not accepted.
AMOUNT_PATTERN = re.compile(r"[+-]?(?:[0-9]+(?:[.,][0-9]*)?|[.,][0-9]+)")

# Fixed arithmetic context so results never depend on the caller's thread context
AMOUNT_CONTEXT = Context(prec=28, rounding=ROUND_HALF_EVEN)


def parse_amount(raw: str) -> Decimal:
    """
    Parse amount text into a Decimal.

    Accepts both "12.50" and "12,50". Does not check the sign or range.

    Raises:
        ValueError: If the text is not a plain finite decimal number
    """
    text = raw.strip()
    if not AMOUNT_PATTERN.fullmatch(text):
        raise ValueError(f"Not a decimal number: {raw!r}")
    try:
        value = Decimal(text.replace(",", "."))
    except InvalidOperation as e:
        raise ValueError(f"Not a decimal number: {raw!r}") from e
    if not value.is_finite():
        raise ValueError(f"Not a finite number: {raw!r}")
    return value


def _clean_optional(raw: str | None) -> str | None:
    """Trim an optional field; blank becomes None."""
    if raw is None:
        return None
    text = raw.strip()
    return text or None


def check_text(
    value: str,
    field: PaymentField,
    kind: ErrorKind,
    max_length: int,
    label: str,
) -> FieldError | None:
    """
    Check a free-text field against its length limit and character set.

    The value is expected to be trimmed and non-empty.
    """
    if len(value) > max_length:
        return FieldError(
            field=field,
            kind=kind,
            message=f"{label} must be at most {max_length} characters (got {len(value)}).",
        )
    if not is_permitted_text(value):
        return FieldError(
            field=field,
            kind=kind,
            message=f"{label} contains characters that cannot be used in a payment code.",
        )
    return None


def validate_name(name: str) -> FieldError | None:
    """
    Validate the beneficiary name.

    Rule: non-empty after trimming, at most 70 printable characters.
    """
    if not name:
        return FieldError(
            field=PaymentField.NAME,
            kind=ErrorKind.MISSING_NAME,
            message="Beneficiary name is required.",
        )
    return check_text(
        name, PaymentField.NAME, ErrorKind.INVALID_NAME, MAX_NAME_LENGTH, "Beneficiary name"
    )


def validate_iban(iban: str, strict: bool = False) -> FieldError | None:
    """
    Validate a normalized IBAN.

    Rule: matches the generic IBAN format. In strict mode the country
    length and mod-97 checksum must also be correct.
    """
    if not iban:
        return FieldError(
            field=PaymentField.IBAN,
            kind=ErrorKind.INVALID_IBAN,
            message="IBAN is required.",
        )
    if not is_valid_iban(iban, strict=strict):
        return FieldError(
            field=PaymentField.IBAN,
            kind=ErrorKind.INVALID_IBAN,
            message=(
                "IBAN checksum or length is not valid." if strict
                else "IBAN format is not valid."
            ),
        )
    return None


def validate_amount(raw: str) -> tuple[Decimal | None, FieldError | None]:
    """
    Validate and parse the amount.

    Rule: 0.01 <= amount <= 999999999.99 with at most two decimals.

    Returns:
        (amount quantized to cents, None) or (None, error)
    """
    if not raw:
        return None, FieldError(
            field=PaymentField.AMOUNT,
            kind=ErrorKind.MISSING_AMOUNT,
            message="Amount is required.",
        )

    try:
        value = parse_amount(raw)
    except ValueError:
        return None, FieldError(
            field=PaymentField.AMOUNT,
            kind=ErrorKind.INVALID_AMOUNT,
            message="Amount must be a positive number.",
        )

    if value <= 0:
        return None, FieldError(
            field=PaymentField.AMOUNT,
            kind=ErrorKind.INVALID_AMOUNT,
            message="Amount must be a positive number.",
        )

    # Range first: quantize() fails on values wider than AMOUNT_CONTEXT precision
    if not MIN_AMOUNT <= value <= MAX_AMOUNT:
        return None, FieldError(
            field=PaymentField.AMOUNT,
            kind=ErrorKind.INVALID_AMOUNT,
            message=f"Amount must be between {MIN_AMOUNT} and {MAX_AMOUNT}.",
        )

    quantized = value.quantize(AMOUNT_QUANTUM, context=AMOUNT_CONTEXT)
    if quantized != value:
        return None, FieldError(
            field=PaymentField.AMOUNT,
            kind=ErrorKind.INVALID_AMOUNT,
            message="Amount can have at most two decimal places.",
        )

    return quantized, None


def validate_reference(reference: str | None) -> FieldError | None:
    """Validate the optional unstructured remittance reference."""
    if reference is None:
        return None
    return check_text(
        reference,
        PaymentField.REFERENCE,
        ErrorKind.INVALID_REFERENCE,
        MAX_REFERENCE_LENGTH,
        "Reference",
    )


def validate_bic(bic: str | None, version: EPCVersion = "002") -> FieldError | None:
    """
    Validate the optional BIC.

    Version 001 payloads cannot omit it.
    """
    if bic is None:
        if version == "001":
            return FieldError(
                field=PaymentField.BIC,
                kind=ErrorKind.INVALID_BIC,
                message="BIC is required for EPC version 001.",
            )
        return None
    if not BIC_PATTERN.fullmatch(bic):
        return FieldError(
            field=PaymentField.BIC,
            kind=ErrorKind.INVALID_BIC,
            message="BIC must be 8 or 11 letters and digits.",
        )
    return None


def validate_purpose(purpose: str | None) -> FieldError | None:
    """Validate the optional four-letter purpose code."""
    if purpose is None or PURPOSE_PATTERN.fullmatch(purpose):
        return None
    return FieldError(
        field=PaymentField.PURPOSE,
        kind=ErrorKind.INVALID_PURPOSE,
        message="Purpose code must be four uppercase letters.",
    )


def validate_information(information: str | None) -> FieldError | None:
    """Validate the optional beneficiary to originator note."""
    if information is None:
        return None
    return check_text(
        information,
        PaymentField.INFORMATION,
        ErrorKind.INVALID_INFORMATION,
        MAX_INFORMATION_LENGTH,
        "Information",
    )


def validate(
    name: str,
    iban: str,
    amount: str,
    reference: str | None = None,
    *,
    bic: str | None = None,
    purpose: str | None = None,
    information: str | None = None,
    strict_iban: bool = False,
    version: EPCVersion = "002",
) -> ValidationResult:
    """
    Validate raw payment input and build a PaymentRequest.

    Every field is checked; the result carries either the request or
    all field errors at once.

    Args:
        name: Beneficiary name
        iban: Beneficiary IBAN, spaces allowed
        amount: Amount in euros as text ("100.00" or "100,00")
        reference: Optional unstructured remittance reference
        bic: Optional BIC of the beneficiary bank
        purpose: Optional four-letter purpose code
        information: Optional beneficiary to originator note
        strict_iban: Also verify IBAN length and mod-97 checksum
        version: EPC payload version the request will be encoded with

    Returns:
        ValidationResult with request or errors
    """
    clean_name = (name or "").strip()
    clean_iban = normalize_iban(iban or "")
    clean_amount = (amount or "").strip()
    clean_reference = _clean_optional(reference)
    clean_bic = _clean_optional(bic)
    if clean_bic is not None and clean_bic.isascii():
        clean_bic = clean_bic.upper()
    clean_purpose = _clean_optional(purpose)
    clean_information = _clean_optional(information)

    errors: list[FieldError | None] = []

    errors.append(validate_name(clean_name))
    errors.append(validate_iban(clean_iban, strict=strict_iban))
    parsed_amount, amount_error = validate_amount(clean_amount)
    errors.append(amount_error)
    errors.append(validate_reference(clean_reference))
    errors.append(validate_bic(clean_bic, version))
    errors.append(validate_purpose(clean_purpose))
    errors.append(validate_information(clean_information))

    found = {error.field: error for error in errors if error is not None}
    if found:
        logger.debug(
            f"Rejected payment input: {', '.join(e.kind.value for e in found.values())}"
        )
        return ValidationResult(errors=found)

    request = PaymentRequest(
        name=clean_name,
        iban=clean_iban,
        amount=parsed_amount,
        reference=clean_reference,
        bic=clean_bic,
        purpose=clean_purpose,
        information=clean_information,
    )

    size = payload_size(encode(request, version=version))
    if size > MAX_PAYLOAD_BYTES:
        logger.debug(f"Rejected payment input: payload is {size} bytes")
        return ValidationResult(errors={
            PaymentField.PAYLOAD: FieldError(
                field=PaymentField.PAYLOAD,
                kind=ErrorKind.PAYLOAD_TOO_LARGE,
                message=(
                    f"Payment details are too long for a payment code "
                    f"({size} of {MAX_PAYLOAD_BYTES} bytes)."
                ),
            )
        })

    return ValidationResult(request=request)
