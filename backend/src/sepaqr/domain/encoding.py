"""
EPC QR payload encoding (EPC069-12, SEPA Credit Transfer).

Serializes a validated PaymentRequest into the line-oriented text that is
embedded verbatim in the QR code. The encoder is a pure function: the
same request always yields byte-identical output.

Payload layout (one element per line, LF separated):
    BCD / version / character set / SCT / BIC / name / IBAN /
    EUR amount / purpose / structured reference / unstructured reference /
    beneficiary to originator information

Trailing empty elements are dropped, so the last line is never blank.
"""

from decimal import Decimal
from typing import Literal

from .models import CURRENCY, PaymentRequest


SERVICE_TAG = "BCD"
CHARACTER_SET = "1"  # UTF-8
IDENTIFICATION_CODE = "SCT"
LINE_SEPARATOR = "\n"
MAX_PAYLOAD_BYTES = 331

EPCVersion = Literal["001", "002"]
SUPPORTED_VERSIONS: tuple[str, ...] = ("001", "002")


def format_amount(amount: Decimal) -> str:
    """
    Format an amount as the payload expects it.

    Always a period separator, no grouping and exactly two decimals,
    independent of the current locale.

    Example:
        >>> format_amount(Decimal("1234.5"))
        'EUR1234.50'
    """
    return f"{CURRENCY}{amount:.2f}"


def payload_size(payload: str) -> int:
    """Size of a payload in bytes once UTF-8 encoded."""
    return len(payload.encode("utf-8"))


def encode(request: PaymentRequest, *, version: EPCVersion = "002") -> str:
    """
    Encode a validated payment request as an EPC QR payload.

    Args:
        request: A request produced by the validator
        version: EPC payload version; "001" requires a BIC

    Returns:
        The payload text, lines joined with LF and no trailing newline

    Raises:
        ValueError: If the version is unknown, or "001" is requested
            for a request without BIC. Both are caller errors.
    """
    if version not in SUPPORTED_VERSIONS:
        raise ValueError(f"Unsupported EPC version: {version}")
    if version == "001" and request.bic is None:
        raise ValueError("EPC version 001 requires a BIC")

    lines = [
        SERVICE_TAG,
        version,
        CHARACTER_SET,
        IDENTIFICATION_CODE,
        request.bic or "",
        request.name,
        request.iban,
        format_amount(request.amount),
        request.purpose or "",
        "",  # structured creditor reference is not supported
        request.reference or "",
        request.information or "",
    ]

    while lines and lines[-1] == "":
        lines.pop()

    return LINE_SEPARATOR.join(lines)
