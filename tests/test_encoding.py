"""
Tests for the EPC payload encoder.
"""

from decimal import Decimal

import pytest

from sepaqr.domain.encoding import MAX_PAYLOAD_BYTES, encode, format_amount, payload_size
from sepaqr.domain.models import PaymentRequest
from sepaqr.domain.validation import validate


NORMALIZED_IBAN = "ES9121000418450200051332"


def test_end_to_end_payload(payment_input):
    request = validate(**payment_input).unwrap()

    payload = encode(request)

    assert payload == (
        "BCD\n"
        "002\n"
        "1\n"
        "SCT\n"
        "\n"
        "Juan Pérez\n"
        "ES9121000418450200051332\n"
        "EUR100.00\n"
        "\n"
        "\n"
        "Factura #12345"
    )
    lines = payload.split("\n")
    assert "EUR100.00" in lines
    assert NORMALIZED_IBAN in lines


def test_absent_reference_omits_trailing_lines():
    request = PaymentRequest(name="Max", iban=NORMALIZED_IBAN, amount=Decimal("5.00"))

    payload = encode(request)

    assert payload.split("\n") == [
        "BCD", "002", "1", "SCT", "", "Max", NORMALIZED_IBAN, "EUR5.00",
    ]
    assert not payload.endswith("\n")


def test_all_optional_fields_in_order():
    request = PaymentRequest(
        name="Max",
        iban=NORMALIZED_IBAN,
        amount=Decimal("5.00"),
        reference="Invoice 1",
        bic="CAIXESBBXXX",
        purpose="GDDS",
        information="Thanks",
    )

    assert encode(request, version="001").split("\n") == [
        "BCD", "001", "1", "SCT", "CAIXESBBXXX", "Max", NORMALIZED_IBAN,
        "EUR5.00", "GDDS", "", "Invoice 1", "Thanks",
    ]


def test_uses_lf_only(payment_input):
    payload = encode(validate(**payment_input).unwrap())

    assert "\r" not in payload


def test_encoding_is_deterministic(payment_input):
    first = encode(validate(**payment_input).unwrap())
    second = encode(validate(**payment_input).unwrap())

    assert first.encode("utf-8") == second.encode("utf-8")


def test_comma_input_is_encoded_with_period():
    request = validate("Max", NORMALIZED_IBAN, "1234,5").unwrap()

    assert "EUR1234.50" in encode(request).split("\n")


@pytest.mark.parametrize(
    "amount, expected",
    [
        (Decimal("0.01"), "EUR0.01"),
        (Decimal("1234567.80"), "EUR1234567.80"),
        (Decimal("999999999.99"), "EUR999999999.99"),
    ],
)
def test_format_amount(amount, expected):
    assert format_amount(amount) == expected


def test_version_001_without_bic_is_a_contract_violation():
    request = PaymentRequest(name="Max", iban=NORMALIZED_IBAN, amount=Decimal("5.00"))

    with pytest.raises(ValueError):
        encode(request, version="001")


def test_unknown_version_is_rejected():
    request = PaymentRequest(name="Max", iban=NORMALIZED_IBAN, amount=Decimal("5.00"))

    with pytest.raises(ValueError):
        encode(request, version="003")


def test_payload_size_counts_utf8_bytes():
    assert payload_size("Pérez") == 6
    assert MAX_PAYLOAD_BYTES == 331
