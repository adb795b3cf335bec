"""
Tests for IBAN normalization, format and checksum rules.
"""

import pytest

from sepaqr.domain.iban import (
    has_valid_checksum,
    has_valid_format,
    has_valid_length,
    is_valid_iban,
    mod97,
    normalize_iban,
)


def test_normalize_strips_all_whitespace_and_uppercases():
    assert normalize_iban(" es91 2100\t0418 4502 0005 1332\n") == "ES9121000418450200051332"


@pytest.mark.parametrize(
    "iban",
    [
        "ES9121000418450200051332",
        "DE89370400440532013000",
        "XX00A",  # unknown country still passes the syntactic tier
        "AB12" + "9" * 30,
    ],
)
def test_syntactic_tier_accepts_generic_format(iban):
    assert has_valid_format(iban)
    assert is_valid_iban(iban)


@pytest.mark.parametrize(
    "iban",
    [
        "",
        "1234",
        "ES91",
        "es9121000418450200051332",
        "E59121000418450200051332",
        "ESAB21000418450200051332",
        "ES91-2100-0418",
        "AB12" + "9" * 31,
        "DE89370400440532013000\n",
    ],
)
def test_syntactic_tier_rejects_bad_format(iban):
    assert not has_valid_format(iban)
    assert not is_valid_iban(iban)


@pytest.mark.parametrize(
    "iban",
    ["DE89370400440532013000", "GB82WEST12345698765432", "NL91ABNA0417164300"],
)
def test_known_valid_ibans_pass_strict_tier(iban):
    assert mod97(iban) == 1
    assert has_valid_length(iban)
    assert is_valid_iban(iban, strict=True)


def test_single_digit_change_fails_checksum():
    iban = "DE89370400440532013001"
    assert is_valid_iban(iban)
    assert not has_valid_checksum(iban)
    assert not is_valid_iban(iban, strict=True)


def test_wrong_country_length_fails_strict_tier():
    assert not has_valid_length("DE8937040044053201300")
    assert not is_valid_iban("DE8937040044053201300", strict=True)


def test_unknown_country_fails_strict_tier():
    assert not has_valid_length("XX00A")
    assert not is_valid_iban("XX00A", strict=True)


@pytest.mark.parametrize(
    "raw",
    ["GB82 WıST 1234 5698 7654 32", "DE89 3704 0044 0532 0130 0ß"],
)
def test_non_ascii_letters_are_not_case_mapped(raw):
    normalized = normalize_iban(raw)

    assert normalized == raw.replace(" ", "")
    assert not has_valid_format(normalized)
    assert not is_valid_iban(normalized)
