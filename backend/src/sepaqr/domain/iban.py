"""
IBAN normalization and checks (ISO 13616).

Two strictness tiers are offered:
1. Syntactic: country code, check digits and alphanumeric BBAN
2. Strict: additionally the registered length for the country and the
   ISO 7064 mod-97 checksum

Design Decisions:
- Normalization removes all whitespace since IBANs are usually printed
  in groups of four
- The checksum is computed piecewise to keep the intermediate small
"""

import re

from .models import IBAN_PATTERN


# Registered IBAN lengths per country (SWIFT IBAN registry)
IBAN_LENGTHS = {
    "AD": 24, "AE": 23, "AL": 28, "AT": 20, "AZ": 28, "BA": 20, "BE": 16,
    "BG": 22, "BH": 22, "BR": 29, "BY": 28, "CH": 21, "CR": 22, "CY": 28,
    "CZ": 24, "DE": 22, "DK": 18, "DO": 28, "EE": 20, "EG": 29, "ES": 24,
    "FI": 18, "FO": 18, "FR": 27, "GB": 22, "GE": 22, "GI": 23, "GL": 18,
    "GR": 27, "GT": 28, "HR": 21, "HU": 28, "IE": 22, "IL": 23, "IQ": 23,
    "IS": 26, "IT": 27, "JO": 30, "KW": 30, "KZ": 20, "LB": 28, "LC": 32,
    "LI": 21, "LT": 20, "LU": 20, "LV": 21, "MC": 27, "MD": 24, "ME": 22,
    "MK": 19, "MR": 27, "MT": 31, "MU": 30, "NL": 18, "NO": 15, "PK": 24,
    "PL": 28, "PS": 29, "PT": 25, "QA": 29, "RO": 24, "RS": 22, "SA": 24,
    "SC": 31, "SE": 24, "SI": 19, "SK": 24, "SM": 27, "ST": 25, "SV": 28,
    "TL": 23, "TN": 24, "TR": 26, "UA": 29, "VA": 22, "VG": 24, "XK": 20,
}

_WHITESPACE = re.compile(r"\s+")


def normalize_iban(raw: str) -> str:
    """
    Remove all whitespace and uppercase an IBAN.

    Only ASCII input is uppercased. Case mapping of other letters can
    produce valid IBAN characters ("ı" to "I", "ß" to "SS"), so
    non-ASCII text is returned unchanged and fails the format check.

    Example:
        >>> normalize_iban(" es91 2100 0418 4502 0005 1332 ")
        'ES9121000418450200051332'
    """
    text = _WHITESPACE.sub("", raw)
    return text.upper() if text.isascii() else text


def has_valid_format(iban: str) -> bool:
    """Check a normalized IBAN against the generic IBAN pattern."""
    return bool(IBAN_PATTERN.fullmatch(iban))


def has_valid_length(iban: str) -> bool:
    """Check a normalized IBAN against its country's registered length."""
    expected = IBAN_LENGTHS.get(iban[:2])
    return expected is not None and len(iban) == expected


def mod97(iban: str) -> int:
    """
    Compute the ISO 7064 mod-97 remainder of a normalized IBAN.

    The first four characters are moved to the end and each letter is
    replaced by two digits (A=10 ... Z=35). A valid IBAN yields 1.
    """
    rearranged = iban[4:] + iban[:4]
    remainder = 0
    for char in rearranged:
        digits = char if char.isdigit() else str(ord(char) - 55)
        for digit in digits:
            remainder = (remainder * 10 + int(digit)) % 97
    return remainder


def has_valid_checksum(iban: str) -> bool:
    """True if the mod-97 check digits of a normalized IBAN are correct."""
    if not has_valid_format(iban):
        return False
    return mod97(iban) == 1


def is_valid_iban(iban: str, strict: bool = False) -> bool:
    """
    Validate a normalized IBAN.

    Args:
        iban: IBAN with whitespace removed and uppercased
        strict: Also require the country length and mod-97 checksum

    Returns:
        True if the IBAN passes the selected tier
    """
    if not has_valid_format(iban):
        return False
    if not strict:
        return True
    return has_valid_length(iban) and has_valid_checksum(iban)
