"""
SEPA payment QR codes.

Validates payment details and encodes them as EPC069-12 QR payloads.
"""

__version__ = "0.1.0"
