"""
Services package - Orchestration and external collaborators.

Includes QR image rendering and the payment QR generation pipeline.
"""

from .generator import PaymentQRResult, PaymentQRService
from .rendering import QRCodeRenderer, QRRenderer, RenderingError

__all__ = [
    "PaymentQRResult",
    "PaymentQRService",
    "QRCodeRenderer",
    "QRRenderer",
    "RenderingError",
]
