"""
QR image rendering for payment payloads.

The payload is handed over as an opaque string; this module knows nothing
about its structure. Rendering is kept behind an abstract interface so
applications can plug in another backend (SVG, a remote service, ...).

Design Decisions:
- qrcode builds the symbol, Pillow scales it to the requested pixel size
- Nearest-neighbour scaling keeps module edges sharp for scanners
- Library failures are wrapped in RenderingError for the caller to report
"""

import io
import logging
from abc import ABC, abstractmethod

import qrcode
from PIL import Image
from qrcode.constants import ERROR_CORRECT_H, ERROR_CORRECT_L, ERROR_CORRECT_M, ERROR_CORRECT_Q

logger = logging.getLogger(__name__)


ERROR_CORRECTION_LEVELS = {
    "L": ERROR_CORRECT_L,
    "M": ERROR_CORRECT_M,
    "Q": ERROR_CORRECT_Q,
    "H": ERROR_CORRECT_H,
}

DEFAULT_SIZE = 250


class RenderingError(RuntimeError):
    """Raised when a payload cannot be turned into an image."""


class QRRenderer(ABC):
    """Abstract interface for QR image backends."""

    content_type: str = "image/png"

    @abstractmethod
    def render(self, payload: str, size: int = DEFAULT_SIZE) -> bytes:
        """Render the payload as a square image of size x size pixels."""
        pass


class QRCodeRenderer(QRRenderer):
    """
    PNG renderer based on the qrcode library.

    Example:
        renderer = QRCodeRenderer(error_correction="M")
        png = renderer.render(payload, size=250)
    """

    def __init__(self, error_correction: str = "M", border: int = 4) -> None:
        if error_correction not in ERROR_CORRECTION_LEVELS:
            raise ValueError(f"Unknown error correction level: {error_correction}")
        if border < 0:
            raise ValueError(f"Border must not be negative, got {border}")
        self.error_correction = error_correction
        self.border = border

    def render(self, payload: str, size: int = DEFAULT_SIZE) -> bytes:
        """
        Render a payload as PNG bytes.

        Args:
            payload: Text to encode, used verbatim
            size: Width and height of the image in pixels

        Returns:
            PNG image bytes

        Raises:
            RenderingError: If the payload cannot be encoded or saved
        """
        if size <= 0:
            raise RenderingError(f"Image size must be positive, got {size}")

        try:
            qr = qrcode.QRCode(
                version=None,
                error_correction=ERROR_CORRECTION_LEVELS[self.error_correction],
                box_size=1,
                border=self.border,
            )
            qr.add_data(payload.encode("utf-8"))
            qr.make(fit=True)
            img = qr.make_image(fill_color="black", back_color="white")
            img = img.convert("L").resize((size, size), Image.Resampling.NEAREST)

            buffer = io.BytesIO()
            img.save(buffer, format="PNG")
        except Exception as e:
            raise RenderingError(f"Failed to render QR code: {e}") from e

        logger.debug(f"Rendered QR version {qr.version} at {size}px")
        return buffer.getvalue()
