"""
Payment QR orchestrator service.

Coordinates the full generation pipeline:
1. Field validation
2. EPC payload encoding
3. QR image rendering

This is the primary interface for applications embedding the generator.
"""

import logging
from dataclasses import dataclass, field

from sepaqr.config import Settings
from sepaqr.domain.encoding import EPCVersion, encode
from sepaqr.domain.models import ErrorKind, FieldError, PaymentField, PaymentRequest
from sepaqr.domain.validation import validate

from .rendering import DEFAULT_SIZE, QRCodeRenderer, QRRenderer, RenderingError

logger = logging.getLogger(__name__)


@dataclass
class PaymentQRResult:
    """
    Result of building a payment code.

    Either every stage completed (request, payload and, when rendered,
    image are set) or errors explain why not. No partial output is
    returned alongside field errors.
    """
    request: PaymentRequest | None = None
    payload: str | None = None
    image: bytes | None = None
    errors: dict[PaymentField, FieldError] = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        """True if no stage reported an error."""
        return not self.errors and self.payload is not None


class PaymentQRService:
    """
    Builds EPC payloads and QR images from raw payment input.

    Example:
        service = PaymentQRService(renderer=QRCodeRenderer())

        result = service.generate(
            name="Juan Pérez",
            iban="ES91 2100 0418 4502 0005 1332",
            amount="100.00",
            reference="Factura #12345",
        )

        if result.succeeded:
            save(result.image)
    """

    def __init__(
        self,
        renderer: QRRenderer | None = None,
        strict_iban: bool = False,
        version: EPCVersion = "002",
        size: int = DEFAULT_SIZE,
    ) -> None:
        """
        Initialize the service.

        Args:
            renderer: QR image backend (QRCodeRenderer if None)
            strict_iban: Verify IBAN length and checksum
            version: EPC payload version
            size: Default image size in pixels
        """
        self.renderer = renderer or QRCodeRenderer()
        self.strict_iban = strict_iban
        self.version = version
        self.size = size

    @classmethod
    def from_settings(cls, settings: Settings) -> "PaymentQRService":
        """Create a service configured from application settings."""
        return cls(
            renderer=QRCodeRenderer(error_correction=settings.qr_error_correction),
            strict_iban=settings.strict_iban,
            version=settings.epc_version,
            size=settings.qr_size,
        )

    def build_payload(
        self,
        name: str,
        iban: str,
        amount: str,
        reference: str | None = None,
        *,
        bic: str | None = None,
        purpose: str | None = None,
        information: str | None = None,
    ) -> PaymentQRResult:
        """Validate raw input and encode it, without rendering an image."""
        validation = validate(
            name,
            iban,
            amount,
            reference,
            bic=bic,
            purpose=purpose,
            information=information,
            strict_iban=self.strict_iban,
            version=self.version,
        )
        if not validation.is_valid:
            return PaymentQRResult(errors=validation.errors)

        request = validation.unwrap()
        payload = encode(request, version=self.version)
        return PaymentQRResult(request=request, payload=payload)

    def generate(
        self,
        name: str,
        iban: str,
        amount: str,
        reference: str | None = None,
        *,
        bic: str | None = None,
        purpose: str | None = None,
        information: str | None = None,
        size: int | None = None,
    ) -> PaymentQRResult:
        """
        Validate, encode and render a payment QR code.

        A rendering failure is reported once as GENERAL_FAILURE; it is
        not retried.
        """
        result = self.build_payload(
            name,
            iban,
            amount,
            reference,
            bic=bic,
            purpose=purpose,
            information=information,
        )
        if not result.succeeded:
            return result

        try:
            image = self.renderer.render(
                result.payload, size if size is not None else self.size
            )
        except RenderingError as e:
            logger.exception("QR rendering failed")
            return PaymentQRResult(errors={
                PaymentField.GENERAL: FieldError(
                    field=PaymentField.GENERAL,
                    kind=ErrorKind.GENERAL_FAILURE,
                    message=f"Could not generate the QR code: {e}",
                )
            })

        logger.info(f"Generated payment QR for IBAN ending {result.request.iban[-4:]}")
        result.image = image
        return result
