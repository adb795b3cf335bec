"""
Payment QR endpoints.

Validates form input, returns the EPC payload or a rendered PNG.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status
from fastapi.responses import JSONResponse

from sepaqr.api.schemas import ErrorResponse, PayloadResponse, PaymentQRRequest
from sepaqr.config import get_settings
from sepaqr.domain.models import PaymentField
from sepaqr.services.generator import PaymentQRResult, PaymentQRService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/qr", tags=["qr"])


def get_qr_service() -> PaymentQRService:
    """Build the generation service from current settings."""
    return PaymentQRService.from_settings(get_settings())


def _error_response(result: PaymentQRResult) -> JSONResponse:
    """Map failed results to 502 for rendering failures, 422 otherwise."""
    code = (
        status.HTTP_502_BAD_GATEWAY
        if PaymentField.GENERAL in result.errors
        else status.HTTP_422_UNPROCESSABLE_ENTITY
    )
    body = ErrorResponse.from_errors(result.errors)
    return JSONResponse(status_code=code, content=body.model_dump(mode="json"))


@router.post(
    "/payload",
    response_model=PayloadResponse,
    responses={
        422: {"model": ErrorResponse, "description": "Invalid payment details"},
    },
)
def create_payload(
    request: PaymentQRRequest,
    service: Annotated[PaymentQRService, Depends(get_qr_service)],
):
    """
    Validate payment details and return the EPC QR payload text.

    All invalid fields are reported together.
    """
    result = service.build_payload(
        request.name,
        request.iban,
        request.amount,
        request.reference,
        bic=request.bic,
        purpose=request.purpose,
        information=request.information,
    )
    if not result.succeeded:
        return _error_response(result)

    return PayloadResponse(
        payload=result.payload,
        iban=result.request.iban,
        amount=str(result.request.amount),
        currency=result.request.currency,
    )


@router.post(
    "/image",
    response_class=Response,
    responses={
        200: {"content": {"image/png": {}}, "description": "Rendered QR code"},
        422: {"model": ErrorResponse, "description": "Invalid payment details"},
        502: {"model": ErrorResponse, "description": "QR rendering failed"},
    },
)
def create_image(
    request: PaymentQRRequest,
    service: Annotated[PaymentQRService, Depends(get_qr_service)],
    size: Annotated[int | None, Query(ge=64, le=2048)] = None,
):
    """Validate payment details and return the QR code as PNG."""
    result = service.generate(
        request.name,
        request.iban,
        request.amount,
        request.reference,
        bic=request.bic,
        purpose=request.purpose,
        information=request.information,
        size=size,
    )
    if not result.succeeded:
        return _error_response(result)

    return Response(content=result.image, media_type=service.renderer.content_type)
