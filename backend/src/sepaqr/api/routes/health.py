"""
Health check endpoint.

Provides system health status for monitoring and load balancers.
"""

from fastapi import APIRouter

from sepaqr import __version__
from sepaqr.api.schemas import HealthResponse
from sepaqr.config import get_settings

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Report version and active payload configuration."""
    settings = get_settings()

    return HealthResponse(
        status="healthy",
        version=__version__,
        epc_version=settings.epc_version,
        strict_iban=settings.strict_iban,
    )
