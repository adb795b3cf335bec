"""
FastAPI application entry point.

This is the main application that ties together all components:
- API routes for payload and QR image generation
- Logging configuration
- Error handling
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from sepaqr import __version__
from sepaqr.api.routes import health, qr
from sepaqr.config import get_settings

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging with the application format."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log the active configuration on startup."""
    settings = get_settings()

    logger.info(f"Starting sepaqr v{__version__}")
    logger.info(f"EPC version: {settings.epc_version}")
    logger.info(f"Strict IBAN checks: {settings.strict_iban}")
    logger.info(f"Debug mode: {settings.debug}")

    yield  # Application runs here

    logger.info("Shutting down sepaqr")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance ready to serve requests.
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="SEPA QR API",
        description=(
            "Validates SEPA credit transfer details and encodes them as "
            "EPC QR payloads and images."
        ),
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    # Register routers
    app.include_router(health.router)
    app.include_router(qr.router, prefix="/api/v1")

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Catch-all exception handler for unhandled errors."""
        logger.exception(f"Unhandled error: {exc}")

        # Don't expose internal errors in production
        if settings.debug:
            detail = str(exc)
        else:
            detail = "An internal error occurred"

        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal Server Error",
                "detail": detail,
            },
        )

    return app


# Create the application instance
app = create_app()


# Development server entry point
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "sepaqr.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
