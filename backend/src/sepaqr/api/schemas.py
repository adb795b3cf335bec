"""
Pydantic schemas for API request/response validation.

These schemas define the contract between a form frontend and the backend.
All input fields are plain strings; the domain validator owns every rule,
so a malformed amount is reported as a field error rather than a schema error.
"""

from pydantic import BaseModel, Field

from sepaqr.domain.models import ErrorKind, FieldError, PaymentField


# =============================================================================
# Request Schemas
# =============================================================================

class PaymentQRRequest(BaseModel):
    """Raw payment details as typed by the user."""
    name: str = Field(default="", description="Beneficiary name")
    iban: str = Field(default="", description="Beneficiary IBAN, spaces allowed")
    amount: str = Field(default="", description="Amount in euros, e.g. 100.00")
    reference: str | None = Field(default=None, description="Remittance reference")
    bic: str | None = Field(default=None, description="BIC of the beneficiary bank")
    purpose: str | None = Field(default=None, description="Four-letter purpose code")
    information: str | None = Field(
        default=None,
        description="Beneficiary to originator information",
    )


# =============================================================================
# Response Schemas
# =============================================================================

class FieldErrorResponse(BaseModel):
    """A rejected field."""
    kind: ErrorKind
    message: str


class ErrorResponse(BaseModel):
    """Errors keyed by field name."""
    errors: dict[PaymentField, FieldErrorResponse]

    @classmethod
    def from_errors(cls, errors: dict[PaymentField, FieldError]) -> "ErrorResponse":
        return cls(errors={
            f: FieldErrorResponse(kind=e.kind, message=e.message)
            for f, e in errors.items()
        })


class PayloadResponse(BaseModel):
    """Encoded EPC payload and the normalized values it carries."""
    payload: str
    iban: str
    amount: str
    currency: str = "EUR"


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "healthy"
    version: str
    epc_version: str
    strict_iban: bool
