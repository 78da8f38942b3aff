"""FastAPI application and routes."""
from .main import app
from .schemas import (
    CreatePaymentRequest,
    ErrorResponse,
    PaymentDetailsResponse,
    PaymentStatusResponse,
)

__all__ = [
    "app",
    "CreatePaymentRequest",
    "ErrorResponse",
    "PaymentDetailsResponse",
    "PaymentStatusResponse",
]
