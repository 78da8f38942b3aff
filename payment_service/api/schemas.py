"""
Pydantic schemas for API request/response models.
"""
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from payment_service.domain.entities import PaymentCurrency, PaymentMethod


class CreatePaymentRequest(BaseModel):
    """Request schema for creating a payment."""

    amount: Decimal = Field(
        ..., gt=0, max_digits=12, decimal_places=2, description="Payment amount"
    )
    currency: PaymentCurrency = Field(..., description="Currency code (BRL, USD, EUR)")
    method: PaymentMethod = Field(..., description="Payment method (PIX, PAYPAL, CREDIT_CARD)")
    product_id: UUID = Field(..., description="Purchased product identifier")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "amount": 150,
                    "currency": "BRL",
                    "method": "PIX",
                    "product_id": "42002e24-baea-41a7-9da2-6464319bc9c6",
                }
            ]
        }
    }


class PaymentStatusResponse(BaseModel):
    """Response schema for payment creation and status checks."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "paymentId": "123e4567-e89b-12d3-a456-426614174000",
                    "status": "pending",
                }
            ]
        },
    )

    payment_id: str = Field(..., alias="paymentId", description="Payment ID")
    status: str = Field(..., description="Payment status")


class PaymentDetailsResponse(BaseModel):
    """Full view of a stored payment."""

    id: str = Field(..., description="Payment ID")
    amount: Decimal = Field(..., description="Payment amount")
    currency: str = Field(..., description="Currency code")
    method: str = Field(..., description="Payment method")
    product_id: str = Field(..., description="Purchased product identifier")
    tx_id: str = Field(..., description="Provider transaction ID")
    status: str = Field(..., description="Stored payment status")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last status change timestamp")


class ErrorResponse(BaseModel):
    """Body returned for mapped domain errors."""

    statusCode: int = Field(..., description="HTTP status code")
    error: str = Field(..., description="HTTP reason phrase")
    message: str = Field(..., description="Error detail")


class HealthCheckResponse(BaseModel):
    """Response schema for health checks."""

    status: str = Field(..., description="Overall health status (healthy/unhealthy)")
    checks: dict | None = Field(default=None, description="Individual service checks")
    message: str | None = Field(default=None, description="Status message")
