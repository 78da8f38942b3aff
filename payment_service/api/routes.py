"""
API routes for payment initiation and status reconciliation.

Domain errors propagate to the handlers in api.errors, which turn them
into HTTP responses.
"""
import time
from typing import Any, Dict, List

import structlog
from fastapi import APIRouter, Depends, HTTPException, Response, status
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from payment_service.application import (
    CheckPaymentStatusInput,
    CheckPaymentStatusUseCase,
    InitiatePaymentInput,
    InitiatePaymentUseCase,
    ListPaymentsUseCase,
)
from payment_service.domain.errors import ExternalProviderPaymentError, PaymentNotFoundError
from payment_service.domain.value_objects import UniqueEntityId
from payment_service.monitoring.health import HealthCheck
from payment_service.monitoring.metrics import metrics

from .dependencies import (
    get_check_payment_status_use_case,
    get_initiate_payment_use_case,
    get_list_payments_use_case,
)
from .schemas import (
    CreatePaymentRequest,
    ErrorResponse,
    HealthCheckResponse,
    PaymentDetailsResponse,
    PaymentStatusResponse,
)

logger = structlog.get_logger(__name__)

# Create routers
payment_router = APIRouter(prefix="/api/v1/payments", tags=["payments"])
monitoring_router = APIRouter(tags=["monitoring"])

health_check = HealthCheck()


@payment_router.post(
    "",
    response_model=PaymentStatusResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
    summary="Create a payment",
    description="Open a provider transaction and store the payment as pending",
)
async def create_payment(
    request: CreatePaymentRequest,
    usecase: InitiatePaymentUseCase = Depends(get_initiate_payment_use_case),
) -> PaymentStatusResponse:
    """Create a new payment."""
    start_time = time.time()

    logger.info(
        "api_create_payment_request",
        amount=str(request.amount),
        currency=request.currency.value,
        method=request.method.value,
        product_id=str(request.product_id),
    )

    try:
        result = await usecase.execute(
            InitiatePaymentInput(
                amount=request.amount,
                currency=request.currency,
                method=request.method,
                product_id=str(request.product_id),
            )
        )
    except ExternalProviderPaymentError:
        metrics.record_payment_request("failed", request.currency.value, float(request.amount))
        raise

    duration = time.time() - start_time
    metrics.record_payment_request(result.status, request.currency.value, float(request.amount))
    metrics.record_payment_duration(duration)

    logger.info(
        "api_create_payment_success",
        payment_id=result.payment_id,
        status=result.status,
        duration_seconds=duration,
    )

    return PaymentStatusResponse(payment_id=result.payment_id, status=result.status)


@payment_router.get(
    "",
    response_model=List[PaymentDetailsResponse],
    summary="List payments",
    description="Return every stored payment with its current status",
)
async def list_payments(
    usecase: ListPaymentsUseCase = Depends(get_list_payments_use_case),
) -> List[Dict[str, Any]]:
    payments = await usecase.execute()
    return [payment.to_dict() for payment in payments]


@payment_router.get(
    "/{payment_id}",
    response_model=PaymentStatusResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
    summary="Get payment status",
    description="Reconcile the payment with the provider and return its status",
)
async def get_payment_status(
    payment_id: str,
    usecase: CheckPaymentStatusUseCase = Depends(get_check_payment_status_use_case),
) -> PaymentStatusResponse:
    """Get payment status by ID."""
    # Raises InvalidUuidError for malformed ids; ids are compared in lowercase
    payment_id = UniqueEntityId(payment_id).value.lower()

    try:
        result = await usecase.execute(CheckPaymentStatusInput(payment_id=payment_id))
    except PaymentNotFoundError:
        metrics.record_status_check("not_found")
        raise
    except ExternalProviderPaymentError:
        metrics.record_status_check("error")
        raise

    metrics.record_status_check(result.status)

    return PaymentStatusResponse(payment_id=result.payment_id, status=result.status)


@monitoring_router.get(
    "/health",
    response_model=HealthCheckResponse,
    summary="Health check",
    description="Check overall system health",
)
async def health() -> Dict[str, Any]:
    """Health check endpoint for monitoring."""
    return await health_check.check_all()


@monitoring_router.get(
    "/health/live",
    response_model=HealthCheckResponse,
    summary="Liveness probe",
    description="Kubernetes liveness probe endpoint",
)
async def liveness() -> Dict[str, Any]:
    """Liveness probe endpoint."""
    return await health_check.liveness()


@monitoring_router.get(
    "/health/ready",
    response_model=HealthCheckResponse,
    summary="Readiness probe",
    description="Kubernetes readiness probe endpoint",
)
async def readiness() -> Dict[str, Any]:
    """Readiness probe endpoint."""
    result = await health_check.readiness()
    if result["status"] != "healthy":
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=result)
    return result


@monitoring_router.get(
    "/metrics",
    summary="Prometheus metrics",
    description="Expose Prometheus metrics",
    include_in_schema=False,
)
async def prometheus_metrics() -> Response:
    """Expose Prometheus metrics."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
