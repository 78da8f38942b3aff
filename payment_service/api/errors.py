"""
Mapping of domain errors to HTTP responses.

Body shape for every mapped error:
    {"statusCode": 404, "error": "Not Found", "message": "..."}
"""
from http import HTTPStatus

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from payment_service.domain.errors import (
    ExternalProviderPaymentError,
    InvalidUuidError,
    PaymentNotFoundError,
    StorageError,
)

logger = structlog.get_logger(__name__)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "statusCode": status_code,
            "error": HTTPStatus(status_code).phrase,
            "message": message,
        },
    )


async def payment_not_found_handler(request: Request, exc: PaymentNotFoundError) -> JSONResponse:
    logger.warning("payment_not_found_response", path=request.url.path, error=str(exc))
    return error_response(status.HTTP_404_NOT_FOUND, str(exc))


async def external_provider_error_handler(
    request: Request, exc: ExternalProviderPaymentError
) -> JSONResponse:
    logger.error(
        "provider_failure_response",
        path=request.url.path,
        error=str(exc),
        cause=repr(exc.__cause__) if exc.__cause__ else None,
    )
    return error_response(status.HTTP_502_BAD_GATEWAY, str(exc))


async def invalid_uuid_handler(request: Request, exc: InvalidUuidError) -> JSONResponse:
    logger.warning("invalid_uuid_response", path=request.url.path, error=str(exc))
    return error_response(status.HTTP_400_BAD_REQUEST, str(exc))


async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    logger.error(
        "storage_failure_response",
        path=request.url.path,
        error=str(exc),
        cause=repr(exc.__cause__) if exc.__cause__ else None,
    )
    return error_response(status.HTTP_503_SERVICE_UNAVAILABLE, str(exc))


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    messages = [
        f"{'.'.join(str(part) for part in err['loc'][1:])}: {err['msg']}"
        for err in exc.errors()
    ]
    logger.warning("request_validation_failed", path=request.url.path, errors=messages)
    return error_response(status.HTTP_400_BAD_REQUEST, "; ".join(messages))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        error=str(exc),
        error_type=type(exc).__name__,
    )
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "An unexpected error occurred. Please try again later.",
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PaymentNotFoundError, payment_not_found_handler)
    app.add_exception_handler(ExternalProviderPaymentError, external_provider_error_handler)
    app.add_exception_handler(InvalidUuidError, invalid_uuid_handler)
    app.add_exception_handler(StorageError, storage_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
