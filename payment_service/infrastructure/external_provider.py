"""
External payment provider HTTP client.

Wire format:
- POST {base_url}/init-payment
  {"money": {"amount": 100.0, "currency": "BRL"}, "payment_method": "PIX",
   "product_id": "..."} -> {"status": "processed", "tx_id": "..."}
- GET {base_url}/list-payment/{tx_id} -> {"status": "...", "tx_id": "..."}

Every call is attempted exactly once. Any failure (transport error,
timeout, non-2xx status, unparseable body) raises
ExternalProviderPaymentError.
"""
import time
from typing import Any, Dict, Optional

import httpx
import structlog

from payment_service.config import get_settings
from payment_service.domain.errors import ExternalProviderPaymentError
from payment_service.domain.ports import (
    PaymentProvider,
    PaymentProviderInput,
    PaymentProviderResponse,
)
from payment_service.monitoring.metrics import metrics

logger = structlog.get_logger(__name__)


class ExternalPaymentProvider(PaymentProvider):
    """
    httpx client for the payment provider REST API.

    A new AsyncClient is opened per call; pass `transport` to route
    requests elsewhere (e.g. httpx.MockTransport in tests).
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialize provider client.

        Args:
            base_url: Provider base URL (defaults to PAYMENT_PROVIDER_URL)
            timeout_seconds: Request timeout (defaults to settings)
            transport: Optional httpx transport
        """
        if base_url is None or timeout_seconds is None:
            settings = get_settings()
            base_url = base_url or settings.payment_provider_url
            timeout_seconds = timeout_seconds or settings.payment_provider_timeout_seconds

        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.transport = transport

    async def _request(
        self,
        operation: str,
        method: str,
        path: str,
        payload: Optional[Dict[str, Any]] = None,
    ) -> PaymentProviderResponse:
        """
        Perform one provider call and parse the {status, tx_id} payload.

        Raises:
            ExternalProviderPaymentError: On any failure
        """
        url = f"{self.base_url}{path}"
        start_time = time.time()

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds,
                transport=self.transport,
                headers={"Content-Type": "application/json"},
            ) as client:
                response = await client.request(method, url, json=payload)
        except httpx.HTTPError as e:
            metrics.record_provider_api_error(operation, "transport")
            logger.error(
                "provider_request_failed",
                operation=operation,
                url=url,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise ExternalProviderPaymentError("Failed to connect to payment provider") from e

        duration = time.time() - start_time
        metrics.record_provider_api_call(operation, str(response.status_code), duration)

        if not response.is_success:
            metrics.record_provider_api_error(operation, "http_status")
            logger.error(
                "provider_returned_error_status",
                operation=operation,
                url=url,
                status_code=response.status_code,
            )
            raise ExternalProviderPaymentError(
                f"Provider returned status {response.status_code}"
            )

        try:
            data = response.json()
        except ValueError as e:
            metrics.record_provider_api_error(operation, "invalid_payload")
            logger.error("provider_response_not_json", operation=operation, url=url)
            raise ExternalProviderPaymentError(
                "Payment provider returned an invalid response"
            ) from e

        if not isinstance(data, dict) or not isinstance(data.get("status"), str):
            metrics.record_provider_api_error(operation, "invalid_payload")
            logger.error("provider_response_malformed", operation=operation, url=url)
            raise ExternalProviderPaymentError(
                "Payment provider returned an invalid response"
            )

        logger.info(
            "provider_call_completed",
            operation=operation,
            status=data["status"],
            tx_id=data.get("tx_id"),
            duration_seconds=duration,
        )

        return PaymentProviderResponse(
            status=data["status"],
            tx_id=str(data.get("tx_id") or ""),
        )

    async def initiate(self, request: PaymentProviderInput) -> PaymentProviderResponse:
        payload = {
            "money": {
                "amount": float(request.money.amount),
                "currency": request.money.currency,
            },
            "payment_method": request.payment_method,
            "product_id": request.product_id,
        }
        return await self._request("initiate", "POST", "/init-payment", payload)

    async def get_status(self, tx_id: str) -> PaymentProviderResponse:
        return await self._request("get_status", "GET", f"/list-payment/{tx_id}")
