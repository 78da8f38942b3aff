"""
Integration tests for the payment HTTP API.
"""
import uuid
from typing import Any, Callable, Dict
from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient

from payment_service.domain.entities import Payment, PaymentStatus
from payment_service.domain.errors import ExternalProviderPaymentError, StorageError
from payment_service.domain.ports import PaymentProviderResponse
from payment_service.infrastructure.in_memory import InMemoryPaymentRepository

PAYMENTS_URL = "/api/v1/payments"


@pytest.fixture
def payment_body() -> Dict[str, Any]:
    return {
        "amount": 150,
        "currency": "BRL",
        "method": "PIX",
        "product_id": "42002e24-baea-41a7-9da2-6464319bc9c6",
    }


class TestCreatePayment:
    """POST /api/v1/payments"""

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_create_returns_pending(
        self,
        client: AsyncClient,
        repository: InMemoryPaymentRepository,
        payment_body: Dict[str, Any],
    ) -> None:
        """An accepted payment answers 201 with its id and pending status."""
        response = await client.post(PAYMENTS_URL, json=payment_body)

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "pending"
        assert uuid.UUID(body["paymentId"])
        assert "X-Request-ID" in response.headers
        assert len(repository) == 1

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_provider_rejection_returns_502(
        self,
        client: AsyncClient,
        provider: AsyncMock,
        repository: InMemoryPaymentRepository,
        payment_body: Dict[str, Any],
    ) -> None:
        provider.initiate.return_value = PaymentProviderResponse(status="failed", tx_id="")

        response = await client.post(PAYMENTS_URL, json=payment_body)

        assert response.status_code == 502
        assert response.json() == {
            "statusCode": 502,
            "error": "Bad Gateway",
            "message": "Payment provider failed to process the request",
        }
        assert len(repository) == 0

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_provider_failure_returns_502(
        self, client: AsyncClient, provider: AsyncMock, payment_body: Dict[str, Any]
    ) -> None:
        provider.initiate.side_effect = ExternalProviderPaymentError(
            "Failed to connect to payment provider"
        )

        response = await client.post(PAYMENTS_URL, json=payment_body)

        assert response.status_code == 502
        assert response.json()["message"] == "Failed to connect to payment provider"

    @pytest.mark.integration
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "field,value",
        [
            ("amount", -10),
            ("amount", 0),
            ("amount", "abc"),
            ("amount", "10.001"),
            ("currency", "GBP"),
            ("method", "BOLETO"),
            ("product_id", "not-a-uuid"),
        ],
    )
    async def test_invalid_body_returns_400(
        self,
        client: AsyncClient,
        provider: AsyncMock,
        payment_body: Dict[str, Any],
        field: str,
        value: Any,
    ) -> None:
        """Malformed requests are rejected before the provider is called."""
        payment_body[field] = value

        response = await client.post(PAYMENTS_URL, json=payment_body)

        assert response.status_code == 400
        body = response.json()
        assert body["statusCode"] == 400
        assert body["error"] == "Bad Request"
        assert field in body["message"]
        provider.initiate.assert_not_awaited()

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_missing_field_returns_400(
        self, client: AsyncClient, payment_body: Dict[str, Any]
    ) -> None:
        del payment_body["method"]

        response = await client.post(PAYMENTS_URL, json=payment_body)

        assert response.status_code == 400


class TestGetPaymentStatus:
    """GET /api/v1/payments/{payment_id}"""

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_unknown_payment_returns_404(self, client: AsyncClient) -> None:
        payment_id = str(uuid.uuid4())

        response = await client.get(f"{PAYMENTS_URL}/{payment_id}")

        assert response.status_code == 404
        assert response.json() == {
            "statusCode": 404,
            "error": "Not Found",
            "message": f"Payment with id {payment_id} not found",
        }

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_malformed_id_returns_400(
        self, client: AsyncClient, provider: AsyncMock
    ) -> None:
        response = await client.get(f"{PAYMENTS_URL}/not-a-uuid")

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid UUID: not-a-uuid"
        provider.get_status.assert_not_awaited()

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_uppercase_id_finds_payment(
        self,
        client: AsyncClient,
        repository: InMemoryPaymentRepository,
        make_payment: Callable[..., Payment],
    ) -> None:
        payment = make_payment()
        await repository.save(payment)

        response = await client.get(f"{PAYMENTS_URL}/{payment.id.upper()}")

        assert response.status_code == 200
        assert response.json()["paymentId"] == payment.id

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_pending_payment_reports_provider_status(
        self,
        client: AsyncClient,
        repository: InMemoryPaymentRepository,
        make_payment: Callable[..., Payment],
    ) -> None:
        payment = make_payment()
        await repository.save(payment)

        response = await client.get(f"{PAYMENTS_URL}/{payment.id}")

        assert response.status_code == 200
        assert response.json() == {"paymentId": payment.id, "status": "pending"}

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_processed_by_provider_is_persisted(
        self,
        client: AsyncClient,
        provider: AsyncMock,
        repository: InMemoryPaymentRepository,
        make_payment: Callable[..., Payment],
    ) -> None:
        payment = make_payment()
        await repository.save(payment)
        provider.get_status.return_value = PaymentProviderResponse(
            status="processed", tx_id=payment.tx_id
        )

        first = await client.get(f"{PAYMENTS_URL}/{payment.id}")
        second = await client.get(f"{PAYMENTS_URL}/{payment.id}")

        assert first.json()["status"] == "processed"
        assert second.json()["status"] == "processed"
        assert provider.get_status.await_count == 1
        stored = await repository.find_by_id(payment.id)
        assert stored is not None
        assert stored.status == PaymentStatus.PROCESSED

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_provider_failure_returns_502(
        self,
        client: AsyncClient,
        provider: AsyncMock,
        repository: InMemoryPaymentRepository,
        make_payment: Callable[..., Payment],
    ) -> None:
        payment = make_payment()
        await repository.save(payment)
        provider.get_status.side_effect = ExternalProviderPaymentError("Provider returned status 500")

        response = await client.get(f"{PAYMENTS_URL}/{payment.id}")

        assert response.status_code == 502
        assert response.json()["message"] == "Provider returned status 500"

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_storage_failure_returns_503(
        self, client: AsyncClient, repository: InMemoryPaymentRepository
    ) -> None:
        repository.find_by_id = AsyncMock(side_effect=StorageError("Failed to load payment"))

        response = await client.get(f"{PAYMENTS_URL}/{uuid.uuid4()}")

        assert response.status_code == 503
        assert response.json()["error"] == "Service Unavailable"


class TestListPayments:
    """GET /api/v1/payments"""

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_empty(self, client: AsyncClient) -> None:
        response = await client.get(PAYMENTS_URL)

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_lists_stored_payments(
        self,
        client: AsyncClient,
        repository: InMemoryPaymentRepository,
        make_payment: Callable[..., Payment],
    ) -> None:
        payment = make_payment(tx_id="tx_list")
        await repository.save(payment)

        response = await client.get(PAYMENTS_URL)

        assert response.status_code == 200
        [item] = response.json()
        assert item["id"] == payment.id
        assert item["amount"] == "150.00"
        assert item["currency"] == "BRL"
        assert item["method"] == "PIX"
        assert item["tx_id"] == "tx_list"
        assert item["status"] == "pending"


class TestMonitoringEndpoints:
    """Root, liveness and metrics endpoints."""

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_root(self, client: AsyncClient) -> None:
        response = await client.get("/")

        assert response.status_code == 200
        assert response.json()["status"] == "operational"

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_liveness(self, client: AsyncClient) -> None:
        response = await client.get("/health/live")

        assert response.status_code == 200
        assert response.json()["status"] == "alive"

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_metrics_exposed(self, client: AsyncClient, payment_body: Dict[str, Any]) -> None:
        await client.post(PAYMENTS_URL, json=payment_body)

        response = await client.get("/metrics")

        assert response.status_code == 200
        assert "payment_requests_total" in response.text

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_request_id_is_echoed(self, client: AsyncClient) -> None:
        response = await client.get("/health/live", headers={"X-Request-ID": "req-123"})

        assert response.headers["X-Request-ID"] == "req-123"
