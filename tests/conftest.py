"""
Pytest configuration and fixtures.
"""
import os

# Settings are read when the application modules are imported
os.environ.setdefault("PAYMENT_PROVIDER_URL", "http://provider.test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("PAYMENT_STORE_BACKEND", "memory")

import uuid  # noqa: E402
from datetime import datetime, timedelta, timezone  # noqa: E402
from decimal import Decimal  # noqa: E402
from typing import Any, AsyncGenerator, Callable  # noqa: E402
from unittest.mock import AsyncMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from payment_service.api.dependencies import (  # noqa: E402
    get_payment_provider,
    get_payment_repository,
)
from payment_service.api.main import app  # noqa: E402
from payment_service.domain.entities import Payment, PaymentCurrency, PaymentMethod  # noqa: E402
from payment_service.domain.ports import PaymentProvider, PaymentProviderResponse  # noqa: E402
from payment_service.infrastructure.database.models import Base  # noqa: E402
from payment_service.infrastructure.in_memory import InMemoryPaymentRepository  # noqa: E402

PRODUCT_ID = "42002e24-baea-41a7-9da2-6464319bc9c6"


@pytest.fixture
def repository() -> InMemoryPaymentRepository:
    """Empty in-memory payment store."""
    return InMemoryPaymentRepository()


@pytest.fixture
def provider() -> AsyncMock:
    """Provider mock that accepts initiations and reports pending."""
    mock = AsyncMock(spec=PaymentProvider)
    mock.initiate.return_value = PaymentProviderResponse(status="processed", tx_id="tx_123")
    mock.get_status.return_value = PaymentProviderResponse(status="pending", tx_id="tx_123")
    return mock


@pytest.fixture
def make_payment() -> Callable[..., Payment]:
    """Factory for payments with sensible defaults."""

    def _make(**overrides: Any) -> Payment:
        fields: dict[str, Any] = {
            "amount": Decimal("150.00"),
            "currency": PaymentCurrency.BRL,
            "method": PaymentMethod.PIX,
            "product_id": PRODUCT_ID,
            "tx_id": f"tx_{uuid.uuid4().hex[:12]}",
            "created_at": datetime.now(timezone.utc) - timedelta(minutes=5),
        }
        fields.update(overrides)
        return Payment(**fields)

    return _make


@pytest_asyncio.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession], Any]:
    """Session factory over a fresh in-memory SQLite database."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def client(
    provider: AsyncMock, repository: InMemoryPaymentRepository
) -> AsyncGenerator[AsyncClient, Any]:
    """HTTP client against the app with the provider and store swapped out."""
    app.dependency_overrides[get_payment_provider] = lambda: provider
    app.dependency_overrides[get_payment_repository] = lambda: repository

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
