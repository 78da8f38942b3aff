"""
Ports - abstract contracts the workflows depend on.

PaymentProvider talks to the external gateway, PaymentRepository to
storage. Concrete implementations live in payment_service.infrastructure
and are handed to the workflows through their constructors.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal

from payment_service.domain.entities import Payment


@dataclass(frozen=True)
class Money:
    amount: Decimal
    currency: str


@dataclass(frozen=True)
class PaymentProviderInput:
    """Request sent to the provider to open a transaction."""

    money: Money
    payment_method: str
    product_id: str


@dataclass(frozen=True)
class PaymentProviderResponse:
    """
    Provider answer for both initiate and get_status.

    status is the provider's own vocabulary; "processed" is the only
    value the workflows treat as success.
    """

    status: str
    tx_id: str


class PaymentProvider(ABC):
    """Every payment gateway client must implement this interface."""

    @abstractmethod
    async def initiate(self, request: PaymentProviderInput) -> PaymentProviderResponse:
        """
        Open a transaction on the gateway.

        Not idempotent: every call creates a new provider transaction.

        Raises:
            ExternalProviderPaymentError: gateway unreachable, non-success
                transport status or transport-level failure
        """

    @abstractmethod
    async def get_status(self, tx_id: str) -> PaymentProviderResponse:
        """
        Read the current status of an existing transaction. Read-only.

        Raises:
            ExternalProviderPaymentError: same conditions as initiate
        """


class PaymentRepository(ABC):
    """
    Payment persistence contract.

    Any operation may raise StorageError for infrastructure faults.
    """

    @abstractmethod
    async def save(self, payment: Payment) -> None:
        """Persist a new payment. Called once per payment, at creation."""

    @abstractmethod
    async def update(self, payment: Payment) -> None:
        """
        Persist a mutated payment.

        Raises:
            PaymentNotFoundError: no stored payment has this id
        """

    @abstractmethod
    async def find_by_id(self, payment_id: str) -> Payment | None:
        """Return the stored payment, or None when the id is unknown."""

    @abstractmethod
    async def find_all(self) -> list[Payment]:
        """Return every stored payment, in no particular order."""
