"""
Payment entity - the transactional record.

State machine:
    PENDING → PROCESSED

PROCESSED is terminal. There is no failed/cancelled state: any other
status the provider reports is passed back to the caller and never
stored.

Every field except status and updated_at is fixed at construction.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any

from payment_service.domain.value_objects import UniqueEntityId


class PaymentStatus(str, Enum):
    """Payment lifecycle states."""

    PENDING = "pending"
    PROCESSED = "processed"


class PaymentCurrency(str, Enum):
    """Currencies accepted by the provider."""

    BRL = "BRL"
    USD = "USD"
    EUR = "EUR"


class PaymentMethod(str, Enum):
    """Payment rails accepted by the provider."""

    PAYPAL = "PAYPAL"
    PIX = "PIX"
    CREDIT_CARD = "CREDIT_CARD"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime | None) -> datetime | None:
    # naive timestamps (e.g. read back from SQLite) are taken as UTC
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class Payment:
    """
    Payment entity.

    Created by the initiate workflow after the provider has accepted the
    transaction, so tx_id is always known. Mutated only through
    mark_as_processed().

    The same constructor reconstitutes stored payments: pass the stored
    id, status and timestamps.
    """

    def __init__(
        self,
        amount: Decimal | int | float | str,
        currency: PaymentCurrency | str,
        method: PaymentMethod | str,
        product_id: str,
        tx_id: str,
        status: PaymentStatus | str = PaymentStatus.PENDING,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
        id: UniqueEntityId | str | None = None,
    ):
        amount = Decimal(str(amount))
        if amount <= 0:
            raise ValueError(f"Payment amount must be positive, got {amount}")
        if not tx_id:
            raise ValueError("Payment requires a provider transaction id")

        if not isinstance(id, UniqueEntityId):
            id = UniqueEntityId(id)

        created_at = _as_utc(created_at) or _utcnow()
        updated_at = _as_utc(updated_at)

        self._id = id
        self._amount = amount
        self._currency = PaymentCurrency(currency)
        self._method = PaymentMethod(method)
        self._product_id = str(product_id)
        self._tx_id = tx_id
        self._status = PaymentStatus(status)
        self._created_at = created_at
        self._updated_at = updated_at or created_at

    @property
    def id(self) -> str:
        return str(self._id)

    @property
    def amount(self) -> Decimal:
        return self._amount

    @property
    def currency(self) -> PaymentCurrency:
        return self._currency

    @property
    def method(self) -> PaymentMethod:
        return self._method

    @property
    def product_id(self) -> str:
        return self._product_id

    @property
    def tx_id(self) -> str:
        return self._tx_id

    @property
    def status(self) -> PaymentStatus:
        return self._status

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    @property
    def is_processed(self) -> bool:
        return self._status == PaymentStatus.PROCESSED

    def mark_as_processed(self) -> None:
        """
        Move the payment to PROCESSED.

        Calling it again keeps the status and refreshes updated_at; the
        new timestamp never goes backwards.
        """
        self._status = PaymentStatus.PROCESSED
        self._updated_at = max(_utcnow(), self._updated_at)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "amount": self._amount,
            "currency": self._currency.value,
            "method": self._method.value,
            "product_id": self._product_id,
            "tx_id": self._tx_id,
            "status": self._status.value,
            "created_at": self._created_at,
            "updated_at": self._updated_at,
        }

    def __repr__(self) -> str:
        return (
            f"<Payment(id={self.id}, amount={self._amount}, "
            f"currency={self._currency.value}, status={self._status.value})>"
        )
