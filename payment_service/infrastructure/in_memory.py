"""
In-memory payment store.

Used by tests and by the `memory` store backend. Keeps its own copies of
the entities in a dict keyed by lowercase payment id, so a loaded payment
only changes the store through update(). One asyncio.Lock guards every
access.
"""
import asyncio
import copy
from typing import Dict, List, Optional

from payment_service.domain.entities import Payment
from payment_service.domain.errors import PaymentNotFoundError
from payment_service.domain.ports import PaymentRepository


class InMemoryPaymentRepository(PaymentRepository):
    def __init__(self) -> None:
        self._payments: Dict[str, Payment] = {}
        self._lock = asyncio.Lock()

    async def save(self, payment: Payment) -> None:
        async with self._lock:
            self._payments[payment.id.lower()] = copy.deepcopy(payment)

    async def update(self, payment: Payment) -> None:
        key = payment.id.lower()
        async with self._lock:
            if key not in self._payments:
                raise PaymentNotFoundError(payment.id)
            self._payments[key] = copy.deepcopy(payment)

    async def find_by_id(self, payment_id: str) -> Optional[Payment]:
        async with self._lock:
            payment = self._payments.get(payment_id.lower())
            return copy.deepcopy(payment) if payment is not None else None

    async def find_all(self) -> List[Payment]:
        async with self._lock:
            return [copy.deepcopy(payment) for payment in self._payments.values()]

    def __len__(self) -> int:
        return len(self._payments)
