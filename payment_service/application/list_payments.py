"""Read-only listing of stored payments."""
from typing import List

import structlog

from payment_service.domain.entities import Payment
from payment_service.domain.ports import PaymentRepository

logger = structlog.get_logger(__name__)


class ListPaymentsUseCase:
    def __init__(self, repository: PaymentRepository):
        self.repository = repository

    async def execute(self) -> List[Payment]:
        payments = await self.repository.find_all()
        logger.info("payments_listed", count=len(payments))
        return payments
