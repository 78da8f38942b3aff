"""
SQLAlchemy-backed payment store.

Each operation runs in its own session and commits before returning.
SQLAlchemy failures surface as StorageError.
"""
import uuid
from typing import List, Optional

import structlog
from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from payment_service.domain.entities import Payment
from payment_service.domain.errors import PaymentNotFoundError, StorageError
from payment_service.domain.ports import PaymentRepository
from payment_service.infrastructure.database.models import PaymentRecord

logger = structlog.get_logger(__name__)


def _to_record(payment: Payment) -> PaymentRecord:
    return PaymentRecord(
        id=uuid.UUID(payment.id),
        amount=payment.amount,
        currency=payment.currency.value,
        method=payment.method.value,
        product_id=payment.product_id,
        tx_id=payment.tx_id,
        status=payment.status.value,
        created_at=payment.created_at,
        updated_at=payment.updated_at,
    )


def _to_domain(record: PaymentRecord) -> Payment:
    return Payment(
        id=str(record.id),
        amount=record.amount,
        currency=record.currency,
        method=record.method,
        product_id=record.product_id,
        tx_id=record.tx_id,
        status=record.status,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


class SqlAlchemyPaymentRepository(PaymentRepository):
    """Payment store over the `payments` table."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        """
        Initialize repository.

        Args:
            session_factory: Async session factory bound to the engine
        """
        self.session_factory = session_factory

    async def save(self, payment: Payment) -> None:
        try:
            async with self.session_factory() as session:
                session.add(_to_record(payment))
                await session.commit()
        except SQLAlchemyError as e:
            logger.error("payment_save_failed", payment_id=payment.id, error=str(e))
            raise StorageError(f"Failed to save payment {payment.id}") from e

    async def update(self, payment: Payment) -> None:
        """
        Write the mutable fields (status, updated_at) of a stored payment.

        Raises:
            PaymentNotFoundError: No row with this id
            StorageError: Database failure
        """
        stmt = (
            update(PaymentRecord)
            .where(PaymentRecord.id == uuid.UUID(payment.id))
            .values(status=payment.status.value, updated_at=payment.updated_at)
        )
        try:
            async with self.session_factory() as session:
                result = await session.execute(stmt)
                if result.rowcount == 0:
                    await session.rollback()
                    raise PaymentNotFoundError(payment.id)
                await session.commit()
        except SQLAlchemyError as e:
            logger.error("payment_update_failed", payment_id=payment.id, error=str(e))
            raise StorageError(f"Failed to update payment {payment.id}") from e

    async def find_by_id(self, payment_id: str) -> Optional[Payment]:
        try:
            key = uuid.UUID(str(payment_id))
        except ValueError:
            return None

        try:
            async with self.session_factory() as session:
                record = await session.get(PaymentRecord, key)
        except SQLAlchemyError as e:
            logger.error("payment_lookup_failed", payment_id=payment_id, error=str(e))
            raise StorageError(f"Failed to load payment {payment_id}") from e

        if record is None:
            return None
        return _to_domain(record)

    async def find_all(self) -> List[Payment]:
        try:
            async with self.session_factory() as session:
                result = await session.execute(select(PaymentRecord))
                records = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("payment_listing_failed", error=str(e))
            raise StorageError("Failed to list payments") from e

        return [_to_domain(record) for record in records]
