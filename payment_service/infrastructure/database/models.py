"""SQLAlchemy database models for the payment store."""
import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    Index,
    Numeric,
    String,
    Uuid,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all database models."""

    pass


class PaymentRecord(Base):
    """
    Payment records table.

    Holds the current state of each payment only; status transitions are
    not recorded.
    """

    __tablename__ = "payments"

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False)
    method: Mapped[str] = mapped_column(String(20), nullable=False)
    product_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    tx_id: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=func.now()
    )

    __table_args__ = (
        CheckConstraint("amount > 0", name="positive_amount"),
        CheckConstraint("currency IN ('BRL', 'USD', 'EUR')", name="valid_currency"),
        CheckConstraint("method IN ('PAYPAL', 'PIX', 'CREDIT_CARD')", name="valid_method"),
        CheckConstraint("status IN ('pending', 'processed')", name="valid_status"),
        Index("idx_payments_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        """String representation of PaymentRecord."""
        return (
            f"<PaymentRecord(id={self.id}, amount={self.amount}, "
            f"currency={self.currency}, status={self.status})>"
        )
