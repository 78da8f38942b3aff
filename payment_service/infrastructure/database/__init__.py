"""Database package for the payment store."""
from .connection import close_db, get_engine, get_session_factory, init_db
from .models import Base, PaymentRecord
from .repository import SqlAlchemyPaymentRepository

__all__ = [
    "Base",
    "PaymentRecord",
    "SqlAlchemyPaymentRepository",
    "close_db",
    "get_engine",
    "get_session_factory",
    "init_db",
]
