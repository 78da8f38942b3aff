"""
Infrastructure Layer - concrete implementations of the domain ports.

- ExternalPaymentProvider: httpx client for the provider REST API
- SqlAlchemyPaymentRepository: async SQLAlchemy store
- InMemoryPaymentRepository: dict-backed store
"""
from .database import SqlAlchemyPaymentRepository
from .external_provider import ExternalPaymentProvider
from .in_memory import InMemoryPaymentRepository

__all__ = [
    "ExternalPaymentProvider",
    "InMemoryPaymentRepository",
    "SqlAlchemyPaymentRepository",
]
