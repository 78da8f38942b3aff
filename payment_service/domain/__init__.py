"""
Domain Layer - Pure Business Logic

This layer contains:
- The Payment entity and its status transition rule
- Value objects (UniqueEntityId)
- Ports (abstract provider and store contracts)
- Domain errors

Key principle: ZERO dependencies on infrastructure.
"""
from .entities import Payment, PaymentCurrency, PaymentMethod, PaymentStatus
from .errors import (
    DomainError,
    ExternalProviderPaymentError,
    InvalidUuidError,
    PaymentNotFoundError,
    StorageError,
)
from .ports import (
    Money,
    PaymentProvider,
    PaymentProviderInput,
    PaymentProviderResponse,
    PaymentRepository,
)
from .value_objects import UniqueEntityId

__all__ = [
    "DomainError",
    "ExternalProviderPaymentError",
    "InvalidUuidError",
    "Money",
    "Payment",
    "PaymentCurrency",
    "PaymentMethod",
    "PaymentNotFoundError",
    "PaymentProvider",
    "PaymentProviderInput",
    "PaymentProviderResponse",
    "PaymentRepository",
    "PaymentStatus",
    "StorageError",
    "UniqueEntityId",
]
