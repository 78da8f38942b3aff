"""
Dependency wiring for the API.

The ports are bound to concrete implementations here and nowhere else.
Tests swap them through `app.dependency_overrides`.
"""
from functools import lru_cache

from fastapi import Depends

from payment_service.application import (
    CheckPaymentStatusUseCase,
    InitiatePaymentUseCase,
    KeyedLock,
    ListPaymentsUseCase,
)
from payment_service.config import get_settings
from payment_service.domain.ports import PaymentProvider, PaymentRepository
from payment_service.infrastructure import (
    ExternalPaymentProvider,
    InMemoryPaymentRepository,
    SqlAlchemyPaymentRepository,
)
from payment_service.infrastructure.database import get_session_factory


@lru_cache()
def get_payment_repository() -> PaymentRepository:
    """Payment store selected by PAYMENT_STORE_BACKEND."""
    settings = get_settings()
    if settings.uses_database:
        return SqlAlchemyPaymentRepository(get_session_factory())
    return InMemoryPaymentRepository()


@lru_cache()
def get_payment_provider() -> PaymentProvider:
    return ExternalPaymentProvider()


@lru_cache()
def get_status_check_lock() -> KeyedLock:
    # Shared by every request so checks of one payment serialize
    return KeyedLock()


def get_initiate_payment_use_case(
    provider: PaymentProvider = Depends(get_payment_provider),
    repository: PaymentRepository = Depends(get_payment_repository),
) -> InitiatePaymentUseCase:
    return InitiatePaymentUseCase(provider, repository)


def get_check_payment_status_use_case(
    provider: PaymentProvider = Depends(get_payment_provider),
    repository: PaymentRepository = Depends(get_payment_repository),
    lock: KeyedLock = Depends(get_status_check_lock),
) -> CheckPaymentStatusUseCase:
    return CheckPaymentStatusUseCase(provider, repository, lock=lock)


def get_list_payments_use_case(
    repository: PaymentRepository = Depends(get_payment_repository),
) -> ListPaymentsUseCase:
    return ListPaymentsUseCase(repository)
