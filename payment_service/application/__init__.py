"""Application workflows orchestrating the payment lifecycle."""
from .check_payment_status import (
    CheckPaymentStatusInput,
    CheckPaymentStatusOutput,
    CheckPaymentStatusUseCase,
)
from .initiate_payment import (
    InitiatePaymentInput,
    InitiatePaymentOutput,
    InitiatePaymentUseCase,
)
from .list_payments import ListPaymentsUseCase
from .locking import KeyedLock

__all__ = [
    "CheckPaymentStatusInput",
    "CheckPaymentStatusOutput",
    "CheckPaymentStatusUseCase",
    "InitiatePaymentInput",
    "InitiatePaymentOutput",
    "InitiatePaymentUseCase",
    "KeyedLock",
    "ListPaymentsUseCase",
]
