"""
Check payment status workflow.

Reconciles a stored payment against the provider:
- unknown id → PaymentNotFoundError
- already PROCESSED → answered from the store, provider never called
- otherwise the provider status is returned; "processed" also moves the
  stored payment to PROCESSED

Other provider statuses (e.g. "failed") are returned as-is and leave the
stored payment untouched.
"""
from contextlib import AbstractAsyncContextManager, nullcontext
from dataclasses import dataclass
from typing import Optional

import structlog

from payment_service.application.locking import KeyedLock
from payment_service.domain.entities import PaymentStatus
from payment_service.domain.errors import ExternalProviderPaymentError, PaymentNotFoundError
from payment_service.domain.ports import (
    PaymentProvider,
    PaymentProviderResponse,
    PaymentRepository,
)

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CheckPaymentStatusInput:
    payment_id: str


@dataclass(frozen=True)
class CheckPaymentStatusOutput:
    payment_id: str
    status: str


class CheckPaymentStatusUseCase:
    """
    Status reconciliation for a single payment.

    Pass a KeyedLock to make concurrent checks of the same payment
    single-flight.
    """

    def __init__(
        self,
        provider: PaymentProvider,
        repository: PaymentRepository,
        lock: Optional[KeyedLock] = None,
    ):
        self.provider = provider
        self.repository = repository
        self.lock = lock

    def _guard(self, payment_id: str) -> AbstractAsyncContextManager:
        if self.lock is None:
            return nullcontext()
        return self.lock.hold(payment_id)

    async def _fetch_provider_status(self, tx_id: str) -> PaymentProviderResponse:
        try:
            response = await self.provider.get_status(tx_id)
        except ExternalProviderPaymentError:
            raise
        except Exception as e:
            logger.error(
                "provider_get_status_unexpected_error",
                tx_id=tx_id,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise ExternalProviderPaymentError() from e

        if response is None or not isinstance(response.status, str):
            logger.warning("provider_status_response_malformed", tx_id=tx_id)
            raise ExternalProviderPaymentError()

        return response

    async def execute(self, data: CheckPaymentStatusInput) -> CheckPaymentStatusOutput:
        """
        Check and reconcile a payment's status.

        Args:
            data: Payment to check

        Returns:
            CheckPaymentStatusOutput: Stored status when already processed,
                otherwise the provider's status

        Raises:
            PaymentNotFoundError: No stored payment with this id
            ExternalProviderPaymentError: Provider call failed or returned
                an unusable payload
            StorageError: Store failed
        """
        async with self._guard(data.payment_id):
            payment = await self.repository.find_by_id(data.payment_id)

            if payment is None:
                logger.warning("payment_not_found", payment_id=data.payment_id)
                raise PaymentNotFoundError(data.payment_id)

            if payment.is_processed:
                logger.info(
                    "payment_status_already_final",
                    payment_id=payment.id,
                    status=payment.status.value,
                )
                return CheckPaymentStatusOutput(
                    payment_id=payment.id,
                    status=payment.status.value,
                )

            response = await self._fetch_provider_status(payment.tx_id)

            if response.status == PaymentStatus.PROCESSED.value:
                payment.mark_as_processed()
                await self.repository.update(payment)
                logger.info(
                    "payment_marked_processed",
                    payment_id=payment.id,
                    tx_id=payment.tx_id,
                )
            else:
                logger.info(
                    "payment_status_unchanged",
                    payment_id=payment.id,
                    provider_status=response.status,
                )

            return CheckPaymentStatusOutput(
                payment_id=payment.id,
                status=response.status,
            )
