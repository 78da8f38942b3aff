"""
Initiate payment workflow.

Flow:
1. Ask the provider to open a transaction
2. Reject anything but an accepted ("processed") acknowledgement
3. Create the Payment as PENDING with the provider's tx_id
4. Save it

The provider's "processed" acknowledgement only means the gateway took
the transaction; settlement is learned later through the status check,
so the stored status always starts as pending.
"""
from dataclasses import dataclass
from decimal import Decimal

import structlog

from payment_service.domain.entities import (
    Payment,
    PaymentCurrency,
    PaymentMethod,
    PaymentStatus,
)
from payment_service.domain.errors import ExternalProviderPaymentError
from payment_service.domain.ports import (
    Money,
    PaymentProvider,
    PaymentProviderInput,
    PaymentProviderResponse,
    PaymentRepository,
)

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class InitiatePaymentInput:
    amount: Decimal
    currency: PaymentCurrency
    method: PaymentMethod
    product_id: str


@dataclass(frozen=True)
class InitiatePaymentOutput:
    payment_id: str
    status: str


class InitiatePaymentUseCase:
    """Creates a payment once the provider has accepted the transaction."""

    def __init__(self, provider: PaymentProvider, repository: PaymentRepository):
        self.provider = provider
        self.repository = repository

    async def _call_provider(self, data: InitiatePaymentInput) -> PaymentProviderResponse:
        request = PaymentProviderInput(
            money=Money(amount=data.amount, currency=PaymentCurrency(data.currency).value),
            payment_method=PaymentMethod(data.method).value,
            product_id=data.product_id,
        )
        try:
            return await self.provider.initiate(request)
        except ExternalProviderPaymentError:
            raise
        except Exception as e:
            logger.error(
                "provider_initiate_unexpected_error",
                error=str(e),
                error_type=type(e).__name__,
            )
            raise ExternalProviderPaymentError() from e

    async def execute(self, data: InitiatePaymentInput) -> InitiatePaymentOutput:
        """
        Initiate a payment.

        Args:
            data: Well-formed payment request

        Returns:
            InitiatePaymentOutput: New payment id and "pending"

        Raises:
            ExternalProviderPaymentError: Provider failed or did not accept
                the transaction; nothing is persisted
            StorageError: Store failed while saving
        """
        logger.info(
            "payment_initiation_started",
            amount=str(data.amount),
            currency=PaymentCurrency(data.currency).value,
            method=PaymentMethod(data.method).value,
            product_id=data.product_id,
        )

        response = await self._call_provider(data)

        if response is None or response.status != PaymentStatus.PROCESSED.value:
            logger.warning(
                "provider_rejected_payment",
                provider_status=getattr(response, "status", None),
            )
            raise ExternalProviderPaymentError()

        if not response.tx_id:
            logger.warning("provider_response_missing_tx_id")
            raise ExternalProviderPaymentError()

        payment = Payment(
            amount=data.amount,
            currency=data.currency,
            method=data.method,
            product_id=data.product_id,
            tx_id=response.tx_id,
            status=PaymentStatus.PENDING,
        )

        await self.repository.save(payment)

        logger.info(
            "payment_initiated",
            payment_id=payment.id,
            tx_id=payment.tx_id,
            status=payment.status.value,
        )

        return InitiatePaymentOutput(
            payment_id=payment.id,
            status=PaymentStatus.PENDING.value,
        )
