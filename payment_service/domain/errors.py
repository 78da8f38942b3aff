"""
Domain errors.

Each error maps to exactly one class of outward response at the API
boundary:
- InvalidUuidError -> bad input
- PaymentNotFoundError -> resource absent
- ExternalProviderPaymentError -> upstream dependency failure
- StorageError -> store unavailable
"""


class DomainError(Exception):
    """Base exception for payment domain errors."""

    pass


class InvalidUuidError(DomainError):
    """Raised when a supplied identifier is not a well-formed UUID."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Invalid UUID: {value}")


class PaymentNotFoundError(DomainError):
    """Raised when a payment lookup or update targets an unknown id."""

    def __init__(self, payment_id: str | None = None):
        self.payment_id = payment_id
        super().__init__(f"Payment with id {payment_id} not found")


class ExternalProviderPaymentError(DomainError):
    """
    Raised when the payment provider cannot be used.

    Collapses transport failures, non-success HTTP responses and
    rejected/malformed provider payloads into one kind. Retryable and
    non-retryable failures are not distinguished.
    """

    def __init__(self, message: str = "Payment provider failed to process the request"):
        super().__init__(message)


class StorageError(DomainError):
    """Raised by payment stores for underlying infrastructure faults."""

    pass
