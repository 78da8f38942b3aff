"""
Prometheus metrics for payment service monitoring.

Tracks:
- Payment initiations by outcome and currency
- Payment amounts
- Status checks by result
- Provider API calls, errors and latency
"""
from prometheus_client import Counter, Histogram

# Payment metrics
payment_requests_total = Counter(
    "payment_requests_total",
    "Total number of payment initiation requests",
    ["status", "currency"],  # status: pending, failed
)

payment_processing_duration_seconds = Histogram(
    "payment_processing_duration_seconds",
    "Payment initiation duration in seconds",
    buckets=(0.1, 0.25, 0.5, 0.75, 1.0, 2.5, 5.0, 7.5, 10.0),
)

payment_amount = Histogram(
    "payment_amount",
    "Payment amounts in major currency units",
    buckets=(1, 5, 10, 50, 100, 500, 1000, 5000, 10000, 50000),
)

# Status reconciliation metrics
payment_status_checks_total = Counter(
    "payment_status_checks_total",
    "Total payment status checks",
    ["result"],  # processed, pending, other, not_found, error
)

# Provider statuses are open-ended; anything else is counted as "other"
STATUS_CHECK_RESULTS = frozenset({"processed", "pending", "not_found", "error"})

# Provider API metrics
provider_api_requests_total = Counter(
    "provider_api_requests_total",
    "Total payment provider API requests",
    ["operation", "status"],  # operation: initiate, get_status
)

provider_api_errors_total = Counter(
    "provider_api_errors_total",
    "Total payment provider API errors",
    ["operation", "error_type"],  # error_type: http_status, transport, invalid_payload
)

provider_api_duration_seconds = Histogram(
    "provider_api_duration_seconds",
    "Payment provider API call duration in seconds",
    ["operation"],
    buckets=(0.1, 0.25, 0.5, 0.75, 1.0, 2.5, 5.0, 7.5, 10.0),
)


class MetricsCollector:
    """Helper class for collecting metrics."""

    @staticmethod
    def record_payment_request(status: str, currency: str, amount: float) -> None:
        """Record a payment initiation request."""
        payment_requests_total.labels(status=status, currency=currency).inc()
        payment_amount.observe(amount)

    @staticmethod
    def record_payment_duration(duration_seconds: float) -> None:
        """Record payment initiation duration."""
        payment_processing_duration_seconds.observe(duration_seconds)

    @staticmethod
    def record_status_check(result: str) -> None:
        """Record a payment status check."""
        if result not in STATUS_CHECK_RESULTS:
            result = "other"
        payment_status_checks_total.labels(result=result).inc()

    @staticmethod
    def record_provider_api_call(
        operation: str, status: str, duration_seconds: float
    ) -> None:
        """Record a provider API call."""
        provider_api_requests_total.labels(operation=operation, status=status).inc()
        provider_api_duration_seconds.labels(operation=operation).observe(duration_seconds)

    @staticmethod
    def record_provider_api_error(operation: str, error_type: str) -> None:
        """Record a provider API error."""
        provider_api_errors_total.labels(operation=operation, error_type=error_type).inc()


# Export singleton instance
metrics = MetricsCollector()
