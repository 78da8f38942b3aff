"""
Dependency health checks behind /health, /health/live and /health/ready.

The database is only probed when it is the configured payment store. The
provider counts as reachable when it answers HTTP at all, whatever the
status code.
"""
from typing import Any, Awaitable, Callable, Dict

import httpx
import structlog
from sqlalchemy import text

from payment_service.config import get_settings
from payment_service.infrastructure.database.connection import get_session_factory

logger = structlog.get_logger(__name__)


class HealthCheckError(Exception):
    """Raised when a dependency probe fails."""

    pass


class HealthCheck:
    def __init__(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        """
        Args:
            transport: Optional httpx transport used by the provider probe
        """
        self.settings = get_settings()
        self.transport = transport

    async def check_database(self) -> Dict[str, Any]:
        """
        Run SELECT 1 against the payment store.

        Raises:
            HealthCheckError: Connection or query failed
        """
        try:
            async with get_session_factory()() as session:
                await session.execute(text("SELECT 1"))
        except Exception as e:
            logger.error("database_health_check_failed", error=str(e))
            raise HealthCheckError(f"Database health check failed: {e}") from e

        return {"status": "healthy", "service": "database"}

    async def check_provider(self) -> Dict[str, Any]:
        """
        GET the provider base URL.

        Raises:
            HealthCheckError: Transport failure or timeout
        """
        try:
            async with httpx.AsyncClient(
                timeout=self.settings.payment_provider_timeout_seconds,
                transport=self.transport,
            ) as client:
                response = await client.get(self.settings.payment_provider_url)
        except httpx.HTTPError as e:
            logger.error("provider_health_check_failed", error=str(e))
            raise HealthCheckError(f"Payment provider health check failed: {e}") from e

        return {
            "status": "healthy",
            "service": "payment_provider",
            "status_code": response.status_code,
        }

    async def check_all(self) -> Dict[str, Any]:
        probes: Dict[str, Callable[[], Awaitable[Dict[str, Any]]]] = {}
        if self.settings.uses_database:
            probes["database"] = self.check_database
        probes["payment_provider"] = self.check_provider

        checks: Dict[str, Any] = {}
        for name, probe in probes.items():
            try:
                checks[name] = await probe()
            except HealthCheckError as e:
                checks[name] = {"status": "unhealthy", "service": name, "error": str(e)}

        healthy = all(check["status"] == "healthy" for check in checks.values())
        return {"status": "healthy" if healthy else "unhealthy", "checks": checks}

    async def liveness(self) -> Dict[str, Any]:
        """Process is up; dependencies are not probed."""
        return {"status": "alive", "message": "Application is running"}

    async def readiness(self) -> Dict[str, Any]:
        return await self.check_all()
