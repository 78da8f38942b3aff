"""
Structured logging.

Application code logs through structlog with snake_case event names and
key/value fields. Records from libraries (uvicorn, httpx, SQLAlchemy) go
through the stdlib root logger, which writes one JSON object per line via
python-json-logger so both streams can be shipped the same way.
"""
import logging
import sys
from typing import Any, Dict

import structlog
from pythonjsonlogger.json import JsonFormatter

from payment_service import __version__
from payment_service.config import get_settings
from payment_service.config.settings import Settings

# Library loggers and the level they are capped at
_LIBRARY_LEVELS: Dict[str, int] = {
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "uvicorn.access": logging.WARNING,
}


def _service_context(settings: Settings) -> Any:
    service = {
        "service": settings.app_name,
        "env": settings.app_env,
        "version": __version__,
    }

    def processor(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
        for key, value in service.items():
            event_dict.setdefault(key, value)
        return event_dict

    return processor


def _stdlib_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        JsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s",
            rename_fields={"asctime": "timestamp", "levelname": "level", "name": "logger"},
        )
    )
    return handler


def setup_logging() -> None:
    """
    Configure structlog and the stdlib root logger from settings.

    JSON output everywhere except debug mode, where structlog renders
    human-readable console lines. SQL statements are logged only when
    DATABASE_ECHO is on.
    """
    settings = get_settings()

    renderer: Any = (
        structlog.dev.ConsoleRenderer()
        if settings.debug
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            _service_context(settings),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(_stdlib_handler())
    root_logger.setLevel(settings.log_level)

    for name, level in _LIBRARY_LEVELS.items():
        logging.getLogger(name).setLevel(level)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.database_echo else logging.WARNING
    )
