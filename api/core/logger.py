"""Centralized logging configuration using structlog.

Structured logging for the whole service:
- JSON output for production (LOG_FORMAT=json, or DEBUG unset)
- Colored console output for local development
- Request wide-event context merged in through contextvars
- Third-party library logs (uvicorn, sqlalchemy) routed through the same formatter

Usage:
    from core import get_logger
    logger = get_logger(__name__)
    logger.info("product.created", product_id="abc", category_id="xyz")
"""

import logging
import sys

import structlog
from structlog.types import Processor

from core.config import Settings, get_settings


def _resolve_level(level_name: str) -> int:
    return getattr(logging, level_name.upper(), logging.INFO)


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog and stdlib logging. Call once at application startup."""
    settings = settings or get_settings()
    log_level = _resolve_level(settings.log_level)

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.stdlib.ExtraAdder(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.use_json_logs:
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=True, exception_formatter=structlog.dev.plain_traceback
        )

    structlog.configure(
        processors=shared_processors
        + [
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            renderer,
        ],
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    # SQL echo is controlled by DB_ECHO, keep the engine logger quiet otherwise
    if not settings.db_echo:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name, typically __name__ of the calling module.

    Example:
        logger = get_logger(__name__)
        logger.info("category.deleted", category_id="123")
        logger.warning("category.delete.rejected", product_count=4)
    """
    return structlog.stdlib.get_logger(name)
