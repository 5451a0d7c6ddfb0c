"""
Structlog setup shared by the text check service.

Output is human-readable on a terminal and JSON in production (or whenever
``LOG_FORMAT=json``). Per-request context, most importantly the correlation
id, lives in structlog contextvars so it follows the request across awaits.
"""

from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars, merge_contextvars
from structlog.typing import Processor

_TRUTHY = ("true", "1", "yes")


def add_service_context(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Stamp ``service.name`` and ``deployment.environment`` on every event."""
    event_dict["service.name"] = os.getenv("SERVICE_NAME", "unknown")
    event_dict["deployment.environment"] = os.getenv("ENVIRONMENT", "development")
    return event_dict


def _build_processors(use_json: bool) -> list[Processor]:
    shared: list[Processor] = [
        merge_contextvars,
        add_service_context,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ],
        ),
    ]
    if use_json:
        return [*shared, structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [*shared, structlog.dev.set_exc_info, structlog.dev.ConsoleRenderer(colors=True)]


def _file_handler(service_name: str, log_file_path: str | None) -> logging.Handler:
    path = Path(log_file_path or os.getenv("LOG_FILE_PATH", f"/app/logs/{service_name}.log"))
    path.parent.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(
        filename=str(path),
        maxBytes=int(os.getenv("LOG_MAX_BYTES", "104857600")),
        backupCount=int(os.getenv("LOG_BACKUP_COUNT", "10")),
        encoding="utf-8",
    )


def configure_service_logging(
    service_name: str,
    environment: str | None = None,
    log_level: str = "INFO",
    log_to_file: bool | None = None,
    log_file_path: str | None = None,
) -> None:
    """
    Configure structlog and the stdlib root logger for the process.

    Args:
        service_name: Reported as ``service.name`` unless SERVICE_NAME is set
        environment: Defaults to the ENVIRONMENT variable
        log_level: Root log level name
        log_to_file: Also write to a rotating file (default: LOG_TO_FILE)
        log_file_path: File path (default: LOG_FILE_PATH or /app/logs/<service>.log)
    """
    environment = environment or os.getenv("ENVIRONMENT", "development")
    os.environ.setdefault("SERVICE_NAME", service_name)
    os.environ.setdefault("ENVIRONMENT", environment)

    if log_to_file is None:
        log_to_file = os.getenv("LOG_TO_FILE", "false").lower() in _TRUTHY

    log_format = os.getenv("LOG_FORMAT", "").lower()
    use_json = log_format == "json" or (not log_format and environment == "production")

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_to_file:
        handlers.append(_file_handler(service_name, log_file_path))

    logging.basicConfig(
        format="%(message)s",
        handlers=handlers,
        level=getattr(logging, log_level.upper()),
        force=True,
    )
    structlog.configure(
        processors=_build_processors(use_json),
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def create_service_logger(name: str | None = None) -> Any:
    """Return a structlog logger, bound to ``logger_name`` when given."""
    logger = structlog.get_logger()
    return logger.bind(logger_name=name) if name else logger


def bind_request_context(correlation_id: str, **context: Any) -> None:
    """Replace the current request context with ``correlation_id`` and ``context``."""
    clear_contextvars()
    bind_contextvars(correlation_id=correlation_id, **context)
