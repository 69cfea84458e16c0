from __future__ import annotations

import logging
import os
from typing import Any

import structlog

_SHARED_PROCESSORS: list[Any] = [
    structlog.contextvars.merge_contextvars,
    structlog.processors.add_log_level,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
    structlog.processors.format_exc_info,
]


def _resolve_level(level: str | None) -> int:
    name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    return getattr(logging, name, logging.INFO)


def _resolve_format(fmt: str | None) -> str:
    if fmt:
        return fmt.lower()
    if "LOG_FORMAT" in os.environ:
        return os.environ["LOG_FORMAT"].lower()
    return "console" if os.getenv("APP_ENV") == "dev" else "json"


def setup_logging(level: str | None = None, fmt: str | None = None) -> None:
    """Route structlog and stdlib logging through one JSON (or console) renderer.

    Bound contextvars such as ``request_id`` are merged into every event, so
    service logs emitted while handling a request carry the request's id.
    """

    structlog.configure(
        processors=_SHARED_PROCESSORS + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    renderer: Any
    if _resolve_format(fmt) == "console":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_SHARED_PROCESSORS,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )
    logging.basicConfig(level=_resolve_level(level), handlers=[handler], force=True)
