"""Structured logging for the Crowdfund Ledger, built on structlog.

Two sources of context end up on every line:
    - request_id, bound by the HTTP middleware for each request
    - operation / post_id, bound by ``ledger_operation`` around each ledger
      call, so transfer and event-log lines can be traced to the operation
      that caused them

Development renders colored console output; every other environment
renders one JSON object per line.

Usage:
    from crowdfund_ledger.logging_config import get_logger, ledger_operation, setup_logging
    setup_logging(log_level="INFO", json_logs=False)
    logger = get_logger(__name__)
    with ledger_operation("fund_post", post_id=1):
        logger.info("post.funded", amount=60)
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from collections.abc import MutableMapping
    from contextlib import AbstractContextManager

SERVICE_NAME = "crowdfund-ledger"

# Libraries whose INFO output drowns out ledger events
QUIET_LOGGERS = ("uvicorn.access", "httpx", "httpcore", "mcp.server.lowlevel.server")


def _add_service(
    _logger: Any, _method: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def _isoformat_datetimes(
    _logger: Any, _method: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Render deadlines and other instants as ISO-8601 strings."""
    for key, value in event_dict.items():
        if isinstance(value, datetime):
            event_dict[key] = value.isoformat()
    return event_dict


def setup_logging(log_level: str = "INFO", json_logs: bool = False) -> None:
    """Route structlog and the standard library through one stdout handler.

    Args:
        log_level: Level name for the root logger (DEBUG, INFO, WARNING, ...).
        json_logs: Render JSON lines instead of colored console output.
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        _add_service,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _isoformat_datetimes,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    renderer: structlog.types.Processor
    if json_logs:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def ledger_operation(operation: str, **fields: Any) -> AbstractContextManager[None]:
    """Bind ``operation`` and any extra fields for the duration of a ledger call."""
    return structlog.contextvars.bound_contextvars(operation=operation, **fields)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
