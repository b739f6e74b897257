"""
Structured logging for bidder adapters.

JSON logs by default, console rendering for local work (LOG_FORMAT=console).
Entries written while an adapter handles a request carry that request's ID as
auction_id, so the envelopes and responses of one auction can be correlated.
"""

import logging
import os
import sys
import time
from contextvars import ContextVar
from functools import wraps
from typing import Any, Callable

import structlog

SERVICE_NAME = "adapters"

auction_id_var: ContextVar[str] = ContextVar("auction_id", default="")


def add_auction_id(
    logger: structlog.typing.WrappedLogger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Processor tagging entries with the auction being handled."""
    auction_id = auction_id_var.get()
    if auction_id:
        event_dict["auction_id"] = auction_id
    event_dict["service"] = SERVICE_NAME
    return event_dict


def configure_logging(level: str = "INFO", format: str = "json") -> None:
    """
    Configure structlog on top of the standard library logger.

    Args:
        level: Log level; LOG_LEVEL overrides it
        format: 'json' or 'console'; LOG_FORMAT overrides it
    """
    level = os.getenv("LOG_LEVEL", level).upper()
    format = os.getenv("LOG_FORMAT", format).lower()

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level, logging.INFO),
    )

    if format == "console":
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            add_auction_id,
            structlog.stdlib.add_log_level,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def bidder_logger(bidder_code: str) -> structlog.stdlib.BoundLogger:
    """Logger bound to one bidder."""
    return structlog.get_logger("adapters.bidder").bind(bidder=bidder_code)


def pipeline_logger() -> structlog.stdlib.BoundLogger:
    return structlog.get_logger("adapters.pipeline")


def config_logger() -> structlog.stdlib.BoundLogger:
    return structlog.get_logger("adapters.config")


class LogContext:
    """Binds an auction ID to every entry logged inside the block."""

    def __init__(self, auction_id: str):
        self.auction_id = auction_id
        self.token = None

    def __enter__(self) -> "LogContext":
        self.token = auction_id_var.set(self.auction_id)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        auction_id_var.reset(self.token)


def log_execution_time(func: Callable) -> Callable:
    """Log how long an adapter method took, at debug level."""

    @wraps(func)
    def wrapper(self, *args, **kwargs):
        start = time.perf_counter()
        try:
            return func(self, *args, **kwargs)
        finally:
            self.logger.debug(
                "Adapter step executed",
                step=func.__name__,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
            )

    return wrapper


configure_logging()
