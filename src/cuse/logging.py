"""Structured logging configuration using structlog."""

import logging
import sys

import structlog


def configure_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Configure structlog and the standard library root logger.

    Args:
        level: Logging level name, e.g. "INFO" or "DEBUG".
        fmt: "json" for JSON lines, "console" for human-readable output.
    """
    resolved_level = getattr(logging, (level or "INFO").upper(), logging.INFO)

    renderer = (
        structlog.dev.ConsoleRenderer()
        if fmt == "console"
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(resolved_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        level=resolved_level,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
