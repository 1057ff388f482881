"""Structured logging configuration."""

import logging
import sys

import structlog

# Client libraries that log every HTTP round trip at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "openai")


def configure_logging(debug: bool = False, level: str = "INFO") -> None:
    """Route structlog through stdlib logging.

    JSON lines in production, a readable console format when ``debug`` is set.
    Values bound with ``structlog.contextvars`` (user id, skill name) are
    merged into every event logged inside the request.
    """
    log_level = logging.DEBUG if debug else logging.getLevelName(level.upper())
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer() if debug else structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)  # type: ignore[no-any-return]
