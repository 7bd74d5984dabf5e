"""
Structured logging for the tool wear service.

Engine events ("Production recorded", "Tool swapped", "Scrap recorded", ...)
are emitted as key/value pairs. Anything bound with
``structlog.contextvars.bind_contextvars`` (the request middleware binds the
request id) is merged into every event logged while it is bound.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import List, Optional

import structlog
from structlog.typing import FilteringBoundLogger


def _file_handlers(log_dir: str, level: int, max_bytes: int, backup_count: int) -> List[logging.Handler]:
    os.makedirs(log_dir, exist_ok=True)

    wear_log = RotatingFileHandler(
        filename=os.path.join(log_dir, "toolwear.log"),
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    wear_log.setLevel(level)

    error_log = RotatingFileHandler(
        filename=os.path.join(log_dir, "toolwear-error.log"),
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    error_log.setLevel(logging.ERROR)

    return [wear_log, error_log]


def setup_logging(
    level: str = "INFO",
    format_type: str = "json",
    log_dir: Optional[str] = None,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
    cache_loggers: bool = True,
) -> None:
    """
    Configure structured logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_type: "json" for production, "console" for development
        log_dir: directory for rotating log files; stdout only when unset
        max_bytes: size at which a log file is rotated
        backup_count: rotated files kept per log
        cache_loggers: freeze module loggers on first use; tests turn this
            off so they can reconfigure structlog
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    handlers: List[logging.Handler] = [console_handler]
    if log_dir:
        handlers.extend(_file_handlers(log_dir, log_level, max_bytes, backup_count))

    logging.basicConfig(format="%(message)s", level=log_level, handlers=handlers, force=True)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if format_type == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.WriteLoggerFactory(),
        cache_logger_on_first_use=cache_loggers,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a structured logger instance.

    Example:
        ```python
        logger = get_logger(__name__)
        logger.info("Production recorded", tool_id="FER-A1", pieces=1000)
        ```
    """
    return structlog.get_logger(name)
