"""Centralized logging configuration for sqlchain.

Every logger handed out by :func:`get_logger` lives under the ``sqlchain``
namespace so applications can tune the whole library with one logger.
"""

import logging
import sys
from typing import TYPE_CHECKING, Any, Optional

import msgspec

if TYPE_CHECKING:
    from logging import LogRecord

__all__ = (
    "StructuredFormatter",
    "configure_logging",
    "get_logger",
)

_ROOT_LOGGER_NAME = "sqlchain"
_json_encoder = msgspec.json.Encoder(enc_hook=repr)


class StructuredFormatter(logging.Formatter):
    """Structured JSON formatter."""

    def format(self, record: "LogRecord") -> str:
        """Format log record as structured JSON.

        Args:
            record: The log record to format

        Returns:
            JSON formatted log entry
        """
        log_entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if hasattr(record, "extra_fields"):
            log_entry.update(record.extra_fields)  # pyright: ignore

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return _json_encoder.encode(log_entry).decode("utf-8")


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger instance under the ``sqlchain`` namespace.

    Args:
        name: Logger name. If not provided, returns the root sqlchain logger.

    Returns:
        Logger instance
    """
    if name is None:
        return logging.getLogger(_ROOT_LOGGER_NAME)

    if not name.startswith(_ROOT_LOGGER_NAME):
        name = f"{_ROOT_LOGGER_NAME}.{name}"

    return logging.getLogger(name)


def configure_logging(
    level: str = "INFO",
    format_style: str = "structured",
    extra_handlers: Optional[list[logging.Handler]] = None,
) -> None:
    """Configure logging for the entire sqlchain library.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_style: Log format style ("structured" for JSON, "simple" for text)
        extra_handlers: Additional handlers to add
    """
    root_logger = logging.getLogger(_ROOT_LOGGER_NAME)
    root_logger.setLevel(getattr(logging, level.upper()))
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    if format_style == "structured":
        formatter: logging.Formatter = StructuredFormatter()
    else:
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if extra_handlers:
        for handler in extra_handlers:
            root_logger.addHandler(handler)

    # Don't propagate to the root Python logger
    root_logger.propagate = False

    root_logger.debug(
        "sqlchain logging configured",
        extra={
            "extra_fields": {
                "level": level,
                "format_style": format_style,
                "handlers_count": len(root_logger.handlers),
            }
        },
    )
