"""Utility helpers shared across sqlchain."""

from sqlchain.utils.logging import StructuredFormatter, configure_logging, get_logger

__all__ = ("StructuredFormatter", "configure_logging", "get_logger")
