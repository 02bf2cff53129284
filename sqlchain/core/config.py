"""Configuration for statement rendering.

Settings are held in an immutable :class:`RenderConfig`. A process-wide instance
is managed behind a lock and can be loaded from ``SQLCHAIN_*`` environment
variables:

- SQLCHAIN_ENABLE_BUFFER_POOL: reuse scratch buffers between renders (true/false)
- SQLCHAIN_BUFFER_POOL_SIZE: maximum number of pooled buffers per thread (integer)
- SQLCHAIN_LOG_RENDERS: log every fresh render at DEBUG level (true/false)
"""

import os
import threading
from dataclasses import dataclass, replace
from typing import Any, Optional

from sqlchain.exceptions import ImproperConfigurationError
from sqlchain.utils.logging import get_logger

__all__ = (
    "RenderConfig",
    "create_default_config",
    "get_global_config",
    "load_config_from_env",
    "reset_global_config",
    "set_global_config",
    "validate_config",
)

logger = get_logger("sqlchain.core.config")


@dataclass(frozen=True)
class RenderConfig:
    """Rendering settings shared by every builder in the process."""

    enable_buffer_pool: bool = True
    buffer_pool_size: int = 100
    log_renders: bool = False

    def replace(self, **kwargs: Any) -> "RenderConfig":
        """Create a copy with the given settings changed.

        Args:
            **kwargs: Fields to override.

        Returns:
            New RenderConfig instance.
        """
        return replace(self, **kwargs)

    def validate(self) -> "list[str]":
        errors: list[str] = []
        if self.buffer_pool_size < 0:
            errors.append(f"buffer_pool_size must be non-negative, got {self.buffer_pool_size}")
        return errors


_global_config: Optional[RenderConfig] = None
_config_lock = threading.Lock()


def get_global_config() -> RenderConfig:
    """Get the process-wide configuration, loading it from the environment on first use.

    Returns:
        Global RenderConfig instance
    """
    global _global_config
    if _global_config is None:
        with _config_lock:
            if _global_config is None:
                _global_config = load_config_from_env()
    return _global_config


def set_global_config(config: RenderConfig) -> None:
    """Set the process-wide configuration.

    Args:
        config: New configuration to set globally

    Raises:
        ImproperConfigurationError: If the configuration does not validate.
    """
    global _global_config
    errors = validate_config(config)
    if errors:
        msg = f"Invalid render configuration: {'; '.join(errors)}"
        raise ImproperConfigurationError(msg)
    with _config_lock:
        _global_config = config
    logger.debug("Global render configuration updated: %r", config)


def reset_global_config() -> None:
    """Drop the process-wide configuration so the next access reloads it."""
    global _global_config
    with _config_lock:
        _global_config = None


def load_config_from_env() -> RenderConfig:
    """Load configuration from environment variables.

    Returns:
        RenderConfig loaded from environment variables
    """
    defaults = RenderConfig()
    return RenderConfig(
        enable_buffer_pool=_env_bool("SQLCHAIN_ENABLE_BUFFER_POOL", defaults.enable_buffer_pool),
        buffer_pool_size=_env_int("SQLCHAIN_BUFFER_POOL_SIZE", defaults.buffer_pool_size),
        log_renders=_env_bool("SQLCHAIN_LOG_RENDERS", defaults.log_renders),
    )


def validate_config(config: RenderConfig) -> "list[str]":
    """Validate configuration.

    Args:
        config: Configuration to validate

    Returns:
        List of validation errors (empty if valid)
    """
    return config.validate()


def create_default_config() -> RenderConfig:
    return RenderConfig()


def _env_bool(key: str, default: bool) -> bool:
    """Get boolean value from environment variable."""
    value = os.getenv(key)
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on", "enabled")


def _env_int(key: str, default: int) -> int:
    """Get integer value from environment variable."""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning("Invalid integer value for %s: %s, using default %d", key, value, default)
        return default
