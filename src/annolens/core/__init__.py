"""Core module exports."""

from annolens.core.errors import (
    AnnolensError,
    ConfigError,
    ErrorCode,
    IntrospectionError,
    RegistryError,
)
from annolens.core.logging import configure_logging, get_log_file_path, get_logger

__all__ = [
    # Errors
    "AnnolensError",
    "ConfigError",
    "ErrorCode",
    "IntrospectionError",
    "RegistryError",
    # Logging
    "configure_logging",
    "get_log_file_path",
    "get_logger",
]
