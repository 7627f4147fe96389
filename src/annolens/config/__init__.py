"""Config module exports."""

from annolens.config.loader import load_config
from annolens.config.models import (
    AnnolensConfig,
    IntrospectionConfig,
    LoggingConfig,
    LogOutputConfig,
    ResolverConfig,
)

__all__ = [
    "load_config",
    "AnnolensConfig",
    "IntrospectionConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "ResolverConfig",
]
