"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (ANNOLENS__SECTION__KEY)
3. Project YAML (./annolens.yaml, or the path given to load_config())
4. Global YAML (~/.config/annolens/config.yaml)
5. Built-in defaults (this file)

Examples:
    ANNOLENS__LOGGING__LEVEL=DEBUG
    ANNOLENS__RESOLVER__CACHE_ENABLED=false
    ANNOLENS__INTROSPECTION__INCLUDE_PRIVATE=false
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        ANNOLENS__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every cache hit and skipped element.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class ResolverConfig(BaseModel):
    """Annotation resolver behaviour.

    Env vars:
        ANNOLENS__RESOLVER__CACHE_ENABLED: Memoize positive resolutions
        ANNOLENS__RESOLVER__MATCH_PARAMETER_TYPES: Compare signatures, not just names
    """

    cache_enabled: bool = Field(
        default=True,
        description="Memoize positive method/class resolutions. Misses are never cached.",
    )
    match_parameter_types: bool = Field(
        default=True,
        description="Require equal parameter types when matching a method on an ancestor. "
        "Set to false to match by name only.",
    )


class IntrospectionConfig(BaseModel):
    """How live Python classes are turned into descriptors.

    Env vars:
        ANNOLENS__INTROSPECTION__INCLUDE_PRIVATE: Describe _private members
        ANNOLENS__INTROSPECTION__INCLUDE_DUNDER: Describe __dunder__ members
        ANNOLENS__INTROSPECTION__EVALUATE_STRING_ANNOTATIONS: Evaluate string field hints
    """

    include_private: bool = Field(
        default=True,
        description="Describe members whose name starts with a single underscore.",
    )
    include_dunder: bool = Field(
        default=False,
        description="Describe __dunder__ methods such as __init__ and __call__.",
    )
    evaluate_string_annotations: bool = Field(
        default=True,
        description="Evaluate string field hints (PEP 563) to find Annotated metadata. "
        "When off, fields with string hints carry no annotations.",
    )


class AnnolensConfig(BaseModel):
    """Root configuration for annolens."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    resolver: ResolverConfig = Field(default_factory=ResolverConfig)
    introspection: IntrospectionConfig = Field(default_factory=IntrospectionConfig)
