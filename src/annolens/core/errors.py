"""annolens error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Model (registry, introspection)

"Not found" during annotation resolution is never an error; resolver
operations return None instead.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_FILE_NOT_FOUND = 2004

    # Model (3xxx)
    TYPE_NOT_FOUND = 3001
    DUPLICATE_TYPE = 3002
    MEMBER_NOT_FOUND = 3003
    INTROSPECTION_FAILED = 3004
    PACKAGE_NOT_FOUND = 3005
    DUPLICATE_PACKAGE = 3006


@dataclass(frozen=True, slots=True)
class AnnolensError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'TYPE_NOT_FOUND')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(AnnolensError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def file_not_found(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            message=f"Config file not found: {path}",
            details={"path": path},
        )


class RegistryError(AnnolensError):
    """Descriptor registry lookups and definitions."""

    @classmethod
    def type_not_found(cls, name: str) -> "RegistryError":
        return cls(
            code=ErrorCode.TYPE_NOT_FOUND,
            message=f"Not registered: {name}",
            details={"name": name},
        )

    @classmethod
    def duplicate_type(cls, name: str) -> "RegistryError":
        return cls(
            code=ErrorCode.DUPLICATE_TYPE,
            message=f"Already registered: {name}",
            details={"name": name},
        )

    @classmethod
    def package_not_found(cls, name: str) -> "RegistryError":
        return cls(
            code=ErrorCode.PACKAGE_NOT_FOUND,
            message=f"Package not registered: {name}",
            details={"package": name},
        )

    @classmethod
    def duplicate_package(cls, name: str) -> "RegistryError":
        return cls(
            code=ErrorCode.DUPLICATE_PACKAGE,
            message=f"Package already carries annotations: {name}",
            details={"package": name},
        )

    @classmethod
    def member_not_found(cls, type_name: str, member: str) -> "RegistryError":
        return cls(
            code=ErrorCode.MEMBER_NOT_FOUND,
            message=f"No member '{member}' declared on {type_name}",
            details={"type": type_name, "member": member},
        )


class IntrospectionError(AnnolensError):
    """An element's annotations could not be read.

    Raised by lazy annotation loaders, e.g. when a string annotation names
    a type that is absent at runtime. The resolver treats it as a non-match.
    """

    @classmethod
    def unresolvable(cls, element: str, reason: str) -> "IntrospectionError":
        return cls(
            code=ErrorCode.INTROSPECTION_FAILED,
            message=f"Cannot read annotations of {element}: {reason}",
            details={"element": element, "reason": reason},
        )

