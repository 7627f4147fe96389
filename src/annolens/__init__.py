"""annolens - annotation lookup across class hierarchies and meta-annotations."""

from annolens.config import AnnolensConfig, load_config
from annolens.core import (
    AnnolensError,
    ConfigError,
    ErrorCode,
    IntrospectionError,
    RegistryError,
    configure_logging,
)
from annolens.introspect import PythonIntrospector, annotate, annotate_package, interface
from annolens.model import (
    Annotation,
    FieldDescriptor,
    MethodDescriptor,
    PackageDescriptor,
    TypeDescriptor,
    TypeKind,
    TypeRegistry,
)
from annolens.resolver import (
    AnnotationResolver,
    CacheKey,
    CacheStats,
    InterfaceFlagCache,
    ResolutionCache,
    property_name,
    resolve_property_name,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Model
    "Annotation",
    "FieldDescriptor",
    "MethodDescriptor",
    "PackageDescriptor",
    "TypeDescriptor",
    "TypeKind",
    "TypeRegistry",
    # Introspection
    "PythonIntrospector",
    "annotate",
    "annotate_package",
    "interface",
    # Resolver
    "AnnotationResolver",
    "CacheKey",
    "CacheStats",
    "InterfaceFlagCache",
    "ResolutionCache",
    "property_name",
    "resolve_property_name",
    # Config / errors / logging
    "AnnolensConfig",
    "load_config",
    "AnnolensError",
    "ConfigError",
    "ErrorCode",
    "IntrospectionError",
    "RegistryError",
    "configure_logging",
]
