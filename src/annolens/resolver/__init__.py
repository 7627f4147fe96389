"""Resolver exports."""

from annolens.resolver.cache import CacheKey, CacheStats, InterfaceFlagCache, ResolutionCache
from annolens.resolver.properties import property_name, resolve_property_name
from annolens.resolver.resolver import AnnotationResolver

__all__ = [
    "AnnotationResolver",
    "CacheKey",
    "CacheStats",
    "InterfaceFlagCache",
    "ResolutionCache",
    "property_name",
    "resolve_property_name",
]
