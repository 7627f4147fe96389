"""Annotation resolution over the descriptor graph.

Lookup rules:
- get_annotation: declared on the element, else declared on the class of
  one of the element's annotations (one meta level, not recursive)
- find_method_annotation: the method itself, then same-signature methods on
  the declaring type's interfaces, then on each superclass (and that
  superclass's interfaces) up to the root
- find_class_annotation: the type, its package, its superclass, the
  superclass's package, ... up to the root

Only positive method/class results are memoized. Missing annotations are
recomputed on every call; an element whose annotations can't be read
counts as carrying none.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TypeVar

from annolens.config.models import ResolverConfig
from annolens.core.errors import IntrospectionError
from annolens.core.logging import get_logger
from annolens.model.annotations import Annotation, first_of, meta_annotations
from annolens.model.elements import (
    AnnotatedElement,
    FieldDescriptor,
    MethodDescriptor,
    TypeDescriptor,
)
from annolens.resolver.cache import CacheKey, InterfaceFlagCache, ResolutionCache

log = get_logger(__name__)

A = TypeVar("A", bound=Annotation)


class AnnotationResolver:
    """Finds annotations on methods, fields, types and packages.

    Usage::

        resolver = AnnotationResolver()
        ann = resolver.find_method_annotation(method, Transactional)

    Pass the same ResolutionCache/InterfaceFlagCache to several resolvers to
    share memoized results between them.
    """

    def __init__(
        self,
        cache: ResolutionCache | None = None,
        interface_cache: InterfaceFlagCache | None = None,
        *,
        config: ResolverConfig | None = None,
    ) -> None:
        self._config = config or ResolverConfig()
        self._cache = cache if cache is not None else ResolutionCache()
        self._interface_cache = (
            interface_cache if interface_cache is not None else InterfaceFlagCache()
        )

    @property
    def cache(self) -> ResolutionCache:
        return self._cache

    @property
    def interface_cache(self) -> InterfaceFlagCache:
        return self._interface_cache

    # -------------------------------------------------------------------------
    # Single-annotation lookups
    # -------------------------------------------------------------------------

    def get_annotation(self, element: AnnotatedElement, kind: type[A]) -> A | None:
        """Annotation of the given kind declared on element, or via one meta level.

        Declared annotations are checked first; then, in declaration order,
        the annotations declared on each declared annotation's class.
        """
        declared = self._declared_annotations(element)
        ann = first_of(declared, kind)
        if ann is not None:
            return ann
        for present in declared:
            ann = first_of(meta_annotations(present), kind)
            if ann is not None:
                return ann
        return None

    def find_method_annotation(self, method: MethodDescriptor, kind: type[A]) -> A | None:
        """Annotation on method or on the methods it overrides/implements.

        Annotations on methods are not inherited by overriding methods, so
        the search walks interfaces and superclasses explicitly.
        """
        key = CacheKey(method, kind)
        cached = self._lookup(key)
        if cached is not None:
            return cached  # type: ignore[return-value]

        result = self.get_annotation(method, kind)
        type_: TypeDescriptor | None = method.declaring_type
        if result is None:
            result = self._search_on_interfaces(method, kind, method.declaring_type.interfaces)
        while result is None:
            type_ = type_.superclass if type_ is not None else None
            if type_ is None:
                break
            equivalent = type_.declared_method(
                method.name,
                method.parameter_types,
                match_parameter_types=self._config.match_parameter_types,
            )
            if equivalent is not None:
                result = self.get_annotation(equivalent, kind)
            if result is None:
                result = self._search_on_interfaces(method, kind, type_.interfaces)

        if result is not None:
            result = self._store(key, result)
        return result

    def find_class_annotation(self, type_: TypeDescriptor, kind: type[A]) -> A | None:
        """Closest annotation on the type, its package, or an ancestor and its package."""
        key = CacheKey(type_, kind)
        cached = self._lookup(key)
        if cached is not None:
            return cached  # type: ignore[return-value]

        result: A | None = None
        current: TypeDescriptor | None = type_
        while result is None and current is not None:
            result = self._declared(current, kind)
            if result is None and current.package is not None:
                result = self._declared(current.package, kind)
            current = current.superclass

        if result is not None:
            result = self._store(key, result)
        return result

    # -------------------------------------------------------------------------
    # Collections
    # -------------------------------------------------------------------------

    def get_annotated_methods(
        self, type_: TypeDescriptor, *kinds: type[Annotation]
    ) -> set[MethodDescriptor]:
        """Methods of type_ and its ancestry matching any of kinds.

        With no kinds, every method declaring at least one annotation.
        With kinds, every method for which find_method_annotation succeeds
        for at least one of them.
        """
        found: set[MethodDescriptor] = set()
        for method in _walk_methods(type_):
            if not kinds:
                if self._declared_annotations(method):
                    found.add(method)
            elif any(self.find_method_annotation(method, kind) is not None for kind in kinds):
                found.add(method)
        return found

    def collect_fields(
        self, kind: type[Annotation], type_: TypeDescriptor
    ) -> list[FieldDescriptor]:
        """Fields declaring kind directly, leaf type first, root type last."""
        return [
            fld
            for level in type_.ancestry()
            for fld in level.fields
            if self._declared(fld, kind) is not None
        ]

    def collect_methods(
        self, kind: type[Annotation], type_: TypeDescriptor
    ) -> list[MethodDescriptor]:
        """Methods declaring kind directly, leaf type first, root type last."""
        return [
            method
            for level in type_.ancestry()
            for method in level.methods
            if self._declared(method, kind) is not None
        ]

    def collect_interfaces(self, type_: TypeDescriptor) -> list[TypeDescriptor]:
        """Directly-implemented interfaces of type_ and each superclass."""
        return [iface for level in type_.ancestry() for iface in level.interfaces]

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _search_on_interfaces(
        self,
        method: MethodDescriptor,
        kind: type[A],
        interfaces: tuple[TypeDescriptor, ...],
    ) -> A | None:
        for iface in interfaces:
            if not self._has_annotated_methods(iface):
                continue
            equivalent = iface.find_method(
                method.name,
                method.parameter_types,
                match_parameter_types=self._config.match_parameter_types,
            )
            if equivalent is None:
                continue
            ann = self.get_annotation(equivalent, kind)
            if ann is not None:
                return ann
        return None

    def _has_annotated_methods(self, iface: TypeDescriptor) -> bool:
        flag = self._interface_cache.get(iface)
        if flag is not None:
            return flag
        found = any(self._declared_annotations(m) for m in iface.visible_methods())
        return self._interface_cache.put_if_absent(iface, found)

    def _declared_annotations(self, element: AnnotatedElement) -> tuple[Annotation, ...]:
        try:
            return element.declared_annotations()
        except IntrospectionError as e:
            log.debug(
                "resolver.element_skipped",
                element=element.qualified_name,
                reason=e.details.get("reason"),
            )
            return ()

    def _declared(self, element: AnnotatedElement, kind: type[A]) -> A | None:
        return first_of(self._declared_annotations(element), kind)

    def _lookup(self, key: CacheKey) -> Annotation | None:
        if not self._config.cache_enabled:
            return None
        return self._cache.get(key)

    def _store(self, key: CacheKey, result: A) -> A:
        if not self._config.cache_enabled:
            return result
        log.debug(
            "resolver.cache_store",
            element=key.element.qualified_name,
            kind=key.kind.__name__,
        )
        return self._cache.put_if_absent(key, result)  # type: ignore[return-value]


def _walk_methods(type_: TypeDescriptor) -> Iterator[MethodDescriptor]:
    """Declared methods of type_, then of its superclass chain.

    An interface (no superclass) continues into its superinterfaces.
    """
    yield from type_.methods
    if type_.superclass is not None:
        yield from _walk_methods(type_.superclass)
    elif type_.is_interface:
        for iface in type_.interfaces:
            yield from _walk_methods(iface)
