"""Hand-built descriptor graphs.

Useful when annotations describe something other than live Python classes
(generated code, schemas loaded from elsewhere), and in tests::

    registry = TypeRegistry()
    base = registry.define_type("app.Base")
    base.add_method("save", ("str",), [Transactional()])
    child = registry.define_type("app.Child", superclass="app.Base")
    child.add_method("save", ("str",))
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator

from annolens.core.errors import RegistryError
from annolens.model.annotations import Annotation
from annolens.model.elements import (
    AnnotationSource,
    PackageDescriptor,
    TypeDescriptor,
    TypeKind,
)

TypeRef = TypeDescriptor | str


class TypeRegistry:
    """Name-indexed store of type and package descriptors."""

    def __init__(self) -> None:
        self._types: dict[str, TypeDescriptor] = {}
        self._packages: dict[str, PackageDescriptor] = {}
        self._lock = threading.Lock()

    def define_package(self, name: str, *annotations: Annotation) -> PackageDescriptor:
        """Define a package, or return the existing one when no annotations are given."""
        with self._lock:
            existing = self._packages.get(name)
            if existing is not None:
                if annotations:
                    raise RegistryError.duplicate_package(name)
                return existing
            package = PackageDescriptor(name, annotations)
            self._packages[name] = package
            return package

    def define_type(
        self,
        name: str,
        *,
        kind: TypeKind = TypeKind.CLASS,
        superclass: TypeRef | None = None,
        interfaces: Iterable[TypeRef] = (),
        package: PackageDescriptor | str | None = None,
        annotations: AnnotationSource = (),
    ) -> TypeDescriptor:
        """Define a type. Referenced types must already be registered.

        Raises:
            RegistryError: If the name is taken or a reference is unknown.
        """
        if isinstance(package, str):
            package = self.define_package(package)
        type_ = TypeDescriptor(
            name,
            kind=kind,
            superclass=self._resolve(superclass) if superclass is not None else None,
            interfaces=[self._resolve(ref) for ref in interfaces],
            package=package,
            annotations=annotations,
        )
        with self._lock:
            if name in self._types:
                raise RegistryError.duplicate_type(name)
            self._types[name] = type_
        return type_

    def define_interface(
        self,
        name: str,
        *,
        interfaces: Iterable[TypeRef] = (),
        package: PackageDescriptor | str | None = None,
        annotations: AnnotationSource = (),
    ) -> TypeDescriptor:
        return self.define_type(
            name,
            kind=TypeKind.INTERFACE,
            interfaces=interfaces,
            package=package,
            annotations=annotations,
        )

    def get(self, name: str) -> TypeDescriptor:
        try:
            return self._types[name]
        except KeyError:
            raise RegistryError.type_not_found(name) from None

    def package(self, name: str) -> PackageDescriptor:
        try:
            return self._packages[name]
        except KeyError:
            raise RegistryError.package_not_found(name) from None

    def _resolve(self, ref: TypeRef) -> TypeDescriptor:
        if isinstance(ref, TypeDescriptor):
            return ref
        return self.get(ref)

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def __iter__(self) -> Iterator[TypeDescriptor]:
        return iter(list(self._types.values()))

    def __len__(self) -> int:
        return len(self._types)
