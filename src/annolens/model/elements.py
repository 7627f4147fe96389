"""Program element descriptors.

The resolver never touches live Python objects. It walks a graph of
descriptors: types (classes and interfaces) with their declared methods
and fields, and the packages that contain them. The graph is built either
by hand through TypeRegistry or from live classes by PythonIntrospector.

Identity:
- TypeDescriptor and PackageDescriptor compare by identity. A registry or
  introspector hands out exactly one descriptor per type/package.
- MethodDescriptor compares by (declaring type, name, parameter types).
- FieldDescriptor compares by (declaring type, name).
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from enum import Enum
from typing import TypeVar, Union

from annolens.model.annotations import Annotation, first_of

A = TypeVar("A", bound=Annotation)

# Either the annotations themselves or a loader that produces them on first
# use. Loaders raise IntrospectionError when the annotations can't be read.
AnnotationSource = Union[Iterable[Annotation], Callable[[], Iterable[Annotation]]]


class TypeKind(str, Enum):
    CLASS = "class"
    INTERFACE = "interface"


class AnnotatedElement:
    """Anything that can carry annotations."""

    __slots__ = ("_loader", "_loaded")

    def __init__(self, annotations: AnnotationSource = ()) -> None:
        self._loader: Callable[[], Iterable[Annotation]] | None
        self._loaded: tuple[Annotation, ...] | None
        if callable(annotations):
            self._loader = annotations
            self._loaded = None
        else:
            self._loader = None
            self._loaded = tuple(annotations)

    @property
    def qualified_name(self) -> str:
        raise NotImplementedError

    def declared_annotations(self) -> tuple[Annotation, ...]:
        """Annotations declared directly on this element, in declaration order.

        Raises:
            IntrospectionError: If a lazy loader cannot produce them.
        """
        if self._loaded is None:
            assert self._loader is not None
            self._loaded = tuple(self._loader())
        return self._loaded

    def declared(self, kind: type[A]) -> A | None:
        """First directly-declared annotation of the given kind."""
        return first_of(self.declared_annotations(), kind)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.qualified_name}>"


class PackageDescriptor(AnnotatedElement):
    __slots__ = ("name",)

    def __init__(self, name: str, annotations: AnnotationSource = ()) -> None:
        super().__init__(annotations)
        self.name = name

    @property
    def qualified_name(self) -> str:
        return self.name


class TypeDescriptor(AnnotatedElement):
    """A class or interface with its directly-declared members."""

    __slots__ = ("name", "kind", "superclass", "interfaces", "package", "_methods", "_fields")

    def __init__(
        self,
        name: str,
        *,
        kind: TypeKind = TypeKind.CLASS,
        superclass: TypeDescriptor | None = None,
        interfaces: Iterable[TypeDescriptor] = (),
        package: PackageDescriptor | None = None,
        annotations: AnnotationSource = (),
    ) -> None:
        super().__init__(annotations)
        self.name = name
        self.kind = kind
        self.superclass = superclass
        self.interfaces: tuple[TypeDescriptor, ...] = tuple(interfaces)
        self.package = package
        self._methods: list[MethodDescriptor] = []
        self._fields: list[FieldDescriptor] = []

    @property
    def qualified_name(self) -> str:
        return self.name

    @property
    def is_interface(self) -> bool:
        return self.kind is TypeKind.INTERFACE

    @property
    def methods(self) -> tuple[MethodDescriptor, ...]:
        """Directly-declared methods, in declaration order."""
        return tuple(self._methods)

    @property
    def fields(self) -> tuple[FieldDescriptor, ...]:
        """Directly-declared fields, in declaration order."""
        return tuple(self._fields)

    def add_method(
        self,
        name: str,
        parameter_types: Iterable[str] = (),
        annotations: AnnotationSource = (),
    ) -> MethodDescriptor:
        method = MethodDescriptor(self, name, tuple(parameter_types), annotations)
        self._methods.append(method)
        return method

    def add_field(
        self,
        name: str,
        type_name: str = "Any",
        annotations: AnnotationSource = (),
    ) -> FieldDescriptor:
        fld = FieldDescriptor(self, name, type_name, annotations)
        self._fields.append(fld)
        return fld

    def declared_method(
        self,
        name: str,
        parameter_types: tuple[str, ...],
        *,
        match_parameter_types: bool = True,
    ) -> MethodDescriptor | None:
        """Method with this signature declared on this type itself."""
        for method in self._methods:
            if method.matches(name, parameter_types, match_parameter_types=match_parameter_types):
                return method
        return None

    def declared_field(self, name: str) -> FieldDescriptor | None:
        for fld in self._fields:
            if fld.name == name:
                return fld
        return None

    def find_method(
        self,
        name: str,
        parameter_types: tuple[str, ...],
        *,
        match_parameter_types: bool = True,
    ) -> MethodDescriptor | None:
        """Method with this signature visible on this type.

        Searches the type's own methods, then its interfaces depth-first.
        """
        for type_ in self._interface_closure():
            method = type_.declared_method(
                name, parameter_types, match_parameter_types=match_parameter_types
            )
            if method is not None:
                return method
        return None

    def visible_methods(self) -> Iterator[MethodDescriptor]:
        """Own methods followed by those of every superinterface."""
        for type_ in self._interface_closure():
            yield from type_._methods

    def _interface_closure(self) -> Iterator[TypeDescriptor]:
        seen: set[int] = set()
        stack: list[TypeDescriptor] = [self]
        while stack:
            type_ = stack.pop()
            if id(type_) in seen:
                continue
            seen.add(id(type_))
            yield type_
            stack.extend(reversed(type_.interfaces))

    def ancestry(self) -> Iterator[TypeDescriptor]:
        """This type, then each superclass up to the root."""
        type_: TypeDescriptor | None = self
        while type_ is not None:
            yield type_
            type_ = type_.superclass


class MethodDescriptor(AnnotatedElement):
    __slots__ = ("declaring_type", "name", "parameter_types")

    def __init__(
        self,
        declaring_type: TypeDescriptor,
        name: str,
        parameter_types: tuple[str, ...] = (),
        annotations: AnnotationSource = (),
    ) -> None:
        super().__init__(annotations)
        self.declaring_type = declaring_type
        self.name = name
        self.parameter_types = parameter_types

    @property
    def qualified_name(self) -> str:
        return f"{self.declaring_type.name}.{self.name}({', '.join(self.parameter_types)})"

    @property
    def parameter_count(self) -> int:
        return len(self.parameter_types)

    def matches(
        self, name: str, parameter_types: tuple[str, ...], *, match_parameter_types: bool = True
    ) -> bool:
        if self.name != name:
            return False
        return not match_parameter_types or self.parameter_types == parameter_types

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MethodDescriptor):
            return NotImplemented
        return (
            self.declaring_type is other.declaring_type
            and self.name == other.name
            and self.parameter_types == other.parameter_types
        )

    def __hash__(self) -> int:
        return hash((id(self.declaring_type), self.name, self.parameter_types))


class FieldDescriptor(AnnotatedElement):
    __slots__ = ("declaring_type", "name", "type_name")

    def __init__(
        self,
        declaring_type: TypeDescriptor,
        name: str,
        type_name: str = "Any",
        annotations: AnnotationSource = (),
    ) -> None:
        super().__init__(annotations)
        self.declaring_type = declaring_type
        self.name = name
        self.type_name = type_name

    @property
    def qualified_name(self) -> str:
        return f"{self.declaring_type.name}.{self.name}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldDescriptor):
            return NotImplemented
        return self.declaring_type is other.declaring_type and self.name == other.name

    def __hash__(self) -> int:
        return hash((id(self.declaring_type), self.name))
