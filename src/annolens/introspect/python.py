"""Descriptors for live Python classes.

Mapping rules:
- superclass: the first base that is neither an interface nor one of
  object/Generic/Protocol/ABC. Every other remaining base is an
  implemented interface, in base order. An interface has no superclass.
- package: the package containing the class's module (None for
  top-level modules); its annotations come from annotate_package().
- methods: the class's own functions, static/class methods and
  properties, in definition order. Properties are zero-parameter methods.
  Parameter types exclude self/cls and are the annotation text
  in canonical form (see type_text).
- fields: names in the class's own __annotations__; their annotations are
  the Annotation objects in typing.Annotated metadata. String hints are
  evaluated on first use with typing.get_type_hints against the defining
  module and the class namespace.
"""

from __future__ import annotations

import abc
import functools
import inspect
import sys
import threading
import typing
from collections.abc import Callable
from typing import Any

from annolens.config.models import IntrospectionConfig
from annolens.core.errors import IntrospectionError, RegistryError
from annolens.core.logging import get_logger
from annolens.introspect.markers import is_interface
from annolens.introspect.type_text import type_text
from annolens.model.annotations import Annotation, own_annotations
from annolens.model.elements import (
    FieldDescriptor,
    MethodDescriptor,
    PackageDescriptor,
    TypeDescriptor,
    TypeKind,
)

log = get_logger(__name__)

_SKIPPED_BASES: tuple[type, ...] = (object, typing.Generic, typing.Protocol, abc.ABC)  # type: ignore[assignment]


def _raw_hints(obj: Any) -> dict[str, Any]:
    try:
        return dict(inspect.get_annotations(obj))
    except NameError:
        # Deferred annotations (3.14+) naming something undefined
        import annotationlib

        return dict(annotationlib.get_annotations(obj, format=annotationlib.Format.STRING))


def _signature(func: Callable[..., Any]) -> inspect.Signature:
    try:
        return inspect.signature(func)
    except NameError:
        import annotationlib

        return inspect.signature(func, annotation_format=annotationlib.Format.STRING)


def _annotated_metadata(hint: Any) -> tuple[Annotation, ...]:
    if typing.get_origin(hint) is typing.ClassVar:
        hint = typing.get_args(hint)[0] if typing.get_args(hint) else None
    if typing.get_origin(hint) is not typing.Annotated:
        return ()
    return tuple(m for m in hint.__metadata__ if isinstance(m, Annotation))


class PythonIntrospector:
    """Builds one canonical TypeDescriptor per Python class.

    Usage::

        introspector = PythonIntrospector()
        save = introspector.method(OrderAction, "save")
        resolver.find_method_annotation(save, Transactional)
    """

    def __init__(self, config: IntrospectionConfig | None = None) -> None:
        self._config = config or IntrospectionConfig()
        self._types: dict[type, TypeDescriptor] = {}
        self._packages: dict[str, PackageDescriptor] = {}
        # Reentrant: describing a class describes its bases first
        self._lock = threading.RLock()

    def describe(self, cls: type) -> TypeDescriptor:
        if not isinstance(cls, type):
            raise TypeError(f"Expected a class, got {type(cls).__name__}")
        with self._lock:
            existing = self._types.get(cls)
            if existing is not None:
                return existing
            return self._build(cls)

    def method(self, cls: type, name: str) -> MethodDescriptor:
        """Method declared on cls itself."""
        type_ = self.describe(cls)
        for method in type_.methods:
            if method.name == name:
                return method
        raise RegistryError.member_not_found(type_.name, name)

    def field(self, cls: type, name: str) -> FieldDescriptor:
        """Field declared on cls itself."""
        type_ = self.describe(cls)
        fld = type_.declared_field(name)
        if fld is None:
            raise RegistryError.member_not_found(type_.name, name)
        return fld

    def _build(self, cls: type) -> TypeDescriptor:
        interface = is_interface(cls)
        superclass: TypeDescriptor | None = None
        implemented: list[TypeDescriptor] = []
        for base in cls.__bases__:
            if base in _SKIPPED_BASES:
                continue
            if superclass is None and not interface and not is_interface(base):
                superclass = self.describe(base)
            else:
                implemented.append(self.describe(base))

        type_ = TypeDescriptor(
            f"{cls.__module__}.{cls.__qualname__}",
            kind=TypeKind.INTERFACE if interface else TypeKind.CLASS,
            superclass=superclass,
            interfaces=implemented,
            package=self._package_of(cls),
            annotations=own_annotations(cls),
        )
        self._types[cls] = type_
        self._add_methods(cls, type_)
        self._add_fields(cls, type_)
        log.debug(
            "introspect.described",
            type=type_.name,
            methods=len(type_.methods),
            fields=len(type_.fields),
        )
        return type_

    def _include(self, name: str) -> bool:
        if name.startswith("__") and name.endswith("__"):
            return self._config.include_dunder
        if name.startswith("_"):
            return self._config.include_private
        return True

    def _add_methods(self, cls: type, type_: TypeDescriptor) -> None:
        for name, member in vars(cls).items():
            if not self._include(name):
                continue
            func: Callable[..., Any] | None
            if isinstance(member, property):
                func, parameters = member.fget, ()
            elif isinstance(member, functools.cached_property):
                func, parameters = member.func, ()
            elif isinstance(member, staticmethod):
                func = member.__func__
                parameters = self._parameter_types(func, bound=False)
            elif isinstance(member, classmethod) or inspect.isfunction(member):
                func = member.__func__ if isinstance(member, classmethod) else member
                parameters = self._parameter_types(func, bound=True)
            else:
                continue
            if func is None:
                continue
            type_.add_method(name, parameters, own_annotations(func))

    def _parameter_types(self, func: Callable[..., Any], *, bound: bool) -> tuple[str, ...]:
        params = list(_signature(func).parameters.values())
        if bound and params and params[0].kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            params = params[1:]
        texts = []
        for param in params:
            text = type_text(param.annotation)
            if param.kind is inspect.Parameter.VAR_POSITIONAL:
                text = f"*{text}"
            elif param.kind is inspect.Parameter.VAR_KEYWORD:
                text = f"**{text}"
            texts.append(text)
        return tuple(texts)

    def _add_fields(self, cls: type, type_: TypeDescriptor) -> None:
        for name, hint in _raw_hints(cls).items():
            if not self._include(name):
                continue
            type_.add_field(name, type_text(hint), self._field_loader(cls, type_, name, hint))

    def _field_loader(
        self, cls: type, type_: TypeDescriptor, name: str, hint: Any
    ) -> Callable[[], tuple[Annotation, ...]]:
        def load() -> tuple[Annotation, ...]:
            if not isinstance(hint, str):
                return _annotated_metadata(hint)
            if not self._config.evaluate_string_annotations:
                return ()
            return _annotated_metadata(self._evaluate(cls, f"{type_.name}.{name}", name, hint))

        return load

    def _evaluate(self, cls: type, element: str, name: str, text: str) -> Any:
        module = sys.modules.get(cls.__module__)
        # A class holding only this hint, so one bad field can't hide the others
        namespace = {"__module__": cls.__module__, "__annotations__": {name: text}}
        holder = type(cls.__name__, (), namespace)
        try:
            hints = typing.get_type_hints(
                holder,
                globalns=dict(vars(module)) if module is not None else {},
                localns=dict(vars(cls)),
                include_extras=True,
            )
        except (NameError, AttributeError, SyntaxError, TypeError) as e:
            raise IntrospectionError.unresolvable(element, f"{type(e).__name__}: {e}") from e
        return hints[name]

    def _package_of(self, cls: type) -> PackageDescriptor | None:
        module = sys.modules.get(cls.__module__)
        package_name = getattr(module, "__package__", None) if module is not None else None
        if not package_name:
            return None
        package = self._packages.get(package_name)
        if package is None:
            # Lazy: the package's __init__ may annotate itself after importing us
            package = PackageDescriptor(
                package_name, lambda: own_annotations(sys.modules.get(package_name))
            )
            self._packages[package_name] = package
        return package
