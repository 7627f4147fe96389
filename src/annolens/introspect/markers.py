"""Attach annotations to live Python objects.

    @annotate(Secured())
    @dataclass(frozen=True)
    class AdminOnly(Annotation):       # meta-annotated kind
        pass

    @interface
    class Repository(Protocol): ...    # Protocol classes are interfaces anyway

    class Orders:
        @annotate(AdminOnly(), Audited("delete"))
        def delete(self, order_id: int) -> None: ...

Package annotations live on the package module::

    # app/admin/__init__.py
    annotate_package(__name__, Secured())
"""

from __future__ import annotations

import functools
import importlib
import typing
from collections.abc import Callable
from types import ModuleType
from typing import Any, TypeVar

from annolens.model.annotations import ANNOTATIONS_ATTR, Annotation, own_annotations

T = TypeVar("T")

INTERFACE_ATTR = "__annolens_interface__"


def _check(annotations: tuple[Any, ...]) -> None:
    for ann in annotations:
        if not isinstance(ann, Annotation):
            raise TypeError(f"Expected an Annotation instance, got {type(ann).__name__}")


def _carrier(obj: Any) -> Any:
    """The object that actually stores annotations for obj."""
    if isinstance(obj, (staticmethod, classmethod)):
        return obj.__func__
    if isinstance(obj, property):
        if obj.fget is None:
            raise TypeError("Cannot annotate a property without a getter")
        return obj.fget
    if isinstance(obj, functools.cached_property):
        return obj.func
    return obj


def _prepend(target: Any, annotations: tuple[Annotation, ...]) -> None:
    # Decorators apply bottom-up; prepending keeps top-to-bottom source order.
    setattr(target, ANNOTATIONS_ATTR, annotations + own_annotations(target))


def annotate(*annotations: Annotation) -> Callable[[T], T]:
    """Decorator declaring annotations on a function, method or class."""
    _check(annotations)

    def decorator(obj: T) -> T:
        _prepend(_carrier(obj), annotations)
        return obj

    return decorator


def interface(cls: type[T]) -> type[T]:
    """Mark a class as an interface rather than a superclass of its subclasses."""
    setattr(cls, INTERFACE_ATTR, True)
    return cls


def is_interface(cls: type) -> bool:
    if vars(cls).get(INTERFACE_ATTR, False):
        return True
    return typing.Protocol in cls.__bases__


def annotate_package(package: ModuleType | str, *annotations: Annotation) -> None:
    """Declare annotations on a package module (by module object or name)."""
    _check(annotations)
    module = importlib.import_module(package) if isinstance(package, str) else package
    _prepend(module, annotations)
