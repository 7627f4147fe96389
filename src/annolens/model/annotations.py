"""Annotation kinds and the attribute that carries declared annotations.

An annotation kind is a subclass of Annotation, usually a frozen
dataclass so that instances are immutable values::

    @dataclass(frozen=True)
    class Validated(Annotation):
        message: str = ""

Meta-annotations are annotations declared on a kind's own class, e.g.
``@annotate(Secured())`` stacked on top of the class above.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypeVar

# Attribute holding a tuple of Annotation instances, in declaration order.
ANNOTATIONS_ATTR = "__annolens_annotations__"


@dataclass(frozen=True)
class Annotation:
    """Base class for all annotation kinds."""


A = TypeVar("A", bound=Annotation)


def own_annotations(obj: Any) -> tuple[Annotation, ...]:
    """Annotations declared on obj itself, never inherited from its bases.

    Classes and modules are read through their __dict__ so a subclass does
    not see its parent's annotations; functions carry the attribute directly.
    """
    namespace = getattr(obj, "__dict__", None)
    if namespace is None:
        return ()
    return tuple(namespace.get(ANNOTATIONS_ATTR, ()))


def meta_annotations(annotation: Annotation) -> tuple[Annotation, ...]:
    """Annotations declared on the class of the given annotation instance."""
    return own_annotations(type(annotation))


def first_of(annotations: tuple[Annotation, ...], kind: type[A]) -> A | None:
    for ann in annotations:
        if isinstance(ann, kind):
            return ann
    return None
