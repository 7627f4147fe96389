"""Descriptor model exports."""

from annolens.model.annotations import Annotation, meta_annotations, own_annotations
from annolens.model.elements import (
    AnnotatedElement,
    FieldDescriptor,
    MethodDescriptor,
    PackageDescriptor,
    TypeDescriptor,
    TypeKind,
)
from annolens.model.registry import TypeRegistry

__all__ = [
    "Annotation",
    "meta_annotations",
    "own_annotations",
    "AnnotatedElement",
    "FieldDescriptor",
    "MethodDescriptor",
    "PackageDescriptor",
    "TypeDescriptor",
    "TypeKind",
    "TypeRegistry",
]
