"""Python introspection exports."""

from annolens.introspect.markers import annotate, annotate_package, interface, is_interface
from annolens.introspect.python import PythonIntrospector
from annolens.introspect.type_text import type_text

__all__ = [
    "annotate",
    "annotate_package",
    "interface",
    "is_interface",
    "PythonIntrospector",
    "type_text",
]
