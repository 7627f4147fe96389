"""Property names from accessor-style method names.

Both bean-style (``setFoo``/``getFoo``/``isFoo``/``hasFoo``) and snake_case
(``set_foo``/``get_foo``/``is_foo``/``has_foo``) accessors are recognised.
Setters take exactly one parameter, getters none.
"""

from __future__ import annotations

import re

from annolens.model.elements import MethodDescriptor

_SETTER_PATTERN = re.compile(r"set([A-Z][A-Za-z0-9]*)")
_GETTER_PATTERN = re.compile(r"(?:get|is|has)([A-Z][A-Za-z0-9]*)")
_SNAKE_SETTER_PATTERN = re.compile(r"set_([a-z][a-z0-9_]*)")
_SNAKE_GETTER_PATTERN = re.compile(r"(?:get|is|has)_([a-z][a-z0-9_]*)")


def _decapitalize(raw: str) -> str:
    # Only the first character: setURL -> uRL
    return raw[:1].lower() + raw[1:]


def resolve_property_name(name: str, parameter_count: int) -> str | None:
    """Property name for an accessor, or None if name/arity isn't an accessor."""
    if parameter_count == 1:
        if match := _SETTER_PATTERN.fullmatch(name):
            return _decapitalize(match.group(1))
        if match := _SNAKE_SETTER_PATTERN.fullmatch(name):
            return match.group(1)
    elif parameter_count == 0:
        if match := _GETTER_PATTERN.fullmatch(name):
            return _decapitalize(match.group(1))
        if match := _SNAKE_GETTER_PATTERN.fullmatch(name):
            return match.group(1)
    return None


def property_name(method: MethodDescriptor) -> str | None:
    return resolve_property_name(method.name, method.parameter_count)
