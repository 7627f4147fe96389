"""Canonical text for parameter and field type hints.

Method matching compares parameter types as text, so a hint must read the
same whether its module evaluated it or kept it as a string
(``from __future__ import annotations``, quoted forward references):

- unions in any spelling become ``A | B``; ``Optional[X]`` is ``X | None``
- typing aliases become builtins: ``List[int]`` is ``list[int]``
- forward references and quoted names lose their quotes
- ``Annotated[X, ...]`` is ``X``
- ``typing.``/``collections.abc.`` prefixes are dropped
- classes are written by ``__qualname__``

Source strings are parsed with ``ast``, never evaluated.
"""

from __future__ import annotations

import ast
import inspect
import types
import typing
from typing import Any

_PREFIXES = ("typing_extensions.", "typing.", "collections.abc.", "builtins.")

_BUILTIN_ALIASES = {
    "List": "list",
    "Dict": "dict",
    "Set": "set",
    "FrozenSet": "frozenset",
    "Tuple": "tuple",
    "Type": "type",
}


def type_text(hint: Any) -> str:
    """Canonical text for an evaluated hint or a hint's source string."""
    if hint is inspect.Parameter.empty:
        return "Any"
    if isinstance(hint, str):
        return _from_source(hint)
    return _from_value(hint)


def _name(text: str) -> str:
    for prefix in _PREFIXES:
        if text.startswith(prefix):
            text = text[len(prefix) :]
            break
    return _BUILTIN_ALIASES.get(text, text)


def _union(parts: list[str]) -> str:
    return " | ".join(dict.fromkeys(parts))


def _generic(name: str, args: list[str]) -> str:
    return f"{name}[{', '.join(args)}]"


# -----------------------------------------------------------------------------
# Evaluated hints
# -----------------------------------------------------------------------------


def _from_value(hint: Any) -> str:
    if hint is None or hint is type(None):
        return "None"
    if hint is Ellipsis:
        return "..."
    if isinstance(hint, str):
        return _from_source(hint)
    if isinstance(hint, typing.ForwardRef):
        return _from_source(hint.__forward_arg__)
    if isinstance(hint, list):
        return f"[{', '.join(_from_value(h) for h in hint)}]"
    if isinstance(hint, typing.TypeVar):
        return hint.__name__

    origin = typing.get_origin(hint)
    args = typing.get_args(hint)
    if origin is typing.Annotated:
        return _from_value(args[0])
    if origin is typing.Union or origin is types.UnionType:
        return _union([_from_value(a) for a in args])
    if origin is typing.Literal:
        return _generic("Literal", [repr(a) for a in args])
    if origin is not None and args:
        name = origin.__qualname__ if isinstance(origin, type) else _name(repr(origin))
        return _generic(_BUILTIN_ALIASES.get(name, name), [_from_value(a) for a in args])
    if isinstance(hint, type):
        return hint.__qualname__
    return _name(repr(hint))


# -----------------------------------------------------------------------------
# Source strings
# -----------------------------------------------------------------------------


def _from_source(text: str) -> str:
    try:
        node = ast.parse(text.strip(), mode="eval").body
    except SyntaxError:
        return text.strip()
    return _from_node(node)


def _union_members(node: ast.expr) -> list[ast.expr]:
    if isinstance(node, ast.BinOp) and isinstance(node.op, ast.BitOr):
        return [*_union_members(node.left), *_union_members(node.right)]
    return [node]


def _from_node(node: ast.expr) -> str:
    if isinstance(node, ast.Constant):
        if node.value is None:
            return "None"
        if node.value is Ellipsis:
            return "..."
        if isinstance(node.value, str):
            # Quoted forward reference
            return _from_source(node.value)
        return repr(node.value)
    if isinstance(node, (ast.Name, ast.Attribute)):
        return _name(ast.unparse(node))
    if isinstance(node, ast.BinOp) and isinstance(node.op, ast.BitOr):
        return _union([_from_node(m) for m in _union_members(node)])
    if isinstance(node, ast.List):
        return f"[{', '.join(_from_node(e) for e in node.elts)}]"
    if isinstance(node, ast.Subscript):
        name = _name(ast.unparse(node.value))
        elts = node.slice.elts if isinstance(node.slice, ast.Tuple) else [node.slice]
        if name == "Optional":
            return _union([_from_node(elts[0]), "None"])
        if name == "Union":
            return _union([_from_node(e) for e in elts])
        if name == "Annotated":
            return _from_node(elts[0])
        if name == "Literal":
            return _generic(name, [_literal(e) for e in elts])
        return _generic(name, [_from_node(e) for e in elts])
    return ast.unparse(node)


def _literal(node: ast.expr) -> str:
    if isinstance(node, ast.Constant):
        return repr(node.value)
    return ast.unparse(node)
