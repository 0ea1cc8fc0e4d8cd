"""Flattening of translated filter trees into dotted-path clauses."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .ast import Clause, ElemMatch
from .exceptions import FilterCompileError
from .operators import TargetOperator

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .ast import CompiledFilter, TargetTree


def to_dotted_fields(tree: TargetTree) -> CompiledFilter:
    """
    Convert a nested target tree to ``{dotted.path: clause}``.

    E.g. ``{"internal": {"type": Clause({$eq: "Post"})}}`` becomes
    ``{"internal.type": {"$eq": "Post"}}``.  ``$elemMatch`` payloads are
    flattened on their own and kept wrapped under the current path.
    """
    acc: CompiledFilter = {}
    _flatten(tree, (), acc)
    return acc


def flatten_values(values: Mapping[str, Any]) -> dict[str, Any]:
    """Flatten plain nested values: ``{"a": {"b": 1}}`` -> ``{"a.b": 1}``."""
    acc: dict[str, Any] = {}

    def walk(node: Mapping[str, Any], prefix: tuple[str, ...]) -> None:
        for key, value in node.items():
            path = (*prefix, key)
            if isinstance(value, dict) and value:
                walk(value, path)
            else:
                acc[".".join(path)] = value

    walk(values, ())
    return acc


def _flatten(tree: TargetTree, path: tuple[str, ...], acc: CompiledFilter) -> None:
    if isinstance(tree, Clause):
        acc[_key(path)] = tree.to_dict()
    elif isinstance(tree, ElemMatch):
        acc[_key(path)] = {TargetOperator.ELEM_MATCH.value: to_dotted_fields(tree.node)}
    else:
        for key, child in tree.items():
            _flatten(child, (*path, key), acc)


def _key(path: tuple[str, ...]) -> str:
    if not path:
        raise FilterCompileError("Operators must be scoped to a field")
    return ".".join(path)
