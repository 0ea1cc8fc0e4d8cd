"""Redirect filters on computed fields to their precomputed values."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .flattener import flatten_values
from .operators import TargetOperator
from .predicates import AllOf, NeTruePredicate

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from .ast import CompiledFilter

RESOLVED_NAMESPACE = "$resolved"

_WHERE = TargetOperator.WHERE.value


def lift_resolved_fields(
    compiled: CompiledFilter,
    resolved_fields: Mapping[str, Any] | None,
) -> CompiledFilter:
    """
    Prefix keys addressing resolved fields with :data:`RESOLVED_NAMESPACE`.

    A key equal to a resolved path is lifted whole.  A ``$where`` on a
    top-level field (as produced by the reconciler) is split: only the
    ``NeTruePredicate`` members whose full path is resolved move under
    the namespace, stored siblings stay where they are.
    """
    if not resolved_fields:
        return dict(compiled)

    resolved_paths = set(flatten_values(resolved_fields))
    lifted: CompiledFilter = {}
    for key, clause in compiled.items():
        if key in resolved_paths:
            lifted[f"{RESOLVED_NAMESPACE}.{key}"] = clause
            continue

        stored, resolved = _split_where(key, clause.get(_WHERE), resolved_paths)
        if not resolved:
            lifted[key] = clause
            continue

        lifted[f"{RESOLVED_NAMESPACE}.{key}"] = {_WHERE: _combine(resolved)}
        remaining = {op: v for op, v in clause.items() if op != _WHERE}
        if stored:
            remaining[_WHERE] = _combine(stored)
        if remaining:
            lifted[key] = remaining
    return lifted


def _split_where(
    key: str, where: Any, resolved_paths: set[str]
) -> tuple[list[Callable[[Any], bool]], list[Callable[[Any], bool]]]:
    if where is None:
        return [], []
    members = list(where.predicates) if isinstance(where, AllOf) else [where]
    stored: list[Callable[[Any], bool]] = []
    resolved: list[Callable[[Any], bool]] = []
    for predicate in members:
        if isinstance(predicate, NeTruePredicate) and _is_resolved(
            ".".join((key, *predicate.path)), resolved_paths
        ):
            resolved.append(predicate)
        else:
            stored.append(predicate)
    return stored, resolved


def _is_resolved(path: str, resolved_paths: set[str]) -> bool:
    # A resolved leaf may hold a whole sub-object.
    return any(path == p or path.startswith(p + ".") for p in resolved_paths)


def _combine(predicates: list[Callable[[Any], bool]]) -> Callable[[Any], bool]:
    return predicates[0] if len(predicates) == 1 else AllOf(*predicates)
