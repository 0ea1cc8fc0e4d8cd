"""
Patches for null/missing-field semantics the two dialects disagree on.

In the filter dialect ``{foo: {bar: {ne: true}}}`` is satisfied when
``foo`` is absent, when ``foo`` or ``foo.bar`` is null, or when
``foo.bar`` holds anything but ``true``.  The store only inspects the
leaf and rejects documents where the path does not resolve, so such
clauses are rewritten into ``$where`` predicates on the top-level field.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .operators import TargetOperator
from .predicates import AllOf, NeTruePredicate

if TYPE_CHECKING:
    from .ast import CompiledFilter

logger = logging.getLogger(__name__)

_NE = TargetOperator.NE.value
_WHERE = TargetOperator.WHERE.value
_ELEM_MATCH = TargetOperator.ELEM_MATCH.value


def fix_ne_true(compiled: CompiledFilter) -> CompiledFilter:
    """Rewrite every ``{"$ne": True}`` clause into a scoped ``$where``."""
    result: CompiledFilter = {}
    rewrites: list[tuple[str, NeTruePredicate]] = []

    for key, clause in compiled.items():
        if clause.get(_NE) is True:
            first, *rest = key.split(".")
            rewrites.append((first, NeTruePredicate(rest)))
            remaining = {op: v for op, v in clause.items() if op != _NE}
            if remaining:
                result[key] = remaining
        elif _ELEM_MATCH in clause:
            # Element sub-queries follow the same semantics.
            result[key] = {**clause, _ELEM_MATCH: fix_ne_true(clause[_ELEM_MATCH])}
        else:
            result[key] = clause

    for field, predicate in rewrites:
        logger.debug("Rewrote '$ne: true' on %r to %r", field, predicate)
        _merge_where(result, field, predicate)
    return result


def _merge_where(result: CompiledFilter, field: str, predicate: Any) -> None:
    clause = dict(result.get(field, {}))
    existing = clause.get(_WHERE)
    clause[_WHERE] = predicate if existing is None else AllOf(existing, predicate)
    result[field] = clause
