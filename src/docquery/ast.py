"""
Tree types shared by the filter compiler and the document store.

A translated filter is a :data:`TargetTree`: field names map to nested
trees until a :class:`Clause` (terminal predicates for one field) or an
:class:`ElemMatch` (sub-query over array elements) is reached.  The
flattened, store-ready form is a :data:`CompiledFilter`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Final, TypeAlias

if TYPE_CHECKING:
    from .operators import TargetOperator


class _Undefined:
    """Marker for a field that is absent from a document."""

    _instance: _Undefined | None = None

    def __new__(cls) -> _Undefined:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> _Undefined:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> _Undefined:
        return self


UNDEFINED: Final = _Undefined()


def is_nullish(value: Any) -> bool:
    """True for stored nulls and absent fields alike."""
    return value is None or value is UNDEFINED


@dataclass(frozen=True)
class Clause:
    """Target-dialect predicates scoped to a single field (ANDed)."""

    predicates: dict[TargetOperator, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {op.value: operand for op, operand in self.predicates.items()}


@dataclass(frozen=True)
class ElemMatch:
    """Sub-tree evaluated as a single query against array elements."""

    node: TargetTree


TargetNode: TypeAlias = "dict[str, TargetTree]"
TargetTree: TypeAlias = "TargetNode | Clause | ElemMatch"

# Dotted path -> wire clause, e.g. {"internal.type": {"$eq": "Post"}}
CompiledFilter: TypeAlias = "dict[str, dict[str, Any]]"

# (dotted path, is_descending)
SortPair: TypeAlias = "tuple[str, bool]"
