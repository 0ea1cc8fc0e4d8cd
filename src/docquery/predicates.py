"""Callable predicates carried by ``$where`` clauses."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .ast import UNDEFINED, is_nullish
from .patterns import to_text

if TYPE_CHECKING:
    import re
    from collections.abc import Callable, Sequence


class RegexPredicate:
    """Pattern test against a field value; absent fields never match."""

    def __init__(self, pattern: re.Pattern[str]) -> None:
        self.pattern = pattern

    def __call__(self, value: Any) -> bool:
        text = to_text(value)
        if text is None:
            return False
        return self.pattern.search(text) is not None

    def __eq__(self, other: object) -> bool:
        return isinstance(other, RegexPredicate) and other.pattern == self.pattern

    def __hash__(self) -> int:
        return hash(self.pattern)

    def __repr__(self) -> str:
        return f"RegexPredicate({self.pattern.pattern!r})"


class NeTruePredicate:
    """
    "Not equal to true" with permissive missing-path semantics.

    Holds when any object along ``path`` is null or absent, otherwise
    when the leaf value is anything but ``True``.
    """

    def __init__(self, path: Sequence[str]) -> None:
        self.path = tuple(path)

    def __call__(self, value: Any) -> bool:
        return is_ne_true(value, self.path)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, NeTruePredicate) and other.path == self.path

    def __hash__(self) -> int:
        return hash(self.path)

    def __repr__(self) -> str:
        return f"NeTruePredicate({'.'.join(self.path)!r})"


class AllOf:
    """Conjunction of several predicates over the same value."""

    def __init__(self, *predicates: Callable[[Any], bool]) -> None:
        flat: list[Callable[[Any], bool]] = []
        for p in predicates:
            flat.extend(p.predicates if isinstance(p, AllOf) else [p])
        self.predicates = tuple(flat)

    def __call__(self, value: Any) -> bool:
        return all(p(value) is True for p in self.predicates)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, AllOf) and other.predicates == self.predicates

    def __hash__(self) -> int:
        return hash(self.predicates)

    def __repr__(self) -> str:
        return f"AllOf{self.predicates!r}"


def is_ne_true(obj: Any, path: Sequence[str]) -> bool:
    if path:
        first, rest = path[0], path[1:]
        if is_nullish(obj):
            return True
        child = obj.get(first, UNDEFINED) if isinstance(obj, dict) else UNDEFINED
        return is_nullish(child) or is_ne_true(child, rest)
    return obj is not True
