"""
In-memory evaluation of compiled filters.

Provides the StoreOperator strategy interface, a registry mapping
TargetOperator → strategy, and a DocumentMatcher that resolves dotted
paths on documents before delegating to the registry.

New operators are added by subclassing StoreOperator and registering
the instance via ``register()``.
"""

from __future__ import annotations

import operator
from abc import ABC, abstractmethod
from collections.abc import Hashable
from typing import TYPE_CHECKING, Any

from ...ast import UNDEFINED, is_nullish
from ...exceptions import UnsupportedStoreOperatorError
from ...operators import TargetOperator
from ...patterns import to_text

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from ...ast import CompiledFilter


class StoreOperator(ABC):
    """
    Strategy interface for evaluating one store operator.

    Each operator is an isolated class with a single ``evaluate`` method.
    """

    @property
    @abstractmethod
    def name(self) -> TargetOperator:
        """The operator this strategy handles."""
        ...

    @abstractmethod
    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        """
        Evaluate the operator against concrete values.

        Args:
            field_value: Value found at the clause path, or ``UNDEFINED``.
            condition_value: Operand carried by the compiled clause.

        Returns:
            True if the condition is satisfied.
        """
        ...


class StoreOperatorRegistry:
    """
    Registry of StoreOperator instances keyed by TargetOperator.

    Usage::

        registry = StoreOperatorRegistry()
        registry.register(EqualOperator())

        result = registry.evaluate("$eq", actual, expected)
    """

    def __init__(self) -> None:
        self._operators: dict[TargetOperator, StoreOperator] = {}

    # -- registration --------------------------------------------------------

    def register(self, op: StoreOperator) -> None:
        self._operators[op.name] = op

    def register_all(self, *operators: StoreOperator) -> None:
        for op in operators:
            self.register(op)

    def unregister(self, name: TargetOperator) -> None:
        self._operators.pop(name, None)

    # -- look-up -------------------------------------------------------------

    def get(self, name: TargetOperator) -> StoreOperator | None:
        return self._operators.get(name)

    def has(self, name: TargetOperator) -> bool:
        return name in self._operators

    @property
    def supported_operators(self) -> set[TargetOperator]:
        return set(self._operators.keys())

    # -- evaluation shortcut -------------------------------------------------

    def evaluate(
        self,
        name: TargetOperator | str,
        field_value: Any,
        condition_value: Any,
    ) -> bool:
        """
        Look up the operator and evaluate.

        Raises:
            UnsupportedStoreOperatorError: If the operator is not registered.
        """
        try:
            key = TargetOperator(name)
        except ValueError:
            key = None
        op = self._operators.get(key) if key is not None else None
        if op is None:
            raise UnsupportedStoreOperatorError(
                str(getattr(name, "value", name)),
                [o.value for o in self._operators],
            )
        return op.evaluate(field_value, condition_value)


# -- helpers -----------------------------------------------------------------


def strict_equals(a: Any, b: Any) -> bool:
    """Equality without cross-type coercion (``True != 1``, ``None != UNDEFINED``)."""
    if a is UNDEFINED or b is UNDEFINED:
        return a is b
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if isinstance(a, str) != isinstance(b, str):
        return False
    return bool(a == b)


def get_path_value(document: Any, path: str) -> Any:
    """Resolve a dotted path without array traversal; ``UNDEFINED`` if absent."""
    value = document
    for part in path.split("."):
        if not isinstance(value, dict):
            return UNDEFINED
        value = value.get(part, UNDEFINED)
    return value


def _contains_check(container: Any) -> Callable[[Any], bool] | None:
    if isinstance(container, (list, tuple)):
        return lambda v: any(strict_equals(item, v) for item in container)
    if isinstance(container, str):
        return lambda v: isinstance(v, str) and v in container
    if isinstance(container, dict):
        return lambda v: isinstance(v, Hashable) and v in container
    return None


def _contains_any(container: Any, values: Any) -> bool:
    check = _contains_check(container)
    if check is None:
        return False
    if isinstance(values, list):
        return any(check(v) for v in values)
    return check(values)


def _compare(a: Any, b: Any, op: Callable[[Any, Any], Any]) -> bool:
    if is_nullish(a) or is_nullish(b):
        return False
    try:
        return bool(op(a, b))
    except TypeError:
        return False


# -- comparison ----------------------------------------------------------------


class EqualOperator(StoreOperator):
    @property
    def name(self) -> TargetOperator:
        return TargetOperator.EQ

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        return strict_equals(field_value, condition_value)


class NotEqualOperator(StoreOperator):
    @property
    def name(self) -> TargetOperator:
        return TargetOperator.NE

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        return not strict_equals(field_value, condition_value)


class GreaterThanOperator(StoreOperator):
    @property
    def name(self) -> TargetOperator:
        return TargetOperator.GT

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        return _compare(field_value, condition_value, operator.gt)


class GreaterEqualOperator(StoreOperator):
    @property
    def name(self) -> TargetOperator:
        return TargetOperator.GTE

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        return _compare(field_value, condition_value, operator.ge)


class LessThanOperator(StoreOperator):
    @property
    def name(self) -> TargetOperator:
        return TargetOperator.LT

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        return _compare(field_value, condition_value, operator.lt)


class LessEqualOperator(StoreOperator):
    @property
    def name(self) -> TargetOperator:
        return TargetOperator.LTE

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        return _compare(field_value, condition_value, operator.le)


# -- membership ----------------------------------------------------------------


class InOperator(StoreOperator):
    @property
    def name(self) -> TargetOperator:
        return TargetOperator.IN

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        return any(strict_equals(field_value, v) for v in condition_value)


class NotInOperator(StoreOperator):
    @property
    def name(self) -> TargetOperator:
        return TargetOperator.NIN

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        return not any(strict_equals(field_value, v) for v in condition_value)


class ContainsOperator(StoreOperator):
    """Field (list, string or mapping) holds every given value."""

    @property
    def name(self) -> TargetOperator:
        return TargetOperator.CONTAINS

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        check = _contains_check(field_value)
        if check is None:
            return False
        if isinstance(condition_value, list):
            return all(check(v) for v in condition_value)
        return check(condition_value)


class ContainsAnyOperator(StoreOperator):
    @property
    def name(self) -> TargetOperator:
        return TargetOperator.CONTAINS_ANY

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        return _contains_any(field_value, condition_value)


class ContainsNoneOperator(StoreOperator):
    """True for absent fields as well."""

    @property
    def name(self) -> TargetOperator:
        return TargetOperator.CONTAINS_NONE

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        return not _contains_any(field_value, condition_value)


# -- patterns / predicates -------------------------------------------------------


class RegexOperator(StoreOperator):
    @property
    def name(self) -> TargetOperator:
        return TargetOperator.REGEX

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        text = to_text(field_value)
        if text is None:
            return False
        return condition_value.search(text) is not None


class WhereOperator(StoreOperator):
    @property
    def name(self) -> TargetOperator:
        return TargetOperator.WHERE

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        return condition_value(field_value) is True


class ElemMatchOperator(StoreOperator):
    """At least one list element satisfies the nested compiled filter."""

    def __init__(self, matcher: DocumentMatcher) -> None:
        self._matcher = matcher

    @property
    def name(self) -> TargetOperator:
        return TargetOperator.ELEM_MATCH

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if not isinstance(field_value, list):
            return False
        return any(self._matcher.matches(item, condition_value) for item in field_value)


def build_default_registry() -> StoreOperatorRegistry:
    """
    Create a registry with all built-in scalar operators.

    ``$elemMatch`` needs a matcher to recurse with and is registered by
    :class:`DocumentMatcher` itself.
    """
    registry = StoreOperatorRegistry()
    registry.register_all(
        EqualOperator(),
        NotEqualOperator(),
        GreaterThanOperator(),
        GreaterEqualOperator(),
        LessThanOperator(),
        LessEqualOperator(),
        InOperator(),
        NotInOperator(),
        ContainsOperator(),
        ContainsAnyOperator(),
        ContainsNoneOperator(),
        RegexOperator(),
        WhereOperator(),
    )
    return registry


class DocumentMatcher:
    """
    Decides whether a document satisfies a compiled filter.

    Every path must match (implicit AND) and every operator within a
    clause must hold.  Intermediate arrays are traversed: the clause is
    satisfied if any element yields a matching value.
    """

    def __init__(self, registry: StoreOperatorRegistry | None = None) -> None:
        self._registry = registry if registry is not None else build_default_registry()
        if not self._registry.has(TargetOperator.ELEM_MATCH):
            self._registry.register(ElemMatchOperator(self))

    @property
    def registry(self) -> StoreOperatorRegistry:
        return self._registry

    def matches(self, document: Any, compiled: CompiledFilter) -> bool:
        return all(
            self._scan(document, path.split("."), clause, 0)
            for path, clause in compiled.items()
        )

    def _scan(
        self,
        root: Any,
        parts: list[str],
        clause: Mapping[str, Any],
        offset: int,
    ) -> bool:
        element = root.get(parts[offset], UNDEFINED) if isinstance(root, dict) else UNDEFINED
        if offset + 1 >= len(parts):
            return self._matches_clause(element, clause)
        if isinstance(element, list):
            return any(self._scan(item, parts, clause, offset + 1) for item in element)
        return self._scan(element, parts, clause, offset + 1)

    def _matches_clause(self, value: Any, clause: Mapping[str, Any]) -> bool:
        return all(
            self._registry.evaluate(op, value, operand) for op, operand in clause.items()
        )
