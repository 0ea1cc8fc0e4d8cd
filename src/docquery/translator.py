"""
Operator translation from the schema-driven filter dialect to the store dialect.

The input is a nested filter such as::

    {
        "internal": {"type": {"eq": "MarkdownRemark"}, "content": {"glob": "*et*"}},
        "tags": {"in": ["python", "graphql"]},
    }

and the output is a :data:`~docquery.ast.TargetTree` where every terminal
entry has been rewritten to a store operator (``eq`` -> ``$eq``, ``glob`` ->
``$regex``, list-valued ``in`` -> ``$containsAny`` ...).  The schema type of
the field a node is scoped to drives the list/boolean special cases.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from .ast import UNDEFINED, Clause, ElemMatch
from .exceptions import FilterCompileError, OperatorNotFoundError
from .operators import PASSTHROUGH, SourceOperator, TargetOperator
from .patterns import glob_to_regex, prepare_regex
from .predicates import RegexPredicate
from .schema import describe_type, lookup_field_type

if TYPE_CHECKING:
    from graphql import GraphQLType

    from .ast import TargetNode, TargetTree
    from .schema import FieldTypeInfo

_VALID_OPERATORS: list[str] = [op.value for op in SourceOperator]

# Operators rewritten to containment checks on list-valued fields.
_LIST_OPERATORS: dict[SourceOperator, TargetOperator] = {
    SourceOperator.EQ: TargetOperator.CONTAINS,
    SourceOperator.NE: TargetOperator.CONTAINS_NONE,
    SourceOperator.IN: TargetOperator.CONTAINS_ANY,
    SourceOperator.NIN: TargetOperator.CONTAINS_NONE,
}


class OperatorTranslator:
    """Recursively rewrites a filter tree into store operators."""

    def translate(
        self,
        node: Mapping[str, Any],
        scope_type: GraphQLType | None,
        *,
        path: tuple[str, ...] = (),
    ) -> TargetTree:
        """
        Translate ``node``, scoped to a field of type ``scope_type``.

        Mapping values are nested fields (or an ``elemMatch`` payload);
        anything else is a terminal operator entry.  The input is never
        mutated.
        """
        nested = {k: v for k, v in node.items() if isinstance(v, Mapping)}
        terminal = {k: v for k, v in node.items() if not isinstance(v, Mapping)}

        if nested and terminal:
            raise FilterCompileError(
                "Cannot mix operators "
                f"({', '.join(terminal)}) with nested fields ({', '.join(nested)})",
                path=_dotted(path),
            )
        if terminal:
            return self._translate_clause(terminal, describe_type(scope_type), path)

        if SourceOperator.ELEM_MATCH.value in nested:
            if len(nested) > 1:
                raise FilterCompileError(
                    "elemMatch cannot be combined with other keys",
                    path=_dotted(path),
                )
            payload = nested[SourceOperator.ELEM_MATCH.value]
            return ElemMatch(self.translate(payload, scope_type, path=path))

        target: TargetNode = {}
        for key, value in nested.items():
            field_path = (*path, key)
            field_type = lookup_field_type(
                scope_type, key, full_path=_dotted(field_path)
            )
            target[key] = self.translate(value, field_type, path=field_path)
        return target

    # -- terminal clauses ----------------------------------------------------

    def _translate_clause(
        self,
        entries: Mapping[str, Any],
        scope: FieldTypeInfo,
        path: tuple[str, ...],
    ) -> Clause:
        predicates: dict[TargetOperator, Any] = {}
        for key, value in entries.items():
            op = self._source_operator(key, path)
            target_op, operand = self._translate_operator(op, value, scope)
            predicates[target_op] = operand
        return Clause(predicates)

    @staticmethod
    def _source_operator(key: str, path: tuple[str, ...]) -> SourceOperator:
        try:
            return SourceOperator(key)
        except ValueError:
            raise OperatorNotFoundError(
                key, _VALID_OPERATORS, path=_dotted(path)
            ) from None

    @staticmethod
    def _translate_operator(
        op: SourceOperator,
        value: Any,
        scope: FieldTypeInfo,
    ) -> tuple[TargetOperator, Any]:
        if op is SourceOperator.REGEX:
            return TargetOperator.WHERE, RegexPredicate(prepare_regex(str(value)))
        if op is SourceOperator.GLOB:
            return TargetOperator.REGEX, glob_to_regex(str(value))

        # List-valued fields first: the type decides before the value does.
        if scope.is_list and op in _LIST_OPERATORS:
            return _LIST_OPERATORS[op], value

        if op is SourceOperator.EQ and value is None:
            return TargetOperator.IN, [None, UNDEFINED]
        if op is SourceOperator.NE and value is None:
            return TargetOperator.NE, UNDEFINED
        if op is SourceOperator.NIN and scope.is_boolean:
            return TargetOperator.NIN, [*value, UNDEFINED]

        if op in PASSTHROUGH:
            return PASSTHROUGH[op], value
        # elemMatch with a scalar payload
        raise FilterCompileError(f"Operator '{op.value}' requires an object value")


def _dotted(path: tuple[str, ...]) -> str | None:
    return ".".join(path) or None
