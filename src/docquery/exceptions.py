"""
Query exception hierarchy with fuzzy-match suggestions.

All exceptions inherit from ``QueryError`` and provide
``to_dict()`` for API-friendly error responses.
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import Any


class QueryError(Exception):
    """Base exception for all docquery errors."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


class FilterCompileError(QueryError):
    """Filter tree could not be compiled to the store dialect."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.message = message
        self.path = path
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "FILTER_COMPILE_ERROR",
            "message": self.message,
            "path": self.path,
        }


class OperatorNotFoundError(FilterCompileError):
    """
    Unknown operator specified in a filter tree.

    Provides fuzzy-matched suggestions for likely intended operators.
    """

    def __init__(
        self,
        operator: str,
        valid_operators: list[str],
        path: str | None = None,
    ) -> None:
        self.operator = operator
        self.valid_operators = valid_operators
        self.suggestions = get_close_matches(operator, valid_operators, n=3, cutoff=0.6)

        message = f"Unknown operator: '{operator}'."
        if self.suggestions:
            message += f" Did you mean: {', '.join(self.suggestions)}?"
        message += f" Valid operators: {', '.join(sorted(valid_operators))}"
        super().__init__(message, path=path)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "OPERATOR_NOT_FOUND",
            "operator": self.operator,
            "path": self.path,
            "suggestions": self.suggestions,
            "valid_operators": sorted(self.valid_operators),
        }


class FieldNotFoundError(FilterCompileError):
    """
    Filter key does not name a field of the scoped schema type.

    Uses fuzzy matching to suggest similar valid field names.

    Example error message::

        Invalid field 'titel' on 'MarkdownRemark'.
        Did you mean one of these?
          • title

        Available fields: excerpt, frontmatter, id, title
    """

    def __init__(
        self,
        invalid_field: str,
        type_name: str,
        available_fields: list[str],
        full_path: str | None = None,
        cutoff: float = 0.6,
    ) -> None:
        self.invalid_field = invalid_field
        self.type_name = type_name
        self.available_fields = available_fields
        self.full_path = full_path or invalid_field

        self.suggestions = get_close_matches(
            invalid_field, available_fields, n=5, cutoff=cutoff
        )
        super().__init__(self._build_message(), path=self.full_path)

    def _build_message(self) -> str:
        lines = [f"Invalid field '{self.invalid_field}' on '{self.type_name}'."]
        if self.suggestions:
            lines.append("Did you mean one of these?")
            for s in self.suggestions:
                lines.append(f"  • {s}")

        sorted_fields = sorted(self.available_fields)
        preview = ", ".join(sorted_fields[:15])
        if len(sorted_fields) > 15:
            preview += ", ..."
        lines.append(f"Available fields: {preview}")
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "FIELD_NOT_FOUND",
            "field": self.invalid_field,
            "type": self.type_name,
            "full_path": self.full_path,
            "suggestions": self.suggestions,
            "available_fields": sorted(self.available_fields),
        }


class InvalidPatternError(FilterCompileError):
    """A ``regex`` or ``glob`` operand could not be compiled."""

    def __init__(self, pattern: str, kind: str, reason: str) -> None:
        self.pattern = pattern
        self.kind = kind
        self.reason = reason
        super().__init__(f"Invalid {kind} pattern {pattern!r}: {reason}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "INVALID_PATTERN",
            "kind": self.kind,
            "pattern": self.pattern,
            "reason": self.reason,
        }


class StorageError(QueryError):
    """Base for document store failures."""


class UnsupportedStoreOperatorError(StorageError):
    """A compiled clause uses an operator the store cannot evaluate."""

    def __init__(self, operator: str, supported: list[str]) -> None:
        self.operator = operator
        self.supported = supported
        super().__init__(
            f"Unsupported operator for in-memory evaluation: {operator!r}"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "UNSUPPORTED_STORE_OPERATOR",
            "operator": self.operator,
            "supported": sorted(self.supported),
        }
