"""Validated, immutable query argument models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

_ORDER_TOKENS = frozenset({"asc", "desc"})


class SortSpec(BaseModel):
    """
    Parallel lists of field paths and order tokens.

    ``order`` may be shorter than ``fields``; missing (or ``None``)
    entries sort ascending.

    Example::

        SortSpec(fields=["frontmatter.date", "id"], order=["DESC"])
    """

    model_config = ConfigDict(frozen=True)

    fields: list[str]
    order: list[str | None] = Field(default_factory=list)

    @field_validator("order")
    @classmethod
    def _check_order(cls, value: list[str | None]) -> list[str | None]:
        for token in value:
            if token is not None and token.lower() not in _ORDER_TOKENS:
                raise ValueError(f"order must be 'asc' or 'desc', got {token!r}")
        return value


class QueryArgs(BaseModel):
    """Structured filter and optional sort for a single query."""

    model_config = ConfigDict(frozen=True)

    filter: dict[str, Any] = Field(default_factory=dict)
    sort: SortSpec | None = None

    @field_validator("filter", mode="before")
    @classmethod
    def _null_filter(cls, value: Any) -> Any:
        # An explicit null argument means no filter.
        return {} if value is None else value
