"""Sort translation: parallel field/order lists -> ``(path, is_desc)`` pairs."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .ast import SortPair
    from .models import SortSpec


def to_sort_fields(sort: SortSpec) -> list[SortPair]:
    """
    Convert a :class:`SortSpec` to compound-sort pairs.

    E.g. ``fields=["frontmatter.date", "id"], order=["desc"]`` returns
    ``[("frontmatter.date", True), ("id", False)]``.
    """
    pairs: list[SortPair] = []
    for i, field in enumerate(sort.fields):
        token = sort.order[i] if i < len(sort.order) else None
        pairs.append((field, token is not None and token.lower() == "desc"))
    return pairs
