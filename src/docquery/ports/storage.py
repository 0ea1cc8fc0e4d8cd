"""Storage engine contracts consumed by the query executor."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ..ast import CompiledFilter, SortPair


@runtime_checkable
class IResultChain(Protocol):
    """Chainable query builder over a set of documents."""

    def find(
        self, compiled: CompiledFilter | None = None, first_only: bool = False
    ) -> IResultChain:
        """Keep documents matching ``compiled`` (at most one if ``first_only``)."""
        ...

    def compoundsort(self, sort_pairs: Sequence[SortPair]) -> IResultChain:
        """Order by several ``(path, is_descending)`` keys, primary first."""
        ...

    def data(self) -> list[dict[str, Any]]:
        """Materialize the current result set."""
        ...


@runtime_checkable
class ICollection(Protocol):
    """Documents of one concrete type."""

    name: str

    def ensure_index(self, path: str) -> None:
        """Create an index on ``path``; a no-op if one exists."""
        ...

    def chain(self) -> IResultChain:
        ...


@runtime_checkable
class ITypeView(Protocol):
    """Read-only view spanning several collections."""

    def branch_result_set(self) -> IResultChain:
        ...


@runtime_checkable
class INodeStore(Protocol):
    """Entry point resolving type names to collections and views."""

    def get_collection(self, type_name: str) -> ICollection:
        ...

    def get_view(self, type_names: Sequence[str]) -> ITypeView:
        ...
