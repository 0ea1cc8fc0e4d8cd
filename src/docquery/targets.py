"""Query targets: one concrete collection, or a merged view over several."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .advisor import FieldIndexAdvisor
    from .ast import CompiledFilter, SortPair
    from .ports.storage import ICollection, IResultChain, ITypeView


class QueryTarget(ABC):
    """Where a compiled query runs, chosen once per query."""

    @abstractmethod
    def prepare(self, compiled: CompiledFilter, sort_pairs: Sequence[SortPair]) -> None:
        """Side effects before execution (index requests)."""

    @abstractmethod
    def chain(self) -> IResultChain:
        """Fresh result chain over the target's documents."""


class SingleCollectionTarget(QueryTarget):
    """A concrete node type backed by its own collection."""

    def __init__(self, collection: ICollection, advisor: FieldIndexAdvisor) -> None:
        self.collection = collection
        self.advisor = advisor

    def prepare(self, compiled: CompiledFilter, sort_pairs: Sequence[SortPair]) -> None:
        self.advisor.ensure_field_indexes(self.collection, compiled)
        if sort_pairs:
            self.advisor.ensure_sort_indexes(self.collection, sort_pairs)

    def chain(self) -> IResultChain:
        return self.collection.chain()

    def __repr__(self) -> str:
        return f"SingleCollectionTarget({self.collection.name!r})"


class MergedViewTarget(QueryTarget):
    """Several concrete types queried through one read-only view."""

    def __init__(self, view: ITypeView, type_names: Sequence[str] = ()) -> None:
        self.view = view
        self.type_names = list(type_names)

    def prepare(self, compiled: CompiledFilter, sort_pairs: Sequence[SortPair]) -> None:
        # Views carry no indexes of their own.
        return None

    def chain(self) -> IResultChain:
        return self.view.branch_result_set()

    def __repr__(self) -> str:
        return f"MergedViewTarget({self.type_names!r})"
