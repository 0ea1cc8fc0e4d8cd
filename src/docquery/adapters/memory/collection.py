"""In-memory document collection with lazily built sorted indexes."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ...ast import is_nullish
from .matching import DocumentMatcher, get_path_value

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from ...ast import CompiledFilter, SortPair

logger = logging.getLogger("docquery.adapters.memory")


def sort_key(value: Any) -> tuple[int, Any]:
    """Rank absent/null < numbers and booleans < strings < everything else."""
    if is_nullish(value):
        return (0, 0)
    if isinstance(value, (bool, int, float)):
        return (1, value)
    if isinstance(value, str):
        return (2, value)
    return (3, repr(value))


class ResultChain:
    """
    Chainable result set over a snapshot of documents.

    ``find`` narrows, ``compoundsort`` orders, ``data`` materialises.
    """

    def __init__(self, documents: Iterable[dict[str, Any]], matcher: DocumentMatcher) -> None:
        self._documents = list(documents)
        self._matcher = matcher

    def find(
        self, compiled: CompiledFilter | None = None, first_only: bool = False
    ) -> ResultChain:
        if compiled:
            candidates = (d for d in self._documents if self._matcher.matches(d, compiled))
        else:
            candidates = iter(self._documents)
        if first_only:
            first = next(candidates, None)
            self._documents = [first] if first is not None else []
        else:
            self._documents = list(candidates)
        return self

    def compoundsort(self, sort_pairs: Iterable[SortPair]) -> ResultChain:
        # Stable passes from least to most significant key.
        for path, descending in reversed(list(sort_pairs)):
            self._documents.sort(
                key=lambda doc, p=path: sort_key(get_path_value(doc, p)),
                reverse=descending,
            )
        return self

    def count(self) -> int:
        return len(self._documents)

    def data(self) -> list[dict[str, Any]]:
        return list(self._documents)


class Collection:
    """
    Named bag of documents of a single node type.

    Indexes are sorted position lists per dotted path, rebuilt whenever
    documents are inserted.  They are bookkeeping of which paths the
    advisor asked for: result chains scan and sort the documents
    themselves, so query results never depend on which indexes exist.
    """

    def __init__(
        self,
        name: str,
        documents: Iterable[dict[str, Any]] = (),
        *,
        matcher: DocumentMatcher | None = None,
    ) -> None:
        self.name = name
        self._documents: list[dict[str, Any]] = list(documents)
        self._matcher = matcher if matcher is not None else DocumentMatcher()
        self._indexes: dict[str, list[int]] = {}

    def insert(self, *documents: dict[str, Any]) -> None:
        self._documents.extend(documents)
        for path in self._indexes:
            self._indexes[path] = self._build_index(path)

    def ensure_index(self, path: str) -> None:
        """Create a sorted index on ``path``; existing indexes are left alone."""
        if path in self._indexes:
            return
        self._indexes[path] = self._build_index(path)
        logger.debug("Built index on %s.%s", self.name, path)

    def has_index(self, path: str) -> bool:
        return path in self._indexes

    @property
    def index_paths(self) -> list[str]:
        return list(self._indexes)

    def index_order(self, path: str) -> list[int]:
        """Document positions ordered by the value at ``path``."""
        return list(self._indexes[path])

    def chain(self) -> ResultChain:
        return ResultChain(self._documents, self._matcher)

    def _build_index(self, path: str) -> list[int]:
        return sorted(
            range(len(self._documents)),
            key=lambda i: sort_key(get_path_value(self._documents[i], path)),
        )

    def __len__(self) -> int:
        return len(self._documents)

    def __iter__(self) -> Iterator[dict[str, Any]]:
        return iter(self._documents)

    def __repr__(self) -> str:
        return f"Collection({self.name!r}, documents={len(self._documents)})"
