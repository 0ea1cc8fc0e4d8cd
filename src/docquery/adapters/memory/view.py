"""Read-only merged view over several collections."""

from __future__ import annotations

import itertools
from typing import TYPE_CHECKING

from .collection import ResultChain
from .matching import DocumentMatcher

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .collection import Collection


class TypeView:
    """Union of the documents of every member collection, in member order."""

    def __init__(
        self,
        collections: Sequence[Collection],
        *,
        matcher: DocumentMatcher | None = None,
    ) -> None:
        self._collections = list(collections)
        self._matcher = matcher if matcher is not None else DocumentMatcher()

    @property
    def type_names(self) -> list[str]:
        return [c.name for c in self._collections]

    def branch_result_set(self) -> ResultChain:
        return ResultChain(
            itertools.chain.from_iterable(self._collections), self._matcher
        )
