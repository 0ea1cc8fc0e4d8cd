"""Node store keeping one in-memory collection per node type."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .collection import Collection
from .matching import DocumentMatcher
from .view import TypeView

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

logger = logging.getLogger("docquery.adapters.memory")


class NodeStore:
    """
    In-memory implementation of :class:`~docquery.ports.storage.INodeStore`.

    Example::

        store = NodeStore()
        store.add_documents("MarkdownRemark", [{"id": "1", "hidden": False}])
        chain = store.get_collection("MarkdownRemark").chain()
    """

    def __init__(self, *, matcher: DocumentMatcher | None = None) -> None:
        self._matcher = matcher if matcher is not None else DocumentMatcher()
        self._collections: dict[str, Collection] = {}

    def add_collection(self, type_name: str) -> Collection:
        collection = self._collections.get(type_name)
        if collection is None:
            collection = Collection(type_name, matcher=self._matcher)
            self._collections[type_name] = collection
            logger.debug("Created collection %s", type_name)
        return collection

    def add_documents(
        self, type_name: str, documents: Iterable[dict[str, Any]]
    ) -> Collection:
        collection = self.add_collection(type_name)
        collection.insert(*documents)
        return collection

    def get_collection(self, type_name: str) -> Collection:
        """Return the collection for ``type_name``; unknown types get an empty one."""
        collection = self._collections.get(type_name)
        if collection is None:
            # Detached: not registered, so lookups never create collections.
            return Collection(type_name, matcher=self._matcher)
        return collection

    def get_view(self, type_names: Sequence[str]) -> TypeView:
        return TypeView(
            [self.get_collection(name) for name in type_names], matcher=self._matcher
        )

    @property
    def collection_names(self) -> list[str]:
        return list(self._collections)

    def __contains__(self, type_name: object) -> bool:
        return type_name in self._collections
