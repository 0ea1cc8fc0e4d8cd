"""Usage-driven index creation for frequently filtered fields."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .usage import FIELD_INDEX_THRESHOLD, FieldUsageTable

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .ast import CompiledFilter, SortPair
    from .ports.storage import ICollection

logger = logging.getLogger("docquery.advisor")


class FieldIndexAdvisor:
    """
    Counts field usage across compiled queries and requests indexes.

    Every application of a compiled filter increments the counter of each
    of its paths.  The increment that lands exactly on ``threshold``
    asks the collection for an index on that path.  Sort paths always get
    an index since ordering needs one anyway.
    """

    def __init__(
        self,
        usage_table: FieldUsageTable | None = None,
        *,
        threshold: int = FIELD_INDEX_THRESHOLD,
    ) -> None:
        if threshold < 1:
            raise ValueError("threshold must be a positive integer")
        self.usage_table = usage_table if usage_table is not None else FieldUsageTable()
        self.threshold = threshold

    def ensure_field_indexes(
        self, collection: ICollection, compiled: CompiledFilter
    ) -> list[str]:
        """Count usage of every compiled path; return paths indexed now."""
        requested: list[str] = []
        for path in compiled:
            if self.usage_table.increment(path) == self.threshold:
                logger.info(
                    "Field %r used %d times, requesting index", path, self.threshold
                )
                # The store treats an existing index as a no-op.
                collection.ensure_index(path)
                requested.append(path)
        return requested

    def ensure_sort_indexes(
        self, collection: ICollection, sort_pairs: Iterable[SortPair]
    ) -> None:
        for path, _descending in sort_pairs:
            collection.ensure_index(path)
