"""Field usage counters driving adaptive index creation."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .ports.signals import ISignalBus

logger = logging.getLogger(__name__)

FIELD_INDEX_THRESHOLD = 5
DELETE_CACHE = "DELETE_CACHE"


class FieldUsageTable:
    """
    Usage count per dotted field path.

    Owned by whoever builds the executor (one per process in practice)
    and cleared through :meth:`reset`, usually bound to the
    ``DELETE_CACHE`` signal via :meth:`subscribe`.  Increments are plain
    read-modify-write; concurrent queries may see approximate counts.
    """

    def __init__(self) -> None:
        self._usages: dict[str, int] = {}

    def increment(self, path: str) -> int:
        """Bump the counter for ``path`` and return the new value."""
        count = self._usages.get(path, 0) + 1
        self._usages[path] = count
        return count

    def get(self, path: str) -> int:
        return self._usages.get(path, 0)

    def reset(self, _payload: Any = None) -> None:
        """Forget every counter."""
        if self._usages:
            logger.info("Clearing usage counters for %d field(s)", len(self._usages))
        self._usages.clear()

    def snapshot(self) -> dict[str, int]:
        """Return a copy of the counters (debugging utility)."""
        return dict(self._usages)

    def subscribe(self, bus: ISignalBus, event: str = DELETE_CACHE) -> None:
        """Reset this table whenever ``event`` is emitted on ``bus``."""
        bus.on(event, self.reset)

    def __len__(self) -> int:
        return len(self._usages)

    def __contains__(self, path: object) -> bool:
        return path in self._usages
