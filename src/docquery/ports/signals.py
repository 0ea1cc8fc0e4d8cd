from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol, TypeAlias, runtime_checkable

SignalHandler: TypeAlias = Callable[[Any], None]


@runtime_checkable
class ISignalBus(Protocol):
    """Process-wide named signals (e.g. cache invalidation)."""

    def on(self, event: str, handler: SignalHandler) -> None:
        """Register ``handler`` for ``event``."""
        ...

    def emit(self, event: str, payload: Any = None) -> None:
        """Invoke every handler registered for ``event``."""
        ...
