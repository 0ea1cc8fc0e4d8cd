"""SignalBus — synchronous in-process signal fan-out."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ...ports.signals import SignalHandler

logger = logging.getLogger(__name__)


class SignalBus:
    """Delivers named signals to registered handlers in registration order.

    Handlers run synchronously inside :meth:`emit`.  A failing handler is
    logged and its exception propagates; later handlers do not run.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[SignalHandler]] = {}

    # ── Registration ─────────────────────────────────────────────

    def on(self, event: str, handler: SignalHandler) -> None:
        """Register ``handler`` for ``event``; duplicates are ignored."""
        handlers = self._handlers.setdefault(event, [])
        if handler not in handlers:
            handlers.append(handler)

    def off(self, event: str, handler: SignalHandler) -> None:
        handlers = self._handlers.get(event, [])
        if handler in handlers:
            handlers.remove(handler)

    # ── Emission ─────────────────────────────────────────────────

    def emit(self, event: str, payload: Any = None) -> None:
        for handler in list(self._handlers.get(event, [])):
            try:
                handler(payload)
            except Exception:
                logger.exception(
                    "Error executing handler %s for signal %s",
                    getattr(handler, "__qualname__", type(handler).__name__),
                    event,
                )
                raise

    # ── Introspection ────────────────────────────────────────────

    def get_registered_handlers(self) -> dict[str, list[SignalHandler]]:
        """Return all registered handlers (debugging utility)."""
        return {k: list(v) for k, v in self._handlers.items()}

    def clear(self) -> None:
        """Remove all handler registrations (testing utility)."""
        self._handlers.clear()
