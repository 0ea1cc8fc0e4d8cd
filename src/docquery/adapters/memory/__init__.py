"""In-memory node store, result chains and signal bus."""

from .collection import Collection, ResultChain, sort_key
from .matching import (
    DocumentMatcher,
    ElemMatchOperator,
    StoreOperator,
    StoreOperatorRegistry,
    build_default_registry,
    get_path_value,
    strict_equals,
)
from .signals import SignalBus
from .store import NodeStore
from .view import TypeView

__all__ = [
    "Collection",
    "DocumentMatcher",
    "ElemMatchOperator",
    "NodeStore",
    "ResultChain",
    "SignalBus",
    "StoreOperator",
    "StoreOperatorRegistry",
    "TypeView",
    "build_default_registry",
    "get_path_value",
    "sort_key",
    "strict_equals",
]
