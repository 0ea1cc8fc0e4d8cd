from .signals import ISignalBus, SignalHandler
from .storage import ICollection, INodeStore, IResultChain, ITypeView

__all__ = [
    "ICollection",
    "INodeStore",
    "IResultChain",
    "ISignalBus",
    "ITypeView",
    "SignalHandler",
]
