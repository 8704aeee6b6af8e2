"""Callback-style input bindings scoped by named states."""

from .bindings import ALL_STATE, Binding, BindingRegistry, StateScope
from .controls import Controls
from .dispatch import Dispatcher, DispatchResult, Mouse
from .persistence import BindingDataError, JsonBindingCodec

__all__ = [
    "ALL_STATE",
    "Binding",
    "BindingDataError",
    "BindingRegistry",
    "Controls",
    "Dispatcher",
    "DispatchResult",
    "JsonBindingCodec",
    "Mouse",
    "StateScope",
    "adapters",
    "bindings",
    "dispatch",
    "persistence",
    "runtime",
]

__version__ = "0.1.0"
__description__ = "Callback style controls library for Python hosts."
