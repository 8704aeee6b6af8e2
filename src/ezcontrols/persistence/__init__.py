"""Persistence of binding key maps (callbacks are never stored)."""

from .codec import (
    BindingCodec,
    BindingDataError,
    JsonBindingCodec,
    StateTree,
    from_document,
    to_document,
)
from .store import load_states, save_states

__all__ = [
    "BindingCodec",
    "BindingDataError",
    "JsonBindingCodec",
    "StateTree",
    "from_document",
    "to_document",
    "load_states",
    "save_states",
]
