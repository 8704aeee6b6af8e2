"""Bindings, key-set helpers and the state-scoped registry."""

from .keysets import concat_keys, contains_key, normalize_key, normalize_keys, strip_fields
from .models import CALLBACK_FIELDS, Binding, PointerCallback, PressCallback
from .registry import ALL_STATE, BindingRegistry, RegistryStats, StateScope

__all__ = [
    "ALL_STATE",
    "Binding",
    "BindingRegistry",
    "CALLBACK_FIELDS",
    "PointerCallback",
    "PressCallback",
    "RegistryStats",
    "StateScope",
    "concat_keys",
    "contains_key",
    "normalize_key",
    "normalize_keys",
    "strip_fields",
]
