"""Small helpers for key identifiers and nested binding documents."""

from __future__ import annotations

from typing import Any, Collection, Iterable


def normalize_key(key: object) -> str:
    if not isinstance(key, str):
        raise TypeError(
            f"key identifier must be a string, got {type(key).__name__}; "
            "use bind_many()/unbind_many() for several keys"
        )
    if not key:
        raise ValueError("key identifier cannot be empty")
    return key


def normalize_keys(keys: Iterable[str]) -> tuple[str, ...]:
    """Validate a many-keys argument and return its keys in order."""

    if isinstance(keys, str):
        raise TypeError("expected an iterable of key identifiers, not a string")
    return tuple(normalize_key(key) for key in keys)


def contains_key(keys: Collection[str], key: str) -> bool:
    return key in keys


def concat_keys(existing: Iterable[str], extra: Iterable[str]) -> tuple[str, ...]:
    """Concatenate two key sequences, keeping the first occurrence of each key."""

    merged: dict[str, None] = dict.fromkeys(existing)
    for key in extra:
        merged.setdefault(key, None)
    return tuple(merged)


def strip_fields(tree: Any, names: Collection[str]) -> Any:
    """Return a deep copy of ``tree`` without any mapping entry keyed by ``names``.

    Mappings and lists/tuples are walked recursively; other values are
    returned as they are. ``tree`` itself is left untouched.
    """

    if isinstance(tree, dict):
        return {
            key: strip_fields(value, names)
            for key, value in tree.items()
            if key not in names
        }
    if isinstance(tree, (list, tuple)):
        return [strip_fields(item, names) for item in tree]
    return tree


__all__ = [
    "normalize_key",
    "normalize_keys",
    "contains_key",
    "concat_keys",
    "strip_fields",
]
