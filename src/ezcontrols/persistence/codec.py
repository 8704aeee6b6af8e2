"""Text codecs for binding trees.

Only key sets and the state/binding nesting are persisted; callbacks are
stripped before encoding and every decoded binding starts with none::

    {"gameplay": {"jump": {"keys": ["space"]}}}
"""

from __future__ import annotations

import json
from typing import Any, Dict, Mapping, Protocol

from ezcontrols.bindings import CALLBACK_FIELDS, Binding, strip_fields

StateTree = Dict[str, Dict[str, Binding]]


class BindingDataError(ValueError):
    """Raised when a persisted binding document cannot be decoded."""

    def __init__(self, message: str, *, path: str = "$") -> None:
        super().__init__(f"{path}: {message}")
        self.path = path


class BindingCodec(Protocol):
    """Encodes a state tree to text and back."""

    def serialize(self, states: Mapping[str, Mapping[str, Binding]]) -> str:
        ...

    def deserialize(self, text: str) -> StateTree:
        ...


def to_document(states: Mapping[str, Mapping[str, Binding]]) -> Dict[str, Any]:
    tree = {
        state_name: {name: binding.snapshot() for name, binding in bindings.items()}
        for state_name, bindings in states.items()
    }
    return strip_fields(tree, CALLBACK_FIELDS)


def from_document(document: object) -> StateTree:
    """Build a fresh state tree from a decoded ``{state: {binding: {keys}}}`` mapping."""

    if not isinstance(document, Mapping):
        raise BindingDataError(
            f"expected an object of states, got {type(document).__name__}"
        )
    states: StateTree = {}
    for state_name, bindings in document.items():
        state_path = f"$.{state_name}"
        if not isinstance(state_name, str) or not state_name:
            raise BindingDataError("state names must be non-empty strings", path="$")
        if not isinstance(bindings, Mapping):
            raise BindingDataError("expected an object of bindings", path=state_path)
        decoded: Dict[str, Binding] = {}
        for binding_name, entry in bindings.items():
            binding_path = f"{state_path}.{binding_name}"
            if not isinstance(binding_name, str) or not binding_name:
                raise BindingDataError(
                    "binding names must be non-empty strings", path=state_path
                )
            if not isinstance(entry, Mapping):
                raise BindingDataError("expected a binding object", path=binding_path)
            keys = entry.get("keys", [])
            if not isinstance(keys, list) or not all(
                isinstance(key, str) and key for key in keys
            ):
                raise BindingDataError(
                    "'keys' must be a list of non-empty strings",
                    path=f"{binding_path}.keys",
                )
            decoded[binding_name] = Binding.with_keys(keys)
        states[state_name] = decoded
    return states


class JsonBindingCodec:
    """JSON codec for binding trees."""

    def __init__(self, *, indent: int | None = 2, sort_keys: bool = True) -> None:
        self.indent = indent
        self.sort_keys = sort_keys

    def serialize(self, states: Mapping[str, Mapping[str, Binding]]) -> str:
        return json.dumps(
            to_document(states), indent=self.indent, sort_keys=self.sort_keys
        )

    def deserialize(self, text: str) -> StateTree:
        try:
            document = json.loads(text)
        except json.JSONDecodeError as exc:
            raise BindingDataError(
                f"invalid JSON ({exc.msg} at line {exc.lineno}, column {exc.colno})"
            ) from exc
        return from_document(document)


__all__ = [
    "BindingCodec",
    "BindingDataError",
    "JsonBindingCodec",
    "StateTree",
    "from_document",
    "to_document",
]
