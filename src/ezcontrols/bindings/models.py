"""Binding entities: key sets plus ordered press/release callbacks."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Optional

from .keysets import concat_keys, contains_key, normalize_key, normalize_keys

PointerCallback = Callable[[Optional[float], Optional[float]], object]

PRESS_CALLBACKS_FIELD = "on_press_callbacks"
RELEASE_CALLBACKS_FIELD = "on_release_callbacks"
MOVE_CALLBACKS_FIELD = "on_move_callbacks"
CALLBACK_FIELDS = (PRESS_CALLBACKS_FIELD, RELEASE_CALLBACKS_FIELD, MOVE_CALLBACKS_FIELD)


def ensure_callable(callback: object, *, role: str) -> None:
    if not callable(callback):
        raise TypeError(
            f"{role} callback must be callable, got {type(callback).__name__}"
        )


@dataclass(frozen=True, slots=True)
class PressCallback:
    """Press handler plus whether it also fires on key-repeat presses."""

    handler: PointerCallback
    listen_to_repeat: bool = False

    def __post_init__(self) -> None:
        ensure_callable(self.handler, role="press")
        object.__setattr__(self, "listen_to_repeat", bool(self.listen_to_repeat))

    def accepts(self, is_repeat: bool) -> bool:
        return self.listen_to_repeat or not is_repeat

    def __call__(self, x: Optional[float], y: Optional[float]) -> object:
        return self.handler(x, y)


@dataclass(eq=False, slots=True)
class Binding:
    """Named action: a set of physical keys and the callbacks they trigger.

    Instances are created by ``BindingRegistry`` and compared by identity.
    Keys keep their insertion order so persisted documents stay stable.
    """

    _keys: Dict[str, None] = field(default_factory=dict)
    _press: list[PressCallback] = field(default_factory=list)
    _release: list[PointerCallback] = field(default_factory=list)

    @classmethod
    def with_keys(cls, keys: Iterable[str]) -> "Binding":
        binding = cls()
        binding.bind_many(keys)
        return binding

    @property
    def keys(self) -> tuple[str, ...]:
        return tuple(self._keys)

    @property
    def press_callbacks(self) -> tuple[PressCallback, ...]:
        return tuple(self._press)

    @property
    def release_callbacks(self) -> tuple[PointerCallback, ...]:
        return tuple(self._release)

    def has_key(self, key: str) -> bool:
        return contains_key(self._keys, key)

    def bind(self, key: str) -> "Binding":
        self._keys.setdefault(normalize_key(key), None)
        return self

    def bind_many(self, keys: Iterable[str]) -> "Binding":
        self._keys = dict.fromkeys(concat_keys(self._keys, normalize_keys(keys)))
        return self

    def unbind(self, key: str) -> "Binding":
        self._keys.pop(normalize_key(key), None)
        return self

    def unbind_many(self, keys: Iterable[str]) -> "Binding":
        for key in normalize_keys(keys):
            self._keys.pop(key, None)
        return self

    def on_press(
        self, callback: PointerCallback, listen_to_repeat: bool = False
    ) -> PointerCallback:
        self._press.append(PressCallback(callback, listen_to_repeat))
        return callback

    def on_release(self, callback: PointerCallback) -> PointerCallback:
        ensure_callable(callback, role="release")
        self._release.append(callback)
        return callback

    def snapshot(self) -> Dict[str, Any]:
        return {
            "keys": list(self._keys),
            PRESS_CALLBACKS_FIELD: list(self._press),
            RELEASE_CALLBACKS_FIELD: list(self._release),
        }

    def __repr__(self) -> str:
        return (
            f"Binding(keys={self.keys!r}, press={len(self._press)}, "
            f"release={len(self._release)})"
        )


__all__ = [
    "Binding",
    "PressCallback",
    "PointerCallback",
    "CALLBACK_FIELDS",
    "PRESS_CALLBACKS_FIELD",
    "RELEASE_CALLBACKS_FIELD",
    "MOVE_CALLBACKS_FIELD",
    "ensure_callable",
]
