"""Pointer convenience object: button/wheel bindings and motion callbacks."""

from __future__ import annotations

from typing import Callable

from ezcontrols.bindings import ALL_STATE, Binding, BindingRegistry
from ezcontrols.bindings.models import ensure_callable

MotionCallback = Callable[[float, float, float, float], object]

MOUSE_LEFT = "mouse_l"
MOUSE_MIDDLE = "mouse_m"
MOUSE_RIGHT = "mouse_r"
MOUSE_WHEEL_UP = "mouse_wu"
MOUSE_WHEEL_DOWN = "mouse_wd"
MOUSE_KEYS = (MOUSE_LEFT, MOUSE_MIDDLE, MOUSE_RIGHT, MOUSE_WHEEL_UP, MOUSE_WHEEL_DOWN)


class Mouse:
    """Bindings for the standard pointer buttons, registered under ``"all"``.

    Each button binding is named after its key id and looked up through the
    registry on access, so replacing the registry tree (``load``) never
    leaves this object pointing at a detached binding.
    """

    def __init__(self, registry: BindingRegistry) -> None:
        self.registry = registry
        self._move_callbacks: list[MotionCallback] = []
        self.install()

    def install(self) -> None:
        """Register any missing button binding under ``"all"``."""

        for key in MOUSE_KEYS:
            self._button(key)

    def _button(self, key: str) -> Binding:
        binding, created = self.registry.ensure_binding(ALL_STATE, key)
        if created:
            binding.bind(key)
        return binding

    @property
    def left_button(self) -> Binding:
        return self._button(MOUSE_LEFT)

    @property
    def middle_button(self) -> Binding:
        return self._button(MOUSE_MIDDLE)

    @property
    def right_button(self) -> Binding:
        return self._button(MOUSE_RIGHT)

    @property
    def wheel_up(self) -> Binding:
        return self._button(MOUSE_WHEEL_UP)

    @property
    def wheel_down(self) -> Binding:
        return self._button(MOUSE_WHEEL_DOWN)

    @property
    def move_callbacks(self) -> tuple[MotionCallback, ...]:
        return tuple(self._move_callbacks)

    def on_move(self, callback: MotionCallback) -> MotionCallback:
        ensure_callable(callback, role="move")
        self._move_callbacks.append(callback)
        return callback

    def emit_move(self, x: float, y: float, delta_x: float, delta_y: float) -> int:
        callbacks = tuple(self._move_callbacks)
        for callback in callbacks:
            callback(x, y, delta_x, delta_y)
        return len(callbacks)


__all__ = [
    "Mouse",
    "MotionCallback",
    "MOUSE_KEYS",
    "MOUSE_LEFT",
    "MOUSE_MIDDLE",
    "MOUSE_RIGHT",
    "MOUSE_WHEEL_UP",
    "MOUSE_WHEEL_DOWN",
]
