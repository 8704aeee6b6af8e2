"""Routes raw host input to the callbacks of matching bindings."""

from __future__ import annotations

from typing import Optional

from ezcontrols.bindings import BindingRegistry
from ezcontrols.runtime.telemetry import span

from .events import DispatchResult, KeyEvent, MotionEvent
from .mouse import Mouse

POINTER_BUTTONS: dict[int, str] = {1: "l", 2: "m", 3: "r", 4: "wu", 5: "wd"}


def pointer_key(button: str | int) -> str:
    """Synthetic key id for a pointer button (``"l"`` or ``1`` -> ``"mouse_l"``)."""

    if isinstance(button, bool):
        raise TypeError("pointer button must be a str or int")
    if isinstance(button, int):
        name = POINTER_BUTTONS.get(button, str(button))
    else:
        name = button.strip().lower()
        if name.startswith("mouse_"):
            return name
    return f"mouse_{name}"


class Dispatcher:
    """Invokes press/release callbacks for bindings in the active and ``"all"`` states.

    Matching bindings and each binding's callback list are copied before
    any callback runs; a callback that rebinds keys, adds callbacks or
    switches state affects the next event, not the current one.
    """

    def __init__(
        self,
        registry: BindingRegistry,
        *,
        mouse: Mouse | None = None,
        logger_name: str | None = None,
    ) -> None:
        self.registry = registry
        self.mouse = mouse
        self._logger_name = logger_name

    def handle_key_press(
        self,
        key: str,
        is_repeat: bool = False,
        x: Optional[float] = None,
        y: Optional[float] = None,
    ) -> DispatchResult:
        return self.dispatch(
            KeyEvent(key=key, kind="press", is_repeat=is_repeat, x=x, y=y)
        )

    def handle_key_release(
        self, key: str, x: Optional[float] = None, y: Optional[float] = None
    ) -> DispatchResult:
        return self.dispatch(KeyEvent(key=key, kind="release", x=x, y=y))

    def handle_pointer_press(
        self, x: float, y: float, button: str | int
    ) -> DispatchResult:
        return self.handle_key_press(pointer_key(button), False, x, y)

    def handle_pointer_release(
        self, x: float, y: float, button: str | int
    ) -> DispatchResult:
        return self.handle_key_release(pointer_key(button), x, y)

    def handle_pointer_move(
        self, x: float, y: float, delta_x: float, delta_y: float
    ) -> DispatchResult:
        event = MotionEvent(x=x, y=y, delta_x=delta_x, delta_y=delta_y)
        if self.mouse is None:
            return DispatchResult(event)
        invoked = self.mouse.emit_move(x, y, delta_x, delta_y)
        return DispatchResult(event, matched=invoked, invoked=invoked)

    def dispatch(self, event: KeyEvent) -> DispatchResult:
        with span(
            f"dispatch::{event.kind}",
            logger_name=self._logger_name,
            component="dispatch",
            metadata={
                "key": event.key,
                "repeat": event.is_repeat,
                "state": self.registry.active_state,
            },
        ) as handle:
            matches = self.registry.matching_bindings(event.key)
            invoked = 0
            for binding in matches:
                if event.kind == "press":
                    for press in binding.press_callbacks:
                        if press.accepts(event.is_repeat):
                            press(event.x, event.y)
                            invoked += 1
                else:
                    for release in binding.release_callbacks:
                        release(event.x, event.y)
                        invoked += 1
            if not matches:
                handle.note("miss")
            return DispatchResult(event, matched=len(matches), invoked=invoked)


__all__ = ["Dispatcher", "POINTER_BUTTONS", "pointer_key"]
