"""Adapter that feeds Textual key and mouse events into ``Controls``."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from ezcontrols.controls import Controls
from ezcontrols.dispatch import DispatchResult
from ezcontrols.dispatch.mouse import MOUSE_WHEEL_DOWN, MOUSE_WHEEL_UP


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualControlsHooks:
    """Optional callbacks the host uses to surface adapter activity."""

    update_status: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


@dataclass(slots=True)
class HeldKey:
    deadline: float
    x: Optional[float] = None
    y: Optional[float] = None


class TextualControlsAdapter:
    """Bridges Textual input to the controls dispatcher.

    Terminals only report key presses. A key is treated as held until no
    press for it arrives within ``repeat_window_ms``; presses inside that
    window are dispatched as repeats, and ``process_timeouts`` dispatches
    the release once the window lapses.
    """

    def __init__(
        self,
        controls: Controls,
        hooks: TextualControlsHooks | None = None,
        *,
        repeat_window_ms: int = 500,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if repeat_window_ms <= 0:
            raise ValueError("repeat_window_ms must be positive")
        self.controls = controls
        self.hooks = hooks or TextualControlsHooks()
        self.repeat_window_ms = repeat_window_ms
        self._clock = clock
        self._held: Dict[str, HeldKey] = {}

    @property
    def held_keys(self) -> tuple[str, ...]:
        return tuple(self._held)

    def handle_textual_key(
        self, key: str, *, x: Optional[float] = None, y: Optional[float] = None
    ) -> DispatchResult:
        deadline = self._clock() + self.repeat_window_ms / 1000.0
        held = self._held.get(key)
        is_repeat = held is not None
        if held is None:
            self._held[key] = HeldKey(deadline=deadline, x=x, y=y)
        else:
            held.deadline = deadline
        result = self.controls.handle_key_press(key, is_repeat, x, y)
        self._report("press", key, result, repeat=is_repeat)
        return result

    def handle_mouse_down(self, x: float, y: float, button: int) -> DispatchResult:
        result = self.controls.handle_pointer_press(x, y, button)
        self._report("pointer_press", result.event.key, result)
        return result

    def handle_mouse_up(self, x: float, y: float, button: int) -> DispatchResult:
        result = self.controls.handle_pointer_release(x, y, button)
        self._report("pointer_release", result.event.key, result)
        return result

    def handle_mouse_scroll(
        self, x: float, y: float, *, up: bool
    ) -> List[DispatchResult]:
        key = MOUSE_WHEEL_UP if up else MOUSE_WHEEL_DOWN
        results = [
            self.controls.handle_key_press(key, False, x, y),
            self.controls.handle_key_release(key, x, y),
        ]
        self._report("scroll", key, results[0])
        return results

    def handle_mouse_move(
        self, x: float, y: float, delta_x: float, delta_y: float
    ) -> DispatchResult:
        return self.controls.handle_pointer_move(x, y, delta_x, delta_y)

    def process_timeouts(self) -> List[DispatchResult]:
        """Release every held key whose repeat window has lapsed."""

        now = self._clock()
        expired = [key for key, held in self._held.items() if held.deadline <= now]
        return [self._release(key) for key in expired]

    def release_all(self) -> List[DispatchResult]:
        return [self._release(key) for key in list(self._held)]

    def _release(self, key: str) -> DispatchResult:
        held = self._held.pop(key)
        result = self.controls.handle_key_release(key, held.x, held.y)
        self._report("release", key, result)
        return result

    def _report(
        self, kind: str, key: str, result: DispatchResult, *, repeat: bool = False
    ) -> None:
        state = self.controls.active_state or "-"
        suffix = " (repeat)" if repeat else ""
        self.hooks.log(
            f"{kind} -> key={key!r} state={state!r} "
            f"matched={result.matched} invoked={result.invoked}{suffix}"
        )
        if result.consumed:
            self.hooks.update_status(f"{state}:{key}")


__all__ = ["TextualControlsAdapter", "TextualControlsHooks"]
