"""Input events accepted by the dispatcher and the results it reports."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional


@dataclass(frozen=True, slots=True)
class KeyEvent:
    """Key (or synthetic pointer key) press/release."""

    key: str
    kind: Literal["press", "release"] = "press"
    is_repeat: bool = False
    x: Optional[float] = None
    y: Optional[float] = None


@dataclass(frozen=True, slots=True)
class MotionEvent:
    x: float
    y: float
    delta_x: float
    delta_y: float


@dataclass(frozen=True, slots=True)
class DispatchResult:
    """Outcome of routing one event."""

    event: KeyEvent | MotionEvent
    matched: int = 0
    invoked: int = 0

    @property
    def consumed(self) -> bool:
        return self.invoked > 0


__all__ = ["KeyEvent", "MotionEvent", "DispatchResult"]
