"""Event dispatch: raw host input to binding callbacks."""

from .dispatcher import POINTER_BUTTONS, Dispatcher, pointer_key
from .events import DispatchResult, KeyEvent, MotionEvent
from .mouse import MOUSE_KEYS, MotionCallback, Mouse

__all__ = [
    "Dispatcher",
    "DispatchResult",
    "KeyEvent",
    "MotionCallback",
    "MotionEvent",
    "Mouse",
    "MOUSE_KEYS",
    "POINTER_BUTTONS",
    "pointer_key",
]
