"""Executable Textual demo that drives a ``Controls`` instance."""

from __future__ import annotations

import argparse
import os
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use ezcontrols.adapters.textual.app"
    ) from exc

from ezcontrols import ALL_STATE, Controls

from .controller import TextualControlsAdapter, TextualControlsHooks

GAMEPLAY = "gameplay"
MENU = "menu"


def bind_demo_keys(controls: Controls) -> None:
    gameplay = controls.state(GAMEPLAY)
    gameplay.bind_many(["space", "w"], "jump")
    gameplay.bind("f", "fire")
    controls.state(MENU).bind("enter", "confirm")
    controls.bind("m", ALL_STATE, "toggle_menu")


def create_demo_controls(
    fired: list[str], *, bindings_path: str | None = None
) -> Controls:
    """Demo states and callbacks; every callback appends to ``fired``.

    Key maps come from ``bindings_path`` when given, otherwise from
    ``bind_demo_keys``. Callbacks are attached after loading since persisted
    key maps never carry them.
    """

    controls = Controls()
    if bindings_path:
        controls.load(bindings_path)
    else:
        bind_demo_keys(controls)

    gameplay = controls.state(GAMEPLAY)
    gameplay.binding("jump").on_press(lambda x, y: fired.append("jump"))
    gameplay.binding("fire").on_press(
        lambda x, y: fired.append("fire"), listen_to_repeat=True
    )
    controls.state(MENU).binding("confirm").on_press(
        lambda x, y: fired.append("confirm")
    )

    def toggle_menu(x: Optional[float], y: Optional[float]) -> None:
        target = GAMEPLAY if controls.active_state == MENU else MENU
        controls.set_active_state(target)
        fired.append(f"state:{target}")

    controls.get_or_create_binding(ALL_STATE, "toggle_menu").on_press(toggle_menu)
    controls.mouse.left_button.on_press(lambda x, y: fired.append(f"click:{x},{y}"))
    controls.set_active_state(GAMEPLAY)
    return controls


class InputPad(Static):
    """Full-size area forwarding pointer events to the adapter."""

    def __init__(self, adapter: TextualControlsAdapter, text: str, **kwargs) -> None:
        super().__init__(text, **kwargs)
        self.adapter = adapter

    def on_mouse_down(self, event: events.MouseDown) -> None:
        self.adapter.handle_mouse_down(event.x, event.y, event.button)

    def on_mouse_up(self, event: events.MouseUp) -> None:
        self.adapter.handle_mouse_up(event.x, event.y, event.button)

    def on_mouse_move(self, event: events.MouseMove) -> None:
        self.adapter.handle_mouse_move(event.x, event.y, event.delta_x, event.delta_y)

    def on_mouse_scroll_up(self, event: events.MouseScrollUp) -> None:
        self.adapter.handle_mouse_scroll(event.x, event.y, up=True)

    def on_mouse_scroll_down(self, event: events.MouseScrollDown) -> None:
        self.adapter.handle_mouse_scroll(event.x, event.y, up=False)


class ControlsDemoApp(App[None]):
    """Shows which bindings fire as keys and the mouse are used."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#input-pad {
		height: 1fr;
		border: round $accent;
		padding: 1 1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self, *, bindings_path: str | None = None, repeat_window_ms: int = 500
    ) -> None:
        super().__init__()
        self.fired: list[str] = []
        self.controls = create_demo_controls(self.fired, bindings_path=bindings_path)
        self._status_widget: Static | None = None
        self.adapter = TextualControlsAdapter(
            self.controls,
            TextualControlsHooks(update_status=self._update_status),
            repeat_window_ms=repeat_window_ms,
        )

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield InputPad(
            self.adapter,
            "m: toggle menu | space/w: jump | f: fire | enter: confirm",
            id="input-pad",
        )
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        self._update_status(f"state: {self.controls.active_state}")
        self.set_interval(0.1, self.adapter.process_timeouts)

    def on_key(self, event: events.Key) -> None:
        if event.key in {"ctrl+c", "ctrl+q"}:
            return
        self.adapter.handle_textual_key(event.key)
        event.stop()

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            last = self.fired[-1] if self.fired else "-"
            self._status_widget.update(f"{status} | last: {last}")


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the ezcontrols Textual demo.")
    parser.add_argument(
        "--bindings",
        default=os.environ.get("EZCONTROLS_BINDINGS_FILE"),
        help="JSON key map to load instead of the demo defaults",
    )
    parser.add_argument(
        "--repeat-window-ms",
        type=int,
        default=500,
        help="Idle time after which a held key counts as released (default: 500)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    app = ControlsDemoApp(
        bindings_path=args.bindings, repeat_window_ms=args.repeat_window_ms
    )
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
