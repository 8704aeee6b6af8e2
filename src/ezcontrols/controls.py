"""Public entry point bundling registry, dispatcher, mouse and persistence."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Mapping, Optional

from ezcontrols.bindings import Binding, BindingRegistry, StateScope
from ezcontrols.dispatch import Dispatcher, DispatchResult, Mouse
from ezcontrols.persistence import (
    BindingCodec,
    JsonBindingCodec,
    from_document,
    load_states,
    save_states,
)
from ezcontrols.runtime import telemetry

LOGGER_NAME = "ezcontrols"


class Controls:
    """Callback-style controls for one host application.

    Typical setup::

        controls = Controls()
        jump = controls.bind("space", "gameplay", "jump")
        jump.on_press(lambda x, y: player.jump())
        controls.set_active_state("gameplay")

    The host then forwards its raw input to ``handle_key_press``,
    ``handle_key_release`` and the ``handle_pointer_*`` methods.
    """

    def __init__(
        self,
        *,
        registry: BindingRegistry | None = None,
        codec: BindingCodec | None = None,
    ) -> None:
        self.registry = registry or BindingRegistry(
            logger_name=f"{LOGGER_NAME}.bindings"
        )
        self.codec: BindingCodec = codec or JsonBindingCodec()
        self.mouse = Mouse(self.registry)
        self.dispatcher = Dispatcher(
            self.registry, mouse=self.mouse, logger_name=f"{LOGGER_NAME}.dispatch"
        )

    @property
    def active_state(self) -> Optional[str]:
        return self.registry.active_state

    def set_active_state(self, state_name: Optional[str]) -> None:
        self.registry.set_active_state(state_name)

    def bind(self, key: str, state_name: str, binding_name: str) -> Binding:
        return self.registry.bind(key, state_name, binding_name)

    def bind_many(
        self, keys: Iterable[str], state_name: str, binding_name: str
    ) -> Binding:
        return self.registry.bind_many(keys, state_name, binding_name)

    def state(self, state_name: str) -> StateScope:
        return self.registry.state(state_name)

    def get_or_create_binding(self, state_name: str, binding_name: str) -> Binding:
        return self.registry.get_or_create_binding(state_name, binding_name)

    # Persistence

    def save(self, path: str | Path) -> Path:
        return save_states(
            self.registry, path, self.codec, logger_name=f"{LOGGER_NAME}.persistence"
        )

    def load(self, path: str | Path) -> None:
        """Replace every state with the key maps stored at ``path``.

        Loaded bindings carry no callbacks; register them again afterwards.
        Pointer motion callbacks live on ``mouse`` and are kept.
        """

        load_states(
            self.registry, path, self.codec, logger_name=f"{LOGGER_NAME}.persistence"
        )
        self.mouse.install()

    def dumps(self) -> str:
        return self.codec.serialize(self.registry.tree())

    def loads(self, text: str) -> None:
        states = self.codec.deserialize(text)
        self.registry.replace_states(states)
        self.mouse.install()
        telemetry.record_event(
            "persistence.loads",
            level="debug",
            data={"states": len(states)},
            logger_name=f"{LOGGER_NAME}.persistence",
        )

    def parse(self, document: Mapping[str, object]) -> None:
        """Like ``loads`` but for an already decoded ``{state: {binding: {keys}}}`` mapping."""

        self.registry.replace_states(from_document(document))
        self.mouse.install()
        telemetry.record_event(
            "persistence.parse",
            level="debug",
            data={"states": len(document)},
            logger_name=f"{LOGGER_NAME}.persistence",
        )

    # Host input

    def handle_key_press(
        self,
        key: str,
        is_repeat: bool = False,
        x: Optional[float] = None,
        y: Optional[float] = None,
    ) -> DispatchResult:
        return self.dispatcher.handle_key_press(key, is_repeat, x, y)

    def handle_key_release(
        self, key: str, x: Optional[float] = None, y: Optional[float] = None
    ) -> DispatchResult:
        return self.dispatcher.handle_key_release(key, x, y)

    def handle_pointer_press(
        self, x: float, y: float, button: str | int
    ) -> DispatchResult:
        return self.dispatcher.handle_pointer_press(x, y, button)

    def handle_pointer_release(
        self, x: float, y: float, button: str | int
    ) -> DispatchResult:
        return self.dispatcher.handle_pointer_release(x, y, button)

    def handle_pointer_move(
        self, x: float, y: float, delta_x: float, delta_y: float
    ) -> DispatchResult:
        return self.dispatcher.handle_pointer_move(x, y, delta_x, delta_y)


__all__ = ["Controls"]
