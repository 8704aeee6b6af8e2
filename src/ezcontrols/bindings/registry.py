"""State-scoped binding registry and the get-or-create path."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional

from ezcontrols.runtime import telemetry
from ezcontrols.runtime.telemetry import span

from .models import Binding

ALL_STATE = "all"


@dataclass(slots=True)
class RegistryStats:
    """Lightweight snapshot describing registry state."""

    state_count: int
    binding_count: int
    states: tuple[str, ...]
    active_state: Optional[str]


@dataclass(frozen=True, slots=True)
class StateScope:
    """Registry view with the state name fixed."""

    registry: "BindingRegistry"
    name: str

    def binding(self, binding_name: str) -> Binding:
        return self.registry.get_or_create_binding(self.name, binding_name)

    def bind(self, key: str, binding_name: str) -> Binding:
        return self.registry.bind(key, self.name, binding_name)

    def bind_many(self, keys: Iterable[str], binding_name: str) -> Binding:
        return self.registry.bind_many(keys, self.name, binding_name)


class BindingRegistry:
    """Owns every state's bindings plus the active-state pointer.

    A ``(state, binding)`` name pair always resolves to the same ``Binding``
    instance; bindings are created on first reference and live until the
    registry is cleared or its tree replaced.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._states: Dict[str, Dict[str, Binding]] = {}
        self._active_state: Optional[str] = None
        self._logger_name = logger_name
        self._revision = 0

    @property
    def active_state(self) -> Optional[str]:
        return self._active_state

    def revision(self) -> int:
        return self._revision

    def has_state(self, state_name: str) -> bool:
        return state_name in self._states

    def has_binding(self, state_name: str, binding_name: str) -> bool:
        bindings = self._states.get(state_name)
        return bindings is not None and binding_name in bindings

    def ensure_binding(
        self, state_name: str, binding_name: str
    ) -> tuple[Binding, bool]:
        """Return the binding at ``(state_name, binding_name)`` and whether it is new."""

        bindings = self._states.get(state_name)
        if bindings is not None:
            existing = bindings.get(binding_name)
            if existing is not None:
                return existing, False

        with span(
            "bindings::create",
            logger_name=self._logger_name,
            component="bindings",
            metadata={"state": state_name, "binding": binding_name},
        ):
            if bindings is None:
                bindings = self._states.setdefault(state_name, {})
            binding = Binding()
            bindings[binding_name] = binding
            self._touch()
            return binding, True

    def get_or_create_binding(self, state_name: str, binding_name: str) -> Binding:
        binding, _ = self.ensure_binding(state_name, binding_name)
        return binding

    def bind(self, key: str, state_name: str, binding_name: str) -> Binding:
        return self.get_or_create_binding(state_name, binding_name).bind(key)

    def bind_many(
        self, keys: Iterable[str], state_name: str, binding_name: str
    ) -> Binding:
        return self.get_or_create_binding(state_name, binding_name).bind_many(keys)

    def state(self, state_name: str) -> StateScope:
        return StateScope(self, state_name)

    def set_active_state(self, state_name: Optional[str]) -> None:
        previous = self._active_state
        self._active_state = state_name
        if previous != state_name:
            telemetry.record_event(
                "state.switch",
                level="debug",
                data={"state": state_name, "previous": previous},
                logger_name=self._logger_name,
            )

    def iter_states(self) -> Iterator[str]:
        yield from tuple(self._states)

    def iter_bindings(
        self, state_name: Optional[str] = None
    ) -> Iterator[tuple[str, str, Binding]]:
        """Yield ``(state, binding_name, binding)`` triples, optionally for one state."""

        if state_name is not None:
            names = (state_name,) if state_name in self._states else ()
        else:
            names = tuple(self._states)
        for name in names:
            for binding_name, binding in tuple(self._states[name].items()):
                yield name, binding_name, binding

    def matching_bindings(self, key: str) -> list[Binding]:
        """Bindings containing ``key`` in the active state and in ``"all"``.

        The result is a fresh list so callbacks may mutate the registry while
        the caller iterates it.
        """

        matches: list[Binding] = []
        for state_name in dict.fromkeys((self._active_state, ALL_STATE)):
            if state_name is None:
                continue
            for binding in tuple(self._states.get(state_name, {}).values()):
                if binding.has_key(key):
                    matches.append(binding)
        return matches

    def tree(self) -> Dict[str, Dict[str, Binding]]:
        """Shallow copy of the state tree; the bindings themselves are shared."""

        return {name: dict(bindings) for name, bindings in self._states.items()}

    def snapshot(self) -> Dict[str, Dict[str, Dict[str, Any]]]:
        return {
            state_name: {
                binding_name: binding.snapshot()
                for binding_name, binding in bindings.items()
            }
            for state_name, bindings in self._states.items()
        }

    def replace_states(self, states: Mapping[str, Mapping[str, Binding]]) -> None:
        with span(
            "bindings::replace_states",
            logger_name=self._logger_name,
            component="bindings",
            metadata={"states": len(states)},
        ):
            self._states = {name: dict(bindings) for name, bindings in states.items()}
            self._touch()

    def clear(self) -> None:
        self._states = {}
        self._active_state = None
        self._touch()

    def stats(self) -> RegistryStats:
        return RegistryStats(
            state_count=len(self._states),
            binding_count=sum(len(bindings) for bindings in self._states.values()),
            states=tuple(sorted(self._states)),
            active_state=self._active_state,
        )

    def _touch(self) -> None:
        self._revision += 1


__all__ = [
    "ALL_STATE",
    "BindingRegistry",
    "RegistryStats",
    "StateScope",
]
