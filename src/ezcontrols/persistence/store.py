"""File-backed save/load for a ``BindingRegistry``."""

from __future__ import annotations

from pathlib import Path

from ezcontrols.bindings import BindingRegistry
from ezcontrols.runtime import telemetry

from .codec import BindingCodec


def save_states(
    registry: BindingRegistry,
    path: str | Path,
    codec: BindingCodec,
    *,
    logger_name: str | None = None,
) -> Path:
    target = Path(path)
    states = registry.tree()
    target.write_text(codec.serialize(states), encoding="utf-8")
    telemetry.record_event(
        "persistence.save",
        data={"path": str(target), "states": len(states)},
        logger_name=logger_name,
    )
    return target


def load_states(
    registry: BindingRegistry,
    path: str | Path,
    codec: BindingCodec,
    *,
    logger_name: str | None = None,
) -> None:
    """Replace the registry tree with the one stored at ``path``.

    Decoding happens before the registry is touched, so a malformed file
    leaves the current bindings in place.
    """

    source = Path(path)
    states = codec.deserialize(source.read_text(encoding="utf-8"))
    registry.replace_states(states)
    telemetry.record_event(
        "persistence.load",
        data={"path": str(source), "states": len(states)},
        logger_name=logger_name,
    )


__all__ = ["save_states", "load_states"]
