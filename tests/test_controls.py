from __future__ import annotations

import json
from pathlib import Path
from typing import List

import pytest

import ezcontrols
from ezcontrols import ALL_STATE, BindingDataError, Controls
from ezcontrols.runtime import telemetry


def test_package_metadata() -> None:
    assert ezcontrols.__version__ == "0.1.0"
    assert ezcontrols.__description__


def test_controls_end_to_end_dispatch() -> None:
    controls = Controls()
    fired: List[str] = []
    controls.bind("space", "gameplay", "jump").on_press(
        lambda x, y: fired.append("jump")
    )
    controls.state("menu").bind("enter", "confirm").on_press(
        lambda x, y: fired.append("confirm")
    )

    controls.set_active_state("menu")
    controls.handle_key_press("space")
    controls.handle_key_press("enter")
    controls.set_active_state("gameplay")
    controls.handle_key_press("space")
    controls.handle_key_press("space", is_repeat=True)

    assert fired == ["confirm", "jump"]
    assert controls.active_state == "gameplay"


def test_controls_get_or_create_binding_is_idempotent() -> None:
    controls = Controls()

    assert controls.get_or_create_binding("s", "b") is controls.get_or_create_binding(
        "s", "b"
    )


def test_mouse_is_preregistered() -> None:
    controls = Controls()
    clicks: List[tuple] = []
    controls.mouse.left_button.on_press(lambda x, y: clicks.append((x, y)))
    controls.set_active_state("anything")

    controls.handle_pointer_press(4, 2, "l")
    controls.handle_pointer_release(4, 2, "l")

    assert clicks == [(4, 2)]
    assert controls.registry.has_binding(ALL_STATE, "mouse_l")


def test_pointer_move_reaches_mouse_callbacks() -> None:
    controls = Controls()
    moves: List[tuple] = []
    controls.mouse.on_move(lambda x, y, dx, dy: moves.append((x, y, dx, dy)))

    controls.handle_pointer_move(1, 2, 3, 4)

    assert moves == [(1, 2, 3, 4)]


def test_save_and_load_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "bindings.json"
    controls = Controls()
    controls.bind("space", "gameplay", "jump").on_press(lambda x, y: None)
    controls.save(path)

    fresh = Controls()
    fresh.load(path)

    jump = fresh.get_or_create_binding("gameplay", "jump")
    assert jump.keys == ("space",)
    assert jump.press_callbacks == ()
    assert fresh.mouse.left_button.keys == ("mouse_l",)


def test_load_keeps_motion_callbacks_and_reattaches_mouse(tmp_path: Path) -> None:
    path = tmp_path / "bindings.json"
    controls = Controls()
    moves: List[tuple] = []
    controls.mouse.on_move(lambda x, y, dx, dy: moves.append((x, y)))
    controls.save(path)

    controls.load(path)
    clicks: List[tuple] = []
    controls.mouse.left_button.on_press(lambda x, y: clicks.append((x, y)))
    controls.handle_pointer_press(1, 1, 1)
    controls.handle_pointer_move(2, 2, 0, 0)

    assert clicks == [(1, 1)]
    assert moves == [(2, 2)]


def test_dumps_loads_and_parse() -> None:
    controls = Controls()
    controls.bind_many(["a", "left"], "gameplay", "move_left")

    text = controls.dumps()
    other = Controls()
    other.loads(text)
    third = Controls()
    third.parse({"gameplay": {"move_left": {"keys": ["a", "left"]}}})

    assert other.get_or_create_binding("gameplay", "move_left").keys == ("a", "left")
    assert third.get_or_create_binding("gameplay", "move_left").keys == ("a", "left")


def test_parse_rejects_bad_shape() -> None:
    controls = Controls()

    with pytest.raises(BindingDataError):
        controls.parse({"gameplay": {"jump": {"keys": [None]}}})


def test_registration_errors_surface_immediately() -> None:
    controls = Controls()
    binding = controls.bind("space", "gameplay", "jump")

    with pytest.raises(TypeError):
        binding.on_press(object())  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        controls.bind(["a"], "gameplay", "jump")  # type: ignore[arg-type]


GAMEPLAY_ONLY = {"gameplay": {"jump": {"keys": ["space"]}}}


@pytest.mark.parametrize("source", ["file", "text", "document"])
def test_mouse_slots_survive_replacing_every_state(
    tmp_path: Path, source: str
) -> None:
    controls = Controls()
    if source == "file":
        path = tmp_path / "bindings.json"
        path.write_text(json.dumps(GAMEPLAY_ONLY), encoding="utf-8")
        controls.load(path)
    elif source == "text":
        controls.loads(json.dumps(GAMEPLAY_ONLY))
    else:
        controls.parse(GAMEPLAY_ONLY)

    clicks: List[tuple] = []
    controls.state(ALL_STATE).binding("mouse_l").on_press(
        lambda x, y: clicks.append((x, y))
    )
    controls.handle_pointer_press(0, 0, 1)

    assert clicks == [(0, 0)]
    assert controls.registry.has_binding(ALL_STATE, "mouse_wd")


def test_loads_and_parse_record_persistence_events(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    events: List[str] = []
    monkeypatch.setattr(
        telemetry, "record_event", lambda name, **kwargs: events.append(name)
    )
    controls = Controls()

    controls.loads(json.dumps(GAMEPLAY_ONLY))
    controls.parse(GAMEPLAY_ONLY)

    assert events == ["persistence.loads", "persistence.parse"]


def test_key_ids_are_matched_verbatim() -> None:
    controls = Controls()
    fired: List[str] = []
    controls.bind(" space", "gameplay", "padded").on_press(
        lambda x, y: fired.append("padded")
    )
    controls.bind(" ", "gameplay", "blank").on_press(
        lambda x, y: fired.append("blank")
    )
    controls.set_active_state("gameplay")

    controls.handle_key_press(" space")
    controls.handle_key_press(" ")
    controls.handle_key_press("space")

    assert fired == ["padded", "blank"]
    restored = Controls()
    restored.loads(controls.dumps())
    assert restored.get_or_create_binding("gameplay", "padded").keys == (" space",)
