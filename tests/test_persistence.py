from __future__ import annotations

import json
from pathlib import Path

import pytest

from ezcontrols.bindings import Binding, BindingRegistry
from ezcontrols.persistence import (
    BindingDataError,
    JsonBindingCodec,
    from_document,
    load_states,
    save_states,
    to_document,
)


def make_registry() -> BindingRegistry:
    registry = BindingRegistry()
    jump = registry.bind_many(["space", "w"], "gameplay", "jump")
    jump.on_press(lambda x, y: None)
    jump.on_release(lambda x, y: None)
    registry.bind("enter", "menu", "confirm")
    return registry


def test_to_document_drops_callbacks() -> None:
    document = to_document(make_registry().tree())

    assert document == {
        "gameplay": {"jump": {"keys": ["space", "w"]}},
        "menu": {"confirm": {"keys": ["enter"]}},
    }


def test_serialized_text_has_only_keys() -> None:
    text = JsonBindingCodec().serialize(make_registry().tree())

    assert json.loads(text) == {
        "gameplay": {"jump": {"keys": ["space", "w"]}},
        "menu": {"confirm": {"keys": ["enter"]}},
    }
    assert "callbacks" not in text


def test_round_trip_preserves_names_and_keys_but_not_callbacks() -> None:
    codec = JsonBindingCodec()
    registry = make_registry()

    states = codec.deserialize(codec.serialize(registry.tree()))

    assert sorted(states) == ["gameplay", "menu"]
    jump = states["gameplay"]["jump"]
    assert jump.keys == ("space", "w")
    assert jump.press_callbacks == ()
    assert jump.release_callbacks == ()
    assert jump is not registry.get_or_create_binding("gameplay", "jump")


def test_save_then_load_into_fresh_registry(tmp_path: Path) -> None:
    registry = BindingRegistry()
    registry.bind("space", "gameplay", "jump").on_press(lambda x, y: None)
    path = tmp_path / "controls.json"

    save_states(registry, path, JsonBindingCodec())
    fresh = BindingRegistry()
    load_states(fresh, path, JsonBindingCodec())

    loaded = fresh.get_or_create_binding("gameplay", "jump")
    assert loaded.keys == ("space",)
    assert loaded.press_callbacks == ()
    assert fresh.stats().binding_count == 1


def test_load_replaces_entire_tree(tmp_path: Path) -> None:
    path = tmp_path / "controls.json"
    path.write_text(json.dumps({"menu": {"back": {"keys": ["escape"]}}}))
    registry = make_registry()

    load_states(registry, path, JsonBindingCodec())

    assert not registry.has_state("gameplay")
    assert registry.get_or_create_binding("menu", "back").keys == ("escape",)


def test_invalid_json_fails_loudly() -> None:
    with pytest.raises(BindingDataError, match="invalid JSON"):
        JsonBindingCodec().deserialize("{not json")


@pytest.mark.parametrize(
    ("document", "path"),
    [
        ([], "$"),
        ({"gameplay": ["jump"]}, "$.gameplay"),
        ({"gameplay": {"jump": "space"}}, "$.gameplay.jump"),
        ({"gameplay": {"jump": {"keys": "space"}}}, "$.gameplay.jump.keys"),
        ({"gameplay": {"jump": {"keys": ["space", 3]}}}, "$.gameplay.jump.keys"),
        ({"gameplay": {"jump": {"keys": [""]}}}, "$.gameplay.jump.keys"),
    ],
)
def test_malformed_documents_report_path(document, path) -> None:
    with pytest.raises(BindingDataError) as excinfo:
        from_document(document)

    assert excinfo.value.path == path
    assert isinstance(excinfo.value, ValueError)


def test_missing_keys_field_means_no_keys() -> None:
    states = from_document({"gameplay": {"jump": {"extra": True}}})

    assert states["gameplay"]["jump"].keys == ()


def test_failed_load_leaves_registry_untouched(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text('{"gameplay": {"jump": {"keys": [1]}}}')
    registry = make_registry()
    jump = registry.get_or_create_binding("gameplay", "jump")

    with pytest.raises(BindingDataError):
        load_states(registry, path, JsonBindingCodec())

    assert registry.get_or_create_binding("gameplay", "jump") is jump
    assert len(jump.press_callbacks) == 1


def test_missing_file_propagates_os_error(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_states(BindingRegistry(), tmp_path / "missing.json", JsonBindingCodec())


def test_codec_formatting_options() -> None:
    states = {"b": {"x": Binding.with_keys(["k"])}, "a": {}}

    compact = JsonBindingCodec(indent=None, sort_keys=True).serialize(states)

    assert compact == '{"a": {}, "b": {"x": {"keys": ["k"]}}}'
