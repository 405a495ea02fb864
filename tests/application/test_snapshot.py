from __future__ import annotations

import json

import pytest

from lib_workspace_config import (
    ConfigurationScope,
    InvalidFormat,
    LayeredConfiguration,
    configuration_from_snapshot,
    dumps,
    loads,
    snapshot_of,
)

SNAPSHOT = {
    "configuration": {
        "global": {"one": 111, "editor": {"tabSize": 4}},
        "workspace_folder": {"stubber": {"other": "value"}},
    },
    "language_configuration": {"valyrian": {"workspace": {"one": 222}}},
}


def test_snapshot_preserves_scopes_and_overlays() -> None:
    cfg = configuration_from_snapshot(SNAPSHOT)

    assert snapshot_of(cfg) == SNAPSHOT
    assert cfg.scopes() == (ConfigurationScope.GLOBAL, ConfigurationScope.WORKSPACE_FOLDER)
    assert cfg.language_ids() == ("valyrian",)


def test_empty_inputs_build_empty_configuration() -> None:
    empty = {"configuration": {}, "language_configuration": {}}
    assert snapshot_of(configuration_from_snapshot(None)) == empty
    assert snapshot_of(configuration_from_snapshot({})) == empty
    assert snapshot_of(LayeredConfiguration()) == empty


def test_snapshot_is_detached() -> None:
    source = {"configuration": {"global": {"list": [1]}}}
    cfg = configuration_from_snapshot(source)
    source["configuration"]["global"]["list"].append(2)
    snapshot_of(cfg)["configuration"]["global"]["list"].append(3)
    assert cfg.get("list") == [1]


def test_empty_overlay_survives_round_trip() -> None:
    cfg = configuration_from_snapshot({"language_configuration": {"go": {}}})
    assert cfg.has_overlay("go")
    assert snapshot_of(cfg)["language_configuration"] == {"go": {}}


def test_json_text_round_trip() -> None:
    cfg = configuration_from_snapshot(SNAPSHOT)
    text = dumps(cfg)
    assert json.loads(text) == SNAPSHOT
    assert loads(text) == cfg


def test_loads_passes_legacy_flag() -> None:
    cfg = loads(json.dumps(SNAPSHOT), language_overrides=False)
    assert cfg.language_overrides is False
    assert cfg.get("one", language_id="valyrian") == 111


@pytest.mark.parametrize(
    ("payload", "message"),
    [
        ({"settings": {}}, "Unknown snapshot keys: settings"),
        ({"configuration": {"user": {}}}, "Unknown scope 'user'"),
        ({"configuration": {"global": 5}}, "must be a mapping"),
        ({"configuration": []}, "must be a mapping of scopes"),
        ({"language_configuration": ["go"]}, "must be a mapping of language ids"),
        ({"language_configuration": {"go": {"folder": {}}}}, "Unknown scope 'folder'"),
    ],
)
def test_invalid_snapshots_are_rejected(payload, message: str) -> None:
    with pytest.raises(InvalidFormat, match=message):
        configuration_from_snapshot(payload)


def test_non_mapping_snapshot_is_rejected() -> None:
    with pytest.raises(InvalidFormat, match="Snapshot must be a mapping, got list"):
        configuration_from_snapshot([])  # type: ignore[arg-type]


def test_loads_rejects_bad_json() -> None:
    with pytest.raises(InvalidFormat, match="Invalid snapshot JSON"):
        loads("{not json")


def test_record_values_survive_json_round_trip() -> None:
    cfg = LayeredConfiguration()
    cfg.update("launch", {"program": "main.py", "args": ["-v"]}, ConfigurationScope.WORKSPACE)

    snapshot = snapshot_of(cfg)
    reloaded = loads(dumps(cfg))

    assert snapshot["configuration"]["workspace"]["launch"] == {
        "type": "@LeafRecord",
        "value": {"program": "main.py", "args": ["-v"]},
    }
    assert reloaded == cfg
    assert reloaded.get("launch") == {"program": "main.py", "args": ["-v"]}
    assert reloaded.has("launch.program") is False
