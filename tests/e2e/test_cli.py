"""End-to-end CLI coverage for the snapshot commands.

Each test writes a snapshot fixture, drives the Click group through
``CliRunner`` and checks the printed JSON, so the commands stay faithful to
the same precedence and write-target rules as the Python API.
"""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

import lib_cli_exit_tools

from lib_workspace_config import cli
from lib_workspace_config.domain.errors import InvalidPath, UnsupportedOperation

SNAPSHOT = {
    "configuration": {
        "global": {"one": 111, "other": {"place": {"v1": "un", "v3": "trois"}}},
        "workspace": {"one": 222},
    },
    "language_configuration": {"valyrian": {"workspace_folder": {"one": 333}}},
}


def _snapshot(tmp_path: Path, payload: dict = SNAPSHOT) -> Path:
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def _runner() -> CliRunner:
    """Return a fresh CLI runner so each test starts from a clean state."""

    return CliRunner()


def test_cli_get_resolves_precedence(tmp_path: Path) -> None:
    snapshot = _snapshot(tmp_path)
    result = _runner().invoke(cli.cli, ["get", "one", "--snapshot", str(snapshot)])
    assert result.exit_code == 0
    assert json.loads(result.output) == 222


def test_cli_get_with_prefix_and_language(tmp_path: Path) -> None:
    snapshot = _snapshot(tmp_path)
    runner = _runner()

    scoped = runner.invoke(cli.cli, ["get", "v1", "--snapshot", str(snapshot), "--prefix", "other.place"])
    language = runner.invoke(cli.cli, ["get", "one", "--snapshot", str(snapshot), "--language", "valyrian"])

    assert json.loads(scoped.output) == "un"
    assert json.loads(language.output) == 333


def test_cli_get_missing_uses_default(tmp_path: Path) -> None:
    snapshot = _snapshot(tmp_path)
    runner = _runner()

    missing = runner.invoke(cli.cli, ["get", "absent", "--snapshot", str(snapshot)])
    fallback = runner.invoke(cli.cli, ["get", "absent", "--snapshot", str(snapshot), "--default", '{"x": 1}'])

    assert json.loads(missing.output) is None
    assert json.loads(fallback.output) == {"x": 1}


def test_cli_get_rejects_bad_default_json() -> None:
    result = _runner().invoke(cli.cli, ["get", "absent", "--default", "{nope"])
    assert result.exit_code != 0
    assert "Not valid JSON" in result.output


def test_cli_get_indent_pretty_prints(tmp_path: Path) -> None:
    snapshot = _snapshot(tmp_path)
    result = _runner().invoke(cli.cli, ["get", "other", "--snapshot", str(snapshot), "--indent", "2"])
    assert result.exit_code == 0
    assert "\n  " in result.output
    assert json.loads(result.output) == {"place": {"v1": "un", "v3": "trois"}}


def test_cli_has(tmp_path: Path) -> None:
    snapshot = _snapshot(tmp_path)
    runner = _runner()

    present = runner.invoke(cli.cli, ["has", "other.place.v3", "--snapshot", str(snapshot)])
    absent = runner.invoke(cli.cli, ["has", "one.deeper", "--snapshot", str(snapshot)])

    assert present.output.strip() == "true"
    assert absent.output.strip() == "false"


def test_cli_update_inserts_into_scoped_section(tmp_path: Path) -> None:
    snapshot = _snapshot(tmp_path)
    result = _runner().invoke(
        cli.cli,
        ["update", "v2", "deux", "--snapshot", str(snapshot), "--prefix", "other.place", "--target", "global"],
    )
    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["configuration"]["global"]["other"]["place"] == {"v1": "un", "v2": "deux", "v3": "trois"}
    assert payload["configuration"]["workspace"] == {"one": 222}


def test_cli_update_defaults_to_workspace_folder_without_snapshot() -> None:
    result = _runner().invoke(cli.cli, ["update", "one", "111", "--json-value"])
    assert result.exit_code == 0
    assert json.loads(result.output) == {
        "configuration": {"workspace_folder": {"one": 111}},
        "language_configuration": {},
    }


def test_cli_update_legacy_boolean_target() -> None:
    result = _runner().invoke(cli.cli, ["update", "one", "111", "--target", "false"])
    assert json.loads(result.output)["configuration"] == {"workspace": {"one": "111"}}


def test_cli_update_language_overlay(tmp_path: Path) -> None:
    snapshot = _snapshot(tmp_path)
    result = _runner().invoke(
        cli.cli,
        [
            "update",
            "one",
            "444",
            "--json-value",
            "--snapshot",
            str(snapshot),
            "--language",
            "valyrian",
            "--override-in-language",
            "--target",
            "workspace",
        ],
    )
    assert result.exit_code == 0
    overlay = json.loads(result.output)["language_configuration"]["valyrian"]
    assert overlay == {"workspace_folder": {"one": 333}, "workspace": {"one": 444}}


def test_cli_update_writes_output_file(tmp_path: Path) -> None:
    snapshot = _snapshot(tmp_path)
    output = tmp_path / "out" / "result.json"
    result = _runner().invoke(
        cli.cli,
        ["update", "stubber.some-key", "some-value", "--snapshot", str(snapshot), "--output", str(output)],
    )
    assert result.exit_code == 0
    assert result.output.strip() == str(output)
    written = json.loads(output.read_text(encoding="utf-8"))
    assert written["configuration"]["workspace_folder"] == {"stubber": {"some-key": "some-value"}}


def test_cli_update_empty_section_fails() -> None:
    result = _runner().invoke(cli.cli, ["update", "", "value"])
    assert result.exit_code != 0
    assert isinstance(result.exception, InvalidPath)


def test_cli_inspect_is_unsupported() -> None:
    result = _runner().invoke(cli.cli, ["inspect", "one"])
    assert result.exit_code != 0
    assert isinstance(result.exception, UnsupportedOperation)


def test_cli_reads_toml_snapshots(tmp_path: Path) -> None:
    path = tmp_path / "snapshot.toml"
    path.write_text("[configuration.workspace_folder.stubber]\nother = \"value\"\n", encoding="utf-8")
    result = _runner().invoke(cli.cli, ["get", "stubber.other", "--snapshot", str(path)])
    assert result.exit_code == 0
    assert json.loads(result.output) == "value"


def test_cli_rejects_missing_snapshot(tmp_path: Path) -> None:
    result = _runner().invoke(cli.cli, ["get", "one", "--snapshot", str(tmp_path / "missing.json")])
    assert result.exit_code != 0
    assert "does not exist" in result.output


def test_cli_info_handles_missing_metadata(monkeypatch) -> None:
    """`cli info` must degrade gracefully when package metadata is unavailable."""

    def _raise_pkg_not_found(*_args, **_kwargs):
        raise cli.metadata.PackageNotFoundError()

    monkeypatch.setattr(cli.metadata, "metadata", _raise_pkg_not_found)
    result = _runner().invoke(cli.cli, ["info"])
    assert result.exit_code == 0
    assert "metadata unavailable" in result.output


def test_cli_main_restores_traceback_flag(tmp_path: Path) -> None:
    """`cli main` should restore lib_cli_exit_tools tracebacks after execution."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    snapshot = _snapshot(tmp_path)
    exit_code = cli.main(["--traceback", "has", "one", "--snapshot", str(snapshot)], restore_traceback=True)
    assert exit_code == 0
    assert getattr(lib_cli_exit_tools.config, "traceback", False) == previous_traceback


def test_cli_main_reports_failures_with_exit_code() -> None:
    exit_code = cli.main(["inspect", "one"])
    assert exit_code != 0


def test_cli_update_json_record_stays_opaque(tmp_path: Path) -> None:
    output = tmp_path / "result.json"
    runner = _runner()
    written = runner.invoke(
        cli.cli, ["update", "launch", '{"program": "main.py"}', "--json-value", "--output", str(output)]
    )
    assert written.exit_code == 0

    whole = runner.invoke(cli.cli, ["get", "launch", "--snapshot", str(output)])
    inner = runner.invoke(cli.cli, ["has", "launch.program", "--snapshot", str(output)])

    assert json.loads(whole.output) == {"program": "main.py"}
    assert inner.output.strip() == "false"
