"""Structured snapshot file loaders.

Purpose
-------
Read configuration snapshot fixtures from disk and hand back plain mappings
for :func:`lib_workspace_config.application.snapshot.configuration_from_snapshot`.
Adapters are small wrappers around ``tomllib``/``json``/``yaml.safe_load`` so
error handling and observability live in one place.

Contents
--------
* :class:`BaseFileLoader` – shared helpers for reading files and validating
  mapping outputs.
* :class:`TOMLFileLoader` – TOML fixtures.
* :class:`JSONFileLoader` – JSON fixtures (also the format written by
  :func:`lib_workspace_config.application.snapshot.dumps`).
* :class:`YAMLFileLoader` – optional YAML fixtures (only when PyYAML is
  installed).
* :data:`FILE_LOADERS` / :func:`loader_for` – suffix dispatch.

System Role
-----------
Invoked by :func:`lib_workspace_config.core.load_configuration` and by the CLI.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Mapping

try:  # Python >= 3.11
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for <3.11
    import tomli as tomllib  # type: ignore[no-redef]

from ...application.ports import SnapshotLoader
from ...domain.errors import InvalidFormat, NotFound
from ...observability import log_debug, log_error

try:
    import yaml  # type: ignore[import-untyped]
except ModuleNotFoundError:  # pragma: no cover - optional dependency
    yaml = None  # type: ignore[assignment]


class BaseFileLoader:
    """Common utilities shared by the structured file loaders."""

    def _read(self, path: str) -> bytes:
        """Read *path* as bytes, raising :class:`NotFound` when the file is missing."""

        file_path = Path(path)
        if not file_path.is_file():
            raise NotFound(f"Snapshot file not found: {path}")
        payload = file_path.read_bytes()
        log_debug("snapshot_file_read", scope=None, section=None, path=path, size=len(payload))
        return payload

    @staticmethod
    def _ensure_mapping(data: object, *, path: str) -> Mapping[str, object]:
        """Ensure *data* behaves like a mapping, otherwise raise ``InvalidFormat``.

        Examples
        --------
        >>> BaseFileLoader._ensure_mapping({"configuration": {}}, path="demo")
        {'configuration': {}}
        >>> BaseFileLoader._ensure_mapping(42, path="demo")
        Traceback (most recent call last):
        ...
        lib_workspace_config.domain.errors.InvalidFormat: File demo did not produce a mapping
        """

        if not isinstance(data, Mapping):
            raise InvalidFormat(f"File {path} did not produce a mapping")
        return data


class TOMLFileLoader(BaseFileLoader):
    """Load TOML snapshots using the standard library parser.

    TOML has no null; use JSON or YAML fixtures for ``None`` settings.
    """

    def load(self, path: str) -> Mapping[str, object]:
        try:
            text = self._read(path).decode("utf-8")
            data = tomllib.loads(text)
        except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
            log_error("snapshot_file_invalid", scope=None, section=None, path=path, format="toml", error=str(exc))
            raise InvalidFormat(f"Invalid TOML in {path}: {exc}") from exc
        result = self._ensure_mapping(data, path=path)
        log_debug("snapshot_file_loaded", scope=None, section=None, path=path, format="toml")
        return result


class JSONFileLoader(BaseFileLoader):
    """Load JSON snapshots."""

    def load(self, path: str) -> Mapping[str, object]:
        """Return mapping extracted from JSON file at *path*.

        Examples
        --------
        >>> from tempfile import NamedTemporaryFile
        >>> tmp = NamedTemporaryFile('w', suffix='.json', delete=False, encoding='utf-8')
        >>> _ = tmp.write('{"configuration": {"global": {"one": 111}}}')
        >>> tmp.close()
        >>> JSONFileLoader().load(tmp.name)["configuration"]["global"]["one"]
        111
        >>> Path(tmp.name).unlink()
        """

        try:
            data = json.loads(self._read(path))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            log_error("snapshot_file_invalid", scope=None, section=None, path=path, format="json", error=str(exc))
            raise InvalidFormat(f"Invalid JSON in {path}: {exc}") from exc
        result = self._ensure_mapping(data, path=path)
        log_debug("snapshot_file_loaded", scope=None, section=None, path=path, format="json")
        return result


class YAMLFileLoader(BaseFileLoader):
    """Load YAML snapshots when PyYAML is available.

    Raises
    ------
    NotFound
        When PyYAML is not installed.
    """

    def load(self, path: str) -> Mapping[str, object]:
        if yaml is None:
            raise NotFound("PyYAML is required for YAML snapshot support")
        try:
            data = yaml.safe_load(self._read(path))
        except yaml.YAMLError as exc:
            log_error("snapshot_file_invalid", scope=None, section=None, path=path, format="yaml", error=str(exc))
            raise InvalidFormat(f"Invalid YAML in {path}: {exc}") from exc
        if data is None:
            data = {}
        result = self._ensure_mapping(data, path=path)
        log_debug("snapshot_file_loaded", scope=None, section=None, path=path, format="yaml")
        return result


# Supported snapshot loaders keyed by suffix.
FILE_LOADERS: dict[str, SnapshotLoader] = {
    ".toml": TOMLFileLoader(),
    ".json": JSONFileLoader(),
    ".yaml": YAMLFileLoader(),
    ".yml": YAMLFileLoader(),
}


def loader_for(path: str) -> SnapshotLoader:
    """Return the loader registered for the suffix of *path*.

    Raises
    ------
    InvalidFormat
        When the suffix is not supported.
    """

    suffix = Path(path).suffix.lower()
    try:
        return FILE_LOADERS[suffix]
    except KeyError as exc:
        raise InvalidFormat(
            f"Unsupported snapshot file type {suffix or '<none>'!r} for {path}; use .json, .toml, .yaml or .yml"
        ) from exc
