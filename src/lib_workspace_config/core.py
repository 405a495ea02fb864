"""Composition root for ``lib_workspace_config``.

Purpose
-------
Provide the entry points that wire the configuration engine to its adapters:
scope descriptors, snapshot fixture files, and JSON persistence. Consumers
(test harnesses, the CLI) use these helpers rather than reaching into adapter
modules directly.

Contents
--------
* :func:`get_configuration` – editor-style ``getConfiguration(section, scope)``.
* :func:`load_configuration` – build a configuration from a snapshot file.
* :func:`dump_configuration` – write a configuration snapshot as JSON.

System Role
-----------
Connects :mod:`lib_workspace_config.application` with the adapters while
emitting structured observability signals. It is the canonical place to wire
new snapshot formats or scope adapters.
"""

from __future__ import annotations

from pathlib import Path

from .adapters.file_loaders.structured import loader_for
from .adapters.scope.default import DefaultScopeDescriptorAdapter
from .application.configuration import LayeredConfiguration
from .application.ports import ScopeDescriptorAdapter
from .application.snapshot import configuration_from_snapshot, dumps
from .application.view import ScopedConfigurationView
from .observability import log_info

_SCOPE_ADAPTER: ScopeDescriptorAdapter = DefaultScopeDescriptorAdapter()


def get_configuration(
    configuration: LayeredConfiguration,
    section: str | None = None,
    scope: object | None = None,
    *,
    scope_adapter: ScopeDescriptorAdapter | None = None,
) -> ScopedConfigurationView:
    """Return a view of *configuration* rooted at *section* for *scope*.

    Why
    ----
    Mirrors the editor's ``workspace.getConfiguration(section, scope)`` so that
    code under test receives the same kind of object it would in production.

    Parameters
    ----------
    configuration:
        The session's configuration instance.
    section:
        Dotted prefix for the view; ``None`` or ``""`` gives the root.
    scope:
        Optional scope descriptor carrying a ``languageId``.
    scope_adapter:
        Override for descriptor interpretation.

    Raises
    ------
    UnsupportedScopeDescriptor
        When *scope* is present but carries no recognisable ``languageId``.

    Examples
    --------
    >>> cfg = LayeredConfiguration()
    >>> get_configuration(cfg, "stubber").update("some-key", "some-value")
    >>> cfg.get("stubber")
    {'some-key': 'some-value'}
    >>> get_configuration(cfg, "stubber", {"languageId": "go"}).language_id
    'go'
    """

    adapter = scope_adapter or _SCOPE_ADAPTER
    language_id = adapter.language_id(scope)
    return configuration.scoped(section or "", language_id)


def load_configuration(path: str | Path, *, language_overrides: bool = True) -> LayeredConfiguration:
    """Build a configuration from the snapshot file at *path*.

    Supported suffixes are ``.json``, ``.toml``, ``.yaml`` and ``.yml``.

    Raises
    ------
    NotFound
        Missing file (or PyYAML unavailable for YAML files).
    InvalidFormat
        Unsupported suffix, undecodable content, or a malformed snapshot.
    """

    location = str(path)
    data = loader_for(location).load(location)
    configuration = configuration_from_snapshot(data, language_overrides=language_overrides)
    log_info(
        "snapshot_file_applied",
        scope=None,
        section=None,
        path=location,
        languages=len(configuration.language_ids()),
    )
    return configuration


def dump_configuration(configuration: LayeredConfiguration, path: str | Path, *, indent: int | None = 2) -> Path:
    """Write *configuration* as a JSON snapshot to *path* and return the path."""

    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(dumps(configuration, indent=indent) + "\n", encoding="utf-8")
    log_info("snapshot_file_written", scope=None, section=None, path=str(target))
    return target


__all__ = [
    "get_configuration",
    "load_configuration",
    "dump_configuration",
]
