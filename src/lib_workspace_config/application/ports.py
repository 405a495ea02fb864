"""Application-layer ports describing the engine's seams.

Purpose
-------
Define the structural contracts that both sides of the engine satisfy so
harness code can depend on abstractions instead of concrete classes.

Contents
--------
* :class:`WorkspaceConfiguration` – the read/write surface code under test
  sees; implemented by :class:`LayeredConfiguration` and
  :class:`ScopedConfigurationView`.
* :class:`SnapshotLoader` – parses a snapshot fixture file into a mapping.
* :class:`ScopeDescriptorAdapter` – extracts an optional language id from a
  caller-supplied scope descriptor.

System Role
-----------
These protocols keep the composition root (:mod:`lib_workspace_config.core`)
and the CLI independent of individual adapters.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable

from ..domain.scopes import TargetArgument


@runtime_checkable
class WorkspaceConfiguration(Protocol):
    """Settings surface mirrored from the editor API.

    ``inspect`` is part of the surface but implementations raise
    :class:`~lib_workspace_config.domain.errors.UnsupportedOperation`.
    """

    def get(self, section: str, default: Any = None) -> Any:
        """Return the setting at *section* or *default*."""

    def has(self, section: str) -> bool:
        """Return ``True`` when *section* is present in any consulted scope."""

    def update(
        self,
        section: str,
        value: Any,
        target: TargetArgument = None,
        override_in_language: bool | None = False,
    ) -> None:
        """Write *value* at *section* in the resolved scope."""

    def inspect(self, section: str) -> Any:
        """Per-scope introspection; not supported."""


@runtime_checkable
class SnapshotLoader(Protocol):
    """Parse a structured snapshot file into a mapping."""

    def load(self, path: str) -> Mapping[str, object]:
        """Read *path* and return a mapping or raise ``InvalidFormat`` / ``NotFound``."""


@runtime_checkable
class ScopeDescriptorAdapter(Protocol):
    """Translate an editor scope descriptor into an optional language id."""

    def language_id(self, scope: object | None) -> str | None:
        """Return the descriptor's language id or raise ``UnsupportedScopeDescriptor``."""
