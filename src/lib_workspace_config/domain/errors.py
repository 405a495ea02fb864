"""Domain-level exception hierarchy.

Purpose
-------
Expose the stable error taxonomy shared by the settings engine, the adapters,
and consuming test harnesses. The hierarchy lives in the domain layer so the
inner layers never depend on adapter code.

Contents
--------
* :class:`ConfigError` – umbrella base class for all configuration-related
  issues.
* :class:`UnsupportedOperation` – the caller asked for behaviour the engine
  deliberately does not implement (``inspect``, legacy language overrides).
* :class:`UnsupportedScopeDescriptor` – a scope descriptor did not carry a
  recognisable ``languageId``.
* :class:`InvalidPath` / :class:`PathConflict` – malformed dotted sections and
  writes that would descend through a leaf value.
* :class:`InvalidFormat` – snapshot payloads or fixture files that cannot be
  decoded.
* :class:`NotFound` – raised when an expected snapshot file is missing.

System Role
-----------
Every failure surfaced by :mod:`lib_workspace_config` derives from
:class:`ConfigError`, so harnesses can catch one family and halt the current
interaction sequence.
"""

from __future__ import annotations


class ConfigError(Exception):
    """Base type for all exceptions emitted by ``lib_workspace_config``.

    Why
    ----
    Provide a single catch-all type for consumers that do not need fine-grained
    handling.
    """


class UnsupportedOperation(ConfigError):
    """Raised when an operation exists on the interface but is not implemented.

    Typical Sources
    ---------------
    ``inspect`` on configurations and scoped views, and
    ``update(..., override_in_language=True)`` on a configuration created with
    ``language_overrides=False``.
    """


class UnsupportedScopeDescriptor(ConfigError):
    """Raised when a scope descriptor is present but carries no ``languageId``.

    The message always includes ``repr`` of the offending descriptor.
    """


class InvalidPath(ConfigError):
    """Signals a dotted section that cannot address a store location.

    Why
    ----
    Writes need at least one segment for the leaf key, and segments must be
    non-empty strings.
    """


class PathConflict(InvalidPath):
    """Raised when a write would have to descend through an existing leaf value."""


class InvalidFormat(ConfigError):
    """Raised when a snapshot payload cannot be decoded into configuration state.

    Typical Sources
    ---------------
    The snapshot codec and the structured file loaders (:mod:`tomllib`,
    :mod:`json`, :mod:`yaml`).
    """


class NotFound(ConfigError):
    """Represents a missing snapshot file or an unavailable optional parser."""
