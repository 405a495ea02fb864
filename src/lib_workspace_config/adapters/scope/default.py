"""Scope-descriptor adapter.

Purpose
-------
Editors accept a "scope" argument when handing out configuration: a document,
a workspace folder, a URI, or a ``{uri, languageId}`` record. Only the
language identifier matters to the settings engine. This adapter extracts it
and refuses descriptors it cannot interpret instead of silently ignoring them.

Contents
--------
* :class:`DefaultScopeDescriptorAdapter` – the adapter implementation.
* :func:`language_id_from_scope` – module-level convenience wrapper.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Final

from ...domain.errors import UnsupportedScopeDescriptor

_MAPPING_KEYS: Final[tuple[str, ...]] = ("languageId", "language_id")
_ATTRIBUTE_NAMES: Final[tuple[str, ...]] = ("languageId", "language_id")


class DefaultScopeDescriptorAdapter:
    """Resolve language ids from mappings or attribute-bearing objects.

    Examples
    --------
    >>> adapter = DefaultScopeDescriptorAdapter()
    >>> adapter.language_id(None) is None
    True
    >>> adapter.language_id({"uri": "file:///a.go", "languageId": "go"})
    'go'
    >>> adapter.language_id(42)
    Traceback (most recent call last):
    ...
    lib_workspace_config.domain.errors.UnsupportedScopeDescriptor: Unsupported configuration scope descriptor (expected a languageId field): 42
    """

    def language_id(self, scope: object | None) -> str | None:
        """Return the language id carried by *scope*.

        ``None`` means "no scope". A present ``languageId`` whose value is
        ``None`` is accepted and also yields ``None``.

        Raises
        ------
        UnsupportedScopeDescriptor
            When *scope* is present but exposes no language id field, or the
            field is not a string.
        """

        if scope is None:
            return None
        found, value = _lookup(scope)
        if not found:
            raise UnsupportedScopeDescriptor(
                f"Unsupported configuration scope descriptor (expected a languageId field): {scope!r}"
            )
        if value is not None and not isinstance(value, str):
            raise UnsupportedScopeDescriptor(
                f"Configuration scope descriptor has a non-string languageId: {scope!r}"
            )
        return value


def _lookup(scope: object) -> tuple[bool, object]:
    if isinstance(scope, Mapping):
        for key in _MAPPING_KEYS:
            if key in scope:
                return True, scope[key]
        return False, None
    for name in _ATTRIBUTE_NAMES:
        if hasattr(scope, name):
            return True, getattr(scope, name)
    return False, None


_DEFAULT_ADAPTER: Final[DefaultScopeDescriptorAdapter] = DefaultScopeDescriptorAdapter()


def language_id_from_scope(scope: object | None) -> str | None:
    """Shortcut for :meth:`DefaultScopeDescriptorAdapter.language_id`."""

    return _DEFAULT_ADAPTER.language_id(scope)
