"""Snapshot codec for :class:`LayeredConfiguration` state.

Purpose
-------
Convert the complete state of a configuration (base scopes plus every
language overlay) to and from plain, JSON-compatible mappings so harnesses can
seed a session, persist it to a side-channel file, and compare outcomes.

Contents
--------
* :data:`CONFIGURATION_KEY` / :data:`LANGUAGE_CONFIGURATION_KEY` – top-level
  snapshot keys.
* :func:`snapshot_of` – configuration → plain mapping.
* :func:`configuration_from_snapshot` – plain mapping → configuration.
* :func:`dumps` / :func:`loads` – JSON text helpers.

Snapshot Layout
---------------
``{"configuration": {"global": {...}, "workspace": {...}, "workspace_folder": {...}},
"language_configuration": {"<languageId>": {"global": {...}, ...}}}``.
Only scopes and overlays that exist are written; key order carries no meaning.
Inside a scope, nested mappings are sections. A setting whose value is itself a
record is written as ``{"type": "@LeafRecord", "value": {...}}`` so it reads
back as an opaque value.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, Final

from ..domain.errors import InvalidFormat
from ..domain.scopes import ConfigurationScope
from ..domain.store import NestedPathStore
from ..observability import log_debug, make_event
from .configuration import LayeredConfiguration

CONFIGURATION_KEY: Final[str] = "configuration"
LANGUAGE_CONFIGURATION_KEY: Final[str] = "language_configuration"


def snapshot_of(configuration: LayeredConfiguration) -> dict[str, Any]:
    """Return a detached plain-data rendering of *configuration*.

    Examples
    --------
    >>> cfg = LayeredConfiguration()
    >>> cfg.update("one", 111, True)
    >>> snapshot_of(cfg)
    {'configuration': {'global': {'one': 111}}, 'language_configuration': {}}
    """

    return {
        CONFIGURATION_KEY: _encode_stores(configuration, None),
        LANGUAGE_CONFIGURATION_KEY: {
            language_id: _encode_stores(configuration, language_id) for language_id in configuration.language_ids()
        },
    }


def configuration_from_snapshot(
    snapshot: Mapping[str, Any] | None,
    *,
    language_overrides: bool = True,
) -> LayeredConfiguration:
    """Build a fresh configuration from *snapshot*.

    ``None`` and ``{}`` both produce an empty configuration. Values are copied,
    so later writes never leak back into *snapshot*.

    Raises
    ------
    InvalidFormat
        Unknown top-level keys, unknown scope names, or non-mapping payloads.

    Examples
    --------
    >>> cfg = configuration_from_snapshot({"configuration": {"workspace_folder": {"stubber": {"other": "value"}}}})
    >>> cfg.get("stubber.other")
    'value'
    """

    if snapshot is None:
        snapshot = {}
    if not isinstance(snapshot, Mapping):
        raise InvalidFormat(f"Snapshot must be a mapping, got {type(snapshot).__name__}")
    unknown = set(snapshot) - {CONFIGURATION_KEY, LANGUAGE_CONFIGURATION_KEY}
    if unknown:
        raise InvalidFormat(f"Unknown snapshot keys: {', '.join(sorted(map(str, unknown)))}")

    base = _decode_stores(_section_payload(snapshot, CONFIGURATION_KEY), CONFIGURATION_KEY)
    languages_payload = _section_payload(snapshot, LANGUAGE_CONFIGURATION_KEY)
    if not isinstance(languages_payload, Mapping):
        raise InvalidFormat(f"{LANGUAGE_CONFIGURATION_KEY!r} must be a mapping of language ids")
    by_language = {
        str(language_id): _decode_stores(payload, f"{LANGUAGE_CONFIGURATION_KEY}.{language_id}")
        for language_id, payload in languages_payload.items()
    }
    log_debug(
        "snapshot_loaded",
        **make_event(None, None, {"scopes": len(base), "languages": len(by_language)}),
    )
    return LayeredConfiguration(base, by_language, language_overrides=language_overrides)


def dumps(configuration: LayeredConfiguration, *, indent: int | None = 2) -> str:
    """Serialise *configuration* to JSON text."""

    return json.dumps(snapshot_of(configuration), indent=indent, ensure_ascii=False)


def loads(text: str | bytes, *, language_overrides: bool = True) -> LayeredConfiguration:
    """Parse JSON *text* produced by :func:`dumps` back into a configuration."""

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidFormat(f"Invalid snapshot JSON: {exc}") from exc
    return configuration_from_snapshot(payload, language_overrides=language_overrides)


def _section_payload(snapshot: Mapping[str, Any], key: str) -> Any:
    payload = snapshot.get(key)
    return {} if payload is None else payload


def _encode_stores(configuration: LayeredConfiguration, language_id: str | None) -> dict[str, Any]:
    encoded: dict[str, Any] = {}
    for scope in configuration.scopes(language_id):
        store = configuration.store(scope, language_id)
        if store is not None:
            encoded[scope.value] = store.to_snapshot()
    return encoded


def _decode_stores(payload: Any, where: str) -> dict[ConfigurationScope, NestedPathStore]:
    if not isinstance(payload, Mapping):
        raise InvalidFormat(f"{where!r} must be a mapping of scopes")
    stores: dict[ConfigurationScope, NestedPathStore] = {}
    for key, data in payload.items():
        scope = _scope_from_key(key, where)
        if not isinstance(data, Mapping):
            raise InvalidFormat(f"{where}.{key} must be a mapping, got {type(data).__name__}")
        stores[scope] = NestedPathStore.from_mapping(data)
    return stores


def _scope_from_key(key: Any, where: str) -> ConfigurationScope:
    try:
        return ConfigurationScope(key)
    except ValueError as exc:
        choices = ", ".join(scope.value for scope in ConfigurationScope)
        raise InvalidFormat(f"Unknown scope {key!r} in {where}; expected one of: {choices}") from exc
