"""Layered, language-aware settings store.

Purpose
-------
Emulate an editor's hierarchical settings service: one
:class:`NestedPathStore` per scope for the unscoped configuration, plus an
optional complete set of per-scope stores for each language identifier (a
"language overlay"). Reads resolve by scope precedence; writes land in exactly
one store.

Contents
--------
* :class:`LayeredConfiguration` – ``get`` / ``has`` / ``update`` / ``inspect``
  at the root, plus read-only accessors used by the snapshot codec.

System Role
-----------
Instances are created per test session (optionally from a snapshot) and handed
explicitly to every consumer. :class:`ScopedConfigurationView` objects share a
single instance; there is no module-level state and no caching, so every view
sees every write immediately.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, NoReturn, TypeVar, overload

from ..domain.errors import InvalidPath, UnsupportedOperation
from ..domain.scopes import ConfigurationScope, TargetArgument
from ..domain.store import NestedPathStore, parse_section
from ..observability import log_debug, make_event
from . import precedence
from .targets import resolve_target

if TYPE_CHECKING:
    from .view import ScopedConfigurationView

T = TypeVar("T")

ScopeStores = dict[ConfigurationScope, NestedPathStore]


class LayeredConfiguration:
    """Mutable settings store partitioned by scope and language.

    Why
    ----
    Code under test asks for settings the way it would ask the editor; tests
    need those answers to follow the editor's precedence rules exactly.

    Parameters
    ----------
    base:
        Optional starting stores for the unscoped configuration.
    by_language:
        Optional starting overlays keyed by language identifier.
    language_overrides:
        ``False`` produces a legacy configuration that refuses
        ``override_in_language`` writes with :class:`UnsupportedOperation` and
        ignores language identifiers on reads.

    Examples
    --------
    >>> cfg = LayeredConfiguration()
    >>> cfg.update("editor.tabSize", 4, ConfigurationScope.GLOBAL)
    >>> cfg.update("editor.tabSize", 2)
    >>> cfg.get("editor.tabSize"), cfg.get("editor")
    (2, {'tabSize': 2})
    >>> cfg.update("editor.tabSize", 8, override_in_language=True, language_id="go")
    >>> cfg.get("editor.tabSize", language_id="go"), cfg.get("editor.tabSize")
    (8, 2)
    """

    __slots__ = ("_base", "_by_language", "_language_overrides")

    def __init__(
        self,
        base: Mapping[ConfigurationScope, NestedPathStore] | None = None,
        by_language: Mapping[str, Mapping[ConfigurationScope, NestedPathStore]] | None = None,
        *,
        language_overrides: bool = True,
    ) -> None:
        self._base: ScopeStores = dict(base or {})
        self._by_language: dict[str, ScopeStores] = {
            language_id: dict(stores) for language_id, stores in (by_language or {}).items()
        }
        self._language_overrides = language_overrides

    @property
    def language_overrides(self) -> bool:
        return self._language_overrides

    @overload
    def get(self, section: str, default: T, language_id: str | None = None) -> T: ...

    @overload
    def get(self, section: str, default: None = None, language_id: str | None = None) -> Any | None: ...

    def get(self, section: str, default: Any = None, language_id: str | None = None) -> Any:
        """Return the value at *section* from the highest-precedence scope.

        When an overlay exists for *language_id* only the overlay's scopes are
        consulted, even if the overlay is empty. Without an overlay the base
        configuration answers.
        """

        return precedence.resolve(self._read_stores(language_id), parse_section(section), default)

    def has(self, section: str, language_id: str | None = None) -> bool:
        """Return ``True`` when any consulted scope contains *section*."""

        return precedence.exists(self._read_stores(language_id), parse_section(section))

    def update(
        self,
        section: str,
        value: Any,
        target: TargetArgument = None,
        override_in_language: bool | None = False,
        language_id: str | None = None,
    ) -> None:
        """Write *value* at *section* into a single scope store.

        Parameters
        ----------
        section:
            Dotted path of the setting; must be non-empty.
        value:
            Any serialisable value, stored as one opaque leaf (a mapping value
            is a record; paths do not descend into it).
        target:
            ``ConfigurationScope``, legacy boolean, or ``None``; see
            :func:`lib_workspace_config.application.targets.resolve_target`.
        override_in_language:
            Write into the overlay for *language_id* (created on demand).
            Ignored when no *language_id* is given.
        language_id:
            Language the calling view is bound to, if any.

        Raises
        ------
        UnsupportedOperation
            ``override_in_language`` on a legacy configuration.
        InvalidPath
            Empty or malformed *section*, or a write through an existing leaf.
        """

        scope = resolve_target(target)
        if override_in_language and not self._language_overrides:
            raise UnsupportedOperation("overrideInLanguage is not yet supported")

        path = parse_section(section)
        if not path:
            raise InvalidPath("Cannot update the empty section")

        overlay = language_id if override_in_language and language_id is not None else None
        stores = self._write_stores(overlay)
        store = stores.get(scope)
        if store is None:
            store = stores[scope] = NestedPathStore()
            log_debug("scope_store_created", **make_event(scope.value, None, {"language_id": overlay}))

        store.set(path, value)
        log_debug("configuration_updated", **make_event(scope.value, section, {"language_id": overlay}))

    def inspect(self, section: str) -> NoReturn:
        """Per-scope introspection is not implemented; always raises."""

        raise UnsupportedOperation("LayeredConfiguration.inspect is not yet supported")

    def scoped(self, section: str = "", language_id: str | None = None) -> ScopedConfigurationView:
        """Return a view rooted at *section* and bound to *language_id*."""

        from .view import ScopedConfigurationView

        parse_section(section)
        return ScopedConfigurationView(self, section, language_id)

    def store(self, scope: ConfigurationScope, language_id: str | None = None) -> NestedPathStore | None:
        """Return the store for *scope* (in the overlay for *language_id*), never creating one."""

        if language_id is None:
            return self._base.get(scope)
        overlay = self._by_language.get(language_id)
        if overlay is None:
            return None
        return overlay.get(scope)

    def scopes(self, language_id: str | None = None) -> tuple[ConfigurationScope, ...]:
        """Return the scopes that currently hold a store, in enum order."""

        stores = self._base if language_id is None else self._by_language.get(language_id, {})
        return tuple(scope for scope in ConfigurationScope if scope in stores)

    def language_ids(self) -> tuple[str, ...]:
        """Return the identifiers of every overlay created so far."""

        return tuple(self._by_language)

    def has_overlay(self, language_id: str) -> bool:
        return language_id in self._by_language

    def _read_stores(self, language_id: str | None) -> ScopeStores:
        if language_id is not None and self._language_overrides:
            overlay = self._by_language.get(language_id)
            if overlay is not None:
                return overlay
        return self._base

    def _write_stores(self, language_id: str | None) -> ScopeStores:
        if language_id is None:
            return self._base
        overlay = self._by_language.get(language_id)
        if overlay is None:
            overlay = {}
            self._by_language[language_id] = overlay
            log_debug("language_overlay_created", **make_event(None, None, {"language_id": language_id}))
        return overlay

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LayeredConfiguration):
            return NotImplemented
        return self._base == other._base and self._by_language == other._by_language

    def __repr__(self) -> str:
        return f"LayeredConfiguration(scopes={[scope.value for scope in self.scopes()]}, languages={list(self._by_language)})"
