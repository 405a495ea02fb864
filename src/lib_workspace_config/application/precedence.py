"""Application-layer read precedence.

Purpose
-------
Answer reads against a set of per-scope stores by consulting the scopes in
fixed order (workspace folder, workspace, global) and stopping at the first
store that contains the requested path. No merging happens: a subtree found
in a more specific scope hides the same subtree in broader scopes entirely.

Contents
    - ``resolve``: value lookup with a caller-supplied default.
    - ``exists``: presence check, independent of the value found.
    - ``winning_scope``: which scope would answer a read.

System Role
-----------
Called by :class:`lib_workspace_config.application.configuration.LayeredConfiguration`
after it has picked the base stores or a language overlay.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from ..domain.scopes import SCOPE_PRECEDENCE, ConfigurationScope
from ..domain.store import NestedPathStore, Path

ScopeStores = Mapping[ConfigurationScope, NestedPathStore]


def resolve(stores: ScopeStores, path: Path, default: Any = None) -> Any:
    """Return the plain value of the first scope containing *path*.

    Examples
    --------
    >>> stores = {
    ...     ConfigurationScope.GLOBAL: NestedPathStore.from_mapping({"one": 111}),
    ...     ConfigurationScope.WORKSPACE: NestedPathStore.from_mapping({"one": 222}),
    ... }
    >>> resolve(stores, ("one",))
    222
    >>> resolve(stores, ("two",), default="fallback")
    'fallback'
    """

    scope = winning_scope(stores, path)
    if scope is None:
        return default
    return stores[scope].get_value(path)


def exists(stores: ScopeStores, path: Path) -> bool:
    """Return ``True`` when any scope contains *path*.

    Kept separate from :func:`resolve` so callers can tell a stored value that
    happens to equal the default apart from a miss.
    """

    return winning_scope(stores, path) is not None


def winning_scope(
    stores: ScopeStores,
    path: Path,
    order: Sequence[ConfigurationScope] = SCOPE_PRECEDENCE,
) -> ConfigurationScope | None:
    """Return the first scope in *order* whose store contains *path*."""

    for scope in order:
        store = stores.get(scope)
        if store is not None and store.has(path):
            return scope
    return None
