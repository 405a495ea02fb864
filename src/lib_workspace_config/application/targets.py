"""Write-target normalisation.

Purpose
-------
Map the caller's loosely typed "where should this write go" argument onto one
of the three concrete :class:`ConfigurationScope` members. The raw union never
travels further than :func:`resolve_target`.

Contents
--------
* :func:`resolve_target` – total function over ``ConfigurationScope | bool | None``.
* :func:`parse_target` – text parser used by the CLI adapter.
"""

from __future__ import annotations

from typing import Final

from ..domain.scopes import ConfigurationScope, TargetArgument

_TEXT_TARGETS: Final[dict[str, TargetArgument]] = {
    "": None,
    "none": None,
    "global": ConfigurationScope.GLOBAL,
    "user": ConfigurationScope.GLOBAL,
    "workspace": ConfigurationScope.WORKSPACE,
    "workspace-folder": ConfigurationScope.WORKSPACE_FOLDER,
    "workspace_folder": ConfigurationScope.WORKSPACE_FOLDER,
    "folder": ConfigurationScope.WORKSPACE_FOLDER,
    "true": True,
    "false": False,
}

TARGET_CHOICES: Final[tuple[str, ...]] = tuple(key for key in _TEXT_TARGETS if key)


def resolve_target(raw: TargetArgument) -> ConfigurationScope:
    """Return the concrete scope a write should land in.

    Why
    ----
    Editor APIs accept an explicit scope, a legacy boolean (``True`` for user
    settings, ``False`` for workspace settings) or nothing at all. The checks
    use identity so ``1`` and ``0`` are never mistaken for booleans.

    Parameters
    ----------
    raw:
        The caller-supplied target. Anything unrecognised, including ``None``,
        selects the narrowest scope.

    Examples
    --------
    >>> resolve_target(ConfigurationScope.WORKSPACE).name
    'WORKSPACE'
    >>> resolve_target(True).name, resolve_target(False).name
    ('GLOBAL', 'WORKSPACE')
    >>> resolve_target(None).name
    'WORKSPACE_FOLDER'
    """

    if raw is ConfigurationScope.GLOBAL:
        return ConfigurationScope.GLOBAL
    if raw is ConfigurationScope.WORKSPACE:
        return ConfigurationScope.WORKSPACE
    if raw is ConfigurationScope.WORKSPACE_FOLDER:
        return ConfigurationScope.WORKSPACE_FOLDER
    if raw is True:
        return ConfigurationScope.GLOBAL
    if raw is False:
        return ConfigurationScope.WORKSPACE
    return ConfigurationScope.WORKSPACE_FOLDER


def parse_target(text: str | None) -> TargetArgument:
    """Translate CLI text into a raw target argument.

    Examples
    --------
    >>> parse_target("workspace-folder").name
    'WORKSPACE_FOLDER'
    >>> parse_target("TRUE")
    True
    >>> parse_target(None) is None
    True
    """

    if text is None:
        return None
    alias = text.strip().lower()
    try:
        return _TEXT_TARGETS[alias]
    except KeyError as exc:
        raise ValueError(f"Unknown configuration target {text!r}; expected one of: {', '.join(TARGET_CHOICES)}") from exc
