"""Configuration scopes and their read precedence."""

from __future__ import annotations

from enum import Enum
from typing import Final, Union


class ConfigurationScope(Enum):
    """The three scopes a setting can be written to.

    Values are the snapshot keys used by
    :mod:`lib_workspace_config.application.snapshot`.
    """

    GLOBAL = "global"
    WORKSPACE = "workspace"
    WORKSPACE_FOLDER = "workspace_folder"


#: Editors call the write-side argument a "target"; both names refer to the same enum.
ConfigurationTarget = ConfigurationScope

#: Loosely typed write target accepted at the API boundary.
TargetArgument = Union[ConfigurationScope, bool, None]

#: Read precedence, first match wins.
SCOPE_PRECEDENCE: Final[tuple[ConfigurationScope, ...]] = (
    ConfigurationScope.WORKSPACE_FOLDER,
    ConfigurationScope.WORKSPACE,
    ConfigurationScope.GLOBAL,
)
