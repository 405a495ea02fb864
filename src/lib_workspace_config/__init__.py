"""Public package surface for the layered workspace configuration engine.

Exports the configuration store, its scoped views, the scope enum, the error
taxonomy, the snapshot codec, and the observability hooks so that
``import lib_workspace_config`` is all a test harness needs.
"""

from __future__ import annotations

from .application.configuration import LayeredConfiguration
from .application.snapshot import configuration_from_snapshot, dumps, loads, snapshot_of
from .application.targets import resolve_target
from .application.view import ScopedConfigurationView
from .core import dump_configuration, get_configuration, load_configuration
from .domain.errors import (
    ConfigError,
    InvalidFormat,
    InvalidPath,
    NotFound,
    PathConflict,
    UnsupportedOperation,
    UnsupportedScopeDescriptor,
)
from .domain.scopes import ConfigurationScope, ConfigurationTarget
from .domain.store import NestedPathStore
from .observability import bind_trace_id, get_logger
from .testing import ConfigurationStubber

__all__ = [
    "LayeredConfiguration",
    "ScopedConfigurationView",
    "NestedPathStore",
    "ConfigurationScope",
    "ConfigurationTarget",
    "resolve_target",
    "get_configuration",
    "load_configuration",
    "dump_configuration",
    "snapshot_of",
    "configuration_from_snapshot",
    "dumps",
    "loads",
    "ConfigurationStubber",
    "ConfigError",
    "UnsupportedOperation",
    "UnsupportedScopeDescriptor",
    "InvalidPath",
    "PathConflict",
    "InvalidFormat",
    "NotFound",
    "bind_trace_id",
    "get_logger",
]
