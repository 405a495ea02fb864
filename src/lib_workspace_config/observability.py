"""Event logging for configuration writes and snapshot fixtures.

Every record goes to the ``lib_workspace_config`` logger, which stays silent
until the host attaches a handler. Records carry a ``context`` attribute: the
event fields plus the trace id bound for the current scenario.

Contents
    - ``TRACE_ID``: scenario trace id, set by ``ConfigurationStubber.setup``.
    - ``get_logger`` / ``bind_trace_id``: hooks for harnesses.
    - ``log_debug`` / ``log_info`` / ``log_error``: level-specific emitters.
    - ``make_event``: ``scope`` / ``section`` payload builder.

The domain layer never logs; the application layer, adapters and the
composition root do.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Any, Final, Mapping

TRACE_ID: ContextVar[str | None] = ContextVar("lib_workspace_config_trace_id", default=None)
"""Trace id attached to every record emitted while it is bound."""

_LOGGER: Final[logging.Logger] = logging.getLogger("lib_workspace_config")
_LOGGER.addHandler(logging.NullHandler())


def get_logger() -> logging.Logger:
    """Return the package logger; attach handlers here to see events."""

    return _LOGGER


def bind_trace_id(trace_id: str | None) -> None:
    """Set the scenario trace id, or clear it with ``None``.

    Examples
    --------
    >>> bind_trace_id('scenario-7')
    >>> TRACE_ID.get()
    'scenario-7'
    >>> bind_trace_id(None)
    >>> TRACE_ID.get() is None
    True
    """

    TRACE_ID.set(trace_id)


def log_debug(message: str, **fields: Any) -> None:
    _emit(logging.DEBUG, message, fields)


def log_info(message: str, **fields: Any) -> None:
    _emit(logging.INFO, message, fields)


def log_error(message: str, **fields: Any) -> None:
    _emit(logging.ERROR, message, fields)


def make_event(
    scope: str | None,
    section: str | None,
    payload: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Return ``scope`` and ``section`` keys merged with *payload*.

    *scope* is a :class:`ConfigurationScope` value such as ``"global"``;
    *section* is the dotted setting path. Either may be ``None`` for events
    that are not tied to one setting.

    Examples
    --------
    >>> make_event('global', 'editor.tabSize', {'language_id': 'go'})
    {'scope': 'global', 'section': 'editor.tabSize', 'language_id': 'go'}
    >>> make_event(None, None)
    {'scope': None, 'section': None}
    """

    event: dict[str, Any] = {"scope": scope, "section": section}
    if payload:
        event |= dict(payload)
    return event


def _emit(level: int, message: str, fields: Mapping[str, Any]) -> None:
    # No context is built for disabled levels.
    if not _LOGGER.isEnabledFor(level):
        return
    context = {"trace_id": TRACE_ID.get(), **fields}
    _LOGGER.log(level, message, extra={"context": context})
