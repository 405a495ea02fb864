"""Test-harness helpers that seed and verify configuration state.

Purpose
    Give scenario-driven test suites one object per test that builds a fresh
    :class:`LayeredConfiguration` from a starting snapshot and, once the
    interactions under test have run, asserts the final state.

Contents
    - ``ConfigurationStubber``: ``setup`` / ``verify`` / ``cleanup`` lifecycle.
    - ``assert_snapshot_equal``: comparison helper with a readable diff.

System Integration
    Harnesses call ``setup`` before running user interactions, pass
    ``stubber.configuration`` to the code under test, then call ``verify``.
    The stubber binds a fresh trace id so every log event of a scenario can be
    correlated.
"""

from __future__ import annotations

import json
import uuid
from typing import Any, Mapping

from .application.configuration import LayeredConfiguration
from .application.snapshot import configuration_from_snapshot, snapshot_of
from .observability import bind_trace_id, log_info


class ConfigurationStubber:
    """Own the configuration of a single test scenario.

    Parameters
    ----------
    starting:
        Snapshot the configuration starts from (``None`` for empty).
    expected:
        Snapshot the configuration must equal at :meth:`verify`. When omitted,
        the starting snapshot is the expectation, i.e. nothing may change.

    Examples
    --------
    >>> stubber = ConfigurationStubber(
    ...     starting={"configuration": {"workspace_folder": {"stubber": {"other": "value"}}}},
    ...     expected={"configuration": {"workspace_folder": {"stubber": {"other": "value", "some-key": "some-value"}}}},
    ... )
    >>> stubber.setup()
    >>> stubber.configuration.scoped("stubber").update("some-key", "some-value")
    >>> stubber.verify()
    >>> stubber.cleanup()
    """

    def __init__(
        self,
        starting: Mapping[str, Any] | None = None,
        expected: Mapping[str, Any] | None = None,
        *,
        language_overrides: bool = True,
    ) -> None:
        self._starting = starting
        self._expected = expected
        self._language_overrides = language_overrides
        self._configuration: LayeredConfiguration | None = None

    @property
    def configuration(self) -> LayeredConfiguration:
        if self._configuration is None:
            raise RuntimeError("ConfigurationStubber.setup() must run before the configuration is used")
        return self._configuration

    def setup(self) -> None:
        bind_trace_id(uuid.uuid4().hex)
        self._configuration = configuration_from_snapshot(
            self._starting,
            language_overrides=self._language_overrides,
        )

    def verify(self) -> None:
        """Assert the configuration equals the expected (or starting) snapshot."""

        expected_source = self._expected if self._expected is not None else self._starting
        expected = snapshot_of(
            configuration_from_snapshot(expected_source, language_overrides=self._language_overrides)
        )
        assert_snapshot_equal(snapshot_of(self.configuration), expected)
        log_info("configuration_verified", scope=None, section=None)

    def cleanup(self) -> None:
        self._configuration = None
        bind_trace_id(None)


def assert_snapshot_equal(actual: Mapping[str, Any], expected: Mapping[str, Any]) -> None:
    """Raise ``AssertionError`` showing both snapshots when they differ.

    Key order is ignored because both sides are compared as dictionaries.
    """

    if actual == expected:
        return
    raise AssertionError(
        "Configuration snapshot mismatch\n"
        f"expected:\n{_render(expected)}\n"
        f"actual:\n{_render(actual)}"
    )


def _render(snapshot: Mapping[str, Any]) -> str:
    return json.dumps(snapshot, indent=2, sort_keys=True, ensure_ascii=False, default=repr)
