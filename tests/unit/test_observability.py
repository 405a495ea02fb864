"""Unit tests for structured logging utilities in ``observability``."""

from __future__ import annotations

import logging

import pytest

from lib_workspace_config import LayeredConfiguration, bind_trace_id, dump_configuration, get_logger, load_configuration
from lib_workspace_config.domain.scopes import ConfigurationScope
from lib_workspace_config.observability import TRACE_ID, log_debug, log_info, make_event


def test_null_handler_present() -> None:
    """Package logger should always include a NullHandler to avoid surprises."""

    logger = get_logger()
    assert any(isinstance(handler, logging.NullHandler) for handler in logger.handlers)


def test_trace_id_in_log(caplog: pytest.LogCaptureFixture) -> None:
    """Structured logs should include the bound trace identifier and contextual fields."""

    caplog.set_level(logging.INFO, logger="lib_workspace_config")
    bind_trace_id("trace-123")
    try:
        log_info("configuration_verified", scope=None, section=None)
    finally:
        bind_trace_id(None)
    record = caplog.records[-1]
    assert getattr(record, "context") == {"trace_id": "trace-123", "scope": None, "section": None}


def test_bind_trace_id_clears_context() -> None:
    bind_trace_id("trace-temp")
    bind_trace_id(None)
    assert TRACE_ID.get() is None


def test_make_event_merges_optional_payload() -> None:
    event = make_event("global", "editor.tabSize", {"language_id": "go"})
    assert event == {"scope": "global", "section": "editor.tabSize", "language_id": "go"}


def test_update_emits_debug_events(caplog: pytest.LogCaptureFixture) -> None:
    """Writes narrate overlay and store creation before the update itself."""

    caplog.set_level(logging.DEBUG, logger="lib_workspace_config")
    cfg = LayeredConfiguration()
    cfg.update("k", "v1", ConfigurationScope.GLOBAL, override_in_language=True, language_id="go")

    messages = [record.getMessage() for record in caplog.records]
    assert messages == ["language_overlay_created", "scope_store_created", "configuration_updated"]
    context = getattr(caplog.records[-1], "context")
    assert context["scope"] == "global"
    assert context["section"] == "k"
    assert context["language_id"] == "go"


def test_reads_do_not_log(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="lib_workspace_config")
    cfg = LayeredConfiguration()
    cfg.get("anything", language_id="go")
    cfg.has("anything")
    assert caplog.records == []


def test_disabled_levels_emit_nothing(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="lib_workspace_config")
    log_debug("configuration_updated", scope="global", section="k")
    assert caplog.records == []


def test_snapshot_file_events(caplog: pytest.LogCaptureFixture, tmp_path) -> None:
    caplog.set_level(logging.INFO, logger="lib_workspace_config")
    cfg = LayeredConfiguration()
    cfg.update("k", "v", ConfigurationScope.GLOBAL)

    path = dump_configuration(cfg, tmp_path / "snapshot.json")
    load_configuration(path)

    messages = [record.getMessage() for record in caplog.records]
    assert messages == ["snapshot_file_written", "snapshot_file_applied"]
    assert getattr(caplog.records[-1], "context")["path"] == str(path)
