"""Tests for observability: decode metrics and logging config."""

from __future__ import annotations

import json

import pytest

from dshk.observability.logging import configure_logging, get_logger
from dshk.observability.metrics import DecodeMetrics


class TestDecodeMetrics:
    def test_initial_state(self) -> None:
        m = DecodeMetrics("test")
        assert m.records == 0
        assert m.bytes_consumed == 0
        assert m.errors == 0
        assert m.elapsed_s >= 0.0

    def test_record_decoded(self) -> None:
        m = DecodeMetrics()
        m.record_decoded(0x0B8, 70)
        m.record_decoded(0x0B8, 76)
        m.record_decoded(0x0B9, 70)
        assert m.records == 3
        assert m.bytes_consumed == 216
        assert m.records_for_apid(0x0B8) == 2
        assert m.records_for_apid(0x7FF) == 0

    def test_record_error(self) -> None:
        m = DecodeMetrics()
        m.record_error("TruncatedError")
        m.record_error("TruncatedError")
        m.record_error("IncompleteError")
        assert m.errors == 3

    def test_snapshot_serialisable(self) -> None:
        m = DecodeMetrics("snap")
        m.record_decoded(1, 70)
        m.record_error("IncompleteError")
        snap = m.snapshot()
        assert snap["name"] == "snap"
        assert snap["records"] == 1
        assert snap["records_by_apid"] == {1: 1}
        assert snap["errors"] == {"IncompleteError": 1}
        json.dumps(snap)


class TestConfigureLogging:
    def test_console_format(self) -> None:
        configure_logging(level="DEBUG", fmt="console")

    def test_json_format(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(level="INFO", fmt="json")
        get_logger("test").info("decoder.complete", records=2)
        line = capsys.readouterr().err.strip().splitlines()[-1]
        event = json.loads(line)
        assert event["event"] == "decoder.complete"
        assert event["records"] == 2
        assert event["level"] == "info"

    def test_level_filters(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(level="WARNING", fmt="json")
        get_logger("test").info("hidden")
        assert "hidden" not in capsys.readouterr().err

    def test_with_caller_info(self) -> None:
        configure_logging(level="INFO", fmt="console", include_caller=True)
