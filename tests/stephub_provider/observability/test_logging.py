from __future__ import annotations

import io
import json
from datetime import UTC, datetime
from pathlib import Path

import pytest

from stephub_provider.observability.logging import (
    JsonlLogSink,
    LogMessage,
    LogSink,
    MemoryLogSink,
    NullLogSink,
    StdoutLogSink,
    log_to_dict,
)


def test_log_message_requires_level_and_message() -> None:
    with pytest.raises(ValueError):
        LogMessage(level="", message="")


def test_log_to_dict_uses_utc_z_suffix() -> None:
    message = LogMessage(
        level="info",
        message="step registered",
        timestamp=datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC),
        fields={"step": "greet"},
    )
    assert log_to_dict(message) == {
        "level": "info",
        "message": "step registered",
        "timestamp": "2024-01-02T03:04:05Z",
        "fields": {"step": "greet"},
    }


def test_stdout_sink_writes_one_json_line() -> None:
    stream = io.StringIO()
    StdoutLogSink(stream).emit(LogMessage(level="info", message="hello", fields={"n": 1}))
    line = stream.getvalue()
    assert line.endswith("\n")
    assert json.loads(line)["fields"] == {"n": 1}


def test_jsonl_sink_appends_lines(tmp_path: Path) -> None:
    path = tmp_path / "logs" / "provider.jsonl"
    sink = JsonlLogSink(path)
    sink.emit(LogMessage(level="info", message="one"))
    sink.emit(LogMessage(level="error", message="two"))
    sink.close()
    lines = path.read_text(encoding="utf-8").splitlines()
    assert [json.loads(line)["message"] for line in lines] == ["one", "two"]


def test_sinks_satisfy_protocol() -> None:
    for sink in (NullLogSink(), MemoryLogSink(), StdoutLogSink(io.StringIO())):
        assert isinstance(sink, LogSink)
