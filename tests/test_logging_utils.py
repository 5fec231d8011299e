from __future__ import annotations

from typing import Any

import pytest

from gemini_search import logging_utils


class _RecordingLogger:
    def __init__(self) -> None:
        self.sinks: list[tuple[Any, str]] = []
        self.removed = 0

    def remove(self) -> None:
        self.removed += 1

    def add(self, sink: Any, **kwargs: Any) -> int:
        self.sinks.append((sink, kwargs["level"]))
        return len(self.sinks)


def test_configure_logging_is_idempotent(monkeypatch: pytest.MonkeyPatch) -> None:
    recorder = _RecordingLogger()
    monkeypatch.setattr(logging_utils, "_CONFIGURED", None)
    monkeypatch.setattr(logging_utils, "logger", recorder)

    logging_utils.configure_logging("debug")
    logging_utils.configure_logging("DEBUG")

    assert recorder.removed == 1
    assert [level for _, level in recorder.sinks] == ["DEBUG"]


def test_rich_profile_uses_rich_handler(monkeypatch: pytest.MonkeyPatch) -> None:
    recorder = _RecordingLogger()
    monkeypatch.setattr(logging_utils, "_CONFIGURED", None)
    monkeypatch.setattr(logging_utils, "logger", recorder)

    logging_utils.configure_logging("INFO", profile="rich")

    sink, level = recorder.sinks[0]
    assert level == "INFO"
    assert type(sink).__name__ == "RichHandler"
