from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    for name in (
        "GEMINI_API_KEY",
        "GSEARCH_API_KEY",
        "GSEARCH_MODEL",
        "GSEARCH_API_BASE",
        "GSEARCH_TEMPERATURE",
        "GSEARCH_MAX_OUTPUT_TOKENS",
        "GSEARCH_TIMEOUT_SECONDS",
        "GSEARCH_TRACK_FENCES",
        "GSEARCH_LOG_LEVEL",
        "FORCE_COLOR",
        "TTY_COMPATIBLE",
        "NO_COLOR",
    ):
        monkeypatch.delenv(name, raising=False)
