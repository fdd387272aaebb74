"""Shared test fixtures."""

import io

import pytest
from rich.console import Console

from dabbrev.config import Settings

ENV_VARS = (
    "DABBREV_LOG_LEVEL",
    "DABBREV_TRACE",
    "DABBREV_WRAP_WIDTH",
    "DABBREV_HISTORY_LINES",
    "DABBREV_MAX_COMPLETIONS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def console() -> Console:
    return Console(file=io.StringIO(), width=120, color_system=None)
