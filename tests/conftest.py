"""Shared fixtures for all tests."""

from __future__ import annotations

import sys
from collections.abc import Iterator
from datetime import datetime
from pathlib import Path

# Ensure repo root is on sys.path so tests can import the `convorec` package
# when running pytest from the repository root without an editable install.
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

import pytest  # noqa: E402

from convorec.config.settings import get_settings  # noqa: E402
from convorec.session.recorder import SessionRecorder  # noqa: E402
from convorec.sink.memory import MemoryArtifactSink  # noqa: E402
from tests.helpers import FIXED_START, SAMPLE_RATE, SequentialIds  # noqa: E402


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Iterator[None]:
    """Settings are cached process-wide; start every test from a clean slate."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def memory_sink() -> MemoryArtifactSink:
    return MemoryArtifactSink()


@pytest.fixture
def recorder(memory_sink: MemoryArtifactSink) -> SessionRecorder:
    """Recorder at 24kHz with deterministic ids and start time."""
    return SessionRecorder(
        sample_rate=SAMPLE_RATE,
        sink=memory_sink,
        wall_clock=lambda: FIXED_START,
        id_factory=SequentialIds(),
    )


@pytest.fixture
def fixed_start() -> datetime:
    return FIXED_START
