"""convorec: two-party conversation audio capture and WAV export."""

from __future__ import annotations

from convorec._types import Artifact, AudioSegment, MergeScope, Origin, RecorderState, RecorderStats
from convorec.session.recorder import SessionRecorder

__version__ = "0.1.0"

__all__ = [
    "Artifact",
    "AudioSegment",
    "MergeScope",
    "Origin",
    "RecorderState",
    "RecorderStats",
    "SessionRecorder",
    "__version__",
]
