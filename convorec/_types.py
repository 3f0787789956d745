"""Core types for convorec.

This module defines enums and dataclasses shared by the timeline, codec,
recorder, and sinks. Changes here affect the entire system.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from convorec._audio_constants import BYTES_PER_SAMPLE_INT16, WAV_CONTENT_TYPE

if TYPE_CHECKING:
    import numpy as np


class Origin(Enum):
    """Where a segment of audio came from.

    - LOCAL: microphone pipeline on this side of the conversation
    - REMOTE: speech-generation service, delivered as base64 frames
    """

    LOCAL = "local"
    REMOTE = "remote"


class MergeScope(Enum):
    """Selection filter applied when merging the timeline into an artifact."""

    ALL = "all"
    LOCAL_ONLY = "local"
    REMOTE_ONLY = "remote"

    @property
    def origin(self) -> Origin | None:
        """Origin selected by this scope, or None when every origin is selected."""
        if self is MergeScope.LOCAL_ONLY:
            return Origin.LOCAL
        if self is MergeScope.REMOTE_ONLY:
            return Origin.REMOTE
        return None

    @property
    def filename_suffix(self) -> str:
        """Suffix inserted after the session id in artifact filenames."""
        if self is MergeScope.ALL:
            return ""
        return f"_{self.value}"

    def selects(self, origin: Origin) -> bool:
        """True if segments of ``origin`` belong to this scope."""
        selected = self.origin
        return selected is None or selected is origin


class RecorderState(Enum):
    """State of a recording session.

    Valid transitions:
        IDLE -> RECORDING (start)
        RECORDING -> RECORDING (start again, implicit reset)
        RECORDING -> STOPPED (stop)
        STOPPED -> RECORDING (start)
        Any -> IDLE (clear)
    """

    IDLE = "idle"
    RECORDING = "recording"
    STOPPED = "stopped"


@dataclass(frozen=True, slots=True, eq=False)
class AudioSegment:
    """One contiguous burst of samples appended in a single call.

    ``samples`` is an owned, read-only int16 array. ``arrival_sequence`` is the
    authoritative chronological order within a session.
    """

    origin: Origin
    samples: np.ndarray
    arrival_sequence: int

    @property
    def num_samples(self) -> int:
        return int(self.samples.shape[0])

    @property
    def num_bytes(self) -> int:
        return self.num_samples * BYTES_PER_SAMPLE_INT16


@dataclass(frozen=True, slots=True)
class Artifact:
    """A finished, named WAV container ready for export."""

    data: bytes
    filename: str
    scope: MergeScope
    session_id: str
    content_type: str = WAV_CONTENT_TYPE

    @property
    def num_bytes(self) -> int:
        return len(self.data)


@dataclass(frozen=True, slots=True)
class RecorderStats:
    """Duration and volume statistics for a session.

    Durations are in seconds, rounded to two decimals.
    """

    local_bytes: int
    remote_bytes: int
    total_bytes: int
    local_duration_s: float
    remote_duration_s: float
    total_duration_s: float
    segment_count: int

    def as_dict(self) -> dict[str, int | str]:
        """Render the stats for display, durations with two-decimal precision."""
        return {
            "total_duration": f"{self.total_duration_s:.2f}",
            "local_duration": f"{self.local_duration_s:.2f}",
            "remote_duration": f"{self.remote_duration_s:.2f}",
            "total_bytes": self.total_bytes,
            "local_bytes": self.local_bytes,
            "remote_bytes": self.remote_bytes,
            "segment_count": self.segment_count,
        }
