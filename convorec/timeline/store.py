"""TimelineStore: append-only ledger of audio segments tagged by origin.

Segments are ordered by an explicit arrival sequence assigned at append
time, never by wall-clock timestamps: bursts of frames arriving within the
same clock tick keep their true order.

Remote audio arrives as byte frames whose length may be odd. At most one
trailing byte is carried over to the next remote frame, so every stored
segment is sample aligned and no byte is ever dropped, only deferred.

Byte counters are maintained on append so stats() is O(1).

No locking here: the owning SessionRecorder serializes every call.
"""

from __future__ import annotations

import numpy as np

from convorec._audio_constants import BYTES_PER_SAMPLE_INT16
from convorec._types import AudioSegment, MergeScope, Origin, RecorderStats
from convorec.audio_utils import (
    PCMInput,
    as_int16_samples,
    check_sample_rate,
    pcm16_bytes_to_samples,
)


class TimelineStore:
    """Append-only, sequence-ordered store of local and remote segments.

    Args:
        sample_rate: Sample rate in Hz, used to derive durations.

    Raises:
        AudioFormatError: If the sample rate is outside the supported range.

    The store starts sealed. ``open()`` allows appends, ``seal()`` rejects them
    again, and ``reset()`` discards everything and seals.
    """

    __slots__ = (
        "_bytes_by_origin",
        "_is_open",
        "_next_sequence",
        "_pending_byte",
        "_sample_rate",
        "_segments",
    )

    def __init__(self, sample_rate: int) -> None:
        self._sample_rate = check_sample_rate(sample_rate)
        self._segments: list[AudioSegment] = []
        self._bytes_by_origin: dict[Origin, int] = {Origin.LOCAL: 0, Origin.REMOTE: 0}
        self._next_sequence = 1
        self._pending_byte: int | None = None
        self._is_open = False

    @property
    def sample_rate(self) -> int:
        return self._sample_rate

    @property
    def is_open(self) -> bool:
        """True while appends are accepted."""
        return self._is_open

    @property
    def pending_remnant(self) -> int | None:
        """Remote byte carried over to the next frame, if any."""
        return self._pending_byte

    @property
    def segments(self) -> tuple[AudioSegment, ...]:
        """Snapshot of the stored segments in arrival order."""
        return tuple(self._segments)

    def __len__(self) -> int:
        return len(self._segments)

    def open(self) -> None:
        self._is_open = True

    def seal(self) -> None:
        self._is_open = False

    def reset(self) -> None:
        """Discard all segments, counters, and the pending remnant. Seals the store."""
        self._segments.clear()
        self._bytes_by_origin = {Origin.LOCAL: 0, Origin.REMOTE: 0}
        self._next_sequence = 1
        self._pending_byte = None
        self._is_open = False

    def append(self, origin: Origin, samples: PCMInput) -> AudioSegment | None:
        """Append one segment.

        Returns None (no-op) when the store is sealed or ``samples`` is empty.
        The samples are copied; the caller's buffer is never aliased.
        """
        if not self._is_open:
            return None
        owned = as_int16_samples(samples)
        return self._append_owned(origin, owned)

    def append_remote_bytes(self, raw: bytes) -> AudioSegment | None:
        """Append decoded remote bytes, carrying an odd trailing byte forward.

        The pending byte from the previous call is prepended. If the combined
        length is odd, its final byte becomes the new pending byte; otherwise
        the pending byte is cleared.
        """
        if not self._is_open:
            return None

        if self._pending_byte is not None:
            data = bytes((self._pending_byte,)) + raw
        else:
            data = bytes(raw)

        if len(data) % BYTES_PER_SAMPLE_INT16:
            self._pending_byte = data[-1]
            data = data[:-1]
        else:
            self._pending_byte = None

        return self._append_owned(Origin.REMOTE, pcm16_bytes_to_samples(data))

    def _append_owned(self, origin: Origin, samples: np.ndarray) -> AudioSegment | None:
        if samples.size == 0:
            return None
        samples.flags.writeable = False
        segment = AudioSegment(
            origin=origin,
            samples=samples,
            arrival_sequence=self._next_sequence,
        )
        self._next_sequence += 1
        self._segments.append(segment)
        self._bytes_by_origin[origin] += segment.num_bytes
        return segment

    def count(self, scope: MergeScope = MergeScope.ALL) -> int:
        """Number of segments selected by ``scope``."""
        if scope is MergeScope.ALL:
            return len(self._segments)
        return sum(1 for seg in self._segments if scope.selects(seg.origin))

    def merge(self, scope: MergeScope = MergeScope.ALL) -> np.ndarray:
        """Concatenate the segments selected by ``scope`` in arrival order.

        No gaps, padding, or resampling. Returns an empty int16 array when no
        segment matches.
        """
        selected = sorted(
            (seg for seg in self._segments if scope.selects(seg.origin)),
            key=lambda seg: seg.arrival_sequence,
        )
        if not selected:
            return np.zeros(0, dtype=np.int16)
        return np.concatenate([seg.samples for seg in selected])

    def byte_count(self, origin: Origin) -> int:
        return self._bytes_by_origin[origin]

    def stats(self) -> RecorderStats:
        """Duration and volume statistics from the running counters."""
        local_bytes = self._bytes_by_origin[Origin.LOCAL]
        remote_bytes = self._bytes_by_origin[Origin.REMOTE]
        total_bytes = local_bytes + remote_bytes
        return RecorderStats(
            local_bytes=local_bytes,
            remote_bytes=remote_bytes,
            total_bytes=total_bytes,
            local_duration_s=self._duration_s(local_bytes),
            remote_duration_s=self._duration_s(remote_bytes),
            total_duration_s=self._duration_s(total_bytes),
            segment_count=len(self._segments),
        )

    def _duration_s(self, num_bytes: int) -> float:
        return round(num_bytes / BYTES_PER_SAMPLE_INT16 / self._sample_rate, 2)
