"""SessionRecorder: captures a two-party conversation and exports it as WAV.

Orchestrates the remote frame decoder, the timeline, the WAV encoder, and
the recorder state machine for a single live session:

    capture callbacks -> FrameDecoder (remote only) -> TimelineStore
    stop() / prepare_artifact() -> TimelineStore.merge -> WavEncoder -> Artifact
    export_artifact() -> ArtifactSink.deliver

Lifecycle:
    1. start() resets everything, assigns a fresh session id, enters RECORDING
    2. add_local_audio() / add_remote_audio() append segments while RECORDING
    3. stop() enters STOPPED and caches the full-conversation artifact
    4. prepare_artifact() / export_artifact() produce any scope, any time
    5. clear() discards everything and returns to IDLE

Appends outside RECORDING are no-ops, not errors: they are benign races
between capture shutdown and in-flight callbacks. A malformed remote frame
is dropped and logged; it never aborts the session.

Thread-safety: the local capture path and the remote decode path usually
run on different threads. Every operation that touches session state holds
one lock. Sink delivery runs outside the lock.
"""

from __future__ import annotations

import re
import threading
import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from convorec._audio_constants import (
    DEFAULT_FILENAME_PREFIX,
    DEFAULT_SAMPLE_RATE,
    FILENAME_PREFIX_PATTERN,
)
from convorec._types import Artifact, MergeScope, Origin, RecorderState, RecorderStats
from convorec.audio_utils import check_sample_rate
from convorec.codec.frame import FrameDecoder
from convorec.codec.wav import WavEncoder
from convorec.exceptions import (
    ConfigError,
    DecodeError,
    NoAudioDataError,
    SinkNotConfiguredError,
)
from convorec.logging import get_logger
from convorec.session.state_machine import RecorderStateMachine
from convorec.timeline.store import TimelineStore

if TYPE_CHECKING:
    from collections.abc import Callable

    from convorec.audio_utils import PCMInput
    from convorec.config.settings import ConvoRecSettings
    from convorec.sink.interface import ArtifactSink

logger = get_logger("session.recorder")

_FILENAME_TIME_FORMAT = "%Y-%m-%d %H_%M_%S"
_FILENAME_PREFIX_RE = re.compile(FILENAME_PREFIX_PATTERN)


def _new_session_id() -> str:
    return str(uuid.uuid4())


class SessionRecorder:
    """Records local and remote audio for one session at a time.

    Args:
        sample_rate: Sample rate of both streams in Hz. Fixed for the
            recorder's lifetime.
        sink: Default ArtifactSink for export_artifact().
        filename_prefix: Leading part of generated filenames.
        wall_clock: Returns the current local time (for deterministic filenames in tests).
        id_factory: Returns a fresh session id.

    Raises:
        AudioFormatError: If ``sample_rate`` is outside the supported range.
        ConfigError: If ``filename_prefix`` is not a safe filename fragment.
    """

    def __init__(
        self,
        sample_rate: int = DEFAULT_SAMPLE_RATE,
        *,
        sink: ArtifactSink | None = None,
        filename_prefix: str = DEFAULT_FILENAME_PREFIX,
        wall_clock: Callable[[], datetime] | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        if not _FILENAME_PREFIX_RE.fullmatch(filename_prefix):
            raise ConfigError(
                f"filename prefix {filename_prefix!r} must match {FILENAME_PREFIX_PATTERN}"
            )
        self._sample_rate = check_sample_rate(sample_rate)
        self._sink = sink
        self._filename_prefix = filename_prefix
        self._wall_clock = wall_clock or datetime.now
        self._id_factory = id_factory or _new_session_id

        self._lock = threading.Lock()
        self._machine = RecorderStateMachine()
        self._timeline = TimelineStore(sample_rate)
        self._decoder = FrameDecoder()
        self._encoder = WavEncoder()

        self._session_id: str | None = None
        self._started_at: datetime | None = None
        self._last_artifact: Artifact | None = None

    @classmethod
    def from_settings(
        cls,
        settings: ConvoRecSettings | None = None,
        *,
        sink: ArtifactSink | None = None,
    ) -> SessionRecorder:
        """Build a recorder from ``ConvoRecSettings`` (default: ``get_settings()``)."""
        if settings is None:
            from convorec.config.settings import get_settings

            settings = get_settings()
        return cls(
            sample_rate=settings.recorder.sample_rate,
            sink=sink,
            filename_prefix=settings.recorder.filename_prefix,
        )

    # --- Observers ---

    @property
    def sample_rate(self) -> int:
        return self._sample_rate

    @property
    def state(self) -> RecorderState:
        return self._machine.state

    @property
    def session_id(self) -> str | None:
        return self._session_id

    @property
    def started_at(self) -> datetime | None:
        return self._started_at

    @property
    def last_artifact(self) -> Artifact | None:
        """Most recently prepared artifact, or None."""
        return self._last_artifact

    @property
    def dropped_frames(self) -> int:
        """Remote frames rejected as malformed in the current session."""
        return self._decoder.frames_rejected

    def stats(self) -> RecorderStats:
        with self._lock:
            return self._timeline.stats()

    def has_data(self) -> bool:
        with self._lock:
            return len(self._timeline) > 0

    def has_ready_artifact(self) -> bool:
        return self._last_artifact is not None

    # --- Lifecycle ---

    def start(self) -> str:
        """Begin a new session, discarding any previous one.

        Returns:
            The new session id.
        """
        with self._lock:
            previous = self._machine.state
            discarded = len(self._timeline)
            self._reset_locked()
            self._session_id = self._id_factory()
            self._started_at = self._wall_clock()
            self._timeline.open()
            self._machine.transition(RecorderState.RECORDING)

            if previous is RecorderState.RECORDING:
                logger.info(
                    "recording_restarted",
                    session_id=self._session_id,
                    discarded_segments=discarded,
                )
            else:
                logger.info(
                    "recording_started",
                    session_id=self._session_id,
                    sample_rate=self._sample_rate,
                )
            return self._session_id

    def stop(self) -> Artifact | None:
        """Stop recording and prepare the full-conversation artifact.

        Returns:
            The cached ALL-scope artifact, or None if nothing was recorded
            or the recorder was not recording.
        """
        with self._lock:
            if not self._machine.can_transition(RecorderState.STOPPED):
                logger.debug("stop_ignored", state=self._machine.state.value)
                return None

            self._timeline.seal()
            self._machine.transition(RecorderState.STOPPED)

            stats = self._timeline.stats()
            logger.info(
                "recording_stopped",
                session_id=self._session_id,
                segments=stats.segment_count,
                duration_s=stats.total_duration_s,
                dropped_frames=self._decoder.frames_rejected,
                pending_remnant=self._timeline.pending_remnant is not None,
            )

            if len(self._timeline) == 0:
                return None
            return self._prepare_locked(MergeScope.ALL)

    def clear(self) -> None:
        """Return to IDLE, discarding all audio and any cached artifact."""
        with self._lock:
            self._reset_locked()
            self._session_id = None
            self._started_at = None
            self._machine.transition(RecorderState.IDLE)
            logger.debug("recorder_cleared")

    def _reset_locked(self) -> None:
        self._timeline.reset()
        self._decoder.reset()
        self._last_artifact = None

    # --- Capture ---

    def add_local_audio(self, samples: PCMInput) -> bool:
        """Append local PCM16 samples.

        Returns:
            True if a segment was appended. False when not recording or
            ``samples`` is empty.

        Raises:
            AudioFormatError: If ``samples`` is not mono int16 PCM.
        """
        with self._lock:
            if self._machine.state is not RecorderState.RECORDING:
                logger.debug("local_audio_ignored", state=self._machine.state.value)
                return False
            return self._timeline.append(Origin.LOCAL, samples) is not None

    def add_remote_audio(self, frame: str | bytes) -> bool:
        """Decode and append one base64 remote frame.

        A malformed frame is dropped and logged; recording continues.

        Returns:
            True if a segment was appended. A frame consisting of a single
            carried-over byte appends nothing yet and returns False.
        """
        with self._lock:
            if self._machine.state is not RecorderState.RECORDING:
                logger.debug("remote_audio_ignored", state=self._machine.state.value)
                return False
            if not frame:
                return False
            try:
                raw = self._decoder.decode(frame)
            except DecodeError as exc:
                logger.warning(
                    "remote_frame_dropped",
                    session_id=self._session_id,
                    error=str(exc),
                    dropped_frames=self._decoder.frames_rejected,
                )
                return False
            return self._timeline.append_remote_bytes(raw) is not None

    # --- Artifacts ---

    def prepare_artifact(self, scope: MergeScope = MergeScope.ALL) -> Artifact:
        """Merge and encode ``scope`` into a WAV artifact and cache it.

        Callable in any state once audio was recorded, including after stop().

        Raises:
            NoAudioDataError: If the scope selects no segments.
        """
        with self._lock:
            return self._prepare_locked(scope)

    def _prepare_locked(self, scope: MergeScope) -> Artifact:
        samples = self._timeline.merge(scope)
        if samples.size == 0:
            raise NoAudioDataError(scope.value, self._session_id)

        data = self._encoder.encode(samples, self._sample_rate)
        assert self._session_id is not None  # segments only exist inside a session
        artifact = Artifact(
            data=data,
            filename=self._build_filename(scope),
            scope=scope,
            session_id=self._session_id,
            content_type=self._encoder.content_type,
        )
        self._last_artifact = artifact

        logger.debug(
            "artifact_prepared",
            session_id=self._session_id,
            scope=scope.value,
            filename=artifact.filename,
            num_bytes=artifact.num_bytes,
        )
        return artifact

    def export_artifact(
        self,
        scope: MergeScope = MergeScope.ALL,
        sink: ArtifactSink | None = None,
    ) -> str:
        """Prepare ``scope`` and hand it to the sink.

        Args:
            scope: Which sub-stream to export.
            sink: Overrides the recorder's default sink.

        Returns:
            Location reported by the sink.

        Raises:
            SinkNotConfiguredError: If no sink is available.
            NoAudioDataError: If the scope selects no segments.
            SinkError: Delivery failure, passed through unchanged.
        """
        target = sink if sink is not None else self._sink
        if target is None:
            raise SinkNotConfiguredError()

        artifact = self.prepare_artifact(scope)
        location = target.deliver(artifact.data, artifact.filename, artifact.content_type)
        logger.info(
            "artifact_exported",
            session_id=artifact.session_id,
            scope=scope.value,
            location=location,
        )
        return location

    def _build_filename(self, scope: MergeScope) -> str:
        started = self._started_at or self._wall_clock()
        stamp = started.strftime(_FILENAME_TIME_FORMAT)
        return (
            f"{self._filename_prefix}_{self._session_id}{scope.filename_suffix}"
            f"_{stamp}.{self._encoder.file_extension}"
        )
