"""Typed exceptions for convorec.

Hierarchy:
    ConvoRecError (base)
    +-- ConfigError
    +-- AudioError
    |   +-- AudioFormatError
    |   +-- DecodeError        (malformed base64 frame, recovered by the recorder)
    |   +-- EmptyPayloadError  (WAV encode of zero samples)
    +-- SessionError
    |   +-- InvalidTransitionError
    |   +-- NoAudioDataError   (scope selects zero segments)
    +-- SinkError              (opaque, passed through unchanged)
        +-- SinkNotConfiguredError
"""

from __future__ import annotations


class ConvoRecError(Exception):
    """Base for all convorec exceptions."""


# --- Configuration ---


class ConfigError(ConvoRecError):
    """Runtime configuration error."""


# --- Audio ---


class AudioError(ConvoRecError):
    """Audio processing error."""


class AudioFormatError(AudioError):
    """Unsupported or invalid audio format."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Invalid audio format: {detail}")


class DecodeError(AudioError):
    """Remote frame is not valid base64."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Could not decode remote frame: {reason}")


class EmptyPayloadError(AudioError):
    """Attempt to encode a WAV container with no audio."""

    def __init__(self) -> None:
        super().__init__("Cannot encode a WAV file with zero samples")


# --- Session ---


class SessionError(ConvoRecError):
    """Recording session error."""


class InvalidTransitionError(SessionError):
    """Invalid state transition in the recorder state machine."""

    def __init__(self, from_state: str, to_state: str) -> None:
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(f"Invalid transition: {from_state} -> {to_state}")


class NoAudioDataError(SessionError):
    """The requested scope selects no recorded segments."""

    def __init__(self, scope: str, session_id: str | None = None) -> None:
        self.scope = scope
        self.session_id = session_id
        msg = f"No audio data recorded for scope '{scope}'"
        if session_id is not None:
            msg += f" (session '{session_id}')"
        super().__init__(msg)


# --- Sink ---


class SinkError(ConvoRecError):
    """Artifact delivery failed.

    Raised by ArtifactSink implementations. The recorder never interprets
    or retries it.
    """


class SinkNotConfiguredError(SinkError):
    """Export requested without an ArtifactSink."""

    def __init__(self) -> None:
        super().__init__("No artifact sink configured. Pass sink= to the recorder or export call.")
