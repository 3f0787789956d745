"""Recording session lifecycle."""

from __future__ import annotations

from convorec.session.recorder import SessionRecorder
from convorec.session.state_machine import RecorderStateMachine

__all__ = ["RecorderStateMachine", "SessionRecorder"]
