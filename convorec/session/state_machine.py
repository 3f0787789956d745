"""RecorderStateMachine: lifecycle of a recording session.

States:
    IDLE -> RECORDING -> STOPPED

Rules:
- start() always wins: RECORDING -> RECORDING is a valid (resetting) transition,
  as are IDLE -> RECORDING and STOPPED -> RECORDING.
- stop() is only valid from RECORDING.
- clear() is valid from any state back to IDLE.
- Invalid transitions raise InvalidTransitionError. The recorder checks
  can_transition() first and treats invalid calls as no-ops.

Pure, synchronous component. The caller (SessionRecorder) serializes access.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from convorec._types import RecorderState
from convorec.exceptions import InvalidTransitionError

if TYPE_CHECKING:
    from collections.abc import Callable

# Valid transitions: {current_state: {allowed_target_states}}
_VALID_TRANSITIONS: dict[RecorderState, frozenset[RecorderState]] = {
    RecorderState.IDLE: frozenset({RecorderState.RECORDING, RecorderState.IDLE}),
    RecorderState.RECORDING: frozenset(
        {RecorderState.RECORDING, RecorderState.STOPPED, RecorderState.IDLE}
    ),
    RecorderState.STOPPED: frozenset({RecorderState.RECORDING, RecorderState.IDLE}),
}


class RecorderStateMachine:
    """State machine for recording sessions.

    Args:
        on_enter: Callbacks called upon ENTERING a state.
        clock: Function that returns a monotonic timestamp (for deterministic tests).
    """

    def __init__(
        self,
        on_enter: dict[RecorderState, Callable[[], None]] | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self._state = RecorderState.IDLE
        self._on_enter = on_enter or {}
        self._clock = clock or time.monotonic
        self._state_entered_at = self._clock()

    @property
    def state(self) -> RecorderState:
        """Current session state."""
        return self._state

    @property
    def elapsed_in_state_ms(self) -> int:
        """Time (ms) spent in the current state."""
        elapsed_s = self._clock() - self._state_entered_at
        return int(elapsed_s * 1000)

    def can_transition(self, target: RecorderState) -> bool:
        return target in _VALID_TRANSITIONS[self._state]

    def transition(self, target: RecorderState) -> RecorderState:
        """Transition to the target state.

        Returns:
            The previous state.

        Raises:
            InvalidTransitionError: If the transition is invalid.
        """
        if not self.can_transition(target):
            raise InvalidTransitionError(self._state.value, target.value)

        previous = self._state
        self._state = target
        self._state_entered_at = self._clock()

        enter_cb = self._on_enter.get(target)
        if enter_cb is not None:
            enter_cb()

        return previous
