"""
stepper.py — Step-by-Step Playback
===================================
A Stepper scrubs over the step log of ONE Run.  It never resumes the
algorithm: it only reads `run.steps`, the static, re-readable log.  A
live Run can be scrubbed while it is still emitting; the Stepper simply
sees more steps on its next call.

State machine:
    PAUSED   →  play()              →  PLAYING
    PLAYING  →  pause()             →  PAUSED
    PLAYING  →  (end of final log)  →  FINISHED
    any      →  rewind()            →  PAUSED

Thread safety:
  This class is NOT thread-safe.  Drive it from a single thread (or an
  async event loop); several Steppers may watch the same Run.
"""

import time
from enum import Enum
from typing import Callable, Optional

from algorithms.step import Step
from engine.config import SPEED_PRESETS, validate_pacing
from engine.errors import InvalidInput
from engine.run import Run


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class StepperState(Enum):
    PAUSED   = "paused"
    PLAYING  = "playing"
    FINISHED = "finished"


# ---------------------------------------------------------------------------
# Stepper
# ---------------------------------------------------------------------------
class Stepper:
    """
    Attributes:
        run         : The Run whose log is being scrubbed.
        state       : Current StepperState.
        current_idx : Index into `run.steps` that is currently displayed
                      (-1 before the first step).
        interval_ms : Milliseconds between auto-advance ticks.
        on_step     : Optional callback(Step) fired every time the current
                      step changes.  The renderer hooks its re-render here.
    """

    def __init__(
        self,
        run: Run,
        on_step: Optional[Callable[[Step], None]] = None,
        interval_ms: int = SPEED_PRESETS["medium"],
        clock: Callable[[], float] = time.monotonic,
    ):
        self.run:         Run                              = run
        self.state:       StepperState                     = StepperState.PAUSED
        self.current_idx: int                              = -1
        self.interval_ms: int                              = validate_pacing(interval_ms)
        self.on_step:     Optional[Callable[[Step], None]] = on_step
        self._clock                                        = clock

        # for auto-play timing
        self._last_tick:  float = 0.0

        if run.steps:
            self._goto(0)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def next_step(self) -> bool:
        """Advance one step forward.  Returns False if already at end."""
        target = self.current_idx + 1
        if target >= len(self.run.steps):
            if self.run.is_terminal:
                self.state = StepperState.FINISHED
            return False
        self._goto(target)
        return True

    def prev_step(self) -> bool:
        """Rewind one step.  Returns False if already at start."""
        if self.current_idx <= 0:
            return False
        self._goto(self.current_idx - 1)
        if self.state is StepperState.FINISHED:
            self.state = StepperState.PAUSED
        return True

    def goto_step(self, idx: int) -> bool:
        """Jump to an arbitrary step index of the log."""
        if not 0 <= idx < len(self.run.steps):
            return False
        self._goto(idx)
        if self.state is StepperState.FINISHED and not self.at_end:
            self.state = StepperState.PAUSED
        return True

    def rewind(self) -> None:
        """Jump back to step 0."""
        self.state = StepperState.PAUSED
        if self.run.steps:
            self._goto(0)

    def jump_to_end(self) -> None:
        """Jump to the newest step; FINISHED once the Run is terminal."""
        if self.run.steps:
            self._goto(len(self.run.steps) - 1)
        if self.run.is_terminal:
            self.state = StepperState.FINISHED

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def play(self) -> None:
        if self.state is StepperState.FINISHED:
            return
        self.state      = StepperState.PLAYING
        self._last_tick = self._clock()

    def pause(self) -> None:
        if self.state is StepperState.PLAYING:
            self.state = StepperState.PAUSED

    def toggle_play(self) -> None:
        if self.state is StepperState.PLAYING:
            self.pause()
        else:
            self.play()

    # ------------------------------------------------------------------
    # Tick  (call this from your event loop / timer)
    # ------------------------------------------------------------------
    def tick(self, now: Optional[float] = None) -> bool:
        """
        Call periodically (e.g. every 50 ms).  If playing and enough
        time has elapsed, advances one step.  Returns True if a step
        was taken.
        """
        if self.state is not StepperState.PLAYING:
            return False
        now = self._clock() if now is None else now
        if (now - self._last_tick) * 1000 < self.interval_ms:
            return False
        self._last_tick = now
        return self.next_step()

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, preset: str) -> None:
        if preset not in SPEED_PRESETS:
            raise InvalidInput(f"Unknown speed preset: {preset}")
        self.interval_ms = SPEED_PRESETS[preset]

    def set_interval(self, interval_ms: int) -> None:
        self.interval_ms = validate_pacing(interval_ms)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def current_step(self) -> Optional[Step]:
        if 0 <= self.current_idx < len(self.run.steps):
            return self.run.steps[self.current_idx]
        return None

    @property
    def total_steps(self) -> int:
        return len(self.run.steps)

    @property
    def at_end(self) -> bool:
        return self.current_idx == len(self.run.steps) - 1

    @property
    def is_finished(self) -> bool:
        return self.state is StepperState.FINISHED

    @property
    def is_playing(self) -> bool:
        return self.state is StepperState.PLAYING

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _goto(self, idx: int) -> None:
        self.current_idx = idx
        self._notify(self.run.steps[idx])

    def _notify(self, step: Optional[Step]) -> None:
        if self.on_step and step is not None:
            self.on_step(step)
