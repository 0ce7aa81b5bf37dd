"""
stepper.py — Step Cursor & Paced Playback
==========================================
A Stepper holds one recorded step sequence and a cursor into it.  It does
not know what a step contains: run sessions pass `on_step` and apply each
snapshot to their own current view when the cursor lands on it.

Cursor:
    applied = 0           nothing applied, the view is the initial state
    applied = n           steps[n - 1] is the visible state
    next_step()           applied += 1, never more than len(steps)
    seek(n)               put the cursor back after n applied steps

Lifecycle:
    IDLE      start(steps)            → PAUSED   (FINISHED if nothing to apply)
    PAUSED    play()                  → PLAYING
    PLAYING   pause()                 → PAUSED
    *         cursor on the last step → FINISHED
    *         reset()                 → IDLE

Pacing is cosmetic.  Every step already exists when start() is called;
tick() only decides WHEN the next one is shown, and jump_to_end() gets to
the same final view with no waiting at all.

Not thread-safe; one caller thread per Stepper.
"""

import time
from enum import Enum
from typing import Any, Callable, Iterable, List, Optional


class StepperState(Enum):
    IDLE     = "idle"
    PAUSED   = "paused"
    PLAYING  = "playing"
    FINISHED = "finished"


# seconds between auto-advanced steps
SPEED_PRESETS = {
    "slow":   1.2,
    "medium": 0.5,
    "fast":   0.2,
    "turbo":  0.05,
}

MIN_INTERVAL = 0.02


class Stepper:
    """
    Attributes:
        state       : Current StepperState.
        steps       : The recorded sequence, fixed by start().
        current_idx : Index of the applied step, -1 before the first one.
        speed       : Seconds between ticks that advance while PLAYING.
        on_step     : callback(step), fired whenever the cursor lands on a step.
    """

    def __init__(self, on_step: Optional[Callable[[Any], None]] = None):
        self.steps:       List[Any]    = []
        self.current_idx: int          = -1
        self.state:       StepperState = StepperState.IDLE
        self.speed:       float        = SPEED_PRESETS["medium"]
        self.on_step:     Optional[Callable[[Any], None]] = on_step
        self._last_tick:  float        = 0.0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self, steps: Iterable[Any], position: int = -1) -> None:
        """Load `steps`; with position >= 0 that step is applied straight away."""
        self.steps       = list(steps)
        self.current_idx = -1
        self.state       = StepperState.PAUSED
        if position >= 0:
            self.goto_step(position)
        self._update_finished()

    def reset(self) -> None:
        self.steps       = []
        self.current_idx = -1
        self.state       = StepperState.IDLE

    # ------------------------------------------------------------------
    # Cursor movement
    # ------------------------------------------------------------------
    def next_step(self) -> bool:
        """Apply one more step.  False once the last one is already applied."""
        if self.current_idx + 1 >= len(self.steps):
            if self.state != StepperState.IDLE:
                self.state = StepperState.FINISHED
            return False
        self._land(self.current_idx + 1)
        self._update_finished()
        return True

    def prev_step(self) -> bool:
        if self.current_idx <= 0:
            return False
        self._land(self.current_idx - 1)
        self.state = StepperState.PAUSED
        return True

    def goto_step(self, idx: int) -> bool:
        if not 0 <= idx < len(self.steps):
            return False
        self._land(idx)
        if self.state == StepperState.FINISHED:
            self.state = StepperState.PAUSED
        self._update_finished()
        return True

    def seek(self, applied: int) -> None:
        """
        Restore a cursor saved as an applied-step count.  Counts beyond the
        sequence clamp to the last step; 0 leaves the initial view alone.
        """
        applied = min(applied, len(self.steps))
        if applied > 0:
            self.goto_step(applied - 1)

    def rewind(self) -> None:
        self.goto_step(0)

    def jump_to_end(self) -> None:
        if self.steps:
            self._land(len(self.steps) - 1)
        if self.state != StepperState.IDLE:
            self.state = StepperState.FINISHED

    # ------------------------------------------------------------------
    # Paced playback
    # ------------------------------------------------------------------
    def play(self) -> None:
        if self.state in (StepperState.IDLE, StepperState.FINISHED):
            return
        self.state      = StepperState.PLAYING
        self._last_tick = time.monotonic()

    def pause(self) -> None:
        if self.state == StepperState.PLAYING:
            self.state = StepperState.PAUSED

    def toggle_play(self) -> None:
        if self.state == StepperState.PLAYING:
            self.pause()
        else:
            self.play()

    def tick(self, now: Optional[float] = None) -> bool:
        """Advance one step if PLAYING and `speed` seconds have passed."""
        if self.state != StepperState.PLAYING:
            return False
        now = time.monotonic() if now is None else now
        if now - self._last_tick < self.speed:
            return False
        self._last_tick = now
        return self.next_step()

    def set_speed(self, preset: str) -> None:
        self.speed = SPEED_PRESETS.get(preset, SPEED_PRESETS["medium"])

    def set_speed_value(self, seconds: float) -> None:
        self.speed = max(MIN_INTERVAL, seconds)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def current_step(self) -> Optional[Any]:
        if 0 <= self.current_idx < len(self.steps):
            return self.steps[self.current_idx]
        return None

    @property
    def applied_count(self) -> int:
        return self.current_idx + 1

    @property
    def total_steps(self) -> int:
        return len(self.steps)

    @property
    def is_finished(self) -> bool:
        return self.state == StepperState.FINISHED

    @property
    def is_playing(self) -> bool:
        return self.state == StepperState.PLAYING

    # ------------------------------------------------------------------
    def _update_finished(self) -> None:
        if self.state != StepperState.IDLE and self.current_idx >= len(self.steps) - 1:
            self.state = StepperState.FINISHED

    def _land(self, idx: int) -> None:
        self.current_idx = idx
        if self.on_step is not None:
            self.on_step(self.steps[idx])
