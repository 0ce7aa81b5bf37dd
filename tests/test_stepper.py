"""Playback cursor: navigation, state machine and paced ticks."""

from __future__ import annotations

import time

import pytest

from engine import SPEED_PRESETS, Stepper, StepperState
from engine.stepper import MIN_INTERVAL


@pytest.fixture()
def stepper() -> Stepper:
    applied = []
    s = Stepper(on_step=applied.append)
    s.applied = applied  # type: ignore[attr-defined]
    s.start(["s0", "s1", "s2"])
    return s


def test_start_places_cursor_before_first_step(stepper: Stepper) -> None:
    assert stepper.state is StepperState.PAUSED
    assert stepper.current_step is None
    assert stepper.applied_count == 0
    assert stepper.total_steps == 3


def test_next_step_applies_one_at_a_time(stepper: Stepper) -> None:
    assert stepper.next_step()
    assert stepper.current_step == "s0"
    assert stepper.next_step()
    assert stepper.next_step()
    assert stepper.is_finished
    assert not stepper.next_step()
    assert stepper.applied == ["s0", "s1", "s2"]


def test_prev_and_goto(stepper: Stepper) -> None:
    stepper.jump_to_end()
    assert stepper.is_finished
    assert stepper.prev_step()
    assert stepper.current_step == "s1"
    assert stepper.state is StepperState.PAUSED
    assert stepper.goto_step(0)
    assert not stepper.prev_step()
    assert not stepper.goto_step(7)
    stepper.rewind()
    assert stepper.applied_count == 1


def test_start_at_position() -> None:
    s = Stepper()
    s.start(["init", "a", "b"], position=0)
    assert s.current_step == "init"
    assert not s.is_finished


def test_empty_sequence_is_finished_at_once() -> None:
    s = Stepper()
    s.start([])
    assert s.is_finished
    assert not s.next_step()
    assert s.current_step is None


def test_reset_goes_idle(stepper: Stepper) -> None:
    stepper.next_step()
    stepper.reset()
    assert stepper.state is StepperState.IDLE
    assert stepper.total_steps == 0
    stepper.play()
    assert not stepper.is_playing


def test_play_pause_and_tick(stepper: Stepper) -> None:
    stepper.set_speed_value(0.0)
    assert stepper.speed == MIN_INTERVAL
    stepper.play()
    assert stepper.is_playing
    assert stepper.tick(now=time.monotonic() + 1)
    assert stepper.current_step == "s0"

    stepper.toggle_play()
    assert stepper.state is StepperState.PAUSED
    assert not stepper.tick(now=time.monotonic() + 10)


def test_tick_waits_for_speed(stepper: Stepper) -> None:
    stepper.set_speed("slow")
    stepper.play()
    started = stepper._last_tick
    assert not stepper.tick(now=started + SPEED_PRESETS["slow"] / 2)
    assert stepper.tick(now=started + SPEED_PRESETS["slow"] + 0.01)


def test_play_is_ignored_once_finished(stepper: Stepper) -> None:
    stepper.jump_to_end()
    stepper.play()
    assert not stepper.is_playing


def test_unknown_speed_preset_falls_back_to_medium(stepper: Stepper) -> None:
    stepper.set_speed("warp")
    assert stepper.speed == SPEED_PRESETS["medium"]


def test_seek_restores_applied_count(stepper: Stepper) -> None:
    stepper.seek(2)
    assert stepper.applied_count == 2
    assert stepper.current_step == "s1"
    assert not stepper.is_finished

    stepper.seek(99)
    assert stepper.current_step == "s2"
    assert stepper.is_finished
