"""Tests for Stepper playback over a Run's step log."""

import pytest

from engine import InvalidInput, Stepper, StepperState
from conftest import execute


@pytest.fixture
def finished_run(runner):
    # 10 steps: start, 6 compare/swap, 2 highlights, done
    return execute(runner, "bubble_sort", {"values": [3, 2, 1]})


class TestNavigation:
    def test_starts_on_first_step(self, finished_run):
        seen = []
        stepper = Stepper(finished_run, on_step=seen.append)
        assert stepper.current_idx == 0
        assert stepper.current_step.kind.value == "start"
        assert stepper.total_steps == 10
        assert [s.sequence for s in seen] == [0]

    def test_next_and_prev(self, finished_run):
        stepper = Stepper(finished_run)
        assert stepper.next_step()
        assert stepper.current_idx == 1
        assert stepper.prev_step()
        assert not stepper.prev_step()
        assert stepper.current_idx == 0

    def test_next_at_end_finishes_terminal_run(self, finished_run):
        stepper = Stepper(finished_run)
        stepper.goto_step(9)
        assert stepper.at_end
        assert not stepper.next_step()
        assert stepper.is_finished
        assert stepper.prev_step()
        assert stepper.state is StepperState.PAUSED

    def test_goto_out_of_range(self, finished_run):
        stepper = Stepper(finished_run)
        assert not stepper.goto_step(10)
        assert not stepper.goto_step(-1)
        assert stepper.current_idx == 0

    def test_jump_to_end_and_rewind(self, finished_run):
        stepper = Stepper(finished_run)
        stepper.jump_to_end()
        assert stepper.current_step.is_final
        assert stepper.is_finished
        stepper.rewind()
        assert stepper.current_idx == 0
        assert stepper.state is StepperState.PAUSED

    def test_scrubbing_never_changes_the_log(self, finished_run):
        before = list(finished_run.steps)
        stepper = Stepper(finished_run)
        stepper.jump_to_end()
        stepper.rewind()
        stepper.goto_step(4)
        assert finished_run.steps == before


class TestPlayback:
    def test_tick_waits_for_interval(self, finished_run, clock):
        stepper = Stepper(finished_run, interval_ms=100, clock=clock)
        stepper.play()
        assert stepper.is_playing
        assert not stepper.tick(now=clock.now + 0.05)
        assert stepper.tick(now=clock.now + 0.2)
        assert stepper.current_idx == 1

    def test_paused_stepper_ignores_ticks(self, finished_run, clock):
        stepper = Stepper(finished_run, interval_ms=0, clock=clock)
        assert not stepper.tick()
        stepper.toggle_play()
        assert stepper.tick()
        stepper.toggle_play()
        assert not stepper.tick()

    def test_plays_through_to_finished(self, finished_run, clock):
        stepper = Stepper(finished_run, interval_ms=0, clock=clock)
        stepper.play()
        while stepper.tick():
            pass
        assert stepper.at_end
        assert stepper.is_finished
        stepper.play()
        assert not stepper.is_playing

    def test_speed_presets(self, finished_run):
        stepper = Stepper(finished_run)
        stepper.set_speed("turbo")
        assert stepper.interval_ms == 50
        stepper.set_interval(5)
        assert stepper.interval_ms == 5
        with pytest.raises(InvalidInput):
            stepper.set_speed("ludicrous")
        with pytest.raises(InvalidInput):
            stepper.set_interval(-5)


class TestLiveRun:
    def test_sees_steps_as_they_arrive(self, paced_runner):
        run = paced_runner.start("bubble_sort", {"values": [2, 1]}, {"pacing_ms": 100})
        stepper = Stepper(run)
        assert stepper.current_step is None

        paced_runner.advance(run)
        assert stepper.next_step()
        assert not stepper.next_step()
        assert stepper.state is StepperState.PAUSED

        paced_runner.run_until_complete([run])
        stepper.jump_to_end()
        assert stepper.is_finished
        assert stepper.current_step.kind.value == "done"
