"""Tests for StepPlayer: stepping, seeking and speed clamping."""

from animator.algorithms import record_algorithm
from animator.playback import PlaybackState, StepPlayer
from animator.synthesizer import synthesize


def _player(**kwargs):
    steps = synthesize(record_algorithm("bubble", [3, 1, 2])).steps
    return StepPlayer(steps, **kwargs)


class TestStepping:
    def test_starts_before_first_step(self):
        player = _player()
        assert player.current_index == -1
        assert player.current_step is None
        assert player.state == PlaybackState.IDLE
        assert player.progress == 0.0

    def test_next_walks_forward_to_completion(self):
        player = _player()
        seen = []
        while player.can_go_next():
            seen.append(player.next_step().id)
        assert seen == [s.id for s in player.steps]
        assert player.state == PlaybackState.COMPLETE
        assert player.progress == 100.0

    def test_next_past_end_returns_none(self):
        player = _player()
        player.go_to_step(len(player.steps) - 1)
        assert player.next_step() is None
        assert player.state == PlaybackState.COMPLETE

    def test_previous_step(self):
        player = _player()
        player.next_step()
        player.next_step()
        step = player.previous_step()
        assert step is player.steps[0]
        assert player.state == PlaybackState.PAUSED

    def test_previous_from_first_step_goes_before_start(self):
        player = _player()
        player.next_step()
        assert player.previous_step() is None
        assert player.current_index == -1
        assert not player.can_go_previous()


class TestSeeking:
    def test_go_to_step(self):
        player = _player()
        step = player.go_to_step(2)
        assert step is player.steps[2]
        assert player.current_index == 2

    def test_seek_shows_full_state_without_replay(self):
        player = _player()
        last = len(player.steps) - 1
        assert player.go_to_step(last).values() == [1, 2, 3]

    def test_out_of_range_seek_is_ignored(self):
        player = _player()
        player.go_to_step(1)
        assert player.go_to_step(999) is None
        assert player.go_to_step(-1) is None
        assert player.current_index == 1


class TestPlayPause:
    def test_play_and_pause(self):
        player = _player()
        player.play()
        assert player.state == PlaybackState.PLAYING
        player.pause()
        assert player.state == PlaybackState.PAUSED

    def test_play_at_end_restarts(self):
        player = _player()
        player.go_to_step(len(player.steps) - 1)
        player.play()
        assert player.current_index == -1
        assert player.state == PlaybackState.PLAYING

    def test_play_without_steps_stays_idle(self):
        player = StepPlayer([])
        player.play()
        assert player.state == PlaybackState.IDLE

    def test_reset(self):
        player = _player()
        player.go_to_step(3)
        player.reset()
        assert player.current_index == -1
        assert player.state == PlaybackState.IDLE


class TestSpeed:
    def test_default_speed(self):
        assert _player().speed == 500

    def test_speed_is_clamped(self):
        player = _player(speed=1)
        assert player.speed == 10
        player.set_speed(10_000)
        assert player.speed == 2000
        player.set_speed(250)
        assert player.speed == 250
