"""Playback cursor over synthesised steps: play, pause, step and seek."""

from __future__ import annotations

import logging
from enum import Enum

from .animation_types import AnimationStepFromTrace
from . import constants

logger = logging.getLogger(__name__)


class PlaybackState(str, Enum):
    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"
    COMPLETE = "complete"


class StepPlayer:
    """Tracks the current position in a step list.

    Position -1 is "before the first step". Seeking never replays anything:
    each step already carries the full array state.
    """

    def __init__(
        self,
        steps: list[AnimationStepFromTrace],
        speed: int = constants.DEFAULT_PLAYBACK_SPEED_MS,
    ):
        self.steps = steps
        self.current_index = -1
        self.state = PlaybackState.IDLE
        self.speed = constants.DEFAULT_PLAYBACK_SPEED_MS
        self.set_speed(speed)

    @property
    def current_step(self) -> AnimationStepFromTrace | None:
        if 0 <= self.current_index < len(self.steps):
            return self.steps[self.current_index]
        return None

    @property
    def progress(self) -> float:
        """Percentage of steps shown so far."""
        if not self.steps:
            return 0.0
        return (self.current_index + 1) / len(self.steps) * 100

    def can_go_next(self) -> bool:
        return self.current_index < len(self.steps) - 1

    def can_go_previous(self) -> bool:
        return self.current_index >= 0

    def play(self):
        if not self.steps:
            return
        if not self.can_go_next():
            self.current_index = -1
        self.state = PlaybackState.PLAYING

    def pause(self):
        self.state = PlaybackState.PAUSED

    def reset(self):
        self.current_index = -1
        self.state = PlaybackState.IDLE

    def next_step(self) -> AnimationStepFromTrace | None:
        if not self.can_go_next():
            self.state = PlaybackState.COMPLETE
            return None
        self.current_index += 1
        if not self.can_go_next():
            self.state = PlaybackState.COMPLETE
        return self.steps[self.current_index]

    def previous_step(self) -> AnimationStepFromTrace | None:
        self.current_index = max(self.current_index - 1, -1)
        self.state = PlaybackState.PAUSED
        return self.current_step

    def go_to_step(self, index: int) -> AnimationStepFromTrace | None:
        """Seek to *index*; out-of-range indices are ignored."""
        if index < 0 or index >= len(self.steps):
            logger.debug("Ignoring seek to %d (have %d steps)", index, len(self.steps))
            return None
        self.current_index = index
        self.state = PlaybackState.PAUSED
        return self.steps[index]

    def set_speed(self, speed: int):
        self.speed = max(
            constants.MIN_PLAYBACK_SPEED_MS,
            min(constants.MAX_PLAYBACK_SPEED_MS, speed),
        )
