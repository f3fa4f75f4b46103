"""Playback state machine, frame-driven timers and easing curves."""

from animation.scheduler import Scheduler, ScheduledTask
from animation.controller import PlaybackState, StepController
