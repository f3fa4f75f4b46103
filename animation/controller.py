"""Step / playback state machine for the walkthrough.

States are the catalog step ids, a linear chain 0 -> 1 -> ... -> 7 with 7
terminal. `is_playing` is an orthogonal flag that gates the two timers:

  step timer       every step_duration while playing and not terminal
  attention timer  every attention_phase_interval while playing on step 3

Timers are reconciled after every state change: a step change restarts the
step dwell, pausing cancels both, leaving step 3 cancels the attention timer.
Each step change also schedules one debounced section notification.
"""
import logging
from dataclasses import dataclass, replace

from animation.scheduler import Scheduler
from walkthrough.parameters import PlaybackConfig
from walkthrough.steps import (
    STEPS, TERMINAL_STEP, ATTENTION_STEP, clamp_step, section_for_step,
)

logger = logging.getLogger(__name__)


def _unsubscriber(listeners: list, callback):
    def unsubscribe():
        if callback in listeners:
            listeners.remove(callback)
    return unsubscribe


@dataclass(frozen=True)
class PlaybackState:
    active_step: int = 0
    is_playing: bool = False
    attention_phase: int = 0


class StepController:
    def __init__(self, config: PlaybackConfig = None, scheduler: Scheduler = None,
                 initial_state: PlaybackState = None):
        self.config = config or PlaybackConfig()
        self.scheduler = scheduler or Scheduler()
        self._state = self._normalize(initial_state or PlaybackState())
        self._step_entered_at = self.scheduler.time

        self._step_task = None
        self._attention_task = None
        self._section_task = None

        self._listeners = []
        self._section_listeners = []

    # ── Read access ─────────────────────────────────────────────────

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def active_step(self) -> int:
        return self._state.active_step

    @property
    def is_playing(self) -> bool:
        return self._state.is_playing

    @property
    def attention_phase(self) -> int:
        return self._state.attention_phase

    @property
    def current_step(self):
        return STEPS[self._state.active_step]

    @property
    def time(self) -> float:
        return self.scheduler.time

    @property
    def step_elapsed(self) -> float:
        """Seconds since active_step last changed."""
        return self.scheduler.time - self._step_entered_at

    # ── Observers ───────────────────────────────────────────────────

    def subscribe(self, callback):
        """callback(state) after every state change. Returns an unsubscribe function."""
        self._listeners.append(callback)
        return _unsubscriber(self._listeners, callback)

    def on_section(self, callback):
        """callback(section_key) once per step change, after config.scroll_delay."""
        self._section_listeners.append(callback)
        return _unsubscriber(self._section_listeners, callback)

    # ── User intents ────────────────────────────────────────────────

    def play(self):
        if self._state.active_step >= TERMINAL_STEP:
            return
        self._commit(replace(self._state, is_playing=True))

    def pause(self):
        self._commit(replace(self._state, is_playing=False))

    def toggle(self):
        if self._state.is_playing:
            self.pause()
        else:
            self.play()

    def reset(self):
        self._commit(PlaybackState(active_step=0, is_playing=False, attention_phase=0))

    def go_to(self, step_id):
        """Jump to a step (clamped to the catalog). Always stops autoplay."""
        target = clamp_step(step_id)
        self._commit(replace(self._state, active_step=target, is_playing=False))

    # ── Timer-driven transitions ────────────────────────────────────

    def tick(self):
        s = self._state
        if not s.is_playing:
            return
        if s.active_step >= TERMINAL_STEP:
            self._commit(replace(s, is_playing=False))
        else:
            self._commit(replace(s, active_step=s.active_step + 1))

    def attention_tick(self):
        s = self._state
        if not (s.is_playing and s.active_step == ATTENTION_STEP):
            return
        phase = (s.attention_phase + 1) % self.config.attention_phases
        self._commit(replace(s, attention_phase=phase))

    def update(self, dt: float):
        """One update cycle: reconcile timers with the state, then advance time."""
        self._commit(self._state)
        self.scheduler.advance(dt)

    # ── Internals ───────────────────────────────────────────────────

    def _commit(self, new: PlaybackState):
        old = self._state
        step_changed = new.active_step != old.active_step
        if step_changed:
            new = replace(new, attention_phase=0)
            self._step_entered_at = self.scheduler.time
        self._state = new
        self._reconcile(step_changed)
        if step_changed:
            self._schedule_section()

        if self._state != old:
            logger.debug("playback %s -> %s", old, self._state)
            for callback in list(self._listeners):
                callback(self._state)

    def _normalize(self, state: PlaybackState) -> PlaybackState:
        step = clamp_step(state.active_step)
        phase = 0
        if step == ATTENTION_STEP:
            phase = int(state.attention_phase) % self.config.attention_phases
        return PlaybackState(step, bool(state.is_playing), phase)

    def _reconcile(self, step_changed: bool):
        s = self._state
        if s.is_playing and s.active_step >= TERMINAL_STEP:
            s = self._state = replace(s, is_playing=False)

        if s.is_playing and s.active_step < TERMINAL_STEP:
            if step_changed or self._step_task is None:
                self._cancel_step_timer()
                self._step_task = self.scheduler.schedule(
                    self.config.step_duration, self._on_step_timer)
        else:
            self._cancel_step_timer()

        if s.is_playing and s.active_step == ATTENTION_STEP:
            if self._attention_task is None:
                interval = self.config.attention_phase_interval
                self._attention_task = self.scheduler.schedule(
                    interval, self.attention_tick, interval=interval)
        elif self._attention_task is not None:
            self._attention_task.cancel()
            self._attention_task = None

    def _cancel_step_timer(self):
        if self._step_task is not None:
            self._step_task.cancel()
            self._step_task = None

    def _on_step_timer(self):
        self._step_task = None
        self.tick()

    def _schedule_section(self):
        if self._section_task is not None:
            self._section_task.cancel()
        self._section_task = self.scheduler.schedule(
            self.config.scroll_delay, self._emit_section)

    def _emit_section(self):
        self._section_task = None
        key = section_for_step(self._state.active_step)
        logger.debug("focus section %r", key)
        for callback in list(self._section_listeners):
            callback(key)
