from dataclasses import dataclass


@dataclass
class PlaybackConfig:
    """Timing for the walkthrough. All durations are in seconds."""
    step_duration: float = 4.0              # dwell per step during autoplay
    attention_phase_interval: float = 0.75  # Q → K → V → matrix stagger
    attention_phases: int = 4
    scroll_delay: float = 0.1               # let layout settle before scrolling
    scroll_duration: float = 0.6
    token_reveal_stagger: float = 0.1       # per-token delay in the input section

    def __post_init__(self):
        for name in ('step_duration', 'attention_phase_interval',
                     'scroll_duration', 'token_reveal_stagger'):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        if self.scroll_delay < 0:
            raise ValueError(f"scroll_delay must be >= 0, got {self.scroll_delay}")
        if self.attention_phases < 1:
            raise ValueError(f"attention_phases must be >= 1, got {self.attention_phases}")
