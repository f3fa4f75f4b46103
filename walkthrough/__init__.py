"""Static walkthrough data: playback configuration, step catalog and screen content."""

from walkthrough.parameters import PlaybackConfig
from walkthrough.steps import Step, STEPS, NUM_STEPS, get_step, section_for_step
