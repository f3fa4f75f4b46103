"""Smooth scrolling of the walkthrough content to the active section.

Sections are registered by the renderer as it lays out the page. A request
for a section that has not been laid out yet is held until the next layout
registers it; a newer request replaces it.
"""
import logging

from animation.easing import ease_out_cubic, lerp

logger = logging.getLogger(__name__)


class SectionScroller:
    def __init__(self, viewport_height: float, duration: float = 0.6):
        self.viewport_height = float(viewport_height)
        self.duration = duration
        self.content_height = float(viewport_height)
        self.sections = {}  # key -> (top, height) in content coordinates
        self.offset = 0.0
        self._from = 0.0
        self._to = 0.0
        self._t = 1.0
        self._pending = None

    def register(self, key: str, top: float, height: float):
        self.sections[key] = (float(top), float(height))

    def set_content_height(self, height: float):
        self.content_height = max(float(height), self.viewport_height)
        self.offset = self._clamp(self.offset)
        self._to = self._clamp(self._to)

    @property
    def max_offset(self) -> float:
        return max(self.content_height - self.viewport_height, 0.0)

    @property
    def target(self) -> float:
        return self._to

    @property
    def animating(self) -> bool:
        return self._t < 1.0

    def scroll_to(self, key: str) -> bool:
        """Start a smooth scroll that centers `key` in the viewport."""
        if key not in self.sections:
            logger.debug("scroll target %r not laid out yet, deferring", key)
            self._pending = key
            return False
        self._pending = None
        top, height = self.sections[key]
        target = self._clamp(top + height / 2.0 - self.viewport_height / 2.0)
        logger.debug("scroll to %r: %.1f -> %.1f", key, self.offset, target)
        self._from = self.offset
        self._to = target
        self._t = 0.0
        return True

    def flush_pending(self) -> bool:
        """Start the deferred scroll if its section has been laid out since."""
        if self._pending is None or self._pending not in self.sections:
            return False
        return self.scroll_to(self._pending)

    @property
    def pending(self):
        return self._pending

    def jump_to(self, offset: float):
        self._pending = None
        self.offset = self._to = self._clamp(offset)
        self._t = 1.0

    def update(self, dt: float):
        if self._t >= 1.0:
            return
        self._t = min(1.0, self._t + dt / max(self.duration, 1e-8))
        self.offset = lerp(self._from, self._to, ease_out_cubic(self._t))

    def _clamp(self, offset: float) -> float:
        return min(max(float(offset), 0.0), self.max_offset)
