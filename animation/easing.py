"""Easing curves for screen transitions (scroll, reveals, highlights).

Every curve takes raw progress, clamps it to [0, 1] and maps 0 -> 0, 1 -> 1.
"""
import numpy as np


def _unit(t) -> float:
    return float(np.clip(t, 0.0, 1.0))


def ease_out_cubic(t: float) -> float:
    """Fast start, settles into place. Used for scrolls and reveals."""
    remaining = 1.0 - _unit(t)
    return 1.0 - remaining ** 3


def ease_in_out_cubic(t: float) -> float:
    """Symmetric S-curve: the out curve mirrored about the midpoint."""
    t = _unit(t)
    if t < 0.5:
        return 0.5 * (1.0 - ease_out_cubic(1.0 - 2.0 * t))
    return 0.5 + 0.5 * ease_out_cubic(2.0 * t - 1.0)


def transition(elapsed: float, duration: float, delay: float = 0.0, ease=ease_out_cubic) -> float:
    """Eased 0→1 progress of a transition that starts `delay` seconds in."""
    return ease((elapsed - delay) / max(duration, 1e-8))


def lerp(a, b, t: float):
    return a + (b - a) * t
