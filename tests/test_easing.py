import pytest

from animation.easing import ease_in_out_cubic, ease_out_cubic, lerp, transition


@pytest.mark.parametrize("ease", [ease_out_cubic, ease_in_out_cubic])
def test_curves_are_clamped_to_unit_range(ease):
    assert ease(-1.0) == 0.0
    assert ease(0.0) == 0.0
    assert ease(1.0) == pytest.approx(1.0)
    assert ease(3.0) == pytest.approx(1.0)


def test_in_out_is_symmetric():
    assert ease_in_out_cubic(0.5) == pytest.approx(0.5)
    assert ease_in_out_cubic(0.25) == pytest.approx(0.0625)
    assert ease_in_out_cubic(0.75) == pytest.approx(1.0 - ease_in_out_cubic(0.25))


def test_out_cubic_front_loads_progress():
    assert ease_out_cubic(0.5) == pytest.approx(0.875)


def test_transition_honors_delay():
    assert transition(0.2, 1.0, delay=0.3) == 0.0
    assert transition(1.3, 1.0, delay=0.3) == pytest.approx(1.0)
    assert lerp(10.0, 20.0, transition(0.5, 1.0)) == pytest.approx(18.75)
