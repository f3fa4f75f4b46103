import pytest

from visualization.scroll import SectionScroller


def make_scroller():
    s = SectionScroller(viewport_height=400, duration=0.6)
    s.set_content_height(2000)
    s.register('input', 100, 150)
    s.register('attention', 1000, 200)
    s.register('output', 1900, 100)
    return s


def test_scroll_centers_section():
    s = make_scroller()
    assert s.scroll_to('attention')
    assert s.target == pytest.approx(900.0)
    s.update(0.3)
    assert 0.0 < s.offset < 900.0
    assert s.animating
    s.update(0.3)
    assert s.offset == pytest.approx(900.0)
    assert not s.animating


def test_scroll_target_is_clamped_to_content():
    s = make_scroller()
    s.scroll_to('input')
    assert s.target == 0.0
    s.scroll_to('output')
    assert s.target == pytest.approx(1600.0)


def test_unknown_section_is_ignored():
    s = make_scroller()
    s.jump_to(500)
    assert not s.scroll_to('missing')
    s.update(1.0)
    assert s.offset == 500


def test_shrinking_content_clamps_offset():
    s = make_scroller()
    s.jump_to(1500)
    s.set_content_height(1000)
    assert s.offset == 600


def test_scroll_to_section_laid_out_later():
    s = make_scroller()
    assert not s.scroll_to('feedforward')
    assert s.pending == 'feedforward'
    assert not s.flush_pending()
    s.register('feedforward', 1300, 200)
    assert s.flush_pending()
    assert s.pending is None
    assert s.target == pytest.approx(1200.0)


def test_newer_scroll_replaces_deferred_one():
    s = make_scroller()
    s.scroll_to('feedforward')
    s.scroll_to('input')
    assert s.pending is None
    s.register('feedforward', 1300, 200)
    assert not s.flush_pending()
    assert s.target == 0.0
