import pytest

from animation.controller import StepController
from core.intents import KEY_INTENTS, apply_intent
from visualization.view import CosmeticState


def test_key_map_covers_steps():
    assert KEY_INTENTS['1'] == ('go_to', 0)
    assert KEY_INTENTS['8'] == ('go_to', 7)
    assert KEY_INTENTS['space'] == ('toggle', None)


def test_playback_intents():
    c, cosmetic = StepController(), CosmeticState()
    apply_intent(c, cosmetic, 'toggle')
    assert c.is_playing
    apply_intent(c, cosmetic, 'next')
    assert c.active_step == 1 and not c.is_playing
    apply_intent(c, cosmetic, 'previous')
    apply_intent(c, cosmetic, 'previous')
    assert c.active_step == 0
    apply_intent(c, cosmetic, 'go_to', 6)
    apply_intent(c, cosmetic, 'next')
    apply_intent(c, cosmetic, 'next')
    assert c.active_step == 7
    apply_intent(c, cosmetic, 'reset')
    assert c.active_step == 0


def test_cosmetic_intents_leave_playback_alone():
    c, cosmetic = StepController(), CosmeticState()
    apply_intent(c, cosmetic, 'select_head', 3)
    apply_intent(c, cosmetic, 'hover_cell', (2, 4), grid_size=6)
    assert cosmetic.selected_head == 3
    assert cosmetic.hovered_cell == (2, 4)
    apply_intent(c, cosmetic, 'clear_hover')
    assert cosmetic.hovered_cell is None
    assert c.state.active_step == 0 and not c.is_playing


def test_unknown_intent_raises():
    with pytest.raises(ValueError):
        apply_intent(StepController(), CosmeticState(), 'rewind')
