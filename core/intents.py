"""User intents sent back from the screen to the controller.

The window maps keys and hit regions to (intent, arg) pairs; apply_intent
routes playback intents to the controller and everything else to the
cosmetic state.
"""
import logging

from walkthrough.steps import NUM_STEPS

logger = logging.getLogger(__name__)

PLAYBACK_INTENTS = ('play', 'pause', 'toggle', 'reset', 'go_to', 'next', 'previous')
COSMETIC_INTENTS = ('select_head', 'cycle_head', 'hover_cell', 'clear_hover')

# Logical key names; the window translates its own key codes to these
KEY_INTENTS = {
    'space': ('toggle', None),
    'r': ('reset', None),
    'right': ('next', None),
    'left': ('previous', None),
    'h': ('cycle_head', None),
}
KEY_INTENTS.update({str(i + 1): ('go_to', i) for i in range(NUM_STEPS)})


def apply_intent(controller, cosmetic, intent: str, arg=None, grid_size: int = None):
    """Apply one intent. Unknown intents raise ValueError."""
    logger.debug("intent %s %r", intent, arg)
    if intent == 'play':
        controller.play()
    elif intent == 'pause':
        controller.pause()
    elif intent == 'toggle':
        controller.toggle()
    elif intent == 'reset':
        controller.reset()
    elif intent == 'go_to':
        controller.go_to(arg)
    elif intent == 'next':
        controller.go_to(controller.active_step + 1)
    elif intent == 'previous':
        controller.go_to(controller.active_step - 1)
    elif intent == 'select_head':
        cosmetic.select_head(arg)
    elif intent == 'cycle_head':
        cosmetic.cycle_head()
    elif intent == 'hover_cell':
        row, col = arg
        cosmetic.hover_cell(row, col, grid_size if grid_size is not None else max(row, col) + 1)
    elif intent == 'clear_hover':
        cosmetic.clear_hover()
    else:
        raise ValueError(f"Unknown intent: {intent!r}")
