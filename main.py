"""Interactive GPT architecture walkthrough.

Usage:
    python main.py
    python main.py --autoplay --width 1440 --height 900

Keys: Space play/pause, R reset, 1-8 jump to step, Left/Right previous/next
step, H next attention head, Esc quit.
"""
import os
import sys
import argparse
import logging

os.environ['GL_SILENCE_DEPRECATION'] = '1'
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import glfw
import numpy as np
from OpenGL import GL as gl
from PIL import Image

from animation.controller import StepController
from core.intents import KEY_INTENTS, apply_intent
from core.window import AppWindow
from visualization.attention_scores import head_scores
from visualization.renderer import FrameRenderer
from visualization.scroll import SectionScroller
from visualization.view import CosmeticState, build_view
from walkthrough import content
from walkthrough.parameters import PlaybackConfig

logger = logging.getLogger(__name__)

_GLFW_KEYS = {
    glfw.KEY_SPACE: 'space',
    glfw.KEY_R: 'r',
    glfw.KEY_RIGHT: 'right',
    glfw.KEY_LEFT: 'left',
    glfw.KEY_H: 'h',
}
_GLFW_KEYS.update({getattr(glfw, f"KEY_{i + 1}"): str(i + 1) for i in range(8)})


def blit(frame: Image.Image, fb_w: int, fb_h: int):
    """Draw an RGB frame over the whole framebuffer."""
    pixels = np.asarray(frame.transpose(Image.Transpose.FLIP_TOP_BOTTOM), dtype=np.uint8)
    gl.glViewport(0, 0, fb_w, fb_h)
    gl.glClear(gl.GL_COLOR_BUFFER_BIT)
    gl.glPixelStorei(gl.GL_UNPACK_ALIGNMENT, 1)
    gl.glWindowPos2i(0, 0)
    gl.glDrawPixels(fb_w, fb_h, gl.GL_RGB, gl.GL_UNSIGNED_BYTE, pixels)


def run(args):
    config = PlaybackConfig()
    app = AppWindow(width=args.width, height=args.height)
    fb_w, fb_h = app.get_framebuffer_size()

    renderer = FrameRenderer(fb_w, fb_h)
    renderer.scroller = SectionScroller(renderer.viewport_height, duration=config.scroll_duration)
    controller = StepController(config)
    cosmetic = CosmeticState()
    scores = head_scores(content.NUM_HEADS, len(content.SAMPLE_TOKENS), seed=args.seed)
    grid_size = len(content.SAMPLE_TOKENS)

    controller.on_section(renderer.scroller.scroll_to)
    controller.subscribe(lambda state: app.set_title(
        f"GPT Walkthrough - {controller.current_step.name}"))

    def on_key(key, mods):
        if key == glfw.KEY_ESCAPE:
            app.close()
            return
        name = _GLFW_KEYS.get(key)
        if name in KEY_INTENTS:
            intent, arg = KEY_INTENTS[name]
            apply_intent(controller, cosmetic, intent, arg, grid_size=grid_size)

    def on_click(x, y):
        region = renderer.hit_test(x, y)
        if region is not None and region.intent != 'hover_cell':
            apply_intent(controller, cosmetic, region.intent, region.arg, grid_size=grid_size)

    def on_cursor(x, y):
        region = renderer.hit_test(x, y)
        cosmetic.clear_hover()
        if region is None:
            return
        if region.intent == 'hover_cell':
            apply_intent(controller, cosmetic, 'hover_cell', region.arg, grid_size=grid_size)
        elif region.intent in ('toggle', 'reset'):
            cosmetic.hovered_component = region.intent

    app.on_key = on_key
    app.on_click = on_click
    app.on_cursor = on_cursor

    gl.glClearColor(0.95, 0.96, 0.97, 1.0)
    if args.autoplay:
        controller.play()

    last = app.get_time()
    try:
        while not app.should_close():
            now = app.get_time()
            dt = min(now - last, 0.25)
            last = now

            controller.update(dt)
            view = build_view(controller.state, cosmetic, controller.step_elapsed,
                              scores, config)
            renderer.layout(view)
            renderer.scroller.update(dt)
            blit(renderer.render(view, controller.time), fb_w, fb_h)

            app.swap_buffers()
            app.poll_events()
    finally:
        app.terminate()


def main():
    parser = argparse.ArgumentParser(description="Animated walkthrough of a GPT transformer")
    parser.add_argument("--width", type=int, default=1280)
    parser.add_argument("--height", type=int, default=800)
    parser.add_argument("--autoplay", action="store_true",
                        help="Start playing immediately")
    parser.add_argument("--seed", type=int, default=0,
                        help="Seed for the illustrative attention scores")
    parser.add_argument("--verbose", action="store_true",
                        help="Log controller transitions")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    logger.info("Starting walkthrough (%dx%d)", args.width, args.height)
    run(args)


if __name__ == "__main__":
    main()
