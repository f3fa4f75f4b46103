"""Capture a single JPG frame of the walkthrough without opening a window.

Usage:
    python capture_screenshot.py [--time TIME_SEC] [--output PATH]
"""
import os
import sys
import argparse

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from animation.controller import StepController
from visualization.attention_scores import head_scores
from visualization.renderer import FrameRenderer
from visualization.scroll import SectionScroller
from visualization.view import CosmeticState, build_view
from walkthrough import content
from walkthrough.parameters import PlaybackConfig
from walkthrough.steps import ATTENTION_STEP


def render_at(target_time: float, width: int = 1920, height: int = 1080,
              seed: int = 0, config: PlaybackConfig = None) -> tuple:
    """Autoplay from the first step for target_time seconds and render that frame.
    Returns (image, controller)."""
    config = config or PlaybackConfig()
    renderer = FrameRenderer(width, height)
    renderer.scroller = SectionScroller(renderer.viewport_height, duration=config.scroll_duration)
    controller = StepController(config)
    controller.on_section(renderer.scroller.scroll_to)
    scores = head_scores(content.NUM_HEADS, len(content.SAMPLE_TOKENS), seed=seed)
    cosmetic = CosmeticState()

    def view():
        return build_view(controller.state, cosmetic, controller.step_elapsed, scores, config)

    def advance(dt):
        controller.update(dt)
        # Sections must be laid out for the current step before its scroll fires
        renderer.layout(view())
        renderer.scroller.update(dt)

    controller.play()
    renderer.layout(view())
    dt_step = 1.0 / 60.0
    t = 0.0
    while t + dt_step <= target_time:
        advance(dt_step)
        t += dt_step
    advance(max(target_time - t, 0.0))
    return renderer.render(view(), controller.time), controller


def capture_screenshot(target_time: float, out_path: str, width: int = 1920,
                       height: int = 1080, seed: int = 0):
    img, controller = render_at(target_time, width, height, seed)
    os.makedirs(os.path.dirname(out_path) or '.', exist_ok=True)
    img.save(out_path, "JPEG", quality=95)
    size_kb = os.path.getsize(out_path) / 1024
    print(f"Saved {out_path} ({img.size[0]}x{img.size[1]}, {size_kb:.0f}KB)")
    print(f"  Step: {controller.current_step.name}, t={target_time:.1f}s, "
          f"attention phase {controller.attention_phase}")
    return img


def main():
    parser = argparse.ArgumentParser(description="Capture a screenshot of the GPT walkthrough")
    parser.add_argument("--time", type=float, default=None,
                        help="Seconds of autoplay before capturing (default: mid attention step)")
    parser.add_argument("--output", type=str, default=None,
                        help="Output path (default: assets/hero.jpg)")
    parser.add_argument("--width", type=int, default=1920)
    parser.add_argument("--height", type=int, default=1080)
    parser.add_argument("--seed", type=int, default=0)
    args = parser.parse_args()

    base_dir = os.path.dirname(os.path.abspath(__file__))
    if args.output is None:
        args.output = os.path.join(base_dir, "assets", "hero.jpg")

    if args.time is None:
        # Attention step with the Query and Key cards lit
        config = PlaybackConfig()
        args.time = ATTENTION_STEP * config.step_duration + 1.5 * config.attention_phase_interval
        print(f"Auto-selected time: {args.time:.1f}s (multi-head attention)")

    capture_screenshot(args.time, args.output, args.width, args.height, args.seed)


if __name__ == "__main__":
    main()
