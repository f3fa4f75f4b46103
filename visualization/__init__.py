"""Screen model and Pillow rendering of the walkthrough."""

from visualization.view import CosmeticState, WalkthroughView, build_view
from visualization.scroll import SectionScroller
from visualization.renderer import FrameRenderer, HitRegion
