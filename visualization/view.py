"""View model of the walkthrough screen.

build_view() is a pure function of the playback state, the cosmetic state and
the time spent on the current step. The renderer draws whatever it returns
and never looks at the controller directly.
"""
from dataclasses import dataclass, field

import numpy as np

from animation.controller import PlaybackState
from animation.easing import transition
from visualization.attention_scores import head_scores, format_score, describe_cell
from visualization.colormap import bar_scales
from walkthrough import content
from walkthrough.parameters import PlaybackConfig
from walkthrough.steps import STEPS, NUM_STEPS, ATTENTION_STEP, TERMINAL_STEP

# First step at which each section lights up
SECTION_START = {
    'input': 0,
    'embeddings': 1,
    'positional': 2,
    'attention': 3,
    'feedforward': 5,
    'output': 7,
}
SECTION_ORDER = tuple(SECTION_START)

REVEAL_DURATION = 0.7


@dataclass
class CosmeticState:
    """Hover and selection state. Never affects playback."""
    selected_head: int = 0
    hovered_cell: tuple = None      # (row, col) in the attention grid
    hovered_component: str = None

    def select_head(self, head: int, num_heads: int = content.NUM_HEADS):
        self.selected_head = max(0, min(num_heads - 1, int(head)))

    def cycle_head(self, num_heads: int = content.NUM_HEADS):
        self.selected_head = (self.selected_head + 1) % num_heads

    def hover_cell(self, row: int, col: int, size: int):
        if 0 <= row < size and 0 <= col < size:
            self.hovered_cell = (row, col)
        else:
            self.hovered_cell = None

    def clear_hover(self):
        self.hovered_cell = None
        self.hovered_component = None


@dataclass
class StepIndicator:
    id: int
    name: str
    filled: bool
    current: bool


@dataclass
class TokenChip:
    text: str
    reveal: float   # 0 hidden → 1 fully raised


@dataclass
class VectorGlyph:
    scales: np.ndarray
    highlighted: bool
    label: str = ""


@dataclass
class QKVCard:
    name: str
    accent: str
    question: str
    highlighted: bool
    emphasis: float


@dataclass
class AttentionCell:
    row: int
    col: int
    score: float
    label: str
    hovered: bool


@dataclass
class AttentionPanel:
    visible: bool
    active: bool
    num_heads: int
    selected_head: int
    tokens: list
    cards: list
    cells: list
    scores: np.ndarray
    tooltip: str = None


@dataclass
class Prediction:
    word: str
    text: str
    highlight: bool


@dataclass
class SectionView:
    key: str
    title: str
    active: bool
    current: bool
    caption: str = None


@dataclass
class WalkthroughView:
    title: str
    subtitle: str
    header: str
    description: str
    is_playing: bool
    play_label: str
    indicators: list
    sections: dict
    tokens: list
    embeddings: list
    positions: list
    attention: AttentionPanel
    block_active: bool
    ffn_glyphs: list
    ffn_label: str
    ffn_expansion: str
    predictions: list
    hovered: str = None
    insights: tuple = field(default_factory=lambda: content.KEY_INSIGHTS)


def _caption_visible(key: str, step: int) -> bool:
    if key == 'feedforward':
        return step >= SECTION_START['feedforward']
    return step == SECTION_START[key]


def _build_attention(state: PlaybackState, cosmetic: CosmeticState,
                     tokens: list, scores: np.ndarray) -> AttentionPanel:
    step = state.active_step
    active = step == ATTENTION_STEP
    cards = []
    for idx, (name, accent, question) in enumerate(content.QKV_CARDS):
        reached = state.attention_phase >= idx
        cards.append(QKVCard(
            name=name, accent=accent, question=question,
            highlighted=active and reached,
            emphasis=1.0 if reached else 0.5,
        ))

    head = min(cosmetic.selected_head, scores.shape[0] - 1)
    grid = scores[head]
    n = len(tokens)
    cells = []
    tooltip = None
    for i in range(n):
        for j in range(n):
            hovered = cosmetic.hovered_cell == (i, j)
            cells.append(AttentionCell(i, j, float(grid[i, j]),
                                       format_score(grid[i, j]), hovered))
            if hovered:
                tooltip = describe_cell(tokens[i], tokens[j], float(grid[i, j]))

    return AttentionPanel(
        visible=step >= SECTION_START['attention'],
        active=active,
        num_heads=scores.shape[0],
        selected_head=head,
        tokens=list(tokens),
        cards=cards,
        cells=cells,
        scores=grid,
        tooltip=tooltip,
    )


def build_view(state: PlaybackState, cosmetic: CosmeticState = None,
               step_elapsed: float = 0.0, scores: np.ndarray = None,
               config: PlaybackConfig = None,
               tokens: list = None) -> WalkthroughView:
    cosmetic = cosmetic or CosmeticState()
    config = config or PlaybackConfig()
    tokens = list(tokens) if tokens is not None else list(content.SAMPLE_TOKENS)
    if scores is None:
        scores = head_scores(content.NUM_HEADS, len(tokens))

    step = state.active_step
    current = STEPS[step]

    indicators = [
        StepIndicator(s.id, s.name, filled=step >= s.id, current=step == s.id)
        for s in STEPS
    ]

    sections = {}
    for key in SECTION_ORDER:
        caption = content.SECTION_CAPTIONS.get(key)
        sections[key] = SectionView(
            key=key,
            title=content.SECTION_TITLES[key],
            active=step >= SECTION_START[key],
            current=current.section == key,
            caption=caption if caption and _caption_visible(key, step) else None,
        )

    # Token chips re-run their staggered reveal on every step change
    token_chips = [
        TokenChip(tok, transition(step_elapsed, REVEAL_DURATION,
                                  delay=i * config.token_reveal_stagger))
        for i, tok in enumerate(tokens)
    ]

    emb_active = sections['embeddings'].active
    embeddings = [
        (tok, VectorGlyph(bar_scales(8), emb_active, content.embedding_label(emb_active)))
        for tok in tokens[:3]
    ]

    pos_active = sections['positional'].active
    positions = [
        (f"Pos {p}", float(np.sin(p * 0.5) * 4.0) if pos_active else 0.0)
        for p in range(len(tokens))
    ]

    ffn_active = sections['feedforward'].active
    ffn_glyphs = [
        VectorGlyph(bar_scales(8), ffn_active, f"Input (d={content.D_MODEL})"),
        VectorGlyph(bar_scales(8), ffn_active, f"Output (d={content.D_MODEL})"),
    ]

    revealed = step >= TERMINAL_STEP
    predictions = [
        Prediction(word, f"{word}: {content.format_probability(prob, revealed)}",
                   highlight=revealed and i == 0)
        for i, (word, prob) in enumerate(content.NEXT_TOKEN_PREDICTIONS)
    ]

    return WalkthroughView(
        title=content.TITLE,
        subtitle=content.SUBTITLE,
        header=f"Step {step + 1} of {NUM_STEPS}: {current.name}",
        description=current.description,
        is_playing=state.is_playing,
        play_label=("Pause" if state.is_playing else "Play") + " Journey",
        indicators=indicators,
        sections=sections,
        tokens=token_chips,
        embeddings=embeddings,
        positions=positions,
        attention=_build_attention(state, cosmetic, tokens, scores),
        block_active=step >= ATTENTION_STEP,
        ffn_glyphs=ffn_glyphs,
        ffn_label=content.FFN_LABEL,
        ffn_expansion=content.FFN_EXPANSION,
        predictions=predictions,
        hovered=cosmetic.hovered_component,
    )
