"""The fixed, ordered catalog of walkthrough steps.

Several steps share one section of the screen; the section key is what the
scroll service focuses when a step becomes active.
"""
import math
import numbers
from dataclasses import dataclass


@dataclass(frozen=True)
class Step:
    id: int
    name: str
    description: str
    section: str


SECTIONS = ('input', 'embeddings', 'positional', 'attention', 'feedforward', 'output')

STEPS = (
    Step(0, "Input Tokenization",
         "Text is split into tokens (words or subwords). Each token becomes the "
         "basic unit of processing.",
         'input'),
    Step(1, "Token Embeddings",
         "Each token is converted to a high-dimensional vector (typically 768 "
         "dimensions) that captures its semantic meaning.",
         'embeddings'),
    Step(2, "Positional Encoding",
         "Position information is added to embeddings using sinusoidal patterns, "
         "giving the model awareness of word order.",
         'positional'),
    Step(3, "Multi-Head Attention",
         "Tokens attend to each other through parallel attention heads, each "
         "capturing different types of relationships.",
         'attention'),
    Step(4, "Add & Normalize",
         "Residual connection preserves original information while layer "
         "normalization stabilizes training.",
         'attention'),
    Step(5, "Feed Forward",
         "Position-wise neural network applies non-linear transformations to "
         "refine each token's representation.",
         'feedforward'),
    Step(6, "Add & Normalize",
         "Another residual connection and normalization to integrate the "
         "feed-forward transformations.",
         'feedforward'),
    Step(7, "Output Projection",
         "Final linear transformation projects to vocabulary size, producing "
         "probability distribution over next tokens.",
         'output'),
)

NUM_STEPS = len(STEPS)          # 8
TERMINAL_STEP = NUM_STEPS - 1   # 7
ATTENTION_STEP = 3


def clamp_step(step_id) -> int:
    """Clamp a step id into [0, TERMINAL_STEP]. Floats are truncated, NaN maps to 0."""
    if isinstance(step_id, bool) or not isinstance(step_id, numbers.Real):
        raise TypeError(f"step id must be a number, got {type(step_id).__name__}")
    if math.isnan(step_id) or step_id <= 0:
        return 0
    if step_id >= TERMINAL_STEP:
        return TERMINAL_STEP
    return int(step_id)


def get_step(step_id) -> Step:
    return STEPS[clamp_step(step_id)]


def section_for_step(step_id) -> str:
    return get_step(step_id).section
