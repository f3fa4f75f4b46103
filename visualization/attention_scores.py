"""Decorative attention scores for the attention grid.

The values only need to look plausible: self-attention is a bit stronger,
neighbours a bit stronger still than distant tokens, plus noise.
"""
import numpy as np


DIAGONAL_BONUS = 0.3
ADJACENCY_BONUS = 0.2
NOISE_SCALE = 0.5
MAX_SCORE = 0.99


def generate_attention_scores(n: int, rng: np.random.RandomState = None) -> np.ndarray:
    """(n, n) float32 scores in [0, 0.99]."""
    if rng is None:
        rng = np.random.RandomState()
    idx = np.arange(n)
    dist = np.abs(idx[:, np.newaxis] - idx[np.newaxis, :])
    scores = np.where(dist == 0, DIAGONAL_BONUS, 0.0)
    scores = scores + np.where(dist == 1, ADJACENCY_BONUS, 0.0)
    scores = scores + rng.random_sample((n, n)) * NOISE_SCALE
    return np.minimum(scores, MAX_SCORE).astype(np.float32)


def head_scores(num_heads: int, n: int, seed: int = 0) -> np.ndarray:
    """One score grid per attention head, (num_heads, n, n).
    Each head draws from its own seed so switching heads changes the pattern."""
    return np.stack([
        generate_attention_scores(n, np.random.RandomState(seed + h))
        for h in range(num_heads)
    ])


def format_score(score: float) -> str:
    """Cell label, on a 0-10 scale."""
    return f"{score * 10:.1f}"


def describe_cell(source: str, target: str, score: float) -> str:
    return f'Attention from "{source}" to "{target}": {score * 100:.0f}%'
