import numpy as np


def rgb(hex_code: str, alpha: float = 1.0) -> np.ndarray:
    """'#8b5cf6' -> float32 RGBA in [0, 1]."""
    h = hex_code.lstrip('#')
    r, g, b = (int(h[i:i + 2], 16) / 255.0 for i in (0, 2, 4))
    return np.array([r, g, b, alpha], dtype=np.float32)


def to_rgba8(color) -> tuple:
    """Float RGBA (or RGB) in [0, 1] -> integer tuple for Pillow."""
    c = np.clip(np.asarray(color, dtype=np.float32), 0.0, 1.0)
    return tuple(int(v) for v in np.round(c * 255.0))


# ── Palette ───────────────────────────────────────────────────────
BACKGROUND = rgb('#f3f4f6')
PANEL = rgb('#ffffff')
INACTIVE = rgb('#e5e7eb')
INACTIVE_BAR = rgb('#d1d5db', 0.3)
TEXT = rgb('#1f2937')
TEXT_MUTED = rgb('#6b7280')
WHITE = rgb('#ffffff')
BLACK = rgb('#000000')
ATTENTION_CELL = rgb('#8b5cf6')

# Accent color per screen section
SECTION_ACCENTS = {
    'input': rgb('#3b82f6'),
    'embeddings': rgb('#a855f7'),
    'positional': rgb('#22c55e'),
    'attention': rgb('#6366f1'),
    'feedforward': rgb('#6366f1'),
    'output': rgb('#ef4444'),
}

QKV_ACCENTS = {
    'orange': rgb('#f97316'),
    'green': rgb('#16a34a'),
    'blue': rgb('#2563eb'),
}

# blue-400 → purple-500 → pink-500
VECTOR_GRADIENT = (rgb('#60a5fa'), rgb('#a855f7'), rgb('#ec4899'))


def gradient(width: int, stops=VECTOR_GRADIENT, alpha: float = 1.0) -> np.ndarray:
    """Horizontal multi-stop gradient. Returns (width, 4) float32."""
    width = max(int(width), 1)
    stops = np.asarray(stops, dtype=np.float32)
    x = np.linspace(0.0, 1.0, width, dtype=np.float32)
    pos = np.linspace(0.0, 1.0, len(stops), dtype=np.float32)
    out = np.empty((width, 4), dtype=np.float32)
    for ch in range(4):
        out[:, ch] = np.interp(x, pos, stops[:, ch])
    out[:, 3] *= alpha
    return out


def gradient_image_array(width: int, height: int, stops=VECTOR_GRADIENT,
                         alpha: float = 1.0) -> np.ndarray:
    """(height, width, 4) uint8 RGBA strip, ready for PIL.Image.fromarray."""
    row = gradient(width, stops, alpha)
    strip = np.repeat(row[np.newaxis, :, :], max(int(height), 1), axis=0)
    return np.round(np.clip(strip, 0.0, 1.0) * 255.0).astype(np.uint8)


def bar_scales(size: int) -> np.ndarray:
    """Relative width of each bar in a vector glyph: 0.7 + 0.3·sin(0.5·i)."""
    return 0.7 + np.sin(np.arange(size) * 0.5) * 0.3


def attention_cell_colors(scores: np.ndarray, active: bool,
                          alpha_scale: float = 0.8,
                          inactive_alpha: float = 0.1) -> np.ndarray:
    """Score matrix -> (rows, cols, 4) RGBA of the attention grid.
    Cell opacity follows the score only while the attention step is shown."""
    rows, cols = scores.shape
    colors = np.zeros((rows, cols, 4), dtype=np.float32)
    colors[:, :, :3] = ATTENTION_CELL[:3]
    if active:
        colors[:, :, 3] = np.clip(scores * alpha_scale, 0.0, 1.0)
    else:
        colors[:, :, 3] = inactive_alpha
    return colors


def attention_text_colors(scores: np.ndarray, threshold: float = 0.5) -> np.ndarray:
    """White labels on strong cells, black elsewhere. (rows, cols, 4)."""
    mask = (scores > threshold)[:, :, np.newaxis]
    return np.where(mask, WHITE, BLACK).astype(np.float32)
