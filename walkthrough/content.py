"""Text and placeholder numbers shown on the walkthrough screen.

None of these values come from a model; they only illustrate each stage.
"""

SAMPLE_TEXT = "The cat sat on the mat"

D_MODEL = 768
D_FF = 4 * D_MODEL     # 3072
NUM_HEADS = 8
MIN_LAYERS, MAX_LAYERS = 12, 96

TITLE = "GPT Architecture: Interactive Deep Dive"
SUBTITLE = "Watch how transformers revolutionize language understanding through parallel self-attention"

# Heading per section, in screen order
SECTION_TITLES = {
    'input': "Step 1: Input Text Tokenization",
    'embeddings': "Step 2: Token -> Vector Embeddings",
    'positional': "Step 3: Adding Positional Information",
    'attention': "Multi-Head Self-Attention in Action",
    'feedforward': "Feed-Forward Neural Network",
    'output': "Final Step: Output Probability Distribution",
}

TRANSFORMER_BLOCK_TITLE = f"Transformer Block (Repeated {MIN_LAYERS}-{MAX_LAYERS} times)"

# Caption per section; view.build_view decides when each one is shown
SECTION_CAPTIONS = {
    'input': "Each word becomes a discrete token - the fundamental unit that flows "
        "through the neural network.",
    'embeddings': f"Each token transforms into a {D_MODEL}-dimensional vector encoding its "
        "semantic meaning - similar words have similar vectors.",
    'positional': "Sinusoidal position encodings give the model awareness of word order - "
        "crucial since attention operates on all positions simultaneously.",
    'feedforward': "Position-wise transformations refine each token independently, adding "
        "non-linearity and capacity.",
    'output': 'The model predicts "sat" with 89% confidence - it has learned that cats '
        "typically sit!",
}

# (name, accent, question)
QKV_CARDS = (
    ("Query (Q)", 'orange', "What am I looking for?"),
    ("Key (K)", 'green', "What information do I have?"),
    ("Value (V)", 'blue', "What content to pass forward?"),
)

ATTENTION_HINT = ("Brighter cells indicate stronger attention. Notice how tokens "
                  "attend to themselves and nearby context.")

FFN_LABEL = "Linear -> ReLU -> Linear"
FFN_EXPANSION = f"4x expansion ({D_FF} dims)"

# (token, probability); the first entry is the highlighted prediction
NEXT_TOKEN_PREDICTIONS = (
    ("sat", 0.89),
    ("slept", 0.05),
    ("jumped", 0.03),
    ("ran", 0.02),
    ("ate", 0.008),
    ("...", 0.002),
)

KEY_INSIGHTS = (
    ("Self-Attention Magic",
     "Each token dynamically attends to all other tokens, learning complex "
     "relationships and long-range dependencies that RNNs struggle to capture."),
    ("Parallel Processing",
     "Unlike sequential models, transformers process all positions simultaneously, "
     "enabling massive parallelization on modern GPUs."),
    ("Deep Architecture",
     f"GPT stacks {MIN_LAYERS}-{MAX_LAYERS} transformer layers, with each layer "
     "refining representations to capture increasingly abstract linguistic patterns."),
)


def tokenize(text: str) -> list[str]:
    """Split text into display tokens. Whitespace-separated words stand in
    for subword tokens."""
    return text.split()


SAMPLE_TOKENS = tokenize(SAMPLE_TEXT)   # 6 tokens


def embedding_label(active: bool) -> str:
    return f"d={D_MODEL}" if active else "d=?"


def format_probability(prob: float, revealed: bool) -> str:
    return f"{prob:g}" if revealed else "?"
