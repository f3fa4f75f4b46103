import dataclasses

import numpy as np
import pytest

from walkthrough.parameters import PlaybackConfig
from walkthrough.steps import (
    STEPS, NUM_STEPS, TERMINAL_STEP, ATTENTION_STEP, clamp_step, get_step, section_for_step,
)
from walkthrough import content


def test_catalog_is_ordered_and_complete():
    assert NUM_STEPS == 8
    assert [s.id for s in STEPS] == list(range(8))
    assert STEPS[ATTENTION_STEP].name == "Multi-Head Attention"
    assert STEPS[TERMINAL_STEP].name == "Output Projection"
    assert all(s.description for s in STEPS)


def test_steps_are_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        STEPS[0].name = "changed"


def test_section_mapping():
    assert [section_for_step(i) for i in range(8)] == [
        'input', 'embeddings', 'positional', 'attention', 'attention',
        'feedforward', 'feedforward', 'output',
    ]


@pytest.mark.parametrize("value, expected", [
    (-3, 0), (0, 0), (4, 4), (7, 7), (12, 7), (2.9, 2), (float('inf'), 7),
    (np.int64(3), 3), (np.float32(5.5), 5), (np.int32(42), 7), (float('nan'), 0),
])
def test_clamp_step(value, expected):
    assert clamp_step(value) == expected


def test_clamp_step_rejects_non_numbers():
    with pytest.raises(TypeError):
        clamp_step(None)
    with pytest.raises(TypeError):
        clamp_step(True)
    with pytest.raises(TypeError):
        clamp_step("3")


def test_get_step_clamps():
    assert get_step(-1).id == 0
    assert get_step(99).id == 7


@pytest.mark.parametrize("kwargs", [
    {'step_duration': 0},
    {'attention_phase_interval': -0.5},
    {'scroll_delay': -0.1},
    {'attention_phases': 0},
])
def test_invalid_config_raises(kwargs):
    with pytest.raises(ValueError):
        PlaybackConfig(**kwargs)


def test_default_config():
    config = PlaybackConfig()
    assert config.step_duration == 4.0
    assert config.attention_phase_interval == 0.75
    assert config.scroll_delay == 0.1
    assert config.attention_phases == 4


def test_content_helpers():
    assert content.SAMPLE_TOKENS == ["The", "cat", "sat", "on", "the", "mat"]
    assert content.embedding_label(True) == "d=768"
    assert content.embedding_label(False) == "d=?"
    assert content.format_probability(0.89, True) == "0.89"
    assert content.format_probability(0.008, True) == "0.008"
    assert content.format_probability(0.89, False) == "?"
    assert content.D_FF == 3072
