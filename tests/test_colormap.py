import numpy as np

from visualization import colormap as cm


def test_rgb_and_rgba8():
    c = cm.rgb('#8b5cf6', 0.5)
    assert c.shape == (4,)
    assert cm.to_rgba8(c) == (139, 92, 246, 128)


def test_gradient_endpoints():
    g = cm.gradient(10)
    assert g.shape == (10, 4)
    np.testing.assert_allclose(g[0], cm.VECTOR_GRADIENT[0])
    np.testing.assert_allclose(g[-1], cm.VECTOR_GRADIENT[-1])


def test_gradient_image_array():
    arr = cm.gradient_image_array(20, 5, alpha=0.5)
    assert arr.shape == (5, 20, 4)
    assert arr.dtype == np.uint8
    assert np.all(arr[:, :, 3] == 128)


def test_bar_scales():
    scales = cm.bar_scales(8)
    assert scales[0] == 0.7
    assert np.all((scales >= 0.4) & (scales <= 1.0))


def test_attention_cell_alpha_follows_scores_only_when_active():
    scores = np.array([[0.0, 0.5], [0.9, 0.25]], dtype=np.float32)
    active = cm.attention_cell_colors(scores, active=True)
    np.testing.assert_allclose(active[:, :, 3], scores * 0.8)
    inactive = cm.attention_cell_colors(scores, active=False)
    np.testing.assert_allclose(inactive[:, :, 3], 0.1)


def test_attention_text_colors():
    scores = np.array([[0.6, 0.4]], dtype=np.float32)
    colors = cm.attention_text_colors(scores)
    np.testing.assert_allclose(colors[0, 0], cm.WHITE)
    np.testing.assert_allclose(colors[0, 1], cm.BLACK)
