# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-24
# Description: test_vector_ops.py
# -----------------------------------------------------------------------------
import numpy as np
import pytest

from embedding.VectorOps import cosine_similarity, l2_normalize, resize_vector


@pytest.fixture
def unit_vec():
    rng = np.random.default_rng(0)
    return l2_normalize(rng.normal(size=3000))


def test_cosine_identity_and_opposite(unit_vec):
    assert cosine_similarity(unit_vec, unit_vec) == pytest.approx(1.0, abs=1e-6)
    assert cosine_similarity(unit_vec, -unit_vec) == pytest.approx(-1.0, abs=1e-6)


def test_cosine_degenerate_inputs():
    assert cosine_similarity([0.0, 0.0, 0.0], [1.0, 2.0, 3.0]) == 0.0
    assert cosine_similarity([1.0, 2.0], [1.0, 2.0, 3.0]) == 0.0
    assert cosine_similarity([], []) == 0.0


def test_cosine_stays_in_range():
    rng = np.random.default_rng(7)
    for _ in range(20):
        a, b = rng.normal(size=64), rng.normal(size=64)
        assert -1.0 <= cosine_similarity(a, b) <= 1.0


def test_resize_down_then_up_keeps_unit_norm(unit_vec):
    down = resize_vector(unit_vec, 1500)
    assert down.shape == (1500,)
    assert float(np.linalg.norm(down)) == pytest.approx(1.0, abs=1e-5)

    up = resize_vector(down, 3000)
    assert up.shape == (3000,)
    assert float(np.linalg.norm(up)) == pytest.approx(1.0, abs=1e-5)


def test_resize_same_dim_is_noop():
    vec = np.array([3.0, 4.0], dtype=np.float32)
    out = resize_vector(vec, 2)
    # no renormalisation on the identity path
    assert np.array_equal(out, vec)


def test_resize_block_average_and_repeat():
    down = resize_vector([1.0, 3.0, 5.0, 7.0], 2)
    # block means [2, 6], then unit-normalised
    assert np.allclose(down, np.array([2.0, 6.0]) / np.linalg.norm([2.0, 6.0]), atol=1e-6)

    up = resize_vector([1.0, 0.0], 4)
    assert np.allclose(up, np.array([1.0, 1.0, 0.0, 0.0]) / np.sqrt(2.0), atol=1e-6)


def test_resize_rejects_bad_target():
    with pytest.raises(ValueError):
        resize_vector([1.0, 2.0], 0)
