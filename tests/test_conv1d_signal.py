# tests/test_conv1d_signal.py
import numpy as np
import pytest

from conftest import naive_circular
from flatfft.conv1d import circular_convolve, convolve


@pytest.mark.parametrize("n, m", [(1, 1), (5, 3), (64, 7), (100, 100), (3, 17)])
def test_full_matches_numpy(rng, n, m):
    x = rng.standard_normal(n)
    h = rng.standard_normal(m)
    y = convolve(x, h, mode="full")
    assert y.shape == (n + m - 1,)
    np.testing.assert_allclose(y, np.convolve(x, h), atol=1e-10)


def test_same_modes(rng):
    x = rng.standard_normal(50)
    h = rng.standard_normal(9)
    full = np.convolve(x, h)

    y_first = convolve(x, h, mode="same-first")
    np.testing.assert_allclose(y_first, full[:50], atol=1e-10)

    y_center = convolve(x, h, mode="same-center")
    np.testing.assert_allclose(y_center, np.convolve(x, h, mode="same"), atol=1e-10)


def test_circular_mode(rng):
    x = rng.standard_normal(32)
    h = rng.standard_normal(5)
    np.testing.assert_allclose(convolve(x, h, mode="circular"), naive_circular(x, h, 32), atol=1e-10)
    np.testing.assert_allclose(circular_convolve(x, h), naive_circular(x, h, 32), atol=1e-10)


def test_circular_rejects_bad_lengths():
    with pytest.raises(ValueError, match="power of two"):
        circular_convolve(np.ones(12), np.ones(3))
    with pytest.raises(ValueError, match="longer"):
        circular_convolve(np.ones(4), np.ones(5))


def test_input_validation():
    with pytest.raises(ValueError):
        convolve(np.ones(4), np.ones(2), mode="valid")
    with pytest.raises(ValueError):
        convolve(np.ones((2, 2)), np.ones(2))
    with pytest.raises(ValueError):
        convolve(np.array([]), np.ones(2))


def test_inputs_are_not_modified(rng):
    x = rng.standard_normal(10)
    h = rng.standard_normal(4)
    x0, h0 = x.copy(), h.copy()
    convolve(x, h)
    np.testing.assert_array_equal(x, x0)
    np.testing.assert_array_equal(h, h0)
