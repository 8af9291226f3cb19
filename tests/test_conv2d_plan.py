# tests/test_conv2d_plan.py
import numpy as np
import pytest

from conftest import buffer_from_complex, complex_from_buffer, naive_circular_2d
from flatfft.conv2d import (
    Transform2D,
    inverse_real_fft_2d,
    multiply_via_fft_2d,
    prepare_two_signals_2d,
)
from flatfft.core import forward_complex_fft, forward_real_fft, normalize_real_inverse_2d
from flatfft.errors import PreconditionError


# ---------------------------------------------------------------------------
# prepare_two_signals_2d
# ---------------------------------------------------------------------------

def test_prepare_2d_layout():
    a = [1.0, 2.0, 3.0, 4.0]  # 2 x 2
    b = [5.0, 6.0, 7.0]  # 1 x 3
    out = [9.0] * 24
    prepare_two_signals_2d(out, 12, a, 2, b, 3, 4)

    z = complex_from_buffer(out).reshape(3, 4)
    expected = np.array(
        [
            [1 + 5j, 2 + 6j, 7j, 0],
            [3, 4, 0, 0],
            [0, 0, 0, 0],
        ]
    )
    np.testing.assert_array_equal(z, expected)


def test_prepare_2d_narrower_grid_goes_real():
    a = [5.0, 6.0, 7.0]
    b = [1.0, 2.0, 3.0, 4.0]
    out_ab = [0.0] * 16
    out_ba = [0.0] * 16
    prepare_two_signals_2d(out_ab, 8, a, 3, b, 2, 4)
    prepare_two_signals_2d(out_ba, 8, b, 2, a, 3, 4)
    assert out_ab == out_ba
    assert out_ab[0:2] == [1.0, 5.0]


def test_prepare_2d_counts_and_offset():
    a = [1.0, 2.0, 3.0, 4.0, 99.0, 99.0]
    b = [5.0, 6.0]
    out = [-1.0] * 10
    prepare_two_signals_2d(out, 4, a, 2, b, 2, 2, count_a=4, offset=2)
    assert out[:2] == [-1.0, -1.0]
    assert out[2:] == [1.0, 5.0, 2.0, 6.0, 3.0, 0.0, 4.0, 0.0]


def test_prepare_2d_rejects_partial_rows_and_overflow():
    with pytest.raises(PreconditionError, match="whole rows"):
        prepare_two_signals_2d([0.0] * 16, 8, [1.0] * 5, 2, [1.0] * 4, 2, 4)
    with pytest.raises(PreconditionError, match="does not fit"):
        prepare_two_signals_2d([0.0] * 16, 8, [1.0] * 4, 2, [1.0] * 5, 5, 4)
    with pytest.raises(PreconditionError, match="do not fit"):
        prepare_two_signals_2d([0.0] * 8, 4, [1.0] * 6, 2, [1.0] * 2, 2, 2)


def test_prepare_2d_errors_name_the_caller_signal():
    # signal_a is the wider grid, so it lands in the imaginary slots
    with pytest.raises(PreconditionError, match="signal_a"):
        prepare_two_signals_2d([0.0] * 16, 8, [1.0] * 4, 3, [1.0] * 2, 2, 4)
    with pytest.raises(PreconditionError, match="signal_b"):
        prepare_two_signals_2d([0.0] * 16, 8, [1.0] * 2, 2, [1.0] * 4, 3, 4)


# ---------------------------------------------------------------------------
# inverse_real_fft_2d
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("width, height", [(8, 4), (2, 8), (16, 1), (4, 4)])
def test_inverse_real_separable(rng, width, height):
    """A spectrum Y(ky) * X(kx) inverts to (width*height/2) * outer(y, x)."""
    x = rng.standard_normal(width)
    y = rng.standard_normal(height)

    X = list(x)
    forward_real_fft(X, width)
    Xp = complex_from_buffer(X)  # width/2 packed pairs, lane 0 = F0 + i*F_nyq

    Y = buffer_from_complex(y.astype(np.complex128))
    forward_complex_fft(Y, height)
    Yc = complex_from_buffer(Y)

    spectrum = buffer_from_complex(np.outer(Yc, Xp).ravel())
    inverse_real_fft_2d(spectrum, width, height)

    got = np.asarray(spectrum).reshape(height, width)
    np.testing.assert_allclose(got, (width * height / 2) * np.outer(y, x), atol=1e-9)


def test_inverse_real_at_offset(rng):
    width, height = 4, 4
    grid = rng.standard_normal(width * height)
    plain = list(grid)
    shifted = [3.0, 3.0] + list(grid) + [4.0]
    inverse_real_fft_2d(plain, width, height)
    inverse_real_fft_2d(shifted, width, height, offset=2)
    assert shifted[:2] == [3.0, 3.0] and shifted[-1] == 4.0
    np.testing.assert_allclose(shifted[2:-1], plain, atol=1e-12)


# ---------------------------------------------------------------------------
# multiply_via_fft_2d + inverse: circular 2D convolution
# ---------------------------------------------------------------------------

def _conv2d_via_buffer(a, b, width, height, plan=None):
    size = width * height
    buf = [0.0] * (2 * size)
    prepare_two_signals_2d(buf, size, list(a.ravel()), a.shape[1], list(b.ravel()), b.shape[1], width)
    multiply_via_fft_2d(buf, width, height, plan=plan)
    inverse_real_fft_2d(buf, width, height, plan=plan)
    normalize_real_inverse_2d(buf, width, height)
    return np.asarray(buf[:size]).reshape(height, width)


@pytest.mark.parametrize("width, height", [(4, 4), (8, 2), (2, 8), (2, 1), (8, 8)])
def test_multiply_gives_circular_convolution(rng, width, height):
    a = rng.standard_normal((min(height, 3), min(width, 2)))
    b = rng.standard_normal((min(height, 2), min(width, 3)))
    got = _conv2d_via_buffer(a, b, width, height)
    np.testing.assert_allclose(got, naive_circular_2d(a, b, (height, width)), atol=1e-10)


def test_multiply_full_size_grids(rng):
    width, height = 4, 8
    a = rng.standard_normal((height, width))
    b = rng.standard_normal((height, width))
    got = _conv2d_via_buffer(a, b, width, height)
    np.testing.assert_allclose(got, naive_circular_2d(a, b, (height, width)), atol=1e-10)


def test_multiply_delta_is_identity(rng):
    width, height = 8, 4
    a = rng.standard_normal((height, width))
    delta = np.ones((1, 1))
    np.testing.assert_allclose(_conv2d_via_buffer(a, delta, width, height), a, atol=1e-12)


# ---------------------------------------------------------------------------
# Transform2D scratch column
# ---------------------------------------------------------------------------

def test_scratch_grows_to_tallest_grid_and_is_reused(rng):
    plan = Transform2D()
    assert plan.scratch_size == 0

    plan.inverse_real([0.0] * 16, 4, 4)
    assert plan.scratch_size == 8

    plan.inverse_real([0.0] * 8, 4, 2)
    assert plan.scratch_size == 8

    plan.multiply([0.0] * 64, 2, 16)
    assert plan.scratch_size == 32


def test_shared_plan_gives_same_results(rng):
    plan = Transform2D()
    a = rng.standard_normal((3, 3))
    b = rng.standard_normal((2, 2))
    first = _conv2d_via_buffer(a, b, 4, 8, plan=plan)
    _conv2d_via_buffer(b, a, 8, 4, plan=plan)
    again = _conv2d_via_buffer(a, b, 4, 8, plan=plan)
    np.testing.assert_allclose(first, again, atol=1e-12)
    np.testing.assert_allclose(first, _conv2d_via_buffer(a, b, 4, 8), atol=1e-12)


def test_multiply_checks_buffer_size():
    with pytest.raises(PreconditionError, match="too short"):
        multiply_via_fft_2d([0.0] * 16, 4, 4)
