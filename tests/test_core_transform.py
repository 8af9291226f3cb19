# tests/test_core_transform.py
import math

import numpy as np
import pytest

from conftest import buffer_from_complex, complex_from_buffer
from flatfft.core.transform import (
    bit_reverse,
    transform,
    forward_complex_fft,
    inverse_complex_fft,
)


def test_impulse_at_zero_is_flat():
    buf = [1.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0]
    forward_complex_fft(buf, 4)
    assert buf == [1.0, 0.0] * 4


def test_impulse_at_one_gives_positive_rotation():
    buf = [0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 0.0, 0.0]
    forward_complex_fft(buf, 4)
    np.testing.assert_allclose(buf, [1, 0, 0, 1, -1, 0, 0, -1], atol=1e-12)


def test_constant_input_concentrates_in_dc():
    buf = [1.0, 0.0] * 8
    forward_complex_fft(buf, 8)
    z = complex_from_buffer(buf)
    assert z[0] == pytest.approx(8.0)
    np.testing.assert_allclose(z[1:], 0.0, atol=1e-12)


def test_single_point_is_untouched():
    buf = [3.5, -2.0]
    forward_complex_fft(buf, 1)
    assert buf == [3.5, -2.0]
    inverse_complex_fft(buf, 1)
    assert buf == [3.5, -2.0]


@pytest.mark.parametrize("n", [2, 4, 8, 16, 64, 256])
def test_forward_matches_numpy_positive_exponent(rng, n):
    z = rng.standard_normal(n) + 1j * rng.standard_normal(n)
    buf = buffer_from_complex(z)
    forward_complex_fft(buf, n)
    np.testing.assert_allclose(complex_from_buffer(buf), n * np.fft.ifft(z), rtol=1e-10, atol=1e-10)


@pytest.mark.parametrize("n", [2, 8, 32, 128])
def test_inverse_matches_numpy_fft(rng, n):
    z = rng.standard_normal(n) + 1j * rng.standard_normal(n)
    buf = np.array(buffer_from_complex(z))
    inverse_complex_fft(buf, n)
    np.testing.assert_allclose(complex_from_buffer(buf), np.fft.fft(z), rtol=1e-10, atol=1e-10)


@pytest.mark.parametrize("n", [1, 2, 4, 16, 512])
def test_round_trip_scales_by_n(rng, n):
    z = rng.standard_normal(n) + 1j * rng.standard_normal(n)
    buf = buffer_from_complex(z)
    forward_complex_fft(buf, n)
    inverse_complex_fft(buf, n)
    np.testing.assert_allclose(np.asarray(buf) / n, buffer_from_complex(z), atol=1e-11)


def test_linearity(rng):
    n = 16
    x = rng.standard_normal(n) + 1j * rng.standard_normal(n)
    y = rng.standard_normal(n) + 1j * rng.standard_normal(n)
    a, b = 2.5, -0.75

    bx, by, bxy = buffer_from_complex(x), buffer_from_complex(y), buffer_from_complex(a * x + b * y)
    for buf in (bx, by, bxy):
        forward_complex_fft(buf, n)

    np.testing.assert_allclose(
        complex_from_buffer(bxy),
        a * complex_from_buffer(bx) + b * complex_from_buffer(by),
        atol=1e-10,
    )


def test_bit_reverse_permutation():
    n = 8
    buf = []
    for k in range(n):
        buf.extend((float(k), float(-k)))
    bit_reverse(buf, n)
    assert buf[0::2] == [0, 4, 2, 6, 1, 5, 3, 7]
    assert buf[1::2] == [0, -4, -2, -6, -1, -5, -3, -7]


def test_bit_reverse_is_an_involution(rng):
    n = 32
    buf = list(rng.standard_normal(2 * n))
    orig = list(buf)
    bit_reverse(buf, n)
    bit_reverse(buf, n)
    assert buf == orig


def test_transform_at_offset_leaves_surroundings(rng):
    n = 8
    z = rng.standard_normal(n) + 1j * rng.standard_normal(n)
    prefix = [11.0, 12.0, 13.0]
    suffix = [21.0, 22.0]
    buf = prefix + buffer_from_complex(z) + suffix

    forward_complex_fft(buf, n, offset=3)

    assert buf[:3] == prefix
    assert buf[-2:] == suffix
    np.testing.assert_allclose(complex_from_buffer(buf, n, offset=3), n * np.fft.ifft(z), atol=1e-10)


def test_transform_theta_selects_direction(rng):
    n = 16
    z = rng.standard_normal(n) + 1j * rng.standard_normal(n)
    inv = buffer_from_complex(z)
    transform(inv, n, -math.pi)
    # for real input the two directions are conjugates of each other
    zr = z.real
    fr, ir = buffer_from_complex(zr), buffer_from_complex(zr)
    transform(fr, n, math.pi)
    transform(ir, n, -math.pi)
    np.testing.assert_allclose(complex_from_buffer(fr), np.conj(complex_from_buffer(ir)), atol=1e-10)
    np.testing.assert_allclose(complex_from_buffer(inv), np.fft.fft(z), atol=1e-10)
