# tests/test_core_view_norms.py
import numpy as np
import pytest

from flatfft.core import (
    ComplexView,
    apply_normalize,
    normalize_complex_inverse,
    normalize_real_inverse,
    normalize_real_inverse_2d,
    peak_normalize,
    rms_normalize,
    scale_buffer,
)


def test_view_reads_and_writes_pairs():
    buf = [9.0, 1.0, 2.0, 3.0, 4.0, 5.0, 6.0]
    view = ComplexView(buf, offset=1)
    assert view[0] == complex(1.0, 2.0)
    assert view.get(2) == (5.0, 6.0)
    assert view.slot(1) == 3

    view[1] = 7 - 8j
    view.set(2, -1.0, -2.0)
    assert buf == [9.0, 1.0, 2.0, 7.0, -8.0, -1.0, -2.0]
    assert [view[k] for k in range(3)] == [1 + 2j, 7 - 8j, -1 - 2j]


def test_view_swap_on_ndarray():
    buf = np.arange(8, dtype=np.float64)
    view = ComplexView(buf)
    view.swap(0, 3)
    np.testing.assert_array_equal(buf, [6, 7, 2, 3, 4, 5, 0, 1])


def test_scale_buffer_list_and_array():
    lst = [1.0, 2.0, 3.0, 4.0]
    scale_buffer(lst, 0.5, 2, offset=1)
    assert lst == [1.0, 1.0, 1.5, 4.0]

    arr = np.array([1.0, 2.0, 3.0, 4.0])
    scale_buffer(arr, 2.0, 3)
    np.testing.assert_array_equal(arr, [2.0, 4.0, 6.0, 4.0])


def test_inverse_normalizers():
    buf = [4.0] * 8
    normalize_complex_inverse(buf, 4)
    assert buf == [1.0] * 8

    buf = [4.0] * 8
    normalize_real_inverse(buf, 8)
    assert buf == [1.0] * 8

    buf = [4.0] * 9
    normalize_real_inverse_2d(buf, 4, 2)
    assert buf == [1.0] * 8 + [4.0]


def test_rms_and_peak():
    x = np.array([0.0, 3.0, -4.0, 0.0])
    y = rms_normalize(x, target_rms=1.0)
    assert np.sqrt(np.mean(y**2)) == pytest.approx(1.0)
    z = peak_normalize(x, peak=0.5)
    assert np.max(np.abs(z)) == pytest.approx(0.5)
    np.testing.assert_array_equal(peak_normalize(np.zeros(3)), np.zeros(3))


def test_apply_normalize_dispatch():
    x = np.array([0.5, -2.0])
    np.testing.assert_array_equal(apply_normalize(x, None), x)
    np.testing.assert_array_equal(apply_normalize(x, "none"), x)
    assert np.max(np.abs(apply_normalize(x, "Peak"))) == pytest.approx(0.99)
    with pytest.raises(ValueError):
        apply_normalize(x, "loudness")
