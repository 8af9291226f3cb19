# src/flatfft/conv1d/signal.py
"""1D convolution of numpy arrays through the packed two-signal pipeline."""
from __future__ import annotations

import logging
from typing import Literal

import numpy as np

from flatfft.conv1d.packing import multiply_via_fft_1d, prepare_two_signals_1d
from flatfft.core.checks import is_power_of_two
from flatfft.core.fft import next_pow2
from flatfft.core.norms import normalize_complex_inverse
from flatfft.core.transform import inverse_complex_fft

ArrayLike = np.ndarray
Mode = Literal["full", "same-first", "same-center", "circular"]

__all__ = ["circular_convolve", "convolve"]

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------

def _as_1d(x: ArrayLike, name: str) -> np.ndarray:
    arr = np.asarray(x, dtype=np.float64)
    if arr.ndim != 1:
        raise ValueError(f"{name} must be 1D, got shape {arr.shape}")
    if arr.size == 0:
        raise ValueError(f"{name} must not be empty")
    return arr


def _circular(x: np.ndarray, h: np.ndarray, n: int) -> np.ndarray:
    """Length-``n`` circular convolution, both inputs already <= n samples."""
    buf = np.zeros(2 * n, dtype=np.float64)
    prepare_two_signals_1d(buf, n, x, x.size, h, h.size)
    multiply_via_fft_1d(buf, n)
    inverse_complex_fft(buf, n)
    normalize_complex_inverse(buf, n)
    return buf[0::2].copy()


def _crop(y_full: np.ndarray, mode: str, n_ref: int) -> np.ndarray:
    if mode == "full":
        return y_full
    if mode == "same-first":
        return y_full[:n_ref]
    if mode == "same-center":
        start = max(0, (y_full.size - n_ref) // 2)
        return y_full[start : start + n_ref]
    raise ValueError(f"Unknown mode {mode!r}")


# ---------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------

def circular_convolve(x: ArrayLike, h: ArrayLike) -> np.ndarray:
    """
    Circular convolution with period ``len(x)``.

    Parameters
    ----------
    x : ndarray, shape (N,)
        Reference signal; N must be a power of two.
    h : ndarray, shape (M,), M <= N
        Kernel, zero-padded to N.

    Returns
    -------
    ndarray, shape (N,)
    """
    x = _as_1d(x, "x")
    h = _as_1d(h, "h")
    n = x.size
    if not is_power_of_two(n):
        raise ValueError(f"circular length must be a power of two, got {n}")
    if h.size > n:
        raise ValueError(f"kernel longer than the period ({h.size} > {n})")
    return _circular(x, h, n)


def convolve(x: ArrayLike, h: ArrayLike, mode: Mode = "full") -> np.ndarray:
    """
    Linear (or circular) convolution of two real 1D signals.

    Pipeline: pack both signals → one forward FFT → separate and multiply →
    one inverse FFT → crop.

    Parameters
    ----------
    x : ndarray, shape (N,)
        Reference signal (defines 'same-*' lengths and the circular period).
    h : ndarray, shape (M,)
        Kernel.
    mode : {"full","same-first","same-center","circular"}
        Output size policy. "circular" delegates to :func:`circular_convolve`.

    Returns
    -------
    ndarray
        ``N + M - 1`` samples for "full", ``N`` otherwise.
    """
    if mode == "circular":
        return circular_convolve(x, h)
    if mode not in ("full", "same-first", "same-center"):
        raise ValueError(f"Unknown mode {mode!r}")

    x = _as_1d(x, "x")
    h = _as_1d(h, "h")
    full_len = x.size + h.size - 1
    n = next_pow2(full_len)
    logger.debug("convolve: %d * %d -> %d (transform size %d)", x.size, h.size, full_len, n)

    y_full = _circular(x, h, n)[:full_len]
    return _crop(y_full, mode, x.size)
