# src/flatfft/core/fft.py
"""numpy-facing wrappers around the in-place engine."""
from __future__ import annotations

from typing import Optional

import numpy as np

from flatfft.core.norms import normalize_complex_inverse, normalize_real_inverse
from flatfft.core.realfft import forward_real_fft, inverse_real_fft
from flatfft.core.transform import forward_complex_fft, inverse_complex_fft

ArrayLike = np.ndarray

__all__ = [
    "next_pow2",
    "interleave",
    "deinterleave",
    "pack_real_spectrum",
    "unpack_real_spectrum",
    "fft",
    "ifft",
    "rfft",
    "irfft",
]


# ---------------------------------------------------------------------------
# Layout helpers
# ---------------------------------------------------------------------------

def next_pow2(n: int) -> int:
    """Smallest power of two >= n (1 for n <= 1)."""
    m = 1
    while m < n:
        m <<= 1
    return m


def _fit_length(x: ArrayLike, n: Optional[int]) -> ArrayLike:
    if n is None or n == x.shape[0]:
        return x
    if x.shape[0] > n:
        return x[:n]
    return np.pad(x, (0, n - x.shape[0]), mode="constant", constant_values=0)


def interleave(z: ArrayLike) -> np.ndarray:
    """Complex (n,) -> float64 (2n,) as ``[re0, im0, re1, im1, ...]``."""
    z = np.asarray(z).ravel()
    out = np.empty(2 * z.size, dtype=np.float64)
    out[0::2] = z.real
    out[1::2] = z.imag if np.iscomplexobj(z) else 0.0
    return out


def deinterleave(buffer: ArrayLike, n: Optional[int] = None, offset: int = 0) -> np.ndarray:
    """Read ``n`` pairs at ``offset`` back into a complex128 array."""
    buf = np.asarray(buffer, dtype=np.float64)
    if n is None:
        n = (buf.size - offset) // 2
    seg = buf[offset : offset + 2 * n]
    return seg[0::2] + 1j * seg[1::2]


def unpack_real_spectrum(packed: ArrayLike, n: Optional[int] = None) -> np.ndarray:
    """
    Expand the packed real-FFT layout (``n`` slots) into ``n/2 + 1`` complex
    bins, DC first and Nyquist last.
    """
    p = np.asarray(packed, dtype=np.float64)
    if n is None:
        n = p.size
    half = n // 2
    out = np.empty(half + 1, dtype=np.complex128)
    out[0] = p[0]
    out[half] = p[1]
    if half > 1:
        out[1:half] = p[2:n:2] + 1j * p[3:n:2]
    return out


def pack_real_spectrum(spectrum: ArrayLike, n: Optional[int] = None) -> np.ndarray:
    """Inverse of :func:`unpack_real_spectrum`. Imaginary parts of DC/Nyquist are dropped."""
    X = np.asarray(spectrum, dtype=np.complex128)
    if n is None:
        n = 2 * (X.size - 1)
    half = n // 2
    out = np.zeros(n, dtype=np.float64)
    out[0] = X[0].real
    out[1] = X[half].real
    if half > 1:
        out[2:n:2] = X[1:half].real
        out[3:n:2] = X[1:half].imag
    return out


# ---------------------------------------------------------------------------
# Transforms
# ---------------------------------------------------------------------------

def fft(x: ArrayLike, n: Optional[int] = None) -> np.ndarray:
    """
    Forward transform of a 1-D array (engine convention, unnormalized).

    Parameters
    ----------
    x : ndarray
        Real or complex samples.
    n : int, optional
        Transform length (power of two). Input is zero-padded or truncated.

    Returns
    -------
    ndarray, complex128
        ``sum_m x[m] exp(+2j*pi*k*m/n)`` for ``k = 0 .. n-1``.
    """
    z = _fit_length(np.asarray(x).ravel(), n)
    buf = interleave(z)
    forward_complex_fft(buf, z.size)
    return deinterleave(buf, z.size)


def ifft(X: ArrayLike, n: Optional[int] = None, normalize: bool = True) -> np.ndarray:
    """Inverse of :func:`fft`. With ``normalize=False`` the ``1/n`` is skipped."""
    Z = _fit_length(np.asarray(X).ravel(), n)
    buf = interleave(Z)
    inverse_complex_fft(buf, Z.size)
    if normalize:
        normalize_complex_inverse(buf, Z.size)
    return deinterleave(buf, Z.size)


def rfft(x: ArrayLike, n: Optional[int] = None) -> np.ndarray:
    """One-sided spectrum (``n/2 + 1`` bins) of real samples via the half-size path."""
    buf = np.array(_fit_length(np.asarray(x, dtype=np.float64).ravel(), n), dtype=np.float64)
    forward_real_fft(buf, buf.size)
    return unpack_real_spectrum(buf)


def irfft(X: ArrayLike, n: Optional[int] = None) -> np.ndarray:
    """Real samples from a one-sided spectrum, normalized."""
    X = np.asarray(X, dtype=np.complex128).ravel()
    if n is None:
        n = 2 * (X.size - 1)
    buf = pack_real_spectrum(X, n)
    inverse_real_fft(buf, n)
    normalize_real_inverse(buf, n)
    return buf
