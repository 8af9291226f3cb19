# src/flatfft/conv1d/packing.py
"""
Two real signals, one complex FFT (1D).

Two real sequences ``a`` and ``b`` are packed as ``z = a + i*b``. Since both
are real, their spectra can be recovered from ``Z = FFT(z)``:

    A[k] = (Z[k] + conj(Z[n-k])) / 2
    B[k] = (Z[k] - conj(Z[n-k])) / 2i

which is what :func:`multiply_via_fft_1d` and :func:`split_two_real_ffts_1d`
exploit.
"""
from __future__ import annotations

from math import pi
from typing import MutableSequence, Sequence

from flatfft.core import checks
from flatfft.core.transform import transform
from flatfft.core.view import ComplexView
from flatfft.errors import PreconditionError

Buffer = MutableSequence[float]

__all__ = [
    "prepare_two_signals_1d",
    "multiply_via_fft_1d",
    "split_two_real_ffts_1d",
]


def prepare_two_signals_1d(
    out: Buffer,
    size: int,
    signal_a: Sequence[float],
    len_a: int,
    signal_b: Sequence[float],
    len_b: int,
    offset: int = 0,
) -> None:
    """
    Interleave two real signals into ``size`` complex pairs of ``out``.

    The shorter signal goes into the real slots and the longer one into the
    imaginary slots. Past the end of the shorter signal its slot is written as
    a literal 0 while the longer one keeps being copied; past both, pairs are
    ``(0, 0)`` up to ``size``. No transform is performed.
    """
    if checks.checks_enabled():
        checks.require_slots(out, offset, 2 * size, name="out")
        if max(len_a, len_b) > size:
            raise PreconditionError(
                f"signals of length {len_a} and {len_b} do not fit in {size} pairs"
            )
        checks.require_slots(signal_a, 0, len_a, name="signal_a")
        checks.require_slots(signal_b, 0, len_b, name="signal_b")

    if len_a > len_b:
        signal_a, signal_b, len_a, len_b = signal_b, signal_a, len_b, len_a

    view = ComplexView(out, offset)
    for k in range(len_a):
        view.set(k, signal_a[k], signal_b[k])

    for k in range(len_a, len_b):
        view.set(k, 0.0, signal_b[k])

    for k in range(len_b, size):
        view.set(k, 0.0, 0.0)


def multiply_via_fft_1d(buffer: Buffer, n: int, offset: int = 0) -> None:
    """
    Spectrum of the circular convolution of two packed real signals.

    ``buffer`` holds ``n`` pairs prepared by :func:`prepare_two_signals_1d`.
    After the call it holds the full (Hermitian) spectrum ``A[k] * B[k]``;
    running :func:`inverse_complex_fft` and dividing by ``n`` leaves the
    circular convolution in the real slots (imaginary slots ~ 0).
    """
    checks.check_complex(buffer, n, offset)

    transform(buffer, n, pi, offset)
    view = ComplexView(buffer, offset)

    # DC and Nyquist are their own mirrors: A = Re Z, B = Im Z
    re, im = view.get(0)
    view.set(0, re * im, 0.0)
    if n > 1:
        re, im = view.get(n // 2)
        view.set(n // 2, re * im, 0.0)

    for k in range(1, n // 2):
        r1, i1 = view.get(k)
        r2, i2 = view.get(n - k)
        a, b = r1 + r2, i1 - i2
        c, d = i1 + i2, r2 - r1
        real = 0.25 * (a * c - b * d)
        imag = 0.25 * (b * c + a * d)

        view.set(k, real, imag)
        view.set(n - k, real, -imag)


def split_two_real_ffts_1d(buffer: Buffer, n: int, offset: int = 0) -> None:
    """
    Forward-transform two packed real signals with a single complex FFT.

    ``buffer`` holds ``n`` pairs ``(a[i], b[i])`` (see
    :func:`prepare_two_signals_1d`). Afterwards slots ``[0, n)`` hold the
    spectrum of ``a`` and slots ``[n, 2n)`` the spectrum of ``b``, each in the
    packed layout of :func:`flatfft.core.realfft.forward_real_fft` (DC and
    Nyquist in the first two slots). For ``n == 1`` the pair ``(a[0], b[0])``
    already is that layout.
    """
    checks.check_complex(buffer, n, offset)

    transform(buffer, n, pi, offset)
    if n <= 1:
        return

    view = ComplexView(buffer, offset)
    half = n // 2

    # A's bins go to pairs 0 .. half-1, B's to pairs half .. n-1;
    # DC and Nyquist share the first pair of each half.
    z0r, z0i = view.get(0)
    zhr, zhi = view.get(half)
    view.set(0, z0r, zhr)
    view.set(half, z0i, zhi)

    # Bins k and half - k read and write the same four pairs.
    for k in range(1, n // 4 + 1):
        kk = half - k
        r1, i1 = view.get(k)
        r2, i2 = view.get(n - k)
        s1, j1 = view.get(kk)
        s2, j2 = view.get(n - kk)

        view.set(k, 0.5 * (r1 + r2), 0.5 * (i1 - i2))
        view.set(half + k, 0.5 * (i1 + i2), 0.5 * (r2 - r1))
        if kk != k:
            view.set(kk, 0.5 * (s1 + s2), 0.5 * (j1 - j2))
            view.set(half + kk, 0.5 * (j1 + j2), 0.5 * (s2 - s1))
