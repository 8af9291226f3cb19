# src/flatfft/core/realfft.py
"""
Real-input FFT via one half-size complex transform.

``n`` real samples are viewed as ``n/2`` complex pairs (even samples in the
real slots, odd samples in the imaginary slots), transformed with the complex
engine, and then untangled with an O(n) pass that uses the Hermitian symmetry
of a real signal's spectrum.

Packed spectrum layout (``n`` slots)
------------------------------------
- ``v[0]``: F[0] (DC, real)
- ``v[1]``: F[n/2] (Nyquist, real)
- ``v[2k], v[2k+1]``: Re/Im of F[k] for ``k = 1 .. n/2 - 1``

F follows the engine's sign convention (``exp(+2j*pi*k*m/n)``), so for real
input ``F == numpy.conj(numpy.fft.rfft(x))`` with the Nyquist bin moved into
slot 1.
"""
from __future__ import annotations

from math import pi, sin
from typing import MutableSequence

from flatfft.core import checks
from flatfft.core.transform import transform

Buffer = MutableSequence[float]

__all__ = [
    "aux_real_transform",
    "forward_real_fft",
    "inverse_real_fft",
]


def aux_real_transform(
    buffer: Buffer,
    m: int,
    c1: float,
    c2: float,
    theta: float,
    offset: int = 0,
) -> None:
    """
    Combine bin ``k`` with its mirror ``m - k`` for ``k = 1 .. m/2 - 1``.

    Forward direction: ``c1=0.5, c2=-0.5, theta=pi/m``.
    Inverse direction: ``c1=0.5, c2=0.5, theta=-pi/m``.
    Bins 0 and ``m/2`` are not touched (the middle bin is its own mirror and
    maps to itself in both directions).
    """
    v = buffer
    s = sin(theta)
    s2 = 2.0 * sin(0.5 * theta) ** 2
    wr, wi = 1.0 - s2, s

    for k in range(1, (m + 1) // 2):
        i = offset + 2 * k
        j = offset + 2 * (m - k)
        a, b, c, d = v[i], v[i + 1], v[j], v[j + 1]
        r1, i1 = c1 * (a + c), c1 * (b - d)
        r2, i2 = -(b + d), a - c
        rr_ii = c2 * (wr * r2 - wi * i2)
        ri_ir = c2 * (wr * i2 + wi * r2)

        v[i], v[i + 1] = r1 + rr_ii, ri_ir + i1
        v[j], v[j + 1] = r1 - rr_ii, ri_ir - i1

        wr, wi = wr - s * wi - s2 * wr, wi + s * wr - s2 * wi


def _forward(buffer: Buffer, n: int, offset: int) -> None:
    # one sample is its own spectrum
    if n <= 1:
        return

    m = n >> 1
    transform(buffer, m, pi, offset)
    aux_real_transform(buffer, m, 0.5, -0.5, pi / m, offset)

    a, b = buffer[offset], buffer[offset + 1]
    buffer[offset], buffer[offset + 1] = a + b, a - b


def _inverse(buffer: Buffer, n: int, offset: int) -> None:
    if n <= 1:
        # keeps the n/2 scale of the round trip
        if n == 1:
            buffer[offset] *= 0.5
        return

    m = n >> 1
    a, b = buffer[offset], buffer[offset + 1]
    buffer[offset], buffer[offset + 1] = 0.5 * (a + b), 0.5 * (a - b)

    aux_real_transform(buffer, m, 0.5, 0.5, -pi / m, offset)
    transform(buffer, m, -pi, offset)


def forward_real_fft(buffer: Buffer, n: int, offset: int = 0) -> None:
    """
    Forward FFT of ``n`` real samples, in place, into the packed layout.

    ``n`` must be a power of two. ``n == 1`` leaves the sample as is. Unnormalized.
    """
    checks.check_real(buffer, n, offset)
    _forward(buffer, n, offset)


def inverse_real_fft(buffer: Buffer, n: int, offset: int = 0) -> None:
    """
    Inverse of :func:`forward_real_fft`, in place.

    The result is ``n/2`` times the input samples; multiply by ``2/n``
    (:func:`flatfft.core.norms.normalize_real_inverse`) to recover them.
    """
    checks.check_real(buffer, n, offset)
    _inverse(buffer, n, offset)
