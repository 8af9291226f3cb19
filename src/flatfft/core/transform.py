# src/flatfft/core/transform.py
"""
In-place radix-2 FFT on interleaved (re, im) buffers.

The engine works on any mutable indexable sequence of floats (``list`` or a
1-D float ``numpy.ndarray``). ``n`` complex points occupy the ``2n`` slots
``buffer[offset:offset + 2n]``.

Sign convention
---------------
``transform(v, n, +pi)`` computes ``X[k] = sum_m x[m] exp(+2j*pi*k*m/n)`` and
``transform(v, n, -pi)`` the same sum with ``exp(-...)``. Neither direction is
normalized: a forward pass followed by an inverse pass scales the input by
``n``. In numpy terms, ``forward_complex_fft`` equals ``n * numpy.fft.ifft``
and ``inverse_complex_fft`` equals ``numpy.fft.fft``.
"""
from __future__ import annotations

from math import pi, sin
from typing import MutableSequence

from flatfft.core import checks
from flatfft.core.view import ComplexView

Buffer = MutableSequence[float]

__all__ = [
    "bit_reverse",
    "transform",
    "forward_complex_fft",
    "inverse_complex_fft",
]


# ---------------------------------------------------------------------------
# Kernels (no validation)
# ---------------------------------------------------------------------------

def bit_reverse(buffer: Buffer, n: int, offset: int = 0) -> None:
    """
    Reorder ``n`` pairs into bit-reversed order.

    Walks a reversed counter ``j`` alongside ``i`` (adding the top bit and
    propagating the carry downwards), so no index table is built. Every pair
    ``(i, j)`` with ``i < j`` is swapped exactly once.
    """
    view = ComplexView(buffer, offset)
    half = n >> 1
    j = 0

    for i in range(n - 1):
        if i < j:
            view.swap(i, j)

        k = half
        while k <= j:
            j -= k
            k >>= 1

        j += k


def transform(buffer: Buffer, n: int, theta: float, offset: int = 0) -> None:
    """
    Decimation-in-time FFT of ``n`` pairs at ``offset``, in place.

    Parameters
    ----------
    buffer : mutable sequence of float
        Interleaved pairs.
    n : int
        Number of complex points, a power of two. ``n <= 1`` is a no-op.
    theta : float
        ``pi`` for the forward direction, ``-pi`` for the inverse. Halved
        after every stage.
    offset : int, default=0
        Slot index of the first real part.

    Notes
    -----
    Twiddle factors are not evaluated per butterfly. Within a stage they are
    advanced with the half-angle recurrence

        wr, wi <- wr - s*wi - s2*wr, wi + s*wr - s2*wi

    with ``s = sin(theta)`` and ``s2 = 2*sin(theta/2)**2``, i.e. a rotation by
    ``theta`` written in a form that loses less precision than
    ``cos(theta) - 1`` would.
    """
    if n <= 1:
        return

    bit_reverse(buffer, n, offset)

    v = buffer
    n2 = n + n
    dual, dual2, dual4 = 1, 2, 4

    while True:
        # w = 1: add/subtract only
        for k in range(offset, offset + n2 - 1, dual4):
            j = k + dual2
            ir, ii = v[k], v[k + 1]
            jr, ji = v[j], v[j + 1]

            v[j], v[j + 1] = ir - jr, ii - ji
            v[k], v[k + 1] = ir + jr, ii + ji

        s = sin(theta)
        s2 = 2.0 * sin(theta * 0.5) ** 2
        wr, wi = 1.0, 0.0

        for a in range(2, dual2 - 1, 2):
            wr, wi = wr - s * wi - s2 * wr, wi + s * wr - s2 * wi

            start = offset + a
            for i in range(start, start + n2 - dual4 + 1, dual4):
                j = i + dual2
                jr, ji = v[j], v[j + 1]
                dr, di = wr * jr - wi * ji, wr * ji + wi * jr
                ir, ii = v[i], v[i + 1]

                v[j], v[j + 1] = ir - dr, ii - di
                v[i], v[i + 1] = ir + dr, ii + di

        dual, dual2, dual4, theta = dual2, dual4, dual4 + dual4, 0.5 * theta
        if dual >= n:
            break


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------

def forward_complex_fft(buffer: Buffer, n: int, offset: int = 0) -> None:
    """Forward transform of ``n`` complex pairs, in place, unnormalized."""
    checks.check_complex(buffer, n, offset)
    transform(buffer, n, pi, offset)


def inverse_complex_fft(buffer: Buffer, n: int, offset: int = 0) -> None:
    """
    Inverse transform of ``n`` complex pairs, in place.

    Not normalized: divide by ``n`` (see :func:`flatfft.core.norms.normalize_complex_inverse`)
    to undo :func:`forward_complex_fft`.
    """
    checks.check_complex(buffer, n, offset)
    transform(buffer, n, -pi, offset)
