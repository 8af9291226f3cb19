# src/flatfft/conv2d/plan.py
"""
2D transforms on row-major interleaved buffers.

Half-spectrum layout
--------------------
A real ``width x height`` grid has a 2D spectrum ``F(kx, ky)`` with
``F(-kx, -ky) == conj(F(kx, ky))``, so only ``kx = 0 .. width/2`` is needed.
It is stored as ``height`` rows of ``width/2`` pairs (``width`` slots):

- pair ``(ky, kx)`` for ``kx = 1 .. width/2 - 1``: ``F(kx, ky)``
- pair ``(ky, 0)``: ``F(0, ky) + 1j * F(width/2, ky)``

which is what :meth:`Transform2D.multiply` produces and
:meth:`Transform2D.inverse_real` consumes. Per row this reduces, after the
column pass, to the packed layout of :mod:`flatfft.core.realfft`.
"""
from __future__ import annotations

import logging
from math import pi
from typing import MutableSequence, Optional

from flatfft.core import checks
from flatfft.core.realfft import inverse_real_fft
from flatfft.core.transform import transform
from flatfft.core.view import ComplexView

Buffer = MutableSequence[float]

__all__ = [
    "Transform2D",
    "inverse_real_fft_2d",
    "multiply_via_fft_2d",
]

logger = logging.getLogger(__name__)


class Transform2D:
    """
    Owner of the scratch column used for column-wise passes.

    The scratch list grows to ``2 * height`` slots for the tallest grid seen
    and is reused by later calls; its contents mean nothing between calls.
    One instance must not be shared by concurrently running transforms.
    """

    def __init__(self) -> None:
        self._column: list[float] = []

    @property
    def scratch_size(self) -> int:
        """Slots currently held by the scratch column."""
        return len(self._column)

    def _scratch(self, height: int) -> list[float]:
        need = 2 * height
        if len(self._column) < need:
            logger.debug("growing scratch column %d -> %d slots", len(self._column), need)
            self._column.extend([0.0] * (need - len(self._column)))
        return self._column

    def _column_pass(
        self,
        buffer: Buffer,
        lanes: int,
        height: int,
        row_stride: int,
        theta: float,
        offset: int,
    ) -> None:
        """Gather each lane, transform it with angle ``theta``, scatter it back."""
        column = self._scratch(height)
        row0 = ComplexView(buffer, offset)
        end = 2 * height

        for lane in range(lanes):
            ri = row0.slot(lane)
            for n in range(0, end, 2):
                column[n], column[n + 1] = buffer[ri], buffer[ri + 1]
                ri += row_stride

            transform(column, height, theta)

            ri = row0.slot(lane)
            for n in range(0, end, 2):
                buffer[ri], buffer[ri + 1] = column[n], column[n + 1]
                ri += row_stride

    def inverse_real(
        self, buffer: Buffer, width: int, height: int, offset: int = 0
    ) -> None:
        """
        Real 2D inverse of a half spectrum, in place.

        ``width`` is the number of real values per output row (``width/2``
        complex lanes), ``height`` the number of rows; both powers of two and
        ``width >= 2``. Columns are transformed first, then every row goes
        through :func:`inverse_real_fft`. The result is ``width*height/2``
        times the real grid (see :func:`flatfft.core.norms.normalize_real_inverse_2d`).
        """
        checks.check_grid(buffer, width, height, offset, min_width=2)

        self._column_pass(buffer, width // 2, height, width, -pi, offset)

        for row in range(offset, offset + width * height, width):
            inverse_real_fft(buffer, width, row)

    def multiply(
        self, buffer: Buffer, width: int, height: int, offset: int = 0
    ) -> None:
        """
        Half spectrum of the circular 2D convolution of two packed real grids.

        ``buffer`` holds ``height`` rows of ``width`` pairs as written by
        :func:`flatfft.conv2d.packing.prepare_two_signals_2d` with
        ``total_cols=width``. The product spectrum is written in the
        half-spectrum layout into the first ``width * height`` slots; the
        remaining slots are left with intermediate values. Follow with
        ``inverse_real(buffer, width, height)`` and a ``2/(width*height)``
        scale to get the convolution.
        """
        checks.check_grid(buffer, width, height, offset, slots_per_cell=2, min_width=2)

        v = buffer
        row_stride = 2 * width

        for row in range(offset, offset + row_stride * height, row_stride):
            transform(v, width, pi, row)

        self._column_pass(v, width, height, row_stride, pi, offset)

        # Z(k) holds A(k) + i B(k); replace it with A(k) * B(k), visiting each
        # {k, -k} orbit once.
        view = ComplexView(v, offset)
        for ky in range(height):
            my = (height - ky) % height
            for kx in range(width):
                mx = (width - kx) % width
                own = ky * width + kx
                mirror = my * width + mx
                if mirror < own:
                    continue

                z = view[own]
                if mirror == own:
                    view[own] = complex(z.real * z.imag, 0.0)
                    continue

                w = view[mirror].conjugate()
                product = (z + w) * (z - w) / 4j
                view[own] = product
                view[mirror] = product.conjugate()

        # Compact kx = 0 .. width/2 - 1 to the front; Nyquist folds into lane 0.
        half = width // 2
        for ky in range(height):
            src = ComplexView(v, offset + ky * row_stride)
            dst = ComplexView(v, offset + ky * width)
            dst[0] = src[0] + 1j * src[half]
            for k in range(1, half):
                dst.set(k, *src.get(k))


def inverse_real_fft_2d(
    buffer: Buffer,
    width: int,
    height: int,
    offset: int = 0,
    plan: Optional[Transform2D] = None,
) -> None:
    """Module-level :meth:`Transform2D.inverse_real`; a fresh plan unless one is given."""
    (plan or Transform2D()).inverse_real(buffer, width, height, offset)


def multiply_via_fft_2d(
    buffer: Buffer,
    width: int,
    height: int,
    offset: int = 0,
    plan: Optional[Transform2D] = None,
) -> None:
    """Module-level :meth:`Transform2D.multiply`; a fresh plan unless one is given."""
    (plan or Transform2D()).multiply(buffer, width, height, offset)
