# src/flatfft/core/view.py
"""Complex view over a flat buffer of interleaved (re, im) pairs."""
from __future__ import annotations

from typing import MutableSequence

__all__ = ["ComplexView"]


class ComplexView:
    """
    Index a flat real buffer as complex pairs.

    Pair ``k`` lives at ``buffer[offset + 2k]`` (real) and
    ``buffer[offset + 2k + 1]`` (imaginary). The view owns no storage: reads and
    writes go straight to ``buffer``, which may be a ``list`` or a 1-D float
    ``numpy.ndarray``.

    ``get``/``set`` move plain float tuples and are what the kernels use;
    ``view[k]`` reads and writes Python ``complex`` values.
    """

    __slots__ = ("buffer", "offset")

    def __init__(self, buffer: MutableSequence[float], offset: int = 0) -> None:
        self.buffer = buffer
        self.offset = int(offset)

    def __getitem__(self, k: int) -> complex:
        i = self.offset + 2 * k
        return complex(self.buffer[i], self.buffer[i + 1])

    def __setitem__(self, k: int, value: complex) -> None:
        i = self.offset + 2 * k
        self.buffer[i] = value.real
        self.buffer[i + 1] = value.imag

    def slot(self, k: int) -> int:
        """Buffer index of the real part of pair ``k``."""
        return self.offset + 2 * k

    def get(self, k: int) -> tuple[float, float]:
        i = self.offset + 2 * k
        return self.buffer[i], self.buffer[i + 1]

    def set(self, k: int, re: float, im: float) -> None:
        i = self.offset + 2 * k
        self.buffer[i] = re
        self.buffer[i + 1] = im

    def swap(self, i: int, j: int) -> None:
        """Exchange pairs ``i`` and ``j``."""
        v = self.buffer
        a = self.offset + 2 * i
        b = self.offset + 2 * j
        v[a], v[a + 1], v[b], v[b + 1] = v[b], v[b + 1], v[a], v[a + 1]
