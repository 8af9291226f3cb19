# src/flatfft/conv2d/packing.py
"""Interleave two real row-major grids into one complex grid."""
from __future__ import annotations

from typing import MutableSequence, Optional, Sequence

from flatfft.core import checks
from flatfft.errors import PreconditionError

Buffer = MutableSequence[float]

__all__ = ["prepare_two_signals_2d"]


def _rows(count: int, cols: int, name: str) -> int:
    if cols <= 0:
        raise PreconditionError(f"{name} must have at least one column, got {cols}")
    rows, rest = divmod(count, cols)
    if rest and checks.checks_enabled():
        raise PreconditionError(
            f"{name}: {count} values do not make whole rows of {cols}"
        )
    return rows


def prepare_two_signals_2d(
    out: Buffer,
    size: int,
    signal_a: Sequence[float],
    cols_a: int,
    signal_b: Sequence[float],
    cols_b: int,
    total_cols: int,
    count_a: Optional[int] = None,
    count_b: Optional[int] = None,
    offset: int = 0,
) -> None:
    """
    Interleave two real grids into rows of ``total_cols`` complex pairs.

    Parameters
    ----------
    out : mutable sequence of float
        Destination; ``size`` pairs starting at ``offset`` are written.
    size : int
        Total number of pairs to write (typically ``total_cols * total_rows``).
    signal_a, signal_b : sequence of float
        Row-major grids with ``cols_a`` / ``cols_b`` columns.
    total_cols : int
        Pairs per output row, >= both column counts.
    count_a, count_b : int, optional
        Number of values to use from each grid. Default: ``len(signal)``.
    offset : int, default=0
        Slot index of the first output pair.

    Notes
    -----
    The narrower grid goes into the real slots, the wider one into the
    imaginary slots. Columns past a grid's width and rows past its height are
    written as literal zeros, and every pair after the last row is ``(0, 0)``.
    """
    if count_a is None:
        count_a = len(signal_a)
    if count_b is None:
        count_b = len(signal_b)

    name_a, name_b = "signal_a", "signal_b"
    if cols_a > cols_b:
        signal_a, signal_b = signal_b, signal_a
        cols_a, cols_b = cols_b, cols_a
        count_a, count_b = count_b, count_a
        name_a, name_b = name_b, name_a

    rows_a = _rows(count_a, cols_a, name_a)
    rows_b = _rows(count_b, cols_b, name_b)
    rows = max(rows_a, rows_b)

    if checks.checks_enabled():
        checks.require_slots(out, offset, 2 * size, name="out")
        if cols_b > total_cols:
            raise PreconditionError(
                f"grid of {cols_b} columns does not fit in {total_cols}"
            )
        if rows * total_cols > size:
            raise PreconditionError(
                f"{rows} rows of {total_cols} pairs do not fit in {size} pairs"
            )

    j = offset
    for r in range(rows):
        ia = r * cols_a if r < rows_a else -1
        ib = r * cols_b if r < rows_b else -1

        for c in range(total_cols):
            re = signal_a[ia + c] if ia >= 0 and c < cols_a else 0.0
            im = signal_b[ib + c] if ib >= 0 and c < cols_b else 0.0
            out[j], out[j + 1] = re, im
            j += 2

    for i in range(j, offset + 2 * size, 2):
        out[i], out[i + 1] = 0.0, 0.0
