# src/flatfft/core/norms.py
"""Scaling helpers: undoing the engine's unnormalized inverses, RMS / peak."""
from __future__ import annotations

from typing import MutableSequence, Optional

import numpy as np

__all__ = [
    "scale_buffer",
    "normalize_complex_inverse",
    "normalize_real_inverse",
    "normalize_real_inverse_2d",
    "rms_normalize",
    "peak_normalize",
    "apply_normalize",
]


def scale_buffer(
    buffer: MutableSequence[float],
    factor: float,
    count: int,
    offset: int = 0,
) -> None:
    """Multiply ``buffer[offset:offset + count]`` by ``factor`` in place."""
    if isinstance(buffer, np.ndarray):
        buffer[offset : offset + count] *= factor
        return
    for i in range(offset, offset + count):
        buffer[i] *= factor


def normalize_complex_inverse(
    buffer: MutableSequence[float], n: int, offset: int = 0
) -> None:
    """Apply the ``1/n`` left out by :func:`inverse_complex_fft`."""
    scale_buffer(buffer, 1.0 / n, 2 * n, offset)


def normalize_real_inverse(
    buffer: MutableSequence[float], n: int, offset: int = 0
) -> None:
    """Apply the ``2/n`` left out by :func:`inverse_real_fft`."""
    scale_buffer(buffer, 2.0 / n, n, offset)


def normalize_real_inverse_2d(
    buffer: MutableSequence[float], width: int, height: int, offset: int = 0
) -> None:
    """Apply the ``2/(width*height)`` left out by :func:`inverse_real_fft_2d`."""
    scale_buffer(buffer, 2.0 / (width * height), width * height, offset)


def rms_normalize(x: np.ndarray, target_rms: float = 0.1) -> np.ndarray:
    """
    RMS-normalize signal to a target RMS.

    Parameters
    ----------
    x : ndarray
        Input signal.
    target_rms : float, default=0.1
        Desired RMS across all samples.

    Returns
    -------
    y : ndarray
        Scaled signal. If input RMS is 0, returns x unchanged.
    """
    x_arr = np.asarray(x, dtype=np.float64)
    rms = np.sqrt(np.mean(x_arr**2)) if x_arr.size > 0 else 0.0
    if rms <= 0.0:
        return x_arr
    return x_arr * (float(target_rms) / float(rms))


def peak_normalize(x: np.ndarray, peak: float = 0.99) -> np.ndarray:
    """Scale so that ``max(abs(x)) == peak``. All-zero input is returned as is."""
    x_arr = np.asarray(x, dtype=np.float64)
    m = float(np.max(np.abs(x_arr))) if x_arr.size > 0 else 0.0
    if m <= 0.0:
        return x_arr
    return x_arr * (float(peak) / m)


def apply_normalize(x: np.ndarray, mode: Optional[str]) -> np.ndarray:
    """
    Dispatch normalization by mode.

    Parameters
    ----------
    x : ndarray
        Input signal.
    mode : {"rms","peak",None,"none"}
        Normalization mode. None or "none" → no-op.

    Raises
    ------
    ValueError
        For unknown mode strings.
    """
    if mode is None:
        return np.asarray(x, dtype=np.float64)

    if isinstance(mode, str):
        m = mode.strip().lower()
        if m in ("none", ""):
            return np.asarray(x, dtype=np.float64)
        if m == "rms":
            return rms_normalize(x)
        if m == "peak":
            return peak_normalize(x)
        raise ValueError(f"Unknown normalization mode {mode!r}")

    raise ValueError(f"Normalization mode must be str or None, got {type(mode)}")
