# src/flatfft/conv2d/image.py
"""2D convolution of real arrays (images, scalar fields) via the packed pipeline."""
from __future__ import annotations

import logging
from typing import Literal, Optional, Tuple

import numpy as np

from flatfft.conv2d.packing import prepare_two_signals_2d
from flatfft.conv2d.plan import Transform2D
from flatfft.core.checks import is_power_of_two
from flatfft.core.fft import next_pow2
from flatfft.core.norms import normalize_real_inverse_2d

ArrayLike = np.ndarray
Mode = Literal["full", "same-first", "same-center", "circular"]
Normalize = Literal["none", "rescale"]

__all__ = [
    "circular_convolve_2d",
    "convolve_2d",
]

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _ensure_2d(x: ArrayLike, name: str) -> np.ndarray:
    x = np.asarray(x, dtype=np.float64)
    if x.ndim != 2:
        raise ValueError(f"Expected 2D array for {name}, got shape {x.shape}")
    if x.size == 0:
        raise ValueError(f"{name} must not be empty")
    return x


def _circular_2d(
    img: np.ndarray,
    ker: np.ndarray,
    shape: Tuple[int, int],
    plan: Transform2D,
) -> np.ndarray:
    """Circular convolution on a ``shape`` = (height, width) power-of-two grid."""
    height, width = shape
    size = width * height
    buf = np.zeros(2 * size, dtype=np.float64)

    prepare_two_signals_2d(
        buf,
        size,
        np.ascontiguousarray(img).ravel(),
        img.shape[1],
        np.ascontiguousarray(ker).ravel(),
        ker.shape[1],
        width,
    )
    plan.multiply(buf, width, height)
    plan.inverse_real(buf, width, height)
    normalize_real_inverse_2d(buf, width, height)
    return buf[:size].reshape(height, width).copy()


def _postprocess(y: np.ndarray, normalize: Normalize) -> np.ndarray:
    """
    "none" keeps the raw float64 result; "rescale" maps it linearly to [0, 1]
    as float32 (flat results become zeros).
    """
    if normalize == "none":
        return y
    if normalize == "rescale":
        ymin = float(np.min(y))
        ymax = float(np.max(y))
        eps = np.finfo(np.float64).eps
        if ymax <= ymin + eps:
            return np.zeros_like(y, dtype=np.float32)
        return ((y - ymin) / (ymax - ymin)).astype(np.float32)
    raise ValueError(f"Unknown normalize mode: {normalize!r}")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def circular_convolve_2d(
    img: ArrayLike,
    ker: ArrayLike,
    plan: Optional[Transform2D] = None,
) -> np.ndarray:
    """
    Circular 2D convolution with the period of ``img``.

    ``img`` must be (H, W) with H and W powers of two and W >= 2; ``ker`` must
    fit inside it. ``plan`` lets repeated calls share one scratch column.
    """
    img = _ensure_2d(img, "img")
    ker = _ensure_2d(ker, "ker")
    height, width = img.shape
    if not (is_power_of_two(height) and is_power_of_two(width)) or width < 2:
        raise ValueError(f"circular shape must be powers of two with width >= 2, got {img.shape}")
    if ker.shape[0] > height or ker.shape[1] > width:
        raise ValueError(f"kernel {ker.shape} does not fit in {img.shape}")
    return _circular_2d(img, ker, (height, width), plan or Transform2D())


def convolve_2d(
    img: ArrayLike,
    ker: ArrayLike,
    mode: Mode = "full",
    normalize: Normalize = "none",
    plan: Optional[Transform2D] = None,
) -> np.ndarray:
    """
    2D convolution of two real arrays.

    Parameters
    ----------
    img : ndarray, shape (H, W)
        Reference array (defines 'same-*' shapes and the circular period).
    ker : ndarray, shape (h, w)
        Kernel.
    mode : {"full","same-first","same-center","circular"}
        Output size policy.
    normalize : {"none","rescale"}
        Post-processing of the result.
    plan : Transform2D, optional
        Reused scratch owner.

    Returns
    -------
    ndarray
        (H + h - 1, W + w - 1) for "full", (H, W) otherwise.
    """
    if mode == "circular":
        return _postprocess(circular_convolve_2d(img, ker, plan=plan), normalize)
    if mode not in ("full", "same-first", "same-center"):
        raise ValueError(f"Unknown mode {mode!r}")

    img = _ensure_2d(img, "img")
    ker = _ensure_2d(ker, "ker")
    full_h = img.shape[0] + ker.shape[0] - 1
    full_w = img.shape[1] + ker.shape[1] - 1
    shape = (next_pow2(full_h), max(2, next_pow2(full_w)))
    logger.debug("convolve_2d: %s * %s -> grid %s", img.shape, ker.shape, shape)

    y = _circular_2d(img, ker, shape, plan or Transform2D())[:full_h, :full_w]

    H, W = img.shape
    if mode == "same-first":
        y = y[:H, :W]
    elif mode == "same-center":
        top = (full_h - H) // 2
        left = (full_w - W) // 2
        y = y[top : top + H, left : left + W]

    return _postprocess(np.ascontiguousarray(y), normalize)
