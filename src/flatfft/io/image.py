# src/flatfft/io/image.py
"""
Image I/O utilities using Pillow."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal, Union

import numpy as np
from PIL import Image

ArrayLike = np.ndarray
PathLike = Union[str, Path]
ImageMode = Literal["L", "RGB", "RGBA", "keep"]

# Rec.709 luma weights (R, G, B)
LUMA_709 = np.array([0.2126, 0.7152, 0.0722])

__all__ = [
    "read_image",
    "write_image",
    "as_uint8",
    "rgb_to_luma",
]

logger = logging.getLogger(__name__)


def _pathify(path: PathLike) -> str:
    return str(Path(path))


def read_image(
    path: PathLike,
    *,
    mode: ImageMode = "L",
    dtype: Union[np.dtype, str] = "float64",
) -> np.ndarray:
    """
    Read an image via Pillow.

    Parameters
    ----------
    path : str or Path
        Input image path.
    mode : {"L", "RGB", "RGBA", "keep"}, default="L"
        "keep" uses the file's native mode, anything else goes through
        Pillow's ``.convert(mode)``.
    dtype : numpy dtype or str, default="float64"
        Output dtype. Values are not rescaled.

    Returns
    -------
    img : ndarray
        2D for "L", 3D for color.
    """
    with Image.open(_pathify(path)) as im:
        if mode != "keep":
            im = im.convert(mode)
        arr = np.asarray(im)

    logger.debug("read %s: shape %s", path, arr.shape)
    return arr.astype(dtype, copy=False)


def as_uint8(x: ArrayLike) -> np.ndarray:
    """
    Convert an array to uint8 for deterministic image saving.

    Floats in [0, 1] are scaled by 255, other floats are clipped to [0, 255];
    integer input is clipped as is.
    """
    arr = np.asarray(x)

    if np.issubdtype(arr.dtype, np.floating):
        arr_f = arr.astype(np.float64)
        vmin = float(np.nanmin(arr_f))
        vmax = float(np.nanmax(arr_f))

        if np.isfinite(vmin) and np.isfinite(vmax) and 0.0 <= vmin and vmax <= 1.0 + 1e-8:
            arr_f = arr_f * 255.0
        arr_f = np.nan_to_num(arr_f, nan=0.0)
        return np.clip(arr_f, 0.0, 255.0).astype(np.uint8)

    return np.clip(arr.astype(np.float64), 0.0, 255.0).astype(np.uint8)


def rgb_to_luma(x: ArrayLike) -> np.ndarray:
    """
    Collapse an image to one float64 plane with the Rec.709 weights.

    (H, W) input passes through; (H, W, C) uses channels 0..2, or channel 0
    alone when C < 3.
    """
    arr = np.asarray(x, dtype=np.float64)
    if arr.ndim == 2:
        return arr
    if arr.ndim != 3:
        raise ValueError(f"Expected 2D or 3D image, got {arr.shape}")
    if arr.shape[2] < 3:
        return arr[..., 0]
    return arr[..., :3] @ LUMA_709


def write_image(path: PathLike, data: ArrayLike) -> None:
    """
    Save a 2D (grayscale) or (H, W, 3|4) image via Pillow after
    :func:`as_uint8` conversion.
    """
    arr = np.asarray(data)

    if not (arr.ndim == 2 or (arr.ndim == 3 and arr.shape[2] in (3, 4))):
        raise ValueError(f"Expected 2D or (H, W, 3|4) array, got {arr.shape}")

    logger.debug("write %s: shape %s", path, arr.shape)
    Image.fromarray(as_uint8(arr)).save(_pathify(path))
