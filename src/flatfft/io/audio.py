# src/flatfft/io/audio.py
"""
Audio I/O utilities using soundfile."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Tuple, Union

import numpy as np
import soundfile as sf

ArrayLike = np.ndarray
PathLike = Union[str, Path]

__all__ = [
    "read_audio",
    "write_audio",
    "to_mono",
]

logger = logging.getLogger(__name__)


def _pathify(path: PathLike) -> str:
    return str(Path(path))


def read_audio(
    path: PathLike,
    *,
    dtype: str = "float64",
    always_2d: bool = False,
) -> Tuple[np.ndarray, int]:
    """
    Read an audio file (WAV/FLAC/anything libsndfile supports) via soundfile.

    Parameters
    ----------
    path : str or Path
        Input file.
    dtype : str, default="float64"
        Data type passed to soundfile.
    always_2d : bool, default=False
        If True, always return shape (N, C). If False and C == 1, returns (N,).

    Returns
    -------
    data : ndarray
        Audio samples, shape (N,) or (N, C).
    sr : int
        Sample rate in Hz.
    """
    data, sr = sf.read(_pathify(path), dtype=dtype, always_2d=True)
    logger.debug("read %s: %d frames x %d channels @ %d Hz", path, data.shape[0], data.shape[1], sr)

    if not always_2d and data.shape[1] == 1:
        data = data[:, 0]

    return np.asarray(data), int(sr)


def to_mono(x: ArrayLike) -> np.ndarray:
    """
    Convert multi-channel audio to mono by averaging channels.

    Parameters
    ----------
    x : ndarray, shape (N,) or (N, C)

    Returns
    -------
    mono : ndarray, shape (N,)
    """
    arr = np.asarray(x)
    if arr.ndim == 1:
        return arr
    if arr.ndim != 2:
        raise ValueError(f"Expected 1D or 2D array, got {arr.shape}")

    if arr.shape[1] == 1:
        return arr[:, 0]

    return arr.mean(axis=1)


def write_audio(
    path: PathLike,
    data: ArrayLike,
    sr: int,
    *,
    subtype: str = "PCM_16",
    clip: Optional[bool] = None,
) -> None:
    """
    Write an audio file (WAV/FLAC/...) via soundfile.

    Parameters
    ----------
    path : str or Path
        Output file path; format is inferred from extension.
    data : ndarray, shape (N,) or (N, C)
        Audio samples. If 1D, treated as mono.
    sr : int
        Sample rate in Hz.
    subtype : str, default="PCM_16"
        libsndfile subtype, e.g. "PCM_16", "PCM_24", "FLOAT".
    clip : bool or None, default=None
        None clips float data to [-1, 1] for every subtype except "FLOAT".
    """
    arr = np.asarray(data)

    if arr.ndim == 1:
        arr = arr[:, None]
    elif arr.ndim != 2:
        raise ValueError(f"Expected 1D or 2D array, got {arr.shape}")

    if np.issubdtype(arr.dtype, np.floating):
        do_clip = (subtype.upper() != "FLOAT") if clip is None else bool(clip)
        if do_clip:
            arr = np.clip(arr, -1.0, 1.0)

    logger.debug("write %s: %d frames @ %d Hz (%s)", path, arr.shape[0], sr, subtype)
    sf.write(_pathify(path), arr, int(sr), subtype=subtype)
