"""
flatfft
In-place FFT on flat interleaved buffers, with two-signal convolution helpers.
"""
import logging

# Robust version detection that works even when not installed
try:
    from importlib import metadata as _metadata
except ImportError:
    _metadata = None  # type: ignore

try:
    __version__ = _metadata.version("flatfft") if _metadata else "0.0.0.dev0"
except Exception:
    # Not installed (dev mode) or no metadata available
    __version__ = "0.0.0.dev0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

from .errors import PreconditionError  # noqa: E402
from .core import (  # noqa: E402
    forward_complex_fft,
    inverse_complex_fft,
    forward_real_fft,
    inverse_real_fft,
)
from .conv1d import (  # noqa: E402
    prepare_two_signals_1d,
    multiply_via_fft_1d,
    split_two_real_ffts_1d,
)
from .conv2d import (  # noqa: E402
    Transform2D,
    inverse_real_fft_2d,
    multiply_via_fft_2d,
    prepare_two_signals_2d,
)
from . import core, conv1d, conv2d  # noqa: E402

__all__ = [
    "core",
    "conv1d",
    "conv2d",
    "PreconditionError",
    "forward_complex_fft",
    "inverse_complex_fft",
    "forward_real_fft",
    "inverse_real_fft",
    "inverse_real_fft_2d",
    "prepare_two_signals_1d",
    "prepare_two_signals_2d",
    "multiply_via_fft_1d",
    "multiply_via_fft_2d",
    "split_two_real_ffts_1d",
    "Transform2D",
    "__version__",
]
