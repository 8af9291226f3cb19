"""
flatfft.conv1d
==============

1D two-signal packing and convolution.

Submodules
----------
- :mod:`flatfft.conv1d.packing` : buffer-level prepare / multiply / split.
- :mod:`flatfft.conv1d.signal`  : numpy convolution built on them.
"""

from .packing import prepare_two_signals_1d, multiply_via_fft_1d, split_two_real_ffts_1d
from .signal import circular_convolve, convolve

__all__ = [
    "prepare_two_signals_1d",
    "multiply_via_fft_1d",
    "split_two_real_ffts_1d",
    "circular_convolve",
    "convolve",
]
