"""
flatfft.conv2d
==============

2D transforms and convolution on row-major buffers.

Submodules
----------
- :mod:`flatfft.conv2d.plan`    : :class:`Transform2D` (scratch column owner), 2D inverse and multiply.
- :mod:`flatfft.conv2d.packing` : two-grid interleave.
- :mod:`flatfft.conv2d.image`   : numpy 2D convolution.
"""

from .plan import Transform2D, inverse_real_fft_2d, multiply_via_fft_2d
from .packing import prepare_two_signals_2d
from .image import circular_convolve_2d, convolve_2d

__all__ = [
    "Transform2D",
    "inverse_real_fft_2d",
    "multiply_via_fft_2d",
    "prepare_two_signals_2d",
    "circular_convolve_2d",
    "convolve_2d",
]
