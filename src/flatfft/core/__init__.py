"""
flatfft.core
============

In-place transform engine on interleaved (re, im) buffers.

Submodules
----------
- :mod:`flatfft.core.transform` : bit reversal, butterfly engine, complex FFT.
- :mod:`flatfft.core.realfft`   : real-input FFT through a half-size transform.
- :mod:`flatfft.core.view`      : complex view over a flat real buffer.
- :mod:`flatfft.core.checks`    : optional precondition checks.
- :mod:`flatfft.core.norms`     : scaling helpers.
- :mod:`flatfft.core.fft`       : numpy array wrappers.
"""

from .transform import (
    bit_reverse,
    transform,
    forward_complex_fft,
    inverse_complex_fft,
)
from .realfft import (
    aux_real_transform,
    forward_real_fft,
    inverse_real_fft,
)
from .view import ComplexView
from .checks import checks_enabled, set_checks_enabled
from .norms import (
    scale_buffer,
    normalize_complex_inverse,
    normalize_real_inverse,
    normalize_real_inverse_2d,
    rms_normalize,
    peak_normalize,
    apply_normalize,
)
from .fft import (
    next_pow2,
    interleave,
    deinterleave,
    pack_real_spectrum,
    unpack_real_spectrum,
    fft,
    ifft,
    rfft,
    irfft,
)

__all__ = [
    # engine
    "bit_reverse",
    "transform",
    "forward_complex_fft",
    "inverse_complex_fft",
    "aux_real_transform",
    "forward_real_fft",
    "inverse_real_fft",
    "ComplexView",
    # checks
    "checks_enabled",
    "set_checks_enabled",
    # norms
    "scale_buffer",
    "normalize_complex_inverse",
    "normalize_real_inverse",
    "normalize_real_inverse_2d",
    "rms_normalize",
    "peak_normalize",
    "apply_normalize",
    # numpy wrappers
    "next_pow2",
    "interleave",
    "deinterleave",
    "pack_real_spectrum",
    "unpack_real_spectrum",
    "fft",
    "ifft",
    "rfft",
    "irfft",
]
