"""
flatfft.io
==========

Audio (soundfile) and image (Pillow) helpers used by the command line.
"""

from .audio import read_audio, write_audio, to_mono
from .image import read_image, write_image, as_uint8, rgb_to_luma

__all__ = [
    # audio
    "read_audio",
    "write_audio",
    "to_mono",
    # image
    "read_image",
    "write_image",
    "as_uint8",
    "rgb_to_luma",
]
