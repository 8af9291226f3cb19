# src/flatfft/errors.py
"""Exceptions raised by flatfft."""
from __future__ import annotations

__all__ = ["PreconditionError"]


class PreconditionError(ValueError):
    """
    A call violated the engine's buffer contract.

    Raised only by the optional checks in :mod:`flatfft.core.checks`
    (non power-of-two sizes, buffers too short for ``offset + slots``, ...).
    The numeric kernels themselves never raise it.
    """
