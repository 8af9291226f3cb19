# src/flatfft/core/checks.py
"""
Optional precondition checks for the in-place engine.

The numeric kernels trust their callers: a non power-of-two size or a short
buffer yields wrong numbers, not an exception. The public entry points call
into this module first, and when checks are enabled a violated contract is
reported as :class:`flatfft.errors.PreconditionError` instead.

Checks default to ``__debug__`` (on, unless Python runs with ``-O``) and can be
overridden with the ``FLATFFT_CHECKS`` environment variable or at runtime with
:func:`set_checks_enabled`.
"""
from __future__ import annotations

import logging
import operator
import os
from typing import Sequence

from flatfft.errors import PreconditionError

__all__ = [
    "checks_enabled",
    "set_checks_enabled",
    "is_power_of_two",
    "require_power_of_two",
    "require_slots",
    "check_complex",
    "check_real",
    "check_grid",
]

logger = logging.getLogger(__name__)

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    text = raw.strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    logger.warning("Ignoring unrecognized %s=%r", name, raw)
    return default


_enabled = _env_flag("FLATFFT_CHECKS", __debug__)


def checks_enabled() -> bool:
    return _enabled


def set_checks_enabled(enabled: bool) -> bool:
    """Turn precondition checks on or off. Returns the previous setting."""
    global _enabled
    previous = _enabled
    _enabled = bool(enabled)
    return previous


def is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


def require_power_of_two(n: int, name: str = "n", minimum: int = 1) -> None:
    if isinstance(n, bool):
        raise PreconditionError(f"{name} must be an int, got bool")
    try:
        n = operator.index(n)
    except TypeError:
        raise PreconditionError(
            f"{name} must be an int, got {type(n).__name__}"
        ) from None
    if n < minimum or not is_power_of_two(n):
        raise PreconditionError(
            f"{name} must be a power of two >= {minimum}, got {n}"
        )


def require_slots(
    buffer: Sequence[float],
    offset: int,
    slots: int,
    name: str = "buffer",
) -> None:
    """Check that ``buffer[offset:offset + slots]`` exists."""
    if offset < 0:
        raise PreconditionError(f"offset must be >= 0, got {offset}")
    have = len(buffer)
    if offset + slots > have:
        raise PreconditionError(
            f"{name} too short: need {offset + slots} slots "
            f"(offset {offset} + {slots}), have {have}"
        )


def check_complex(buffer: Sequence[float], n: int, offset: int = 0) -> None:
    """n complex pairs at ``offset``."""
    if not _enabled:
        return
    require_power_of_two(n)
    require_slots(buffer, offset, 2 * n)


def check_real(buffer: Sequence[float], n: int, offset: int = 0) -> None:
    """n real values at ``offset``, viewed as n/2 pairs."""
    if not _enabled:
        return
    require_power_of_two(n)
    require_slots(buffer, offset, n)


def check_grid(
    buffer: Sequence[float],
    width: int,
    height: int,
    offset: int = 0,
    slots_per_cell: int = 1,
    min_width: int = 1,
) -> None:
    """``height`` rows of ``width`` cells, each cell ``slots_per_cell`` wide."""
    if not _enabled:
        return
    require_power_of_two(width, name="width", minimum=min_width)
    require_power_of_two(height, name="height")
    require_slots(buffer, offset, width * height * slots_per_cell)
