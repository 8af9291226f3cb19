# tests/conftest.py
from __future__ import annotations

import sys
from pathlib import Path

import numpy as np
import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC = PROJECT_ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from flatfft.core import checks  # noqa: E402


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture(autouse=True)
def _checks_on():
    """Every test starts with precondition checks enabled and restores the flag."""
    previous = checks.set_checks_enabled(True)
    yield
    checks.set_checks_enabled(previous)


def buffer_from_complex(z) -> list[float]:
    """Complex samples -> interleaved list buffer."""
    out: list[float] = []
    for value in np.asarray(z, dtype=np.complex128):
        out.extend((float(value.real), float(value.imag)))
    return out


def complex_from_buffer(buf, n=None, offset=0) -> np.ndarray:
    arr = np.asarray(buf, dtype=np.float64)
    if n is None:
        n = (arr.size - offset) // 2
    seg = arr[offset : offset + 2 * n]
    return seg[0::2] + 1j * seg[1::2]


def naive_circular(x, h, n) -> np.ndarray:
    xp = np.zeros(n)
    hp = np.zeros(n)
    xp[: len(x)] = x
    hp[: len(h)] = h
    return np.array([sum(xp[m] * hp[(k - m) % n] for m in range(n)) for k in range(n)])


def naive_circular_2d(a, b, shape) -> np.ndarray:
    H, W = shape
    ap = np.zeros(shape)
    bp = np.zeros(shape)
    ap[: a.shape[0], : a.shape[1]] = a
    bp[: b.shape[0], : b.shape[1]] = b
    out = np.zeros(shape)
    for y in range(H):
        for x in range(W):
            acc = 0.0
            for j in range(H):
                for i in range(W):
                    acc += ap[j, i] * bp[(y - j) % H, (x - i) % W]
            out[y, x] = acc
    return out
