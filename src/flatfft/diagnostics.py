# src/flatfft/diagnostics.py
"""Self test: engine results against direct O(n^2) evaluation."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

import numpy as np

from flatfft.conv1d import circular_convolve
from flatfft.conv2d import Transform2D, circular_convolve_2d
from flatfft.core import fft, ifft, irfft, rfft

__all__ = [
    "naive_dft",
    "naive_circular_convolve",
    "naive_circular_convolve_2d",
    "SelftestReport",
    "run_selftest",
]

logger = logging.getLogger(__name__)

# 2D reference is O(n^4)
MAX_2D_SIZE = 16


def naive_dft(x: np.ndarray, sign: int = +1) -> np.ndarray:
    """``X[k] = sum_m x[m] exp(sign * 2j*pi*k*m/n)``, the engine's convention for sign=+1."""
    x = np.asarray(x, dtype=np.complex128)
    n = x.size
    k = np.arange(n)
    return np.exp(sign * 2j * np.pi * np.outer(k, k) / n) @ x


def naive_circular_convolve(x: np.ndarray, h: np.ndarray) -> np.ndarray:
    n = x.size
    hp = np.zeros(n)
    hp[: h.size] = h
    return np.array([sum(x[m] * hp[(k - m) % n] for m in range(n)) for k in range(n)])


def naive_circular_convolve_2d(img: np.ndarray, ker: np.ndarray) -> np.ndarray:
    H, W = img.shape
    kp = np.zeros((H, W))
    kp[: ker.shape[0], : ker.shape[1]] = ker
    out = np.zeros((H, W))
    for y in range(H):
        for x in range(W):
            out[y, x] = sum(
                img[j, i] * kp[(y - j) % H, (x - i) % W]
                for j in range(H)
                for i in range(W)
            )
    return out


@dataclass
class SelftestReport:
    """Maximum absolute error per (check, size)."""

    results: List[Tuple[str, int, float]] = field(default_factory=list)

    def add(self, name: str, n: int, err: float) -> None:
        logger.debug("%-18s n=%-5d max err %.3e", name, n, err)
        self.results.append((name, n, float(err)))

    def worst(self) -> float:
        return max((err for _, _, err in self.results), default=0.0)

    def ok(self, tolerance: float = 1e-9) -> bool:
        return self.worst() <= tolerance

    def lines(self) -> List[str]:
        out = [f"{name:<18} n={n:<5d} max err {err:.2e}" for name, n, err in self.results]
        out.append(f"worst error: {self.worst():.2e}")
        return out


def run_selftest(sizes: Iterable[int] = (4, 8, 16, 64), seed: int = 0) -> SelftestReport:
    """
    For every size: complex/real round trips, forward transform against
    :func:`naive_dft`, and 1D (and, for small sizes, 2D) circular convolution
    against the direct sums.
    """
    rng = np.random.default_rng(seed)
    report = SelftestReport()
    plan = Transform2D()

    for n in sizes:
        z = rng.standard_normal(n) + 1j * rng.standard_normal(n)
        x = rng.standard_normal(n)
        h = rng.standard_normal(n)

        report.add("complex round trip", n, np.max(np.abs(ifft(fft(z)) - z)))
        report.add("forward vs dft", n, np.max(np.abs(fft(z) - naive_dft(z))))
        if n >= 2:
            report.add("real round trip", n, np.max(np.abs(irfft(rfft(x), n) - x)))
        report.add("circular conv", n, np.max(np.abs(circular_convolve(x, h) - naive_circular_convolve(x, h))))

        if 2 <= n <= MAX_2D_SIZE:
            img = rng.standard_normal((n, n))
            ker = rng.standard_normal((n // 2 or 1, n // 2 or 1))
            got = circular_convolve_2d(img, ker, plan=plan)
            report.add("circular conv 2d", n, np.max(np.abs(got - naive_circular_convolve_2d(img, ker))))

    return report
