"""Conversions between reals and the discretised torus, and noise sampling."""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

from .params import TORUS_MASK, TORUS_SIZE

_TORUS_SCALE = float(1 << TORUS_SIZE)


def _rng(rng: np.random.Generator | None) -> np.random.Generator:
    return rng if rng is not None else np.random.default_rng()


def _check_alpha(alpha: float) -> None:
    if not alpha >= 0:
        raise ValueError(f"noise deviation must be non-negative, got {alpha!r}")


def f64_to_torus(d: float) -> int:
    """Map a real number onto the 32-bit torus, keeping only its fraction."""
    if not math.isfinite(d):
        return 0
    return int(math.fmod(d, 1.0) * _TORUS_SCALE) & TORUS_MASK


def torus_to_f64(t: int) -> float:
    """Map a torus element to a real in [0, 1)."""
    return float(t) / _TORUS_SCALE


def f64_to_torus_vec(d: Sequence[float] | np.ndarray) -> np.ndarray:
    """Vectorised :func:`f64_to_torus`, returning a ``uint32`` array."""
    arr = np.asarray(d, dtype=np.float64)
    arr = np.where(np.isfinite(arr), arr, 0.0)
    scaled = np.trunc(np.fmod(arr, 1.0) * _TORUS_SCALE)
    return scaled.astype(np.int64).astype(np.uint32)


def gaussian_torus(
    mu: int, alpha: float, rng: np.random.Generator | None = None
) -> int:
    """Return ``mu`` plus Gaussian noise of deviation ``alpha`` on the torus."""
    _check_alpha(alpha)
    sample = float(_rng(rng).normal(0.0, alpha))
    return (f64_to_torus(sample) + int(mu)) & TORUS_MASK


def gaussian_f64(
    mu: float, alpha: float, rng: np.random.Generator | None = None
) -> int:
    """Return the real ``mu`` on the torus with Gaussian noise added."""
    return gaussian_torus(f64_to_torus(mu), alpha, rng)


def gaussian_f64_vec(
    mu: Sequence[float] | np.ndarray,
    alpha: float,
    rng: np.random.Generator | None = None,
) -> np.ndarray:
    """Vectorised :func:`gaussian_f64`, returning a ``uint32`` array."""
    _check_alpha(alpha)
    mu_torus = f64_to_torus_vec(mu)
    noise = f64_to_torus_vec(_rng(rng).normal(0.0, alpha, size=mu_torus.shape))
    return np.add(mu_torus, noise, dtype=np.uint32)