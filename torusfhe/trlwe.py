"""Ring-LWE ciphertexts over Z_{2^32}[X] / (X^N + 1)."""

from __future__ import annotations

from collections.abc import Sequence
from functools import lru_cache

import numpy as np

from . import params
from .params import TORUS_MASK
from .tlwe import TLWELv0, TLWELv1
from .utils import gaussian_f64_vec

N = params.trlwe_lv1.n

_LIMB_BITS = 11
_LIMB_COUNT = 3
_LIMB_MASK = (1 << _LIMB_BITS) - 1


@lru_cache(maxsize=None)
def _twist(n: int) -> np.ndarray:
    return np.exp(1j * np.pi * np.arange(n // 2) / n)


def _negacyclic_fft(values) -> np.ndarray:
    """Evaluate real polynomials mod X^n + 1 at the roots exp(i*pi*(4k+1)/n)."""
    values = np.asarray(values, dtype=np.float64)
    n = values.shape[-1]
    half = n // 2
    folded = (values[..., :half] + 1j * values[..., half:]) * _twist(n)
    return np.fft.ifft(folded, axis=-1) * half


def _negacyclic_ifft(spectrum) -> np.ndarray:
    """Inverse of :func:`_negacyclic_fft`, returning real coefficients."""
    spectrum = np.asarray(spectrum, dtype=np.complex128)
    half = spectrum.shape[-1]
    folded = np.fft.fft(spectrum, axis=-1) / half * np.conj(_twist(2 * half))
    return np.concatenate((folded.real, folded.imag), axis=-1)


def negacyclic_mul(a, b) -> np.ndarray:
    """Multiply two polynomials modulo X^n + 1 with coefficients modulo 2^32."""
    a = np.asarray(a, dtype=np.uint32)
    b = np.asarray(b, dtype=np.uint32)
    if a.ndim != 1 or a.shape != b.shape or a.size == 0 or a.size % 2:
        raise ValueError("operands must be equal-length polynomials of even degree")
    shifts = (np.arange(_LIMB_COUNT, dtype=np.uint32) * _LIMB_BITS)[:, None]
    fa = _negacyclic_fft((a[None, :] >> shifts) & _LIMB_MASK)
    fb = _negacyclic_fft((b[None, :] >> shifts) & _LIMB_MASK)
    result = np.zeros(a.shape, dtype=np.int64)
    # Limb products at a combined shift of 33 bits or more vanish mod 2^32.
    for level in range(_LIMB_COUNT):
        spectrum = sum(fa[i] * fb[level - i] for i in range(level + 1))
        coeffs = np.rint(_negacyclic_ifft(spectrum)).astype(np.int64)
        result += coeffs << (level * _LIMB_BITS)
    return (result & TORUS_MASK).astype(np.uint32)


def _as_poly(values, n: int, what: str) -> np.ndarray:
    if values is None:
        return np.zeros(n, dtype=np.uint32)
    arr = np.array(values, dtype=np.uint32)
    if arr.shape != (n,):
        raise ValueError(f"{what} must have {n} coefficients, got shape {arr.shape}")
    return arr


class TRLWELv1:
    """Level-1 ring-LWE ciphertext: a pair of polynomials ``(a, b)``."""

    n = N

    def __init__(self, a=None, b=None) -> None:
        self.a = _as_poly(a, self.n, "polynomial a")
        self.b = _as_poly(b, self.n, "polynomial b")

    @classmethod
    def encrypt_f64(cls, p: Sequence[float], alpha: float, key) -> TRLWELv1:
        """Encrypt one real per coefficient with noise ``alpha``."""
        key = _as_poly(key, cls.n, "secret key")
        mu = np.asarray(p, dtype=np.float64)
        if mu.shape != (cls.n,):
            raise ValueError(f"plaintext must have {cls.n} values, got shape {mu.shape}")
        rng = np.random.default_rng()
        a = rng.integers(0, TORUS_MASK, size=cls.n, endpoint=True, dtype=np.uint32)
        b = gaussian_f64_vec(mu, alpha, rng) + negacyclic_mul(a, key)
        return cls(a, b)

    @classmethod
    def encrypt_bool(cls, p_bool: Sequence[bool], alpha: float, key) -> TRLWELv1:
        """Encrypt booleans as +1/8 (true) or -1/8 (false) per coefficient."""
        mu = np.where(np.asarray(p_bool, dtype=bool), 0.125, -0.125)
        return cls.encrypt_f64(mu, alpha, key)

    def decrypt_bool(self, key) -> list[bool]:
        """Decrypt every coefficient to a boolean."""
        key = _as_poly(key, self.n, "secret key")
        phase = self.b - negacyclic_mul(self.a, key)
        return (phase.view(np.int32) >= 0).tolist()

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return bool(np.array_equal(self.a, other.a) and np.array_equal(self.b, other.b))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(n={self.n})"


class TRLWELv1FFT:
    """A ring ciphertext held as negacyclic spectra of its signed polynomials."""

    n = N

    def __init__(self, a=None, b=None) -> None:
        half = self.n // 2
        self.a = np.zeros(half, dtype=np.complex128) if a is None else np.asarray(a, dtype=np.complex128)
        self.b = np.zeros(half, dtype=np.complex128) if b is None else np.asarray(b, dtype=np.complex128)
        if self.a.shape != (half,) or self.b.shape != (half,):
            raise ValueError(f"spectra must have {half} points")

    @classmethod
    def from_trlwe(cls, trlwe: TRLWELv1) -> TRLWELv1FFT:
        """Transform a ring ciphertext into the frequency domain."""
        return cls(
            _negacyclic_fft(trlwe.a.view(np.int32)),
            _negacyclic_fft(trlwe.b.view(np.int32)),
        )

    @classmethod
    def dummy(cls) -> TRLWELv1FFT:
        """Return an all-zero spectrum pair."""
        return cls()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(n={self.n})"


def _extract(trlwe: TRLWELv1, k: int, n: int) -> np.ndarray:
    if not 0 <= k < trlwe.n:
        raise IndexError(f"coefficient index {k} out of range 0..{trlwe.n - 1}")
    i = np.arange(n)
    before = i <= k
    values = trlwe.a[np.where(before, k - i, n + k - i)]
    sample = np.empty(n + 1, dtype=np.uint32)
    sample[:n] = np.where(before, values, ~values)
    sample[n] = trlwe.b[k]
    return sample


def sample_extract_index(trlwe: TRLWELv1, k: int) -> TLWELv1:
    """Extract coefficient ``k`` of a ring ciphertext as a level-1 LWE sample."""
    return TLWELv1(_extract(trlwe, k, TLWELv1.n))


def sample_extract_index_2(trlwe: TRLWELv1, k: int) -> TLWELv0:
    """Extract coefficient ``k`` into a level-0 sized LWE sample."""
    return TLWELv0(_extract(trlwe, k, TLWELv0.n))