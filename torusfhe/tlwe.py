"""Scalar LWE ciphertexts over the 32-bit torus."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from . import params
from .params import TORUS_MASK, TORUS_SIZE
from .utils import gaussian_f64, torus_to_f64

_HALF_TORUS = 1 << (TORUS_SIZE - 1)


def _as_key(key: Sequence[int] | np.ndarray, n: int) -> np.ndarray:
    arr = np.asarray(key, dtype=np.uint32)
    if arr.shape != (n,):
        raise ValueError(f"secret key must have {n} coefficients, got shape {arr.shape}")
    return arr


def _as_sample(p: Sequence[int] | np.ndarray | None, n: int) -> np.ndarray:
    if p is None:
        return np.zeros(n + 1, dtype=np.uint32)
    arr = np.array(p, dtype=np.uint32)
    if arr.shape != (n + 1,):
        raise ValueError(f"ciphertext must have {n + 1} coefficients, got shape {arr.shape}")
    return arr


def _inner(mask: np.ndarray, key: np.ndarray) -> int:
    return int(np.sum(mask * key, dtype=np.uint64)) & TORUS_MASK


def _phase(p: np.ndarray, key: np.ndarray) -> int:
    n = key.shape[0]
    return (int(p[n]) - _inner(p[:n], key)) & TORUS_MASK


def _encrypt(n: int, mu: float, alpha: float, key) -> np.ndarray:
    key = _as_key(key, n)
    rng = np.random.default_rng()
    sample = np.empty(n + 1, dtype=np.uint32)
    sample[:n] = rng.integers(0, TORUS_MASK, size=n, endpoint=True, dtype=np.uint32)
    sample[n] = (_inner(sample[:n], key) + gaussian_f64(mu, alpha, rng)) & TORUS_MASK
    return sample


def _check_modulus(message_modulus: int) -> None:
    if message_modulus <= 0:
        raise ValueError(f"message modulus must be positive, got {message_modulus}")


class _LweSample:
    """Storage shared by LWE samples: ``n`` mask coefficients then ``b``."""

    n: int

    def __init__(self, p: Sequence[int] | np.ndarray | None = None) -> None:
        self.p = _as_sample(p, self.n)

    @property
    def b(self) -> int:
        """The body coefficient of the sample."""
        return int(self.p[self.n])

    @b.setter
    def b(self, value: int) -> None:
        self.p[self.n] = int(value) & TORUS_MASK

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return bool(np.array_equal(self.p, other.p))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(b={self.b})"


class TLWELv0(_LweSample):
    """Level-0 LWE ciphertext, the form gates take and return."""

    n = params.tlwe_lv0.n

    @classmethod
    def encrypt_f64(cls, p: float, alpha: float, key) -> TLWELv0:
        """Encrypt the real ``p`` (taken modulo 1) with noise ``alpha``."""
        return cls(_encrypt(cls.n, p, alpha, key))

    @classmethod
    def encrypt_bool(cls, p_bool: bool, alpha: float, key) -> TLWELv0:
        """Encrypt a boolean as +1/8 (true) or -1/8 (false)."""
        return cls.encrypt_f64(0.125 if p_bool else -0.125, alpha, key)

    def decrypt_bool(self, key) -> bool:
        """Decrypt to ``True`` when the phase lies in the upper half torus."""
        return _phase(self.p, _as_key(key, self.n)) < _HALF_TORUS

    @classmethod
    def encrypt_lwe_message(
        cls, message: int, message_modulus: int, alpha: float, key
    ) -> TLWELv0:
        """Encrypt ``message`` encoded as ``message / (2 * message_modulus)``."""
        _check_modulus(message_modulus)
        scale = 1.0 / (2.0 * message_modulus)
        return cls.encrypt_f64((message % message_modulus) * scale, alpha, key)

    def decrypt_lwe_message(self, message_modulus: int, key) -> int:
        """Decrypt a message encrypted with :meth:`encrypt_lwe_message`."""
        _check_modulus(message_modulus)
        phase = torus_to_f64(_phase(self.p, _as_key(key, self.n)))
        scale = 1.0 / (2.0 * message_modulus)
        return max(0, int(phase / scale + 0.5)) % message_modulus

    def add_mul(self, other: TLWELv0, multiplier: int) -> TLWELv0:
        """Return ``self + multiplier * other`` coefficient-wise."""
        factor = np.uint32(int(multiplier) & TORUS_MASK)
        return type(self)(self.p + other.p * factor)

    def sub_mul(self, other: TLWELv0, multiplier: int) -> TLWELv0:
        """Return ``self - multiplier * other`` coefficient-wise."""
        factor = np.uint32(int(multiplier) & TORUS_MASK)
        return type(self)(self.p - other.p * factor)

    def __add__(self, other: object) -> TLWELv0:
        if not isinstance(other, TLWELv0):
            return NotImplemented
        return type(self)(self.p + other.p)

    def __sub__(self, other: object) -> TLWELv0:
        if not isinstance(other, TLWELv0):
            return NotImplemented
        return type(self)(self.p - other.p)

    def __neg__(self) -> TLWELv0:
        return type(self)(np.negative(self.p))

    def __mul__(self, other: object) -> TLWELv0:
        if not isinstance(other, TLWELv0):
            return NotImplemented
        return type(self)(self.p * other.p)


class TLWELv1(_LweSample):
    """Level-1 LWE ciphertext, as extracted from a ring ciphertext."""

    n = params.tlwe_lv1.n

    @classmethod
    def encrypt_f64(cls, p: float, alpha: float, key) -> TLWELv1:
        """Encrypt the real ``p`` (taken modulo 1) with noise ``alpha``."""
        return cls(_encrypt(cls.n, p, alpha, key))

    @classmethod
    def encrypt_bool(cls, p_bool: bool, alpha: float, key) -> TLWELv1:
        """Encrypt a boolean as +1/8 (true) or -1/8 (false)."""
        return cls.encrypt_f64(0.125 if p_bool else -0.125, alpha, key)

    def decrypt_bool(self, key) -> bool:
        """Decrypt to ``True`` when the phase lies in the upper half torus."""
        return _phase(self.p, _as_key(key, self.n)) < _HALF_TORUS