"""Ring-GSW ciphertexts, the external product, blind rotation and key switching."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from . import params
from .params import TORUS_MASK, TORUS_SIZE
from .parallel import Railgun, default_railgun
from .tlwe import TLWELv0, TLWELv1
from .trlwe import TRLWELv1, TRLWELv1FFT, _negacyclic_fft, _negacyclic_ifft
from .utils import f64_to_torus_vec

N = params.trgsw_lv1.n
NBIT = params.trgsw_lv1.nbit
L = params.trgsw_lv1.l
BGBIT = params.trgsw_lv1.bgbit
BG = params.trgsw_lv1.bg
BASEBIT = params.trgsw_lv1.basebit
IKS_T = params.trgsw_lv1.iks_t

DECOMPOSITION_OFFSET = (
    sum((BG // 2) << (TORUS_SIZE - (i + 1) * BGBIT) for i in range(L)) & TORUS_MASK
)
"""Offset that turns gadget digits into balanced digits in ``[-BG/2, BG/2)``."""

_GADGET = f64_to_torus_vec([float(BG) ** -(i + 1) for i in range(L)])
_DIGIT_SHIFTS = np.array(
    [TORUS_SIZE - (i + 1) * BGBIT for i in range(L)], dtype=np.uint32
)[:, None]

_ROUND_OFFSET = 1 << (TORUS_SIZE - NBIT - 2)
_ROTATE_SHIFT = TORUS_SIZE - NBIT - 1

_KS_BASE = 1 << BASEBIT
_KS_PREC_OFFSET = np.uint32(1 << (TORUS_SIZE - (1 + BASEBIT * IKS_T)))
_KS_SHIFTS = np.array(
    [TORUS_SIZE - (j + 1) * BASEBIT for j in range(IKS_T)], dtype=np.uint32
)


def _check_rows(rows: list, what: str) -> list:
    if len(rows) != 2 * L:
        raise ValueError(f"{what} must have {2 * L} rows, got {len(rows)}")
    return rows


def _to_torus(values: np.ndarray) -> np.ndarray:
    return (np.rint(values).astype(np.int64) & TORUS_MASK).astype(np.uint32)


class TRGSWLv1:
    """Level-1 ring-GSW ciphertext: ``2 * L`` ring-LWE rows."""

    def __init__(self, trlwe: Sequence[TRLWELv1] | None = None) -> None:
        rows = [TRLWELv1() for _ in range(2 * L)] if trlwe is None else list(trlwe)
        self.trlwe = _check_rows(rows, "a ring-GSW ciphertext")

    @classmethod
    def encrypt_torus(cls, p: int, alpha: float, key) -> TRGSWLv1:
        """Encrypt the integer ``p`` under the level-1 key with noise ``alpha``."""
        zeros = np.zeros(N, dtype=np.float64)
        rows = [TRLWELv1.encrypt_f64(zeros, alpha, key) for _ in range(2 * L)]
        for i, h in enumerate(_GADGET.tolist()):
            term = (int(p) * h) & TORUS_MASK
            rows[i].a[0] = (int(rows[i].a[0]) + term) & TORUS_MASK
            rows[i + L].b[0] = (int(rows[i + L].b[0]) + term) & TORUS_MASK
        return cls(rows)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(rows={len(self.trlwe)})"


class TRGSWLv1FFT:
    """A ring-GSW ciphertext with every row held in the frequency domain."""

    def __init__(self, trlwe_fft: Sequence[TRLWELv1FFT] | None = None) -> None:
        rows = (
            [TRLWELv1FFT() for _ in range(2 * L)]
            if trlwe_fft is None
            else list(trlwe_fft)
        )
        self.trlwe_fft = tuple(_check_rows(rows, "a ring-GSW spectrum"))
        self._a = np.stack([row.a for row in self.trlwe_fft])
        self._b = np.stack([row.b for row in self.trlwe_fft])

    @classmethod
    def from_trgsw(cls, trgsw: TRGSWLv1) -> TRGSWLv1FFT:
        """Transform every row of ``trgsw`` into the frequency domain."""
        return cls(TRLWELv1FFT.from_trlwe(row) for row in trgsw.trlwe)

    @classmethod
    def dummy(cls) -> TRGSWLv1FFT:
        """Return an all-zero ciphertext spectrum."""
        return cls()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(rows={len(self.trlwe_fft)})"


def decomposition(trlwe: TRLWELv1, offset: int = DECOMPOSITION_OFFSET) -> np.ndarray:
    """Split both polynomials into ``L`` balanced base-``BG`` digits each.

    Returns a ``(2 * L, N)`` ``uint32`` array whose rows are the digits of
    ``a`` followed by those of ``b``; read as ``int32`` they lie in
    ``[-BG/2, BG/2)``.
    """
    shift = np.uint32(int(offset) & TORUS_MASK)
    parts = [
        (((poly + shift)[None, :] >> _DIGIT_SHIFTS) & np.uint32(BG - 1))
        - np.uint32(BG // 2)
        for poly in (trlwe.a, trlwe.b)
    ]
    return np.concatenate(parts, axis=0).astype(np.uint32)


def external_product_with_fft(
    trgsw_fft: TRGSWLv1FFT, trlwe: TRLWELv1, offset: int = DECOMPOSITION_OFFSET
) -> TRLWELv1:
    """Multiply a ring ciphertext by a ring-GSW ciphertext."""
    digits = np.ascontiguousarray(decomposition(trlwe, offset)).view(np.int32)
    spectra = _negacyclic_fft(digits)
    out_a = (spectra * trgsw_fft._a).sum(axis=0)
    out_b = (spectra * trgsw_fft._b).sum(axis=0)
    return TRLWELv1(
        _to_torus(_negacyclic_ifft(out_a)), _to_torus(_negacyclic_ifft(out_b))
    )


def cmux(
    in1: TRLWELv1,
    in2: TRLWELv1,
    cond: TRGSWLv1FFT,
    offset: int = DECOMPOSITION_OFFSET,
) -> TRLWELv1:
    """Select ``in1`` when ``cond`` encrypts 0 and ``in2`` when it encrypts 1."""
    diff = TRLWELv1(in2.a - in1.a, in2.b - in1.b)
    product = external_product_with_fft(cond, diff, offset)
    return TRLWELv1(product.a + in1.a, product.b + in1.b)


def poly_mul_with_x_k(a, k: int) -> np.ndarray:
    """Multiply a polynomial by ``X^k`` modulo ``X^N + 1``, ``0 <= k <= 2N``.

    Wrapped-around coefficients are replaced by their bitwise complement.
    """
    poly = np.asarray(a, dtype=np.uint32)
    if poly.ndim != 1:
        raise ValueError("polynomial must be one-dimensional")
    n = poly.shape[0]
    k = int(k)
    if not 0 <= k <= 2 * n:
        raise ValueError(f"rotation {k} out of range 0..{2 * n}")
    if k < n:
        return np.concatenate((~poly[n - k:], poly[: n - k]))
    j = k - n
    return np.concatenate((poly[n - j:], ~poly[: n - j]))


def blind_rotate(
    src: TLWELv0,
    testvec: TRLWELv1,
    bootstrapping_key: Sequence[TRGSWLv1FFT],
    offset: int = DECOMPOSITION_OFFSET,
) -> TRLWELv1:
    """Rotate ``testvec`` by the phase of ``src`` under encryption."""
    n0 = TLWELv0.n
    if len(bootstrapping_key) < n0:
        raise ValueError(
            f"bootstrapping key needs {n0} entries, got {len(bootstrapping_key)}"
        )
    b_tilda = 2 * N - ((src.b + _ROUND_OFFSET) >> _ROTATE_SHIFT)
    acc = TRLWELv1(
        poly_mul_with_x_k(testvec.a, b_tilda), poly_mul_with_x_k(testvec.b, b_tilda)
    )
    a_tildas = (src.p[:n0] + np.uint32(_ROUND_OFFSET)) >> np.uint32(_ROTATE_SHIFT)
    for a_tilda, bk in zip(a_tildas.tolist(), bootstrapping_key):
        if a_tilda == 0:
            # A zero rotation makes both branches equal; the cmux is the identity.
            continue
        rotated = TRLWELv1(
            poly_mul_with_x_k(acc.a, a_tilda), poly_mul_with_x_k(acc.b, a_tilda)
        )
        acc = cmux(acc, rotated, bk, offset)
    return acc


def batch_blind_rotate(
    srcs: Sequence[TLWELv0],
    testvec: TRLWELv1,
    bootstrapping_key: Sequence[TRGSWLv1FFT],
    offset: int = DECOMPOSITION_OFFSET,
    railgun: Railgun | None = None,
) -> list[TRLWELv1]:
    """Run :func:`blind_rotate` over many inputs in parallel, keeping order."""
    backend = railgun if railgun is not None else default_railgun()
    return backend.par_map(
        list(srcs), lambda src: blind_rotate(src, testvec, bootstrapping_key, offset)
    )


def _ksk_table(key_switching_key) -> np.ndarray:
    if isinstance(key_switching_key, np.ndarray):
        table = key_switching_key
    else:
        table = np.stack([np.asarray(entry.p, dtype=np.uint32) for entry in key_switching_key])
    needed = _KS_BASE * IKS_T * N
    if table.ndim != 2 or table.shape[1] != TLWELv0.n + 1 or table.shape[0] < needed:
        raise ValueError(
            f"key switching key must hold {needed} samples of {TLWELv0.n + 1} "
            f"coefficients, got shape {table.shape}"
        )
    return table


def identity_key_switching(src: TLWELv1, key_switching_key) -> TLWELv0:
    """Switch a level-1 sample to a level-0 sample under the same message.

    ``key_switching_key`` is either a sequence of :class:`TLWELv0` or a 2-D
    array of their coefficients, indexed ``BASE*IKS_T*i + BASE*j + k``.
    """
    table = _ksk_table(key_switching_key)
    a_bar = src.p[:N] + _KS_PREC_OFFSET
    digits = (a_bar[:, None] >> _KS_SHIFTS[None, :]) & np.uint32(_KS_BASE - 1)
    index = (
        _KS_BASE * IKS_T * np.arange(N, dtype=np.int64)[:, None]
        + _KS_BASE * np.arange(IKS_T, dtype=np.int64)[None, :]
        + digits.astype(np.int64)
    )
    rows = index[digits != 0]
    total = table[rows].sum(axis=0, dtype=np.int64)
    body = np.zeros(TLWELv0.n + 1, dtype=np.int64)
    body[TLWELv0.n] = src.b
    return TLWELv0(((body - total) & TORUS_MASK).astype(np.uint32))