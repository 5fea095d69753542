"""Lookup table generation for programmable bootstrapping."""

from __future__ import annotations

import math
from collections.abc import Callable

import numpy as np

from .. import params
from ..params import TORUS_MASK
from ..trlwe import TRLWELv1
from .encoder import Encoder
from .lookup_table import LookupTable

_U32_MAX = float(TORUS_MASK)


def _div_round(a: int, b: int) -> int:
    """Integer division of non-negative values, rounding halves up."""
    return (a + b // 2) // b


class Generator:
    """Builds lookup tables that encode functions on the message space."""

    def __init__(self, message_modulus: int, scale: float | None = None) -> None:
        self.encoder = Encoder(message_modulus, scale)
        self.poly_degree = params.trgsw_lv1.n
        # With no polynomial extension the table is as long as the polynomial.
        self.lookup_table_size = self.poly_degree

    @classmethod
    def with_scale(cls, message_modulus: int, scale: float) -> Generator:
        """Create a generator whose encoder uses a custom scale."""
        return cls(message_modulus, scale)

    @property
    def message_modulus(self) -> int:
        """Number of distinct messages."""
        return self.encoder.message_modulus

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message_modulus={self.message_modulus}, "
            f"scale={self.encoder.scale})"
        )

    def generate_lookup_table(self, f: Callable[[int], int]) -> LookupTable:
        """Build a table for ``f``, encoding each output with the encoder."""
        encoder = self.encoder
        values = [encoder.encode(f(x)) for x in range(encoder.message_modulus)]
        return self._build(values)

    def generate_lookup_table_full(self, f: Callable[[int], int]) -> LookupTable:
        """Build a table for ``f`` whose outputs are raw torus values."""
        values = [int(f(x)) & TORUS_MASK for x in range(self.message_modulus)]
        return self._build(values)

    def generate_lookup_table_custom(
        self, f: Callable[[int], int], message_modulus: int, scale: float
    ) -> LookupTable:
        """Build a table for ``f`` with a different modulus and scale."""
        return Generator.with_scale(message_modulus, scale).generate_lookup_table(f)

    def mod_switch(self, x: int) -> int:
        """Switch a torus value to an index in ``[0, lookup_table_size)``."""
        size = self.lookup_table_size
        scaled = (int(x) & TORUS_MASK) / _U32_MAX * size
        return math.floor(scaled + 0.5) % size

    def _build(self, values: list[int]) -> LookupTable:
        size = self.lookup_table_size
        modulus = len(values)
        bounds = [_div_round(x * size, modulus) for x in range(modulus + 1)]
        raw = np.repeat(
            np.array(values, dtype=np.uint32), np.diff(np.array(bounds))
        )
        offset = _div_round(size, 2 * modulus)
        rotated = np.roll(raw, -offset)
        if offset:
            rotated[size - offset:] = np.negative(rotated[size - offset:])
        poly = TRLWELv1(np.zeros(size, dtype=np.uint32), rotated)
        return LookupTable.from_poly(poly)