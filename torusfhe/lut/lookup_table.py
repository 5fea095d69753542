"""Lookup tables used as test vectors in programmable bootstrapping."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..trlwe import TRLWELv1


@dataclass
class LookupTable:
    """A ring ciphertext whose coefficients encode a function."""

    poly: TRLWELv1 = field(default_factory=TRLWELv1)

    @classmethod
    def from_poly(cls, poly: TRLWELv1) -> LookupTable:
        """Wrap an existing ring polynomial pair."""
        return cls(poly)

    def copy_from(self, other: LookupTable) -> None:
        """Overwrite the coefficients with those of ``other``."""
        self.poly.a[:] = other.poly.a
        self.poly.b[:] = other.poly.b

    def clear(self) -> None:
        """Set every coefficient to zero."""
        self.poly.a.fill(0)
        self.poly.b.fill(0)

    def is_empty(self) -> bool:
        """Return whether every coefficient is zero."""
        return not self.poly.a.any() and not self.poly.b.any()