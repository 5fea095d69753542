"""Encoding of integer messages onto the torus for programmable bootstrapping."""

from __future__ import annotations

from dataclasses import dataclass

from ..utils import f64_to_torus, torus_to_f64


@dataclass
class Encoder:
    """Maps messages in ``[0, message_modulus)`` to torus values and back.

    Without an explicit scale, messages are placed at multiples of
    ``1 / (2 * message_modulus)``.
    """

    message_modulus: int
    scale: float | None = None

    def __post_init__(self) -> None:
        if self.message_modulus <= 0:
            raise ValueError(f"message modulus must be positive, got {self.message_modulus}")
        if self.scale is None:
            self.scale = 1.0 / (2.0 * self.message_modulus)

    @classmethod
    def with_scale(cls, message_modulus: int, scale: float) -> Encoder:
        """Create an encoder with a custom scaling factor."""
        return cls(message_modulus, scale)

    def encode(self, message: int) -> int:
        """Encode ``message`` (taken modulo the modulus) as a torus value."""
        return self.encode_with_scale(message, self.scale)

    def encode_with_scale(self, message: int, scale: float) -> int:
        """Encode ``message`` using ``scale`` instead of the encoder's own."""
        return f64_to_torus((message % self.message_modulus) * scale)

    def decode(self, value: int) -> int:
        """Round a torus value to the nearest message."""
        message = max(0, int(torus_to_f64(value) / self.scale + 0.5))
        return message % self.message_modulus

    def decode_bool(self, value: int) -> bool:
        """Decode a torus value as a boolean (non-zero message is true)."""
        return self.decode(value) != 0