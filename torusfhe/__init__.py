"""TFHE primitives over the 32-bit torus: LWE, ring LWE, ring GSW, blind rotation and key switching."""

__version__ = "0.2.0"