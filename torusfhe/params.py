"""Security parameter sets for the torus FHE scheme.

Each preset bundles the LWE, ring-LWE and ring-GSW parameters that together
fix a security level. Module-level shortcuts (``tlwe_lv0``, ``trgsw_lv1`` and
so on) expose the default preset for code that works with a single
parameter set.
"""

from __future__ import annotations

from dataclasses import dataclass

TORUS_SIZE = 32
TORUS_MASK = (1 << TORUS_SIZE) - 1
ZERO_TORUS = 0


@dataclass(frozen=True)
class TlweParams:
    """Parameters of a scalar LWE ciphertext."""

    n: int
    alpha: float


@dataclass(frozen=True)
class TrlweParams:
    """Parameters of a ring-LWE ciphertext."""

    n: int
    alpha: float


@dataclass(frozen=True)
class TrgswParams:
    """Parameters of a ring-GSW ciphertext and of key switching."""

    n: int
    nbit: int
    bgbit: int
    bg: int
    l: int  # noqa: E741
    basebit: int
    iks_t: int
    alpha: float


@dataclass(frozen=True)
class SecurityParams:
    """A complete parameter set for one security level."""

    security_bits: int
    description: str
    tlwe_lv0: TlweParams
    tlwe_lv1: TlweParams
    trlwe_lv1: TrlweParams
    trgsw_lv1: TrgswParams


def _preset(
    security_bits: int,
    description: str,
    lv0: tuple[int, float],
    lv1_alpha: float,
    *,
    bgbit: int,
    l: int,  # noqa: E741
    basebit: int,
    iks_t: int,
) -> SecurityParams:
    n1 = 1024
    return SecurityParams(
        security_bits=security_bits,
        description=description,
        tlwe_lv0=TlweParams(n=lv0[0], alpha=lv0[1]),
        tlwe_lv1=TlweParams(n=n1, alpha=lv1_alpha),
        trlwe_lv1=TrlweParams(n=n1, alpha=lv1_alpha),
        trgsw_lv1=TrgswParams(
            n=n1,
            nbit=10,
            bgbit=bgbit,
            bg=1 << bgbit,
            l=l,
            basebit=basebit,
            iks_t=iks_t,
            alpha=lv1_alpha,
        ),
    )


SECURITY_80_BIT = _preset(
    80,
    "80-bit security (performance-optimized)",
    (550, 5.0e-5),
    3.73e-8,
    bgbit=6, l=3, basebit=2, iks_t=7,
)

SECURITY_110_BIT = _preset(
    110,
    "110-bit security (balanced, original TFHE)",
    (630, 3.0517578125e-05),
    2.9802322387695313e-8,
    bgbit=6, l=3, basebit=2, iks_t=8,
)

SECURITY_UINT1 = _preset(
    1,
    "Uint1 parameters (1-bit binary/boolean, messageModulus=2, N=1024)",
    (700, 2.0e-05),
    2.0e-08,
    bgbit=10, l=2, basebit=2, iks_t=8,
)

SECURITY_UINT2 = _preset(
    2,
    "Uint2 parameters (2-bit messages, messageModulus=4, N=1024)",
    (687, 0.00002120846893069972),
    0.0000000000023184122752704995,
    bgbit=18, l=1, basebit=4, iks_t=3,
)

SECURITY_UINT3 = _preset(
    3,
    "Uint3 parameters (3-bit messages, messageModulus=8, N=1024)",
    (820, 0.0000025167616095979554),
    0.0000000000000002220446049250313,
    bgbit=23, l=1, basebit=6, iks_t=2,
)

SECURITY_UINT4 = _preset(
    4,
    "Uint4 parameters (4-bit messages, messageModulus=16, N=1024)",
    (820, 0.0000025167616095979554),
    0.0000000000000002220446049250313,
    bgbit=22, l=1, basebit=5, iks_t=3,
)

SECURITY_UINT5 = _preset(
    5,
    "Uint5 parameters (5-bit messages, messageModulus=32, N=1024)",
    (1071, 7.08822676541043e-8),
    2.2204460492503131e-17,
    bgbit=22, l=1, basebit=6, iks_t=3,
)

SECURITY_UINT6 = _preset(
    6,
    "Uint6 parameters (6-bit messages, messageModulus=64, N=1024)",
    (1071, 7.08822676541043e-8),
    2.2204460492503131e-17,
    bgbit=22, l=1, basebit=6, iks_t=3,
)

SECURITY_UINT7 = _preset(
    7,
    "Uint7 parameters (7-bit messages, messageModulus=128, N=1024)",
    (1160, 1.9662200074984027e-8),
    2.2204460492503131e-17,
    bgbit=22, l=1, basebit=7, iks_t=3,
)

SECURITY_UINT8 = _preset(
    8,
    "Uint8 parameters (8-bit messages, messageModulus=256, N=1024)",
    (1160, 1.9662200074984027e-8),
    2.2204460492503131e-17,
    bgbit=22, l=1, basebit=7, iks_t=3,
)

SECURITY_128_BIT = _preset(
    128,
    "128-bit security (high security, quantum-resistant)",
    (700, 2.0e-5),
    2.0e-8,
    bgbit=6, l=3, basebit=2, iks_t=9,
)

DEFAULT_SECURITY = SECURITY_128_BIT

# Shortcuts to the default parameter set.
SECURITY_BITS = DEFAULT_SECURITY.security_bits
SECURITY_DESCRIPTION = DEFAULT_SECURITY.description
tlwe_lv0 = DEFAULT_SECURITY.tlwe_lv0
tlwe_lv1 = DEFAULT_SECURITY.tlwe_lv1
trlwe_lv1 = DEFAULT_SECURITY.trlwe_lv1
trgsw_lv1 = DEFAULT_SECURITY.trgsw_lv1

KSK_ALPHA = SECURITY_128_BIT.tlwe_lv0.alpha
BSK_ALPHA = SECURITY_128_BIT.tlwe_lv1.alpha


def security_info(params: SecurityParams) -> str:
    """Describe the security level of a parameter set."""
    return f"Security level: {params.security_bits} bits ({params.description})"