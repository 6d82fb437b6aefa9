"""
Named domain parameters and curve construction from decimal text.

Curve parameters usually reach the library as decimal strings (command
line, configuration files); :func:`curve_from_strings` parses each one
with the permissive ``BigInt.from_string``.

Registered curves
-----------------
``toy17``
    y² = x³ + 7 over F₁₇.  18 points; G = (6, 11) generates the whole
    group.  Small enough to enumerate and check by hand.
``p192``
    NIST P-192 / secp192r1 (SEC 2 v2 §2.2.2).  Parameters in decimal, as
    they are usually handed to the demo.
``secp256k1``
    SEC 2 v2 §2.4.1, the Bitcoin curve; cross-checkable against
    libsecp256k1 (see :pymod:`backend`).
"""

from __future__ import annotations

from typing import Dict, Optional

from .bigint import BigInt
from .curve import Curve, Point


def curve_from_strings(
    a: str,
    b: str,
    p: str,
    gx: str,
    gy: str,
    n: Optional[str] = None,
    name: str = "custom",
) -> Curve:
    """Build and validate a curve whose parameters are decimal text."""
    return Curve(
        name=name,
        a=BigInt.from_string(a),
        b=BigInt.from_string(b),
        p=BigInt.from_string(p),
        g=Point(BigInt.from_string(gx), BigInt.from_string(gy)),
        n=None if n is None else BigInt.from_string(n),
    )


# ── toy curve over F_17 ─────────────────────────────────────────────────
TOY17 = Curve.create(
    "toy17", a=0, b=7, p=17, gx=6, gy=11, n=18, h=1,
)

# ── NIST P-192 ──────────────────────────────────────────────────────────
P192 = Curve(
    name="p192",
    a=BigInt.from_string(
        "6277101735386680763835789423207666416083908700390324961276"),
    b=BigInt.from_string(
        "2455155546008943817740293915197451784769108058161191238065"),
    p=BigInt.from_string(
        "6277101735386680763835789423207666416083908700390324961279"),
    g=Point(
        BigInt.from_string(
            "602046282375688656758213480587526111916698976636884684818"),
        BigInt.from_string(
            "174050332293622031404857552280219410364023488927386650641"),
    ),
    n=BigInt.from_hex("ffffffff_ffffffff_ffffffff_99def836_146bc9b1_b4d22831"),
    h=BigInt(1),
)

# ── secp256k1 ───────────────────────────────────────────────────────────
SECP256K1 = Curve(
    name="secp256k1",
    a=BigInt(0),
    b=BigInt(7),
    p=BigInt.from_hex(
        "FFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F"),
    g=Point(
        BigInt.from_hex(
            "79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798"),
        BigInt.from_hex(
            "483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8"),
    ),
    n=BigInt.from_hex(
        "FFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141"),
    h=BigInt(1),
)

CURVES: Dict[str, Curve] = {c.name: c for c in (TOY17, P192, SECP256K1)}


def get_curve(name: str) -> Curve:
    """Look up a registered curve (case-insensitive)."""
    try:
        return CURVES[name.strip().lower()]
    except KeyError:
        known = ", ".join(sorted(CURVES))
        raise KeyError(f"unknown curve {name!r} (known: {known})") from None
