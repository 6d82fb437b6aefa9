"""
bigecdh: Elliptic-curve Diffie-Hellman over from-scratch big integers.

An ECDH stack built bottom-up:

- **BigInt**: arbitrary-precision unsigned integers on decimal limbs,
  with schoolbook multiplication and long division
- **Prime-field helpers**: extended-Euclid inversion, Fermat
  inversion, Tonelli-Shanks square roots
- **Curve group**: chord-and-tangent addition with a tagged identity,
  double-and-add scalar multiplication
- **Key exchange**: two parties derive the same point  d_A·d_B·G

Not constant-time.  Intended for study and testing, not production
key agreement.

Quick start
-----------
::

    from bigecdh import KeyExchangeParty, exchange, get_curve

    curve = get_curve("p192")
    alice = KeyExchangeParty(curve, "Alice")
    bob = KeyExchangeParty(curve, "Bob")

    exchange(alice, bob)
    print(alice.format_shared_key())
    print(bob.format_shared_key())
"""

__version__ = "0.1.0"

# ── arithmetic ──────────────────────────────────────────────────────────
from .bigint import BigInt, mod_pow

# ── prime field ─────────────────────────────────────────────────────────
from .field import (
    gcd,
    mod_inverse,
    mod_inverse_fermat,
    is_quadratic_residue,
    mod_sqrt,
)

# ── curve group ─────────────────────────────────────────────────────────
from .curve import Curve, Point
from .curves import CURVES, TOY17, P192, SECP256K1, curve_from_strings, get_curve

# ── key exchange ────────────────────────────────────────────────────────
from .party import KeyExchangeParty, exchange, random_scalar

# ── errors ──────────────────────────────────────────────────────────────
from .errors import (
    BigECDHError,
    DivisionByZero,
    DoesNotFit,
    Underflow,
    NoModularInverse,
    NoSquareRoot,
    InvalidPointPair,
    PointNotOnCurve,
    SingularCurve,
    InvalidPublicPoint,
    KeyAgreementError,
    BackendMismatch,
)

__all__ = [
    # version
    "__version__",
    # arithmetic
    "BigInt", "mod_pow",
    # field
    "gcd", "mod_inverse", "mod_inverse_fermat",
    "is_quadratic_residue", "mod_sqrt",
    # curves
    "Curve", "Point",
    "CURVES", "TOY17", "P192", "SECP256K1",
    "curve_from_strings", "get_curve",
    # key exchange
    "KeyExchangeParty", "exchange", "random_scalar",
    # errors
    "BigECDHError", "DivisionByZero", "DoesNotFit", "Underflow",
    "NoModularInverse", "NoSquareRoot", "InvalidPointPair",
    "PointNotOnCurve", "SingularCurve", "InvalidPublicPoint",
    "KeyAgreementError", "BackendMismatch",
]
