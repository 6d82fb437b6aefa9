"""
Exception hierarchy for bigecdh.

Every exception derives from :class:`BigECDHError` *and* from the
closest built-in exception, so callers can catch either the library
root or the usual Python category (``ZeroDivisionError``,
``ValueError``, …).

None of these conditions leaves partial state behind: all values in
the package are immutable, so a failed operation simply produces no
result.
"""

from __future__ import annotations


class BigECDHError(Exception):
    """Root of all errors raised by this package."""


# ── arithmetic ──────────────────────────────────────────────────────────
class DivisionByZero(BigECDHError, ZeroDivisionError):
    """Division or reduction by a zero ``BigInt``."""


class DoesNotFit(BigECDHError, OverflowError):
    """A value does not fit in the requested native width."""


class Underflow(BigECDHError, ArithmeticError):
    """Subtraction would produce a negative unsigned value."""


class NoModularInverse(BigECDHError, ArithmeticError):
    """``gcd(value, modulus) != 1``, so no inverse exists."""


class NoSquareRoot(BigECDHError, ArithmeticError):
    """The value is a quadratic non-residue modulo the prime."""


# ── curve group ─────────────────────────────────────────────────────────
class InvalidPointPair(BigECDHError, ValueError):
    """Two points for which the group law defines no sum."""


class PointNotOnCurve(BigECDHError, ValueError):
    """Affine coordinates that do not satisfy the curve equation."""


class SingularCurve(BigECDHError, ValueError):
    """Curve parameters with ``4a³ + 27b² ≡ 0 (mod p)``."""


# ── key exchange ────────────────────────────────────────────────────────
class InvalidPublicPoint(BigECDHError, ValueError):
    """A peer public point that must not be used for key agreement."""


class KeyAgreementError(BigECDHError, RuntimeError):
    """Both parties finished the exchange with different secrets."""


class BackendMismatch(BigECDHError, RuntimeError):
    """libsecp256k1 disagrees with the pure-Python computation."""
