"""
Two-party elliptic-curve Diffie-Hellman.

Each ``KeyExchangeParty`` draws a private scalar ``d``, publishes
``Q = d·G`` and, given the peer's public point ``Q'``, derives

    S = d · Q' = d · d' · G

which both sides obtain because scalar multiplication commutes.

Usage
-----
::

    from bigecdh import KeyExchangeParty, get_curve, exchange

    curve = get_curve("p192")
    alice = KeyExchangeParty(curve, "Alice")
    bob = KeyExchangeParty(curve, "Bob")

    secret = exchange(alice, bob)
    print(alice.format_shared_key())   # sharedKey of Alice : (x, y)

Randomness is injected: pass ``rng=random.Random(seed)`` (or any object
with ``randrange``) for reproducible scalars, or ``private_scalar=`` to
fix one outright.  The default is ``secrets.SystemRandom()``.
"""

from __future__ import annotations

import logging
import secrets
from typing import Optional, Protocol, Union

from .bigint import BASE, BASE_DIGITS, BigInt, ONE, as_bigint
from .curve import Curve, Point
from .errors import InvalidPublicPoint, KeyAgreementError

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    """Anything with ``randrange(stop)``, e.g. ``random.Random``."""

    def randrange(self, stop: int) -> int: ...


# ── scalar sampling ─────────────────────────────────────────────────────
def random_scalar(
    upper_bound: BigInt,
    rng: Optional[RandomSource] = None,
    lower: BigInt = ONE,
) -> BigInt:
    """
    Uniform in ``[lower, upper_bound)`` via rejection sampling.

    Candidates are built one base-10⁹ limb at a time with the top limb
    capped at the bound's top limb, so at most about half of them are
    rejected.
    """
    if rng is None:
        rng = secrets.SystemRandom()
    if upper_bound <= lower:
        raise ValueError(
            f"empty scalar range [{lower}, {upper_bound})"
        )
    digits = upper_bound.to_string()
    # decimal limbs of the bound, most significant first
    top_len = len(digits) % BASE_DIGITS or BASE_DIGITS
    top = int(digits[:top_len])
    n_low = (len(digits) - top_len) // BASE_DIGITS
    while True:
        limbs = [rng.randrange(BASE) for _ in range(n_low)]
        limbs.append(rng.randrange(top + 1))
        text = str(limbs[-1]) + "".join(
            f"{x:0{BASE_DIGITS}d}" for x in reversed(limbs[:-1])
        )
        candidate = BigInt.from_string(text)
        if lower <= candidate < upper_bound:
            return candidate


# ── party ───────────────────────────────────────────────────────────────
class KeyExchangeParty:
    """
    One side of an ECDH exchange.

    Parameters
    ----------
    curve : Curve
        Shared, immutable domain parameters.
    label : str
        Identifying name, used only for output.
    rng : RandomSource or None
        Source for the private scalar (default: OS randomness).
    private_scalar : BigInt, int or None
        Fixed private scalar; must be non-zero.  Skips sampling.
    upper_bound : BigInt, int or None
        Exclusive bound for sampled scalars (default: the curve order,
        or p when the curve has none).
    """

    def __init__(
        self,
        curve: Curve,
        label: str,
        *,
        rng: Optional[RandomSource] = None,
        private_scalar: Optional[Union[BigInt, int]] = None,
        upper_bound: Optional[Union[BigInt, int]] = None,
    ) -> None:
        self._curve = curve
        self._label = label

        if private_scalar is not None:
            d = as_bigint(private_scalar)
            if d.is_zero():
                raise ValueError("private scalar must be non-zero")
        else:
            bound = (
                curve.scalar_bound if upper_bound is None
                else as_bigint(upper_bound)
            )
            d = random_scalar(bound, rng)
        self._d = d

        self._public = curve.scalar_multiply(curve.g, d)
        self._shared: Optional[Point] = None
        logger.info("party %s created on %s", label, curve.name)

    # exchange ---------------------------------------------------------------
    def derive_shared_secret(self, peer_public: Point) -> Point:
        """
        ``S = d · peer_public``; stored and returned.

        Raises
        ------
        InvalidPublicPoint
            If *peer_public* is the identity or not on this curve.
        """
        if self._curve.is_identity(peer_public):
            raise InvalidPublicPoint("peer public point is the identity")
        if not self._curve.contains(peer_public):
            raise InvalidPublicPoint(
                f"peer public point {peer_public!r} is not on "
                f"curve {self._curve.name!r}"
            )
        self._shared = self._curve.scalar_multiply(peer_public, self._d)
        logger.info("party %s derived a shared secret", self._label)
        return self._shared

    def format_shared_key(self) -> str:
        """``sharedKey of <label> : (<x>, <y>)`` in decimal."""
        if self._shared is None:
            raise RuntimeError(f"{self._label} has not exchanged keys yet")
        if self._shared.is_inf():
            return f"sharedKey of {self._label} : (∞)"
        x, y = self._shared.coordinates()
        return f"sharedKey of {self._label} : ({x}, {y})"

    # accessors --------------------------------------------------------------
    @property
    def label(self) -> str:
        return self._label

    @property
    def curve(self) -> Curve:
        return self._curve

    @property
    def private_scalar(self) -> BigInt:
        return self._d

    @property
    def public_point(self) -> Point:
        return self._public

    @property
    def shared_secret(self) -> Optional[Point]:
        return self._shared

    def __repr__(self) -> str:
        return (
            f"KeyExchangeParty({self._label!r}, curve={self._curve.name}, "
            f"public={self._public!r})"
        )


def exchange(first: KeyExchangeParty, second: KeyExchangeParty) -> Point:
    """
    Run both halves of the exchange and return the common point.

    Raises ``KeyAgreementError`` if the parties end up with different
    secrets (e.g. they were built on different curves).
    """
    s1 = first.derive_shared_secret(second.public_point)
    s2 = second.derive_shared_secret(first.public_point)
    if s1 != s2:
        raise KeyAgreementError(
            f"{first.label} and {second.label} derived different secrets"
        )
    logger.info("exchange %s <-> %s complete", first.label, second.label)
    return s1
