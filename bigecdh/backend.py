"""
Cross-check of secp256k1 results against libsecp256k1.

Everything in ``bigecdh`` is computed on ``BigInt`` limbs.  For the one
curve libsecp256k1 supports, the same scalar multiplications are
repeated through ``coincurve`` and the two answers compared: a party
whose public point disagrees raises ``BackendMismatch``.  Points cross
the boundary in the 65-byte uncompressed SEC 1 form ``04 || x || y``.

Used by ``bigecdh --curve secp256k1 --verify`` and by the test suite.
"""

from __future__ import annotations

import logging

from coincurve import PrivateKey, PublicKey

from .bigint import BigInt, as_bigint
from .curve import Point
from .curves import SECP256K1
from .errors import BackendMismatch, InvalidPublicPoint
from .party import KeyExchangeParty

logger = logging.getLogger(__name__)

SCALAR_BYTES = 32
COORD_BYTES = 32


# ── conversions ─────────────────────────────────────────────────────────
def _scalar_bytes(k: BigInt) -> bytes:
    return (k % SECP256K1.n).to_bytes(SCALAR_BYTES)  # type: ignore[operator]


def _to_point(pk: PublicKey) -> Point:
    raw = pk.format(compressed=False)
    return Point(
        BigInt.from_bytes(raw[1:1 + COORD_BYTES]),
        BigInt.from_bytes(raw[1 + COORD_BYTES:]),
    )


def _from_point(point: Point) -> PublicKey:
    if point.is_inf():
        raise InvalidPublicPoint("libsecp256k1 cannot encode the identity")
    x, y = point.coordinates()
    return PublicKey(
        b"\x04" + x.to_bytes(COORD_BYTES) + y.to_bytes(COORD_BYTES)
    )


# ── reference computations ──────────────────────────────────────────────
def reference_public_point(scalar: BigInt) -> Point:
    """``scalar · G`` on secp256k1, computed by libsecp256k1."""
    data = _scalar_bytes(as_bigint(scalar))
    if not any(data):
        return Point.identity()
    return _to_point(PrivateKey(data).public_key)


def reference_shared_point(scalar: BigInt, peer: Point) -> Point:
    """``scalar · peer`` on secp256k1, computed by libsecp256k1."""
    data = _scalar_bytes(as_bigint(scalar))
    if not any(data):
        return Point.identity()
    return _to_point(_from_point(peer).multiply(data))


def verify_party(party: KeyExchangeParty) -> None:
    """
    Check a secp256k1 party's public point against libsecp256k1.

    Raises
    ------
    ValueError
        If the party is not on secp256k1.
    BackendMismatch
        If libsecp256k1 computes a different public point.
    """
    if party.curve != SECP256K1:
        raise ValueError(
            f"libsecp256k1 only supports secp256k1, not {party.curve.name}"
        )
    expected = reference_public_point(party.private_scalar)
    if expected != party.public_point:
        raise BackendMismatch(
            f"public point of {party.label} differs from libsecp256k1"
        )
    logger.debug("libsecp256k1 agrees with %s's public point", party.label)
