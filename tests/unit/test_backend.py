"""
Cross-checks against libsecp256k1 (via coincurve).
"""

import random

import pytest

from bigecdh import backend
from bigecdh.backend import (
    reference_public_point,
    reference_shared_point,
    verify_party,
)
from bigecdh.bigint import BigInt
from bigecdh.curve import Point
from bigecdh.curves import SECP256K1
from bigecdh.errors import BackendMismatch, InvalidPublicPoint
from bigecdh.party import KeyExchangeParty, exchange

G = SECP256K1.g


class TestReferencePoints:
    def test_generator(self) -> None:
        assert reference_public_point(BigInt(1)) == G

    @pytest.mark.parametrize("k", [2, 3, 7, 255, 65537])
    def test_public_points_agree(self, k: int) -> None:
        assert reference_public_point(BigInt(k)) == SECP256K1.scalar_multiply(G, k)

    def test_zero_and_order_give_identity(self) -> None:
        assert reference_public_point(BigInt(0)).is_inf()
        assert reference_public_point(SECP256K1.n).is_inf()

    def test_order_minus_one_is_negation(self) -> None:
        assert reference_public_point(SECP256K1.n - 1) == SECP256K1.negate(G)

    def test_shared_points_agree(self, rng: random.Random) -> None:
        for _ in range(3):
            a = rng.randrange(1, 2 ** 20)
            b = rng.randrange(1, 2 ** 20)
            peer = SECP256K1.scalar_multiply(G, b)
            ours = SECP256K1.scalar_multiply(peer, a)
            assert reference_shared_point(BigInt(a), peer) == ours

    def test_identity_peer_cannot_be_encoded(self) -> None:
        with pytest.raises(InvalidPublicPoint):
            reference_shared_point(BigInt(3), Point.identity())


class TestVerifyParty:
    def test_small_scalar_party(self, rng: random.Random) -> None:
        alice = KeyExchangeParty(SECP256K1, "Alice", rng=rng, upper_bound=2 ** 24)
        bob = KeyExchangeParty(SECP256K1, "Bob", rng=rng, upper_bound=2 ** 24)
        exchange(alice, bob)
        verify_party(alice)
        verify_party(bob)
        assert reference_shared_point(
            alice.private_scalar, bob.public_point
        ) == alice.shared_secret

    def test_other_curve_rejected(self, toy) -> None:
        party = KeyExchangeParty(toy, "Alice", private_scalar=3)
        with pytest.raises(ValueError):
            verify_party(party)

    def test_mismatch(self, monkeypatch) -> None:
        party = KeyExchangeParty(SECP256K1, "Alice", private_scalar=5)
        monkeypatch.setattr(backend, "reference_public_point", lambda k: G)
        with pytest.raises(BackendMismatch):
            verify_party(party)

    @pytest.mark.slow
    def test_full_width_party(self) -> None:
        party = KeyExchangeParty(SECP256K1, "Alice", rng=random.Random(99))
        verify_party(party)


class TestWideIntScalars:
    def test_wide_private_scalar(self) -> None:
        k = 2 ** 70 + 12345
        party = KeyExchangeParty(SECP256K1, "Alice", private_scalar=k)
        assert party.private_scalar == k
        expected = reference_public_point(BigInt.from_string(str(k)))
        assert party.public_point == expected
        verify_party(party)

    def test_wide_upper_bound(self, rng: random.Random) -> None:
        party = KeyExchangeParty(
            SECP256K1, "Bob", rng=rng, upper_bound=2 ** 72,
        )
        assert party.private_scalar < 2 ** 72
        verify_party(party)
