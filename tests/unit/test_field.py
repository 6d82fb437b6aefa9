"""
Tests for prime-field helpers: inversion and square roots.
"""

import math
import random

import pytest

from bigecdh.bigint import BigInt
from bigecdh.curves import P192, SECP256K1
from bigecdh.errors import DivisionByZero, NoModularInverse, NoSquareRoot
from bigecdh.field import (
    gcd,
    is_quadratic_residue,
    mod_add,
    mod_inverse,
    mod_inverse_fermat,
    mod_mul,
    mod_sqrt,
    mod_sub,
)

SEVENTEEN = BigInt(17)


class TestResidueArithmetic:
    def test_mod_sub_wraps(self) -> None:
        assert mod_sub(BigInt(3), BigInt(5), SEVENTEEN) == 15
        assert mod_sub(BigInt(5), BigInt(3), SEVENTEEN) == 2
        assert mod_sub(BigInt(0), BigInt(0), SEVENTEEN) == 0

    def test_mod_sub_unreduced_operands(self) -> None:
        assert mod_sub(BigInt(20), BigInt(40), SEVENTEEN) == (20 - 40) % 17

    def test_mod_add_mul(self) -> None:
        assert mod_add(BigInt(16), BigInt(5), SEVENTEEN) == 4
        assert mod_mul(BigInt(16), BigInt(16), SEVENTEEN) == 1

    def test_gcd(self, rng: random.Random) -> None:
        for _ in range(50):
            a = rng.randrange(10 ** 25)
            b = rng.randrange(10 ** 25)
            assert gcd(BigInt(str(a)), BigInt(str(b))) == math.gcd(a, b)


class TestModInverse:
    """Extended Euclid, coefficients kept unsigned"""

    def test_every_residue_mod_17(self) -> None:
        for a in range(1, 17):
            inv = mod_inverse(BigInt(a), SEVENTEEN)
            assert inv < SEVENTEEN
            assert (BigInt(a) * inv) % SEVENTEEN == 1

    def test_known_value(self) -> None:
        assert mod_inverse(BigInt(3), SEVENTEEN) == 6

    def test_unreduced_input(self) -> None:
        assert mod_inverse(BigInt(3 + 17 * 1000), SEVENTEEN) == 6

    def test_p192_random(self, rng: random.Random) -> None:
        p = P192.p
        native_p = int(p.to_string())
        for _ in range(25):
            a = rng.randrange(1, native_p)
            inv = mod_inverse(BigInt(str(a)), p)
            assert (BigInt(str(a)) * inv) % p == 1
            assert inv == pow(a, -1, native_p)

    def test_composite_modulus_when_coprime(self) -> None:
        assert mod_inverse(BigInt(7), BigInt(40)) == 23

    def test_not_invertible(self) -> None:
        with pytest.raises(NoModularInverse):
            mod_inverse(BigInt(6), BigInt(9))

    def test_zero_has_no_inverse(self) -> None:
        with pytest.raises(NoModularInverse):
            mod_inverse(BigInt(0), SEVENTEEN)
        with pytest.raises(ArithmeticError):
            mod_inverse(BigInt(34), SEVENTEEN)

    def test_zero_modulus(self) -> None:
        with pytest.raises(DivisionByZero):
            mod_inverse(BigInt(3), BigInt(0))

    def test_fermat_agrees(self, rng: random.Random) -> None:
        p = SECP256K1.p
        native_p = int(p.to_string())
        for _ in range(5):
            a = BigInt(str(rng.randrange(1, native_p)))
            assert mod_inverse_fermat(a, p) == mod_inverse(a, p)

    def test_fermat_zero(self) -> None:
        with pytest.raises(NoModularInverse):
            mod_inverse_fermat(BigInt(17), SEVENTEEN)


class TestSquareRoots:
    # 17 ≡ 1 (mod 16), 23 ≡ 3 (mod 4), 41 ≡ 1 (mod 8)
    @pytest.mark.parametrize("p", [17, 23, 41])
    def test_every_residue(self, p: int) -> None:
        squares = {(x * x) % p for x in range(p)}
        P = BigInt(p)
        for n in range(p):
            if n in squares:
                r = mod_sqrt(BigInt(n), P)
                assert (r * r) % P == n
                assert r <= P - r
                assert is_quadratic_residue(BigInt(n), P)
            else:
                assert not is_quadratic_residue(BigInt(n), P)
                with pytest.raises(NoSquareRoot):
                    mod_sqrt(BigInt(n), P)

    def test_residues_mod_17(self) -> None:
        residues = [
            n for n in range(1, 17) if is_quadratic_residue(BigInt(n), SEVENTEEN)
        ]
        assert residues == [1, 2, 4, 8, 9, 13, 15, 16]

    def test_zero(self) -> None:
        assert mod_sqrt(BigInt(0), SEVENTEEN) == 0
        assert is_quadratic_residue(BigInt(0), SEVENTEEN)

    def test_large_prime(self) -> None:
        """P-192 generator ordinate is a root of the curve equation"""
        p = P192.p
        x = P192.g.x
        rhs = ((x * x % p) * x + P192.a * x + P192.b) % p
        r = mod_sqrt(rhs, p)
        assert r in (P192.g.y, p - P192.g.y)
