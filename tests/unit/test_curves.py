"""
Tests for the named-curve registry and curve construction from text.
"""

import pytest

from bigecdh.bigint import BigInt
from bigecdh.curve import Point
from bigecdh.curves import (
    CURVES,
    P192,
    SECP256K1,
    TOY17,
    curve_from_strings,
    get_curve,
)
from bigecdh.errors import PointNotOnCurve, SingularCurve


class TestRegistry:
    def test_known_names(self) -> None:
        assert sorted(CURVES) == ["p192", "secp256k1", "toy17"]

    def test_lookup_is_case_insensitive(self) -> None:
        assert get_curve("P192") is P192
        assert get_curve(" secp256K1 ") is SECP256K1
        assert get_curve("toy17") is TOY17

    def test_unknown_name(self) -> None:
        with pytest.raises(KeyError, match="known: p192, secp256k1, toy17"):
            get_curve("curve25519")


class TestDomainParameters:
    def test_p192_prime(self) -> None:
        assert P192.p == 2 ** 192 - 2 ** 64 - 1

    def test_p192_a_is_minus_three(self) -> None:
        assert P192.a == P192.p - 3

    def test_p192_order(self) -> None:
        assert P192.n == BigInt.from_string(
            "6277101735386680763835789423176059013767194773182842284081"
        )
        assert P192.h == 1

    def test_secp256k1_prime(self) -> None:
        assert SECP256K1.p == 2 ** 256 - 2 ** 32 - 977

    def test_secp256k1_double_generator(self) -> None:
        two_g = SECP256K1.double(SECP256K1.g)
        assert two_g == Point(
            BigInt.from_hex(
                "C6047F9441ED7D6D3045406E95C07CD85C778E4B8CEF3CA7ABAC09B95C709EE5"
            ),
            BigInt.from_hex(
                "1AE168FEA63DC339A3C58419466CEAEEF7F632653266D0E1236431A950CFE52A"
            ),
        )

    def test_toy_parameters(self) -> None:
        assert (TOY17.a, TOY17.b, TOY17.p) == (0, 7, 17)
        assert TOY17.g == Point(6, 11)
        assert TOY17.n == 18


class TestCurveFromStrings:
    def test_builds_toy_curve(self) -> None:
        curve = curve_from_strings("0", "7", "17", "6", "11", n="18")
        assert curve.name == "custom"
        assert curve.p == 17
        assert curve.g == TOY17.g
        assert curve.n == 18
        assert curve.scalar_multiply(curve.g, 15) == Point(8, 14)

    def test_permissive_parse(self) -> None:
        """Trailing text after the digits is ignored"""
        curve = curve_from_strings("0", "7\n", "17 # prime", "6", "11")
        assert curve.p == 17
        assert curve.n is None

    def test_p192_from_decimal(self) -> None:
        curve = curve_from_strings(
            "6277101735386680763835789423207666416083908700390324961276",
            "2455155546008943817740293915197451784769108058161191238065",
            "6277101735386680763835789423207666416083908700390324961279",
            "602046282375688656758213480587526111916698976636884684818",
            "174050332293622031404857552280219410364023488927386650641",
            name="p192-copy",
        )
        assert curve.g == P192.g
        assert curve.a == P192.a

    def test_invalid_generator(self) -> None:
        with pytest.raises(PointNotOnCurve):
            curve_from_strings("0", "7", "17", "6", "12")

    def test_singular(self) -> None:
        with pytest.raises(SingularCurve):
            curve_from_strings("0", "0", "17", "0", "0")
