"""
Elliptic-curve point group over a prime field, on top of ``BigInt``.

Curves are short Weierstrass curves

    y² = x³ + a·x + b   over  F_p,   p prime,

and points are either affine pairs ``(x, y)`` with coordinates in
``[0, p)`` or the point at infinity (the group identity).

The identity is a tagged value (``Point.identity()``), never a pair of
field elements, and an undefined sum raises ``InvalidPointPair``.  The
two can therefore never be confused with each other or with a real
coordinate pair.

Group law (chord-and-tangent):

    P ≠ ±Q :  λ = (y_Q − y_P) / (x_Q − x_P)
    P = Q  :  λ = (3·x_P² + a) / (2·y_P)
    x_R = λ² − x_P − x_Q
    y_R = λ·(x_P − x_R) − y_P

Every division is a multiplication by ``mod_inverse`` (extended
Euclid); every subtraction is biased by ``p`` to stay unsigned.

References
----------
- SEC 1 v2 §2.2.1   Elliptic curves over F_p
- Hankerson, Menezes, Vanstone.  *Guide to Elliptic Curve
  Cryptography*, §3.1.2 (group law) and Alg. 3.26 (double-and-add).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple, Union

from .bigint import BigInt, ONE, TWO, ZERO, as_bigint
from .errors import InvalidPointPair, PointNotOnCurve, SingularCurve
from .field import is_quadratic_residue, mod_inverse, mod_sqrt, mod_sub

logger = logging.getLogger(__name__)

Coordinate = Union[BigInt, int, str]

THREE = BigInt(3)
FOUR = BigInt(4)
TWENTY_SEVEN = BigInt(27)

# Largest prime for which the whole group may be listed.
ENUMERATION_LIMIT = BigInt(1 << 16)


# ── Point (tagged: identity | affine) ───────────────────────────────────
class Point:
    """
    Point on some curve: affine ``(x, y)`` or the point at infinity.

    A ``Point`` does not carry its curve; group operations live on
    :class:`Curve`.  Points are immutable and compare by value.
    """

    __slots__ = ("_x", "_y", "_inf")

    def __init__(
        self,
        x: Optional[Coordinate] = None,
        y: Optional[Coordinate] = None,
        *,
        infinity: bool = False,
    ) -> None:
        if infinity:
            if x is not None or y is not None:
                raise ValueError("the identity has no coordinates")
            self._x: Optional[BigInt] = None
            self._y: Optional[BigInt] = None
        else:
            if x is None or y is None:
                raise ValueError("an affine point needs both coordinates")
            self._x = as_bigint(x)
            self._y = as_bigint(y)
        self._inf = infinity

    # constructors -----------------------------------------------------------
    @classmethod
    def identity(cls) -> Point:
        """Point at infinity, the additive identity."""
        return cls(infinity=True)

    # accessors --------------------------------------------------------------
    @property
    def x(self) -> BigInt:
        if self._x is None:
            raise ValueError("the identity has no affine x")
        return self._x

    @property
    def y(self) -> BigInt:
        if self._y is None:
            raise ValueError("the identity has no affine y")
        return self._y

    def is_inf(self) -> bool:
        return self._inf

    def coordinates(self) -> Tuple[BigInt, BigInt]:
        return self.x, self.y

    # comparison / hashing ---------------------------------------------------
    def __eq__(self, o: object) -> bool:
        if not isinstance(o, Point):
            return False
        if self._inf or o._inf:
            return self._inf and o._inf
        return self._x == o._x and self._y == o._y

    def __hash__(self) -> int:
        if self._inf:
            return hash("Point(∞)")
        return hash((self._x, self._y))

    def __repr__(self) -> str:
        if self._inf:
            return "Point(∞)"
        return f"Point({_short(self._x)}, {_short(self._y)})"


def _short(value: Optional[BigInt]) -> str:
    s = str(value)
    return s if len(s) <= 16 else s[:12] + "…"


# ── Curve ───────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class Curve:
    """
    Immutable domain parameters  {a, b, p, G, n, h}.

    Construction validates that the curve is non-singular and that the
    generator lies on it.  ``n`` (order of G) and ``h`` (cofactor) are
    optional; without ``n`` private scalars are bounded by ``p``.
    """

    name: str
    a: BigInt
    b: BigInt
    p: BigInt
    g: Point
    n: Optional[BigInt] = None
    h: Optional[BigInt] = None

    def __post_init__(self) -> None:
        if self.p < THREE:
            raise ValueError(f"field prime must be at least 3, got {self.p}")
        if self.a >= self.p or self.b >= self.p:
            raise ValueError("curve coefficients must be reduced modulo p")
        if self.n is not None and self.n < TWO:
            raise ValueError(f"group order must be at least 2, got {self.n}")
        disc = (
            FOUR * self.a * self.a * self.a
            + TWENTY_SEVEN * self.b * self.b
        ) % self.p
        if disc.is_zero():
            raise SingularCurve(f"curve {self.name!r} is singular")
        if self.g.is_inf() or not self.contains(self.g):
            raise PointNotOnCurve(
                f"generator {self.g!r} is not on curve {self.name!r}"
            )
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "curve %s ready: %d-bit prime",
                self.name, self.p.bit_length(),
            )

    # factories --------------------------------------------------------------
    @classmethod
    def create(
        cls,
        name: str,
        a: Coordinate,
        b: Coordinate,
        p: Coordinate,
        gx: Coordinate,
        gy: Coordinate,
        n: Optional[Coordinate] = None,
        h: Optional[Coordinate] = None,
    ) -> Curve:
        """Build a curve from ``BigInt``, native ``int`` or decimal text."""
        return cls(
            name=name,
            a=as_bigint(a),
            b=as_bigint(b),
            p=as_bigint(p),
            g=Point(gx, gy),
            n=None if n is None else as_bigint(n),
            h=None if h is None else as_bigint(h),
        )

    @property
    def scalar_bound(self) -> BigInt:
        """Exclusive upper bound for private scalars."""
        return self.n if self.n is not None else self.p

    # membership -------------------------------------------------------------
    def is_on_curve(self, x: BigInt, y: BigInt) -> bool:
        """``y² ≡ x³ + a·x + b (mod p)``."""
        p = self.p
        lhs = (y * y) % p
        rhs = (((x * x) % p) * x + self.a * x + self.b) % p
        return lhs == rhs

    def contains(self, point: Point) -> bool:
        """Identity, or reduced affine coordinates on the curve."""
        if point.is_inf():
            return True
        x, y = point.coordinates()
        if x >= self.p or y >= self.p:
            return False
        return self.is_on_curve(x, y)

    def is_identity(self, point: Point) -> bool:
        return point.is_inf()

    # negation ---------------------------------------------------------------
    def negate_y(self, y: BigInt) -> BigInt:
        """``p − (y mod p)``, reduced so that ``−0 = 0``."""
        return (self.p - y % self.p) % self.p

    def negate(self, point: Point) -> Point:
        if point.is_inf():
            return point
        return Point(point.x, self.negate_y(point.y))

    # group law --------------------------------------------------------------
    def add(self, P: Point, Q: Point) -> Point:
        """
        Chord-and-tangent addition.

        - identity + Q = Q,  P + identity = P
        - x_P ≠ x_Q: chord
        - P = Q: tangent; a vertical tangent (y = 0) gives the identity
        - x_P = x_Q, y_P = −y_Q: the identity

        Raises
        ------
        InvalidPointPair
            For any other pair (same x, unrelated y) and for
            coordinates outside ``[0, p)``.
        """
        if P.is_inf():
            return Q
        if Q.is_inf():
            return P

        p = self.p
        x1, y1 = P.coordinates()
        x2, y2 = Q.coordinates()
        if x1 >= p or y1 >= p or x2 >= p or y2 >= p:
            raise InvalidPointPair(f"{P!r} + {Q!r}: coordinate outside F_p")

        if x1 != x2:
            slope = (mod_sub(y2, y1, p) * mod_inverse(mod_sub(x2, x1, p), p)) % p
        elif y1 == y2:
            if y1.is_zero():
                return Point.identity()
            num = (THREE * x1 * x1 + self.a) % p
            slope = (num * mod_inverse((TWO * y1) % p, p)) % p
        elif ((y1 + y2) % p).is_zero():
            return Point.identity()
        else:
            raise InvalidPointPair(
                f"{P!r} + {Q!r}: same x but neither equal nor opposite"
            )

        x3 = mod_sub((slope * slope) % p, (x1 + x2) % p, p)
        y3 = mod_sub((slope * mod_sub(x1, x3, p)) % p, y1, p)
        return Point(x3, y3)

    def double(self, P: Point) -> Point:
        return self.add(P, P)

    def subtract(self, P: Point, Q: Point) -> Point:
        return self.add(P, self.negate(Q))

    def scalar_multiply(self, P: Point, k: Union[BigInt, int]) -> Point:
        """
        ``k · P`` by double-and-add over the bits of *k*, least
        significant first.

        O(log k) group operations.  Raises ``PointNotOnCurve`` if *P*
        is not a point of this curve.
        """
        if not self.contains(P):
            raise PointNotOnCurve(f"{P!r} is not on curve {self.name!r}")
        bits = as_bigint(k).to_bits()
        logger.debug("scalar multiplication on %s: %d bits", self.name, len(bits))

        acc = Point.identity()
        addend = P
        for i, bit in enumerate(bits):
            if bit:
                acc = self.add(acc, addend)
            if i + 1 < len(bits):
                addend = self.double(addend)
        return acc

    # small-curve exploration ------------------------------------------------
    def point_at(self, x: Coordinate) -> Optional[Point]:
        """
        Point with abscissa *x* and the smaller of its two ordinates,
        or ``None`` if ``x³ + a·x + b`` is not a square modulo p.
        """
        p = self.p
        xr = as_bigint(x) % p
        rhs = (((xr * xr) % p) * xr + self.a * xr + self.b) % p
        if not is_quadratic_residue(rhs, p):
            return None
        return Point(xr, mod_sqrt(rhs, p))

    def points(self) -> List[Point]:
        """
        Every element of the group: the identity, then for each x in
        ``[0, p)`` the point(s) above it.

        Only for ``p ≤ ENUMERATION_LIMIT``.
        """
        self._require_small("enumerate")
        found = [Point.identity()]
        x = ZERO
        while x < self.p:
            pt = self.point_at(x)
            if pt is not None:
                found.append(pt)
                if not pt.y.is_zero():
                    found.append(Point(x, self.p - pt.y))
            x = x + ONE
        return found

    def iter_multiples(self, P: Point) -> Iterator[Point]:
        """P, 2P, 3P, … up to and including the identity."""
        self._require_small("walk multiples on")
        acc = P
        while True:
            yield acc
            if acc.is_inf():
                return
            acc = self.add(acc, P)

    def order_of(self, P: Point) -> BigInt:
        """Smallest k ≥ 1 with k·P = identity (small curves only)."""
        if not self.contains(P):
            raise PointNotOnCurve(f"{P!r} is not on curve {self.name!r}")
        k = 0
        for _ in self.iter_multiples(P):
            k += 1
        return BigInt.from_unsigned(k)

    def addition_table(self, pts: List[Point]) -> List[List[Point]]:
        """Cayley table ``table[i][j] = pts[i] + pts[j]``."""
        return [[self.add(P, Q) for Q in pts] for P in pts]

    def _require_small(self, what: str) -> None:
        if self.p > ENUMERATION_LIMIT:
            raise ValueError(
                f"refusing to {what} curve {self.name!r}: "
                f"p exceeds {ENUMERATION_LIMIT}"
            )

    def __str__(self) -> str:
        return self.name
