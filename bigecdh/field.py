"""
Prime-field utilities over ``BigInt``:  Z_p  arithmetic for curve
coordinates.

``BigInt`` is unsigned, so every subtraction here is biased by the
modulus first (``a + p − b``) to keep intermediate values
non-negative.  The extended Euclidean algorithm applies the same trick
to its Bézout coefficients, which are carried as residues in
``[0, m)`` instead of signed integers.
"""

from __future__ import annotations

from .bigint import BigInt, ONE, TWO, ZERO, mod_pow
from .errors import DivisionByZero, NoModularInverse, NoSquareRoot


# ── residue arithmetic ──────────────────────────────────────────────────
def mod_add(a: BigInt, b: BigInt, m: BigInt) -> BigInt:
    return (a + b) % m


def mod_sub(a: BigInt, b: BigInt, m: BigInt) -> BigInt:
    """(a − b) mod m  without leaving the unsigned domain."""
    return (a % m + m - b % m) % m


def mod_mul(a: BigInt, b: BigInt, m: BigInt) -> BigInt:
    return (a * b) % m


def gcd(a: BigInt, b: BigInt) -> BigInt:
    while not b.is_zero():
        a, b = b, a % b
    return a


# ── inversion ───────────────────────────────────────────────────────────
def mod_inverse(a: BigInt, m: BigInt) -> BigInt:
    """
    Multiplicative inverse of *a* modulo *m* via the iterative extended
    Euclidean algorithm.

    Walks the remainder sequence of Euclid on ``(m, a mod m)`` while
    keeping, for every remainder ``r_i``, a coefficient ``t_i`` with
    ``t_i · a ≡ r_i (mod m)``.  The coefficients are updated as
    ``t_{i+1} = t_{i-1} − q_i · t_i``, reduced into ``[0, m)``.  When
    the remainder reaches ``gcd(a, m) = 1`` the matching coefficient is
    the inverse.

    Returns
    -------
    BigInt in ``[0, m)`` with ``a · x ≡ 1 (mod m)``.

    Raises
    ------
    DivisionByZero
        If *m* is zero.
    NoModularInverse
        If ``gcd(a, m) != 1``; in particular for ``a ≡ 0``.
    """
    if m.is_zero():
        raise DivisionByZero("inverse modulo zero")
    r_prev, r = m, a % m
    t_prev, t = ZERO, ONE % m
    while not r.is_zero():
        q, r_next = r_prev.divide(r)
        t_next = (t_prev + m - (q * t) % m) % m
        r_prev, r = r, r_next
        t_prev, t = t, t_next
    if r_prev != ONE:
        raise NoModularInverse(
            f"{a} has no inverse modulo {m} (gcd = {r_prev})"
        )
    return t_prev


def mod_inverse_fermat(a: BigInt, p: BigInt) -> BigInt:
    """
    Inverse modulo a *prime* p via Fermat's little theorem:
    ``a^(p−2) mod p``.

    Only correct for prime moduli.  Raises ``NoModularInverse`` for
    ``a ≡ 0``.
    """
    if p.is_zero():
        raise DivisionByZero("inverse modulo zero")
    if (a % p).is_zero():
        raise NoModularInverse(f"{a} ≡ 0 has no inverse modulo {p}")
    if p < TWO + ONE:
        return ONE % p
    return mod_pow(a, p - TWO, p)


# ── square roots ────────────────────────────────────────────────────────
def is_quadratic_residue(n: BigInt, p: BigInt) -> bool:
    """
    Euler's criterion for an odd prime p:  n^((p−1)/2) ≡ 1.

    Zero counts as a square (its root is zero).
    """
    n = n % p
    if n.is_zero():
        return True
    return mod_pow(n, (p - ONE) // TWO, p) == ONE


def mod_sqrt(n: BigInt, p: BigInt) -> BigInt:
    r"""
    Square root of *n* modulo the prime *p*  (Tonelli-Shanks).

    For  p ≡ 3 (mod 4)  the root is simply  n^{(p+1)/4}.  Otherwise
    write  p − 1 = q·2^s  with q odd and iterate with a fixed
    non-residue z.

    Returns the smaller of the two roots ``r`` and ``p − r``.

    Raises
    ------
    NoSquareRoot
        If *n* is a quadratic non-residue.
    """
    n = n % p
    if n.is_zero():
        return ZERO
    if p == TWO:
        return n
    if not is_quadratic_residue(n, p):
        raise NoSquareRoot(f"{n} is not a square modulo {p}")

    if p % 4 == 3:
        r = mod_pow(n, (p + ONE) // 4, p)
    else:
        q = p - ONE
        s = 0
        while not q.is_odd():
            q = q // TWO
            s += 1
        z = TWO
        while is_quadratic_residue(z, p):
            z = z + ONE

        m = s
        c = mod_pow(z, q, p)
        t = mod_pow(n, q, p)
        r = mod_pow(n, (q + ONE) // TWO, p)
        while t != ONE:
            # least i with t^(2^i) = 1
            i = 0
            t2 = t
            while t2 != ONE:
                t2 = (t2 * t2) % p
                i += 1
            b = c
            for _ in range(m - i - 1):
                b = (b * b) % p
            m = i
            c = (b * b) % p
            t = (t * c) % p
            r = (r * b) % p

    other = p - r
    return r if r <= other else other
