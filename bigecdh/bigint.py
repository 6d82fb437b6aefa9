"""
Arbitrary-precision non-negative integers built from decimal limbs.

A ``BigInt`` stores its value as an immutable tuple of little-endian
limbs in base 10⁹, i.e. nine decimal digits per limb.  The
representation is canonical:

- no leading zero limbs,
- zero is the single limb ``(0,)``,

so the decimal text of a value and its limbs determine each other
uniquely.  Every limb operation stays below 10¹⁸ < 2⁶³, the same width
a C implementation would get from 64-bit words.

Arithmetic
----------
==================  ==============================================
``add``              schoolbook addition with carry
``subtract``         schoolbook subtraction, ``Underflow`` if < 0
``multiply``         schoolbook long multiplication, O(n·m)
``divide``           long division (Knuth algorithm D), returns
                     ``(quotient, remainder)``
``mod_pow``          right-to-left square-and-multiply
==================  ==============================================

Parsing is permissive: ``BigInt.from_string("123abc")`` is 123 and
``BigInt.from_string("")`` is 0.  Division by zero and overflow on
native conversion are hard errors.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple, Union

from .errors import DivisionByZero, DoesNotFit, Underflow

# ── representation constants ────────────────────────────────────────────
BASE_DIGITS = 9
BASE = 10 ** BASE_DIGITS
NATIVE_BITS = 64
UNSIGNED_MAX = (1 << NATIVE_BITS) - 1

_BIT_CHUNK = 29                  # 2**29 < BASE
_HEX_CHUNK = 7                   # 16**7 < BASE
_HEX_ALPHABET = "0123456789abcdef"

Limbs = Tuple[int, ...]


# ── limb-level helpers (little-endian sequences in [0, BASE)) ───────────
def _trim(limbs: Sequence[int]) -> Limbs:
    n = len(limbs)
    while n > 1 and limbs[n - 1] == 0:
        n -= 1
    if n == 0:
        return (0,)
    return tuple(limbs[:n])


def _compare_limbs(a: Sequence[int], b: Sequence[int]) -> int:
    if len(a) != len(b):
        return -1 if len(a) < len(b) else 1
    for i in range(len(a) - 1, -1, -1):
        if a[i] != b[i]:
            return -1 if a[i] < b[i] else 1
    return 0


def _add_limbs(a: Sequence[int], b: Sequence[int]) -> List[int]:
    if len(a) < len(b):
        a, b = b, a
    out: List[int] = []
    carry = 0
    for i in range(len(a)):
        s = a[i] + (b[i] if i < len(b) else 0) + carry
        if s >= BASE:
            out.append(s - BASE)
            carry = 1
        else:
            out.append(s)
            carry = 0
    if carry:
        out.append(carry)
    return out


def _sub_limbs(a: Sequence[int], b: Sequence[int]) -> List[int]:
    """a − b, assuming a ≥ b."""
    out: List[int] = []
    borrow = 0
    for i in range(len(a)):
        d = a[i] - (b[i] if i < len(b) else 0) - borrow
        if d < 0:
            out.append(d + BASE)
            borrow = 1
        else:
            out.append(d)
            borrow = 0
    return out


def _mul_limbs(a: Sequence[int], b: Sequence[int]) -> List[int]:
    """Long multiplication: one shifted partial product per limb of *a*."""
    out = [0] * (len(a) + len(b))
    for i, ai in enumerate(a):
        if ai == 0:
            continue
        carry = 0
        for j, bj in enumerate(b):
            carry, out[i + j] = divmod(out[i + j] + ai * bj + carry, BASE)
        out[i + len(b)] = carry
    return out


def _mul_small(a: Sequence[int], k: int) -> List[int]:
    """a · k  for  0 ≤ k < BASE."""
    out: List[int] = []
    carry = 0
    for x in a:
        carry, low = divmod(x * k + carry, BASE)
        out.append(low)
    if carry:
        out.append(carry)
    return out


def _add_small(a: Sequence[int], k: int) -> List[int]:
    """a + k  for  0 ≤ k < BASE."""
    out = list(a)
    i = 0
    while k:
        if i == len(out):
            out.append(0)
        k, out[i] = divmod(out[i] + k, BASE)
        i += 1
    return out


def _divmod_small(a: Sequence[int], d: int) -> Tuple[List[int], int]:
    """(a // d, a % d)  for  0 < d < BASE,  one limb at a time."""
    q = [0] * len(a)
    r = 0
    for i in range(len(a) - 1, -1, -1):
        q[i], r = divmod(r * BASE + a[i], d)
    return q, r


def _divmod_limbs(
    u: Sequence[int],
    v: Sequence[int],
) -> Tuple[List[int], List[int]]:
    """
    Long division of *u* by a multi-limb *v* (Knuth, TAOCP vol. 2,
    §4.3.1, algorithm D).

    Both operands are normalised by ``d = BASE // (v_top + 1)`` so the
    divisor's top limb is at least ``BASE / 2``; the two-limb quotient
    estimate is then off by at most two and is corrected before the
    multiply-and-subtract step.

    Requires ``len(v) ≥ 2`` and ``u ≥ v``.
    """
    n = len(v)
    m = len(u) - n
    d = BASE // (v[-1] + 1)

    un = _mul_small(u, d)
    if len(un) == len(u):
        un.append(0)
    vn = _mul_small(v, d)
    v_top, v_next = vn[n - 1], vn[n - 2]

    q = [0] * (m + 1)
    for j in range(m, -1, -1):
        qhat, rhat = divmod(un[j + n] * BASE + un[j + n - 1], v_top)
        while qhat >= BASE or qhat * v_next > rhat * BASE + un[j + n - 2]:
            qhat -= 1
            rhat += v_top
            if rhat >= BASE:
                break
        if qhat == 0:
            continue

        # un[j .. j+n] -= qhat · vn
        carry = 0
        borrow = 0
        for i in range(n):
            carry, low = divmod(qhat * vn[i] + carry, BASE)
            t = un[i + j] - low - borrow
            if t < 0:
                un[i + j] = t + BASE
                borrow = 1
            else:
                un[i + j] = t
                borrow = 0
        t = un[j + n] - carry - borrow

        if t < 0:
            # estimate was one too large: add the divisor back
            un[j + n] = t + BASE
            qhat -= 1
            carry = 0
            for i in range(n):
                s = un[i + j] + vn[i] + carry
                if s >= BASE:
                    un[i + j] = s - BASE
                    carry = 1
                else:
                    un[i + j] = s
                    carry = 0
            un[j + n] = (un[j + n] + carry) % BASE
        else:
            un[j + n] = t
        q[j] = qhat

    rem, _ = _divmod_small(un[:n], d)
    return q, rem


def _parse_decimal(text: str) -> Limbs:
    end = 0
    while end < len(text) and "0" <= text[end] <= "9":
        end += 1
    digits = text[:end].lstrip("0")
    if not digits:
        return (0,)
    limbs = []
    for stop in range(len(digits), 0, -BASE_DIGITS):
        limbs.append(int(digits[max(0, stop - BASE_DIGITS):stop]))
    return tuple(limbs)


def _limbs_from_int(value: int) -> Limbs:
    """Limbs of any non-negative Python int, whatever its width."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"expected int, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"BigInt is unsigned, got {value}")
    limbs = []
    while True:
        value, low = divmod(value, BASE)
        limbs.append(low)
        if not value:
            return tuple(limbs)


def _limbs_from_unsigned(value: int) -> Limbs:
    limbs = _limbs_from_int(value)
    if value > UNSIGNED_MAX:
        raise DoesNotFit(f"{value} exceeds {NATIVE_BITS}-bit unsigned range")
    return limbs


# ── BigInt ──────────────────────────────────────────────────────────────
class BigInt:
    """
    Immutable arbitrary-precision non-negative integer.

    Construct with :meth:`from_string` (permissive decimal parse),
    :meth:`from_unsigned` (native ``int`` in ``[0, 2⁶⁴)``),
    :meth:`from_hex` or :meth:`from_bytes`.  ``BigInt(v)`` dispatches on
    the type of *v*.

    Python operators accept ``BigInt`` or non-negative ``int`` operands.
    """

    __slots__ = ("_limbs",)

    def __init__(self, value: Union[int, str] = 0) -> None:
        if isinstance(value, str):
            self._limbs: Limbs = _parse_decimal(value)
        else:
            self._limbs = _limbs_from_unsigned(value)

    # constructors -----------------------------------------------------------
    @classmethod
    def _from_limbs(cls, limbs: Sequence[int]) -> BigInt:
        obj = cls.__new__(cls)
        obj._limbs = _trim(limbs)
        return obj

    @classmethod
    def from_string(cls, text: str) -> BigInt:
        """
        Parse the maximal leading run of ASCII digits in *text*.

        Anything after the first non-digit is ignored; no digits at all
        yields zero.  Leading zeros are dropped.
        """
        obj = cls.__new__(cls)
        obj._limbs = _parse_decimal(text)
        return obj

    @classmethod
    def from_unsigned(cls, value: int) -> BigInt:
        """Exact conversion from a native unsigned integer."""
        obj = cls.__new__(cls)
        obj._limbs = _limbs_from_unsigned(value)
        return obj

    @classmethod
    def from_hex(cls, text: str) -> BigInt:
        """
        Strict hexadecimal parse (optional ``0x`` prefix, ``_`` allowed
        as a separator).  Raises ``ValueError`` on any other character.
        """
        digits = text.strip().lower()
        if digits.startswith("0x"):
            digits = digits[2:]
        digits = digits.replace("_", "")
        if not digits:
            raise ValueError("empty hexadecimal string")
        limbs: List[int] = [0]
        for ch in digits:
            nibble = _HEX_ALPHABET.find(ch)
            if nibble < 0:
                raise ValueError(f"invalid hexadecimal digit {ch!r}")
            limbs = _add_small(_mul_small(limbs, 16), nibble)
        return cls._from_limbs(limbs)

    @classmethod
    def from_bytes(cls, data: bytes) -> BigInt:
        """Big-endian unsigned decoding."""
        limbs: List[int] = [0]
        for byte in data:
            limbs = _add_small(_mul_small(limbs, 256), byte)
        return cls._from_limbs(limbs)

    # serialisation ----------------------------------------------------------
    def to_string(self) -> str:
        """Canonical decimal text."""
        top = str(self._limbs[-1])
        rest = "".join(
            f"{limb:0{BASE_DIGITS}d}" for limb in reversed(self._limbs[:-1])
        )
        return top + rest

    def to_unsigned(self, bits: int = NATIVE_BITS) -> int:
        """
        Value as a native ``int`` of at most *bits* bits.

        Raises ``DoesNotFit`` instead of truncating.
        """
        if self.bit_length() > bits:
            raise DoesNotFit(
                f"{self.to_string()} does not fit in {bits} bits"
            )
        value = 0
        for limb in reversed(self._limbs):
            value = value * BASE + limb
        return value

    def to_hex(self) -> str:
        """Lowercase hexadecimal text without prefix."""
        chunks: List[str] = []
        limbs: Sequence[int] = self._limbs
        while True:
            q, r = _divmod_small(limbs, 16 ** _HEX_CHUNK)
            limbs = _trim(q)
            if limbs == (0,):
                chunks.append(format(r, "x"))
                break
            chunks.append(format(r, f"0{_HEX_CHUNK}x"))
        return "".join(reversed(chunks))

    def to_bytes(self, length: int) -> bytes:
        """Big-endian encoding in exactly *length* bytes."""
        out = bytearray(length)
        limbs: Sequence[int] = self._limbs
        for i in range(length - 1, -1, -1):
            q, r = _divmod_small(limbs, 256)
            out[i] = r
            limbs = _trim(q)
        if limbs != (0,):
            raise DoesNotFit(f"value needs more than {length} bytes")
        return bytes(out)

    # bits -------------------------------------------------------------------
    def to_bits(self) -> List[int]:
        """Binary digits, least significant first.  Zero has no bits."""
        bits: List[int] = []
        limbs: Sequence[int] = self._limbs
        while limbs != (0,):
            q, chunk = _divmod_small(limbs, 1 << _BIT_CHUNK)
            limbs = _trim(q)
            for _ in range(_BIT_CHUNK):
                bits.append(chunk & 1)
                chunk >>= 1
        while bits and bits[-1] == 0:
            bits.pop()
        return bits

    def bit_length(self) -> int:
        return len(self.to_bits())

    def is_zero(self) -> bool:
        return self._limbs == (0,)

    def is_odd(self) -> bool:
        return self._limbs[0] & 1 == 1

    # arithmetic -------------------------------------------------------------
    def add(self, other: BigInt) -> BigInt:
        return BigInt._from_limbs(_add_limbs(self._limbs, other._limbs))

    def subtract(self, other: BigInt) -> BigInt:
        """``self − other``; raises ``Underflow`` if the result is negative."""
        if _compare_limbs(self._limbs, other._limbs) < 0:
            raise Underflow(
                f"{self.to_string()} - {other.to_string()} is negative"
            )
        return BigInt._from_limbs(_sub_limbs(self._limbs, other._limbs))

    def multiply(self, other: BigInt) -> BigInt:
        if self.is_zero() or other.is_zero():
            return ZERO
        return BigInt._from_limbs(_mul_limbs(other._limbs, self._limbs))

    def divide(self, other: BigInt) -> Tuple[BigInt, BigInt]:
        """
        Long division.

        Returns
        -------
        (quotient, remainder) with  ``self == other·quotient + remainder``
        and  ``0 ≤ remainder < other``.

        Raises
        ------
        DivisionByZero
            If *other* is zero.
        """
        if other.is_zero():
            raise DivisionByZero(f"{self.to_string()} divided by zero")
        if _compare_limbs(self._limbs, other._limbs) < 0:
            return ZERO, self
        if len(other._limbs) == 1:
            q, r = _divmod_small(self._limbs, other._limbs[0])
            return BigInt._from_limbs(q), BigInt._from_limbs((r,))
        q, r = _divmod_limbs(self._limbs, other._limbs)
        return BigInt._from_limbs(q), BigInt._from_limbs(r)

    def quotient(self, other: BigInt) -> BigInt:
        return self.divide(other)[0]

    def remainder(self, other: BigInt) -> BigInt:
        return self.divide(other)[1]

    def pow_mod(self, exponent: BigInt, modulus: BigInt) -> BigInt:
        return mod_pow(self, exponent, modulus)

    def compare(self, other: BigInt) -> int:
        """-1, 0 or 1: length first, then limbs from the top."""
        return _compare_limbs(self._limbs, other._limbs)

    def equals(self, other: BigInt) -> bool:
        return self._limbs == other._limbs

    # operators --------------------------------------------------------------
    def __add__(self, o: Operand) -> BigInt:
        other = _coerce(o)
        if other is None:
            return NotImplemented
        return self.add(other)

    def __radd__(self, o: Operand) -> BigInt:
        return self.__add__(o)

    def __sub__(self, o: Operand) -> BigInt:
        other = _coerce(o)
        if other is None:
            return NotImplemented
        return self.subtract(other)

    def __rsub__(self, o: Operand) -> BigInt:
        other = _coerce(o)
        if other is None:
            return NotImplemented
        return other.subtract(self)

    def __mul__(self, o: Operand) -> BigInt:
        other = _coerce(o)
        if other is None:
            return NotImplemented
        return self.multiply(other)

    def __rmul__(self, o: Operand) -> BigInt:
        return self.__mul__(o)

    def __floordiv__(self, o: Operand) -> BigInt:
        other = _coerce(o)
        if other is None:
            return NotImplemented
        return self.divide(other)[0]

    def __mod__(self, o: Operand) -> BigInt:
        other = _coerce(o)
        if other is None:
            return NotImplemented
        return self.divide(other)[1]

    def __divmod__(self, o: Operand) -> Tuple[BigInt, BigInt]:
        other = _coerce(o)
        if other is None:
            return NotImplemented
        return self.divide(other)

    def __pow__(self, e: Operand, m: Optional[Operand] = None) -> BigInt:
        exponent = _coerce(e)
        if exponent is None:
            return NotImplemented
        if m is not None:
            modulus = _coerce(m)
            if modulus is None:
                return NotImplemented
            return mod_pow(self, exponent, modulus)
        result = ONE
        base = self
        for bit in exponent.to_bits():
            if bit:
                result = result * base
            base = base * base
        return result

    # comparison / hashing ---------------------------------------------------
    def __eq__(self, o: object) -> bool:
        if isinstance(o, BigInt):
            return self._limbs == o._limbs
        if isinstance(o, int) and not isinstance(o, bool):
            return o >= 0 and self.to_string() == str(o)
        return False

    def __lt__(self, o: Operand) -> bool:
        other = _coerce(o)
        if other is None:
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, o: Operand) -> bool:
        other = _coerce(o)
        if other is None:
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, o: Operand) -> bool:
        other = _coerce(o)
        if other is None:
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, o: Operand) -> bool:
        other = _coerce(o)
        if other is None:
            return NotImplemented
        return self.compare(other) >= 0

    def __hash__(self) -> int:
        return hash(self._limbs)

    def __bool__(self) -> bool:
        return not self.is_zero()

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        s = self.to_string()
        if len(s) > 20:
            return f"BigInt({s[:10]}…, {len(s)} digits)"
        return f"BigInt({s})"


Operand = Union[BigInt, int]

ZERO = BigInt(0)
ONE = BigInt(1)
TWO = BigInt(2)


def _coerce(value: object) -> Optional[BigInt]:
    if isinstance(value, BigInt):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return BigInt._from_limbs(_limbs_from_int(value))
    return None


def as_bigint(value: Union[BigInt, int, str]) -> BigInt:
    """
    Accept a ``BigInt``, a non-negative ``int`` of any width or decimal
    text.
    """
    if isinstance(value, BigInt):
        return value
    if isinstance(value, str):
        return BigInt.from_string(value)
    return BigInt._from_limbs(_limbs_from_int(value))


# ── modular exponentiation ──────────────────────────────────────────────
def mod_pow(base: BigInt, exponent: BigInt, modulus: BigInt) -> BigInt:
    """
    ``base^exponent mod modulus`` by right-to-left repeated squaring.

    Every intermediate product is reduced with :meth:`BigInt.divide`,
    so operands never grow beyond twice the modulus width.
    """
    if modulus.is_zero():
        raise DivisionByZero("modulus is zero")
    result = ONE % modulus
    b = base % modulus
    bits = exponent.to_bits()
    for i, bit in enumerate(bits):
        if bit:
            result = (result * b) % modulus
        if i + 1 < len(bits):
            b = (b * b) % modulus
    return result
