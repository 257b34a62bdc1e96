"""Arbitrary-precision decimal values as used by Ion."""

from __future__ import annotations

import functools
import math
import re

from .errors import IonError

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

_INTEGER = re.compile(r"[+-]?[0-9]+")


class DecimalParseError(IonError, ValueError):
    """Text could not be parsed as a decimal."""

    def __init__(self, num: str, msg: str) -> None:
        self.num = num
        self.msg = msg
        super().__init__(f"ion: ParseDecimal({num}): {msg}")


def _check_scale(scale: int) -> int:
    if scale < _INT32_MIN or scale > _INT32_MAX:
        raise OverflowError("exponent out of bounds")
    return scale


@functools.total_ordering
class Decimal:
    """A decimal equal to ``coefficient * 10**exponent``.

    Internally the value is stored as a coefficient and a scale, where
    the scale is the negated exponent. Comparisons ignore precision.
    """

    __slots__ = ("_n", "_scale", "_neg_zero")

    def __init__(self, coefficient: int, exponent: int = 0, neg_zero: bool = False) -> None:
        self._n = int(coefficient)
        self._scale = -int(exponent)
        self._neg_zero = bool(neg_zero)

    @classmethod
    def _with_scale(cls, n: int, scale: int, neg_zero: bool = False) -> "Decimal":
        d = cls.__new__(cls)
        d._n = n
        d._scale = scale
        d._neg_zero = neg_zero
        return d

    @classmethod
    def from_int(cls, n: int) -> "Decimal":
        """Create a decimal whose value is the integer ``n``."""
        return cls(n, 0, False)

    @classmethod
    def parse(cls, text: str) -> "Decimal":
        """Parse Ion decimal text such as ``1.23``, ``-4d5`` or ``0.1D-2``."""
        if not text:
            raise DecimalParseError(text, "empty string")

        exponent = 0
        positions = [p for p in (text.find("d"), text.find("D")) if p != -1]
        if positions:
            pos = min(positions)
            exp = text[pos + 1:]
            if not exp:
                raise DecimalParseError(text, "unexpected end of input after d")
            if not _INTEGER.fullmatch(exp):
                raise DecimalParseError(text, f'invalid exponent "{exp}"')
            value = int(exp)
            if value < _INT32_MIN or value > _INT32_MAX:
                raise DecimalParseError(text, f'exponent "{exp}" out of range')
            exponent = value
            text = text[:pos]

        ipart, dot, fpart = text.partition(".")
        if dot:
            exponent -= len(fpart)
            text = ipart + fpart

        if not _INTEGER.fullmatch(text):
            raise DecimalParseError(text, "cannot parse coefficient")
        n = int(text)

        neg_zero = n == 0 and text.startswith("-")
        return cls(n, exponent, neg_zero)

    @property
    def coefficient(self) -> int:
        return self._n

    @property
    def scale(self) -> int:
        return self._scale

    @property
    def exponent(self) -> int:
        return -self._scale

    @property
    def is_neg_zero(self) -> bool:
        return self._neg_zero

    def coex(self) -> tuple[int, int]:
        """Return the coefficient and exponent."""
        return self._n, -self._scale

    def abs(self) -> "Decimal":
        return self._with_scale(abs(self._n), self._scale)

    def add(self, other: "Decimal") -> "Decimal":
        a, b = _rescale(self, other)
        return self._with_scale(a._n + b._n, a._scale)

    def sub(self, other: "Decimal") -> "Decimal":
        a, b = _rescale(self, other)
        return self._with_scale(a._n - b._n, a._scale)

    def neg(self) -> "Decimal":
        return self._with_scale(-self._n, self._scale)

    def mul(self, other: "Decimal") -> "Decimal":
        scale = _check_scale(self._scale + other._scale)
        return self._with_scale(self._n * other._n, scale)

    def shift_left(self, shift: int) -> "Decimal":
        """Return ``self * 10**shift``."""
        return self._with_scale(self._n, _check_scale(self._scale - shift))

    def shift_right(self, shift: int) -> "Decimal":
        """Return ``self / 10**shift``."""
        return self._with_scale(self._n, _check_scale(self._scale + shift))

    def sign(self) -> int:
        return (self._n > 0) - (self._n < 0)

    def cmp(self, other: "Decimal") -> int:
        """Return -1, 0 or 1 comparing values, ignoring precision."""
        a, b = _rescale(self, other)
        return (a._n > b._n) - (a._n < b._n)

    def upscale(self, scale: int) -> "Decimal":
        """Return the same value with a larger scale (and coefficient)."""
        diff = scale - self._scale
        if diff < 0:
            raise ValueError("can't upscale to a smaller scale")
        return self._with_scale(self._n * 10**diff, scale)

    def _check_to_upscale(self) -> "Decimal":
        if self._scale < 0:
            # Anything this large cannot fit in a 64-bit integer anyway.
            if self._scale < -20:
                raise OverflowError(f"value out of range: {self}")
            return self.upscale(0)
        return self

    def trunc(self) -> int:
        """Truncate to a 64-bit integer, dropping any fractional digits."""
        ud = self._check_to_upscale()
        digits = str(ud._n)
        cut = len(digits) - ud._scale
        if cut <= 0:
            return 0
        head = digits[:cut]
        if not _INTEGER.fullmatch(head):
            raise ValueError(f"invalid integer {head!r}")
        value = int(head)
        if value < _INT64_MIN or value > _INT64_MAX:
            raise OverflowError(f"value out of range: {head}")
        return value

    def round_int(self) -> int:
        """Round to an integer, halves away from zero."""
        ud = self._check_to_upscale()
        value = float(ud._n) / float(f"1e{ud._scale}")
        whole = math.trunc(value)
        if abs(value - whole) >= 0.5:
            whole += 1 if value > 0 else -1
        return int(whole)

    def truncate(self, precision: int) -> "Decimal":
        """Keep at most ``precision`` digits of the coefficient, without rounding."""
        if precision <= 0:
            raise ValueError("precision must be positive")
        digits = str(self._n)
        if digits.startswith("-"):
            precision += 1
        diff = len(digits) - precision
        if diff <= 0:
            return self
        scale = self._scale - diff
        if scale < _INT32_MIN:
            raise OverflowError("exponent out of range")
        return self._with_scale(int(digits[:precision]), scale)

    def __str__(self) -> str:
        scale = self._scale
        if scale == 0:
            return "-0." if self._neg_zero else f"{self._n}."
        if scale < 0:
            head = "-0" if self._neg_zero else str(self._n)
            return f"{head}d{-scale}"

        digits = "-0" if self._neg_zero else str(self._n)
        idx = len(digits) - scale
        prefix = 2 if digits.startswith("-") else 1
        if idx >= prefix:
            return f"{digits[:idx]}.{digits[idx:]}"
        out = digits[:prefix]
        if len(digits) > prefix:
            out += "." + digits[prefix:]
        return f"{out}d{idx - prefix}"

    def __repr__(self) -> str:
        return f"Decimal('{self}')"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Decimal):
            return NotImplemented
        return self.cmp(other) == 0

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Decimal):
            return NotImplemented
        return self.cmp(other) < 0

    def __hash__(self) -> int:
        n, scale = self._n, self._scale
        if n == 0:
            return hash(0)
        while n % 10 == 0:
            n //= 10
            scale -= 1
        return hash((n, scale))

    __add__ = add
    __sub__ = sub
    __mul__ = mul
    __neg__ = neg
    __abs__ = abs


def _rescale(a: Decimal, b: Decimal) -> tuple[Decimal, Decimal]:
    if a._scale < b._scale:
        return a.upscale(b._scale), b
    if a._scale > b._scale:
        return a, b.upscale(a._scale)
    return a, b