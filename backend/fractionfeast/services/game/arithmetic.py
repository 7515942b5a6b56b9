"""Exact fraction arithmetic for plate and target totals.

Fractions are carried as reduced ``Fraction`` tuples alongside their text
form. Win and bust decisions compare these exactly; the decimal ``value``
is only ever derived from them.
"""
from math import gcd
from typing import NamedTuple


class Fraction(NamedTuple):
    numerator: int
    denominator: int

    @property
    def text(self) -> str:
        return f"{self.numerator}/{self.denominator}"

    @property
    def value(self) -> float:
        return self.numerator / self.denominator


ZERO = Fraction(0, 1)


def reduce(numerator: int, denominator: int) -> Fraction:
    """Divide both terms by their greatest common divisor.

    The sign is normalised onto the numerator so denominators stay positive.
    """
    if denominator < 0:
        numerator, denominator = -numerator, -denominator
    divisor = gcd(numerator, denominator) or 1
    return Fraction(numerator // divisor, denominator // divisor)


def add(a: Fraction, b: Fraction) -> Fraction:
    return reduce(a.numerator * b.denominator + b.numerator * a.denominator,
                  a.denominator * b.denominator)


def subtract(a: Fraction, b: Fraction) -> Fraction:
    return reduce(a.numerator * b.denominator - b.numerator * a.denominator,
                  a.denominator * b.denominator)


def within(a: Fraction, b: Fraction, tolerance: Fraction) -> bool:
    """True when ``|a - b| <= tolerance`` (inclusive)."""
    diff = subtract(a, b)
    return abs(diff.numerator) * tolerance.denominator <= tolerance.numerator * diff.denominator


def exceeds(a: Fraction, b: Fraction, tolerance: Fraction) -> bool:
    """True when ``a > b + tolerance``."""
    diff = subtract(a, b)
    return diff.numerator * tolerance.denominator > tolerance.numerator * diff.denominator


def to_mixed_number(numerator, denominator) -> str:
    if not denominator:
        return ''
    whole, remainder = divmod(numerator, denominator)
    if remainder == 0:
        return f"{whole}"
    if whole == 0:
        return f"{remainder}/{denominator}"
    return f"{whole} and {remainder}/{denominator}"
