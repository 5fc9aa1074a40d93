# NumberEngine.py
"""
Arbitrary precision number type for the calculator.

A Number is an exact rational (fractions.Fraction) or one of the sentinels
inf, -inf and NaN. Addition, subtraction, multiplication and division are exact.
Only roots are approximated, with Newton-Raphson over rationals at a precision
chosen by the caller, and rendering rounds to the requested decimal places,
marking values that continue past them with "...".
"""

import logging
import re
from decimal import Decimal, localcontext
from fractions import Fraction

from . import error as E

logger = logging.getLogger(__name__)

# Kinds of Number
FINITE = "finite"
INFINITY = "inf"
NEG_INFINITY = "-inf"
NAN = "NaN"

# Digits kept beyond the requested precision while a root converges
ROOT_GUARD_DIGITS = 4
# Iteration stops once an update is smaller than 10^-(precision + ROOT_STOP_DIGITS)
ROOT_STOP_DIGITS = 2

ELLIPSIS = "..."

_NUMBER_RE = re.compile(r"^[0-9]+(\.[0-9]+)?$")


# -----------------------------
# Rational helpers
# -----------------------------

def round_denominator(value, target):
    """Shrink value's terms so its denominator lands near target.

    Numerator and denominator are both integer-divided by denominator // target
    when that quotient is positive. This loses exactness on purpose and is only
    used while a root converges.
    """
    quotient = value.denominator // target
    if quotient > 0:
        return Fraction(value.numerator // quotient, value.denominator // quotient)
    return value


def working_target(value, digits):
    """Denominator target keeping `digits` decimals of absolute accuracy for value."""
    integer_digits = len(str(abs(value.numerator) // value.denominator))
    return 10 ** (digits + integer_digits)


def round_iterate(guess, digits):
    """round_denominator for a positive iterate, which must stay positive."""
    rounded = round_denominator(guess, working_target(guess, digits))
    if rounded == 0:
        return guess
    return rounded


def newton_root(radicand, degree, precision):
    """Return the degree-th root of a non-negative Fraction.

    The result is exact when rounding the converged iterate to `precision`
    decimals gives a value whose power is the radicand; otherwise it is the
    iterate at working precision.
    """
    if radicand == 0 or degree == 1:
        return radicand

    working_digits = precision + ROOT_GUARD_DIGITS
    threshold = Fraction(1, 10 ** (precision + ROOT_STOP_DIGITS))

    guess = radicand / 2
    iterations = 0

    while True:
        guess = round_iterate(guess, working_digits)

        # x <- x - (x^r - a) / (r * x^(r-1))
        next_guess = guess - (guess ** degree - radicand) / (degree * guess ** (degree - 1))
        iterations += 1

        change = abs(next_guess - guess)
        guess = next_guess
        if change < threshold:
            break

    logger.debug("root of degree %s converged after %s iterations", degree, iterations)

    scale = 10 ** precision
    candidate = Fraction(round(guess * scale), scale)
    if candidate ** degree == radicand:
        return candidate

    return round_iterate(guess, working_digits)


# -----------------------------
# Number
# -----------------------------

class Number:
    """Signed rational value plus the inf, -inf and NaN sentinels."""

    __slots__ = ("value", "kind")

    def __init__(self, value=0, kind=FINITE):
        # Always normalize to Fraction; sentinels carry no value
        if kind == FINITE:
            self.value = Fraction(value)
        else:
            self.value = None
        self.kind = kind

    @classmethod
    def from_str(cls, text):
        """Parse a decimal literal such as '12' or '0.5'."""
        if not _NUMBER_RE.match(text):
            raise E.MalformedNumberError(f"Malformed number: {text}")
        return cls(Fraction(text))

    @classmethod
    def infinity(cls, negative=False):
        return cls(kind=NEG_INFINITY if negative else INFINITY)

    @classmethod
    def nan(cls):
        return cls(kind=NAN)

    def is_finite(self):
        return self.kind == FINITE

    def is_nan(self):
        return self.kind == NAN

    def is_negative(self):
        if self.kind == FINITE:
            return self.value < 0
        return self.kind == NEG_INFINITY

    def _propagate(self, other):
        """Return the sentinel an operation on self and other yields, or None."""
        if self.kind == NAN or other.kind == NAN:
            return Number.nan()
        if self.kind != FINITE:
            return self
        if other.kind != FINITE:
            return other
        return None

    # --- Exact arithmetic ---

    def negate(self):
        if self.kind == FINITE:
            return Number(-self.value)
        if self.kind == INFINITY:
            return Number.infinity(negative=True)
        if self.kind == NEG_INFINITY:
            return Number.infinity()
        return self

    def add(self, other):
        sentinel = self._propagate(other)
        if sentinel is not None:
            return sentinel
        return Number(self.value + other.value)

    def subtract(self, other):
        sentinel = self._propagate(other)
        if sentinel is not None:
            return sentinel
        return Number(self.value - other.value)

    def multiply(self, other):
        sentinel = self._propagate(other)
        if sentinel is not None:
            return sentinel
        return Number(self.value * other.value)

    def divide(self, other):
        """Exact division; x/0 gives a signed infinity and 0/0 gives NaN."""
        sentinel = self._propagate(other)
        if sentinel is not None:
            return sentinel
        if other.value == 0:
            if self.value == 0:
                return Number.nan()
            return Number.infinity(negative=self.value < 0)
        return Number(self.value / other.value)

    def reciprocal(self):
        return Number(1).divide(self)

    # --- Powers and roots ---

    def exponent(self, other, precision):
        """Raise self to the rational power other.

        base^(n/d) is computed as the exact integer power base^n followed by a
        d-th root at `precision` decimals when d is not 1.
        """
        sentinel = self._propagate(other)
        if sentinel is not None:
            return sentinel

        numerator = other.value.numerator
        denominator = other.value.denominator

        result = Number(self.value ** abs(numerator))
        if numerator < 0:
            result = result.reciprocal()

        if denominator == 1:
            return result
        return result.root(Number(denominator), precision)

    def root(self, index, precision):
        """Take the index-th root of self, index being any rational.

        Negative radicands have no real root here and give NaN, as does a
        zero index. A negative index gives the reciprocal of the root and an
        index n/d is the n-th root raised to d.
        """
        sentinel = self._propagate(index)
        if sentinel is not None:
            return sentinel

        if self.value < 0 or index.value == 0:
            return Number.nan()

        degree = abs(index.value.numerator)
        result = Number(newton_root(self.value, degree, precision))

        if index.value < 0:
            result = result.reciprocal()

        if index.value.denominator != 1:
            result = result.exponent(Number(index.value.denominator), precision)

        return result

    def round_denominator(self, target):
        if self.kind != FINITE:
            return self
        return Number(round_denominator(self.value, target))

    # --- Rendering ---

    def to_string(self, precision):
        """Render with at most `precision` decimals.

        Values that are not exactly what is shown get a trailing '...'.
        """
        if self.kind != FINITE:
            return self.kind

        scale = 10 ** precision
        scaled = round(self.value * scale)  # half-even, like Decimal.quantize

        with localcontext() as ctx:
            ctx.prec = len(str(abs(scaled))) + 1
            rendered = format(Decimal(scaled).scaleb(-precision).normalize(), "f")

        if Fraction(scaled, scale) != self.value:
            rendered += ELLIPSIS
        return rendered

    # --- Serialisation ---

    def to_dict(self):
        if self.kind != FINITE:
            return {"kind": self.kind}
        return {
            "kind": FINITE,
            "numerator": str(self.value.numerator),
            "denominator": str(self.value.denominator),
        }

    @classmethod
    def from_dict(cls, data):
        kind = data["kind"]
        if kind != FINITE:
            return cls(kind=kind)
        return cls(Fraction(int(data["numerator"]), int(data["denominator"])))

    def __eq__(self, other):
        if not isinstance(other, Number):
            return NotImplemented
        return self.kind == other.kind and self.value == other.value

    def __hash__(self):
        return hash((self.kind, self.value))

    def __repr__(self):
        if self.kind != FINITE:
            return f"Number({self.kind})"
        return f"Number({self.value})"
