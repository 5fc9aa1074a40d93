"""
Unit tests for Crunch.NumberEngine.
"""

from fractions import Fraction

import pytest

from Crunch import error as E
from Crunch.NumberEngine import Number, newton_root, round_denominator


def n(text):
    return Number.from_str(text)


class TestFromStr:

    @pytest.mark.parametrize("text, precision", [
        ("0", 0),
        ("12", 0),
        ("0.5", 1),
        ("3.14159", 5),
        ("3.14159", 12),
        ("1000000000000000000000001", 3),
        ("0.000001", 6),
    ])
    def test_literal_renders_back_unchanged(self, text, precision):
        assert n(text).to_string(precision) == text

    @pytest.mark.parametrize("text", ["1.2.3", "1.", ".5", "abc", "1e5", "", "2x"])
    def test_malformed_literal_raises(self, text):
        with pytest.raises(E.MalformedNumberError):
            Number.from_str(text)

    def test_literal_is_exact(self):
        assert n("0.1").value == Fraction(1, 10)


class TestExactArithmetic:

    def test_thirds_add_exactly(self):
        third = n("1").divide(n("3"))
        assert third.add(third) == Number(Fraction(2, 3))

    def test_subtract_and_multiply(self):
        assert n("0.3").subtract(n("0.1")) == n("0.2")
        assert n("1.5").multiply(n("4")) == n("6")

    def test_negate(self):
        assert n("2").negate() == Number(-2)
        assert Number.infinity().negate() == Number.infinity(negative=True)
        assert Number.nan().negate().is_nan()

    def test_divide_by_zero_gives_infinity(self):
        assert n("1").divide(n("0")) == Number.infinity()
        assert n("1").negate().divide(n("0")) == Number.infinity(negative=True)

    def test_zero_over_zero_is_nan(self):
        assert n("0").divide(n("0")).is_nan()

    def test_sentinels_propagate(self):
        assert Number.nan().add(n("1")).is_nan()
        assert n("1").multiply(Number.nan()).is_nan()
        assert Number.infinity().add(n("5")) == Number.infinity()
        assert n("5").subtract(Number.infinity()) == Number.infinity()

    def test_equality_is_by_reduced_value(self):
        assert Number(Fraction(2, 4)) == n("0.5")
        assert Number.nan() == Number.nan()
        assert Number.infinity() != Number.infinity(negative=True)


class TestExponent:

    def test_integer_power_is_exact(self):
        assert n("2").exponent(n("10"), 0) == n("1024")
        assert n("1.5").exponent(n("2"), 0) == n("2.25")

    def test_negative_power_is_reciprocal(self):
        assert n("2").exponent(Number(-2), 0) == n("0.25")

    def test_zero_to_negative_power_is_infinity(self):
        assert n("0").exponent(Number(-1), 3) == Number.infinity()

    def test_square_root_of_perfect_square_is_exact(self):
        assert n("16").exponent(n("0.5"), 1) == n("4")

    def test_fractional_power(self):
        assert n("8").exponent(Number(Fraction(2, 3)), 5) == n("4")

    def test_negative_base_fractional_power_is_nan(self):
        assert Number(-8).exponent(Number(Fraction(1, 3)), 5).is_nan()

    def test_sentinel_base_propagates(self):
        assert Number.infinity().exponent(n("0.5"), 5) == Number.infinity()
        assert n("2").exponent(Number.nan(), 5).is_nan()


class TestRoot:

    def test_cube_root_exact(self):
        assert n("27").root(n("3"), 5) == n("3")

    def test_square_root_of_two(self):
        assert n("2").root(n("2"), 10).to_string(10) == "1.4142135624..."

    def test_negative_radicand_is_nan(self):
        assert Number(-4).root(n("2"), 5).is_nan()

    def test_zero_index_is_nan(self):
        assert n("4").root(n("0"), 5).is_nan()

    def test_zero_radicand(self):
        assert n("0").root(n("2"), 5) == n("0")

    def test_negative_index_gives_reciprocal(self):
        assert n("4").root(Number(-2), 5) == n("0.5")

    def test_index_with_denominator_raises_afterwards(self):
        # 3/2-th root of 8 is 8^(2/3)
        assert n("8").root(Number(Fraction(3, 2)), 5) == n("4")

    @pytest.mark.parametrize("base", [Fraction(3, 2), Fraction(7), Fraction(1, 10), Fraction(22, 7)])
    @pytest.mark.parametrize("degree", [2, 3, 5])
    def test_root_undoes_power(self, base, degree):
        precision = 10
        powered = Number(base).exponent(Number(degree), precision)
        rooted = powered.root(Number(degree), precision)
        assert abs(rooted.value - base) < Fraction(1, 10 ** (precision + 2))

    def test_tiny_root_is_not_rounded_to_zero(self):
        rooted = n("0.0000000001").root(n("2"), 2)
        assert rooted.value > 0
        assert rooted.to_string(2) == "0..."

    def test_tiny_root_exact_at_enough_precision(self):
        assert n("0.0000000001").root(n("2"), 10).to_string(10) == "0.00001"

    def test_newton_root_approximation_is_close(self):
        root = newton_root(Fraction(10), 2, 20)
        assert abs(root * root - 10) < Fraction(1, 10 ** 19)

    def test_irrational_power_is_marked_as_continuing(self):
        rendered = n("999999999").exponent(Number(Fraction(2, 3)), 30).to_string(30)
        assert rendered.startswith("999999.999333333333222222222")
        assert rendered.endswith("...")


class TestRoundDenominator:

    def test_divides_both_terms(self):
        assert round_denominator(Fraction(12345, 1000), 10) == Fraction(123, 10)

    def test_small_denominator_untouched(self):
        assert round_denominator(Fraction(1, 3), 1000) == Fraction(1, 3)

    def test_number_method(self):
        assert Number(Fraction(12345, 1000)).round_denominator(10) == Number(Fraction(123, 10))
        assert Number.nan().round_denominator(10).is_nan()


class TestToString:

    @pytest.mark.parametrize("value, precision, expected", [
        (Fraction(1, 3), 2, "0.33..."),
        (Fraction(2, 3), 2, "0.67..."),
        (Fraction(1, 4), 2, "0.25"),
        (Fraction(1, 4), 1, "0.2..."),
        (Fraction(400), 0, "400"),
        (Fraction(-15, 2), 1, "-7.5"),
        (Fraction(-1, 1000), 1, "0..."),
        (Fraction(70000000032768, 10 ** 13), 13, "7.0000000032768"),
    ])
    def test_rendering(self, value, precision, expected):
        assert Number(value).to_string(precision) == expected

    def test_sentinels(self):
        assert Number.infinity().to_string(3) == "inf"
        assert Number.infinity(negative=True).to_string(3) == "-inf"
        assert Number.nan().to_string(3) == "NaN"

    def test_dict_round_trip(self):
        for number in (n("2.5"), Number(Fraction(-1, 3)), Number.nan(), Number.infinity(negative=True)):
            assert Number.from_dict(number.to_dict()) == number
