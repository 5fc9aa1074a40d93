"""
Unit tests for Crunch.Tokens: rendering, structural equality and serialisation.
"""

import uuid

from Crunch import Tokens as T
from Crunch.NumberEngine import Number


def lit(text):
    return T.Literal(Number.from_str(text))


class TestRendering:

    def test_binary_operators(self):
        assert T.Add(lit("2"), lit("2")).to_string(0) == "2 + 2"
        assert T.Subtract(lit("2"), lit("1")).to_string(0) == "2 - 1"
        assert T.Multiply(lit("2"), lit("3")).to_string(0) == "2 * 3"
        assert T.Divide(lit("2"), lit("3")).to_string(0) == "2 / 3"
        assert T.Equality(lit("2"), lit("3")).to_string(0) == "2 = 3"

    def test_exponent_is_tight(self):
        assert T.Exponent(lit("16"), lit("0.5")).to_string(1) == "16^0.5"

    def test_unary_nodes(self):
        assert T.Negative(lit("5")).to_string(0) == "-5"
        assert T.Parenthesis(T.Add(lit("6"), lit("7"))).to_string(0) == "( 6 + 7 )"

    def test_leaves(self):
        assert T.Boolean(True).to_string(0) == "true"
        assert T.Boolean(False).to_string(0) == "false"
        assert T.VariableRef("x", lit("2")).to_string(0) == "x"
        assert T.Store("x", lit("2")).to_string(0) == "2 -> x"

    def test_answer_reference_shows_short_id(self):
        answer_id = uuid.UUID("12345678-1234-5678-1234-567812345678")
        assert T.AnswerRef(answer_id).to_string(0) == "@12345678"

    def test_literal_uses_precision(self):
        third = T.Literal(Number(1).divide(Number(3)))
        assert third.to_string(3) == "0.333..."


class TestStructuralEquality:

    def test_independently_built_trees_are_equal(self):
        first = T.Add(lit("1"), T.Multiply(lit("2"), lit("3")))
        second = T.Add(lit("1"), T.Multiply(lit("2"), lit("3")))
        assert first == second
        assert first.to_string(0) == second.to_string(0)

    def test_operator_type_matters(self):
        assert T.Add(lit("1"), lit("2")) != T.Multiply(lit("1"), lit("2"))

    def test_numbers_compare_by_value(self):
        assert lit("0.50") == T.Literal(Number(1).divide(Number(2)))


class TestSerialisation:

    def test_round_trip_every_token_type(self):
        tree = T.Equality(
            T.Store("y", T.Subtract(
                T.Exponent(T.Negative(lit("5")), T.Parenthesis(T.Divide(lit("1"), lit("3")))),
                T.Multiply(T.VariableRef("x", lit("2")), T.AnswerRef(uuid.uuid4())),
            )),
            T.Add(T.Boolean(True), T.Literal(Number.nan())),
        )
        assert T.token_from_dict(tree.to_dict()) == tree
