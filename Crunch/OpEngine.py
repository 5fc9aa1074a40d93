# OpEngine.py
"""
Op engine: reduces an expression tree as far as its numbers allow.

Single bottom-up pass. A binary node whose two sides simplify to literals is
folded into one literal; anything else is rebuilt around its simplified
children. There is no algebra beyond that: 'x*0' only folds if x is a number.
"""

import logging

from . import error as E
from . import Tokens as T
from .VarTable import Variable

logger = logging.getLogger(__name__)


def _fold_binary(token, left, right, precision):
    """Apply the operator of token to two Numbers."""
    if isinstance(token, T.Add):
        return left.add(right)
    elif isinstance(token, T.Subtract):
        return left.subtract(right)
    elif isinstance(token, T.Multiply):
        return left.multiply(right)
    elif isinstance(token, T.Divide):
        return left.divide(right)
    elif isinstance(token, T.Exponent):
        # Roots are only as precise as what will be rendered
        return left.exponent(right, precision)
    raise TypeError(f"No fold for operator token {type(token).__name__}")


def get_equality(token, var_table, answers, precision):
    """Return 'input = result' as an Equality of token and its simplification."""
    return T.Equality(token, simplify(token, var_table, answers, precision))


def simplify(token, var_table, answers, precision):
    """Recursively simplify token.

    Args:
        token: expression tree from the parser
        var_table: VarTable receiving Store results
        answers: answer history offering resolve_expression(answer_id)
        precision: decimal places the result will be rendered with
    """
    # Equality has to come before the other binary tokens: it never folds to a number
    if isinstance(token, T.Equality):
        left_result = simplify(token.left, var_table, answers, precision)
        right_result = simplify(token.right, var_table, answers, precision)
        return T.Boolean(left_result == right_result)

    elif isinstance(token, T.BinaryToken):
        left_result = simplify(token.left, var_table, answers, precision)
        right_result = simplify(token.right, var_table, answers, precision)

        # If both sides are numbers, operate on them and return a literal
        if isinstance(left_result, T.Literal) and isinstance(right_result, T.Literal):
            return T.Literal(_fold_binary(token, left_result.number, right_result.number, precision))

        # Otherwise it cannot be further simplified
        return type(token)(left_result, right_result)

    elif isinstance(token, T.Parenthesis):
        return simplify(token.child, var_table, answers, precision)

    elif isinstance(token, T.Negative):
        child_result = simplify(token.child, var_table, answers, precision)
        if isinstance(child_result, T.Literal):
            return T.Literal(child_result.number.negate())
        return T.Negative(child_result)

    elif isinstance(token, (T.Literal, T.Boolean)):
        return token

    elif isinstance(token, T.VariableRef):
        # Stored already simplified when it was bound
        return token.value

    elif isinstance(token, T.Store):
        value = simplify(token.child, var_table, answers, precision)
        var_table.store(Variable(token.target, value))
        logger.debug("Stored %s -> %s", value, token.target)
        return value

    elif isinstance(token, T.AnswerRef):
        expression = answers.resolve_expression(token.answer_id) if answers is not None else None
        if expression is None:
            raise E.UnresolvableAnswerError(f"Answer {token.answer_id} could not be found")
        return simplify(expression, var_table, answers, precision)

    raise TypeError(f"Expression parsed but the op engine cannot simplify {type(token).__name__}")
