# Parser.py
"""
Parser for the calculator: raw text -> expression tree.

There is no tokenizer stage. The operators are tried from the loosest binding
to the tightest (ORDER_OF_OPS), and the first one found outside parentheses
splits the text at its leftmost occurrence. Both halves are parsed recursively
and become the children of that operator's node.

A consequence kept on purpose: chains of the same operator group to the right,
so "8-2-1" is read as 8-(2-1).

Pipeline
--------
1) clean: drop '#' comments and all whitespace
2) mark_negatives: unary '-' becomes the internal marker '~'
3) parse: split on operators, classify what is left (number, variable, parenthesis)
"""

import logging
import re
import string

from . import error as E
from . import Tokens as T
from .NumberEngine import Number

logger = logging.getLogger(__name__)

STORE = "->"
EQUALITY = "="
SUBTRACT = "-"
ADD = "+"
DIVIDE = "/"
MULTIPLY = "*"
NEGATIVE = "~"  # Internal marker for a unary '-', never typed by the user
EXPONENT = "^"
ANSWER = "@"

COMMENT = "#"

# Order of operations, reversed (loosest first)
ORDER_OF_OPS = [STORE, EQUALITY, SUBTRACT, ADD, DIVIDE, MULTIPLY, NEGATIVE, EXPONENT, ANSWER]

# Prefix operators only take a right operand
PREFIX_OPS = (NEGATIVE, ANSWER)

BINARY_OPS = {
    EQUALITY: T.Equality,
    SUBTRACT: T.Subtract,
    ADD: T.Add,
    DIVIDE: T.Divide,
    MULTIPLY: T.Multiply,
    EXPONENT: T.Exponent,
}

OPERATOR_CHARS = set("".join(ORDER_OF_OPS))

_IDENTIFIER_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_]*$")
_INDEX_RE = re.compile(r"^[0-9]+$")


# -----------------------------
# Helpers
# -----------------------------

def shown(text):
    """Text as the user typed it, for error messages."""
    return text.replace(NEGATIVE, SUBTRACT)


def is_identifier(text):
    return bool(_IDENTIFIER_RE.match(text))


def clean(text):
    """Strip '#' comments (to the end of each line) and all whitespace."""
    without_comments = "".join(line.split(COMMENT, 1)[0] for line in text.splitlines())
    return "".join(char for char in without_comments if not char.isspace())


def mark_negatives(text):
    """Replace every unary '-' with the NEGATIVE marker.

    A '-' is unary when it starts the text, or follows an operator or '('.
    """
    chars = list(text)
    for i, char in enumerate(chars):
        if char == SUBTRACT and (i == 0 or chars[i - 1] in OPERATOR_CHARS or chars[i - 1] == "("):
            chars[i] = NEGATIVE
    return "".join(chars)


def match_outside_parenthesis(text, symbol):
    """Return the index of the leftmost symbol outside any parentheses, or None.

    Raises UnmatchedParenthesisError when the nesting goes negative or never
    gets back to zero.
    """
    depth = 0
    for index, char in enumerate(text):
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth < 0:
                raise E.UnmatchedParenthesisError("Too many closing parenthesis!")
        elif depth == 0 and text.startswith(symbol, index):
            return index

    if depth > 0:
        raise E.UnmatchedParenthesisError("Forgot to close parenthesis!")
    return None


def isolate_bracket(text, start):
    """Return the position just after the ')' matching the '(' at text[start]."""
    depth = 0
    for index in range(start, len(text)):
        if text[index] == "(":
            depth += 1
        elif text[index] == ")":
            depth -= 1
            if depth == 0:
                return index + 1
    raise E.UnmatchedParenthesisError("Forgot to close parenthesis!")


# -----------------------------
# Parser
# -----------------------------

def parse_str(text, var_table, answers):
    """Parse user input into an expression tree.

    Args:
        text: raw input, may contain whitespace and a '#' comment
        var_table: VarTable used to resolve variable names
        answers: answer history offering resolve_by_index(n) for '@n'
    """
    cleaned = clean(text)

    if len(cleaned) == 0:
        raise E.EmptyExpressionError("Empty Expression!")

    tree = parse(mark_negatives(cleaned), var_table, answers)
    logger.debug("Parsed %r into %r", text, tree)
    return tree


def parse(text, var_table, answers):
    """Parse a cleaned, negative-marked string. Whitespace is not allowed here."""
    for opcode in ORDER_OF_OPS:
        op_index = match_outside_parenthesis(text, opcode)

        if op_index is None:
            continue

        if opcode in PREFIX_OPS:
            # Not at the front: it belongs to the operand of a tighter operator
            if op_index != 0:
                continue
            operand = text[len(opcode):]
            if not operand:
                raise E.IncompleteExpressionError(f"Incomplete Expression: {shown(text)}")
            if opcode == NEGATIVE:
                return T.Negative(parse(operand, var_table, answers))
            return parse_answer(operand, answers)

        left = text[:op_index]
        right = text[op_index + len(opcode):]

        # If there is nothing to the left or right of the operator, produce an error
        if not left or not right:
            raise E.IncompleteExpressionError(f"Incomplete Expression: {shown(text)}")

        if opcode == STORE:
            return parse_store(left, right, var_table, answers)

        return BINARY_OPS[opcode](parse(left, var_table, answers), parse(right, var_table, answers))

    # No operator: a number, a variable or a parenthesised expression
    return parse_atom(text, var_table, answers)


def parse_store(left, target, var_table, answers):
    """'value -> name': the target must be a bare identifier."""
    if not is_identifier(target):
        raise E.InvalidIdentifierError(f"Invalid store target: {shown(target)}")
    return T.Store(target, parse(left, var_table, answers))


def parse_answer(operand, answers):
    """'@n': the n-th answer counting back from the latest one."""
    if not _INDEX_RE.match(operand):
        raise E.InvalidExpressionError(f"Answer index must be a whole number: {shown(operand)}")

    index = int(operand)
    answer_id = answers.resolve_by_index(index) if answers is not None else None

    if answer_id is None:
        raise E.UnknownAnswerIndexError(f"No answer {index} lines back")
    return T.AnswerRef(answer_id)


def parse_atom(text, var_table, answers):
    first = text[0]

    # Numbers
    if first in string.digits:
        return T.Literal(Number.from_str(text))

    # Variables, copied out of the table as they are right now
    if first.isalpha():
        if not is_identifier(text):
            raise E.InvalidIdentifierError(f"Invalid identifier: {shown(text)}")
        try:
            variable = var_table.get(text)
        except E.VariableNotFoundError:
            raise E.UnknownVariableError(f"Unknown variable: {text}")
        return T.VariableRef(text, variable.get_value())

    # Expression surrounded in parenthesis
    if first == "(":
        if isolate_bracket(text, 0) != len(text):
            raise E.InvalidExpressionError(f"Invalid Expression: {shown(text)}")
        inner = text[1:-1]
        if not inner:
            raise E.IncompleteExpressionError(f"Empty parenthesis: {shown(text)}")
        return T.Parenthesis(parse(inner, var_table, answers))

    raise E.InvalidExpressionError(f"Invalid Expression: {shown(text)}")
