# Tokens.py
"""
Expression tree for the calculator.

Trees are immutable once built. Equality is structural, so two trees built
independently from the same input compare equal, and rendering the same tree
always gives the same text.
"""

import uuid
from dataclasses import dataclass

from .NumberEngine import Number


@dataclass(frozen=True)
class Token:
    """Base class for every node of an expression tree."""

    def to_string(self, precision):
        raise NotImplementedError

    def to_dict(self):
        raise NotImplementedError


# -----------------------------
# Binary operators
# -----------------------------

@dataclass(frozen=True)
class BinaryToken(Token):
    left: Token
    right: Token

    symbol = ""

    def to_string(self, precision):
        return f"{self.left.to_string(precision)} {self.symbol} {self.right.to_string(precision)}"

    def to_dict(self):
        return {"type": type(self).__name__, "left": self.left.to_dict(), "right": self.right.to_dict()}


class Exponent(BinaryToken):
    symbol = "^"

    def to_string(self, precision):
        # Exponents are written tight: 2^3
        return f"{self.left.to_string(precision)}^{self.right.to_string(precision)}"


class Multiply(BinaryToken):
    symbol = "*"


class Divide(BinaryToken):
    symbol = "/"


class Add(BinaryToken):
    symbol = "+"


class Subtract(BinaryToken):
    symbol = "-"


class Equality(BinaryToken):
    symbol = "="


# -----------------------------
# Unary nodes
# -----------------------------

@dataclass(frozen=True)
class Negative(Token):
    child: Token

    def to_string(self, precision):
        return f"-{self.child.to_string(precision)}"

    def to_dict(self):
        return {"type": "Negative", "child": self.child.to_dict()}


@dataclass(frozen=True)
class Parenthesis(Token):
    child: Token

    def to_string(self, precision):
        return f"( {self.child.to_string(precision)} )"

    def to_dict(self):
        return {"type": "Parenthesis", "child": self.child.to_dict()}


# -----------------------------
# Leaves
# -----------------------------

@dataclass(frozen=True)
class Literal(Token):
    number: Number

    def to_string(self, precision):
        return self.number.to_string(precision)

    def to_dict(self):
        return {"type": "Literal", "number": self.number.to_dict()}


@dataclass(frozen=True)
class Boolean(Token):
    value: bool

    def to_string(self, precision):
        return "true" if self.value else "false"

    def to_dict(self):
        return {"type": "Boolean", "value": self.value}


@dataclass(frozen=True)
class VariableRef(Token):
    """A variable as it was when parsed: its name and a copy of its value."""
    name: str
    value: Token

    def to_string(self, precision):
        return self.name

    def to_dict(self):
        return {"type": "VariableRef", "name": self.name, "value": self.value.to_dict()}


@dataclass(frozen=True)
class AnswerRef(Token):
    """Reference to an earlier answer, resolved through the answer history."""
    answer_id: uuid.UUID

    def to_string(self, precision):
        return f"@{self.answer_id.hex[:8]}"

    def to_dict(self):
        return {"type": "AnswerRef", "answer_id": str(self.answer_id)}


@dataclass(frozen=True)
class Store(Token):
    """Assignment 'child -> target'; evaluates to the stored value."""
    target: str
    child: Token

    def to_string(self, precision):
        return f"{self.child.to_string(precision)} -> {self.target}"

    def to_dict(self):
        return {"type": "Store", "target": self.target, "child": self.child.to_dict()}


BINARY_TOKENS = {cls.__name__: cls for cls in (Exponent, Multiply, Divide, Add, Subtract, Equality)}


def token_from_dict(data):
    """Rebuild a tree from the output of Token.to_dict()."""
    token_type = data["type"]

    if token_type in BINARY_TOKENS:
        return BINARY_TOKENS[token_type](token_from_dict(data["left"]), token_from_dict(data["right"]))
    elif token_type == "Negative":
        return Negative(token_from_dict(data["child"]))
    elif token_type == "Parenthesis":
        return Parenthesis(token_from_dict(data["child"]))
    elif token_type == "Literal":
        return Literal(Number.from_dict(data["number"]))
    elif token_type == "Boolean":
        return Boolean(bool(data["value"]))
    elif token_type == "VariableRef":
        return VariableRef(data["name"], token_from_dict(data["value"]))
    elif token_type == "AnswerRef":
        return AnswerRef(uuid.UUID(data["answer_id"]))
    elif token_type == "Store":
        return Store(data["target"], token_from_dict(data["child"]))
    else:
        raise ValueError(f"Unknown token type: {token_type}")
