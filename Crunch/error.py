# error.py
"""
Error types shared by the parser, the op engine, the variable table and the session.

Every error carries a four digit code (see ERROR_MESSAGES) and, once it reaches
the session, the equation that caused it.
"""


class MathError(Exception):
    default_code = "9999"

    def __init__(self, message, code=None, equation=None):
        super().__init__(message)
        self.message = message
        self.code = code if code is not None else self.default_code
        self.equation = equation


# -----------------------------
# Parsing
# -----------------------------

class ParseError(MathError):
    default_code = "3000"

class EmptyExpressionError(ParseError):
    default_code = "3000"

class IncompleteExpressionError(ParseError):
    default_code = "3001"

class UnmatchedParenthesisError(ParseError):
    default_code = "3002"

class InvalidExpressionError(ParseError):
    default_code = "3003"

class InvalidIdentifierError(ParseError):
    default_code = "3004"

class UnknownVariableError(ParseError):
    default_code = "3005"

class UnknownAnswerIndexError(ParseError):
    default_code = "3006"

class MalformedNumberError(ParseError):
    default_code = "3008"


# -----------------------------
# Evaluation
# -----------------------------

class EvalError(MathError):
    default_code = "3100"

class UnresolvableAnswerError(EvalError):
    default_code = "3101"


# -----------------------------
# Variable table
# -----------------------------

class VariableError(MathError):
    default_code = "3200"

class VariableExistsError(VariableError):
    default_code = "3201"

class VariableNotFoundError(VariableError):
    default_code = "3202"


# -----------------------------
# History files
# -----------------------------

class HistoryError(MathError):
    default_code = "1001"


Error_Dictionary = {

    "1": "Missing Files",
    "3": "Calculator Error",
    "4": "UI Error",
    "5": "Configuration Error",
    "7": "Runtime Error"

}

# Error Messages are structured in:
# 1. Digit: Main Error
# 2. Digit: Subcategory
# 3. and 4. Digit: Error Number


ERROR_MESSAGES = {
    "1001": "History file could not be read: ",  # + file name

    "3000": "Empty expression.",
    "3001": "Incomplete expression: ",  # + Given Problem
    "3002": "Unmatched parenthesis.",
    "3003": "Invalid expression: ",  # + Given Problem
    "3004": "Invalid identifier: ",  # + identifier
    "3005": "Unknown variable: ",  # + name
    "3006": "No answer that far back: ",  # + index
    "3008": "Malformed number: ",  # + literal

    "3100": "Evaluation error.",
    "3101": "Referenced answer no longer exists.",

    "3200": "Variable table error.",
    "3201": "Variable already exists: ",  # + name
    "3202": "Variable not found: ",  # + name

    "4002": "Calculation already Running!",
    "4501": "Not all Settings could be saved: ",  # + Error raising setting

    "7001": "Expression nested too deeply.",

    "9999": "Unexpected Error: "  # +error
}
