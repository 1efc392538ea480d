# Copyright 2026 Teeny Contributors
# SPDX-License-Identifier: Apache-2.0

"""Grammar definitions shared by the code generator and the evaluator.

Both backends walk the same grammar with their own recursive-descent
implementation::

    program     := {NEWLINE} {statement}
    statement   := PRINT (STRING | expression) newline
                 | IF comparison THEN newline {statement} ENDIF newline
                 | WHILE comparison REPEAT newline {statement} ENDWHILE newline
                 | LABEL IDENTIFIER newline
                 | GOTO IDENTIFIER newline
                 | LET IDENTIFIER EQ expression newline
                 | INPUT IDENTIFIER newline
    comparison  := expression compOp expression {compOp expression}
    expression  := term {(+|-) term}
    term        := unary {(*|/) unary}
    unary       := [+|-] primary
    primary     := NUMBER | IDENTIFIER
    newline     := NEWLINE {NEWLINE}

This module holds what the two walks must agree on: operator groupings,
the error types and number formatting.
"""

from __future__ import annotations

import math
from decimal import Decimal

from teeny.compiler.scanner import Token, TokenType

# ###############
# Public Interface
# ###############

COMPARISON_OPERATORS: frozenset[TokenType] = frozenset(
    {
        TokenType.EQEQ,
        TokenType.NOTEQ,
        TokenType.LT,
        TokenType.LTEQ,
        TokenType.GT,
        TokenType.GTEQ,
    }
)

ADDITIVE_OPERATORS: frozenset[TokenType] = frozenset({TokenType.PLUS, TokenType.MINUS})

MULTIPLICATIVE_OPERATORS: frozenset[TokenType] = frozenset({TokenType.ASTERISK, TokenType.SLASH})

UNARY_OPERATORS: frozenset[TokenType] = ADDITIVE_OPERATORS


class ParseError(Exception):
    """Raised when a token does not fit the grammar at the current position.

    Attributes:
        message: The error description without the line prefix.
        line: 1-based line number of the offending token.
    """

    def __init__(self, message: str, line: int) -> None:
        super().__init__(f"Line {line}: {message}")
        self.message = message
        self.line = line


class SemanticError(Exception):
    """Raised on a variable, label or goto discipline violation.

    Attributes:
        message: The error description without the line prefix.
        line: 1-based line number where the violation was detected.
    """

    def __init__(self, message: str, line: int) -> None:
        super().__init__(f"Line {line}: {message}")
        self.message = message
        self.line = line


def expected_token_error(expected: TokenType, got: Token) -> ParseError:
    """Build the error raised when *got* appears where *expected* is required."""
    return ParseError(f"Expected {expected.name}, got {got.type.name}", got.line)


def invalid_statement_error(token: Token) -> ParseError:
    """Build the error raised when no statement starts with *token*."""
    return ParseError(f"Invalid statement at {_describe(token)}", token.line)


def missing_comparison_error(token: Token) -> ParseError:
    """Build the error raised when a comparison lacks its operator."""
    return ParseError(f"Expected comparison operator at {_describe(token)}", token.line)


def unexpected_primary_error(token: Token) -> ParseError:
    """Build the error raised when *token* cannot start a primary expression."""
    return ParseError(f"Unexpected token at {_describe(token)}", token.line)


def undeclared_variable_error(token: Token) -> SemanticError:
    """Build the error raised when an identifier is read before it is assigned."""
    return SemanticError(f'Referencing variable before assignment: "{token.value}"', token.line)


def duplicate_label_error(name: str, line: int) -> SemanticError:
    """Build the error raised when a label is declared a second time."""
    return SemanticError(f'Label "{name}" already exists', line)


def undeclared_label_error(name: str, line: int) -> SemanticError:
    """Build the error raised when a GOTO names a label that is never declared."""
    return SemanticError(f'Attempting to GOTO to undeclared label "{name}"', line)


def format_number(value: float) -> str:
    """Render a number in its shortest natural form.

    Integral values drop the fractional part (``3.0`` -> ``"3"``, ``-0.0`` ->
    ``"-0"``). Other finite values use the shortest round-tripping digits,
    written positionally down to ``0.000001`` and in exponent form below that
    (``1e-7``). Non-finite values are spelled ``Infinity``, ``-Infinity`` and
    ``NaN``.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e21:
        return f"{value:.0f}"
    text = repr(value)
    if "e" not in text:
        return text
    mantissa, exponent = text.split("e")
    if -6 <= int(exponent) < 21:
        return format(Decimal(text), "f")
    return f"{mantissa}e{int(exponent):+d}"


# ################
# Implementation
# ################


def _describe(token: Token) -> str:
    """Return a short human-readable description of a token for error messages."""
    if token.type in (TokenType.EOF, TokenType.NEWLINE):
        return token.type.name
    return f"{token.text!r} ({token.type.name})"
