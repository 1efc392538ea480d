# Copyright 2026 Teeny Contributors
# SPDX-License-Identifier: Apache-2.0

"""Token-stream evaluator for Teeny programs.

Statements are executed directly while the grammar is walked; no syntax tree
is built. The whole program is materialized as a token buffer and the only
carrier of "where execution is" is an integer cursor into that buffer:

* linear advance moves the cursor past each statement and its newlines;
* a false IF or WHILE condition moves the cursor to the matching terminator;
* a WHILE whose body completed resets the cursor to its WHILE keyword;
* a GOTO abandons every enclosing block and moves the cursor onto the
  target LABEL token, which is then parsed again like any statement.
"""

from __future__ import annotations

import math
import operator
import sys
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import TextIO

from teeny.compiler.grammar import (
    ADDITIVE_OPERATORS,
    COMPARISON_OPERATORS,
    MULTIPLICATIVE_OPERATORS,
    UNARY_OPERATORS,
    expected_token_error,
    format_number,
    invalid_statement_error,
    missing_comparison_error,
    undeclared_label_error,
    undeclared_variable_error,
    unexpected_primary_error,
)
from teeny.compiler.scanner import Token, TokenType, tokenize
from teeny.interpreter.jumps import build_jump_table

# ###############
# Public Interface
# ###############


class Evaluator:
    """Executes a materialized token buffer.

    The evaluator owns the Symbol Table, the Goto Set and the cursor; all
    three are reset at the start of every run, so running the same buffer
    twice with the same input reproduces the same output.

    Args:
        tokens: Tokens of the whole program, ending with a single EOF token.
        stdin: Stream read by INPUT statements (defaults to ``sys.stdin``).
        stdout: Stream written by PRINT statements (defaults to ``sys.stdout``).

    Raises:
        SemanticError: If a label is declared twice.
    """

    def __init__(
        self,
        tokens: list[Token],
        *,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
    ) -> None:
        if not tokens or tokens[-1].type != TokenType.EOF:
            raise ValueError("token buffer must end with an EOF token")
        self._tokens = tokens
        self._stdin = stdin
        self._stdout = stdout
        self._jumps = build_jump_table(tokens)
        self._pos = 0
        self._symbols: dict[str, float] = {}
        self._labels_gotoed: set[str] = set()

    @property
    def symbols(self) -> Mapping[str, float]:
        """Read-only view of the variables assigned by the latest run."""
        return MappingProxyType(self._symbols)

    @property
    def labels(self) -> Mapping[str, int]:
        """Label name -> index of its LABEL token in the buffer."""
        return MappingProxyType(self._jumps.labels)

    @property
    def gotos(self) -> frozenset[str]:
        """Labels targeted by a GOTO executed during the latest run."""
        return frozenset(self._labels_gotoed)

    def run(self) -> dict[str, float]:
        """Execute the program from the first token.

        Returns:
            A copy of the final Symbol Table.

        Raises:
            ParseError: If the statements reached are syntactically invalid.
            SemanticError: On undeclared variables or GOTOs to undeclared labels.
        """
        self._pos = 0
        self._symbols = {}
        self._labels_gotoed = set()

        while self._check(TokenType.NEWLINE):
            self._advance()
        while not self._check(TokenType.EOF):
            self._statement()
        return dict(self._symbols)

    # ------------------------------------------------------------------
    # Token access helpers
    # ------------------------------------------------------------------

    def _current(self) -> Token:
        """Return the token under the cursor."""
        return self._tokens[self._pos]

    def _check(self, *types: TokenType) -> bool:
        """Return True if the token under the cursor matches any of the given types."""
        return self._tokens[self._pos].type in types

    def _advance(self) -> Token:
        """Consume the token under the cursor, stopping at EOF."""
        tok = self._tokens[self._pos]
        if self._pos < len(self._tokens) - 1:
            self._pos += 1
        return tok

    def _expect(self, token_type: TokenType) -> Token:
        """Consume the current token if it has the given type, else raise ParseError."""
        if not self._check(token_type):
            raise expected_token_error(token_type, self._current())
        return self._advance()

    def _newline(self) -> None:
        """Consume one or more NEWLINE tokens."""
        self._expect(TokenType.NEWLINE)
        while self._check(TokenType.NEWLINE):
            self._advance()

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def _statement(self) -> bool:
        """Execute one statement, including its trailing newlines.

        Returns:
            True if a GOTO moved the cursor; enclosing blocks must then stop
            executing their bodies and leave their terminators unconsumed.
        """
        tok = self._current()
        if tok.type == TokenType.PRINT:
            self._print_statement()
        elif tok.type == TokenType.IF:
            if self._if_statement():
                return True
        elif tok.type == TokenType.WHILE:
            if self._while_statement():
                return True
        elif tok.type == TokenType.LABEL:
            self._label_statement()
        elif tok.type == TokenType.GOTO:
            self._goto_statement()
            return True
        elif tok.type == TokenType.LET:
            self._let_statement()
        elif tok.type == TokenType.INPUT:
            self._input_statement()
        else:
            raise invalid_statement_error(tok)
        self._newline()
        return False

    def _block_body(self, terminator: TokenType) -> bool:
        """Execute statements up to *terminator*; True if a GOTO left the block."""
        while not self._check(terminator):
            if self._statement():
                return True
        return False

    def _print_statement(self) -> None:
        """PRINT (STRING | expression)"""
        self._expect(TokenType.PRINT)
        if self._check(TokenType.STRING):
            self._write(str(self._advance().value))
        else:
            self._write(format_number(self._expression()))

    def _if_statement(self) -> bool:
        """IF comparison THEN newline {statement} ENDIF"""
        if_index = self._pos
        self._expect(TokenType.IF)
        condition = self._comparison()
        self._expect(TokenType.THEN)
        self._newline()
        if condition:
            if self._block_body(TokenType.ENDIF):
                return True
        else:
            self._pos = self._jumps.block_end(if_index)
        self._expect(TokenType.ENDIF)
        return False

    def _while_statement(self) -> bool:
        """WHILE comparison REPEAT newline {statement} ENDWHILE"""
        while_index = self._pos
        while True:
            self._pos = while_index
            self._expect(TokenType.WHILE)
            condition = self._comparison()
            self._expect(TokenType.REPEAT)
            self._newline()
            if not condition:
                break
            if self._block_body(TokenType.ENDWHILE):
                return True
        self._pos = self._jumps.block_end(while_index)
        self._expect(TokenType.ENDWHILE)
        return False

    def _label_statement(self) -> None:
        """LABEL IDENTIFIER

        Declarations are collected by the jump table before the run starts;
        reaching a LABEL again (through a loop or a GOTO) is not a redeclaration.
        """
        self._expect(TokenType.LABEL)
        self._expect(TokenType.IDENTIFIER)

    def _goto_statement(self) -> None:
        """GOTO IDENTIFIER"""
        self._expect(TokenType.GOTO)
        name_tok = self._expect(TokenType.IDENTIFIER)
        if not self._check(TokenType.NEWLINE):
            raise expected_token_error(TokenType.NEWLINE, self._current())
        name = str(name_tok.value)
        self._labels_gotoed.add(name)
        if name not in self._jumps.labels:
            raise undeclared_label_error(name, name_tok.line)
        self._pos = self._jumps.labels[name]

    def _let_statement(self) -> None:
        """LET IDENTIFIER EQ expression"""
        self._expect(TokenType.LET)
        name = str(self._expect(TokenType.IDENTIFIER).value)
        self._symbols.setdefault(name, 0.0)
        self._expect(TokenType.EQ)
        self._symbols[name] = self._expression()

    def _input_statement(self) -> None:
        """INPUT IDENTIFIER"""
        self._expect(TokenType.INPUT)
        name = str(self._expect(TokenType.IDENTIFIER).value)
        self._symbols[name] = self._read_number()

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def _comparison(self) -> bool:
        """expression compOp expression {compOp expression}

        Each operator compares the running left value with the next operand;
        the outcome (1.0 or 0.0) becomes the new left value.
        """
        left = self._expression()
        if not self._check(*COMPARISON_OPERATORS):
            raise missing_comparison_error(self._current())
        while self._check(*COMPARISON_OPERATORS):
            compare = _COMPARISONS[self._advance().type]
            right = self._expression()
            left = 1.0 if compare(left, right) else 0.0
        return left != 0.0

    def _expression(self) -> float:
        """term {(+|-) term}"""
        value = self._term()
        while self._check(*ADDITIVE_OPERATORS):
            if self._advance().type == TokenType.PLUS:
                value += self._term()
            else:
                value -= self._term()
        return value

    def _term(self) -> float:
        """unary {(*|/) unary}"""
        value = self._unary()
        while self._check(*MULTIPLICATIVE_OPERATORS):
            if self._advance().type == TokenType.ASTERISK:
                value *= self._unary()
            else:
                value = _divide(value, self._unary())
        return value

    def _unary(self) -> float:
        """[+|-] primary"""
        if self._check(*UNARY_OPERATORS):
            if self._advance().type == TokenType.MINUS:
                return -self._primary()
        return self._primary()

    def _primary(self) -> float:
        """NUMBER | IDENTIFIER"""
        tok = self._current()
        if tok.type == TokenType.NUMBER:
            self._advance()
            return float(tok.value)
        if tok.type == TokenType.IDENTIFIER:
            if tok.value not in self._symbols:
                raise undeclared_variable_error(tok)
            self._advance()
            return self._symbols[str(tok.value)]
        raise unexpected_primary_error(tok)

    # ------------------------------------------------------------------
    # Console I/O
    # ------------------------------------------------------------------

    def _write(self, text: str) -> None:
        """Write one line of program output."""
        stream = self._stdout if self._stdout is not None else sys.stdout
        stream.write(text + "\n")
        stream.flush()

    def _read_number(self) -> float:
        """Read one line of input; anything that is not a number reads as 0."""
        stream = self._stdin if self._stdin is not None else sys.stdin
        return parse_input_number(stream.readline())


def evaluate(
    source: str,
    *,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> dict[str, float]:
    """Tokenize and execute Teeny source text.

    Args:
        source: The full text of a Teeny program.
        stdin: Stream read by INPUT statements (defaults to ``sys.stdin``).
        stdout: Stream written by PRINT statements (defaults to ``sys.stdout``).

    Returns:
        The final Symbol Table.

    Raises:
        LexerError: If the source contains invalid characters or literals.
        ParseError: If the executed statements are syntactically invalid.
        SemanticError: On undeclared variables, duplicate labels or GOTOs to
            undeclared labels.
    """
    return Evaluator(tokenize(source), stdin=stdin, stdout=stdout).run()


def parse_input_number(line: str) -> float:
    """Convert one line of user input to a number.

    Empty, non-numeric and NaN input all read as 0; this is never an error.
    """
    try:
        value = float(line.strip())
    except ValueError:
        return 0.0
    if math.isnan(value):
        return 0.0
    return value


# ################
# Implementation
# ################

_COMPARISONS: dict[TokenType, Callable[[float, float], bool]] = {
    TokenType.EQEQ: operator.eq,
    TokenType.NOTEQ: operator.ne,
    TokenType.LT: operator.lt,
    TokenType.LTEQ: operator.le,
    TokenType.GT: operator.gt,
    TokenType.GTEQ: operator.ge,
}


def _divide(dividend: float, divisor: float) -> float:
    """Divide with IEEE 754 semantics: x/0 is +-Infinity and 0/0 is NaN."""
    if divisor != 0.0:
        return dividend / divisor
    if dividend == 0.0 or math.isnan(dividend):
        return math.nan
    return math.copysign(math.inf, dividend) * math.copysign(1.0, divisor)
