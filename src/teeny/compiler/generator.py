# Copyright 2026 Teeny Contributors
# SPDX-License-Identifier: Apache-2.0

"""Recursive-descent code generator translating Teeny source into C.

The generator pulls tokens from the scanner one at a time with a two-token
lookahead and translates each statement as soon as it is recognized; there
is no syntax tree. Labels may be declared after the GOTO that names them,
so goto targets are validated once the whole program has been walked.
"""

from __future__ import annotations

from teeny.compiler.emitter import CodeEmitter
from teeny.compiler.grammar import (
    ADDITIVE_OPERATORS,
    COMPARISON_OPERATORS,
    MULTIPLICATIVE_OPERATORS,
    UNARY_OPERATORS,
    duplicate_label_error,
    expected_token_error,
    format_number,
    invalid_statement_error,
    missing_comparison_error,
    undeclared_label_error,
    undeclared_variable_error,
    unexpected_primary_error,
)
from teeny.compiler.scanner import Scanner, Token, TokenType

# ###############
# Public Interface
# ###############

DEFAULT_PRINT_PRECISION = 2


def generate(source: str, *, print_precision: int = DEFAULT_PRINT_PRECISION) -> str:
    """Translate Teeny source text into a C program.

    Args:
        source: The full text of a Teeny program.
        print_precision: Number of decimals used when printing numbers.

    Returns:
        The generated C source code.

    Raises:
        LexerError: If the source contains invalid characters or literals.
        ParseError: If the source is syntactically invalid.
        SemanticError: On undeclared variables, duplicate labels or GOTOs to
            undeclared labels.
    """
    emitter = CodeEmitter()
    _Generator(Scanner(source), emitter, print_precision).program()
    return emitter.create_code()


# ################
# Implementation
# ################


class _Generator:
    """Single-pass translator over a pull-based token stream."""

    def __init__(self, scanner: Scanner, emitter: CodeEmitter, print_precision: int) -> None:
        self._scanner = scanner
        self._emitter = emitter
        self._print_precision = print_precision
        self._symbols: set[str] = set()
        self._labels_declared: set[str] = set()
        # Label name -> line of the first GOTO naming it.
        self._labels_gotoed: dict[str, int] = {}
        self._current = scanner.next_token()
        self._peek = scanner.next_token()

    def program(self) -> None:
        """Translate the whole program, then validate the goto targets."""
        self._emitter.header_line("#include <stdio.h>")
        self._emitter.header_line("int main(void) {")

        while self._check(TokenType.NEWLINE):
            self._advance()

        while not self._check(TokenType.EOF):
            self._statement()

        self._emitter.emit_line("return 0;")
        self._emitter.emit_line("}")

        for label, line in self._labels_gotoed.items():
            if label not in self._labels_declared:
                raise undeclared_label_error(label, line)

    # ------------------------------------------------------------------
    # Token access helpers
    # ------------------------------------------------------------------

    def _check(self, *types: TokenType) -> bool:
        """Return True if the current token matches any of the given types."""
        return self._current.type in types

    def _advance(self) -> Token:
        """Consume the current token and pull the next one from the scanner."""
        tok = self._current
        self._current = self._peek
        self._peek = self._scanner.next_token()
        return tok

    def _expect(self, token_type: TokenType) -> Token:
        """Consume the current token if it has the given type, else raise ParseError."""
        if not self._check(token_type):
            raise expected_token_error(token_type, self._current)
        return self._advance()

    def _newline(self) -> None:
        """Consume one or more NEWLINE tokens."""
        self._expect(TokenType.NEWLINE)
        while self._check(TokenType.NEWLINE):
            self._advance()

    def _declare(self, name: str) -> None:
        """Add a variable declaration to the header the first time *name* is seen."""
        if name not in self._symbols:
            self._symbols.add(name)
            self._emitter.header_line(f"float {name};")

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def _statement(self) -> None:
        """Translate one statement, including its trailing newlines."""
        tok = self._current
        if tok.type == TokenType.PRINT:
            self._print_statement()
        elif tok.type == TokenType.IF:
            self._if_statement()
        elif tok.type == TokenType.WHILE:
            self._while_statement()
        elif tok.type == TokenType.LABEL:
            self._label_statement()
        elif tok.type == TokenType.GOTO:
            self._goto_statement()
        elif tok.type == TokenType.LET:
            self._let_statement()
        elif tok.type == TokenType.INPUT:
            self._input_statement()
        else:
            raise invalid_statement_error(tok)
        self._newline()

    def _print_statement(self) -> None:
        """PRINT (STRING | expression)"""
        self._expect(TokenType.PRINT)
        if self._check(TokenType.STRING):
            text = self._advance().value
            self._emitter.emit_line(f'printf("{text}\\n");')
            return
        self._emitter.emit(f'printf("%.{self._print_precision}f\\n", (float)(')
        self._expression()
        self._emitter.emit_line("));")

    def _if_statement(self) -> None:
        """IF comparison THEN newline {statement} ENDIF"""
        self._expect(TokenType.IF)
        self._emitter.emit("if (")
        self._comparison()
        self._expect(TokenType.THEN)
        self._newline()
        self._emitter.emit_line(") {")
        while not self._check(TokenType.ENDIF):
            self._statement()
        self._expect(TokenType.ENDIF)
        self._emitter.emit_line("}")

    def _while_statement(self) -> None:
        """WHILE comparison REPEAT newline {statement} ENDWHILE"""
        self._expect(TokenType.WHILE)
        self._emitter.emit("while (")
        self._comparison()
        self._expect(TokenType.REPEAT)
        self._newline()
        self._emitter.emit_line(") {")
        while not self._check(TokenType.ENDWHILE):
            self._statement()
        self._expect(TokenType.ENDWHILE)
        self._emitter.emit_line("}")

    def _label_statement(self) -> None:
        """LABEL IDENTIFIER"""
        self._expect(TokenType.LABEL)
        name_tok = self._expect(TokenType.IDENTIFIER)
        name = str(name_tok.value)
        if name in self._labels_declared:
            raise duplicate_label_error(name, name_tok.line)
        self._labels_declared.add(name)
        self._emitter.emit_line(f"{name}:;")

    def _goto_statement(self) -> None:
        """GOTO IDENTIFIER"""
        self._expect(TokenType.GOTO)
        name_tok = self._expect(TokenType.IDENTIFIER)
        name = str(name_tok.value)
        self._labels_gotoed.setdefault(name, name_tok.line)
        self._emitter.emit_line(f"goto {name};")

    def _let_statement(self) -> None:
        """LET IDENTIFIER EQ expression"""
        self._expect(TokenType.LET)
        name = str(self._expect(TokenType.IDENTIFIER).value)
        self._declare(name)
        self._expect(TokenType.EQ)
        self._emitter.emit(f"{name} = ")
        self._expression()
        self._emitter.emit_line(";")

    def _input_statement(self) -> None:
        """INPUT IDENTIFIER"""
        self._expect(TokenType.INPUT)
        name = str(self._expect(TokenType.IDENTIFIER).value)
        self._declare(name)
        self._emitter.emit_line(f'if(1 != scanf("%f", &{name})) {{')
        self._emitter.emit_line(f"{name} = 0;")
        self._emitter.emit_line('scanf("%*s");')
        self._emitter.emit_line("}")

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def _comparison(self) -> None:
        """expression compOp expression {compOp expression}"""
        self._expression()
        if not self._check(*COMPARISON_OPERATORS):
            raise missing_comparison_error(self._current)
        while self._check(*COMPARISON_OPERATORS):
            self._emitter.emit(f" {self._advance().text} ")
            self._expression()

    def _expression(self) -> None:
        """term {(+|-) term}"""
        self._term()
        while self._check(*ADDITIVE_OPERATORS):
            self._emitter.emit(f" {self._advance().text} ")
            self._term()

    def _term(self) -> None:
        """unary {(*|/) unary}"""
        self._unary()
        while self._check(*MULTIPLICATIVE_OPERATORS):
            # C never sees an integer product or quotient.
            self._emitter.emit(f" {self._advance().text} (double)")
            self._unary()

    def _unary(self) -> None:
        """[+|-] primary"""
        if self._check(*UNARY_OPERATORS):
            self._emitter.emit(self._advance().text)
        self._primary()

    def _primary(self) -> None:
        """NUMBER | IDENTIFIER"""
        tok = self._current
        if tok.type == TokenType.NUMBER:
            self._emitter.emit(format_number(float(tok.value)))
        elif tok.type == TokenType.IDENTIFIER:
            if tok.value not in self._symbols:
                raise undeclared_variable_error(tok)
            self._emitter.emit(str(tok.value))
        else:
            raise unexpected_primary_error(tok)
        self._advance()
