# Copyright 2026 Teeny Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexical scanner for Teeny source files.

Converts raw source text into tokens, either one at a time (for the code
generator's two-token lookahead) or as a fully materialized list (for the
evaluator's cursor-based execution).
"""

from __future__ import annotations

import enum
from collections.abc import Iterator
from dataclasses import dataclass

# ###############
# Public Interface
# ###############


class TokenType(enum.Enum):
    """All token types produced by the Teeny scanner."""

    # Structural
    EOF = "EOF"
    NEWLINE = "NEWLINE"

    # Literals
    NUMBER = "NUMBER"
    STRING = "STRING"

    # Identifiers
    IDENTIFIER = "IDENTIFIER"

    # Keywords
    LABEL = "LABEL"
    GOTO = "GOTO"
    PRINT = "PRINT"
    INPUT = "INPUT"
    LET = "LET"
    IF = "IF"
    THEN = "THEN"
    ENDIF = "ENDIF"
    WHILE = "WHILE"
    REPEAT = "REPEAT"
    ENDWHILE = "ENDWHILE"

    # Operators
    EQ = "="
    PLUS = "+"
    MINUS = "-"
    ASTERISK = "*"
    SLASH = "/"
    EQEQ = "=="
    NOTEQ = "!="
    LT = "<"
    LTEQ = "<="
    GT = ">"
    GTEQ = ">="


@dataclass(frozen=True)
class Token:
    """A lexical token with its source line.

    Attributes:
        type: The kind of token.
        text: The raw source text of the token ("" for EOF, "\\n" for NEWLINE).
        line: 1-based line number of the token.
        value: The decoded value: a float for NUMBER, the name for IDENTIFIER,
            the string contents for STRING, None otherwise.
    """

    type: TokenType
    text: str
    line: int
    value: float | str | None = None


class LexerError(Exception):
    """Raised when the scanner encounters an invalid character or unterminated literal.

    Attributes:
        message: The error description without the line prefix.
        line: 1-based line number of the error.
    """

    def __init__(self, message: str, line: int) -> None:
        super().__init__(f"Line {line}: {message}")
        self.message = message
        self.line = line


KEYWORDS: dict[str, TokenType] = {
    "LABEL": TokenType.LABEL,
    "GOTO": TokenType.GOTO,
    "PRINT": TokenType.PRINT,
    "INPUT": TokenType.INPUT,
    "LET": TokenType.LET,
    "IF": TokenType.IF,
    "THEN": TokenType.THEN,
    "ENDIF": TokenType.ENDIF,
    "WHILE": TokenType.WHILE,
    "REPEAT": TokenType.REPEAT,
    "ENDWHILE": TokenType.ENDWHILE,
}


class Scanner:
    """Pull-based scanner over a single source text.

    A line terminator is appended to the source so that the last statement
    is always newline-terminated.
    """

    def __init__(self, source: str) -> None:
        self._source = source + "\n"
        self._pos = 0
        self._line = 1

    def next_token(self) -> Token:
        """Scan and return the next token.

        Once the end of input is reached every further call returns EOF.

        Raises:
            LexerError: On illegal characters, malformed numbers or
                unterminated strings.
        """
        self._skip_whitespace_and_comment()
        ch = self._current()
        line = self._line

        if ch == "":
            return Token(TokenType.EOF, "", line)
        if ch == "\n":
            self._advance()
            return Token(TokenType.NEWLINE, "\n", line)
        if ch in _SINGLE_CHAR_OPERATORS:
            self._advance()
            return Token(_SINGLE_CHAR_OPERATORS[ch], ch, line)
        if ch in _TWO_CHAR_OPERATORS:
            return self._scan_two_char_operator(line)
        if ch == "!":
            return self._scan_not_equal(line)
        if ch == '"':
            return self._scan_string(line)
        if _is_digit(ch):
            return self._scan_number(line)
        if _is_alpha(ch):
            return self._scan_identifier_or_keyword(line)
        raise LexerError(f"Unknown token {ch!r}", line)

    def tokenize(self) -> list[Token]:
        """Restart from the beginning of the source and return all tokens.

        The returned list always ends with exactly one EOF token.
        """
        self._pos = 0
        self._line = 1
        return list(self)

    def __iter__(self) -> Iterator[Token]:
        """Lazily yield tokens up to and including the EOF token."""
        while True:
            token = self.next_token()
            yield token
            if token.type == TokenType.EOF:
                return

    # ------------------------------------------------------------------
    # Low-level character access helpers
    # ------------------------------------------------------------------

    def _current(self) -> str:
        """Return the character at the current position, or '' at end of input."""
        if self._pos < len(self._source):
            return self._source[self._pos]
        return ""

    def _peek(self) -> str:
        """Return the character one position ahead, or '' at end of input."""
        if self._pos + 1 < len(self._source):
            return self._source[self._pos + 1]
        return ""

    def _advance(self) -> str:
        """Consume the current character and return it.

        The line counter moves on only once a line terminator has been
        consumed, so a NEWLINE token reports the line it terminates.
        """
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
        return ch

    # ------------------------------------------------------------------
    # Whitespace and comment skipping
    # ------------------------------------------------------------------

    def _skip_whitespace_and_comment(self) -> None:
        """Skip blanks, then a '#' comment up to (not including) the line terminator."""
        while self._current() in (" ", "\t", "\r"):
            self._advance()
        if self._current() == "#":
            while self._current() not in ("\n", ""):
                self._advance()

    # ------------------------------------------------------------------
    # Token scanners
    # ------------------------------------------------------------------

    def _scan_two_char_operator(self, line: int) -> Token:
        """Scan one of '=', '==', '>', '>=', '<', '<='."""
        ch = self._advance()
        single, double = _TWO_CHAR_OPERATORS[ch]
        if self._current() == "=":
            self._advance()
            return Token(double, ch + "=", line)
        return Token(single, ch, line)

    def _scan_not_equal(self, line: int) -> Token:
        """Scan '!='; a lone '!' is not an operator."""
        following = self._peek()
        if following != "=":
            shown = repr(following) if following else "end of input"
            raise LexerError(f"Illegal character: expected '!=', got '!' followed by {shown}", line)
        self._advance()  # !
        self._advance()  # =
        return Token(TokenType.NOTEQ, "!=", line)

    def _scan_string(self, line: int) -> Token:
        """Scan a double-quoted string literal; escapes are not supported."""
        self._advance()  # opening "
        start = self._pos
        while self._current() != '"':
            ch = self._current()
            if ch == "":
                raise LexerError("Unterminated string literal", self._line)
            if ch in _ILLEGAL_STRING_CHARS:
                raise LexerError(f"Illegal character in string: {ch!r}", self._line)
            self._advance()
        text = self._source[start : self._pos]
        self._advance()  # closing "
        return Token(TokenType.STRING, text, line, text)

    def _scan_number(self, line: int) -> Token:
        """Scan a number: one or more digits, optionally '.' and one or more digits."""
        start = self._pos
        while _is_digit(self._current()):
            self._advance()
        if self._current() == ".":
            self._advance()
            if not _is_digit(self._current()):
                raise LexerError("Illegal character in number", self._line)
            while _is_digit(self._current()):
                self._advance()
        text = self._source[start : self._pos]
        return Token(TokenType.NUMBER, text, line, float(text))

    def _scan_identifier_or_keyword(self, line: int) -> Token:
        """Scan a run of letters and map it to a keyword token type if applicable."""
        start = self._pos
        while _is_alpha(self._current()):
            self._advance()
        text = self._source[start : self._pos]
        if text in KEYWORDS:
            return Token(KEYWORDS[text], text, line)
        return Token(TokenType.IDENTIFIER, text, line, text)


def tokenize(source: str) -> list[Token]:
    """Tokenize a complete Teeny source string.

    Raises:
        LexerError: If the source contains an invalid token.
    """
    return Scanner(source).tokenize()


# ################
# Implementation
# ################

_SINGLE_CHAR_OPERATORS: dict[str, TokenType] = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.ASTERISK,
    "/": TokenType.SLASH,
}

# First character -> (token type alone, token type when followed by '=').
_TWO_CHAR_OPERATORS: dict[str, tuple[TokenType, TokenType]] = {
    "=": (TokenType.EQ, TokenType.EQEQ),
    ">": (TokenType.GT, TokenType.GTEQ),
    "<": (TokenType.LT, TokenType.LTEQ),
}

_ILLEGAL_STRING_CHARS = frozenset("\r\n\t%\\")


def _is_alpha(ch: str) -> bool:
    """Return True for a single ASCII letter."""
    return ch != "" and ch.isascii() and ch.isalpha()


def _is_digit(ch: str) -> bool:
    """Return True for a single ASCII decimal digit."""
    return "0" <= ch <= "9" and ch != ""
