# Copyright 2026 Teeny Contributors
# SPDX-License-Identifier: Apache-2.0

"""Compiler pipeline for Teeny source: scanning, grammar and C code generation."""

from teeny.compiler.build import CompilerError, compile_file
from teeny.compiler.emitter import CodeEmitter
from teeny.compiler.generator import DEFAULT_PRINT_PRECISION, generate
from teeny.compiler.grammar import ParseError, SemanticError, format_number
from teeny.compiler.scanner import LexerError, Scanner, Token, TokenType, tokenize

__all__ = [
    "tokenize",
    "Scanner",
    "Token",
    "TokenType",
    "LexerError",
    "ParseError",
    "SemanticError",
    "format_number",
    "CodeEmitter",
    "generate",
    "DEFAULT_PRINT_PRECISION",
    "compile_file",
    "CompilerError",
]
