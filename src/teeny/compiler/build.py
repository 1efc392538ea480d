# Copyright 2026 Teeny Contributors
# SPDX-License-Identifier: Apache-2.0

"""File-level compiler workflow: read a Teeny source file, write C code."""

from __future__ import annotations

from pathlib import Path

from teeny.compiler.generator import DEFAULT_PRINT_PRECISION, generate
from teeny.compiler.grammar import ParseError, SemanticError
from teeny.compiler.scanner import LexerError

# ###############
# Public Interface
# ###############


class CompilerError(Exception):
    """Raised when a source file cannot be compiled.

    Covers unreadable sources, lexical, syntactic and semantic errors, and
    failures writing the output file.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)


def compile_file(
    source_path: Path,
    output_path: Path,
    *,
    print_precision: int = DEFAULT_PRINT_PRECISION,
) -> str:
    """Compile a Teeny source file into a C source file.

    The output file is only written once the whole program has been
    translated and validated; a failing compilation leaves no output behind.

    Args:
        source_path: Path to the Teeny source file.
        output_path: Destination of the generated C code. Parent directories
            are created as needed.
        print_precision: Number of decimals used when printing numbers.

    Returns:
        The generated C code.

    Raises:
        CompilerError: If the source cannot be read or compiled, or the
            output cannot be written.
    """
    source = read_source(source_path)
    try:
        code = generate(source, print_precision=print_precision)
    except (LexerError, ParseError, SemanticError) as exc:
        raise CompilerError(f"{source_path}: {exc}") from exc

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(code, encoding="utf-8")
    except OSError as exc:
        raise CompilerError(f"Cannot write output file '{output_path}': {exc}") from exc
    return code


def read_source(source_path: Path) -> str:
    """Read a Teeny source file as UTF-8 text.

    Raises:
        CompilerError: If the file does not exist or cannot be read.
    """
    try:
        return source_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise CompilerError(f"Source file not found: {source_path}") from None
    except (OSError, UnicodeDecodeError) as exc:
        raise CompilerError(f"Could not read file {source_path}: {exc}") from exc
