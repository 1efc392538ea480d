# Copyright 2026 Teeny Contributors
# SPDX-License-Identifier: Apache-2.0

"""Both backends must agree on which programs are valid and on the values they print."""

import io
import shutil
import subprocess
from pathlib import Path

import pytest

from teeny.compiler.generator import generate
from teeny.compiler.grammar import ParseError, SemanticError
from teeny.compiler.scanner import LexerError
from teeny.interpreter.evaluator import evaluate

# ###############
# Test Data
# ###############

VALID_PROGRAMS = {
    "empty": "",
    "print": 'PRINT "hello"\nPRINT 1 + 2 * 3\n',
    "counting loop": "LET i = 0\nWHILE i < 5 REPEAT\nPRINT i\nLET i = i + 1\nENDWHILE\n",
    "nested blocks": (
        "LET a = 1\nWHILE a <= 3 REPEAT\nIF a != 2 THEN\nPRINT a\nENDIF\nLET a = a + 1\nENDWHILE\n"
    ),
    "backward goto": "LET n = 0\nLABEL top\nLET n = n + 1\nIF n < 3 THEN\nGOTO top\nENDIF\n",
    "forward goto": 'GOTO end\nPRINT "skipped"\nLABEL end\n',
    "comparison chain": 'IF 1 < 2 == 1 THEN\nPRINT "chain"\nENDIF\n',
    "blank lines and comments": "\n\n# header\nLET x = 2 # two\n\n\nPRINT -x\n",
    "division by zero": "LET z = 0\nPRINT 1 / z\n",
}

INVALID_PROGRAMS = {
    "undeclared variable": ("PRINT x\n", SemanticError),
    "duplicate label": ("LABEL loop\nLABEL loop\n", SemanticError),
    "undeclared goto target": ("GOTO missing\n", SemanticError),
    "invalid statement": ("THEN\n", ParseError),
    "missing comparison operator": ("IF 1 THEN\nENDIF\n", ParseError),
    "missing assignment operator": ("LET a 1\n", ParseError),
    "missing endwhile": ("LET i = 0\nWHILE i < 1 REPEAT\nLET i = i + 1\n", ParseError),
    "lone bang": ("PRINT 1 ! 2\n", LexerError),
    "unterminated number": ("PRINT 1.\n", LexerError),
}


# ###############
# Agreement
# ###############


@pytest.mark.parametrize("source", list(VALID_PROGRAMS.values()), ids=list(VALID_PROGRAMS))
def test_valid_program_accepted_by_both_backends(source: str) -> None:
    generate(source)
    evaluate(source, stdin=io.StringIO(), stdout=io.StringIO())


@pytest.mark.parametrize(
    ("source", "error_type"),
    list(INVALID_PROGRAMS.values()),
    ids=list(INVALID_PROGRAMS),
)
def test_invalid_program_rejected_by_both_backends(source: str, error_type: type[Exception]) -> None:
    with pytest.raises(error_type):
        generate(source)
    with pytest.raises(error_type):
        evaluate(source, stdin=io.StringIO(), stdout=io.StringIO())


def test_errors_report_the_same_line() -> None:
    source = "LET a = 1\nPRINT a\nPRINT b\n"
    with pytest.raises(SemanticError) as generated:
        generate(source)
    with pytest.raises(SemanticError) as evaluated:
        evaluate(source, stdout=io.StringIO())
    assert generated.value.line == evaluated.value.line == 3


# ###############
# Compiled Output
# ###############

GCC = shutil.which("gcc")

ARITHMETIC_PROGRAMS = {
    "integral division": ("LET a = 7 / 2\nPRINT a\nPRINT 1 / 2 * 4\n", ""),
    "mixed arithmetic": ("LET a = 10\nLET b = 4\nPRINT a / b + a * b - 3\nPRINT -a / 4\n", ""),
    "large product": ("PRINT 100000 * 100000 / 1000000\n", ""),
    "counting loop": ("LET i = 0\nWHILE i < 3 REPEAT\nPRINT i / 2\nLET i = i + 1\nENDWHILE\n", ""),
    "input": ("INPUT n\nPRINT n / 4\n", "3\n"),
    "exhausted input": ("INPUT n\nPRINT n\n", ""),
    "non-numeric input": ("INPUT n\nPRINT n + 1\n", "abc\n"),
}


def _compiled_output(source: str, stdin: str, tmp_path: Path) -> list[str]:
    """Compile the generated C with gcc, run it and return its output lines."""
    c_file = tmp_path / "prog.c"
    binary = tmp_path / "prog"
    c_file.write_text(generate(source), encoding="utf-8")
    subprocess.run([GCC, "-o", str(binary), str(c_file)], check=True, capture_output=True)
    result = subprocess.run([str(binary)], input=stdin, capture_output=True, text=True, check=True)
    return result.stdout.splitlines()


@pytest.mark.skipif(GCC is None, reason="gcc is not available")
@pytest.mark.parametrize(
    ("source", "stdin"),
    list(ARITHMETIC_PROGRAMS.values()),
    ids=list(ARITHMETIC_PROGRAMS),
)
def test_compiled_program_prints_evaluator_values(source: str, stdin: str, tmp_path: Path) -> None:
    out = io.StringIO()
    evaluate(source, stdin=io.StringIO(stdin), stdout=out)
    expected = [float(line) for line in out.getvalue().splitlines()]
    compiled = [float(line) for line in _compiled_output(source, stdin, tmp_path)]
    assert compiled == pytest.approx(expected, abs=0.005)
