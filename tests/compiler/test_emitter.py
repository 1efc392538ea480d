# Copyright 2026 Teeny Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the code emitter buffers."""

from teeny.compiler.emitter import CodeEmitter


def test_new_emitter_is_empty() -> None:
    emitter = CodeEmitter()
    assert emitter.create_code() == ""


def test_emit_appends_without_line_break() -> None:
    emitter = CodeEmitter()
    emitter.emit("a = ")
    emitter.emit("1")
    emitter.emit_line(";")
    assert emitter.body == "a = 1;\n"


def test_header_precedes_body_regardless_of_order() -> None:
    emitter = CodeEmitter()
    emitter.emit_line("a = 1;")
    emitter.header_line("float a;")
    emitter.emit_line("b = 2;")
    emitter.header_line("float b;")
    assert emitter.header == "float a;\nfloat b;\n"
    assert emitter.create_code() == "float a;\nfloat b;\na = 1;\nb = 2;\n"
