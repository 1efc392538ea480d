# Copyright 2026 Teeny Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the evaluator's jump table."""

import pytest

from teeny.compiler.grammar import SemanticError
from teeny.compiler.scanner import Token, TokenType, tokenize
from teeny.interpreter.jumps import build_jump_table

# ###############
# Test Helpers
# ###############


def _indices(tokens: list[Token], token_type: TokenType) -> list[int]:
    """Return the buffer positions of every token of the given type."""
    return [i for i, tok in enumerate(tokens) if tok.type == token_type]


# ###############
# Block Pairing
# ###############


class TestBlocks:
    def test_if_paired_with_endif(self) -> None:
        tokens = tokenize("IF 1 < 2 THEN\nPRINT 1\nENDIF\n")
        table = build_jump_table(tokens)
        assert table.block_ends == {_indices(tokens, TokenType.IF)[0]: _indices(tokens, TokenType.ENDIF)[0]}

    def test_nested_blocks_pair_structurally(self) -> None:
        source = """\
IF 1 < 2 THEN
    IF 2 < 3 THEN
    ENDIF
    WHILE 1 > 2 REPEAT
    ENDWHILE
ENDIF
"""
        tokens = tokenize(source)
        table = build_jump_table(tokens)
        ifs = _indices(tokens, TokenType.IF)
        endifs = _indices(tokens, TokenType.ENDIF)
        assert table.block_end(ifs[0]) == endifs[1]
        assert table.block_end(ifs[1]) == endifs[0]
        assert table.block_end(_indices(tokens, TokenType.WHILE)[0]) == _indices(tokens, TokenType.ENDWHILE)[0]

    def test_unterminated_block_ends_at_eof(self) -> None:
        tokens = tokenize("WHILE 1 < 2 REPEAT\nPRINT 1\n")
        table = build_jump_table(tokens)
        assert table.block_end(0) == len(tokens) - 1
        assert table.eof_index == len(tokens) - 1

    def test_mismatched_terminator_is_left_unpaired(self) -> None:
        tokens = tokenize("IF 1 < 2 THEN\nENDWHILE\n")
        table = build_jump_table(tokens)
        assert table.block_ends == {}

    def test_stray_terminator_is_ignored(self) -> None:
        assert build_jump_table(tokenize("ENDIF\n")).block_ends == {}


# ###############
# Labels
# ###############


class TestLabels:
    def test_labels_map_to_label_token(self) -> None:
        tokens = tokenize("LABEL a\nPRINT 1\nLABEL b\n")
        table = build_jump_table(tokens)
        label_positions = _indices(tokens, TokenType.LABEL)
        assert table.labels == {"a": label_positions[0], "b": label_positions[1]}

    def test_labels_inside_blocks_are_collected(self) -> None:
        tokens = tokenize("IF 1 > 2 THEN\nLABEL hidden\nENDIF\n")
        assert "hidden" in build_jump_table(tokens).labels

    def test_duplicate_label(self) -> None:
        with pytest.raises(SemanticError, match='Label "x" already exists') as exc_info:
            build_jump_table(tokenize("LABEL x\nPRINT 1\nLABEL x\n"))
        assert exc_info.value.line == 3

    def test_label_without_identifier_is_left_to_the_grammar(self) -> None:
        assert build_jump_table(tokenize("LABEL 5\n")).labels == {}

    def test_empty_program(self) -> None:
        table = build_jump_table(tokenize(""))
        assert table.block_ends == {}
        assert table.labels == {}
        assert table.eof_index == 1
