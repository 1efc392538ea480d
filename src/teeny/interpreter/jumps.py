# Copyright 2026 Teeny Contributors
# SPDX-License-Identifier: Apache-2.0

"""Jump table for the cursor-based evaluator.

A single pass over the materialized token buffer pairs every block opener
with its terminator and records where each label is declared, so that the
evaluator can reposition its cursor without re-scanning tokens.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from teeny.compiler.grammar import duplicate_label_error
from teeny.compiler.scanner import Token, TokenType

# ###############
# Public Interface
# ###############


@dataclass
class JumpTable:
    """Positions the evaluator can jump to.

    Attributes:
        block_ends: Index of an IF or WHILE token -> index of its matching
            ENDIF or ENDWHILE token.
        labels: Label name -> index of the LABEL token declaring it.
        eof_index: Index of the terminal EOF token.
    """

    block_ends: dict[int, int] = field(default_factory=dict)
    labels: dict[str, int] = field(default_factory=dict)
    eof_index: int = 0

    def block_end(self, opener_index: int) -> int:
        """Return the terminator index for a block opener.

        An unterminated block maps to the EOF token so that the caller's
        terminator check reports the missing ENDIF or ENDWHILE.
        """
        return self.block_ends.get(opener_index, self.eof_index)


def build_jump_table(tokens: list[Token]) -> JumpTable:
    """Pair block openers with their terminators and collect label positions.

    Nesting is tracked with a stack, so an ENDIF closes the innermost open IF
    even when other blocks are skipped as a whole. A terminator that does not
    match the innermost open block is left unpaired; the grammar walk reports
    it when execution reaches it.

    Args:
        tokens: A materialized token buffer ending with an EOF token.

    Returns:
        The populated JumpTable.

    Raises:
        SemanticError: If the same label is declared at two positions.
    """
    table = JumpTable(eof_index=len(tokens) - 1)
    open_blocks: list[int] = []
    for index, tok in enumerate(tokens):
        if tok.type in _CLOSERS:
            _close_block(tokens, open_blocks, table, index)
        elif tok.type in _OPENERS:
            open_blocks.append(index)
        elif tok.type == TokenType.LABEL:
            _record_label(tokens, table, index)
    return table


# ################
# Implementation
# ################

_OPENERS: frozenset[TokenType] = frozenset({TokenType.IF, TokenType.WHILE})

# Terminator -> the opener it closes.
_CLOSERS: dict[TokenType, TokenType] = {
    TokenType.ENDIF: TokenType.IF,
    TokenType.ENDWHILE: TokenType.WHILE,
}


def _close_block(tokens: list[Token], open_blocks: list[int], table: JumpTable, index: int) -> None:
    """Pair the terminator at *index* with the innermost open block if they match."""
    if not open_blocks:
        return
    opener_index = open_blocks[-1]
    if tokens[opener_index].type == _CLOSERS[tokens[index].type]:
        open_blocks.pop()
        table.block_ends[opener_index] = index


def _record_label(tokens: list[Token], table: JumpTable, index: int) -> None:
    """Record a ``LABEL IDENTIFIER`` declaration at *index*."""
    name_tok = tokens[index + 1] if index + 1 < len(tokens) else None
    if name_tok is None or name_tok.type != TokenType.IDENTIFIER:
        return
    name = str(name_tok.value)
    if name in table.labels and table.labels[name] != index:
        raise duplicate_label_error(name, name_tok.line)
    table.labels[name] = index
