# Copyright 2026 Teeny Contributors
# SPDX-License-Identifier: Apache-2.0

"""Direct execution of Teeny programs over a materialized token buffer."""

from teeny.interpreter.evaluator import Evaluator, evaluate, parse_input_number
from teeny.interpreter.jumps import JumpTable, build_jump_table

__all__ = [
    "Evaluator",
    "evaluate",
    "parse_input_number",
    "JumpTable",
    "build_jump_table",
]
