# Copyright 2026 Teeny Contributors
# SPDX-License-Identifier: Apache-2.0

"""Teeny: a minimal imperative language with a C code generator and an evaluator."""

__version__ = "0.1.0"
