# Copyright 2026 Teeny Contributors
# SPDX-License-Identifier: Apache-2.0

"""Output buffers for generated C code."""

# ###############
# Public Interface
# ###############


class CodeEmitter:
    """Accumulates generated code in two append-only buffers.

    The header holds the preamble (includes, the entry point and variable
    declarations); the body holds the translated statements. The final code
    is the header followed by the body.
    """

    def __init__(self) -> None:
        self._header: list[str] = []
        self._body: list[str] = []

    @property
    def header(self) -> str:
        return "".join(self._header)

    @property
    def body(self) -> str:
        return "".join(self._body)

    def emit(self, code: str) -> None:
        """Append *code* to the body without a line break."""
        self._body.append(code)

    def emit_line(self, code: str) -> None:
        """Append *code* to the body and terminate the line."""
        self._body.append(code + "\n")

    def header_line(self, code: str) -> None:
        """Append a full line to the header."""
        self._header.append(code + "\n")

    def create_code(self) -> str:
        """Return the complete generated code."""
        return self.header + self.body
