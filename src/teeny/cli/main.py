# Copyright 2026 Teeny Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the Teeny command-line interface."""

import argparse
import sys
from pathlib import Path

from teeny.compiler.build import CompilerError, compile_file, read_source
from teeny.compiler.grammar import ParseError, SemanticError
from teeny.compiler.scanner import LexerError
from teeny.interpreter.evaluator import evaluate
from teeny.project.config import ConfigError, ProjectConfig, find_project_config, load_project_config

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the Teeny CLI."""
    parser = argparse.ArgumentParser(
        prog="teeny",
        description="Teeny: compile to C or interpret Teeny programs",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # compile subcommand
    compile_parser = subparsers.add_parser(
        "compile",
        help="Translate a Teeny program into C",
        description="Translate a Teeny source file into a C source file.",
    )
    compile_parser.add_argument("source", help="Teeny source file to compile")
    compile_parser.add_argument(
        "--output",
        "-o",
        default=None,
        help="Output path for the generated C code (default: from config, else out/out.c)",
    )
    compile_parser.add_argument(
        "--config",
        default=None,
        help="Project configuration file (default: .teeny.yaml in the current directory)",
    )

    # run subcommand
    run_parser = subparsers.add_parser(
        "run",
        help="Execute a Teeny program",
        description="Execute a Teeny source file directly, reading INPUT from the console.",
    )
    run_parser.add_argument("source", help="Teeny source file to execute")

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "compile":
        return _cmd_compile(args)
    if args.command == "run":
        return _cmd_run(args)
    return 0


def _load_config(args: argparse.Namespace) -> ProjectConfig:
    """Load the configuration named by --config, or the one in the current directory."""
    if args.config is not None:
        return load_project_config(Path(args.config))
    return find_project_config(Path.cwd())


def _cmd_compile(args: argparse.Namespace) -> int:
    """Handle the compile subcommand."""
    print("Teeny Tiny Compiler")

    try:
        config = _load_config(args)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    output_path = Path(args.output if args.output is not None else config.output_path)
    try:
        code = compile_file(Path(args.source), output_path, print_precision=config.print_precision)
    except CompilerError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print("Parsing completed.")
    if config.echo_code:
        print(code, end="")
    print(f"Wrote output to {output_path}")
    return 0


def _cmd_run(args: argparse.Namespace) -> int:
    """Handle the run subcommand."""
    print("Teeny Tiny Interpreter")

    try:
        source = read_source(Path(args.source))
    except CompilerError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    try:
        evaluate(source)
    except (LexerError, ParseError, SemanticError) as exc:
        print(f"Error: {args.source}: {exc}", file=sys.stderr)
        return 1

    print("Parsing completed.")
    return 0
