"""
MiniJava Command-Line Interface.

Usage:
    minijava samples                     # List bundled sample programs
    minijava check nested-loops          # Type check a sample or a JSON tree
    minijava run program.json            # Type check and evaluate
    minijava fmt operators               # Print as source text
    minijava dump operators -o ops.json  # Write the JSON tree

PROGRAM arguments name a bundled sample or a JSON tree file.
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from minijava import __version__
from minijava.compiler import typecheck
from minijava.compiler.ast_nodes import Statement, Var
from minijava.compiler.evaluator import Evaluator, format_value
from minijava.compiler.samples import SAMPLES, get_sample
from minijava.compiler.serializer import SerializerConfig, serialize
from minijava.compiler.tree_io import dump_program, load_program
from minijava.compiler.type_checker import TypeCheckResult
from minijava.utils.errors import ArithmeticFault, EvaluationError, MiniJavaError

logger = logging.getLogger(__name__)


# =============================================================================
# ANSI Color Codes for Terminal Output
# =============================================================================


class Colors:
    """ANSI escape codes for colored terminal output."""

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    CYAN = "\033[96m"
    GRAY = "\033[90m"
    BOLD = "\033[1m"
    RESET = "\033[0m"

    @classmethod
    def disable(cls) -> None:
        """Disable all colors (for non-TTY output)."""
        cls.RED = ""
        cls.GREEN = ""
        cls.YELLOW = ""
        cls.CYAN = ""
        cls.GRAY = ""
        cls.BOLD = ""
        cls.RESET = ""

    @classmethod
    def enabled(cls) -> bool:
        return bool(cls.RESET)


def _init_colors() -> None:
    """Initialize colors based on terminal capabilities."""
    if not sys.stdout.isatty() or os.environ.get("NO_COLOR"):
        Colors.disable()


_init_colors()


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="minijava",
        description="MiniJava - type check, run and pretty-print MiniJava program trees",
    )

    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log output (-v info, -vv debug)",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("samples", help="List the bundled sample programs")

    check_parser = subparsers.add_parser(
        "check",
        aliases=["tc"],
        help="Type check a program",
    )
    check_parser.add_argument("program", help="Sample name or JSON tree file")
    check_parser.add_argument(
        "--plain",
        action="store_true",
        help="Print plain problem messages instead of coded diagnostics",
    )

    run_parser = subparsers.add_parser(
        "run",
        aliases=["r"],
        help="Type check and evaluate a program",
    )
    run_parser.add_argument("program", help="Sample name or JSON tree file")
    run_parser.add_argument(
        "--strict",
        action="store_true",
        help="Do not evaluate when the type checker reports problems",
    )
    run_parser.add_argument(
        "--show-values",
        action="store_true",
        help="Print the final value of every declared variable",
    )

    fmt_parser = subparsers.add_parser(
        "fmt",
        aliases=["format"],
        help="Print a program as source text",
    )
    fmt_parser.add_argument("program", help="Sample name or JSON tree file")
    fmt_parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="Spaces per indentation level (default: 2)",
    )

    dump_parser = subparsers.add_parser(
        "dump",
        help="Print a program as a JSON tree",
    )
    dump_parser.add_argument("program", help="Sample name or JSON tree file")
    dump_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Write the JSON to this file instead of stdout",
    )

    return parser


def _load(argument: str) -> Optional[Statement]:
    """Resolve a PROGRAM argument, printing an error and returning None on failure."""
    if argument in SAMPLES:
        logger.debug("Using bundled sample '%s'", argument)
        return get_sample(argument)

    path = Path(argument)
    if not path.exists():
        print(
            f"{Colors.RED}Error:{Colors.RESET} '{argument}' is neither a sample nor an existing file",
            file=sys.stderr,
        )
        return None

    try:
        return load_program(path)
    except (MiniJavaError, OSError) as e:
        print(f"{Colors.RED}Error:{Colors.RESET} {e}", file=sys.stderr)
        return None


def _print_problems(result: TypeCheckResult, plain: bool = False) -> None:
    """Print the problems of a type check, as diagnostics when available."""
    if plain or not result.diagnostics:
        for problem in result.problems:
            print(f"  {Colors.RED}error:{Colors.RESET} {problem}")
        return

    print(result.emitter.render_all(use_color=Colors.enabled()))


def cmd_samples(args: argparse.Namespace) -> int:
    """List bundled samples."""
    for name in SAMPLES:
        print(f"  {Colors.CYAN}{name}{Colors.RESET}")
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    """Type check a program."""
    program = _load(args.program)
    if program is None:
        return 1

    result = typecheck(program)
    count = result.emitter.error_count()

    if result.ok:
        print(f"{Colors.GREEN}[ok]{Colors.RESET} Type check passed (0 problems)")
        return 0

    print(f"{Colors.RED}[!!]{Colors.RESET} Type check failed ({count} problem{'s' if count != 1 else ''})")
    print()
    _print_problems(result, plain=args.plain)
    return 1


def cmd_run(args: argparse.Namespace) -> int:
    """Type check and evaluate a program."""
    program = _load(args.program)
    if program is None:
        return 1

    result = typecheck(program)
    if not result.ok:
        count = len(result.problems)
        print(
            f"{Colors.YELLOW}warning:{Colors.RESET} type check reported {count} problem(s)",
            file=sys.stderr,
        )
        for problem in result.problems:
            print(f"  {Colors.GRAY}- {problem}{Colors.RESET}", file=sys.stderr)
        if args.strict:
            return 1

    evaluator = Evaluator(result, stream=sys.stdout)
    try:
        evaluator.run(program)
    except ArithmeticFault as e:
        print(f"{Colors.RED}Arithmetic fault:{Colors.RESET} {e}", file=sys.stderr)
        return 1
    except EvaluationError as e:
        print(f"{Colors.RED}Runtime error:{Colors.RESET} {e}", file=sys.stderr)
        return 1

    if args.show_values:
        print()
        for name in sorted(v.name for v in result.variables):
            value = evaluator.values.get(Var(name))
            print(f"{Colors.BOLD}{name}{Colors.RESET} = {format_value(value)}")

    return 0


def cmd_fmt(args: argparse.Namespace) -> int:
    """Print a program as source text."""
    program = _load(args.program)
    if program is None:
        return 1

    if args.indent < 0:
        print(f"{Colors.RED}Error:{Colors.RESET} --indent must not be negative", file=sys.stderr)
        return 1

    text = serialize(program, SerializerConfig(indent=" " * args.indent))
    sys.stdout.write(text if text.endswith("\n") else text + "\n")
    return 0


def cmd_dump(args: argparse.Namespace) -> int:
    """Print or write a program's JSON tree."""
    program = _load(args.program)
    if program is None:
        return 1

    text = dump_program(program, args.output)
    if args.output is None:
        sys.stdout.write(text)
    else:
        print(f"{Colors.GREEN}Wrote{Colors.RESET} {args.output}")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.no_color:
        Colors.disable()
    _configure_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        return 0

    command_handlers = {
        "samples": cmd_samples,
        "check": cmd_check,
        "tc": cmd_check,
        "run": cmd_run,
        "r": cmd_run,
        "fmt": cmd_fmt,
        "format": cmd_fmt,
        "dump": cmd_dump,
    }

    handler = command_handlers.get(args.command)
    if handler:
        return handler(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
