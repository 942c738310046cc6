import argparse
import logging
import sys

from colorama import just_fix_windows_console

from .parser import try_compile
from .truth_table import (
    MAX_VARIABLES,
    TooManyVariables,
    format_truth_table,
    generate_truth_table,
)

log = logging.getLogger(__name__)


def build_arg_parser():
    ap = argparse.ArgumentParser(
        prog="boolexpr",
        description="Print the truth table of a boolean expression using ! && || ^ and parentheses",
    )
    ap.add_argument(
        "expression",
        nargs="?",
        help="expression to evaluate, read from stdin when omitted",
    )
    ap.add_argument(
        "--format",
        choices=("table", "csv", "frame"),
        default="table",
        help="output format (default: table)",
    )
    ap.add_argument(
        "--no-color", action="store_true", help="plain text error messages"
    )
    ap.add_argument(
        "--workers",
        type=int,
        default=None,
        help="evaluate assignments on this many threads",
    )
    ap.add_argument(
        "--max-variables",
        type=int,
        default=MAX_VARIABLES,
        help=f"refuse expressions with more variables (default: {MAX_VARIABLES})",
    )
    ap.add_argument("-v", "--verbose", action="count", default=0)
    return ap


def render(expression, fmt, workers, max_variables):
    if fmt == "table":
        return format_truth_table(expression, workers=workers, max_variables=max_variables)

    df = generate_truth_table(expression, workers=workers, max_variables=max_variables)
    if fmt == "csv":
        return df.to_csv(index=False).rstrip("\n")
    return df.to_string(index=False)


def main(argv=None, stdin=None, stdout=None, stderr=None):
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    args = build_arg_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose > 1 else logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=stderr,
    )

    color = not args.no_color and stderr.isatty()
    if color:
        just_fix_windows_console()

    source = args.expression if args.expression is not None else stdin.readline()
    source = source.strip()
    log.info("compiling %r", source)

    expression = try_compile(source, stream=stderr, color=color)
    if expression is None:
        return 1

    log.info("variables: %s", ", ".join(expression.variables))

    try:
        print(render(expression, args.format, args.workers, args.max_variables), file=stdout)
    except TooManyVariables as e:
        print(f"error: {e}", file=stderr)
        return 1
    return 0
