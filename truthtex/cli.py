import argparse
import logging
import os
import sys
import typing as t

try:
    # gives input() line editing and history where available
    import readline  # noqa: F401
except ImportError:
    readline = None

from .parser import ParseError, parse
from .render import render_table
from .table import TableOptions, build_table

logger = logging.getLogger(__name__)

DEFAULT_PROMPT = ">> "
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_LEVEL_ENV_VAR = "TRUTHTEX_LOG_LEVEL"

# allow deeper parsing
RECURSION_LIMIT = 10000
sys.setrecursionlimit(max(sys.getrecursionlimit(), RECURSION_LIMIT))

TOO_DEEP_MESSAGE = "formula is nested too deeply to tabulate"


def default_log_level() -> str:
    level = os.environ.get(LOG_LEVEL_ENV_VAR, "WARNING").upper()
    return level if level in LOG_LEVELS else "WARNING"


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="truthtex",
        description=(
            "Read fully parenthesized propositional formulas and print their "
            "truth tables as LaTeX tabular markup."
        ),
    )
    parser.add_argument(
        "--no-steps",
        dest="show_steps",
        action="store_false",
        help="only show the value of the whole formula, not its sub-formulas",
    )
    parser.add_argument("--prompt", default=DEFAULT_PROMPT)
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=default_log_level(),
    )
    return parser


def process_line(line: str, options: TableOptions) -> str:
    """
    Parse, tabulate and render one formula.

    The table is followed by a LaTeX comment classifying the formula.
    Raises ParseError.
    """
    table = build_table(parse(line), options)
    return f"{render_table(table)}\n% {table.classification}"


def run_repl(
    options: TableOptions,
    prompt: str = DEFAULT_PROMPT,
    read: t.Callable[[str], str] = input,
    write: t.Callable[[str], None] = print,
) -> None:
    while True:
        try:
            line = read(prompt)
        except (EOFError, KeyboardInterrupt):
            logger.debug("input closed, leaving the prompt loop")
            return
        try:
            output = process_line(line, options)
        except ParseError as err:
            logger.info("rejected %r: %s", line, err)
            write(f"{err}\n{err.pointer()}")
            continue
        except RecursionError:
            logger.warning(
                "rejected a formula of %d characters as too deep", len(line)
            )
            write(TOO_DEEP_MESSAGE)
            continue
        except KeyboardInterrupt:
            logger.debug("interrupted while tabulating, leaving the prompt loop")
            return
        write(output)


def main(argv: t.Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    options = TableOptions(show_steps=args.show_steps)
    logger.debug("starting prompt with %s", options)
    run_repl(options, prompt=args.prompt)
    return 0
