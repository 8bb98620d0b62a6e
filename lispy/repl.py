"""Interactive read-eval-print loop for Lispy.

Each line is parsed, evaluated and printed on its own. Syntax errors are
reported and the loop carries on with the next line.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TextIO

from lispy import __version__
from lispy.config import get_int_bits, get_log_level, get_prompt
from lispy.errors import LispyConfigError, LispySyntaxError
from lispy.interpreter import Interpreter

logger = logging.getLogger(__name__)


def run_line(interp: Interpreter, line: str, out: TextIO) -> None:
    try:
        out.write(interp.eval_to_string(line))
    except LispySyntaxError as e:
        out.write(str(e))
    except RecursionError:
        # Deeply chained `eval` calls.
        logger.debug("recursion limit reached evaluating %.60r", line)
        out.write("Error: expression nested too deeply")
    out.write("\n")


def repl(interp: Interpreter, prompt: str, out: TextIO = sys.stdout) -> None:
    out.write(f"Lispy Version {__version__}\n")
    out.write("Press Ctrl+c to Exit\n\n")
    while True:
        try:
            line = input(prompt)
        except (EOFError, KeyboardInterrupt):
            out.write("\n")
            return
        if not line.strip():
            continue
        run_line(interp, line, out)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog='lispy',
        description='Lispy - evaluate S-expressions and Q-expressions interactively'
    )
    parser.add_argument('-c', '--command', help='Evaluate CODE, print the result and exit')
    parser.add_argument('--prompt', help='Prompt shown before each input line')
    parser.add_argument('--debug', action='store_true',
                        help='Enable debug logging, including a dump of each parse tree')
    args = parser.parse_args(argv)

    # Settings are validated once, before any input is read.
    try:
        log_level = get_log_level()
        get_int_bits()
        prompt = args.prompt if args.prompt is not None else get_prompt()
    except LispyConfigError as e:
        print(f"lispy: {e}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=logging.DEBUG if args.debug else log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )

    interp = Interpreter()
    if args.command is not None:
        run_line(interp, args.command, sys.stdout)
        return 0

    try:
        import readline  # noqa: F401  line editing and history for input()
    except ImportError:
        logger.debug("readline unavailable; continuing without line editing")

    repl(interp, prompt)
    return 0


if __name__ == '__main__':
    sys.exit(main())
