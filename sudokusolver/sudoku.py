#!/usr/bin/env python

"""
sudoku.py

===============================================================================

    Copyright (C) 2019-2019 Rudolf Cardinal (rudolf@pobox.com).

    This is free software: you can redistribute it and/or modify
    it under the terms of the GNU General Public License as published by
    the Free Software Foundation, either version 3 of the License, or
    (at your option) any later version.

    This software is distributed in the hope that it will be useful,
    but WITHOUT ANY WARRANTY; without even the implied warranty of
    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
    GNU General Public License for more details.

    You should have received a copy of the GNU General Public License
    along with this software. If not, see <http://www.gnu.org/licenses/>.

===============================================================================

**Solves Sudoku puzzles from the command line.**

Puzzle format: nine lines of nine characters, a digit for a known cell and a
space for an unknown one. Lines starting with ``#`` are comments.

"""

import argparse
import logging
import sys
from typing import Tuple

from cardinal_pythonlib.argparse_func import RawDescriptionArgumentDefaultsHelpFormatter  # noqa
from cardinal_pythonlib.logs import main_only_quicksetup_rootlogger

from sudokusolver.common import (
    EXIT_FAILURE,
    EXIT_SUCCESS,
    NEWLINE,
    run_guard,
)
from sudokusolver.grid import Grid
from sudokusolver.solver import Outcome, ProgressObserver, Solver

log = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

# Written as a list so that trailing spaces survive editors.
DEMO_SUDOKU_1 = NEWLINE.join([
    "# Coton 54, Coton Community News Dec 2019-Jan 2020",
    "         ",
    "  23 145 ",
    " 1     6 ",
    " 47 5 38 ",
    "   7 3   ",
    " 36   14 ",
    " 7     9 ",
    " 914 56  ",
    "     9   ",
])

STDIN_FILENAME = "-"


# =============================================================================
# Solving text
# =============================================================================

def solve_text(text: str,
               observer: ProgressObserver = None,
               allow_guess: bool = True) -> Tuple[bool, Grid]:
    """
    Reads a puzzle in text form and solves it.

    Returns:
        tuple: ``solved, grid``

    Raises:
        :exc:`sudokusolver.common.MalformedPuzzleError` for bad input
    """
    grid = Grid.from_text(text)
    solver = Solver(observer=observer, allow_guess=allow_guess)
    solved = solver.solve(grid)
    return solved, grid


# =============================================================================
# main
# =============================================================================

def main() -> None:
    """
    Command-line entry point.
    """
    cmd_demo = "demo"
    cmd_solve = "solve"

    parser = argparse.ArgumentParser(
        formatter_class=RawDescriptionArgumentDefaultsHelpFormatter,
        description=(
            f"Solve Sudoku puzzles by constraint propagation, guessing where "
            f"necessary. Format is (spaces for unknown cells):\n\n"
            f"{DEMO_SUDOKU_1}"
        )
    )
    parser.add_argument(
        "--verbose", action="store_true",
        help="Be verbose (show every propagation pass)")
    subparsers = parser.add_subparsers(
        dest="command",
        help="Append --help for more help")

    parser_solve = subparsers.add_parser(cmd_solve, help="Solve from a file")
    parser_solve.add_argument(
        "filename", type=str,
        help=f"Puzzle filename to read, or {STDIN_FILENAME!r} for stdin. "
             f"Must contain text in format as above.")
    parser_solve.add_argument(
        "--noguess", action="store_true", help="Prevent guessing")

    parser_demo = subparsers.add_parser(cmd_demo, help="Run demo")
    parser_demo.add_argument(
        "--noguess", action="store_true", help="Prevent guessing")

    args = parser.parse_args()
    main_only_quicksetup_rootlogger(level=logging.DEBUG if args.verbose
                                    else logging.INFO)

    if not args.command:
        print("Must specify command")
        sys.exit(EXIT_FAILURE)
    if args.command == cmd_demo:
        string_version = DEMO_SUDOKU_1
    elif args.filename == STDIN_FILENAME:
        log.info("Reading from stdin")
        string_version = sys.stdin.read()
    else:
        log.info(f"Reading {args.filename}")
        with open(args.filename, "rt") as f:
            string_version = f.read()

    grid = Grid.from_text(string_version)
    log.info(f"Solving:\n{grid}")
    solver = Solver(allow_guess=not args.noguess)
    solved = solver.solve(grid)
    log.info(f"{solver.n_passes} propagation passes, "
             f"{solver.n_guesses} guesses, "
             f"maximum guess level {solver.max_depth}")
    if not solved:
        if solver.outcome == Outcome.NEEDS_GUESS:
            log.error("Would need to guess, but prohibited")
        else:
            log.error(f"Unable to solve! ({solver.outcome.value})")
        log.info(f"Possibilities:\n{grid.possibilities_str()}")
        sys.exit(EXIT_FAILURE)
    log.info(f"Answer:\n{grid}")
    sys.exit(EXIT_SUCCESS)


def cli() -> None:
    """
    Installed console script.
    """
    run_guard(main)


# =============================================================================
# Command-line entry point
# =============================================================================

if __name__ == "__main__":
    cli()
