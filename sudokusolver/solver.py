#!/usr/bin/env python

"""
solver.py

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

**Solves a Sudoku grid by propagation and guessing.**

Strategy:

1.  Propagate constraints until nothing changes (see
    :meth:`sudokusolver.grid.Grid.resolve_constraints`).

2.  If unsolved, and no cell is dead, pick the undetermined cell with the
    fewest candidates and guess each of its digits in turn, on a copy of the
    grid, solving each copy recursively. The first copy that is solved is
    copied back into the original grid.

A dead end (a cell with no candidates) is not an error; it just means this
branch of the search has failed.

"""

from enum import Enum
import logging
from typing import List, Optional, Tuple

from sudokusolver.common import N
from sudokusolver.grid import Grid

log = logging.getLogger(__name__)


# =============================================================================
# Outcome
# =============================================================================

class Outcome(Enum):
    SOLVED = "solved"
    DEAD_END = "dead end"
    NEEDS_GUESS = "needs guessing"
    EXHAUSTED = "no guess succeeded"


# =============================================================================
# Observers
# =============================================================================

class ProgressObserver(object):
    """
    Receives progress reports from a :class:`Solver`. Every method does
    nothing by default; override whichever you need.

    ``depth`` is the guess level: 0 for the original grid, 1 for a grid with
    one guess in it, and so on.
    """
    def on_pass(self, grid: Grid, depth: int, iteration: int,
                improved: bool) -> None:
        """
        After each propagation pass.
        """
        pass

    def on_fixpoint(self, grid: Grid, depth: int, n_passes: int,
                    outcome: Outcome) -> None:
        """
        When propagation has stopped making progress.
        """
        pass

    def on_guess(self, grid: Grid, depth: int, row_zb: int, col_zb: int,
                 digit: int) -> None:
        """
        Before trying a guess. ``grid`` is the grid being guessed about.
        """
        pass

    def on_guess_result(self, depth: int, row_zb: int, col_zb: int,
                        digit: int, success: bool) -> None:
        pass

    def on_search_finished(self, grid: Grid, depth: int,
                           outcome: Outcome) -> None:
        """
        After all the guesses needed at one level have been made.
        """
        pass


class LoggingObserver(ProgressObserver):
    """
    Shows the working via the log.
    """
    def on_pass(self, grid: Grid, depth: int, iteration: int,
                improved: bool) -> None:
        log.debug(
            f"Guess level {depth}, iteration {iteration}"
            f"{'' if improved else ' (no improvement)'}. "
            f"Unsolved cells: {grid.n_unknown_cells()}. "
            f"Possible digit assignments: "
            f"{grid.n_possibilities_overall()} "
            f"(target {N * N}). Grid:\n{grid}")

    def on_fixpoint(self, grid: Grid, depth: int, n_passes: int,
                    outcome: Outcome) -> None:
        log.info(f"Guess level {depth}: {n_passes} iterations")
        if outcome == Outcome.SOLVED:
            log.info(f"Guess level {depth}: puzzle solved")
        elif outcome == Outcome.DEAD_END:
            cells = ", ".join(
                f"(row={cell.row_zb + 1}, col={cell.col_zb + 1})"
                for cell in grid.dead_cells())
            log.info(f"Guess level {depth}: not solved (dead end at "
                     f"{cells})")
        else:
            log.info(f"Guess level {depth}: not solved (time to guess)")
            log.debug(f"Possibilities:\n{grid.possibilities_str()}")

    def on_guess(self, grid: Grid, depth: int, row_zb: int, col_zb: int,
                 digit: int) -> None:
        log.info(f"Guess level {depth}: assigning digit {digit} to "
                 f"(row={row_zb + 1}, col={col_zb + 1})")

    def on_guess_result(self, depth: int, row_zb: int, col_zb: int,
                        digit: int, success: bool) -> None:
        if success:
            log.info(f"Guess level {depth} was good")
        else:
            log.info(f"Bad guess at level {depth}; moving on")

    def on_search_finished(self, grid: Grid, depth: int,
                           outcome: Outcome) -> None:
        if outcome == Outcome.EXHAUSTED:
            log.info(f"Guess level {depth}: not solved (no guess "
                     f"succeeded)")


class RecordingObserver(ProgressObserver):
    """
    Keeps the working in memory.
    """
    def __init__(self) -> None:
        self.working = []  # type: List[str]
        self.passes = []  # type: List[Tuple[int, int, bool, int]]
        # ... depth, iteration, improved, possibilities overall
        self.fixpoints = []  # type: List[Tuple[int, int, Outcome]]
        # ... depth, n_passes, outcome
        self.guesses = []  # type: List[Tuple[int, int, int, int]]
        # ... depth, row_zb, col_zb, digit

    def note(self, msg: str) -> None:
        """
        Save some working.
        """
        self.working.append(msg)

    def on_pass(self, grid: Grid, depth: int, iteration: int,
                improved: bool) -> None:
        self.passes.append(
            (depth, iteration, improved, grid.n_possibilities_overall()))

    def on_fixpoint(self, grid: Grid, depth: int, n_passes: int,
                    outcome: Outcome) -> None:
        self.fixpoints.append((depth, n_passes, outcome))
        self.note(f"Guess level {depth}: {outcome.value} after "
                  f"{n_passes} iterations")

    def on_guess(self, grid: Grid, depth: int, row_zb: int, col_zb: int,
                 digit: int) -> None:
        self.guesses.append((depth, row_zb, col_zb, digit))
        self.note(f"Guess level {depth}: assigning digit {digit} to "
                  f"(row={row_zb + 1}, col={col_zb + 1})")

    def on_search_finished(self, grid: Grid, depth: int,
                           outcome: Outcome) -> None:
        self.note(f"Guess level {depth}: {outcome.value}")


# =============================================================================
# Solver
# =============================================================================

class Solver(object):
    """
    Solves a :class:`Grid` in place.
    """
    def __init__(self, observer: ProgressObserver = None,
                 allow_guess: bool = True) -> None:
        """
        Args:
            observer:
                receives progress reports; default is a
                :class:`LoggingObserver`
            allow_guess:
                if ``False``, stop (unsolved) rather than guess
        """
        self.observer = observer if observer is not None else LoggingObserver()  # noqa
        self.allow_guess = allow_guess
        self.outcome = None  # type: Optional[Outcome]
        self.n_passes = 0
        self.n_guesses = 0
        self.max_depth = 0

    def solve(self, grid: Grid) -> bool:
        """
        Solves ``grid``, in place.

        Returns: solved?

        Afterwards, :attr:`outcome` says how things ended.
        """
        self.outcome = None
        self.n_passes = 0
        self.n_guesses = 0
        self.max_depth = 0
        self.outcome = self._solve(grid, depth=0)
        return self.outcome == Outcome.SOLVED

    def propagate(self, grid: Grid, depth: int = 0) -> int:
        """
        Runs propagation passes until one makes no change.

        Returns: the number of passes, including the final one.
        """
        iteration = 0
        improved = True
        while improved:
            improved = grid.resolve_constraints()
            iteration += 1
            self.n_passes += 1
            self.observer.on_pass(grid, depth, iteration, improved)
        return iteration

    @staticmethod
    def classify(grid: Grid) -> Outcome:
        """
        Where has propagation left us?
        """
        if grid.solved():
            return Outcome.SOLVED
        if grid.is_dead_end():
            return Outcome.DEAD_END
        return Outcome.NEEDS_GUESS

    def _solve(self, grid: Grid, depth: int) -> Outcome:
        self.max_depth = max(self.max_depth, depth)
        n_passes = self.propagate(grid, depth)
        outcome = self.classify(grid)
        self.observer.on_fixpoint(grid, depth, n_passes, outcome)
        if outcome != Outcome.NEEDS_GUESS or not self.allow_guess:
            return outcome
        outcome = self._guess(grid, depth)
        self.observer.on_search_finished(grid, depth, outcome)
        return outcome

    def _guess(self, grid: Grid, depth: int) -> Outcome:
        """
        Implements the "guess" method!

        Tries each candidate of the most constrained cell, in ascending
        order, on a copy of the grid. On success, the copy's answer is copied
        back into ``grid``.
        """
        cell = grid.most_constrained_cell()
        r, c = cell.coords
        for d in cell:
            self.n_guesses += 1
            self.observer.on_guess(grid, depth + 1, r, c, d)
            p = grid.clone()
            p[r, c].restrict_to_single(d)
            success = self._solve(p, depth + 1) == Outcome.SOLVED
            self.observer.on_guess_result(depth + 1, r, c, d, success)
            if success:
                grid.copy_from(p)  # copy back from p
                return Outcome.SOLVED
        return Outcome.EXHAUSTED
