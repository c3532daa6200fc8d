#!/usr/bin/env python

"""
grid.py

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

**Sudoku grid: cells, candidate sets, neighbours, and one propagation pass.**

Each cell holds the set of digits still possible for it. A cell knows its own
coordinates but not its grid; everything that needs the rest of the grid
(neighbours, the "hidden single" test, propagation) lives on :class:`Grid`.

Neighbours are never stored. They are generated from coordinates on demand,
so cloning a grid only copies 81 small sets.

"""

import logging
from typing import (
    Generator, Iterable, Iterator, List, Optional, Sequence, Set, Tuple,
)

from sudokusolver.common import (
    BLANK,
    DIGITS,
    DISPLAY_UNKNOWN,
    HASH,
    MalformedPuzzleError,
    N,
    NEWLINE,
    RANK,
    SPACE,
)

log = logging.getLogger(__name__)

Coords = Tuple[int, int]  # row_zb, col_zb

DIGIT_CHARS = "".join(str(d) for d in DIGITS)


# =============================================================================
# Box
# =============================================================================

class Box(object):
    """
    Represents a 3x3 box within the Sudoku grid.
    """
    def __init__(self, box_zb: int) -> None:
        """
        Boxes are numbered 0-8, left to right, then top to bottom.

        Args:
            box_zb: box number, as above; zero-based
        """
        assert 0 <= box_zb < N, (
            f"box_zb was {box_zb}; must be in range 0 to {N - 1} inclusive"
        )
        self.box_zb = box_zb

    def __eq__(self, other: "Box") -> bool:
        return self.box_zb == other.box_zb

    @property
    def boxrow(self) -> int:
        """
        Zero-based row number of the box (not its cells).
        """
        return self.box_zb // RANK

    @property
    def boxcol(self) -> int:
        """
        Zero-based column number of the box (not its cells).
        """
        return self.box_zb % RANK

    def top_left_cell(self) -> Coords:
        """
        Returns ``row_zb, col_zb`` for the top-left cell in the 3x3 box.
        """
        return self.boxrow * RANK, self.boxcol * RANK

    @classmethod
    def containing(cls, row_zb: int, col_zb: int) -> "Box":
        """
        Returns the box containing this cell.
        """
        assert 0 <= row_zb < N
        assert 0 <= col_zb < N
        return cls(box_zb=(row_zb // RANK) * RANK + col_zb // RANK)

    def gen_cells(self) -> Generator[Coords, None, None]:
        """
        Generates ``(row_zb, col_zb)`` tuples for all the cells in this box.
        """
        row_min, col_min = self.top_left_cell()
        for r in range(row_min, row_min + RANK):
            for c in range(col_min, col_min + RANK):
                yield r, c


# =============================================================================
# Cell
# =============================================================================

class Cell(object):
    """
    The candidate digits for one position in the grid.

    - one candidate: solved;
    - no candidates: dead (a contradiction);
    - two or more: undetermined.

    Iterating over a cell yields its candidates in ascending order.
    """
    def __init__(self, row_zb: int, col_zb: int,
                 candidates: Iterable[int] = DIGITS) -> None:
        self._row_zb = row_zb
        self._col_zb = col_zb
        self.candidates = set(candidates)  # type: Set[int]

    def __repr__(self) -> str:
        return (
            f"Cell(row={self._row_zb + 1}, col={self._col_zb + 1}, "
            f"candidates={sorted(self.candidates)})"
        )

    def __len__(self) -> int:
        return len(self.candidates)

    def __contains__(self, digit: int) -> bool:
        return digit in self.candidates

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self.candidates))

    @property
    def row_zb(self) -> int:
        return self._row_zb

    @property
    def col_zb(self) -> int:
        return self._col_zb

    @property
    def coords(self) -> Coords:
        return self._row_zb, self._col_zb

    @property
    def solved(self) -> bool:
        return len(self.candidates) == 1

    @property
    def dead(self) -> bool:
        return not self.candidates

    @property
    def value(self) -> Optional[int]:
        """
        The digit, if solved; otherwise ``None``.
        """
        if len(self.candidates) != 1:
            return None
        return next(iter(self.candidates))

    def copy(self) -> "Cell":
        return Cell(self._row_zb, self._col_zb, self.candidates)

    def remove(self, digit: int) -> bool:
        """
        Eliminates a digit as a possibility.

        Returns: improved?
        """
        if digit not in self.candidates:
            return False
        self.candidates.discard(digit)
        return True

    def restrict_to_single(self, digit: int) -> bool:
        """
        Makes ``digit`` the only candidate, whether or not it was one before
        (which is how a guess is committed).

        Returns: changed?
        """
        if self.candidates == {digit}:
            return False
        self.candidates.clear()
        self.candidates.add(digit)
        return True


# =============================================================================
# Grid
# =============================================================================

class Grid(object):
    """
    A 9x9 array of :class:`Cell` objects, owning all of them.
    """
    def __init__(self, other: "Grid" = None) -> None:
        """
        Initialize with "everything is possible", or copy from another.
        """
        if other is not None:
            self._cells = [
                [
                    other._cells[r][c].copy() for c in range(N)
                ] for r in range(N)
            ]  # type: List[List[Cell]]
        else:
            self._cells = [
                [
                    Cell(r, c) for c in range(N)
                ] for r in range(N)
            ]
        # ... index as: self._cells[row_zb][col_zb]

    def clone(self) -> "Grid":
        return self.__class__(other=self)

    # -------------------------------------------------------------------------
    # Setup
    # -------------------------------------------------------------------------

    @classmethod
    def from_values(cls,
                    values: Sequence[Sequence[Optional[int]]]) -> "Grid":
        """
        Creates a grid from starting values, as a list of rows. Each value is
        a digit from 1 to 9, or ``None`` for a blank cell.
        """
        if len(values) != N:
            raise MalformedPuzzleError(
                f"Must have {N} rows; found {len(values)}")
        grid = cls()
        for r, row in enumerate(values):
            if len(row) != N:
                raise MalformedPuzzleError(
                    f"Row {r + 1} has {len(row)} values; should be {N}")
            for c, value in enumerate(row):
                if value is None:
                    continue
                if type(value) is not int or value not in DIGITS:
                    raise MalformedPuzzleError(
                        f"{value!r} is not valid "
                        f"(row {r + 1}, column {c + 1})")
                grid._cells[r][c].restrict_to_single(value)
        n_distinct = len(set(x
                             for rowlist in values
                             for x in rowlist
                             if x is not None))
        if n_distinct < N - 1:
            log.warning(
                f"Not a well-formed Sudoku: {n_distinct} distinct initial "
                f"values given, but need {N - 1} to be well-formed.")
            # http://pi.math.cornell.edu/~mec/Summer2009/Mahmood/More.html
        return grid

    @classmethod
    def from_text(cls, text: str) -> "Grid":
        """
        Creates a grid from its text form.

        - Exactly 9 lines of exactly 9 characters.
        - Use digits 1-9 for known cells, and a space for an unknown cell.
        - Lines beginning with ``#`` are comments.
        - Initial/terminal empty lines are ignored; any other empty line is
          an error.
        """
        lines = text.splitlines()
        lines = [line for line in lines if not line.startswith(HASH)]
        while lines and not lines[0]:
            lines.pop(0)
        while lines and not lines[-1]:
            lines.pop()
        if len(lines) != N:
            raise MalformedPuzzleError(
                f"Must have {N} lines; found {len(lines)}")

        values = []  # type: List[List[Optional[int]]]
        for r, line in enumerate(lines):
            if not line:
                raise MalformedPuzzleError(f"Line {r + 1} is blank")
            if len(line) != N:
                raise MalformedPuzzleError(
                    f"Line {r + 1} has wrong length: should be {N}, "
                    f"but is {len(line)} ({line!r})")
            row = []  # type: List[Optional[int]]
            for c, char in enumerate(line):
                if char == BLANK:
                    row.append(None)
                elif char in DIGIT_CHARS:
                    row.append(int(char))
                else:
                    raise MalformedPuzzleError(
                        f"{char!r} is not valid "
                        f"(line {r + 1}, column {c + 1})")
            values.append(row)
        return cls.from_values(values)

    # -------------------------------------------------------------------------
    # Access
    # -------------------------------------------------------------------------

    def __getitem__(self, coords: Coords) -> Cell:
        row_zb, col_zb = coords
        return self._cells[row_zb][col_zb]

    @staticmethod
    def gen_coords() -> Generator[Coords, None, None]:
        """
        All cell coordinates, in row-major order.
        """
        for r in range(N):
            for c in range(N):
                yield r, c

    def gen_cells(self) -> Generator[Cell, None, None]:
        """
        All cells, in row-major order.
        """
        for r, c in self.gen_coords():
            yield self._cells[r][c]

    # -------------------------------------------------------------------------
    # Neighbours
    # -------------------------------------------------------------------------

    @staticmethod
    def gen_row_neighbours(row_zb: int,
                           col_zb: int) -> Generator[Coords, None, None]:
        """
        The other cells in the same row.
        """
        for c in range(N):
            if c != col_zb:
                yield row_zb, c

    @staticmethod
    def gen_col_neighbours(row_zb: int,
                           col_zb: int) -> Generator[Coords, None, None]:
        """
        The other cells in the same column.
        """
        for r in range(N):
            if r != row_zb:
                yield r, col_zb

    @staticmethod
    def gen_box_neighbours(row_zb: int,
                           col_zb: int) -> Generator[Coords, None, None]:
        """
        The other cells in the same 3x3 box.
        """
        for r, c in Box.containing(row_zb, col_zb).gen_cells():
            if r != row_zb or c != col_zb:
                yield r, c

    @classmethod
    def gen_all_neighbours(cls, row_zb: int,
                           col_zb: int) -> Generator[Coords, None, None]:
        """
        Every cell sharing a row, column or box with this one, each once.
        """
        yield from cls.gen_row_neighbours(row_zb, col_zb)
        yield from cls.gen_col_neighbours(row_zb, col_zb)
        for r, c in cls.gen_box_neighbours(row_zb, col_zb):
            # Those sharing our row or column have been done already.
            if r != row_zb and c != col_zb:
                yield r, c

    # -------------------------------------------------------------------------
    # Computations
    # -------------------------------------------------------------------------

    def has_unique_placement(self, row_zb: int, col_zb: int,
                             digit: int) -> bool:
        """
        Is this cell the only place left for ``digit`` in its row, its column,
        or its box? ("Hidden single".)
        """
        if digit not in self._cells[row_zb][col_zb]:
            return False
        for gen_group in (self.gen_row_neighbours,
                          self.gen_col_neighbours,
                          self.gen_box_neighbours):
            if all(digit not in self._cells[r][c]
                   for r, c in gen_group(row_zb, col_zb)):
                return True
        return False

    def remove_from_all_neighbours(self, row_zb: int, col_zb: int,
                                   digit: int) -> bool:
        """
        Eliminates ``digit`` from every cell in the same row, column and box.

        Returns: improved?
        """
        improved = False
        for r, c in self.gen_all_neighbours(row_zb, col_zb):
            improved = self._cells[r][c].remove(digit) or improved
        return improved

    def resolve_constraints(self) -> bool:
        """
        One propagation pass over all cells, in row-major order.

        - Where a cell is known, eliminate that digit from its row, column,
          and 3x3 box.
        - Otherwise, where the cell is the only location left for a digit in
          its row, column, or box, assign it.

        Returns: improved?
        """
        improved = False
        for cell in self.gen_cells():
            r, c = cell.coords
            if cell.solved:
                improved = self.remove_from_all_neighbours(
                    r, c, cell.value) or improved
                continue
            for d in DIGITS:
                if self.has_unique_placement(r, c, d):
                    improved = cell.restrict_to_single(d) or improved
        return improved

    def copy_from(self, other: "Grid") -> None:
        """
        Sets each of our cells to the solved value of the corresponding cell
        in ``other``, which must be solved.
        """
        for cell in self.gen_cells():
            value = other[cell.coords].value
            assert value is not None, (
                f"Copying from an unsolved cell: {other[cell.coords]!r}")
            cell.restrict_to_single(value)

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    def solved(self) -> bool:
        """
        Are we there yet?
        """
        return all(cell.solved for cell in self.gen_cells())

    def dead_cells(self) -> List[Cell]:
        """
        Cells with no candidates left.
        """
        return [cell for cell in self.gen_cells() if cell.dead]

    def is_dead_end(self) -> bool:
        return any(cell.dead for cell in self.gen_cells())

    def most_constrained_cell(self) -> Optional[Cell]:
        """
        The undetermined cell with the fewest candidates; the first in
        row-major order if several tie. ``None`` if there is no undetermined
        cell.
        """
        best = None  # type: Optional[Cell]
        for cell in self.gen_cells():
            if len(cell) > 1 and (best is None or len(cell) < len(best)):
                best = cell
        return best

    def n_unknown_cells(self) -> int:
        """
        Number of unsolved cells. Maximum is 81.
        """
        return sum(1 for cell in self.gen_cells() if not cell.solved)

    def n_possibilities_overall(self) -> int:
        """
        Number of row/cell/digit possibilities overall.
        Minimum is n^2 (solved). Maximum is n^3.
        """
        return sum(len(cell) for cell in self.gen_cells())

    def values(self) -> List[List[Optional[int]]]:
        """
        Solved digits as a list of rows, with ``None`` where unsolved.
        """
        return [
            [
                self._cells[r][c].value for c in range(N)
            ] for r in range(N)
        ]

    def snapshot(self) -> Tuple[Tuple[frozenset, ...], ...]:
        """
        An immutable copy of every candidate set, for comparison.
        """
        return tuple(
            tuple(frozenset(self._cells[r][c].candidates) for c in range(N))
            for r in range(N)
        )

    def is_valid_solution(self) -> bool:
        """
        Is every cell solved, with each digit once per row, column and box?
        """
        if not self.solved():
            return False
        full = set(DIGITS)
        for i in range(N):
            row = set(self._cells[i][c].value for c in range(N))
            col = set(self._cells[r][i].value for r in range(N))
            box = set(self._cells[r][c].value
                      for r, c in Box(i).gen_cells())
            if row != full or col != full or box != full:
                return False
        return True

    # -------------------------------------------------------------------------
    # Visuals
    # -------------------------------------------------------------------------

    def __str__(self) -> str:
        """
        Bordered grid, with solved digits shown and everything else blank.
        """
        border = "+" + ("-" * RANK + "+") * RANK
        lines = [border]
        for r in range(N):
            line = "|"
            for c in range(N):
                value = self._cells[r][c].value
                line += str(value) if value is not None else BLANK
                if c % RANK == RANK - 1:
                    line += "|"
            lines.append(line)
            if r % RANK == RANK - 1:
                lines.append(border)
        return NEWLINE.join(lines)

    @staticmethod
    def _pstr_row_col(row_zb: int, col_zb: int, digit: int) -> Coords:
        """
        For :meth:`possibilities_str`: ``row, col`` (``y, x``) coordinates.
        """
        t = RANK
        x_base = col_zb * (t + 1)
        y_base = row_zb * (t + 1)
        x_offset = (digit - 1) % t
        y_offset = (digit - 1) // t
        return (y_base + y_offset), (x_base + x_offset)

    def possibilities_str(self) -> str:
        """
        Returns a visual representation of every cell's candidates, each cell
        as a 3x3 block of digits.
        """
        pn = N * 4 - 1
        t = RANK

        # Create grid of characters.
        # Not [[SPACE] * pn] * pn, which would share one list between rows.
        strings = [[SPACE] * pn for _ in range(pn)]  # type: List[List[str]]

        # Prettify
        cell_boundaries = ((t + 1) * t - 1, (t + 1) * (t * 2) - 1)
        for r in cell_boundaries:
            for i in range(pn):
                strings[r][i] = "-"
        for c in cell_boundaries:
            for i in range(pn):
                strings[i][c] = "|"
        for r in cell_boundaries:
            for c in cell_boundaries:
                strings[r][c] = "+"

        # Data
        for cell in self.gen_cells():
            for d in DIGITS:
                y, x = self._pstr_row_col(cell.row_zb, cell.col_zb, d)
                strings[y][x] = str(d) if d in cell else DISPLAY_UNKNOWN
        return NEWLINE.join("".join(line) for line in strings)
