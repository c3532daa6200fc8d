"""Shared puzzles for the Sudoku solver tests."""

import pytest

EASY_LINES = [
    "53  7    ",
    "6  195   ",
    " 98    6 ",
    "8   6   3",
    "4  8 3  1",
    "7   2   6",
    " 6    28 ",
    "   419  5",
    "    8  79",
]

EASY_SOLUTION = [
    [5, 3, 4, 6, 7, 8, 9, 1, 2],
    [6, 7, 2, 1, 9, 5, 3, 4, 8],
    [1, 9, 8, 3, 4, 2, 5, 6, 7],
    [8, 5, 9, 7, 6, 1, 4, 2, 3],
    [4, 2, 6, 8, 5, 3, 7, 9, 1],
    [7, 1, 3, 9, 2, 4, 8, 5, 6],
    [9, 6, 1, 5, 3, 7, 2, 8, 4],
    [2, 8, 7, 4, 1, 9, 6, 3, 5],
    [3, 4, 5, 2, 8, 6, 1, 7, 9],
]


@pytest.fixture
def easy_text() -> str:
    return "\n".join(EASY_LINES) + "\n"


@pytest.fixture
def easy_solution() -> list:
    return [list(row) for row in EASY_SOLUTION]


@pytest.fixture
def blank_text() -> str:
    return "\n".join([" " * 9] * 9)


@pytest.fixture
def duplicate_in_row_text() -> str:
    lines = [" " * 9] * 9
    lines[0] = "5   5    "
    return "\n".join(lines)


@pytest.fixture
def patterned_values() -> list:
    """A valid complete grid."""
    return [
        [((i * 3 + i // 3 + j) % 9) + 1 for j in range(9)]
        for i in range(9)
    ]
