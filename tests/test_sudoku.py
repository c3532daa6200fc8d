"""Tests for the command-line entry point."""

import io
import logging
import sys

import pytest

from sudokusolver import sudoku
from sudokusolver.common import EXIT_FAILURE, EXIT_SUCCESS


def _run(monkeypatch, *argv: str, log_levels: list = None) -> int:
    # The real root logger setup would remove the pytest capture handler.
    levels = log_levels if log_levels is not None else []
    monkeypatch.setattr(sudoku, "main_only_quicksetup_rootlogger",
                        lambda level: levels.append(level))
    monkeypatch.setattr(sys, "argv", ["sudokusolver", *argv])
    with pytest.raises(SystemExit) as excinfo:
        sudoku.cli()
    return excinfo.value.code


def test_solve_file(monkeypatch, tmp_path, easy_text, caplog):
    caplog.set_level(logging.INFO)
    puzzle = tmp_path / "easy.txt"
    puzzle.write_text(easy_text)

    assert _run(monkeypatch, "solve", str(puzzle)) == EXIT_SUCCESS
    assert "|534|678|912|" in caplog.text


def test_solve_from_stdin(monkeypatch, easy_text):
    monkeypatch.setattr(sys, "stdin", io.StringIO(easy_text))

    assert _run(monkeypatch, "solve", "-") == EXIT_SUCCESS


def test_unsolvable_file_fails(monkeypatch, tmp_path, duplicate_in_row_text,
                               caplog):
    puzzle = tmp_path / "bad.txt"
    puzzle.write_text(duplicate_in_row_text)

    assert _run(monkeypatch, "solve", str(puzzle)) == EXIT_FAILURE
    assert "Unable to solve! (dead end)" in caplog.text


def test_noguess_fails_when_guessing_needed(monkeypatch, tmp_path,
                                            blank_text, caplog):
    puzzle = tmp_path / "blank.txt"
    puzzle.write_text(blank_text)

    assert _run(monkeypatch, "solve", str(puzzle), "--noguess") == EXIT_FAILURE
    assert "Would need to guess, but prohibited" in caplog.text


def test_malformed_file_fails_before_solving(monkeypatch, tmp_path,
                                             easy_text, caplog):
    caplog.set_level(logging.INFO)
    lines = easy_text.splitlines()
    lines[0] = "53  7  "
    puzzle = tmp_path / "short.txt"
    puzzle.write_text("\n".join(lines))

    assert _run(monkeypatch, "solve", str(puzzle)) == EXIT_FAILURE
    assert "Line 1 has wrong length" in caplog.text
    assert "Solving:" not in caplog.text


def test_demo(monkeypatch):
    assert _run(monkeypatch, "demo") == EXIT_SUCCESS


def test_no_command(monkeypatch, capsys):
    assert _run(monkeypatch) == EXIT_FAILURE
    assert "Must specify command" in capsys.readouterr().out


def test_verbose_sets_debug_logging(monkeypatch):
    levels = []

    assert _run(monkeypatch, "--verbose", "demo",
                log_levels=levels) == EXIT_SUCCESS
    assert levels == [logging.DEBUG]
