"""Command line tests, driven through Typer's test runner."""

from __future__ import annotations

import io
import logging
import random
from pathlib import Path

import pytest
from rich.console import Console
from typer.testing import CliRunner

from bishopswap.engine.gamegenerator import GameGenerator
from bishopswap.engine.gamesolver import BreadthFirstSearch
from bishopswap.engine.gamestate import TwoPhaseMove
from bishopswap.frontend.cli.app import LastMoveTracker, print_solution, render_board
from bishopswap.main import _solve_in_background, _start_board, app
from bishopswap.models.board import Board, Position

runner = CliRunner()


@pytest.fixture
def layout_file(tmp_path: Path):
    def write(text: str) -> Path:
        path = tmp_path / "layout.txt"
        path.write_text(text)
        return path

    return write


def test_solve_prints_solution() -> None:
    result = runner.invoke(app, ["solve"])
    assert result.exit_code == 0, result.output
    assert "Start" in result.output
    assert "Solved in" in result.output


def test_solve_unsolvable_layout_exits_1(layout_file) -> None:
    path = layout_file("B..B\n....\n....\n....\n.W.W\n")
    result = runner.invoke(app, ["solve", "--layout", str(path)])
    assert result.exit_code == 1
    assert "No solution found" in result.output


def test_solve_bad_layout(layout_file) -> None:
    path = layout_file("B..B\n")
    result = runner.invoke(app, ["solve", "--layout", str(path)])
    assert result.exit_code == 2


def test_moves_lists_legal_moves() -> None:
    result = runner.invoke(app, ["moves"])
    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert "(0,1) -> (1,2)" in lines
    assert "(4,3) -> (3,2)" in lines
    assert "(0,1) -> (2,3)" not in lines


def test_bad_log_level() -> None:
    result = runner.invoke(app, ["--log-level", "LOUD", "moves"])
    assert result.exit_code == 2


def test_play_quits() -> None:
    result = runner.invoke(app, ["play"], input="q\n")
    assert result.exit_code == 0, result.output
    assert "Bishop Swap" in result.output


def test_play_moves_a_bishop() -> None:
    result = runner.invoke(app, ["play"], input="0 1\n1 2\nq\n")
    assert result.exit_code == 0, result.output
    assert "Moves: 1" in result.output


def test_play_scrambled_start() -> None:
    result = runner.invoke(app, ["play", "--scramble", "6", "--seed", "3"], input="q\n")
    assert result.exit_code == 0, result.output
    assert "Moves: 0" in result.output


def test_play_rejects_negative_scramble() -> None:
    result = runner.invoke(app, ["play", "--scramble", "-1"], input="q\n")
    assert result.exit_code == 2


def test_play_with_background_solver() -> None:
    result = runner.invoke(app, ["play", "--solve-in-background"], input="q\n")
    assert result.exit_code == 0, result.output
    assert "Bishop Swap" in result.output


# -- start positions ----------------------------------------------------------


def test_start_board_defaults_to_layout() -> None:
    assert _start_board(None) == Board.initial()


def test_start_board_scramble_is_seeded() -> None:
    expected = GameGenerator.initial()
    GameGenerator.scramble(expected, 6, random.Random(3))

    assert _start_board(None, scramble=6, seed=3) == expected.board


# -- background solver --------------------------------------------------------


def test_solve_in_background(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="bishopswap.main")
    start = GameGenerator.initial()

    thread = _solve_in_background(start.clone)
    thread.join(timeout=20)

    assert not thread.is_alive()
    assert thread.daemon
    assert "solvable in 18 moves" in caplog.text
    assert start == GameGenerator.initial()
    assert start.moves == 0


def test_solve_in_background_unsolvable(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="bishopswap.main")
    thread = _solve_in_background(
        lambda: GameGenerator.from_text("B..B\n....\n....\n....\n.W.W\n")
    )
    thread.join(timeout=20)

    assert not thread.is_alive()
    assert "no solution exists" in caplog.text


# -- rendering ----------------------------------------------------------------


def _console() -> Console:
    return Console(file=io.StringIO(), width=100, color_system=None)


def test_print_solution_matches_text_report() -> None:
    result = BreadthFirstSearch.solve(GameGenerator.initial())
    out = _console()
    print_solution(result, out)
    text = out.file.getvalue()

    for heading, _ in result.steps():
        assert heading in text
    assert text.count("Move ") == len(result)


def test_print_solution_without_solution() -> None:
    result = BreadthFirstSearch.solve(
        GameGenerator.from_text("B..B\n....\n....\n....\n.W.W\n")
    )
    out = _console()
    print_solution(result, out)
    assert out.file.getvalue().strip() == next(result.describe())


def test_last_move_tracker() -> None:
    model = GameGenerator.initial()
    tracker = LastMoveTracker(model)
    assert tracker.cells == set()

    model.make_move(TwoPhaseMove(Position(0, 1), Position(1, 2)))
    assert tracker.cells == {Position(0, 1), Position(1, 2)}

    model.make_move(TwoPhaseMove(Position(4, 3), Position(3, 2)))
    assert tracker.cells == {Position(4, 3), Position(3, 2)}

    tracker.detach()
    model.make_move(TwoPhaseMove(Position(1, 2), Position(0, 1)))
    assert tracker.cells == {Position(4, 3), Position(3, 2)}


def test_last_move_tracker_ignores_rejected_moves() -> None:
    model = GameGenerator.initial()
    tracker = LastMoveTracker(model)
    model.make_move(TwoPhaseMove(Position(0, 1), Position(1, 2)))
    assert not model.try_move(TwoPhaseMove(Position(0, 3), Position(2, 1)))
    assert tracker.cells == {Position(0, 1), Position(1, 2)}


def test_render_board_shades_changed_cells() -> None:
    def render(**kwargs) -> str:
        out = Console(file=io.StringIO(), width=100, force_terminal=True, color_system="truecolor")
        out.print(render_board(Board.initial(), **kwargs))
        return out.file.getvalue()

    assert render(changed={Position(0, 1)}) != render()
    assert render(changed=set()) == render()
