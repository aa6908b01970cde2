"""Bishop Swap Puzzle.

Usage::

    bishopswap play                         # interactive Rich game
    bishopswap play --solve-in-background   # also solve in a worker thread
    bishopswap play --scramble 8 --seed 1   # start from a shuffled position
    bishopswap solve                        # print a solution
    bishopswap solve --layout my.txt        # solve a custom layout
    bishopswap moves                        # list the legal moves
"""

from __future__ import annotations

import logging
import random
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Optional

import typer
from rich.logging import RichHandler

from bishopswap.engine.gamegenerator import GameGenerator
from bishopswap.engine.gameplay import PuzzleModel
from bishopswap.engine.gamesolver import BreadthFirstSearch
from bishopswap.models.board import Board

logger = logging.getLogger(__name__)

LOG_LEVEL_ENVVAR = "BISHOPSWAP_LOG_LEVEL"


# -- helpers ------------------------------------------------------------------


def _configure_logging(level: str) -> None:
    from bishopswap.frontend.cli.app import console

    try:
        logging.basicConfig(
            level=level.upper(),
            format="%(message)s",
            datefmt="[%X]",
            handlers=[RichHandler(console=console, show_path=False)],
            force=True,
        )
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--log-level") from e


def _load_model(layout: Optional[Path]) -> PuzzleModel:
    if layout is None:
        return GameGenerator.initial()
    try:
        return GameGenerator.from_text(layout.read_text())
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--layout") from e


def _start_board(
    layout: Optional[Path], scramble: int = 0, seed: Optional[int] = None
) -> Board:
    model = _load_model(layout)
    if scramble:
        applied = GameGenerator.scramble(model, scramble, random.Random(seed))
        logger.info("Start position scrambled with %d moves", applied)
    return model.board


def _solve_in_background(new_model: Callable[[], PuzzleModel]) -> threading.Thread:
    """Solve a separately built model on a daemon thread.

    The worker owns its model; nothing is shared with the caller.
    """

    def worker() -> None:
        result = BreadthFirstSearch.solve(new_model())
        if result.solved:
            logger.info(
                "Background solver: solvable in %d moves (%s)",
                len(result), ", ".join(str(m) for m in result.moves),
            )
        else:
            logger.info("Background solver: no solution exists")

    thread = threading.Thread(target=worker, name="bfs-solver", daemon=True)
    thread.start()
    return thread


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False, help="Bishop Swap Puzzle.")

LayoutOption = typer.Option(
    None, "-l", "--layout",
    exists=True, dir_okay=False, readable=True,
    help="Text file with one row per line using B, W and '.'.",
)


@app.callback()
def main(
    log_level: str = typer.Option(
        "WARNING", "--log-level",
        envvar=LOG_LEVEL_ENVVAR,
        help="Logging level (DEBUG, INFO, WARNING, ...).",
    ),
) -> None:
    """Bishop Swap Puzzle."""
    _configure_logging(log_level)


@app.command()
def play(
    layout: Optional[Path] = LayoutOption,
    solve_in_background: bool = typer.Option(
        False, "--solve-in-background",
        help="Run the solver on its own copy of the start position.",
    ),
    scramble: int = typer.Option(
        0, "--scramble", min=0,
        help="Start from this many random legal moves away from the layout.",
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed", help="Random seed for --scramble.",
    ),
) -> None:
    """Play the puzzle in the terminal."""
    from bishopswap.frontend.cli.app import run

    # Restarting returns to the scrambled position, not the layout.
    start = _start_board(layout, scramble, seed)

    def new_model() -> PuzzleModel:
        return PuzzleModel(start.copy())

    if solve_in_background:
        _solve_in_background(new_model)
    run(new_model)


@app.command()
def solve(layout: Optional[Path] = LayoutOption) -> None:
    """Print a shortest solution, or exit with code 1 if there is none."""
    from bishopswap.frontend.cli.app import print_solution

    model = _load_model(layout)
    result = BreadthFirstSearch.solve(model)
    print_solution(result)
    if not result.solved:
        raise typer.Exit(code=1)


@app.command()
def moves(layout: Optional[Path] = LayoutOption) -> None:
    """List the legal moves of a position."""
    model = _load_model(layout)
    typer.echo(str(model))
    legal = sorted(model.get_legal_moves(), key=str)
    if not legal:
        typer.echo("No legal moves.")
    for move in legal:
        typer.echo(str(move))


if __name__ == "__main__":
    app()
