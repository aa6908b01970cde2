"""Rich terminal frontend: tables, colours and panels.

A move takes two prompts: first pick a bishop, then pick its target.
Cells are entered as ``row col`` (``0 1`` or ``01``).
"""

from __future__ import annotations

import logging
from collections.abc import Callable

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table
from rich.text import Text

from bishopswap.engine.gameplay import PuzzleModel
from bishopswap.engine.gamesolver import BreadthFirstSearch, SearchResult
from bishopswap.engine.gamestate import TwoPhaseMove
from bishopswap.models.board import BOARD_COLS, Bishop, Board, Position

logger = logging.getLogger(__name__)

console = Console()

_STYLES = {
    Bishop.BLACK: "bold magenta",
    Bishop.WHITE: "bold white",
}


# -- helpers ------------------------------------------------------------------


def parse_position(text: str) -> Position | None:
    """Parse ``"r c"``, ``"r,c"`` or ``"rc"`` into a position."""
    digits = text.replace(",", " ").split()
    if len(digits) == 1 and len(digits[0]) == 2:
        digits = list(digits[0])
    if len(digits) != 2 or not all(d.isdigit() for d in digits):
        return None
    return Position(int(digits[0]), int(digits[1]))


# -- board rendering ----------------------------------------------------------


def render_board(
    board: Board,
    selected: Position | None = None,
    targets: set[Position] | None = None,
    changed: set[Position] | None = None,
) -> Table:
    """Return a Rich Table representing the puzzle grid.

    *changed* cells (the last move's source and target) get a shaded
    background.
    """
    targets = targets or set()
    changed = changed or set()
    table = Table(
        show_header=True,
        header_style="dim",
        show_edge=True,
        box=rich.box.HEAVY,
        border_style="bright_blue",
        padding=(0, 1),
    )
    table.add_column("", style="dim", justify="right")
    for c in range(BOARD_COLS):
        table.add_column(str(c), justify="center")

    for r, row in enumerate(board.cells):
        cells: list[str] = [str(r)]
        for c, bishop in enumerate(row):
            p = Position(r, c)
            if p == selected:
                cells.append(f"[reverse]{bishop.value}[/reverse]")
            elif p in targets:
                cells.append("[bold green]*[/bold green]")
            elif bishop is Bishop.NONE:
                style = "dim on grey23" if p in changed else "dim"
                cells.append(f"[{style}]·[/{style}]")
            else:
                style = _STYLES[bishop] + (" on grey23" if p in changed else "")
                cells.append(f"[{style}]{bishop.value}[/{style}]")
        table.add_row(*cells)

    return table


def print_solution(result: SearchResult, out: Console | None = None) -> None:
    """Print every layout of a solver result as a sequence of panels."""
    out = out or console
    for heading, state in result.steps():
        if state is None:
            style = "bold green" if result.solved else "red"
            out.print(Text(heading, style=style))
            continue
        out.print(
            Panel(
                render_board(state.board),
                title=Text(heading, style="bold cyan"),
                border_style="cyan",
                expand=False,
            )
        )


class LastMoveTracker:
    """Listens to a model's cells and remembers those touched by its latest move."""

    def __init__(self, model: PuzzleModel) -> None:
        self.model = model
        self.cells: set[Position] = set()
        self._move = -1
        model.add_listener(self._on_change)

    def _on_change(self, p: Position, old: Bishop, new: Bishop) -> None:
        # Cell events fire before the move counter is bumped.
        if self.model.moves != self._move:
            self._move = self.model.moves
            self.cells.clear()
        self.cells.add(p)

    def detach(self) -> None:
        self.model.remove_listener(self._on_change)


def _apply_hint(model: PuzzleModel) -> str:
    """Apply a single solver hint.  Returns a status message."""
    hint = BreadthFirstSearch.hint(model)
    if hint is None:
        if model.is_solved():
            return "[green]Already solved![/green]"
        return "[yellow]No solution from this position. Try R to restart.[/yellow]"
    model.make_move(hint)
    return f"[cyan]Hint:[/cyan] moved [bold]{hint}[/bold]"


# -- screens ------------------------------------------------------------------


def _draw_game(
    model: PuzzleModel,
    status: str = "",
    selected: Position | None = None,
    targets: set[Position] | None = None,
    changed: set[Position] | None = None,
) -> None:
    console.clear()

    stats = Text()
    stats.append("  Moves: ", style="dim")
    stats.append(str(model.moves), style="bold yellow")

    controls = Text()
    controls.append("  row col", style="bold cyan")
    controls.append("  select   ", style="dim")
    controls.append("H", style="bold cyan")
    controls.append("  hint   ", style="dim")
    controls.append("R", style="bold cyan")
    controls.append("  restart   ", style="dim")
    controls.append("Q", style="bold cyan")
    controls.append("  quit", style="dim")

    panel = Panel(
        Align.center(render_board(model.board, selected, targets, changed)),
        title="[bold cyan]Bishop Swap[/bold cyan]",
        subtitle="[dim]swap the black and white bishops[/dim]",
        border_style="bright_blue",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))
    console.print(Align.center(stats))
    if status:
        console.print(Align.center(Text.from_markup(f"  {status}")))
    console.print(Align.center(controls))


def _draw_win(model: PuzzleModel) -> None:
    console.clear()

    congrats = Text()
    congrats.append("\n  ★ ", style="bold yellow")
    congrats.append("CONGRATULATIONS!", style="bold green")
    congrats.append("  You solved it!  ", style="green")
    congrats.append("★\n", style="bold yellow")

    stats = Text()
    stats.append("  Moves: ", style="dim")
    stats.append(str(model.moves), style="bold yellow")

    panel = Panel(
        Group(
            Align.center(render_board(model.board)),
            Align.center(congrats),
            Align.center(stats),
        ),
        title="[bold green]Bishop Swap[/bold green]",
        border_style="bold green",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))


# -- game loop ----------------------------------------------------------------


def _play_game(new_model: Callable[[], PuzzleModel]) -> None:
    model = new_model()
    last_move = LastMoveTracker(model)
    status = ""
    selected: Position | None = None

    while not model.is_solved():
        targets = model.legal_targets(selected) if selected is not None else None
        _draw_game(model, status, selected, targets, last_move.cells)
        status = ""

        prompt = "Target" if selected is not None else "Bishop"
        key = Prompt.ask(
            f"  {prompt}", console=console, default="", show_default=False
        ).strip().lower()

        if key == "q":
            return
        if key == "r":
            last_move.detach()
            model, selected = new_model(), None
            last_move = LastMoveTracker(model)
            status = "[yellow]Restarted.[/yellow]"
            continue
        if key == "h":
            selected = None
            status = _apply_hint(model)
            continue

        p = parse_position(key)
        if p is None or not model.is_on_board(p):
            status = f"[red]Not a cell:[/red] {escape(repr(key))}" if key else ""
            continue

        if selected is None:
            if model.is_legal_to_move_from(p):
                selected = p
            else:
                status = f"[red]No bishop on {p}.[/red]"
        elif p == selected:
            selected = None
        elif model.try_move(TwoPhaseMove(selected, p)):
            logger.info("Moved %s -> %s", selected, p)
            selected = None
        elif model.is_legal_to_move_from(p):
            selected = p
        else:
            status = f"[red]Illegal move {selected} -> {p}.[/red]"
            logger.info("Illegal move %s -> %s", selected, p)

    logger.info("Puzzle solved in %d moves", model.moves)
    _draw_win(model)


# -- public entry point -------------------------------------------------------


def run(new_model: Callable[[], PuzzleModel] = PuzzleModel) -> None:
    """Launch the Rich CLI game.  *new_model* builds a fresh starting position."""
    _play_game(new_model)
