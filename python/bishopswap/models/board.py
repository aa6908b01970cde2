"""Board model for the bishop swap puzzle."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from enum import StrEnum
from typing import NamedTuple

BOARD_ROWS = 5
BOARD_COLS = 4


class Bishop(StrEnum):
    NONE = "."
    BLACK = "B"
    WHITE = "W"

    @property
    def opposite(self) -> Bishop:
        # Anything that is not black is opposed by black.
        return Bishop.WHITE if self is Bishop.BLACK else Bishop.BLACK


class Position(NamedTuple):
    row: int
    col: int

    def __str__(self) -> str:
        return f"({self.row},{self.col})"


CellListener = Callable[[Position, Bishop, Bishop], None]


class Board:
    """Represents the 5×4 puzzle board.

    Cells are stored as a 2D list of ``Bishop`` values.  Equality and
    hashing look at the cells only, so two boards reached by different
    move sequences compare equal.  Listeners registered with
    :meth:`add_listener` are called as ``listener(position, old, new)``
    whenever a cell changes.
    """

    __slots__ = ("cells", "_listeners")

    def __init__(self, cells: list[list[Bishop]]) -> None:
        if len(cells) != BOARD_ROWS or any(len(row) != BOARD_COLS for row in cells):
            raise ValueError(
                f"Expected a {BOARD_ROWS}×{BOARD_COLS} grid, got "
                f"{len(cells)} rows of {[len(row) for row in cells]} cells."
            )
        self.cells = cells
        self._listeners: list[CellListener] = []

    # -- construction helpers -------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Return the starting layout: black on top, white at the bottom."""
        cells = [[Bishop.NONE] * BOARD_COLS for _ in range(BOARD_ROWS)]
        for col in (1, 3):
            cells[0][col] = Bishop.BLACK
            cells[BOARD_ROWS - 1][col] = Bishop.WHITE
        return cls(cells)

    @classmethod
    def from_rows(cls, rows: Iterable[str]) -> Board:
        """Create a board from one string per row.

        Example::

            Board.from_rows([".B.B", "....", "....", "....", ".W.W"])

        Whitespace inside a row is ignored, so ``". B . B"`` works too.
        """
        cells: list[list[Bishop]] = []
        for r, row in enumerate(rows):
            chars = "".join(row.split())
            try:
                cells.append([Bishop(ch.upper()) for ch in chars])
            except ValueError:
                raise ValueError(
                    f"Row {r} ({row!r}) may only contain 'B', 'W' and '.'."
                ) from None
        board = cls(cells)
        for bishop in (Bishop.BLACK, Bishop.WHITE):
            if board.count(bishop) != 2:
                raise ValueError(
                    f"A layout needs exactly two {bishop.name.lower()} bishops, "
                    f"got {board.count(bishop)}."
                )
        return board

    @classmethod
    def from_text(cls, text: str) -> Board:
        """Create a board from a multi-line layout, skipping blank lines."""
        return cls.from_rows(line for line in text.splitlines() if line.strip())

    # -- queries --------------------------------------------------------------

    def get(self, p: Position) -> Bishop:
        return self.cells[p.row][p.col]

    def positions(self) -> Iterator[Position]:
        for r in range(BOARD_ROWS):
            for c in range(BOARD_COLS):
                yield Position(r, c)

    def positions_of(self, bishop: Bishop) -> list[Position]:
        return [p for p in self.positions() if self.get(p) is bishop]

    def count(self, bishop: Bishop) -> int:
        return sum(row.count(bishop) for row in self.cells)

    # -- mutation -------------------------------------------------------------

    def set(self, p: Position, bishop: Bishop) -> None:
        old = self.cells[p.row][p.col]
        if old is bishop:
            return
        self.cells[p.row][p.col] = bishop
        for listener in list(self._listeners):
            listener(p, old, bishop)

    def add_listener(self, listener: CellListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: CellListener) -> None:
        self._listeners.remove(listener)

    def copy(self) -> Board:
        return Board([row[:] for row in self.cells])

    # -- identity -------------------------------------------------------------

    def _key(self) -> tuple[Bishop, ...]:
        return tuple(b for row in self.cells for b in row)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.cells == other.cells

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        rows = ", ".join(repr("".join(row)) for row in self.cells)
        return f"Board([{rows}])"

    def __str__(self) -> str:
        lines = ["  " + " ".join(str(c) for c in range(BOARD_COLS))]
        for r, row in enumerate(self.cells):
            lines.append(f"{r} " + " ".join(row))
        return "\n".join(lines)
