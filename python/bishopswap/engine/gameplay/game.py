"""Core gameplay logic: move rules, board mutation and the win condition."""

from __future__ import annotations

import logging

from bishopswap.engine.gamestate import InvalidMoveError, TwoPhaseMove
from bishopswap.models.board import (
    BOARD_COLS,
    BOARD_ROWS,
    Bishop,
    Board,
    CellListener,
    Position,
)

logger = logging.getLogger(__name__)

Move = TwoPhaseMove[Position]

_BLACK_TARGETS = (Position(4, 1), Position(4, 3))
_WHITE_TARGETS = (Position(0, 1), Position(0, 3))


class PuzzleModel:
    """Rule engine for the bishop swap puzzle.

    Bishops move like chess bishops and may never land on a cell that
    a bishop of the other colour could reach along a clear diagonal.
    The puzzle is solved once the black and white bishops have swapped
    sides of the board.
    """

    def __init__(self, board: Board | None = None) -> None:
        self.board = board if board is not None else Board.initial()
        self.moves: int = 0

    # -- queries --------------------------------------------------------------

    @staticmethod
    def is_on_board(p: Position) -> bool:
        return 0 <= p.row < BOARD_ROWS and 0 <= p.col < BOARD_COLS

    def get_bishop(self, p: Position) -> Bishop:
        """Return the bishop at *p*; cells off the board read as empty."""
        if not self.is_on_board(p):
            return Bishop.NONE
        return self.board.get(p)

    def is_empty(self, p: Position) -> bool:
        return self.get_bishop(p) is Bishop.NONE

    def is_legal_to_move_from(self, from_: Position) -> bool:
        return self.is_on_board(from_) and not self.is_empty(from_)

    def is_bishop_move(self, from_: Position, to: Position) -> bool:
        """Check that *to* lies on a diagonal of *from_* with nothing in between.

        ``from_ == to`` passes vacuously; :meth:`is_legal_move` rejects it.
        """
        d_row = to.row - from_.row
        d_col = to.col - from_.col
        if abs(d_row) != abs(d_col):
            return False

        step_row = 1 if d_row > 0 else -1
        step_col = 1 if d_col > 0 else -1
        for i in range(1, abs(d_row)):
            between = Position(from_.row + i * step_row, from_.col + i * step_col)
            if not self.is_empty(between):
                return False
        return True

    def is_move_allowed_by_opposite(self, to: Position, moving: Bishop) -> bool:
        """Return False if a bishop of the other colour could move onto *to*."""
        for attacker in self.board.positions_of(moving.opposite):
            if self.is_bishop_move(attacker, to):
                return False
        return True

    def is_legal_move(self, move: Move) -> bool:
        from_, to = move.from_, move.to
        return (
            from_ != to
            and self.is_legal_to_move_from(from_)
            and self.is_on_board(to)
            and self.is_empty(to)
            and self.is_bishop_move(from_, to)
            and self.is_move_allowed_by_opposite(to, self.get_bishop(from_))
        )

    def get_legal_moves(self) -> set[Move]:
        """Return every legal move from the current position."""
        legal: set[Move] = set()
        for from_ in self.board.positions():
            if not self.is_legal_to_move_from(from_):
                continue
            for to in self.board.positions():
                move = TwoPhaseMove(from_, to)
                if self.is_legal_move(move):
                    legal.add(move)
        return legal

    def legal_targets(self, from_: Position) -> set[Position]:
        """Return the cells the bishop on *from_* may legally move to."""
        return {m.to for m in self.get_legal_moves() if m.from_ == from_}

    def is_solved(self) -> bool:
        return all(self.board.get(p) is Bishop.BLACK for p in _BLACK_TARGETS) and all(
            self.board.get(p) is Bishop.WHITE for p in _WHITE_TARGETS
        )

    # -- movement -------------------------------------------------------------

    def make_move(self, move: Move) -> None:
        """Relocate a bishop without checking the bishop rules.

        Callers are expected to check :meth:`is_legal_move` first.  A move
        that does not even describe a relocation (off the board, from an
        empty cell, onto an occupied cell) raises ``InvalidMoveError``
        and leaves the board untouched.  Once solved, the board is frozen.
        """
        if self.is_solved():
            return

        from_, to = move.from_, move.to
        if not (self.is_on_board(from_) and self.is_on_board(to)):
            raise InvalidMoveError(move, "position is off the board")
        if from_ == to:
            raise InvalidMoveError(move, "source and target are the same cell")
        if self.is_empty(from_):
            raise InvalidMoveError(move, f"no bishop on {from_}")
        if not self.is_empty(to):
            raise InvalidMoveError(move, f"{to} is occupied")

        bishop = self.board.get(from_)
        self.board.set(to, bishop)
        self.board.set(from_, Bishop.NONE)
        self.moves += 1
        logger.debug("Moved %s bishop %s (move %d)", bishop.name.lower(), move, self.moves)

    def try_move(self, move: Move) -> bool:
        """Apply *move* if it is legal.

        Returns True if the move was applied.
        """
        if self.is_solved() or not self.is_legal_move(move):
            logger.debug("Rejected move %s", move)
            return False
        self.make_move(move)
        return True

    # -- observation ----------------------------------------------------------

    def add_listener(self, listener: CellListener) -> None:
        self.board.add_listener(listener)

    def remove_listener(self, listener: CellListener) -> None:
        self.board.remove_listener(listener)

    # -- identity -------------------------------------------------------------

    def clone(self) -> PuzzleModel:
        copy = PuzzleModel(self.board.copy())
        copy.moves = self.moves
        return copy

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PuzzleModel):
            return NotImplemented
        return self.board == other.board

    def __hash__(self) -> int:
        return hash(self.board)

    def __repr__(self) -> str:
        return f"PuzzleModel(moves={self.moves}, board={self.board!r})"

    def __str__(self) -> str:
        return str(self.board)
