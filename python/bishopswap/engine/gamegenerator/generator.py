"""Builds puzzle positions: the starting layout, custom layouts, scrambles."""

from __future__ import annotations

import logging
import random

from bishopswap.engine.gameplay import PuzzleModel
from bishopswap.engine.gamestate import TwoPhaseMove
from bishopswap.models.board import Board, Position

logger = logging.getLogger(__name__)


class GameGenerator:
    """Creates puzzle models from known layouts or random legal play."""

    @staticmethod
    def initial() -> PuzzleModel:
        """Return a model on the starting layout."""
        return PuzzleModel(Board.initial())

    @staticmethod
    def from_text(text: str) -> PuzzleModel:
        """Return a model on a ``B``/``W``/``.`` layout, one line per row.

        Raises ``ValueError`` for a malformed layout.
        """
        return PuzzleModel(Board.from_text(text))

    @staticmethod
    def scramble(
        model: PuzzleModel, steps: int, rng: random.Random | None = None
    ) -> int:
        """Apply up to *steps* random legal moves to *model* in-place.

        Undoing the previous move is avoided when another move exists.
        Stops early when no move is legal or the puzzle becomes solved.
        Returns the number of moves applied.
        """
        rng = rng or random.Random()
        prev: TwoPhaseMove[Position] | None = None
        applied = 0

        for _ in range(steps):
            if model.is_solved():
                break
            moves = sorted(model.get_legal_moves(), key=str)
            if not moves:
                break
            if prev is not None and len(moves) > 1:
                back = TwoPhaseMove(prev.to, prev.from_)
                if back in moves:
                    moves.remove(back)
            move = rng.choice(moves)
            model.make_move(move)
            prev = move
            applied += 1

        logger.debug("Scrambled with %d of %d requested moves", applied, steps)
        return applied
