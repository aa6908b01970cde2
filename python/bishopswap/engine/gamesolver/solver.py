"""Breadth-first solver for two-phase move puzzles."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from bishopswap.engine.gamestate import TwoPhaseMove, TwoPhaseMoveState

logger = logging.getLogger(__name__)

S = TypeVar("S", bound=TwoPhaseMoveState)


@dataclass
class SearchResult(Generic[S]):
    """Outcome of a search.

    ``states`` runs from the start state to the solved state and
    ``moves[i]`` leads from ``states[i]`` to ``states[i + 1]``.  Both are
    empty when no solution exists.
    """

    solved: bool
    states: list[S] = field(default_factory=list)
    moves: list[TwoPhaseMove] = field(default_factory=list)
    explored: int = 0
    visited: int = 0

    def __len__(self) -> int:
        return len(self.moves)

    def steps(self) -> Iterator[tuple[str, S | None]]:
        """Yield ``(heading, state)`` pairs making up the solution report.

        The closing summary line, and the single line of an unsolved
        result, come with ``None`` in place of a state.
        """
        if not self.solved:
            yield f"No solution found ({self.visited} states visited).", None
            return

        yield "Start", self.states[0]
        for i, (move, state) in enumerate(zip(self.moves, self.states[1:]), 1):
            yield f"Move {i}: {move}", state
        yield f"Solved in {len(self)} moves ({self.visited} states visited).", None

    def describe(self) -> Iterator[str]:
        """Yield a human-readable report of the solution, block by block."""
        for heading, state in self.steps():
            yield heading if state is None else f"{heading}\n{state}"


class BreadthFirstSearch:
    """Stateless solver; all methods are static.

    Works on any :class:`TwoPhaseMoveState`: it only asks for legal moves,
    clones states, applies moves to the clones and checks for a solution.
    The start state is never modified.
    """

    @staticmethod
    def solve(start: S) -> SearchResult[S]:
        """Return the shortest move sequence from *start* to a solved state."""
        logger.info("Starting breadth-first search")
        queue: deque[tuple[tuple[S, ...], tuple[TwoPhaseMove, ...]]] = deque()
        queue.append(((start,), ()))
        visited: set[S] = {start}
        explored = 0

        while queue:
            path, moves = queue.popleft()
            state = path[-1]
            explored += 1

            if state.is_solved():
                logger.info(
                    "Solution of %d moves found after exploring %d states",
                    len(moves), explored,
                )
                return SearchResult(
                    solved=True,
                    states=list(path),
                    moves=list(moves),
                    explored=explored,
                    visited=len(visited),
                )

            for move in BreadthFirstSearch._ordered(state.get_legal_moves()):
                child = state.clone()
                child.make_move(move)
                if child not in visited:
                    visited.add(child)
                    queue.append((path + (child,), moves + (move,)))

        logger.info("No solution: all %d reachable states explored", len(visited))
        return SearchResult(solved=False, explored=explored, visited=len(visited))

    @staticmethod
    def hint(state: S) -> TwoPhaseMove | None:
        """Return the first move of a solution, or ``None`` if solved / unsolvable."""
        if state.is_solved():
            return None
        result = BreadthFirstSearch.solve(state)
        return result.moves[0] if result.moves else None

    @staticmethod
    def solve_and_print_solution(
        start: S, echo: Callable[[str], object] = print
    ) -> SearchResult[S]:
        """Solve *start* and emit every layout along the way through *echo*."""
        result = BreadthFirstSearch.solve(start)
        for block in result.describe():
            echo(block)
        return result

    # -- helpers --------------------------------------------------------------

    @staticmethod
    def _ordered(moves: set[TwoPhaseMove]) -> list[TwoPhaseMove]:
        # Sets iterate in hash order; sort so repeated runs give the same path.
        return sorted(moves, key=str)
