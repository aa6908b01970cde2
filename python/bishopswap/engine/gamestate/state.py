"""The contract a puzzle state has to satisfy to be searched by the solver."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")
S = TypeVar("S", bound="TwoPhaseMoveState")


@dataclass(frozen=True)
class TwoPhaseMove(Generic[T]):
    """A move made of a selected source and a chosen target."""

    from_: T
    to: T

    def __str__(self) -> str:
        return f"{self.from_} -> {self.to}"


class InvalidMoveError(ValueError):
    """Raised when a malformed move is applied to a state."""

    def __init__(self, move: TwoPhaseMove, reason: str) -> None:
        super().__init__(f"Cannot apply {move}: {reason}")
        self.move = move
        self.reason = reason


@runtime_checkable
class TwoPhaseMoveState(Protocol[T]):
    """A puzzle whose moves are ``(from, to)`` pairs.

    Implementations must compare and hash by their puzzle contents, so
    the solver can recognise a state it has already seen.
    """

    def is_legal_to_move_from(self, from_: T) -> bool: ...

    def is_legal_move(self, move: TwoPhaseMove[T]) -> bool: ...

    def make_move(self, move: TwoPhaseMove[T]) -> None: ...

    def is_solved(self) -> bool: ...

    def get_legal_moves(self) -> set[TwoPhaseMove[T]]: ...

    def clone(self: S) -> S: ...

    def __eq__(self, other: object) -> bool: ...

    def __hash__(self) -> int: ...
