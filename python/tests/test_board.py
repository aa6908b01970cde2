"""Board model tests: layouts, identity and change notification."""

from __future__ import annotations

import pytest

from bishopswap.models.board import BOARD_COLS, BOARD_ROWS, Bishop, Board, Position

SWAPPED = """
.W.W
....
....
....
.B.B
"""


# -- construction -------------------------------------------------------------


def test_initial_layout() -> None:
    board = Board.initial()
    assert board.positions_of(Bishop.BLACK) == [Position(0, 1), Position(0, 3)]
    assert board.positions_of(Bishop.WHITE) == [Position(4, 1), Position(4, 3)]
    assert board.count(Bishop.NONE) == BOARD_ROWS * BOARD_COLS - 4


def test_from_text_matches_initial() -> None:
    text = ". B . B\n. . . .\n. . . .\n. . . .\n. W . W\n"
    assert Board.from_text(text) == Board.initial()


def test_from_text_lowercase_is_accepted() -> None:
    board = Board.from_text(SWAPPED.lower())
    assert board.get(Position(4, 1)) is Bishop.BLACK


@pytest.mark.parametrize(
    "rows",
    [
        [".B.B", "....", "....", ".W.W"],  # too few rows
        [".B.B.", "....", "....", "....", ".W.W"],  # row too long
        [".B.X", "....", "....", "....", ".W.W"],  # unknown piece
        [".B..", "....", "....", "....", ".W.W"],  # one black bishop
        ["BB.B", "....", "....", "....", ".W.W"],  # three black bishops
    ],
)
def test_from_rows_rejects_bad_layouts(rows: list[str]) -> None:
    with pytest.raises(ValueError):
        Board.from_rows(rows)


# -- identity -----------------------------------------------------------------


def test_equal_boards_hash_equal() -> None:
    a = Board.initial()
    b = Board.from_rows([".B.B", "....", "....", "....", ".W.W"])
    assert a == b
    assert hash(a) == hash(b)
    assert len({a, b}) == 1


def test_copy_is_independent() -> None:
    board = Board.initial()
    copy = board.copy()
    copy.set(Position(0, 1), Bishop.NONE)
    assert board.get(Position(0, 1)) is Bishop.BLACK
    assert board != copy


def test_str_layout() -> None:
    assert str(Board.initial()).splitlines() == [
        "  0 1 2 3",
        "0 . B . B",
        "1 . . . .",
        "2 . . . .",
        "3 . . . .",
        "4 . W . W",
    ]


# -- listeners ----------------------------------------------------------------


def test_listener_sees_changes() -> None:
    board = Board.initial()
    seen: list[tuple[Position, Bishop, Bishop]] = []
    board.add_listener(lambda p, old, new: seen.append((p, old, new)))

    board.set(Position(1, 2), Bishop.BLACK)
    board.set(Position(1, 2), Bishop.BLACK)  # unchanged, no event

    assert seen == [(Position(1, 2), Bishop.NONE, Bishop.BLACK)]


def test_removed_listener_is_silent() -> None:
    board = Board.initial()
    seen: list[Position] = []

    def listener(p: Position, old: Bishop, new: Bishop) -> None:
        seen.append(p)

    board.add_listener(listener)
    board.remove_listener(listener)
    board.set(Position(2, 2), Bishop.WHITE)
    assert seen == []


def test_copy_drops_listeners() -> None:
    board = Board.initial()
    seen: list[Position] = []
    board.add_listener(lambda p, old, new: seen.append(p))
    board.copy().set(Position(2, 2), Bishop.WHITE)
    assert seen == []


def test_opposite() -> None:
    assert Bishop.BLACK.opposite is Bishop.WHITE
    assert Bishop.WHITE.opposite is Bishop.BLACK
