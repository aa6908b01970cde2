from bishopswap.models.board import BOARD_COLS, BOARD_ROWS, Bishop, Board, Position

__all__ = ["BOARD_COLS", "BOARD_ROWS", "Bishop", "Board", "Position"]
