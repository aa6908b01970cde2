from bishopswap.engine.gamestate.state import (
    InvalidMoveError,
    TwoPhaseMove,
    TwoPhaseMoveState,
)

__all__ = ["InvalidMoveError", "TwoPhaseMove", "TwoPhaseMoveState"]
