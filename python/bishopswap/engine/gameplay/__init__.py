from bishopswap.engine.gameplay.game import PuzzleModel

__all__ = ["PuzzleModel"]
