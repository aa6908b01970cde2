from bishopswap.engine.gamesolver.solver import BreadthFirstSearch, SearchResult

__all__ = ["BreadthFirstSearch", "SearchResult"]
