"""connect-4 search engine

board model, heuristic evaluator and alpha-beta search over square boards.
"""

from .board import (
    EMPTY,
    PIECE_A,
    PIECE_B,
    BoardConfig,
    apply,
    board_from_rows,
    empty_board,
    has_four_in_row,
    is_legal,
    is_terminal,
    legal_moves,
    opponent,
)
from .heuristic import score, window_score
from .search import AlphaBetaSearch, SearchResult, WIN_SCORE, LOSS_SCORE

__all__ = [
    "EMPTY",
    "PIECE_A",
    "PIECE_B",
    "BoardConfig",
    "apply",
    "board_from_rows",
    "empty_board",
    "has_four_in_row",
    "is_legal",
    "is_terminal",
    "legal_moves",
    "opponent",
    "score",
    "window_score",
    "AlphaBetaSearch",
    "SearchResult",
    "WIN_SCORE",
    "LOSS_SCORE",
]
