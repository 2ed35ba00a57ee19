"""alpha-beta search engine

depth-limited minimax with alpha-beta pruning over the board model.
leaves are scored from the root piece's point of view for the whole tree:
the root piece is always the maximizing side.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple
import numpy as np

from .board import (
    BoardConfig,
    apply,
    has_four_in_row,
    is_full,
    legal_moves,
    opponent,
)
from .heuristic import score

logger = logging.getLogger(__name__)


# finite sentinels, far outside any heuristic score, so that a node where
# every child is lost still records a column
WIN_SCORE = 10**9
LOSS_SCORE = -WIN_SCORE
DRAW_SCORE = 0

MOVE_ORDERS = ("ascending", "center")


@dataclass
class SearchResult:
    """result of a root search."""
    column: int
    score: int
    nodes: int


class AlphaBetaSearch:
    """fixed-depth minimax search with optional alpha-beta pruning.

    args:
        config: board geometry the search runs on
        depth: plies searched from the root, at least 1
        prune: disable to get the plain minimax baseline
        order: "ascending" column order or "center" (closest to the
               center column first, lower column on equal distance)
        rng: when given, shuffles the root move order so that ties
             between equally scored root moves are broken at random,
             reproducibly for a seeded generator
    """

    def __init__(
        self,
        config: BoardConfig,
        depth: int,
        prune: bool = True,
        order: str = "ascending",
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        if depth < 1:
            raise ValueError(f"Search depth must be at least 1, got {depth}")
        if order not in MOVE_ORDERS:
            raise ValueError(f"Unknown move order {order!r}, expected one of {MOVE_ORDERS}")
        self.config = config
        self.depth = depth
        self.prune = prune
        self.order = order
        self.rng = rng

        self.root_piece = 0
        self.nodes = 0

    def search(self, board: np.ndarray, piece: int) -> SearchResult:
        """find the best column for piece to play on board."""
        self.config.check(board)
        if not legal_moves(board):
            raise ValueError("No legal moves available")

        self.root_piece = piece
        self.nodes = 0
        column, best = self.minimax(
            board, self.depth, -float("inf"), float("inf"), True, piece, root=True
        )
        logger.debug(
            "depth %d search for piece %d: column %d score %d (%d nodes)",
            self.depth, piece, column, best, self.nodes,
        )
        return SearchResult(column=column, score=best, nodes=self.nodes)

    def ordered_moves(self, board: np.ndarray, root: bool = False) -> List[int]:
        moves = legal_moves(board)
        if self.order == "center":
            center = self.config.center_column
            moves.sort(key=lambda col: (abs(col - center), col))
        if root and self.rng is not None:
            moves = [moves[i] for i in self.rng.permutation(len(moves))]
        return moves

    def evaluate(self, board: np.ndarray, depth: int) -> int:
        """score a leaf; remaining depth favours quick wins and slow losses."""
        if has_four_in_row(board, self.root_piece):
            return WIN_SCORE + depth
        if has_four_in_row(board, opponent(self.root_piece)):
            return LOSS_SCORE - depth
        if is_full(board):
            return DRAW_SCORE
        return score(board, self.root_piece)

    def minimax(
        self,
        board: np.ndarray,
        depth: int,
        alpha: float,
        beta: float,
        maximizing: bool,
        piece: int,
        root: bool = False,
    ) -> Tuple[int, int]:
        """minimax with alpha-beta pruning, returns (column, score).

        column is -1 at leaves.
        """
        self.nodes += 1

        moves = [] if depth == 0 else self.ordered_moves(board, root)
        if (
            not moves
            or has_four_in_row(board, piece)
            or has_four_in_row(board, opponent(piece))
        ):
            return -1, self.evaluate(board, depth)

        best_column = -1
        best_score = -float("inf") if maximizing else float("inf")

        for col in moves:
            child = apply(board, col, piece)
            _, child_score = self.minimax(
                child, depth - 1, alpha, beta, not maximizing, opponent(piece)
            )

            if maximizing:
                if child_score > best_score:
                    best_score = child_score
                    best_column = col
                alpha = max(alpha, best_score)
            else:
                if child_score < best_score:
                    best_score = child_score
                    best_column = col
                beta = min(beta, best_score)

            if self.prune and alpha >= beta:
                break

        return best_column, best_score
