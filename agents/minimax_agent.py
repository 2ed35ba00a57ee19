"""minimax agent

alpha-beta pruning search with a static positional heuristic for
connect-4 on a square board.
"""

from typing import Optional
import numpy as np

from engine.board import BoardConfig
from engine.search import AlphaBetaSearch

from .base import Agent


class MinimaxAgent(Agent):
    """minimax agent with alpha-beta pruning.

    ties between equally scored columns go to the first column in search
    order. passing a seed shuffles the root order with a seeded generator
    instead, so repeated games vary but stay reproducible.
    """

    def __init__(
        self,
        name: str = "MinMaxBot",
        depth: int = 4,
        size: int = 7,
        order: str = "ascending",
        seed: Optional[int] = None,
    ) -> None:
        super().__init__(name)
        self.depth = depth
        self.config = BoardConfig(size=size)
        self.order = order
        self.seed = seed
        self.engine = self._build_engine()
        self.last_result = None

    def _build_engine(self) -> AlphaBetaSearch:
        rng = np.random.default_rng(self.seed) if self.seed is not None else None
        return AlphaBetaSearch(self.config, self.depth, order=self.order, rng=rng)

    def select_move(self, board: np.ndarray, piece: int) -> int:
        """select best move using minimax with alpha-beta pruning."""
        self.last_result = self.engine.search(np.asarray(board), piece)
        return self.last_result.column

    def reset(self) -> None:
        """reset agent state, reseeding the tie-break generator."""
        self.engine = self._build_engine()
        self.last_result = None


def build_agent(
    depth: int = 4,
    size: int = 7,
    order: str = "ascending",
    seed: Optional[int] = None,
    **kwargs,
) -> Agent:
    """build minimax agent.

    args:
        depth: search depth in plies
        size: board size
        order: move ordering, "ascending" or "center"
        seed: seed for the root tie-break shuffle, None keeps the first column
        kwargs: ignored, accepted so every builder shares one signature
    """
    return MinimaxAgent(name=f"MinMaxBot-d{depth}", depth=depth, size=size, order=order, seed=seed)
