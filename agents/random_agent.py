"""random agent

a baseline agent that selects random legal moves.
"""

from typing import Optional
import numpy as np

from engine.board import legal_moves

from .base import Agent


class RandomAgent(Agent):
    """agent that selects random legal moves."""

    def __init__(self, name: str = "Random", seed: Optional[int] = None) -> None:
        super().__init__(name)
        self.seed = seed
        self.rng = np.random.default_rng(seed)

    def select_move(self, board: np.ndarray, piece: int) -> int:
        """select a random legal column."""
        valid_cols = legal_moves(board)

        if not valid_cols:
            raise ValueError("No valid moves available")

        return int(self.rng.choice(valid_cols))

    def reset(self) -> None:
        """reset agent state."""
        self.rng = np.random.default_rng(self.seed)


def build_agent(seed: Optional[int] = None, **kwargs) -> Agent:
    """build a random agent.

    args:
        seed: seed for the move generator
        kwargs: ignored, accepted so every builder shares one signature

    returns:
        randomagent instance
    """
    return RandomAgent(seed=seed)
