"""base agent interface

defines the abstract interface that all connect-4 agents must implement.
"""

from abc import ABC, abstractmethod
import numpy as np


class Agent(ABC):
    """abstract base class for all connect-4 agents.

    all agents must implement select_move() to pick a column given a board
    snapshot and the piece they play. stateful agents can override reset()
    for initialization between games.
    """

    def __init__(self, name: str) -> None:
        """initialize agent with a name.

        args:
            name: human-readable name for the agent
        """
        self.name = name

    @abstractmethod
    def select_move(self, board: np.ndarray, piece: int) -> int:
        """select a column given the current board snapshot.

        args:
            board: square board (size, size), row 0 at the bottom, with
                   values 0 = empty, 1 = piece a, 2 = piece b
            piece: the piece this agent is about to drop (1 or 2)

        returns:
            legal column index to drop the piece in. must not be called
            on a board without legal columns.
        """
        pass

    def reset(self) -> None:
        """reset agent state between games.

        called before each new game starts. stateful agents should
        override this to reset internal state.
        """
        pass

    def __str__(self) -> str:
        """string representation of the agent."""
        return f"{self.__class__.__name__}({self.name})"

    def __repr__(self) -> str:
        """string representation of the agent."""
        return self.__str__()
