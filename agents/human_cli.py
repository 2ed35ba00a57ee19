"""human cli agent

allows human players to interact with the connect-4 system via command line.
"""

import numpy as np

from engine.board import PIECE_A, legal_moves, render_board

from .base import Agent


class HumanCLIAgent(Agent):
    """human agent that gets moves from command line input."""

    def __init__(self, name: str = "Human") -> None:
        super().__init__(name)

    def select_move(self, board: np.ndarray, piece: int) -> int:
        """get move from human player via cli."""
        print(render_board(board))

        valid_moves = legal_moves(board)

        if not valid_moves:
            raise ValueError("No valid moves available")

        symbol = "X" if piece == PIECE_A else "O"
        print(f"You play {symbol}. Valid moves: {valid_moves}")

        while True:
            try:
                move_input = input(f"Enter your move (column 0-{board.shape[1] - 1}): ").strip()

                if not move_input:
                    continue

                move = int(move_input)

                if move in valid_moves:
                    return move
                else:
                    print(f"Invalid move {move}. Valid moves are: {valid_moves}")

            except ValueError:
                print(f"Please enter a valid number (0-{board.shape[1] - 1})")


def build_agent(**kwargs) -> Agent:
    """build a human cli agent.

    args:
        kwargs: ignored for human agent

    returns:
        humancliagent instance
    """
    return HumanCLIAgent()
