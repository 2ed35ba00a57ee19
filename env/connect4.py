"""Connect-4 Environment Implementation

A gymnasium-compatible Connect-4 environment on a square board. It owns the
authoritative match state; agents only ever see copies from snapshot().
"""

from typing import Any, Dict, List, Optional, Tuple
import numpy as np
import gymnasium as gym
from gymnasium import spaces
from gymnasium.error import InvalidAction

from engine.board import (
    EMPTY,
    PIECE_A,
    PIECE_B,
    BoardConfig,
    drop_row,
    empty_board,
    has_four_in_row,
    is_full,
    is_legal,
    legal_moves,
    opponent,
    render_board,
)


class Connect4Env(gym.Env):
    """Connect-4 Environment on a size x size board.

    Observation Space: Box(0, 2, (size, size), int8)
        - 0: empty cell
        - 1: player 1's piece
        - 2: player 2's piece
        Row 0 is the bottom row.

    Action Space: Discrete(size) - column to drop piece

    Rewards (from player 1's point of view):
        - +10: player 1 wins
        - -10: player 2 wins
        - 0: draw
        - -0.01: step cost
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 1}

    def __init__(self, size: int = 7, render_mode: Optional[str] = None) -> None:
        super().__init__()

        self.config = BoardConfig(size=size)
        self.size = size

        # Gymnasium spaces
        self.observation_space = spaces.Box(
            low=0, high=2, shape=(size, size), dtype=np.int8
        )
        self.action_space = spaces.Discrete(size)

        # State
        self.board = empty_board(size)
        self.current_player = PIECE_A
        self.move_count = 0
        self.game_over = False
        self.winner = 0

        self.render_mode = render_mode

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """Reset environment to initial state."""
        super().reset(seed=seed)

        self.board.fill(EMPTY)
        self.current_player = PIECE_A
        self.move_count = 0
        self.game_over = False
        self.winner = 0

        return self.snapshot(), {"current_player": self.current_player}

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict[str, Any]]:
        """Execute one step in the environment for the current player."""
        if self.game_over:
            raise InvalidAction("Game is already over")

        if not (0 <= action < self.size):
            raise InvalidAction(f"Invalid action {action}, must be 0-{self.size - 1}")

        self.drop_piece(action, self.current_player)

        if self.winner:
            reward = 10.0 if self.winner == PIECE_A else -10.0
        elif self.game_over:
            reward = 0.0
        else:
            reward = -0.01
            self.current_player = opponent(self.current_player)

        return self.snapshot(), reward, self.game_over, False, {"current_player": self.current_player}

    # Collaborator interface consumed by drivers and agents

    def board_size(self) -> int:
        return self.size

    def color_at(self, row: int, col: int) -> int:
        """Piece at (row, col), 0 when empty. Row 0 is the bottom row."""
        return int(self.board[row, col])

    def has_legal_move(self) -> bool:
        return not self.game_over and not is_full(self.board)

    def is_legal_column(self, col: int) -> bool:
        return is_legal(self.board, col)

    def drop_piece(self, col: int, piece: int) -> int:
        """Drop piece in column, update the result and return the landing row."""
        if piece not in (PIECE_A, PIECE_B):
            raise InvalidAction(f"Unknown piece {piece}")
        row = drop_row(self.board, col)
        self.board[row, col] = piece
        self.move_count += 1

        if has_four_in_row(self.board, piece):
            self.game_over = True
            self.winner = piece
        elif is_full(self.board):
            self.game_over = True

        return row

    def legal_actions(self) -> List[int]:
        """Get list of legal actions (non-full columns)."""
        if self.game_over:
            return []
        return legal_moves(self.board)

    def snapshot(self) -> np.ndarray:
        """Independent copy of the board."""
        return self.board.copy()

    def render(self) -> Optional[str]:
        """Render the current board state, top row first."""
        if self.render_mode == "ansi" or self.render_mode == "human":
            board_str = render_board(self.board) + "\n"

            if self.game_over:
                if self.winner == 0:
                    board_str += "Game Over: Draw!\n"
                else:
                    winner_symbol = "X" if self.winner == PIECE_A else "O"
                    board_str += f"Game Over: {winner_symbol} wins!\n"
            else:
                current_symbol = "X" if self.current_player == PIECE_A else "O"
                board_str += f"Current player: {current_symbol}\n"

            if self.render_mode == "human":
                print(board_str)
            else:
                return board_str

        return None

    def close(self) -> None:
        """Clean up resources."""
        pass
