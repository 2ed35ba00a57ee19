"""Shared fixtures for the test suite"""

import numpy as np
import pytest

import sys
from pathlib import Path
sys.path.append(str(Path(__file__).parent.parent))

from engine.board import PIECE_A, apply, empty_board, is_terminal, legal_moves, opponent


def play_random_position(size: int, moves: int, seed: int) -> np.ndarray:
    """play random legal moves, stopping before the game is decided."""
    rng = np.random.default_rng(seed)
    board = empty_board(size)
    piece = PIECE_A
    for _ in range(moves):
        candidate = apply(board, int(rng.choice(legal_moves(board))), piece)
        if is_terminal(candidate):
            break
        board = candidate
        piece = opponent(piece)
    return board


@pytest.fixture
def random_position():
    """builder for reproducible undecided positions."""
    return play_random_position
