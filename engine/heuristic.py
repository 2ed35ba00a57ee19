"""heuristic evaluator

static positional score of a board for one piece, a fixed linear
combination of 4-cell window pattern counts plus a center-column bonus.
"""

from typing import Sequence
import numpy as np

from .board import EMPTY, center_column, opponent, windows


CENTER_WEIGHT = 3
FOUR_SCORE = 100
THREE_SCORE = 5
TWO_SCORE = 2
OPPONENT_THREE_PENALTY = 4


def window_score(window: Sequence[int], piece: int) -> int:
    """evaluate a window of 4 positions for piece."""
    window = np.asarray(window)
    own = int(np.sum(window == piece))
    empty = int(np.sum(window == EMPTY))
    opp = int(np.sum(window == opponent(piece)))

    score = 0
    if own == 4:
        score += FOUR_SCORE
    elif own == 3 and empty == 1:
        score += THREE_SCORE
    elif own == 2 and empty == 2:
        score += TWO_SCORE

    if opp == 3 and empty == 1:
        score -= OPPONENT_THREE_PENALTY

    return score


def score(board: np.ndarray, piece: int) -> int:
    """score the board from piece's point of view, higher is better.

    same result as summing window_score over windows(board) plus the
    center bonus, computed over all windows at once.
    """
    center = board[:, center_column(board.shape[1])]
    total = CENTER_WEIGHT * int(np.sum(center == piece))

    cells = windows(board)
    own = np.sum(cells == piece, axis=1)
    empty = np.sum(cells == EMPTY, axis=1)
    opp = np.sum(cells == opponent(piece), axis=1)

    pattern = np.select(
        [own == 4, (own == 3) & (empty == 1), (own == 2) & (empty == 2)],
        [FOUR_SCORE, THREE_SCORE, TWO_SCORE],
        default=0,
    )
    threat = (opp == 3) & (empty == 1)

    total += int(np.sum(pattern)) - OPPONENT_THREE_PENALTY * int(np.sum(threat))
    return total
