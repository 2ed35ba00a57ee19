"""board snapshot and move model

pure functions over a square connect-4 board stored as a numpy array.
row 0 is the bottom row, pieces stack upward and the top row is size - 1.
no function here mutates its input board.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import List, Sequence
import numpy as np
from gymnasium.error import InvalidAction


EMPTY = 0
PIECE_A = 1
PIECE_B = 2

WINDOW_LENGTH = 4


@dataclass(frozen=True)
class BoardConfig:
    """immutable board geometry held by each engine instance."""

    size: int = 7
    connect: int = WINDOW_LENGTH

    def __post_init__(self) -> None:
        if self.size < 1:
            raise ValueError(f"Board size must be positive, got {self.size}")
        if self.connect != WINDOW_LENGTH:
            raise ValueError(f"Only {WINDOW_LENGTH}-in-a-row is supported, got {self.connect}")

    @property
    def center_column(self) -> int:
        return center_column(self.size)

    def check(self, board: np.ndarray) -> None:
        """raise if the board does not match this geometry."""
        if board.shape != (self.size, self.size):
            raise ValueError(
                f"Expected a {self.size}x{self.size} board, got shape {board.shape}"
            )


def empty_board(size: int) -> np.ndarray:
    return np.zeros((size, size), dtype=np.int8)


def board_from_rows(rows: Sequence[str]) -> np.ndarray:
    """build a board from rows written top to bottom.

    each row is a string of '.', 'X' (piece a) and 'O' (piece b), so a
    board reads the way it is printed:

        board_from_rows([
            "....",
            "....",
            ".O..",
            "XXO.",
        ])
    """
    symbols = {".": EMPTY, "X": PIECE_A, "O": PIECE_B}
    size = len(rows)
    board = empty_board(size)
    for i, line in enumerate(rows):
        if len(line) != size:
            raise ValueError(f"Row {i} has length {len(line)}, expected {size}")
        for col, char in enumerate(line):
            board[size - 1 - i, col] = symbols[char]
    return board


def opponent(piece: int) -> int:
    return 3 - piece


def center_column(size: int) -> int:
    return size // 2


def is_legal(board: np.ndarray, col: int) -> bool:
    """check if a piece can be dropped in the column (top cell is empty)."""
    size = board.shape[1]
    return 0 <= col < size and board[-1, col] == EMPTY


def legal_moves(board: np.ndarray) -> List[int]:
    """get legal columns in ascending order."""
    return [int(col) for col in np.flatnonzero(board[-1] == EMPTY)]


def drop_row(board: np.ndarray, col: int) -> int:
    """row index a piece dropped in the column would land on."""
    if not is_legal(board, col):
        raise InvalidAction(f"Column {col} is full or out of range")
    return int(np.flatnonzero(board[:, col] == EMPTY)[0])


def apply(board: np.ndarray, col: int, piece: int) -> np.ndarray:
    """apply move to a copy of the board and return the new board state."""
    row = drop_row(board, col)
    new_board = board.copy()
    new_board[row, col] = piece
    return new_board


@lru_cache(maxsize=None)
def window_index(size: int) -> np.ndarray:
    """flat cell indices of every 4-cell window on a size x size board.

    windows are listed horizontal first, then vertical, then "\\"
    diagonals (board[r + i, c + i]), then "/" diagonals
    (board[r + 3 - i, c + i]). the result is read-only and shared.
    """
    n = WINDOW_LENGTH
    steps = np.arange(n)
    cells = []

    for row in range(size):
        for col in range(size - n + 1):
            cells.append(list(zip([row] * n, col + steps)))

    for col in range(size):
        for row in range(size - n + 1):
            cells.append(list(zip(row + steps, [col] * n)))

    for row in range(size - n + 1):
        for col in range(size - n + 1):
            cells.append(list(zip(row + steps, col + steps)))

    for row in range(size - n + 1):
        for col in range(size - n + 1):
            cells.append(list(zip(row + n - 1 - steps, col + steps)))

    if not cells:
        index = np.empty((0, n), dtype=np.intp)
    else:
        index = np.array(
            [[r * size + c for r, c in window] for window in cells], dtype=np.intp
        )
    index.setflags(write=False)
    return index


def windows(board: np.ndarray) -> np.ndarray:
    """every window of the board as an array of shape (num_windows, 4)."""
    return board.ravel()[window_index(board.shape[0])]


def has_four_in_row(board: np.ndarray, piece: int) -> bool:
    """check rows, columns and both diagonals for four pieces in a row."""
    return bool(np.any(np.all(windows(board) == piece, axis=1)))


def is_full(board: np.ndarray) -> bool:
    return not np.any(board[-1] == EMPTY)


def is_terminal(board: np.ndarray) -> bool:
    """a board is terminal when either side has four in a row or it is full."""
    return (
        has_four_in_row(board, PIECE_A)
        or has_four_in_row(board, PIECE_B)
        or is_full(board)
    )


def render_board(board: np.ndarray) -> str:
    """draw the board with the top row first."""
    cols = board.shape[1]
    lines = ["", " " + " ".join(str(i) for i in range(cols)), "+" + "-" * (cols * 2 - 1) + "+"]

    for row in board[::-1]:
        cells = []
        for piece in row:
            if piece == EMPTY:
                cells.append(" ")
            elif piece == PIECE_A:
                cells.append("X")
            else:
                cells.append("O")
        lines.append("|" + " ".join(cells) + "|")

    lines.append("+" + "-" * (cols * 2 - 1) + "+")
    return "\n".join(lines)
