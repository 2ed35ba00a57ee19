"""Unit Tests for the Alpha-Beta Search Engine

Pruning must never change the root decision, only the number of nodes
visited. Tactical positions check wins, blocks and root perspective.
"""

import numpy as np
import pytest

import sys
from pathlib import Path
sys.path.append(str(Path(__file__).parent.parent))

from engine.board import (
    PIECE_A,
    PIECE_B,
    BoardConfig,
    apply,
    board_from_rows,
    empty_board,
    has_four_in_row,
    legal_moves,
)
from engine.search import LOSS_SCORE, WIN_SCORE, AlphaBetaSearch


# X to move with three in a row on the bottom
X_WINS_NOW = [
    ".......",
    ".......",
    ".......",
    ".......",
    ".......",
    "O......",
    "XXX..OO",
]

# X to move, O threatens to complete the bottom row in column 3 only
O_THREATENS = [
    ".......",
    ".......",
    ".......",
    ".......",
    ".......",
    "X......",
    "OOO...X",
]

# X to move, O threatens both column 0 and column 4
O_DOUBLE_THREAT = [
    ".......",
    ".......",
    ".......",
    ".......",
    ".......",
    ".XX....",
    ".OOO...",
]


class TestPruningEquivalence:
    """Alpha-beta returns the same column and score as plain minimax."""

    @pytest.mark.parametrize("size, moves, seed", [
        (5, 0, 0),
        (5, 6, 1),
        (6, 8, 2),
        (7, 0, 0),
        (7, 10, 3),
        (7, 16, 4),
    ])
    @pytest.mark.parametrize("depth", [1, 2, 3, 4])
    def test_same_result_as_unpruned(self, size, moves, seed, depth, random_position):
        board = random_position(size, moves, seed)
        config = BoardConfig(size=size)

        for piece in (PIECE_A, PIECE_B):
            pruned = AlphaBetaSearch(config, depth).search(board, piece)
            full = AlphaBetaSearch(config, depth, prune=False).search(board, piece)

            assert pruned.column == full.column
            assert pruned.score == full.score
            assert pruned.nodes <= full.nodes

    def test_pruning_visits_fewer_nodes(self):
        board = empty_board(7)
        config = BoardConfig(size=7)

        pruned = AlphaBetaSearch(config, 4).search(board, PIECE_A)
        full = AlphaBetaSearch(config, 4, prune=False).search(board, PIECE_A)

        # every node of the full tree: 1 + 7 + 49 + 343 + 2401
        assert full.nodes == 2801
        assert pruned.nodes < full.nodes


class TestTactics:
    """Forced wins and blocks."""

    @pytest.mark.parametrize("depth", [1, 2, 3, 4])
    def test_takes_immediate_win(self, depth):
        board = board_from_rows(X_WINS_NOW)
        result = AlphaBetaSearch(BoardConfig(size=7), depth).search(board, PIECE_A)

        assert result.column == 3
        assert has_four_in_row(apply(board, result.column, PIECE_A), PIECE_A)
        assert result.score == WIN_SCORE + depth - 1

    def test_prefers_immediate_win_over_later_win(self):
        # column 3 wins now; the search must not defer the win
        board = board_from_rows(X_WINS_NOW)
        for order in ("ascending", "center"):
            engine = AlphaBetaSearch(BoardConfig(size=7), 5, order=order)
            column = engine.search(board, PIECE_A).column
            assert has_four_in_row(apply(board, column, PIECE_A), PIECE_A)

    @pytest.mark.parametrize("depth", [2, 3, 4])
    def test_blocks_single_threat(self, depth):
        board = board_from_rows(O_THREATENS)
        result = AlphaBetaSearch(BoardConfig(size=7), depth).search(board, PIECE_A)

        assert result.column == 3
        assert result.score > LOSS_SCORE

    def test_lost_position_still_returns_legal_column(self):
        board = board_from_rows(O_DOUBLE_THREAT)
        result = AlphaBetaSearch(BoardConfig(size=7), 2).search(board, PIECE_A)

        assert result.column in legal_moves(board)
        assert result.score == LOSS_SCORE

    def test_lost_position_picks_first_column(self):
        # every reply loses on the next ply, so all columns tie
        board = board_from_rows(O_DOUBLE_THREAT)
        config = BoardConfig(size=7)

        pruned = AlphaBetaSearch(config, 3).search(board, PIECE_A)
        full = AlphaBetaSearch(config, 3, prune=False).search(board, PIECE_A)

        assert pruned.column == full.column == legal_moves(board)[0]
        assert pruned.score == full.score

    def test_root_perspective_for_second_player(self):
        # same threat, but O is to move and should simply win
        board = board_from_rows(O_THREATENS)
        result = AlphaBetaSearch(BoardConfig(size=7), 3).search(board, PIECE_B)

        assert result.column == 3
        assert result.score > WIN_SCORE


class TestSearch:
    """Root behaviour and configuration."""

    def test_empty_7x7_depth_4_plays_center(self):
        result = AlphaBetaSearch(BoardConfig(size=7), 4).search(empty_board(7), PIECE_A)

        assert result.column == 3

    def test_does_not_mutate_board(self, random_position):
        board = random_position(7, 12, 5)
        before = board.copy()

        AlphaBetaSearch(BoardConfig(size=7), 3).search(board, PIECE_A)

        assert np.array_equal(board, before)

    def test_deterministic_by_default(self, random_position):
        board = random_position(6, 9, 6)
        engine = AlphaBetaSearch(BoardConfig(size=6), 3)

        first = engine.search(board, PIECE_B)
        second = engine.search(board, PIECE_B)

        assert first == second

    def test_move_order_does_not_change_score(self, random_position):
        board = random_position(7, 10, 8)
        config = BoardConfig(size=7)

        ascending = AlphaBetaSearch(config, 3).search(board, PIECE_A)
        center = AlphaBetaSearch(config, 3, order="center").search(board, PIECE_A)

        assert ascending.score == center.score

    def test_center_order(self):
        engine = AlphaBetaSearch(BoardConfig(size=7), 1, order="center")

        assert engine.ordered_moves(empty_board(7)) == [3, 2, 4, 1, 5, 0, 6]

    def test_seeded_tie_break_is_reproducible(self, random_position):
        board = random_position(7, 6, 9)
        config = BoardConfig(size=7)
        baseline = AlphaBetaSearch(config, 3).search(board, PIECE_A)

        results = []
        for _ in range(2):
            engine = AlphaBetaSearch(config, 3, rng=np.random.default_rng(42))
            results.append([engine.search(board, PIECE_A) for _ in range(3)])

        assert [r.column for r in results[0]] == [r.column for r in results[1]]
        for result in results[0]:
            assert result.column in legal_moves(board)
            assert result.score == baseline.score

    def test_invalid_configuration(self):
        config = BoardConfig(size=7)

        with pytest.raises(ValueError):
            AlphaBetaSearch(config, 0)

        with pytest.raises(ValueError):
            AlphaBetaSearch(config, 2, order="random")

    def test_full_board_raises(self):
        board = board_from_rows([
            "OOXX",
            "XXOO",
            "OOXX",
            "XXOO",
        ])

        with pytest.raises(ValueError):
            AlphaBetaSearch(BoardConfig(size=4), 2).search(board, PIECE_A)

    def test_wrong_board_size_raises(self):
        with pytest.raises(ValueError):
            AlphaBetaSearch(BoardConfig(size=7), 2).search(empty_board(6), PIECE_A)
