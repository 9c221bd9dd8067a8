"""Tests for the board model."""

import numpy as np
import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from tafl.core.bitboard import rowcol_to_sq, THRONE, bit
from tafl.core.board import Board, PieceKind, Side
from tafl.core.errors import InvariantViolation, OutOfBounds
from conftest import A, D, K, make_board


class TestPieceKinds:
    def test_sides(self):
        assert PieceKind.ATTACKER.side is Side.ATTACKERS
        assert PieceKind.DEFENDER.side is Side.DEFENDERS
        assert PieceKind.KING.side is Side.DEFENDERS

    def test_enemies(self):
        assert A.is_enemy_of(D)
        assert A.is_enemy_of(K)
        assert K.is_enemy_of(A)
        assert not D.is_enemy_of(K)
        assert not A.is_enemy_of(A)

    def test_opponent(self):
        assert Side.ATTACKERS.opponent() is Side.DEFENDERS
        assert Side.DEFENDERS.opponent() is Side.ATTACKERS


class TestLookup:
    def test_piece_at(self):
        board = make_board({(0, 3): A, (4, 4): D, (5, 5): K})
        assert board.piece_at(rowcol_to_sq(0, 3)) is A
        assert board.piece_at(rowcol_to_sq(4, 4)) is D
        assert board.piece_at(THRONE) is K
        assert board.piece_at(rowcol_to_sq(1, 1)) is None

    def test_piece_at_off_board(self):
        with pytest.raises(OutOfBounds):
            Board().piece_at(121)

    def test_is_empty(self):
        board = make_board({(5, 5): K})
        assert not board.is_empty(THRONE)
        assert board.is_empty(rowcol_to_sq(0, 1))
        assert not board.is_empty(None)

    def test_cell_at_and_classification(self):
        board = Board()
        assert board.cell_at(0, 0) == 0
        assert board.cell_at(0, 11) is None
        assert board.is_corner(board.cell_at(10, 0))
        assert board.is_throne(board.cell_at(5, 5))
        assert not board.is_corner(board.cell_at(5, 5))

    def test_side_masks(self):
        board = make_board({(0, 3): A, (4, 4): D, (5, 5): K})
        assert board.side_mask(Side.ATTACKERS) == bit(rowcol_to_sq(0, 3))
        assert board.side_mask(Side.DEFENDERS) == bit(rowcol_to_sq(4, 4)) | bit(THRONE)

    def test_king_square(self):
        assert make_board({(2, 7): K}).king_square() == rowcol_to_sq(2, 7)
        assert Board().king_square() is None


class TestMutation:
    def test_move_piece(self):
        board = make_board({(0, 3): A, (5, 5): K})
        kind = board.move_piece(rowcol_to_sq(0, 3), rowcol_to_sq(3, 3))
        assert kind is A
        assert board.is_empty(rowcol_to_sq(0, 3))
        assert board.piece_at(rowcol_to_sq(3, 3)) is A

    def test_move_king(self):
        board = make_board({(5, 5): K})
        board.move_piece(THRONE, rowcol_to_sq(5, 8))
        assert board.king_square() == rowcol_to_sq(5, 8)

    def test_move_from_empty_square(self):
        board = make_board({(5, 5): K})
        with pytest.raises(InvariantViolation):
            board.move_piece(rowcol_to_sq(1, 1), rowcol_to_sq(1, 2))

    def test_move_onto_occupied_square(self):
        board = make_board({(1, 1): A, (1, 2): D, (5, 5): K})
        with pytest.raises(InvariantViolation):
            board.move_piece(rowcol_to_sq(1, 1), rowcol_to_sq(1, 2))
        # Nothing changed
        assert board.piece_at(rowcol_to_sq(1, 1)) is A
        assert board.piece_at(rowcol_to_sq(1, 2)) is D

    def test_remove_piece(self):
        board = make_board({(1, 1): A, (5, 5): K})
        assert board.remove_piece(rowcol_to_sq(1, 1)) is A
        assert board.is_empty(rowcol_to_sq(1, 1))

    def test_remove_from_empty_square(self):
        with pytest.raises(InvariantViolation):
            Board().remove_piece(0)

    def test_second_king_rejected(self):
        board = make_board({(5, 5): K})
        with pytest.raises(InvariantViolation):
            board.place_piece(rowcol_to_sq(1, 1), K)

    def test_copy_is_independent(self):
        board = make_board({(1, 1): A, (5, 5): K})
        clone = board.copy()
        clone.remove_piece(rowcol_to_sq(1, 1))
        assert board.piece_at(rowcol_to_sq(1, 1)) is A
        assert clone != board


class TestValidate:
    def test_valid_board(self):
        make_board({(1, 1): A, (2, 2): D, (5, 5): K}).validate()

    def test_overlap(self):
        board = Board(attackers=bit(5), defenders=bit(5), king=bit(60))
        with pytest.raises(InvariantViolation):
            board.validate()

    def test_two_kings(self):
        board = Board(king=bit(5) | bit(60))
        with pytest.raises(InvariantViolation):
            board.validate()


class TestToArray:
    def test_grid_values(self):
        board = make_board({(0, 3): A, (4, 4): D, (5, 5): K})
        grid = board.to_array()
        assert grid.shape == (11, 11)
        assert grid.dtype == np.int8
        assert grid[0, 3] == 1
        assert grid[4, 4] == 2
        assert grid[5, 5] == 3
        assert grid.sum() == 6
