"""Shared fixtures for building positions square by square."""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from tafl.config import RulesConfig
from tafl.core.bitboard import rowcol_to_sq
from tafl.core.board import Board, PieceKind
from tafl.core.state import GameState

A = PieceKind.ATTACKER
D = PieceKind.DEFENDER
K = PieceKind.KING


def make_board(pieces: dict) -> Board:
    """Board from {(row, col): PieceKind}."""
    board = Board()
    for (row, col), kind in pieces.items():
        board.place_piece(rowcol_to_sq(row, col), kind)
    return board


def make_state(pieces: dict, enforce_turns: bool = False) -> GameState:
    """Game state on a custom board; turns are free unless asked for."""
    return GameState(
        board=make_board(pieces),
        config=RulesConfig(enforce_turns=enforce_turns),
    )


@pytest.fixture
def standard_state():
    return GameState.new_game()
