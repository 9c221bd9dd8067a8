"""
Move generation for 11x11 Tafl.

Every piece slides like a rook along rows and columns. Corners take
only the king and end the slide. The throne takes only the king and
is otherwise transparent: other pieces slide across it whether or not
it is occupied.
"""

from __future__ import annotations
from typing import Iterator, TYPE_CHECKING

from .bitboard import (
    NUM_SQUARES, DIRECTIONS,
    iter_bits, step, is_corner, is_throne,
    sq_to_algebraic, algebraic_to_sq
)
from .board import Board, PieceKind

if TYPE_CHECKING:
    from .state import GameState


# Move encoding: src * 121 + dst
def encode_move(src: int, dst: int) -> int:
    """Encode a move as a single integer."""
    return src * NUM_SQUARES + dst


def decode_move(move: int) -> tuple[int, int]:
    """Decode a move into (src, dst)."""
    return move // NUM_SQUARES, move % NUM_SQUARES


def move_to_algebraic(move: int) -> str:
    """Convert move to algebraic notation."""
    src, dst = decode_move(move)
    return f"{sq_to_algebraic(src)}-{sq_to_algebraic(dst)}"


def algebraic_to_move(s: str) -> int:
    """Parse algebraic notation ('d11-d9') to a move."""
    parts = s.strip().split('-')
    if len(parts) != 2:
        raise ValueError(f"Invalid move format: {s}")
    src = algebraic_to_sq(parts[0])
    dst = algebraic_to_sq(parts[1])
    return encode_move(src, dst)


class MoveGenerator:
    """Generates legal destinations from board positions."""

    @staticmethod
    def get_destinations(board: Board, src: int) -> list[int]:
        """
        Destinations for the piece on src, ignoring whose turn it is.

        Directions are scanned down, up, right, left and each one nearest
        square first. An empty origin has no destinations.
        """
        kind = board.piece_at(src)
        if kind is None:
            return []
        is_king = kind is PieceKind.KING

        destinations = []
        for dr, dc in DIRECTIONS:
            sq = step(src, dr, dc)
            while sq is not None:
                if is_corner(sq):
                    if is_king and board.is_empty(sq):
                        destinations.append(sq)
                    break

                if is_throne(sq):
                    if is_king and board.is_empty(sq):
                        destinations.append(sq)
                        break
                    # Transparent to everything else, occupied or not
                    sq = step(sq, dr, dc)
                    continue

                if not board.is_empty(sq):
                    break
                destinations.append(sq)
                sq = step(sq, dr, dc)

        return destinations

    @staticmethod
    def can_move(state: GameState, src: int) -> bool:
        """Whether the piece on src may be moved in this state at all."""
        if state.is_terminal():
            return False
        kind = state.board.piece_at(src)
        if kind is None:
            return False
        if state.config.enforce_turns and kind.side is not state.current_side:
            return False
        return True

    @staticmethod
    def get_legal_moves(state: GameState, src: int) -> list[int]:
        """Legal destination squares for the piece on src."""
        if not MoveGenerator.can_move(state, src):
            return []
        return MoveGenerator.get_destinations(state.board, src)

    @staticmethod
    def iter_all_moves(state: GameState) -> Iterator[int]:
        """Encoded moves for every movable piece, in square order."""
        if state.is_terminal():
            return
        if state.config.enforce_turns:
            movers = state.board.side_mask(state.current_side)
        else:
            movers = state.board.occupied
        for src in iter_bits(movers):
            for dst in MoveGenerator.get_destinations(state.board, src):
                yield encode_move(src, dst)


# Convenience functions
def get_legal_moves(state: GameState, src: int) -> list[int]:
    """Get the legal destinations for one piece."""
    return MoveGenerator.get_legal_moves(state, src)


def get_all_moves(state: GameState) -> list[int]:
    """Get every legal move in the position, encoded."""
    return list(MoveGenerator.iter_all_moves(state))


def is_legal_move(state: GameState, src: int, dst: int) -> bool:
    """Check if a move is legal."""
    return dst in MoveGenerator.get_legal_moves(state, src)
