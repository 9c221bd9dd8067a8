"""
Board model for 11x11 Tafl.

Pieces are kept as three bitboards, one per piece kind, so occupancy
tests and side masks are plain integer operations.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional
import numpy as np

from .bitboard import (
    ROWS, COLS,
    bit, popcount, iter_bits, lsb, cell_at, check_sq,
    is_corner, is_throne, is_hostile, sq_to_algebraic
)
from .errors import InvariantViolation


class Side(Enum):
    ATTACKERS = 0
    DEFENDERS = 1

    def opponent(self) -> Side:
        return Side.DEFENDERS if self is Side.ATTACKERS else Side.ATTACKERS


class PieceKind(Enum):
    ATTACKER = 1
    DEFENDER = 2
    KING = 3

    @property
    def side(self) -> Side:
        return Side.ATTACKERS if self is PieceKind.ATTACKER else Side.DEFENDERS

    def is_enemy_of(self, other: PieceKind) -> bool:
        return self.side is not other.side


@dataclass
class Board:
    """
    Occupancy of the 11x11 grid.

    Attributes:
        attackers: Bitboard of attacker pieces
        defenders: Bitboard of defender pieces (king excluded)
        king: Bitboard of the king (single bit, or 0 once captured)
    """
    attackers: int = 0
    defenders: int = 0
    king: int = 0

    # Cell classification is static; exposed here so callers need only the board
    is_corner = staticmethod(is_corner)
    is_throne = staticmethod(is_throne)
    is_hostile = staticmethod(is_hostile)
    cell_at = staticmethod(cell_at)

    @property
    def occupied(self) -> int:
        """Bitboard of all occupied squares."""
        return self.attackers | self.defenders | self.king

    def side_mask(self, side: Side) -> int:
        """Bitboard of every piece belonging to a side."""
        if side is Side.ATTACKERS:
            return self.attackers
        return self.defenders | self.king

    def piece_at(self, sq: int) -> Optional[PieceKind]:
        b = bit(check_sq(sq))
        if self.attackers & b:
            return PieceKind.ATTACKER
        if self.defenders & b:
            return PieceKind.DEFENDER
        if self.king & b:
            return PieceKind.KING
        return None

    def is_empty(self, sq: Optional[int]) -> bool:
        """True iff the square is on the board and unoccupied."""
        if sq is None:
            return False
        return not (self.occupied & bit(check_sq(sq)))

    def king_square(self) -> Optional[int]:
        if not self.king:
            return None
        return lsb(self.king)

    def count(self, kind: PieceKind) -> int:
        return popcount(self._mask(kind))

    def place_piece(self, sq: int, kind: PieceKind) -> None:
        """Put a piece on an empty square."""
        if not self.is_empty(sq):
            raise InvariantViolation(f"{sq_to_algebraic(sq)} is already occupied")
        if kind is PieceKind.KING and self.king:
            raise InvariantViolation("Board already has a king")
        self._set_mask(kind, self._mask(kind) | bit(sq))

    def remove_piece(self, sq: int) -> PieceKind:
        """Clear a square and return what stood there."""
        kind = self.piece_at(sq)
        if kind is None:
            raise InvariantViolation(f"No piece to remove on {sq_to_algebraic(sq)}")
        self._set_mask(kind, self._mask(kind) & ~bit(sq))
        return kind

    def move_piece(self, src: int, dst: int) -> PieceKind:
        """Relocate the piece on src to the empty square dst."""
        kind = self.piece_at(src)
        if kind is None:
            raise InvariantViolation(f"No piece to move on {sq_to_algebraic(src)}")
        if not self.is_empty(dst):
            raise InvariantViolation(f"Cannot move onto occupied {sq_to_algebraic(dst)}")
        self._set_mask(kind, (self._mask(kind) & ~bit(src)) | bit(dst))
        return kind

    def validate(self) -> None:
        """Raise InvariantViolation if pieces overlap or there is more than one king."""
        if (self.attackers & self.defenders) or (self.attackers & self.king) \
                or (self.defenders & self.king):
            raise InvariantViolation("Two pieces share a square")
        if popcount(self.king) > 1:
            raise InvariantViolation("More than one king on the board")

    def copy(self) -> Board:
        return Board(self.attackers, self.defenders, self.king)

    def to_array(self) -> np.ndarray:
        """
        Board as an (11, 11) int8 grid indexed [row, col].

        0 = empty, 1 = attacker, 2 = defender, 3 = king.
        """
        grid = np.zeros((ROWS, COLS), dtype=np.int8)
        for kind in PieceKind:
            for sq in iter_bits(self._mask(kind)):
                grid[sq // COLS, sq % COLS] = kind.value
        return grid

    def _mask(self, kind: PieceKind) -> int:
        if kind is PieceKind.ATTACKER:
            return self.attackers
        if kind is PieceKind.DEFENDER:
            return self.defenders
        return self.king

    def _set_mask(self, kind: PieceKind, value: int) -> None:
        if kind is PieceKind.ATTACKER:
            self.attackers = value
        elif kind is PieceKind.DEFENDER:
            self.defenders = value
        else:
            self.king = value
