"""
Custodian captures for 11x11 Tafl.

A piece is captured when the move just made leaves it sandwiched along
a row or column between the moving piece and either another piece of
the mover's side or a hostile square (a corner or the throne). The
hostile squares count whether or not they are occupied.

After the four directions are checked, any non-king piece standing on
a corner or the throne is removed as well.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

from .bitboard import DIRECTIONS, CORNERS, THRONE, bit, step, is_hostile, sq_to_algebraic
from .board import Board, PieceKind

logger = logging.getLogger(__name__)


@dataclass
class CaptureReport:
    """Pieces removed by one move, in the order they were taken."""
    captured: list[tuple[int, PieceKind]] = field(default_factory=list)

    @property
    def squares(self) -> list[int]:
        return [sq for sq, _ in self.captured]

    @property
    def king_captured(self) -> bool:
        return any(kind is PieceKind.KING for _, kind in self.captured)


def is_custodian(board: Board, sq: int | None, mover: PieceKind) -> bool:
    """Whether sq closes a sandwich for the mover's side."""
    if sq is None:
        return False
    if is_hostile(sq):
        return True
    return bool(board.side_mask(mover.side) & bit(sq))


def find_captures(board: Board, src: int, dst: int) -> list[int]:
    """
    Squares of enemy pieces sandwiched by the piece that just moved src -> dst.

    The board must already show the piece on dst. Directions are checked
    down, up, right, left. A sandwich whose far side is the mover's own
    origin square is ignored.
    """
    mover = board.piece_at(dst)
    if mover is None:
        return []

    found = []
    for dr, dc in DIRECTIONS:
        enemy_sq = step(dst, dr, dc)
        if enemy_sq is None:
            continue
        enemy = board.piece_at(enemy_sq)
        if enemy is None or not mover.is_enemy_of(enemy):
            continue

        behind_sq = step(dst, dr, dc, distance=2)
        if not is_custodian(board, behind_sq, mover):
            continue
        if behind_sq == src:
            continue
        found.append(enemy_sq)
    return found


def clear_hostile_squares(board: Board) -> list[tuple[int, PieceKind]]:
    """Remove every non-king piece standing on a corner or the throne."""
    removed = []
    for sq in CORNERS + [THRONE]:
        kind = board.piece_at(sq)
        if kind is not None and kind is not PieceKind.KING:
            board.remove_piece(sq)
            removed.append((sq, kind))
    return removed


def resolve_captures(board: Board, src: int, dst: int) -> CaptureReport:
    """
    Remove every piece the move src -> dst captures. Modifies board in-place.

    All four directions and the hostile-square sweep always run to
    completion, even when the king is among the captured pieces; the
    caller decides the outcome from the report.
    """
    report = CaptureReport()
    for sq in find_captures(board, src, dst):
        kind = board.remove_piece(sq)
        report.captured.append((sq, kind))
        logger.debug("Captured %s on %s", kind.name.lower(), sq_to_algebraic(sq))

    for sq, kind in clear_hostile_squares(board):
        report.captured.append((sq, kind))
        logger.debug("Removed %s from hostile square %s", kind.name.lower(), sq_to_algebraic(sq))

    return report
