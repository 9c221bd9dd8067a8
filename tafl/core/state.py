"""
Game state representation for 11x11 Tafl.

Holds the board, the side to move and the outcome, and applies moves:
relocation, captures, then the win check.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional
import logging

from .bitboard import check_sq, is_corner, sq_to_algebraic
from .board import Board, PieceKind, Side
from .captures import resolve_captures
from .errors import IllegalMove
from .moves import MoveGenerator
from .notation import load_layout, format_board
from ..config import RulesConfig

logger = logging.getLogger(__name__)


class Outcome(Enum):
    IN_PROGRESS = "in_progress"
    ATTACKERS_WIN = "attackers_win"
    DEFENDERS_WIN = "defenders_win"

    @property
    def winner(self) -> Optional[Side]:
        if self is Outcome.ATTACKERS_WIN:
            return Side.ATTACKERS
        if self is Outcome.DEFENDERS_WIN:
            return Side.DEFENDERS
        return None


@dataclass
class MoveResult:
    """Everything a move changed, returned once the move is fully applied."""
    src: int
    dst: int
    piece: PieceKind
    board: Board
    captured: list[int]
    outcome: Outcome
    ply: int

    @property
    def algebraic(self) -> str:
        """Move text with captures, e.g. 'd11-d9 x d8'."""
        text = f"{sq_to_algebraic(self.src)}-{sq_to_algebraic(self.dst)}"
        if self.captured:
            text += " x " + " ".join(sq_to_algebraic(sq) for sq in self.captured)
        return text


@dataclass
class GameState:
    """
    Represents the complete state of a Tafl game.

    Attributes:
        board: Piece placement
        current_side: Side to move
        outcome: IN_PROGRESS until the king escapes or is captured
        ply: Number of half-moves played
        history: Results of the moves played this session (display only)
        config: Rules configuration this game was created with
    """
    board: Board
    current_side: Side = Side.ATTACKERS
    outcome: Outcome = Outcome.IN_PROGRESS
    ply: int = 0
    history: list[MoveResult] = field(default_factory=list)
    config: RulesConfig = field(default_factory=RulesConfig)

    @classmethod
    def new_game(cls, config: Optional[RulesConfig] = None) -> GameState:
        """Create a new game from the configured starting layout."""
        config = config or RulesConfig()
        board = load_layout(config.layout_path)
        board.validate()
        return cls(board=board, current_side=config.first_side, config=config)

    def is_terminal(self) -> bool:
        """Check if game is over."""
        return self.outcome is not Outcome.IN_PROGRESS

    def get_winner(self) -> Optional[Side]:
        """Return the winning side, or None while the game is running."""
        return self.outcome.winner

    def get_result(self, side: Side) -> float:
        """Get game result from a side's perspective: 1.0=win, 0.0=loss, 0.5=ongoing."""
        winner = self.get_winner()
        if winner is None:
            return 0.5
        return 1.0 if winner is side else 0.0

    def copy(self) -> GameState:
        """Copy with an independent board (history is not carried over)."""
        return GameState(
            board=self.board.copy(),
            current_side=self.current_side,
            outcome=self.outcome,
            ply=self.ply,
            config=self.config,
        )

    def check_move(self, src: int, dst: int) -> PieceKind:
        """Raise IllegalMove unless src -> dst may be played now."""
        if self.is_terminal():
            raise IllegalMove(f"Game is over ({self.outcome.value})")
        check_sq(src)
        check_sq(dst)
        kind = self.board.piece_at(src)
        if kind is None:
            raise IllegalMove(f"No piece on {sq_to_algebraic(src)}")
        if self.config.enforce_turns and kind.side is not self.current_side:
            raise IllegalMove(
                f"{sq_to_algebraic(src)} belongs to the {kind.side.name.lower()}, "
                f"{self.current_side.name.lower()} to move"
            )
        if dst not in MoveGenerator.get_destinations(self.board, src):
            raise IllegalMove(
                f"{sq_to_algebraic(src)}-{sq_to_algebraic(dst)} is not a legal move"
            )
        return kind

    def apply_move(self, src: int, dst: int) -> MoveResult:
        """
        Play src -> dst and return what happened.

        The move is validated first and computed on a copy of the board,
        so a rejected or failed move leaves the state untouched.

        Order of evaluation:
        1. Relocate the piece.
        2. King on a corner: defenders win, no captures are resolved.
        3. Resolve captures around dst, then sweep corners and throne.
        4. King among the captured pieces: attackers win.
        """
        kind = self.check_move(src, dst)

        board = self.board.copy()
        board.move_piece(src, dst)

        captured: list[int] = []
        if kind is PieceKind.KING and is_corner(dst):
            outcome = Outcome.DEFENDERS_WIN
        else:
            report = resolve_captures(board, src, dst)
            captured = report.squares
            outcome = Outcome.ATTACKERS_WIN if report.king_captured else Outcome.IN_PROGRESS

        board.validate()

        # Commit
        self.board = board
        self.outcome = outcome
        self.ply += 1
        if outcome is Outcome.IN_PROGRESS:
            self.current_side = self.current_side.opponent()

        result = MoveResult(
            src=src,
            dst=dst,
            piece=kind,
            board=board,
            captured=captured,
            outcome=outcome,
            ply=self.ply,
        )
        self.history.append(result)
        logger.debug("Ply %d: %s", self.ply, result.algebraic)
        return result

    def __repr__(self) -> str:
        """Pretty print the board."""
        lines = [format_board(self.board, coordinates=True)]
        if self.is_terminal():
            lines.append(f"\nGame over: {self.outcome.value} (ply {self.ply})")
        else:
            lines.append(f"\n{self.current_side.name.capitalize()} to move (ply {self.ply})")
        return "\n".join(lines)
