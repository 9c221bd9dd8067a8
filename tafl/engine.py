"""
Engine facade used by the presentation layers.

The engine owns one GameState. Queries never change it; apply_move
either fully succeeds or raises and leaves it untouched. Selection is
returned as a value instead of being tracked by the engine.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
import logging

from .config import RulesConfig
from .core.bitboard import check_sq, sq_to_algebraic
from .core.errors import IllegalMove, InvariantViolation
from .core.moves import MoveGenerator, get_all_moves
from .core.state import GameState, MoveResult, Outcome

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Selection:
    """A selected piece and where it may go. The origin is never a destination."""
    origin: int
    destinations: tuple[int, ...]

    @property
    def highlighted(self) -> tuple[int, ...]:
        """Origin plus destinations, for boards that highlight both."""
        return (self.origin,) + self.destinations


class Engine:
    """Single-game rules engine."""

    def __init__(self, config: Optional[RulesConfig] = None) -> None:
        self.config = config or RulesConfig()
        self.state = GameState.new_game(self.config)
        self._aborted = False

    def reset(self) -> GameState:
        """Start a fresh game from the configured layout."""
        self.state = GameState.new_game(self.config)
        self._aborted = False
        logger.info("New game, %s to move", self.state.current_side.name.lower())
        return self.state

    @property
    def aborted(self) -> bool:
        """True once an internal error has stopped this game."""
        return self._aborted

    @property
    def outcome(self) -> Outcome:
        return self.state.outcome

    def get_legal_moves(self, sq: int) -> list[int]:
        """Destinations for the piece on sq; empty when it cannot move now."""
        check_sq(sq)
        if self._aborted:
            return []
        return MoveGenerator.get_legal_moves(self.state, sq)

    def select(self, sq: int) -> Selection:
        return Selection(origin=sq, destinations=tuple(self.get_legal_moves(sq)))

    def all_moves(self) -> list[int]:
        """Every legal move for the side to move, encoded."""
        if self._aborted:
            return []
        return get_all_moves(self.state)

    def apply_move(self, src: int, dst: int) -> MoveResult:
        """Play a move. Raises IllegalMove (state unchanged) if it is not legal."""
        if self._aborted:
            raise IllegalMove("Game was aborted after an internal error; reset required")
        try:
            result = self.state.apply_move(src, dst)
        except InvariantViolation:
            self._aborted = True
            logger.exception(
                "Invariant violated applying %s-%s", sq_to_algebraic(src), sq_to_algebraic(dst)
            )
            raise

        if result.outcome is not Outcome.IN_PROGRESS:
            logger.info("Game over after %d plies: %s", result.ply, result.outcome.value)
        return result
