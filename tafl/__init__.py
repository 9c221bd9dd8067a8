"""Rules engine for 11x11 Tafl (Hnefatafl-style) games."""

from .core import Board, PieceKind, Side, GameState, MoveResult, Outcome
from .core import TaflError, OutOfBounds, IllegalMove, InvariantViolation
from .config import RulesConfig
from .engine import Engine, Selection

__version__ = "0.1.0"
