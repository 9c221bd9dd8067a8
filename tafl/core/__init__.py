"""Core game logic: bitboards, board model, moves, captures and state."""

from .bitboard import *
from .errors import TaflError, OutOfBounds, IllegalMove, InvariantViolation
from .board import Board, PieceKind, Side
from .moves import MoveGenerator
from .state import GameState, MoveResult, Outcome
