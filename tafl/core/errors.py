"""Exceptions raised by the rules engine."""


class TaflError(Exception):
    """Base class for rules engine errors."""


class OutOfBounds(TaflError, IndexError):
    """A coordinate or square name is not on the 11x11 board."""


class IllegalMove(TaflError, ValueError):
    """The move is not allowed in the current position.

    Raised for an empty origin, a piece of the side not on move, a
    destination outside the legal set, or any move after the game ended.
    The game state is left unchanged.
    """


class InvariantViolation(TaflError, RuntimeError):
    """Internal board corruption (overlapping pieces, a second king, ...)."""
