"""
Bitboard utilities for 11x11 Tafl.

Board layout (11 rows x 11 cols = 121 squares, held in a Python int):

  11 |   0   1   2   3   4   5   6   7   8   9  10
  10 |  11  12  13  14  15  16  17  18  19  20  21
   9 |  22  ...
   .
   1 | 110 111 112 113 114 115 116 117 118 119 120
     +--------------------------------------------
        a   b   c   d   e   f   g   h   i   j   k

Square index = row * 11 + col (row 0 = rank 11 at the top, col 0 = file a).
"""

from typing import Iterator, Optional

from .errors import OutOfBounds

# Board dimensions
ROWS = 11
COLS = 11
NUM_SQUARES = ROWS * COLS  # 121

FILES = "abcdefghijk"

# Mask for valid squares (bits 0-120)
VALID_MASK = (1 << NUM_SQUARES) - 1

# Orthogonal steps in scan order: down, up, right, left
DIRECTIONS = [(1, 0), (-1, 0), (0, 1), (0, -1)]


def rowcol_to_sq(row: int, col: int) -> int:
    """Convert (row, col) to square index."""
    return row * COLS + col


def sq_to_rowcol(sq: int) -> tuple[int, int]:
    """Convert square index to (row, col)."""
    return sq // COLS, sq % COLS


def is_valid_sq(row: int, col: int) -> bool:
    """Check if (row, col) is on the board."""
    return 0 <= row < ROWS and 0 <= col < COLS


def cell_at(row: int, col: int) -> Optional[int]:
    """Bounds-checked lookup: square index, or None off the board."""
    if not is_valid_sq(row, col):
        return None
    return rowcol_to_sq(row, col)


def require_sq(row: int, col: int) -> int:
    """Like cell_at, but off-board coordinates raise OutOfBounds."""
    if not is_valid_sq(row, col):
        raise OutOfBounds(f"({row}, {col}) is off the board")
    return rowcol_to_sq(row, col)


def check_sq(sq: int) -> int:
    """Validate a raw square index."""
    if not 0 <= sq < NUM_SQUARES:
        raise OutOfBounds(f"Square {sq} is off the board")
    return sq


def step(sq: int, dr: int, dc: int, distance: int = 1) -> Optional[int]:
    """Square reached by moving `distance` steps along (dr, dc), or None."""
    row, col = sq_to_rowcol(sq)
    return cell_at(row + dr * distance, col + dc * distance)


def sq_to_algebraic(sq: int) -> str:
    """Convert square index to algebraic notation (e.g., 'f6')."""
    row, col = sq_to_rowcol(sq)
    return FILES[col] + str(ROWS - row)


def algebraic_to_sq(s: str) -> int:
    """Convert algebraic notation to square index."""
    s = s.strip().lower()
    if len(s) < 2 or s[0] not in FILES or not s[1:].isdigit():
        raise OutOfBounds(f"Invalid square: {s!r}")
    col = FILES.index(s[0])
    row = ROWS - int(s[1:])
    return require_sq(row, col)


def bit(sq: int) -> int:
    """Return bitboard with single bit set at square."""
    return 1 << sq


def popcount(bb: int) -> int:
    """Count number of set bits."""
    return bin(bb).count('1')


def lsb(bb: int) -> int:
    """Return index of least significant bit (or -1 if empty)."""
    if bb == 0:
        return -1
    return (bb & -bb).bit_length() - 1


def iter_bits(bb: int) -> Iterator[int]:
    """Iterate over indices of set bits, lowest square first."""
    while bb:
        sq = lsb(bb)
        yield sq
        bb &= bb - 1  # Clear LSB


def bb_to_squares(bb: int) -> list[int]:
    """Convert bitboard to list of square indices."""
    return list(iter_bits(bb))


# Special squares
CORNERS = [
    rowcol_to_sq(0, 0),
    rowcol_to_sq(0, COLS - 1),
    rowcol_to_sq(ROWS - 1, 0),
    rowcol_to_sq(ROWS - 1, COLS - 1),
]
THRONE = rowcol_to_sq(ROWS // 2, COLS // 2)

CORNER_MASK = 0
for _sq in CORNERS:
    CORNER_MASK |= bit(_sq)
THRONE_MASK = bit(THRONE)

# Squares that act as an enemy custodian for captures
HOSTILE_MASK = CORNER_MASK | THRONE_MASK


def is_corner(sq: int) -> bool:
    return bool(CORNER_MASK & bit(sq))


def is_throne(sq: int) -> bool:
    return sq == THRONE


def is_hostile(sq: int) -> bool:
    """Corner or throne."""
    return bool(HOSTILE_MASK & bit(sq))

