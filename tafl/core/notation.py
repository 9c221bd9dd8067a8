"""
Text notation for 11x11 Tafl.

Board diagrams use one line per row, row 0 (rank 11) first:

```
. . . A A A A A . . .
. . . . . A . . . . .
...
```

Symbols:
- A: attacker
- D: defender
- K: king
- . or +: empty (formatting prints empty corners and throne as +)

Whitespace inside a line is ignored. Blank lines and lines starting
with '#' are skipped, so layout files may carry comments.

Squares are named by file letter and rank number ("a11" is the top-left
corner, "f6" the throne) and moves as "d11-d9".
"""

from __future__ import annotations
from pathlib import Path

from .bitboard import ROWS, COLS, FILES, rowcol_to_sq, is_hostile, sq_to_algebraic
from .board import Board, PieceKind
from .errors import InvariantViolation

PIECE_SYMBOLS = {
    PieceKind.ATTACKER: 'A',
    PieceKind.DEFENDER: 'D',
    PieceKind.KING: 'K',
}
SYMBOL_PIECES = {sym: kind for kind, sym in PIECE_SYMBOLS.items()}
EMPTY_SYMBOLS = {'.', '+'}

# 24 attackers on the edges, 12 defenders around the king on the throne
STANDARD_LAYOUT = """
. . . A A A A A . . .
. . . . . A . . . . .
. . . . . . . . . . .
A . . . . D . . . . A
A . . . D D D . . . A
A A . D D K D D . A A
A . . . D D D . . . A
A . . . . D . . . . A
. . . . . . . . . . .
. . . . . A . . . . .
. . . A A A A A . . .
"""


def parse_board(text: str) -> Board:
    """Build a board from a diagram. Raises ValueError on malformed input."""
    rows = []
    for line in text.splitlines():
        stripped = "".join(line.split())
        if not stripped or stripped.startswith('#'):
            continue
        rows.append(stripped)

    if len(rows) != ROWS:
        raise ValueError(f"Expected {ROWS} rows, got {len(rows)}")

    board = Board()
    for row, line in enumerate(rows):
        if len(line) != COLS:
            raise ValueError(f"Row {row} has {len(line)} cells, expected {COLS}")
        for col, ch in enumerate(line.upper()):
            if ch in EMPTY_SYMBOLS:
                continue
            if ch not in SYMBOL_PIECES:
                raise ValueError(f"Unknown symbol {ch!r} at row {row}, col {col}")
            board.place_piece(rowcol_to_sq(row, col), SYMBOL_PIECES[ch])

    if board.count(PieceKind.KING) != 1:
        raise InvariantViolation("Layout must contain exactly one king")
    return board


def format_board(board: Board, coordinates: bool = False) -> str:
    """Render a board as a diagram that parse_board accepts."""
    lines = []
    for row in range(ROWS):
        cells = []
        for col in range(COLS):
            sq = rowcol_to_sq(row, col)
            kind = board.piece_at(sq)
            if kind is not None:
                cells.append(PIECE_SYMBOLS[kind])
            elif is_hostile(sq):
                cells.append('+')
            else:
                cells.append('.')
        line = " ".join(cells)
        if coordinates:
            line = f"{ROWS - row:>2} | {line}"
        lines.append(line)
    if coordinates:
        lines.append("   +" + "-" * (COLS * 2))
        lines.append("     " + " ".join(FILES))
    return "\n".join(lines)


def load_layout(path: str | Path | None = None) -> Board:
    """Read a layout file, or the standard layout when no path is given."""
    if path is None:
        return parse_board(STANDARD_LAYOUT)
    return parse_board(Path(path).read_text())


def squares_to_text(squares: list[int]) -> str:
    """Comma separated square names, e.g. 'd9, d8'."""
    return ", ".join(sq_to_algebraic(sq) for sq in squares)
