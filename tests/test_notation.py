"""Tests for board diagrams and square lists."""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from tafl.core.bitboard import rowcol_to_sq, THRONE
from tafl.core.board import PieceKind
from tafl.core.errors import InvariantViolation
from tafl.core.notation import (
    STANDARD_LAYOUT, parse_board, format_board, load_layout, squares_to_text
)
from conftest import A, D, K, make_board


class TestStandardLayout:
    def test_piece_counts(self):
        board = parse_board(STANDARD_LAYOUT)
        assert board.count(PieceKind.ATTACKER) == 24
        assert board.count(PieceKind.DEFENDER) == 12
        assert board.count(PieceKind.KING) == 1

    def test_king_on_throne(self):
        assert parse_board(STANDARD_LAYOUT).king_square() == THRONE

    def test_corners_empty(self):
        board = parse_board(STANDARD_LAYOUT)
        for sq in [0, 10, 110, 120]:
            assert board.is_empty(sq)

    def test_symmetry(self):
        grid = parse_board(STANDARD_LAYOUT).to_array()
        assert (grid == grid.T).all()
        assert (grid == grid[::-1, :]).all()

    def test_load_layout_default(self):
        assert load_layout() == parse_board(STANDARD_LAYOUT)


class TestParse:
    def test_round_trip(self):
        board = parse_board(STANDARD_LAYOUT)
        assert parse_board(format_board(board)) == board

    def test_compact_rows_and_comments(self):
        text = "# king alone\n\n" + "\n".join(
            "....." + ("K" if row == 5 else ".") + "....." for row in range(11)
        )
        board = parse_board(text)
        assert board.king_square() == THRONE
        assert board.occupied == board.king

    def test_lowercase_symbols(self):
        text = "\n".join(
            ("a" if row == 0 else ".") + "....." + ("k" if row == 5 else ".") + "...."
            for row in range(11)
        )
        board = parse_board(text)
        assert board.piece_at(0) is A

    def test_wrong_row_count(self):
        with pytest.raises(ValueError):
            parse_board(". . .\n" * 10)

    def test_wrong_row_length(self):
        lines = STANDARD_LAYOUT.strip().splitlines()
        lines[3] = lines[3] + " ."
        with pytest.raises(ValueError):
            parse_board("\n".join(lines))

    def test_unknown_symbol(self):
        with pytest.raises(ValueError):
            parse_board(STANDARD_LAYOUT.replace("D", "Q", 1))

    def test_missing_king(self):
        with pytest.raises(InvariantViolation):
            parse_board(STANDARD_LAYOUT.replace("K", "."))

    def test_two_kings(self):
        with pytest.raises(InvariantViolation):
            parse_board(STANDARD_LAYOUT.replace("D", "K", 1))

    def test_load_layout_file(self, tmp_path):
        path = tmp_path / "custom.txt"
        path.write_text(format_board(make_board({(5, 5): K, (1, 1): D})))
        board = load_layout(path)
        assert board.piece_at(rowcol_to_sq(1, 1)) is D


class TestFormat:
    def test_hostile_squares_marked(self):
        lines = format_board(make_board({(2, 2): K})).splitlines()
        assert lines[0].split()[0] == '+'
        assert lines[10].split()[10] == '+'
        assert lines[5].split()[5] == '+'
        assert lines[2].split()[2] == 'K'

    def test_coordinates(self):
        text = format_board(parse_board(STANDARD_LAYOUT), coordinates=True)
        lines = text.splitlines()
        assert lines[0].startswith("11 |")
        assert lines[10].startswith(" 1 |")
        assert lines[-1].split() == list("abcdefghijk")

    def test_squares_to_text(self):
        assert squares_to_text([rowcol_to_sq(1, 3), rowcol_to_sq(2, 3)]) == "d10, d9"
        assert squares_to_text([]) == ""
