"""Tests for the terminal client."""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from cli.play import parse_command, play, print_board, show_legal_moves
from tafl.config import RulesConfig
from tafl.engine import Engine


def run_session(monkeypatch, lines):
    inputs = iter(lines)
    monkeypatch.setattr("builtins.input", lambda prompt="": next(inputs))
    engine = Engine(RulesConfig())
    play(engine)
    return engine


class TestParseCommand:
    @pytest.mark.parametrize("text,command", [
        ("q", "quit"),
        ("EXIT", "quit"),
        ("?", "help"),
        ("m", "show_moves"),
        ("restart", "reset"),
    ])
    def test_simple_commands(self, text, command):
        assert parse_command(text) == (command, [])

    def test_move(self):
        assert parse_command("D11-d9") == ("move", ["d11", "d9"])
        assert parse_command("d11 - d9") == ("move", ["d11", "d9"])

    def test_select(self):
        assert parse_command("s f10") == ("select", ["f10"])

    def test_unknown(self):
        assert parse_command("castle")[0] == "unknown"


class TestSession:
    def test_play_move_then_quit(self, monkeypatch, capsys):
        engine = run_session(monkeypatch, ["d11-d9", "q"])
        out = capsys.readouterr().out
        assert "Played: d11-d9" in out
        assert "Defenders to move" in out
        assert engine.state.ply == 1

    def test_illegal_move(self, monkeypatch, capsys):
        engine = run_session(monkeypatch, ["d11-d5", "q"])
        assert "Illegal move" in capsys.readouterr().out
        assert engine.state.ply == 0

    def test_select_shows_destinations(self, monkeypatch, capsys):
        run_session(monkeypatch, ["s d11", "q"])
        assert "Destinations: d10, d9, d8, d7, c11, b11" in capsys.readouterr().out

    def test_reset(self, monkeypatch, capsys):
        engine = run_session(monkeypatch, ["d11-d9", "r", "q"])
        assert "New game." in capsys.readouterr().out
        assert engine.state.ply == 0

    def test_end_of_input(self, monkeypatch):
        def eof(prompt=""):
            raise EOFError
        monkeypatch.setattr("builtins.input", eof)
        play(Engine(RulesConfig()))


class TestOutput:
    def test_print_board(self, capsys):
        engine = Engine(RulesConfig())
        print_board(engine.state, engine.select(0))
        out = capsys.readouterr().out
        assert "11  |" in out
        assert "K" in out

    def test_show_legal_moves(self, capsys):
        show_legal_moves(Engine(RulesConfig()))
        out = capsys.readouterr().out
        assert out.startswith("Attacker moves")
        assert "d11-d9" in out
