#!/usr/bin/env python3
"""
Terminal-based Tafl client.

Two players share one keyboard; the engine enforces the rules.
"""

from __future__ import annotations
import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from tafl.config import RulesConfig, parse_side
from tafl.core.bitboard import ROWS, COLS, FILES, rowcol_to_sq, is_hostile, algebraic_to_sq
from tafl.core.board import PieceKind
from tafl.core.errors import IllegalMove, OutOfBounds
from tafl.core.moves import decode_move, move_to_algebraic
from tafl.core.notation import PIECE_SYMBOLS, squares_to_text
from tafl.core.state import GameState, Outcome
from tafl.engine import Engine, Selection

# ANSI color codes
GREEN = '\033[92m'
YELLOW = '\033[93m'
DIM = '\033[2m'
RESET = '\033[0m'

WIN_MESSAGES = {
    Outcome.ATTACKERS_WIN: "Attackers win! The king has been captured.",
    Outcome.DEFENDERS_WIN: "Defenders win! The king escaped to a corner.",
}


def print_board(state: GameState, selection: Optional[Selection] = None) -> None:
    """Print the board with optional selection highlighting.

    Symbols:
        A = attacker, D = defender, K = king
        + = empty corner or throne
        Yellow = selected piece, green = its destinations
    """
    targets = set(selection.destinations) if selection else set()
    origin = selection.origin if selection else None

    print()
    print("    +" + "-" * (COLS * 2 + 1) + "+")
    for row in range(ROWS):
        line = f"{ROWS - row:>2}  |"
        for col in range(COLS):
            sq = rowcol_to_sq(row, col)
            kind = state.board.piece_at(sq)
            if kind is not None:
                sym = PIECE_SYMBOLS[kind]
            elif is_hostile(sq):
                sym = '+'
            else:
                sym = '.'

            if sq == origin:
                line += f" {YELLOW}{sym}{RESET}"
            elif sq in targets:
                line += f" {GREEN}{sym}{RESET}"
            elif sym == '+':
                line += f" {DIM}{sym}{RESET}"
            else:
                line += f" {sym}"
        line += " |"
        print(line)
    print("    +" + "-" * (COLS * 2 + 1) + "+")
    print("      " + " ".join(FILES))
    print()


def parse_command(input_str: str) -> tuple[str, list[str]]:
    """Split user input into a command name and its arguments."""
    input_str = input_str.strip().lower()
    if input_str in ['q', 'quit', 'exit']:
        return 'quit', []
    if input_str in ['h', 'help', '?']:
        return 'help', []
    if input_str in ['m', 'moves']:
        return 'show_moves', []
    if input_str in ['r', 'reset', 'restart']:
        return 'reset', []

    parts = input_str.split()
    if len(parts) == 2 and parts[0] in ['s', 'select']:
        return 'select', [parts[1]]
    if '-' in input_str:
        return 'move', input_str.replace(' ', '').split('-')
    return 'unknown', [input_str]


def show_legal_moves(engine: Engine) -> None:
    """Display all legal moves grouped by piece."""
    moves = engine.all_moves()
    if not moves:
        print("No legal moves!")
        return

    by_kind: dict[PieceKind, list[str]] = {}
    for move in moves:
        src, _ = decode_move(move)
        kind = engine.state.board.piece_at(src)
        by_kind.setdefault(kind, []).append(move_to_algebraic(move))

    for kind, texts in by_kind.items():
        print(f"{kind.name.capitalize()} moves ({len(texts)}):", ", ".join(texts))


def print_help() -> None:
    print("Enter moves like 'd11-d9' to move a piece")
    print("'s d11' to show where a piece can go, 'm' to list all moves")
    print("'r' to restart, 'q' to quit")


def play(engine: Engine) -> None:
    """Run the game loop until a player quits."""
    print("\n=== Tafl 11x11 ===")
    print("Attackers (A) capture the king; defenders (D) bring the king (K) to a corner.")
    print_help()

    selection: Optional[Selection] = None
    while True:
        state = engine.state
        print_board(state, selection)
        selection = None

        if state.is_terminal():
            print(WIN_MESSAGES[state.outcome])
            print("'r' to play again, 'q' to quit")
        else:
            print(f"{state.current_side.name.capitalize()} to move (ply {state.ply})")

        try:
            user_input = input("> ")
        except EOFError:
            return

        command, args = parse_command(user_input)

        if command == 'quit':
            print("Thanks for playing!")
            return
        elif command == 'help':
            print_help()
        elif command == 'show_moves':
            show_legal_moves(engine)
        elif command == 'reset':
            engine.reset()
            print("New game.")
        elif command == 'select':
            try:
                selection = engine.select(algebraic_to_sq(args[0]))
            except OutOfBounds as e:
                print(e)
                continue
            if selection.destinations:
                print("Destinations:", squares_to_text(list(selection.destinations)))
            else:
                print("That piece cannot move.")
        elif command == 'move' and len(args) == 2:
            try:
                result = engine.apply_move(algebraic_to_sq(args[0]), algebraic_to_sq(args[1]))
            except (OutOfBounds, IllegalMove) as e:
                print(f"Illegal move: {e}")
                continue
            print(f"Played: {result.algebraic}")
        else:
            print(f"Invalid input: {user_input.strip()}. Type 'h' for help")


def main():
    parser = argparse.ArgumentParser(description='Tafl Terminal Client')
    parser.add_argument('--layout', type=str, help='Path to a starting layout diagram')
    parser.add_argument('--first', type=str, help='Side that moves first (attackers/defenders)')
    parser.add_argument('--free-turns', action='store_true',
                        help='Let either side move at any time')
    parser.add_argument('--log-level', type=str, default='WARNING', help='Logging level')

    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = RulesConfig.from_env(
        layout_path=args.layout,
        first_side=parse_side(args.first) if args.first else None,
        enforce_turns=False if args.free_turns else None,
    )
    play(Engine(config))


if __name__ == '__main__':
    main()
