#!/usr/bin/env python3
"""
Play tic-tac-toe against the MTD(f) engine in the terminal.
Usage: python scripts/play_tictactoe.py --size 5
       python scripts/play_tictactoe.py --size 6 --self-play --time-ms 500
"""

import argparse
import logging

from tictactoe_mtdf.config import ENGINE_CONFIG, GAME_CONFIG
from tictactoe_mtdf.engine.mtdf import MtdfEngine
from tictactoe_mtdf.game.events import GameFinished, MarkPlaced
from tictactoe_mtdf.game.game import TicTacToeGame
from tictactoe_mtdf.game.types import GameResult


def get_human_move(game):
    """Get move from human player"""
    while True:
        move_str = input(f"Your move as {game.current_turn} (row col, e.g. '1 1'): ")
        try:
            row, col = map(int, move_str.split())
        except ValueError:
            print("Invalid input! Use format 'row col' (e.g., '1 1')")
            continue
        if not (0 <= row < game.size and 0 <= col < game.size):
            print("That cell is off the board! Try again.")
            continue
        return row, col


def print_events(events):
    for event in events:
        if isinstance(event, MarkPlaced):
            print(f"{event.mark} -> ({event.row}, {event.col})")
        elif isinstance(event, GameFinished):
            if event.result is GameResult.COMBO:
                combo = event.combo
                print(f"Combo from ({combo.start_row}, {combo.start_col}) "
                      f"to ({combo.stop_row}, {combo.stop_col})")
            else:
                print(f"Game over: {event.result.name.lower()}")


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument('--size', type=int, default=GAME_CONFIG['default_size'])
    ap.add_argument('--swap', action='store_true', help='First player uses O')
    ap.add_argument('--ai-first', action='store_true', help='Engine makes the first move')
    ap.add_argument('--self-play', action='store_true', help='Engine plays both sides')
    ap.add_argument('--time-ms', type=int, default=ENGINE_CONFIG['max_search_time_ms'])
    ap.add_argument('--seed', type=int, default=GAME_CONFIG['hash_seed'])
    ap.add_argument('--verbose', action='store_true')
    args = ap.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s %(name)s %(levelname)s %(message)s'
    )

    game = TicTacToeGame(seed=args.seed)
    engine = MtdfEngine(max_search_time_ms=args.time_ms)

    game.start(args.size, swap_marks=args.swap)
    ai_turn = game.current_turn if (args.ai_first or args.self_play) else game.next_turn

    print("\n" + "=" * 40)
    print(f"Tic-tac-toe {args.size}x{args.size} - {game.combo_size} in a row wins")
    print("=" * 40)

    while game.is_active:
        print()
        print(game.render())
        print()

        if args.self_play or game.current_turn is ai_turn:
            result = engine.search(game.snapshot())
            print(f"Engine ({game.current_turn}) plays ({result.move.row}, {result.move.col}) "
                  f"[depth {result.depth_reached}, {result.nodes_searched:,} nodes, {result.time_ms}ms]")
            move = game.place_mark(result.move.row, result.move.col)
        else:
            row, col = get_human_move(game)
            move = game.place_mark(row, col)
            if not move:
                print("Cell is occupied! Try again.")
                continue

        print_events(move.events)

    print()
    print(game.render())


if __name__ == '__main__':
    main()
