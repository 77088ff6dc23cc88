#!/usr/bin/env python3
"""
Difficulty Tier Match Runner

Plays games between two difficulty tiers and prints the results, as a quick
check that stronger tiers beat weaker ones.

Usage:
    python tools/play_match.py [--white hard] [--black easy] [--games 4] [--max-moves 200]
"""

import sys
import argparse
import random
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import chess

from chess_opponent.evaluation import MaterialEvaluator
from chess_opponent.game import setup_logger
from chess_opponent.policy import Difficulty, select_move
from chess_opponent.search import is_terminal


def format_time(seconds: float) -> str:
    """Format time"""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        minutes = int(seconds // 60)
        secs = seconds % 60
        return f"{minutes}m {secs:.0f}s"


def play_game(white: Difficulty, black: Difficulty, max_moves: int, rng: random.Random) -> str:
    """
    Play one game between two tiers.

    Returns:
        Result string: "1-0", "0-1", "1/2-1/2", or "*" if max_moves was reached
    """
    evaluator = MaterialEvaluator()
    board = chess.Board()

    while not is_terminal(board) and len(board.move_stack) < max_moves:
        tier = white if board.turn == chess.WHITE else black
        move = select_move(board, tier, evaluator=evaluator, rng=rng)
        if move is None:
            break
        board.push(move)

    if board.is_checkmate():
        return "0-1" if board.turn == chess.WHITE else "1-0"
    if is_terminal(board):
        return "1/2-1/2"
    return "*"


def run_match(white: Difficulty, black: Difficulty, games: int, max_moves: int, seed: int):
    """
    Play a match, swapping colours every game.

    Args:
        white: Tier playing White in the first game
        black: Tier playing Black in the first game
        games: Number of games
        max_moves: Plies per game before it is abandoned
        seed: Seed for the random tier
    """
    rng = random.Random(seed)
    scores = {white: 0.0, black: 0.0}

    print("=" * 60)
    print(f"MATCH: {white.value} vs {black.value} ({games} games)")
    print("=" * 60)

    for game_index in range(games):
        first, second = (white, black) if game_index % 2 == 0 else (black, white)

        start_time = time.time()
        result = play_game(first, second, max_moves, rng)
        elapsed = time.time() - start_time

        if result == "1-0":
            scores[first] += 1
        elif result == "0-1":
            scores[second] += 1
        elif result == "1/2-1/2":
            scores[first] += 0.5
            scores[second] += 0.5

        print(f"Game {game_index + 1}: {first.value} - {second.value}  {result:<8} {format_time(elapsed)}")

    print("-" * 60)
    for tier, score in scores.items():
        print(f"{tier.value:<8} {score:.1f}")
    print("=" * 60)

    return scores


def main():
    parser = argparse.ArgumentParser(
        description="Play games between two difficulty tiers"
    )
    parser.add_argument("--white", type=str, default="hard", help="Tier for White in game 1 (default: hard)")
    parser.add_argument("--black", type=str, default="easy", help="Tier for Black in game 1 (default: easy)")
    parser.add_argument("--games", type=int, default=4, help="Number of games (default: 4)")
    parser.add_argument("--max-moves", type=int, default=200, help="Plies before a game is abandoned (default: 200)")
    parser.add_argument("--seed", type=int, default=42, help="Seed for the random tier (default: 42)")
    parser.add_argument("--verbose", action="store_true", help="Log every move and search")

    args = parser.parse_args()

    try:
        white = Difficulty.from_label(args.white)
        black = Difficulty.from_label(args.black)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    if white is black:
        print("Error: choose two different tiers")
        sys.exit(1)

    setup_logger(debug=args.verbose)

    try:
        run_match(white, black, args.games, args.max_moves, args.seed)
    except KeyboardInterrupt:
        print("\n\nMatch interrupted by user")
        sys.exit(1)


if __name__ == "__main__":
    main()
