"""
Move Selection Policy

Turns a difficulty tier into engine behaviour: a random legal move for the
easiest tier, a fixed-depth minimax search for the others.

Key Components:
    - Difficulty: easy / medium / hard (aliases: low, high)
    - RandomMove, SearchToDepth: the two strategies a tier maps to
    - strategy_for: tier → strategy
    - select_move: position + tier → move (or None when there is no legal move)
"""

from chess_opponent.policy.difficulty import (
    Difficulty,
    RandomMove,
    SearchToDepth,
    strategy_for,
    select_move,
)

__all__ = ['Difficulty', 'RandomMove', 'SearchToDepth', 'strategy_for', 'select_move']
