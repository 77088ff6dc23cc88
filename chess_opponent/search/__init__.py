"""
Search Module

This module implements the adversarial search of the move-selection engine:
minimax with alpha-beta pruning over python-chess's legal move tree.

Key Components:
    - minimax: Core search algorithm with alpha-beta pruning
    - find_best_move: Root-level search function
    - is_terminal: Game-over test used at every node

"""

from chess_opponent.search.minimax import minimax, find_best_move, is_terminal

__all__ = ['minimax', 'find_best_move', 'is_terminal']
