"""
Board Representation Module

This module provides a tensor view of chess positions. The evaluator reads
piece placement through it, and the tests use it to build colour-swapped
positions.

Key Components:
    - board_to_tensor: Converts python-chess Board to a 12-channel tensor (12-8-8)
    - tensor_to_board: Inverse conversion (piece placement only)
    - swap_piece_colors: Same squares, every piece handed to the other side

Data Flow:
    python-chess Board → board_to_tensor() → (12, 8, 8) numpy array → evaluator
"""

from chess_opponent.board.representation import (
    board_to_tensor,
    tensor_to_board,
    swap_piece_colors,
)

__all__ = ['board_to_tensor', 'tensor_to_board', 'swap_piece_colors']
