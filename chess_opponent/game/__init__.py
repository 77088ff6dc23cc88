"""
Game Module

Player-versus-engine game flow on top of the move selection policy.

Key Components:
    - GameSession: game status, user moves, synchronous and background engine turns
    - SessionConfig: default difficulty, player colour, logging options
    - MoveApplicationError: engine move rejected by the live board
    - setup_logger: configure the package logger
"""

from chess_opponent.game.config import SessionConfig
from chess_opponent.game.session import (
    GameSession,
    GameStatus,
    MoveApplicationError,
    setup_logger,
)

__all__ = ['GameSession', 'GameStatus', 'MoveApplicationError', 'SessionConfig', 'setup_logger']
