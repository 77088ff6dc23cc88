"""
chess_opponent

The move-selection engine of an automated chess opponent: given a position
and a difficulty tier, it chooses the move the computer plays.

## Architecture

1. **board**: 12-channel tensor view of a python-chess Board

2. **evaluation**: Position evaluation functions
   - Abstract Evaluator interface (swappable design)
   - MaterialEvaluator: fixed per-piece weights

3. **search**: Minimax with alpha-beta pruning

4. **policy**: Difficulty tiers
   - easy: random legal move
   - medium: search depth 2
   - hard: search depth 3

5. **game**: Player-versus-engine game session with a background engine worker

## Quick Start

```python
import chess
from chess_opponent import select_move

board = chess.Board()
move = select_move(board, "medium")
print(f"Engine plays: {move}")
```

## Version

0.1.0
"""

__version__ = "0.1.0"
__license__ = "MIT"

from chess_opponent.evaluation import Evaluator, MaterialEvaluator, evaluate
from chess_opponent.search import minimax, find_best_move
from chess_opponent.policy import Difficulty, select_move
from chess_opponent.game import GameSession, SessionConfig

__all__ = [
    'Evaluator',
    'MaterialEvaluator',
    'evaluate',
    'minimax',
    'find_best_move',
    'Difficulty',
    'select_move',
    'GameSession',
    'SessionConfig',
]
