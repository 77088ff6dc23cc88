"""
Difficulty Tiers and Move Selection

Maps a difficulty tier to engine behaviour:

    Tier     Strategy
    ------   ------------------------------------------
    easy     uniform random legal move, no search
    medium   search to depth 2
    hard     search to depth 3

The depths are fixed. strategy_for() is the only place a strategy is
built from a tier.
"""

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

import chess

from chess_opponent.evaluation.base import Evaluator
from chess_opponent.search.minimax import find_best_move

logger = logging.getLogger(__name__)

MEDIUM_DEPTH = 2
HARD_DEPTH = 3


class Difficulty(Enum):
    """Strength tier of the automated opponent."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @classmethod
    def from_label(cls, label: Union[str, "Difficulty"]) -> "Difficulty":
        """
        Parse a difficulty label.

        Accepts the tier names and the aliases "low" and "high",
        case-insensitively.

        Raises:
            ValueError: If the label names no tier
        """
        if isinstance(label, cls):
            return label

        key = str(label).strip().lower()
        key = _ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise ValueError(
                f"Unknown difficulty {label!r}; expected one of "
                f"{', '.join(d.value for d in cls)}"
            ) from None


_ALIASES = {"low": "easy", "high": "hard"}


@dataclass(frozen=True)
class RandomMove:
    """Play a uniformly random legal move."""


@dataclass(frozen=True)
class SearchToDepth:
    """Play the best move found by a fixed-depth search."""

    depth: int


Strategy = Union[RandomMove, SearchToDepth]


def strategy_for(difficulty: Union[str, Difficulty]) -> Strategy:
    """Return the strategy a difficulty tier plays with."""
    difficulty = Difficulty.from_label(difficulty)

    if difficulty is Difficulty.EASY:
        return RandomMove()
    if difficulty is Difficulty.MEDIUM:
        return SearchToDepth(MEDIUM_DEPTH)
    return SearchToDepth(HARD_DEPTH)


def select_move(
    board: chess.Board,
    difficulty: Union[str, Difficulty],
    evaluator: Optional[Evaluator] = None,
    rng: Optional[random.Random] = None,
) -> Optional[chess.Move]:
    """
    Choose the move the automated opponent plays.

    Args:
        board: Position to move from (unchanged on return)
        difficulty: Difficulty tier or its label
        evaluator: Evaluator for the search tiers (default: MaterialEvaluator)
        rng: Random source for the random tier (default: module-level random)

    Returns:
        The chosen move, or None if the side to move has no legal move
    """
    strategy = strategy_for(difficulty)

    legal_moves = list(board.legal_moves)
    if not legal_moves:
        return None

    if isinstance(strategy, RandomMove):
        move = (rng or random).choice(legal_moves)
        logger.debug("Random move: %s", move.uci())
        return move

    move, score, nodes = find_best_move(board, strategy.depth, evaluator)
    logger.debug(
        "Selected %s at depth %d (score=%s, nodes=%d)",
        move.uci(), strategy.depth, score, nodes,
    )
    return move
