"""
Abstract Evaluator Interface

This module defines the abstract base class for all position evaluators.
By defining a common interface, we can swap between evaluators without
modifying the search algorithm.

Key Principles:
    1. Evaluators are stateless
    2. evaluate() always scores from White's perspective
    3. Positive = White advantage, Negative = Black advantage
    4. Game-over positions get no special score; the search scores them
       like any other leaf

Convention:
    - Material in pawn-tenths (pawn = 10, queen = 90)
    - Return 0 for materially equal positions
"""

from abc import ABC, abstractmethod
import chess


class Evaluator(ABC):
    """
    Abstract base class for position evaluation.

    All evaluator implementations must inherit from this class and implement
    the evaluate() method. This ensures compatibility with the search algorithm.
    """

    @abstractmethod
    def evaluate(self, board: chess.Board) -> int:
        """
        Evaluate a chess position from White's perspective.

        Must not modify the board.

        Args:
            board: python-chess Board object to evaluate

        Returns:
            int: Signed score, positive when White is better
        """
        pass

    def __repr__(self) -> str:
        """String representation of evaluator."""
        return f"{self.__class__.__name__}()"
