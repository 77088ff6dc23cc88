"""
Evaluation Module

This module provides position evaluation functions for the move-selection
engine. Evaluators are SWAPPABLE - the search algorithm works with any
evaluator that implements the base interface.

Key Components:
    - Evaluator (ABC): Abstract base class defining the evaluation interface
    - MaterialEvaluator: Fixed per-piece weights, no positional term
    - evaluate: Convenience function using a shared MaterialEvaluator

Data Flow:
    chess.Board → evaluator.evaluate() → int (material units)
                                          Positive = White advantage
                                          Negative = Black advantage

"""

from chess_opponent.evaluation.base import Evaluator
from chess_opponent.evaluation.material import MaterialEvaluator, PIECE_VALUES, evaluate

__all__ = ['Evaluator', 'MaterialEvaluator', 'PIECE_VALUES', 'evaluate']
