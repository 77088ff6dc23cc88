"""
Material Evaluation

Scores a position by summing a fixed weight per piece: added for White
pieces, subtracted for Black pieces. There is no positional term, so the
score only changes on captures and promotions.

Evaluation Components:
    - Material: P=10, N=30, B=30, R=50, Q=90, K=900

The king weight is constant on both sides of any legal position and
cancels out; it only matters on hand-built boards missing a king.
"""

from types import MappingProxyType

import chess
import numpy as np

from chess_opponent.board.representation import CHANNEL_TO_PIECE, NUM_CHANNELS, board_to_tensor
from chess_opponent.evaluation.base import Evaluator


PIECE_VALUES = MappingProxyType({
    chess.PAWN: 10,
    chess.KNIGHT: 30,
    chess.BISHOP: 30,
    chess.ROOK: 50,
    chess.QUEEN: 90,
    chess.KING: 900,
})


def _signed_channel_weights() -> np.ndarray:
    """Weight per tensor channel: positive for White channels, negative for Black."""
    weights = np.zeros(NUM_CHANNELS, dtype=np.int64)
    for channel, (piece_type, color) in CHANNEL_TO_PIECE.items():
        value = PIECE_VALUES[piece_type]
        weights[channel] = value if color == chess.WHITE else -value
    return weights


class MaterialEvaluator(Evaluator):
    """
    Material-only evaluation.

    Attributes:
        channel_weights: Signed weight for each of the 12 piece channels
    """

    def __init__(self):
        self.channel_weights = _signed_channel_weights()
        self.channel_weights.setflags(write=False)

    def evaluate(self, board: chess.Board) -> int:
        """
        Evaluate position by material balance.

        Args:
            board: Chess board to evaluate

        Returns:
            int: Material balance (White's perspective)
        """
        counts = board_to_tensor(board).sum(axis=(1, 2), dtype=np.int64)
        return int(counts @ self.channel_weights)


_default_evaluator = MaterialEvaluator()


def evaluate(board: chess.Board) -> int:
    """Evaluate a board with the shared MaterialEvaluator."""
    return _default_evaluator.evaluate(board)
