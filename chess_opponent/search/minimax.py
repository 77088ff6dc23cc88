"""
Minimax Search with Alpha-Beta Pruning

This module implements the core search algorithm of the move-selection
engine. Minimax explores the game tree to find the best move, and alpha-beta
pruning skips subtrees that cannot change the result.

Key Concepts:
    - Minimax: Recursive algorithm that assumes optimal play by both sides
    - Alpha-Beta: Optimization that prunes branches that can't affect result
    - Make/Unmake: One board is shared by the whole tree; every push is
      matched by a pop before control returns, on every exit path

Moves are searched in the order python-chess generates them. There is no
move ordering, transposition table or iterative deepening, so pruning
never changes the score, only the number of nodes visited.

References:
    - Minimax: https://www.chessprogramming.org/Minimax
    - Alpha-Beta: https://www.chessprogramming.org/Alpha-Beta
"""

import logging
import math
from typing import List, Optional, Tuple

import chess

from chess_opponent.evaluation.base import Evaluator
from chess_opponent.evaluation.material import MaterialEvaluator

logger = logging.getLogger(__name__)


def is_terminal(board: chess.Board) -> bool:
    """
    Check whether the game is over in this position.

    Checkmate, stalemate, insufficient material, the fifty-move rule and a
    threefold repetition count alike. A repetition counts once the position
    has occurred three times, not when the side to move could only claim one
    with its next move.
    """
    return (
        board.is_game_over()
        or board.is_fifty_moves()
        or board.is_repetition(3)
    )


def minimax(
    board: chess.Board,
    depth: int,
    alpha: float,
    beta: float,
    maximizing_player: bool,
    evaluator: Evaluator,
    nodes_searched: Optional[List[int]] = None,
) -> float:
    """
    Minimax search with alpha-beta pruning.

    This is the core search function. It recursively explores the game tree,
    assuming both players play optimally, and returns the evaluation of the
    best line found.

    Args:
        board: Current chess position (mutated during the call, restored on return)
        depth: Remaining search depth (decrements each recursive call)
        alpha: Alpha value for pruning (best score for maximizer)
        beta: Beta value for pruning (best score for minimizer)
        maximizing_player: True if current player wants to maximize score
        evaluator: Position evaluation function
        nodes_searched: Optional mutable list [count] to track nodes visited

    Returns:
        float: Evaluation of the position from White's perspective

    Algorithm:
        1. Depth 0 or game over → evaluate position
        2. Generate all legal moves
        3. For each move:
            a. Make move on board
            b. Recursively search (depth - 1)
            c. Undo move (always, even if the recursion raised)
            d. Update alpha/beta
            e. Prune if beta <= alpha
        4. Return best score found

    Game-over leaves are scored by material only, checkmate included.
    """
    if nodes_searched is not None:
        nodes_searched[0] += 1

    if depth == 0 or is_terminal(board):
        return evaluator.evaluate(board)

    legal_moves = list(board.legal_moves)
    if not legal_moves:
        return evaluator.evaluate(board)

    if maximizing_player:
        max_eval = -math.inf
        for move in legal_moves:
            board.push(move)
            try:
                eval_score = minimax(
                    board, depth - 1, alpha, beta, False, evaluator, nodes_searched
                )
            finally:
                board.pop()

            max_eval = max(max_eval, eval_score)
            alpha = max(alpha, eval_score)

            # Beta cutoff: Minimizing player won't allow this branch
            if beta <= alpha:
                break

        return max_eval

    min_eval = math.inf
    for move in legal_moves:
        board.push(move)
        try:
            eval_score = minimax(
                board, depth - 1, alpha, beta, True, evaluator, nodes_searched
            )
        finally:
            board.pop()

        min_eval = min(min_eval, eval_score)
        beta = min(beta, eval_score)

        # Alpha cutoff: Maximizing player won't allow this branch
        if beta <= alpha:
            break

    return min_eval


def find_best_move(
    board: chess.Board,
    depth: int,
    evaluator: Optional[Evaluator] = None,
) -> Tuple[Optional[chess.Move], float, int]:
    """
    Find the best move in the current position.

    Each root move is searched with a fresh (-inf, +inf) window. The first
    move reaching the best score wins ties, so the result depends only on
    the position and python-chess's move generation order.

    Args:
        board: Current chess position (unchanged on return)
        depth: Search depth in plies, at least 1
        evaluator: Position evaluation function (default: MaterialEvaluator)

    Returns:
        Tuple of (best_move, evaluation, nodes)
            - best_move: The best move found, or None if there is no legal move
            - evaluation: Score of the best move (static evaluation if no move)
            - nodes: Number of search nodes visited

    Raises:
        ValueError: If depth is smaller than 1
    """
    if depth < 1:
        raise ValueError(f"depth must be at least 1, got {depth}")

    if evaluator is None:
        evaluator = MaterialEvaluator()

    legal_moves = list(board.legal_moves)
    if not legal_moves:
        logger.debug("No legal moves in %s", board.fen())
        return None, evaluator.evaluate(board), 0

    maximizing = board.turn == chess.WHITE

    best_move = None
    best_score = -math.inf if maximizing else math.inf

    nodes = [0]
    for move in legal_moves:
        board.push(move)
        try:
            score = minimax(
                board,
                depth - 1,
                -math.inf,
                math.inf,
                not maximizing,
                evaluator,
                nodes_searched=nodes,
            )
        finally:
            board.pop()

        if maximizing:
            if score > best_score:
                best_score = score
                best_move = move
        else:
            if score < best_score:
                best_score = score
                best_move = move

    if best_move is None:
        best_move = legal_moves[0]

    logger.debug(
        "Search depth=%d: best_move=%s score=%s nodes=%d",
        depth, best_move.uci(), best_score, nodes[0],
    )

    return best_move, best_score, nodes[0]
