"""
Human vs Engine Game Session

This module holds the game logic of a player-versus-computer chess game,
without any rendering: game status, user moves, engine turns and the
background worker that keeps a UI thread responsive.

Game Flow:
    start_game(difficulty, player_color) → status PLAYING
    play_user_move(from, to)              → player's move (auto-queen promotion)
    request_engine_move(on_move)          → engine reply on a worker thread
    ...                                   → status CHECKMATE or DRAW

Threading:
    - The worker searches a copy of the board, so the search never shares
      its make/unmake board with the caller
    - The chosen move is applied to the live board under a lock
    - Starting a new game discards the reply of a search still in flight
"""

import logging
import random
import threading
import time
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Union

import chess

from chess_opponent.evaluation.base import Evaluator
from chess_opponent.evaluation.material import MaterialEvaluator
from chess_opponent.game.config import SessionConfig
from chess_opponent.policy.difficulty import Difficulty, select_move
from chess_opponent.search.minimax import is_terminal

logger = logging.getLogger(__name__)

SquareLike = Union[str, int]


def setup_logger(debug: bool = False, log_file: Optional[Path] = None) -> logging.Logger:
    """
    Setup the package logger.

    Args:
        debug: If True, log at DEBUG level; otherwise INFO level
        log_file: Log to this file (overwritten) instead of stderr

    Returns:
        Configured logger instance
    """
    package_logger = logging.getLogger("chess_opponent")
    package_logger.setLevel(logging.DEBUG if debug else logging.INFO)

    package_logger.handlers.clear()

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_file, mode='w')
    else:
        handler = logging.StreamHandler()

    formatter = logging.Formatter(
        '%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%H:%M:%S'
    )
    handler.setFormatter(formatter)
    package_logger.addHandler(handler)

    return package_logger


class MoveApplicationError(RuntimeError):
    """The engine chose a move that is illegal on the live board."""


class GameStatus(Enum):
    """Lifecycle of a game session."""

    INIT = "init"
    PLAYING = "playing"
    CHECKMATE = "checkmate"
    DRAW = "draw"


def parse_color(color: Union[str, bool]) -> chess.Color:
    """Convert 'white'/'black' (or a chess.Color) to a chess.Color."""
    if isinstance(color, bool):
        return color
    name = str(color).strip().lower()
    if name == "white":
        return chess.WHITE
    if name == "black":
        return chess.BLACK
    raise ValueError(f"Unknown color {color!r}; expected 'white' or 'black'")


def parse_square(square: SquareLike) -> chess.Square:
    """Convert a square name ('e2') or index (0-63) to a chess.Square."""
    if isinstance(square, str):
        return chess.parse_square(square.strip().lower())
    if square not in chess.SQUARES:
        raise ValueError(f"Square index out of range: {square}")
    return square


class GameSession:
    """
    One game between a human player and the automated opponent.

    Attributes:
        board: Live game position
        status: Current GameStatus
        difficulty: Opponent strength tier
        player_color: Colour the human plays
        last_move: Most recent move played by either side
        engine_thinking: True while a background search is running
        engine_error: Exception raised by the last background search, if any
    """

    def __init__(
        self,
        config: Optional[SessionConfig] = None,
        evaluator: Optional[Evaluator] = None,
    ):
        """
        Initialize a game session.

        Args:
            config: Session configuration (default: SessionConfig())
            evaluator: Evaluator for the search tiers (default: MaterialEvaluator)
        """
        self.config = config if config else SessionConfig()
        self.evaluator = evaluator if evaluator else MaterialEvaluator()
        self.rng = random.Random(self.config.random_seed)

        self.board = chess.Board()
        self.status = GameStatus.INIT
        self.difficulty = Difficulty.from_label(self.config.difficulty)
        self.player_color = parse_color(self.config.player_color)
        self.last_move: Optional[chess.Move] = None

        self.engine_thinking = False
        self.engine_error: Optional[BaseException] = None
        self._engine_thread: Optional[threading.Thread] = None

        self._lock = threading.RLock()
        # Bumped on every new game so stale engine replies are dropped
        self._generation = 0

    def start_game(
        self,
        difficulty: Union[str, Difficulty, None] = None,
        player_color: Union[str, bool, None] = None,
    ):
        """
        Start a new game from the initial position.

        Args:
            difficulty: Opponent tier (default: from config)
            player_color: Human's colour (default: from config)
        """
        with self._lock:
            self._generation += 1
            self.board = chess.Board()
            self.difficulty = Difficulty.from_label(
                difficulty if difficulty is not None else self.config.difficulty
            )
            self.player_color = parse_color(
                player_color if player_color is not None else self.config.player_color
            )
            self.status = GameStatus.PLAYING
            self.last_move = None

        logger.info(
            "New game: difficulty=%s, player=%s",
            self.difficulty.value, chess.COLOR_NAMES[self.player_color],
        )

    def reset(self):
        """Quit the current game and return to the INIT state."""
        with self._lock:
            self._generation += 1
            self.board = chess.Board()
            self.status = GameStatus.INIT
            self.last_move = None

        logger.info("Game reset")

    def is_player_turn(self) -> bool:
        """True if the human is to move in a running game."""
        return self.status is GameStatus.PLAYING and self.board.turn == self.player_color

    def is_engine_turn(self) -> bool:
        """True if the engine is to move in a running game."""
        return self.status is GameStatus.PLAYING and self.board.turn != self.player_color

    def play_user_move(self, from_square: SquareLike, to_square: SquareLike) -> Optional[chess.Move]:
        """
        Play the human's move.

        Pawn moves to the last rank promote to a queen.

        Args:
            from_square: Origin square name or index
            to_square: Destination square name or index

        Returns:
            The move played, or None if it is not the player's turn, the
            engine is thinking, or the move is illegal

        Raises:
            ValueError: If a square name or index is invalid
        """
        origin = parse_square(from_square)
        target = parse_square(to_square)

        with self._lock:
            if not self.is_player_turn() or self.engine_thinking:
                logger.debug("Ignoring user move: not the player's turn")
                return None

            move = chess.Move(origin, target, promotion=chess.QUEEN)
            if move not in self.board.legal_moves:
                move = chess.Move(origin, target)
                if move not in self.board.legal_moves:
                    logger.debug("Illegal user move: %s", move.uci())
                    return None

            self._push(move)

        return move

    def play_engine_move(self) -> Optional[chess.Move]:
        """
        Play the engine's move synchronously.

        Returns:
            The move played, or None if it is not the engine's turn or the
            engine has no legal move

        Raises:
            RuntimeError: If a background search is already running
            MoveApplicationError: If the chosen move is illegal on the board
        """
        with self._lock:
            if self.engine_thinking:
                raise RuntimeError("Engine search already in progress")
            if not self.is_engine_turn():
                return None

            move = select_move(self.board, self.difficulty, self.evaluator, self.rng)
            if move is None:
                self._refresh_status()
                return None

            self.apply_engine_move(move)

        return move

    def apply_engine_move(self, move: chess.Move):
        """
        Apply a move chosen by the engine to the live board.

        Raises:
            MoveApplicationError: If the move is illegal in the current position
        """
        with self._lock:
            if move not in self.board.legal_moves:
                raise MoveApplicationError(
                    f"Engine move {move.uci()} is illegal in {self.board.fen()}"
                )
            self._push(move)

    def request_engine_move(
        self, on_move: Optional[Callable[[Optional[chess.Move]], None]] = None
    ) -> Optional[threading.Thread]:
        """
        Start the engine's turn on a background thread.

        The whole selection runs as one unit of work on a copy of the board;
        the result is then applied to the live board and passed to on_move.

        Args:
            on_move: Called with the move played (None if the engine had no
                legal move) once it is on the board

        Returns:
            The worker thread, or None if no engine turn was started
        """
        with self._lock:
            if self.engine_thinking or not self.is_engine_turn():
                return None

            self.engine_thinking = True
            self.engine_error = None
            thread = threading.Thread(
                target=self._engine_worker,
                args=(self.board.copy(), self._generation, on_move),
                daemon=True,
            )
            self._engine_thread = thread

        thread.start()
        return thread

    def wait_for_engine(self, timeout: Optional[float] = None) -> bool:
        """
        Wait for the background engine turn to finish.

        Args:
            timeout: Seconds to wait (None waits forever)

        Returns:
            True if no engine turn is running any more

        Raises:
            Exception: Re-raises the error of a failed background search
        """
        thread = self._engine_thread
        if thread is not None and thread.is_alive():
            thread.join(timeout=timeout)
            if thread.is_alive():
                logger.warning("Engine did not finish within %.1fs", timeout)
                return False

        if self.engine_error is not None:
            error, self.engine_error = self.engine_error, None
            raise error

        return True

    def _engine_worker(
        self,
        board: chess.Board,
        generation: int,
        on_move: Optional[Callable[[Optional[chess.Move]], None]],
    ):
        """
        Background engine turn.

        The thinking flag is cleared under the lock as soon as the move is on
        the board, before on_move runs, so the player can reply from the
        callback. Errors from the search, the board or on_move are logged and
        kept in engine_error.
        """
        start_time = time.time()

        try:
            if self.config.think_delay:
                time.sleep(self.config.think_delay)

            move = select_move(board, self.difficulty, self.evaluator, self.rng)

            with self._lock:
                if generation != self._generation:
                    self._finish_engine_turn()
                    logger.info("Discarding engine move from a finished game")
                    return
                if move is None:
                    self._refresh_status()
                else:
                    self.apply_engine_move(move)
                self._finish_engine_turn()

            if on_move is not None:
                on_move(move)

        except Exception as e:
            elapsed_time = time.time() - start_time
            logger.error(f"Engine error after {elapsed_time:.3f}s: {e}", exc_info=True)
            with self._lock:
                self.engine_error = e
                self._finish_engine_turn()

    def _finish_engine_turn(self):
        """Clear the thinking flag if it still belongs to this worker (caller holds the lock)."""
        if self._engine_thread is threading.current_thread():
            self.engine_thinking = False

    def _push(self, move: chess.Move):
        """Push a legal move on the live board (caller holds the lock)."""
        mover = chess.COLOR_NAMES[self.board.turn]
        self.board.push(move)
        self.last_move = move
        self._refresh_status()
        logger.info("%s played %s (status=%s)", mover, move.uci(), self.status.value)

    def _refresh_status(self):
        """Update status from the live board."""
        if self.board.is_checkmate():
            self.status = GameStatus.CHECKMATE
        elif is_terminal(self.board):
            self.status = GameStatus.DRAW
