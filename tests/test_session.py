"""
Unit Tests for the Game Session

Tests for the player-versus-engine game flow, focusing on:
    - Configuration validation
    - User moves, auto-promotion and game status
    - Synchronous and background engine turns
    - Engine move application failures surfacing as errors
"""

import logging
import threading

import chess
import pytest

from chess_opponent.evaluation import Evaluator
from chess_opponent.game import (
    GameSession,
    GameStatus,
    MoveApplicationError,
    SessionConfig,
    setup_logger,
)
from chess_opponent.policy import Difficulty


class BrokenEvaluator(Evaluator):
    """Evaluator that always fails."""

    def evaluate(self, board):
        raise RuntimeError("broken evaluator")


class TestSessionConfig:
    """Tests for SessionConfig."""

    def test_defaults(self):
        config = SessionConfig()

        assert config.difficulty == "easy"
        assert config.player_color == "white"
        assert config.think_delay == 0.0
        assert config.random_seed is None

    def test_labels_normalized(self):
        """Test that difficulty aliases and colour case are normalized."""
        config = SessionConfig(difficulty="High", player_color="BLACK")

        assert config.difficulty == "hard"
        assert config.player_color == "black"

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"difficulty": "expert"},
            {"player_color": "red"},
            {"think_delay": -1.0},
        ],
    )
    def test_invalid_values(self, kwargs):
        """Test that invalid settings raise ValueError."""
        with pytest.raises(ValueError):
            SessionConfig(**kwargs)

    def test_log_file_becomes_path(self, tmp_path):
        config = SessionConfig(log_file=str(tmp_path / "game.log"))

        assert config.log_file == tmp_path / "game.log"

    def test_repr(self):
        assert "difficulty=medium" in repr(SessionConfig(difficulty="medium"))


class TestGameFlow:
    """Tests for user moves and game status."""

    @pytest.fixture
    def session(self):
        """Create a started session: human plays White against the medium tier."""
        session = GameSession(SessionConfig(difficulty="medium"))
        session.start_game()
        return session

    def test_initial_state(self):
        """Test that a new session waits for start_game."""
        session = GameSession()

        assert session.status is GameStatus.INIT
        assert not session.is_player_turn()
        assert session.play_user_move("e2", "e4") is None

    def test_start_game(self, session):
        assert session.status is GameStatus.PLAYING
        assert session.difficulty is Difficulty.MEDIUM
        assert session.player_color == chess.WHITE
        assert session.is_player_turn()
        assert not session.is_engine_turn()

    def test_start_game_overrides(self, session):
        """Test that start_game arguments override the config."""
        session.start_game(difficulty="hard", player_color="black")

        assert session.difficulty is Difficulty.HARD
        assert session.player_color == chess.BLACK
        assert session.is_engine_turn()

    def test_user_move(self, session):
        move = session.play_user_move("e2", "e4")

        assert move == chess.Move.from_uci("e2e4")
        assert session.last_move == move
        assert session.board.turn == chess.BLACK
        assert session.is_engine_turn()

    def test_user_move_by_square_index(self, session):
        move = session.play_user_move(chess.G1, chess.F3)

        assert move == chess.Move.from_uci("g1f3")

    def test_illegal_user_move(self, session):
        """Test that an illegal move is refused without changing the board."""
        assert session.play_user_move("e2", "e5") is None
        assert session.board.fen() == chess.STARTING_FEN
        assert session.last_move is None

    def test_user_move_out_of_turn(self, session):
        session.play_user_move("e2", "e4")

        assert session.play_user_move("d2", "d4") is None

    def test_invalid_square_name(self, session):
        with pytest.raises(ValueError):
            session.play_user_move("z9", "e4")

    def test_auto_promotion_to_queen(self, session):
        """Test that a pawn reaching the last rank becomes a queen."""
        session.board = chess.Board("8/4P3/8/8/8/8/k7/4K3 w - - 0 1")

        move = session.play_user_move("e7", "e8")

        assert move == chess.Move.from_uci("e7e8q")
        assert session.board.piece_at(chess.E8) == chess.Piece(chess.QUEEN, chess.WHITE)

    def test_checkmate_status(self, session):
        """Test that delivering mate ends the game."""
        session.start_game(player_color="black")
        session.board = chess.Board("rnbqkbnr/pppp1ppp/8/4p3/6P1/5P2/PPPPP2P/RNBQKBNR b KQkq - 0 2")

        session.play_user_move("d8", "h4")

        assert session.status is GameStatus.CHECKMATE
        assert not session.is_engine_turn()
        assert session.play_engine_move() is None

    def test_stalemate_is_draw(self, session):
        """Test that stalemating the opponent is a draw."""
        session.board = chess.Board("k7/3Q4/1K6/8/8/8/8/8 w - - 0 1")

        session.play_user_move("d7", "c7")

        assert session.board.is_stalemate()
        assert session.status is GameStatus.DRAW

    def test_available_repetition_keeps_playing(self, session):
        """Test that a position Black could repeat a third time is still in play."""
        for san in ["Nf3", "Nf6", "Ng1", "Ng8", "Nf3", "Nf6"]:
            session.board.push_san(san)

        session.play_user_move("f3", "g1")

        assert not session.board.is_repetition(3)
        assert session.status is GameStatus.PLAYING
        assert session.is_engine_turn()

    def test_threefold_repetition_is_draw(self, session):
        """Test that the third occurrence of a position ends the game in a draw."""
        for san in ["Nf3", "Nf6", "Ng1", "Ng8", "Nf3", "Nf6"]:
            session.board.push_san(san)
        session.play_user_move("f3", "g1")

        session.apply_engine_move(chess.Move.from_uci("f6g8"))

        assert session.board.is_repetition(3)
        assert session.status is GameStatus.DRAW
        assert not session.is_player_turn()

    def test_reset(self, session):
        session.play_user_move("e2", "e4")

        session.reset()

        assert session.status is GameStatus.INIT
        assert session.board.fen() == chess.STARTING_FEN
        assert session.last_move is None


class TestEngineTurn:
    """Tests for synchronous engine moves and move application."""

    def test_play_engine_move(self):
        """Test that the engine replies with a legal move."""
        session = GameSession(SessionConfig(difficulty="medium"))
        session.start_game()
        session.play_user_move("e2", "e4")
        position = session.board.copy()

        move = session.play_engine_move()

        assert move in position.legal_moves
        assert session.last_move == move
        assert session.is_player_turn()

    def test_engine_move_not_its_turn(self):
        session = GameSession()
        session.start_game()

        assert session.play_engine_move() is None
        assert len(session.board.move_stack) == 0

    def test_illegal_engine_move_is_fatal(self):
        """Test that an engine move rejected by the board raises instead of being ignored."""
        session = GameSession()
        session.start_game(player_color="black")

        with pytest.raises(MoveApplicationError):
            session.apply_engine_move(chess.Move.from_uci("e2e5"))

        assert len(session.board.move_stack) == 0

    def test_same_seed_same_random_moves(self):
        """Test that the configured seed makes the random tier reproducible."""
        moves = []
        for _ in range(2):
            session = GameSession(SessionConfig(player_color="black", random_seed=123))
            session.start_game()
            moves.append(session.play_engine_move())

        assert moves[0] is not None
        assert moves[0] == moves[1]

    def test_engine_checkmated_has_no_move(self):
        """Test that no move is played from a lost position."""
        session = GameSession(SessionConfig(difficulty="hard", player_color="black"))
        session.start_game()
        board = chess.Board("rnbqkbnr/pppp1ppp/8/4p3/6P1/5P2/PPPPP2P/RNBQKBNR b KQkq - 0 2")
        board.push_san("Qh4#")
        session.board = board

        assert session.play_engine_move() is None
        assert session.status is GameStatus.CHECKMATE


class TestBackgroundEngine:
    """Tests for the background engine worker."""

    def test_request_engine_move(self):
        """Test that the worker plays a move and reports it."""
        session = GameSession(SessionConfig(difficulty="medium", player_color="black"))
        session.start_game()
        received = []
        done = threading.Event()

        def on_move(move):
            received.append(move)
            done.set()

        thread = session.request_engine_move(on_move=on_move)

        assert thread is not None
        assert session.wait_for_engine(timeout=30)
        assert done.wait(timeout=5)
        assert received == [session.last_move]
        assert len(session.board.move_stack) == 1
        assert not session.engine_thinking
        assert session.is_player_turn()

    def test_request_when_not_engine_turn(self):
        session = GameSession()
        session.start_game()

        assert session.request_engine_move() is None
        assert not session.engine_thinking

    def test_one_engine_turn_at_a_time(self):
        """Test that a second engine turn cannot start while one is running."""
        session = GameSession(SessionConfig(player_color="black", think_delay=0.3))
        session.start_game()

        session.request_engine_move()
        assert session.engine_thinking
        assert session.request_engine_move() is None

        session.wait_for_engine(timeout=10)
        assert not session.engine_thinking

    def test_new_game_discards_pending_reply(self):
        """Test that a reply computed for an abandoned game is not applied."""
        session = GameSession(SessionConfig(player_color="black", think_delay=0.3))
        session.start_game()
        received = []

        session.request_engine_move(on_move=received.append)
        session.start_game(player_color="white")
        session.wait_for_engine(timeout=10)

        assert len(session.board.move_stack) == 0
        assert received == []

    def test_worker_error_is_raised(self):
        """Test that a search failure is re-raised to the caller, not swallowed."""
        session = GameSession(
            SessionConfig(difficulty="medium", player_color="black"),
            evaluator=BrokenEvaluator(),
        )
        session.start_game()

        session.request_engine_move()

        with pytest.raises(RuntimeError, match="broken evaluator"):
            session.wait_for_engine(timeout=10)

        assert len(session.board.move_stack) == 0
        assert not session.engine_thinking

    def test_callback_error_is_raised(self):
        """Test that an error raised by on_move is kept and re-raised, with the move on the board."""
        session = GameSession(SessionConfig(player_color="black", random_seed=7))
        session.start_game()

        def on_move(move):
            raise ValueError("callback failure")

        session.request_engine_move(on_move=on_move)

        with pytest.raises(ValueError, match="callback failure"):
            session.wait_for_engine(timeout=10)

        assert len(session.board.move_stack) == 1
        assert not session.engine_thinking
        assert session.is_player_turn()

    def test_player_can_reply_from_callback(self):
        """Test that the thinking flag is already cleared when on_move runs."""
        session = GameSession(SessionConfig(player_color="black", random_seed=7))
        session.start_game()
        seen = {}

        def on_move(move):
            seen["thinking"] = session.engine_thinking
            seen["reply"] = session.play_user_move("g8", "f6")

        session.request_engine_move(on_move=on_move)

        assert session.wait_for_engine(timeout=10)
        assert seen["thinking"] is False
        assert seen["reply"] == chess.Move.from_uci("g8f6")
        assert len(session.board.move_stack) == 2
        assert session.is_engine_turn()


class TestLogging:
    """Tests for setup_logger."""

    def test_file_logging(self, tmp_path):
        log_file = tmp_path / "logs" / "engine.log"

        logger = setup_logger(debug=True, log_file=log_file)
        try:
            session = GameSession()
            session.start_game()
            for handler in logger.handlers:
                handler.flush()

            assert logger.level == logging.DEBUG
            assert "New game" in log_file.read_text()
        finally:
            for handler in logger.handlers:
                handler.close()
            logger.handlers.clear()

    def test_stream_logging_level(self):
        logger = setup_logger(debug=False)
        try:
            assert logger.level == logging.INFO
            assert len(logger.handlers) == 1
        finally:
            logger.handlers.clear()
