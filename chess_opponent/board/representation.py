"""
Board Representation as Piece Tensors

This module converts python-chess Board objects into a 12-channel tensor
of piece placement, and back.

12-Channel Representation:
    0: White Pawns      6: Black Pawns
    1: White Knights    7: Black Knights
    2: White Bishops    8: Black Bishops
    3: White Rooks      9: Black Rooks
    4: White Queens    10: Black Queens
    5: White Kings     11: Black Kings

Each channel is an 8*8 binary mask where 1 indicates piece presence.
White channels come first, so swapping the two halves of the tensor hands
every piece to the other side without moving it.

Board Orientation:
    - Row 0 = Rank 8 (Black's back rank)
    - Row 7 = Rank 1 (White's back rank)
    - Column 0 = A-file
    - Column 7 = H-file
"""

import chess
import numpy as np
from typing import Tuple

# Piece type to channel index mapping
# White pieces: channels 0-5
# Black pieces: channels 6-11
PIECE_TO_CHANNEL = {
    (chess.PAWN, chess.WHITE): 0,
    (chess.KNIGHT, chess.WHITE): 1,
    (chess.BISHOP, chess.WHITE): 2,
    (chess.ROOK, chess.WHITE): 3,
    (chess.QUEEN, chess.WHITE): 4,
    (chess.KING, chess.WHITE): 5,
    (chess.PAWN, chess.BLACK): 6,
    (chess.KNIGHT, chess.BLACK): 7,
    (chess.BISHOP, chess.BLACK): 8,
    (chess.ROOK, chess.BLACK): 9,
    (chess.QUEEN, chess.BLACK): 10,
    (chess.KING, chess.BLACK): 11,
}

CHANNEL_TO_PIECE = {channel: key for key, channel in PIECE_TO_CHANNEL.items()}

NUM_CHANNELS = 12


def square_to_coordinates(square: int) -> Tuple[int, int]:
    """
    Convert python-chess square index to (row, column) coordinates.

    Args:
        square: Square index (0-63) where 0=A1, 63=H8

    Returns:
        Tuple of (row, col) where row 0 is rank 8 and col 0 is the A-file
    """
    return 7 - chess.square_rank(square), chess.square_file(square)


def coordinates_to_square(row: int, col: int) -> int:
    """Convert (row, column) coordinates back to a python-chess square index."""
    return chess.square(col, 7 - row)


def board_to_tensor(board: chess.BaseBoard) -> np.ndarray:
    """
    Convert a chess board to a 12-channel tensor representation.

    Only occupied squares are visited, so an empty board costs nothing
    beyond allocating the zero tensor.

    Args:
        board: python-chess Board (or BaseBoard) object

    Returns:
        numpy array of shape (12, 8, 8) with dtype int8
    """
    tensor = np.zeros((NUM_CHANNELS, 8, 8), dtype=np.int8)

    for square, piece in board.piece_map().items():
        channel = PIECE_TO_CHANNEL[(piece.piece_type, piece.color)]
        row, col = square_to_coordinates(square)
        tensor[channel, row, col] = 1

    return tensor


def tensor_to_board(tensor: np.ndarray) -> chess.Board:
    """
    Convert a 12-channel tensor back to a python-chess Board object.

    This is the inverse of board_to_tensor() for piece placement. The
    returned board has White to move and no castling or en passant rights.

    Args:
        tensor: numpy array of shape (12, 8, 8)

    Returns:
        python-chess Board object

    Raises:
        ValueError: If tensor has invalid shape or multiple pieces on one square
    """
    if tensor.shape != (NUM_CHANNELS, 8, 8):
        raise ValueError(f"Invalid tensor shape: {tensor.shape}. Expected (12, 8, 8)")

    board = chess.Board(fen=None)

    for channel in range(NUM_CHANNELS):
        piece_type, color = CHANNEL_TO_PIECE[channel]

        for row, col in np.argwhere(tensor[channel] > 0):
            square = coordinates_to_square(int(row), int(col))

            if board.piece_at(square) is not None:
                raise ValueError(
                    f"Multiple pieces on square {chess.square_name(square)}"
                )

            board.set_piece_at(square, chess.Piece(piece_type, color))

    return board


def swap_piece_colors(board: chess.BaseBoard) -> chess.Board:
    """
    Return a new board with every piece handed to the other side.

    Pieces stay on their squares (unlike chess.Board.mirror(), which also
    flips ranks). Side to move is kept when the input is a full Board.

    Args:
        board: Board to swap; left unchanged

    Returns:
        New python-chess Board
    """
    tensor = board_to_tensor(board)
    half = NUM_CHANNELS // 2
    swapped = tensor_to_board(np.concatenate([tensor[half:], tensor[:half]], axis=0))

    if isinstance(board, chess.Board):
        swapped.turn = board.turn

    return swapped
