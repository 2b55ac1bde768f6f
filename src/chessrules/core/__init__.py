"""Core domain layer: pure chess rules with zero external dependencies.

Quick start::

    from chessrules.core import Board, Move

    board = Board.initial()
    for move in board.all_legal_moves():
        print(move)
    state = board.make_move(Move.parse("e2e4"))
"""

from chessrules.core.attacks import is_square_attacked
from chessrules.core.board import Board, BoardState
from chessrules.core.enums import CastlingRights, Color, Outcome, PieceKind
from chessrules.core.errors import (
    ChessError,
    FenError,
    FenField,
    GameOver,
    IllegalMove,
    InvalidGameState,
    MoveError,
    NoPieceToMove,
    OtherPlayersTurn,
    ParsingError,
    RequiresPromotion,
    UnknownPiece,
)
from chessrules.core.move import Move
from chessrules.core.move_generator import PieceMoves, piece_moves
from chessrules.core.notation import STARTING_FEN, board_from_fen, board_to_fen
from chessrules.core.perft import divide, perft
from chessrules.core.piece import Piece
from chessrules.core.types import Position

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "Outcome",
    "PieceKind",
    # Domain objects
    "Board",
    "BoardState",
    "Move",
    "Piece",
    "PieceMoves",
    "Position",
    # Rules
    "is_square_attacked",
    "piece_moves",
    "perft",
    "divide",
    # Notation
    "STARTING_FEN",
    "board_from_fen",
    "board_to_fen",
    # Errors
    "ChessError",
    "FenError",
    "FenField",
    "GameOver",
    "IllegalMove",
    "InvalidGameState",
    "MoveError",
    "NoPieceToMove",
    "OtherPlayersTurn",
    "ParsingError",
    "RequiresPromotion",
    "UnknownPiece",
]
