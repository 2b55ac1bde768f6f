"""chessrules: a chess rules engine.

Legal move generation, move application with full bookkeeping, position
classification and FEN notation for standard chess.
"""

from chessrules.config import DEFAULT_RULES, RulesConfig
from chessrules.core import (
    STARTING_FEN,
    Board,
    BoardState,
    CastlingRights,
    ChessError,
    Color,
    Move,
    Outcome,
    Piece,
    PieceKind,
    Position,
    board_from_fen,
    board_to_fen,
)
from chessrules.game import Game, GameState, MoveRecord

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_RULES",
    "STARTING_FEN",
    "Board",
    "BoardState",
    "CastlingRights",
    "ChessError",
    "Color",
    "Game",
    "GameState",
    "Move",
    "MoveRecord",
    "Outcome",
    "Piece",
    "PieceKind",
    "Position",
    "RulesConfig",
    "board_from_fen",
    "board_to_fen",
]
