"""Error taxonomy for the rules engine.

Every failure is raised to the caller at the point it is detected. Move
errors are raised before the board is touched, so a failed call leaves the
board exactly as it was.
"""

from __future__ import annotations

from enum import Enum


class ChessError(Exception):
    """Base class for all errors raised by :mod:`chessrules`."""


# ── Move application ────────────────────────────────────────────────────────


class MoveError(ChessError):
    """A move was rejected by :meth:`Board.make_move`."""


class OtherPlayersTurn(MoveError):
    def __init__(self) -> None:
        super().__init__("Other players turn")


class NoPieceToMove(MoveError):
    def __init__(self) -> None:
        super().__init__("No piece to move")


class IllegalMove(MoveError):
    def __init__(self) -> None:
        super().__init__("Illegal move")


class RequiresPromotion(MoveError):
    def __init__(self) -> None:
        super().__init__("Move requires specifying promoted piece kind")


# ── Parsing ─────────────────────────────────────────────────────────────────


class ParsingError(ChessError, ValueError):
    """Malformed move, square or piece text."""

    def __init__(self, message: str = "Parsing error") -> None:
        super().__init__(message)


class UnknownPiece(ParsingError):
    def __init__(self, char: str) -> None:
        super().__init__(f"Unknown piece {char}")
        self.char = char


class FenField(Enum):
    """The six fields of a FEN record, in order."""

    PIECES = "pieces"
    NEXT_TO_MOVE = "next to move"
    CASTLING = "castling"
    EN_PASSANT = "en passant"
    HALFMOVE_COUNTER = "halfmove counter"
    MOVE_NUMBER = "move number"


class FenError(ParsingError):
    def __init__(self, field: FenField) -> None:
        super().__init__(f"Fen parsing error at {field.value} part")
        self.field = field


class InvalidGameState(ChessError):
    """Position that cannot arise in a game, e.g. a side without a king."""

    def __init__(self, message: str = "Invalid game state") -> None:
        super().__init__(message)


class GameOver(ChessError):
    """A move was submitted after the game reached a terminal state."""

    def __init__(self) -> None:
        super().__init__("Game is already over")
