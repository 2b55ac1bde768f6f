"""Core enumerations and flags for chess domain."""

from __future__ import annotations

from enum import IntEnum, IntFlag, auto


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def other(self) -> Color:
        return Color(1 - self.value)

    @property
    def home_rank(self) -> int:
        """Rank holding this side's king and rooks at the start."""
        return 0 if self is Color.WHITE else 7

    @property
    def forward(self) -> int:
        """Rank delta of a pawn advance."""
        return 1 if self is Color.WHITE else -1

    @property
    def backwards(self) -> int:
        """Rank delta pointing back toward this side's home rank."""
        return -self.forward

    def __str__(self) -> str:
        return self.name.lower()


class PieceKind(IntEnum):
    """Chess piece kinds ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6

    @property
    def char(self) -> str:
        """Uppercase notation letter, e.g. ``N`` for a knight."""
        return _KIND_CHARS[self]

    @classmethod
    def from_char(cls, char: str) -> PieceKind:
        """Kind for a notation letter in either case.

        Raises ``KeyError`` for anything else; callers translate it into
        the error of their own layer.
        """
        return _CHAR_KINDS[char.upper()]


_KIND_CHARS: dict[PieceKind, str] = {
    PieceKind.PAWN: "P",
    PieceKind.KNIGHT: "N",
    PieceKind.BISHOP: "B",
    PieceKind.ROOK: "R",
    PieceKind.QUEEN: "Q",
    PieceKind.KING: "K",
}
_CHAR_KINDS: dict[str, PieceKind] = {v: k for k, v in _KIND_CHARS.items()}

PROMOTION_KINDS: tuple[PieceKind, ...] = (
    PieceKind.QUEEN,
    PieceKind.ROOK,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
)


class CastlingRights(IntFlag):
    """Bitmask for castling availability."""

    NONE = 0
    WHITE_KINGSIDE = auto()
    WHITE_QUEENSIDE = auto()
    BLACK_KINGSIDE = auto()
    BLACK_QUEENSIDE = auto()

    WHITE_BOTH = WHITE_KINGSIDE | WHITE_QUEENSIDE
    BLACK_BOTH = BLACK_KINGSIDE | BLACK_QUEENSIDE
    ALL = WHITE_BOTH | BLACK_BOTH

    @classmethod
    def kingside(cls, color: Color) -> CastlingRights:
        return cls.WHITE_KINGSIDE if color == Color.WHITE else cls.BLACK_KINGSIDE

    @classmethod
    def queenside(cls, color: Color) -> CastlingRights:
        return cls.WHITE_QUEENSIDE if color == Color.WHITE else cls.BLACK_QUEENSIDE

    @classmethod
    def both(cls, color: Color) -> CastlingRights:
        return cls.WHITE_BOTH if color == Color.WHITE else cls.BLACK_BOTH


class Outcome(IntEnum):
    """Classification of a position after a move."""

    NORMAL = 0
    ONGOING = 0
    CHECKMATE = 1
    DRAW = 2
