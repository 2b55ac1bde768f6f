"""Move value object and its four/five-character text form."""

from __future__ import annotations

from dataclasses import dataclass, replace

from chessrules.core.enums import PieceKind
from chessrules.core.errors import ParsingError
from chessrules.core.types import Position


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single chess move.

    ``promotion`` is only meaningful for a pawn reaching the far rank;
    :meth:`Board.missing_promotion` tells whether a move still needs it.
    """

    from_sq: Position
    to_sq: Position
    promotion: PieceKind | None = None

    @classmethod
    def parse(cls, text: str) -> Move:
        """Parse ``'e2e4'`` or ``'a7a8q'``."""
        if len(text) not in (4, 5):
            raise ParsingError(f"Invalid move text: {text!r}")
        from_sq = Position.parse(text[0:2])
        to_sq = Position.parse(text[2:4])
        promotion = None
        if len(text) == 5:
            try:
                promotion = PieceKind.from_char(text[4])
            except KeyError:
                raise ParsingError(f"Invalid promotion in move text: {text!r}") from None
        return cls(from_sq, to_sq, promotion)

    def with_promotion(self, kind: PieceKind) -> Move:
        return replace(self, promotion=kind)

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{self.from_sq}{self.to_sq}"
        if self.promotion is not None:
            base += self.promotion.char.lower()
        return base

    @property
    def uci(self) -> str:
        """Long-algebraic notation, same as ``str(move)``."""
        return str(self)
