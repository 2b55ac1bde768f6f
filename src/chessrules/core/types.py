"""Square coordinate type and named square constants.

Files and ranks are both 0-7. Rank 0 is White's home rank (``a1``..``h1``),
rank 7 is Black's (``a8``..``h8``). Each square also has a dense index
``rank * 8 + file`` used for table lookups:

    a1=0, b1=1, ..., h1=7
    ...
    a8=56, b8=57, ..., h8=63
"""

from __future__ import annotations

from dataclasses import dataclass

from chessrules.core.errors import ParsingError

_FILE_NAMES = "abcdefgh"
_RANK_NAMES = "12345678"


@dataclass(frozen=True, slots=True)
class Position:
    """A square on the board, e.g. ``Position(4, 1)`` is e2."""

    file: int
    rank: int

    def __post_init__(self) -> None:
        if not (0 <= self.file < 8 and 0 <= self.rank < 8):
            raise ValueError(f"Square out of board: file={self.file}, rank={self.rank}")

    # ── Construction ─────────────────────────────────────────────────────

    @classmethod
    def parse(cls, text: str) -> Position:
        """Parse a square name, e.g. ``'e4'``."""
        if (
            len(text) != 2
            or text[0] not in _FILE_NAMES
            or text[1] not in _RANK_NAMES
        ):
            raise ParsingError(f"Invalid square name: {text!r}")
        return _SQUARES[_RANK_NAMES.index(text[1]) * 8 + _FILE_NAMES.index(text[0])]

    @staticmethod
    def from_index(index: int) -> Position:
        """Square for a dense index 0-63."""
        return _SQUARES[index]

    # ── Geometry ─────────────────────────────────────────────────────────

    @property
    def index(self) -> int:
        return self.rank * 8 + self.file

    def offset(self, delta_file: int, delta_rank: int) -> Position | None:
        """Square shifted by the given deltas, or ``None`` off the board."""
        file = self.file + delta_file
        rank = self.rank + delta_rank
        if 0 <= file < 8 and 0 <= rank < 8:
            return _SQUARES[rank * 8 + file]
        return None

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        return _FILE_NAMES[self.file] + _RANK_NAMES[self.rank]

    def __repr__(self) -> str:
        return f"Position({str(self)})"


_SQUARES: tuple[Position, ...] = tuple(Position(i & 7, i >> 3) for i in range(64))

ALL_SQUARES: tuple[Position, ...] = _SQUARES


# ── Named square constants ──────────────────────────────────────────────────

A1, B1, C1, D1, E1, F1, G1, H1 = _SQUARES[0:8]
A2, B2, C2, D2, E2, F2, G2, H2 = _SQUARES[8:16]
A3, B3, C3, D3, E3, F3, G3, H3 = _SQUARES[16:24]
A4, B4, C4, D4, E4, F4, G4, H4 = _SQUARES[24:32]
A5, B5, C5, D5, E5, F5, G5, H5 = _SQUARES[32:40]
A6, B6, C6, D6, E6, F6, G6, H6 = _SQUARES[40:48]
A7, B7, C7, D7, E7, F7, G7, H7 = _SQUARES[48:56]
A8, B8, C8, D8, E8, F8, G8, H8 = _SQUARES[56:64]
