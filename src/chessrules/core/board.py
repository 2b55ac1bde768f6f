"""Board - full game state on an 8x8 board and the move state machine."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import ClassVar

from chessrules.config import DEFAULT_RULES, RulesConfig
from chessrules.core.attacks import is_square_attacked
from chessrules.core.enums import PROMOTION_KINDS, CastlingRights, Color, Outcome, PieceKind
from chessrules.core.errors import (
    IllegalMove,
    InvalidGameState,
    NoPieceToMove,
    OtherPlayersTurn,
    RequiresPromotion,
)
from chessrules.core.move import Move
from chessrules.core.move_generator import PieceMoves
from chessrules.core.piece import Piece
from chessrules.core.types import ALL_SQUARES, Position

_LOGGER = logging.getLogger(__name__)

_U16_MAX = 0xFFFF


@dataclass(frozen=True, slots=True)
class BoardState:
    """Classification of a board after a move."""

    NORMAL: ClassVar[BoardState]
    ONGOING: ClassVar[BoardState]
    DRAW: ClassVar[BoardState]

    outcome: Outcome
    winner: Color | None = None

    @classmethod
    def checkmate(cls, winner: Color) -> BoardState:
        return cls(Outcome.CHECKMATE, winner)

    @property
    def is_over(self) -> bool:
        return self.outcome != Outcome.NORMAL

    def __str__(self) -> str:
        if self.outcome == Outcome.CHECKMATE:
            return f"checkmate, {self.winner} wins"
        return self.outcome.name.lower()


BoardState.NORMAL = BoardState(Outcome.NORMAL)
BoardState.DRAW = BoardState(Outcome.DRAW)
BoardState.ONGOING = BoardState.NORMAL


# Rook corner -> the castling right it guards.
_ROOK_CORNERS: dict[Position, CastlingRights] = {
    Position(0, 0): CastlingRights.WHITE_QUEENSIDE,
    Position(7, 0): CastlingRights.WHITE_KINGSIDE,
    Position(0, 7): CastlingRights.BLACK_QUEENSIDE,
    Position(7, 7): CastlingRights.BLACK_KINGSIDE,
}


class Board:
    """Mutable chess position: tiles, side to move, castling, en passant, clocks.

    A board is created by :meth:`initial` or :meth:`from_fen` and mutated
    only through :meth:`make_move`. Use :meth:`copy` before speculative
    moves; copies are independent.
    """

    __slots__ = (
        "_tiles",
        "_kings",
        "next_to_move",
        "castling",
        "en_passant_square",
        "halfmove_counter",
        "move_number",
        "rules",
        "_state",
    )

    def __init__(
        self,
        tiles: dict[Position, Piece] | None = None,
        next_to_move: Color = Color.WHITE,
        castling: CastlingRights = CastlingRights.NONE,
        en_passant_square: Position | None = None,
        halfmove_counter: int = 0,
        move_number: int = 1,
        rules: RulesConfig | None = None,
    ) -> None:
        self._tiles: list[Piece | None] = [None] * 64
        self._kings: list[Position | None] = [None, None]
        for sq, piece in (tiles or {}).items():
            if piece.kind == PieceKind.KING and self._kings[piece.color] is not None:
                raise InvalidGameState(f"More than one {piece.color} king")
            self[sq] = piece
        if None in self._kings:
            raise InvalidGameState("Both kings must be on the board")
        if not (0 <= halfmove_counter <= _U16_MAX and 0 <= move_number <= _U16_MAX):
            raise InvalidGameState("Counters must fit in 0..65535")

        self.next_to_move = next_to_move
        self.castling = castling
        self.en_passant_square = en_passant_square
        self.halfmove_counter = halfmove_counter
        self.move_number = move_number
        self.rules = rules if rules is not None else DEFAULT_RULES
        self._state: BoardState | None = None

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls, rules: RulesConfig | None = None) -> Board:
        """Standard starting position."""
        from chessrules.core.notation.fen import STARTING_FEN, board_from_fen

        return board_from_fen(STARTING_FEN, rules)

    @classmethod
    def from_fen(cls, fen: str, rules: RulesConfig | None = None) -> Board:
        from chessrules.core.notation.fen import board_from_fen

        return board_from_fen(fen, rules)

    def to_fen(self) -> str:
        from chessrules.core.notation.fen import board_to_fen

        return board_to_fen(self)

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Position) -> Piece | None:
        return self._tiles[sq.index]

    def __setitem__(self, sq: Position, piece: Piece | None) -> None:
        # Private mutation path: only construction and make_move write tiles.
        old_piece = self._tiles[sq.index]
        if old_piece is not None and old_piece.kind == PieceKind.KING:
            if self._kings[old_piece.color] == sq:
                self._kings[old_piece.color] = None
        self._tiles[sq.index] = piece
        if piece is not None and piece.kind == PieceKind.KING:
            self._kings[piece.color] = sq

    @property
    def tiles(self) -> tuple[tuple[Piece | None, ...], ...]:
        """Rows of tiles, rank 0 (White's home rank) first."""
        return tuple(tuple(self._tiles[r * 8 : r * 8 + 8]) for r in range(8))

    def pieces(self, color: Color) -> Iterator[tuple[Position, Piece]]:
        """Squares and pieces of *color*, in square-index order."""
        for sq in ALL_SQUARES:
            piece = self._tiles[sq.index]
            if piece is not None and piece.color == color:
                yield sq, piece

    def king_position(self, color: Color) -> Position:
        sq = self._kings[color]
        if sq is None:
            raise InvalidGameState(f"No {color} king on board")
        return sq

    # -- Castling rights ----------------------------------------------------

    def can_castle_kingside(self, color: Color) -> bool:
        return bool(self.castling & CastlingRights.kingside(color))

    def can_castle_queenside(self, color: Color) -> bool:
        return bool(self.castling & CastlingRights.queenside(color))

    # -- Queries ------------------------------------------------------------

    def legal_destinations(self, origin: Position) -> PieceMoves:
        """Legal destinations of the piece on *origin* (any color)."""
        if self[origin] is None:
            raise NoPieceToMove()
        return PieceMoves(self, origin)

    def all_legal_moves(self) -> Iterator[Move]:
        """Lazily enumerate legal moves for the side to move.

        Promotion moves are yielded once with ``promotion`` unset; use
        :meth:`missing_promotion` to detect them.
        """
        for sq, _ in self.pieces(self.next_to_move):
            for dest in PieceMoves(self, sq):
                yield Move(sq, dest)

    def has_legal_moves(self) -> bool:
        return next(self.all_legal_moves(), None) is not None

    def is_legal_move(self, move: Move) -> bool:
        """Whether :meth:`make_move` would accept *move*."""
        piece = self[move.from_sq]
        if piece is None or piece.color != self.next_to_move:
            return False
        if move.to_sq not in PieceMoves(self, move.from_sq):
            return False
        return not self._promotion_rejected(piece, move)

    def missing_promotion(self, move: Move) -> bool:
        """Whether *move* is a pawn move to the far rank without a promotion kind.

        Returns ``False`` when the promotion is already set or not needed.
        The answer for an illegal move carries no guarantee.
        """
        if move.promotion is not None:
            return False
        piece = self[move.from_sq]
        if piece is None:
            return False
        return self._reaches_far_rank(piece, move)

    def is_in_check(self) -> bool:
        """Is the side to move in check?"""
        return self.is_in_check_for(self.next_to_move)

    def is_in_check_for(self, color: Color) -> bool:
        return is_square_attacked(self, self.king_position(color), color)

    @property
    def state(self) -> BoardState:
        """Classification of the current position."""
        if self._state is None:
            self._state = self._classify()
        return self._state

    # -- Move application ---------------------------------------------------

    def make_move(self, move: Move) -> BoardState:
        """Validate and apply *move*, returning the new classification.

        Raises :class:`NoPieceToMove`, :class:`OtherPlayersTurn`,
        :class:`IllegalMove` or :class:`RequiresPromotion`. Every check runs
        before the board is touched, so a rejected move changes nothing.
        """
        piece = self[move.from_sq]
        if piece is None:
            raise NoPieceToMove()
        if piece.color != self.next_to_move:
            raise OtherPlayersTurn()
        if move.to_sq not in PieceMoves(self, move.from_sq):
            raise IllegalMove()
        if self._promotion_rejected(piece, move):
            raise RequiresPromotion()

        self._apply(move, piece)
        state = self._state = self._classify()
        _LOGGER.debug("Applied %s %s; %s", piece.name, move, state)
        return state

    def _apply(self, move: Move, piece: Piece) -> None:
        """Apply an already validated move."""
        mover = piece.color
        from_sq, to_sq = move.from_sq, move.to_sq
        captured = self[to_sq]

        # Relocate, promoting if needed
        self[from_sq] = None
        if self._reaches_far_rank(piece, move):
            assert move.promotion is not None
            self[to_sq] = Piece(mover, move.promotion)
        else:
            self[to_sq] = piece

        # Slide the rook for castling
        delta_file = to_sq.file - from_sq.file
        if piece.kind == PieceKind.KING and abs(delta_file) == 2:
            rook_from = Position(7 if delta_file > 0 else 0, to_sq.rank)
            rook_to = Position(to_sq.file - delta_file // 2, to_sq.rank)
            self[rook_to] = self[rook_from]
            self[rook_from] = None

        self._update_castling(move, piece)

        # En passant capture removes the pawn behind the target square
        if (
            piece.kind == PieceKind.PAWN
            and to_sq == self.en_passant_square
            and to_sq.file != from_sq.file
        ):
            behind = Position(to_sq.file, to_sq.rank + mover.backwards)
            captured = self[behind]
            self[behind] = None

        # En passant target for the opponent
        if piece.kind == PieceKind.PAWN and abs(to_sq.rank - from_sq.rank) == 2:
            self.en_passant_square = Position(to_sq.file, to_sq.rank + mover.backwards)
        else:
            self.en_passant_square = None

        # Turn and clocks
        self.halfmove_counter = min(self.halfmove_counter + 1, _U16_MAX)
        if mover == Color.BLACK:
            self.move_number = min(self.move_number + 1, _U16_MAX)
        self.next_to_move = mover.other
        if captured is not None or piece.kind == PieceKind.PAWN:
            self.halfmove_counter = 0

    def _update_castling(self, move: Move, piece: Piece) -> None:
        castling = self.castling
        if piece.kind == PieceKind.KING:
            castling &= ~CastlingRights.both(piece.color)
        # Leaving a corner (own rook) or landing on one (capturing a rook).
        for sq in (move.from_sq, move.to_sq):
            right = _ROOK_CORNERS.get(sq)
            if right is not None:
                castling &= ~right
        self.castling = castling

    def _classify(self) -> BoardState:
        if not self.has_legal_moves():
            if self.is_in_check():
                return BoardState.checkmate(self.next_to_move.other)
            return BoardState.DRAW
        if self.halfmove_counter >= self.rules.halfmove_draw_limit:
            return BoardState.DRAW
        return BoardState.NORMAL

    @staticmethod
    def _reaches_far_rank(piece: Piece, move: Move) -> bool:
        return (
            piece.kind == PieceKind.PAWN
            and move.to_sq.rank == piece.color.other.home_rank
        )

    def _promotion_rejected(self, piece: Piece, move: Move) -> bool:
        return (
            self._reaches_far_rank(piece, move)
            and move.promotion not in PROMOTION_KINDS
        )

    # -- Copying ------------------------------------------------------------

    def copy(self) -> Board:
        """Independent copy sharing no mutable state."""
        b = Board.__new__(Board)
        b._tiles = self._tiles.copy()
        b._kings = self._kings.copy()
        b.next_to_move = self.next_to_move
        b.castling = self.castling
        b.en_passant_square = self.en_passant_square
        b.halfmove_counter = self.halfmove_counter
        b.move_number = self.move_number
        b.rules = self.rules
        b._state = self._state
        return b

    __copy__ = copy

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self._tiles == other._tiles
            and self.next_to_move == other.next_to_move
            and self.castling == other.castling
            and self.en_passant_square == other.en_passant_square
            and self.halfmove_counter == other.halfmove_counter
            and self.move_number == other.move_number
        )

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        rows: list[str] = []
        for rank in range(7, -1, -1):
            row = []
            for file in range(8):
                p = self._tiles[rank * 8 + file]
                row.append(p.symbol if p else ".")
            rows.append(f"{rank + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)

    def __repr__(self) -> str:
        return f"Board({self.to_fen()!r})"
