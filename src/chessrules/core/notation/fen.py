"""FEN parsing and serialization."""

from __future__ import annotations

from chessrules.config import RulesConfig
from chessrules.core.board import Board
from chessrules.core.enums import CastlingRights, Color, PieceKind
from chessrules.core.errors import FenError, FenField, InvalidGameState, ParsingError
from chessrules.core.piece import Piece
from chessrules.core.types import Position

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_FIELDS = tuple(FenField)
_U16_MAX = 0xFFFF

_CASTLING_CHARS: dict[str, CastlingRights] = {
    "K": CastlingRights.WHITE_KINGSIDE,
    "Q": CastlingRights.WHITE_QUEENSIDE,
    "k": CastlingRights.BLACK_KINGSIDE,
    "q": CastlingRights.BLACK_QUEENSIDE,
}


def board_from_fen(fen: str, rules: RulesConfig | None = None) -> Board:
    """Parse a six-field FEN string into a :class:`Board`.

    Raises :class:`FenError` naming the first malformed (or missing) field,
    :class:`ParsingError` for content after the sixth field, and
    :class:`InvalidGameState` when either king is missing or duplicated, or
    when the side that just moved is left in check.
    """
    parts = fen.split()
    if len(parts) < len(_FIELDS):
        raise FenError(_FIELDS[len(parts)])
    if len(parts) > len(_FIELDS):
        raise ParsingError(f"Unexpected content after FEN move number: {fen!r}")

    placement, side_part, castling_part, ep_part, halfmove_part, move_part = parts

    # 1. Piece placement
    tiles = _parse_placement(placement)

    # 2. Side to move
    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise FenError(FenField.NEXT_TO_MOVE)

    # 3. Castling
    castling = _parse_castling(castling_part)

    # 4. En passant
    ep: Position | None = None
    if ep_part != "-":
        try:
            ep = Position.parse(ep_part)
        except ParsingError:
            raise FenError(FenField.EN_PASSANT) from None
        # The target lies behind the pawn that just moved, i.e. on the
        # opponent's third rank from the mover's point of view.
        if ep.rank != side.other.home_rank + 2 * side.other.forward:
            raise FenError(FenField.EN_PASSANT)
        # The target must be empty with the pushed pawn right in front of it.
        pushed = ep.offset(0, side.other.forward)
        if ep in tiles or tiles.get(pushed) != Piece(side.other, PieceKind.PAWN):
            raise FenError(FenField.EN_PASSANT)

    # 5-6. Clocks
    halfmove = _parse_counter(halfmove_part, FenField.HALFMOVE_COUNTER)
    move_number = _parse_counter(move_part, FenField.MOVE_NUMBER)

    board = Board(tiles, side, castling, ep, halfmove, move_number, rules)
    if board.is_in_check_for(side.other):
        raise InvalidGameState(f"{side.other} king is in check with {side} to move")
    return board


def _parse_placement(placement: str) -> dict[Position, Piece]:
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise FenError(FenField.PIECES)
    tiles: dict[Position, Piece] = {}
    for rank_idx, rank_text in enumerate(ranks):
        rank = 7 - rank_idx
        file = 0
        for ch in rank_text:
            if ch in "12345678":
                file += int(ch)
            else:
                if file >= 8 or not ch.isascii() or ch.lower() not in "pnbrqk":
                    raise FenError(FenField.PIECES)
                tiles[Position(file, rank)] = Piece.from_char(ch)
                file += 1
            if file > 8:
                raise FenError(FenField.PIECES)
        if file != 8:
            raise FenError(FenField.PIECES)
    return tiles


def _parse_castling(text: str) -> CastlingRights:
    castling = CastlingRights.NONE
    if text == "-":
        return castling
    seen: set[str] = set()
    for ch in text:
        right = _CASTLING_CHARS.get(ch)
        if right is None or ch in seen:
            raise FenError(FenField.CASTLING)
        seen.add(ch)
        castling |= right
    return castling


def _parse_counter(text: str, field: FenField) -> int:
    if not (text.isascii() and text.isdigit()):
        raise FenError(field)
    value = int(text)
    if value > _U16_MAX:
        raise FenError(field)
    return value


def board_to_fen(board: Board) -> str:
    """Serialise a :class:`Board` to FEN."""
    # 1. Board
    rows: list[str] = []
    for rank in range(7, -1, -1):
        empty = 0
        row = ""
        for file in range(8):
            piece = board[Position(file, rank)]
            if piece is None:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    board_str = "/".join(rows)

    # 2. Side
    side_str = "w" if board.next_to_move == Color.WHITE else "b"

    # 3. Castling
    castling_str = "".join(
        ch for ch, right in _CASTLING_CHARS.items() if board.castling & right
    )
    if not castling_str:
        castling_str = "-"

    # 4. En passant
    ep = board.en_passant_square
    ep_str = str(ep) if ep is not None else "-"

    return (
        f"{board_str} {side_str} {castling_str} {ep_str} "
        f"{board.halfmove_counter} {board.move_number}"
    )
