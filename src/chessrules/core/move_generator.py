"""Per-piece legal move generation.

Each generator yields the destinations of one piece, already filtered so
that the move never leaves the mover's king attacked. The check is asked of
:func:`is_square_attacked` with the move overlaid through its ``ignore`` /
``phantom`` sets; no board is copied or mutated.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING

from chessrules.core.attacks import (
    BISHOP_RAYS,
    KING_TARGETS,
    KNIGHT_TARGETS,
    QUEEN_RAYS,
    ROOK_RAYS,
    Ray,
    is_square_attacked,
)
from chessrules.core.enums import Color, PieceKind
from chessrules.core.piece import Piece
from chessrules.core.types import Position

if TYPE_CHECKING:
    from chessrules.core.board import Board

Generator = Callable[["Board", Position, Color], Iterator[Position]]


class PieceMoves:
    """Lazy, restartable sequence of legal destinations for one piece.

    Iterating twice walks the board twice; nothing is cached, so the
    sequence reflects the board at iteration time.
    """

    __slots__ = ("_board", "_origin", "_color", "_generate")

    def __init__(self, board: Board, origin: Position) -> None:
        piece = board[origin]
        if piece is None:
            raise ValueError(f"No piece on {origin}")
        self._board = board
        self._origin = origin
        self._color = piece.color
        self._generate = _GENERATORS[piece.kind]

    def __iter__(self) -> Iterator[Position]:
        return self._generate(self._board, self._origin, self._color)

    def __contains__(self, sq: object) -> bool:
        return any(dest == sq for dest in self)

    def __repr__(self) -> str:
        return f"PieceMoves({self._origin}: {' '.join(map(str, self))})"


def piece_moves(board: Board, origin: Position) -> PieceMoves:
    """Legal destinations for the piece standing on *origin*."""
    return PieceMoves(board, origin)


# -- Own-king safety -----------------------------------------------------------


def _king_safe_after(
    board: Board,
    color: Color,
    origin: Position,
    dest: Position,
    captured: Position | None = None,
) -> bool:
    """Would *color*'s king be safe after a non-king piece moves *origin* → *dest*?"""
    ignore = (origin,) if captured is None else (origin, captured)
    return not is_square_attacked(
        board, board.king_position(color), color, ignore=ignore, phantom=(dest,)
    )


def _is_open(board: Board, sq: Position, color: Color) -> bool:
    """Empty or holding an opponent piece."""
    piece = board[sq]
    return piece is None or piece.color != color


# -- Generators ------------------------------------------------------------------


def _pawn_moves(board: Board, origin: Position, color: Color) -> Iterator[Position]:
    forward = color.forward

    one_step = origin.offset(0, forward)
    if one_step is not None and board[one_step] is None:
        if _king_safe_after(board, color, origin, one_step):
            yield one_step
        start_rank = color.home_rank + forward
        if origin.rank == start_rank:
            two_step = one_step.offset(0, forward)
            if (
                two_step is not None
                and board[two_step] is None
                and _king_safe_after(board, color, origin, two_step)
            ):
                yield two_step

    en_passant = board.en_passant_square
    for df in (-1, 1):
        target = origin.offset(df, forward)
        if target is None:
            continue
        occupant = board[target]
        if occupant is not None:
            if occupant.color != color and _king_safe_after(
                board, color, origin, target
            ):
                yield target
        elif target == en_passant:
            # The captured pawn sits beside the mover, behind the target.
            captured = target.offset(0, color.backwards)
            if board[captured] == Piece(color.other, PieceKind.PAWN) and (
                _king_safe_after(board, color, origin, target, captured)
            ):
                yield target


def _knight_moves(board: Board, origin: Position, color: Color) -> Iterator[Position]:
    for dest in KNIGHT_TARGETS[origin.index]:
        if _is_open(board, dest, color) and _king_safe_after(
            board, color, origin, dest
        ):
            yield dest


def _sliding_moves(
    board: Board, origin: Position, color: Color, rays: tuple[Ray, ...]
) -> Iterator[Position]:
    for ray in rays:
        for dest in ray:
            piece = board[dest]
            if piece is not None and piece.color == color:
                break
            if _king_safe_after(board, color, origin, dest):
                yield dest
            if piece is not None:
                break


def _bishop_moves(board: Board, origin: Position, color: Color) -> Iterator[Position]:
    return _sliding_moves(board, origin, color, BISHOP_RAYS[origin.index])


def _rook_moves(board: Board, origin: Position, color: Color) -> Iterator[Position]:
    return _sliding_moves(board, origin, color, ROOK_RAYS[origin.index])


def _queen_moves(board: Board, origin: Position, color: Color) -> Iterator[Position]:
    return _sliding_moves(board, origin, color, QUEEN_RAYS[origin.index])


def _king_moves(board: Board, origin: Position, color: Color) -> Iterator[Position]:
    for dest in KING_TARGETS[origin.index]:
        if _is_open(board, dest, color) and not is_square_attacked(
            board, dest, color, ignore=(origin,)
        ):
            yield dest

    yield from _castling_moves(board, origin, color)


def _castling_moves(
    board: Board, origin: Position, color: Color
) -> Iterator[Position]:
    can_kingside = board.can_castle_kingside(color)
    can_queenside = board.can_castle_queenside(color)
    if not (can_kingside or can_queenside):
        return
    # Rights only survive while king and rook stay home, but a hand-written
    # FEN may claim otherwise.
    if origin != Position(4, color.home_rank):
        return
    if is_square_attacked(board, origin, color):
        return

    rank = origin.rank
    rook = Piece(color, PieceKind.ROOK)

    def passable(file: int) -> bool:
        sq = Position(file, rank)
        return board[sq] is None and not is_square_attacked(
            board, sq, color, ignore=(origin,)
        )

    if (
        can_kingside
        and board[Position(7, rank)] == rook
        and passable(5)
        and passable(6)
    ):
        yield Position(6, rank)

    if (
        can_queenside
        and board[Position(0, rank)] == rook
        and board[Position(1, rank)] is None
        and passable(3)
        and passable(2)
    ):
        yield Position(2, rank)


_GENERATORS: dict[PieceKind, Generator] = {
    PieceKind.PAWN: _pawn_moves,
    PieceKind.KNIGHT: _knight_moves,
    PieceKind.BISHOP: _bishop_moves,
    PieceKind.ROOK: _rook_moves,
    PieceKind.QUEEN: _queen_moves,
    PieceKind.KING: _king_moves,
}
