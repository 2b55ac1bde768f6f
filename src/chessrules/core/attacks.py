"""Threat oracle: is a square attacked, optionally under a hypothetical move.

Legality checks ask "would my king be attacked after this move?" without
touching the board. The caller describes the move with two square sets:

* ``ignore``  : squares to treat as empty (the mover's origin, the pawn
  removed by an en-passant capture);
* ``phantom`` : squares to treat as occupied by a blocker (the mover's
  destination). Whatever stands there now counts as captured, so it
  never attacks.
"""

from __future__ import annotations

from collections.abc import Collection
from typing import TYPE_CHECKING

from chessrules.core.enums import Color, PieceKind
from chessrules.core.types import Position

if TYPE_CHECKING:
    from chessrules.core.board import Board


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (2, -1),
    (1, -2),
    (-1, -2),
    (-2, -1),
    (-2, 1),
    (-1, 2),
    (1, 2),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (1, 0),
    (1, -1),
    (0, -1),
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, 1),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

Ray = tuple[Position, ...]


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> tuple[tuple[Position, ...], ...]:
    targets: list[tuple[Position, ...]] = []
    for index in range(64):
        origin = Position.from_index(index)
        squares = (origin.offset(df, dr) for df, dr in offsets)
        targets.append(tuple(sq for sq in squares if sq is not None))
    return tuple(targets)


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> tuple[tuple[Ray, ...], ...]:
    rays_per_square: list[tuple[Ray, ...]] = []
    for index in range(64):
        origin = Position.from_index(index)
        square_rays: list[Ray] = []
        for df, dr in directions:
            ray: list[Position] = []
            sq = origin.offset(df, dr)
            while sq is not None:
                ray.append(sq)
                sq = sq.offset(df, dr)
            square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


def _build_pawn_attackers() -> tuple[tuple[tuple[Position, ...], ...], ...]:
    # [attacker color][target index] -> squares a pawn of that color must
    # stand on to attack the target.
    per_color: list[tuple[tuple[Position, ...], ...]] = []
    for color in Color:
        per_target: list[tuple[Position, ...]] = []
        for index in range(64):
            target = Position.from_index(index)
            squares = (target.offset(df, color.backwards) for df in (-1, 1))
            per_target.append(tuple(sq for sq in squares if sq is not None))
        per_color.append(tuple(per_target))
    return tuple(per_color)


KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
KING_TARGETS = _build_targets(KING_OFFSETS)
PAWN_ATTACKERS = _build_pawn_attackers()

BISHOP_RAYS = _build_rays(BISHOP_DIRS)
ROOK_RAYS = _build_rays(ROOK_DIRS)
QUEEN_RAYS = _build_rays(QUEEN_DIRS)

_DIAGONAL_SLIDERS = frozenset((PieceKind.BISHOP, PieceKind.QUEEN))
_STRAIGHT_SLIDERS = frozenset((PieceKind.ROOK, PieceKind.QUEEN))


# -- Oracle -------------------------------------------------------------------


def is_square_attacked(
    board: Board,
    target: Position,
    defender: Color,
    ignore: Collection[Position] = (),
    phantom: Collection[Position] = (),
) -> bool:
    """Is *target* attacked by any piece of ``defender.other``?

    The board itself is never modified; *ignore* and *phantom* overlay the
    hypothetical changes described in the module docstring.
    """
    attacker = defender.other
    index = target.index

    def holds(sq: Position, kinds: frozenset[PieceKind] | PieceKind) -> bool:
        if sq in ignore or sq in phantom:
            return False
        piece = board[sq]
        if piece is None or piece.color != attacker:
            return False
        if isinstance(kinds, frozenset):
            return piece.kind in kinds
        return piece.kind == kinds

    for sq in PAWN_ATTACKERS[attacker][index]:
        if holds(sq, PieceKind.PAWN):
            return True

    for sq in KNIGHT_TARGETS[index]:
        if holds(sq, PieceKind.KNIGHT):
            return True

    for sq in KING_TARGETS[index]:
        if holds(sq, PieceKind.KING):
            return True

    return _ray_attacked(
        board, BISHOP_RAYS[index], attacker, _DIAGONAL_SLIDERS, ignore, phantom
    ) or _ray_attacked(
        board, ROOK_RAYS[index], attacker, _STRAIGHT_SLIDERS, ignore, phantom
    )


def _ray_attacked(
    board: Board,
    rays: tuple[Ray, ...],
    attacker: Color,
    kinds: frozenset[PieceKind],
    ignore: Collection[Position],
    phantom: Collection[Position],
) -> bool:
    # Walking outward from the target is equivalent to walking from each
    # slider toward it: the first occupied square on the ray decides.
    for ray in rays:
        for sq in ray:
            if sq in phantom:
                break
            if sq in ignore:
                continue
            piece = board[sq]
            if piece is None:
                continue
            if piece.color == attacker and piece.kind in kinds:
                return True
            break
    return False
