"""Perft: count leaf nodes of the legal move tree.

Reference values: https://www.chessprogramming.org/Perft_Results
"""

from __future__ import annotations

from collections.abc import Iterator

from chessrules.core.board import Board
from chessrules.core.enums import PROMOTION_KINDS
from chessrules.core.move import Move


def expanded_moves(board: Board) -> Iterator[Move]:
    """Legal moves with every promotion spelled out as four separate moves."""
    for move in board.all_legal_moves():
        if board.missing_promotion(move):
            for kind in PROMOTION_KINDS:
                yield move.with_promotion(kind)
        else:
            yield move


def perft(board: Board, depth: int) -> int:
    """Compute perft node count for *board* at *depth*.

    - depth == 0 returns 1 (the current node).
    - depth > 0 returns the sum over all legal children of perft(depth-1).

    Each child is explored on a copy, so *board* is left untouched.
    """
    if depth < 0:
        raise ValueError("depth must be >= 0")
    if depth == 0:
        return 1

    nodes = 0
    for move in expanded_moves(board):
        if depth == 1:
            nodes += 1
            continue
        child = board.copy()
        child.make_move(move)
        nodes += perft(child, depth - 1)
    return nodes


def divide(board: Board, depth: int) -> dict[str, int]:
    """Per-root-move perft counts, keyed by move text."""
    if depth < 1:
        raise ValueError("depth must be >= 1")
    counts: dict[str, int] = {}
    for move in expanded_moves(board):
        child = board.copy()
        child.make_move(move)
        counts[str(move)] = perft(child, depth - 1)
    return counts
