"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import pytest

from chessrules.core.board import Board
from chessrules.core.notation import board_from_fen

KIWIPETE = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"
CASTLING_FEN = "r3k2r/pppppppp/8/8/8/8/PPPPPPPP/R3K2R w KQkq - 0 1"


@pytest.fixture
def start_board() -> Board:
    """A fresh board in the standard starting position."""
    return Board.initial()


@pytest.fixture
def kiwipete() -> Board:
    """The tactics-heavy 'Kiwipete' reference position."""
    return board_from_fen(KIWIPETE)


@pytest.fixture
def castling_board() -> Board:
    """Both sides with only kings, rooks and pawns; all rights available."""
    return board_from_fen(CASTLING_FEN)
