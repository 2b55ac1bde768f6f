"""Tests for FEN parsing and serialisation."""

import pytest

from chessrules.core.board import Board
from chessrules.core.enums import CastlingRights, Color, PieceKind
from chessrules.core.errors import (
    FenError,
    FenField,
    InvalidGameState,
    ParsingError,
)
from chessrules.core.move import Move
from chessrules.core.notation import STARTING_FEN, board_from_fen, board_to_fen
from chessrules.core.piece import Piece
from chessrules.core.types import E1, E3, E8, F6


class TestFenParsing:
    def test_starting_side(self) -> None:
        board = board_from_fen(STARTING_FEN)
        assert board.next_to_move == Color.WHITE

    def test_starting_castling(self) -> None:
        board = board_from_fen(STARTING_FEN)
        assert board.castling == CastlingRights.ALL

    def test_starting_clocks(self) -> None:
        board = board_from_fen(STARTING_FEN)
        assert board.halfmove_counter == 0
        assert board.move_number == 1

    def test_starting_kings(self) -> None:
        board = board_from_fen(STARTING_FEN)
        assert board[E1] == Piece(Color.WHITE, PieceKind.KING)
        assert board[E8] == Piece(Color.BLACK, PieceKind.KING)

    def test_matches_initial(self) -> None:
        assert board_from_fen(STARTING_FEN) == Board.initial()

    def test_en_passant_square(self) -> None:
        board = board_from_fen(
            "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        )
        assert board.en_passant_square == E3
        board = board_from_fen("4k3/8/8/5pP1/8/8/8/4K3 w - f6 0 1")
        assert board.en_passant_square == F6

    def test_no_castling(self) -> None:
        board = board_from_fen("4k3/8/8/8/8/8/8/4K3 w - - 0 1")
        assert board.castling == CastlingRights.NONE

    def test_partial_castling(self) -> None:
        board = board_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w Kq - 0 1")
        assert board.can_castle_kingside(Color.WHITE)
        assert not board.can_castle_queenside(Color.WHITE)
        assert not board.can_castle_kingside(Color.BLACK)
        assert board.can_castle_queenside(Color.BLACK)

    def test_castling_letters_any_order(self) -> None:
        board = board_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w qkQK - 0 1")
        assert board.castling == CastlingRights.ALL

    def test_large_counters(self) -> None:
        board = board_from_fen("4k3/8/8/8/8/8/8/4K3 b - - 65535 65535")
        assert board.halfmove_counter == 65535
        assert board.move_number == 65535

    def test_from_fen_classmethod(self) -> None:
        assert Board.from_fen(STARTING_FEN).to_fen() == STARTING_FEN


class TestFenErrors:
    @pytest.mark.parametrize("fen, field", [
        ("", FenField.PIECES),
        ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR", FenField.NEXT_TO_MOVE),
        ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w", FenField.CASTLING),
        ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq", FenField.EN_PASSANT),
        (
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq -",
            FenField.HALFMOVE_COUNTER,
        ),
        (
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0",
            FenField.MOVE_NUMBER,
        ),
    ])
    def test_missing_field(self, fen: str, field: FenField) -> None:
        with pytest.raises(FenError) as info:
            board_from_fen(fen)
        assert info.value.field == field

    def test_extra_field(self) -> None:
        with pytest.raises(ParsingError) as info:
            board_from_fen(STARTING_FEN + " extra")
        assert not isinstance(info.value, FenError)

    @pytest.mark.parametrize("placement", [
        "rnbqkbnr/pppppppp/8/8/8/PPPPPPPP/RNBQKBNR",
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR/8",
        "rnbqkbnr/pppppppp/9/8/8/8/PPPPPPPP/RNBQKBNR",
        "rnbqkbnr/pppppppp/08/8/8/8/PPPPPPPP/RNBQKBNR",
        "rnbqkbnr/ppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR",
        "rnbqkbnr/ppppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR",
        "rnbqkbnr/pppppppp/7/8/8/8/PPPPPPPP/RNBQKBNR",
        "rnbqkbnr/pppppppp/4x3/8/8/8/PPPPPPPP/RNBQKBNR",
        "rnbqkbnr/pppppppp/45/8/8/8/PPPPPPPP/RNBQKBNR",
    ])
    def test_bad_placement(self, placement: str) -> None:
        with pytest.raises(FenError) as info:
            board_from_fen(f"{placement} w KQkq - 0 1")
        assert info.value.field == FenField.PIECES

    def test_empty_rank_text_is_rejected(self) -> None:
        with pytest.raises(FenError):
            board_from_fen("rnbqkbnr/pppppppp//8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1")

    @pytest.mark.parametrize("side", ["x", "W", "white", "-"])
    def test_bad_side(self, side: str) -> None:
        with pytest.raises(FenError) as info:
            board_from_fen(f"4k3/8/8/8/8/8/8/4K3 {side} - - 0 1")
        assert info.value.field == FenField.NEXT_TO_MOVE

    @pytest.mark.parametrize("castling", ["KK", "X", "KQkqK", "--", "Kx"])
    def test_bad_castling(self, castling: str) -> None:
        with pytest.raises(FenError) as info:
            board_from_fen(f"r3k2r/8/8/8/8/8/8/R3K2R w {castling} - 0 1")
        assert info.value.field == FenField.CASTLING

    @pytest.mark.parametrize("fen", [
        "4k3/8/8/8/8/8/8/4K3 w - e3 0 1",
        "4k3/8/8/8/8/8/8/4K3 b - e6 0 1",
        "4k3/8/8/8/8/8/8/4K3 w - e4 0 1",
        "4k3/8/8/8/8/8/8/4K3 w - z9 0 1",
        "4k3/8/8/8/8/8/8/4K3 w - e 0 1",
    ])
    def test_bad_en_passant(self, fen: str) -> None:
        with pytest.raises(FenError) as info:
            board_from_fen(fen)
        assert info.value.field == FenField.EN_PASSANT

    @pytest.mark.parametrize("value", ["-1", "a", "70000", "1.5", "+3"])
    def test_bad_halfmove_counter(self, value: str) -> None:
        with pytest.raises(FenError) as info:
            board_from_fen(f"4k3/8/8/8/8/8/8/4K3 w - - {value} 1")
        assert info.value.field == FenField.HALFMOVE_COUNTER

    @pytest.mark.parametrize("value", ["-1", "x", "65536"])
    def test_bad_move_number(self, value: str) -> None:
        with pytest.raises(FenError) as info:
            board_from_fen(f"4k3/8/8/8/8/8/8/4K3 w - - 0 {value}")
        assert info.value.field == FenField.MOVE_NUMBER

    def test_error_message_names_field(self) -> None:
        with pytest.raises(FenError, match="Fen parsing error at next to move part"):
            board_from_fen("4k3/8/8/8/8/8/8/4K3 x - - 0 1")

    def test_fen_errors_are_value_errors(self) -> None:
        with pytest.raises(ValueError):
            board_from_fen("nonsense")

    @pytest.mark.parametrize("fen", [
        "4k3/8/8/8/8/8/8/8 w - - 0 1",
        "8/8/8/8/8/8/8/4K3 w - - 0 1",
        "k3k3/8/8/8/8/8/8/4K3 w - - 0 1",
        "4k3/8/8/8/8/8/8/K3K3 w - - 0 1",
    ])
    def test_king_count(self, fen: str) -> None:
        with pytest.raises(InvalidGameState):
            board_from_fen(fen)

    @pytest.mark.parametrize("fen", [
        # King, own pawn, or nothing where the double-pushed pawn should be
        "4k3/8/8/3PK3/8/8/8/8 w - e6 0 1",
        "4k3/8/8/3PP3/8/8/8/4K3 w - e6 0 1",
        "4k3/8/8/3P4/8/8/8/4K3 w - e6 0 1",
        "4k3/8/8/8/3p4/8/8/4K3 b - e3 0 1",
        # Target square occupied
        "4k3/8/4n3/3Pp3/8/8/8/4K3 w - e6 0 1",
    ])
    def test_en_passant_without_pushed_pawn(self, fen: str) -> None:
        with pytest.raises(FenError) as info:
            board_from_fen(fen)
        assert info.value.field == FenField.EN_PASSANT

    @pytest.mark.parametrize("fen", [
        "4k3/8/3N4/8/8/8/8/4K3 w - - 0 1",
        "4k3/8/8/8/8/8/8/4K2r b - - 0 1",
    ])
    def test_side_not_to_move_in_check(self, fen: str) -> None:
        with pytest.raises(InvalidGameState):
            board_from_fen(fen)

    def test_side_to_move_may_be_in_check(self) -> None:
        board = board_from_fen("4k3/8/3N4/8/8/8/8/4K3 b - - 0 1")
        assert board.is_in_check()
        assert "d6e8" not in {str(m) for m in board.all_legal_moves()}


class TestFenSerialisation:
    def test_roundtrip_starting(self) -> None:
        assert board_to_fen(board_from_fen(STARTING_FEN)) == STARTING_FEN

    def test_roundtrip_after_e4(self) -> None:
        board = board_from_fen(STARTING_FEN)
        board.make_move(Move.parse("e2e4"))
        assert board_from_fen(board.to_fen()) == board

    @pytest.mark.parametrize("fen", [
        "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1",
        "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1",
        "rnbq1k1r/pp1Pbppp/2p5/8/2B5/8/PPP1NnPP/RNBQK2R w KQ - 1 8",
        "8/8/8/8/8/8/8/K6k b - - 99 123",
        "r3k2r/8/8/8/8/8/8/R3K2R w Kq - 0 1",
        "4k3/8/8/5pP1/8/8/8/4K3 w - f6 0 40",
    ])
    def test_roundtrip_custom(self, fen: str) -> None:
        assert board_to_fen(board_from_fen(fen)) == fen

    def test_castling_canonical_order(self) -> None:
        board = board_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w qkQK - 0 1")
        assert board.to_fen().split()[2] == "KQkq"

    def test_repr_shows_fen(self) -> None:
        assert repr(Board.initial()) == f"Board({STARTING_FEN!r})"
