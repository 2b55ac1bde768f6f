"""Game wrapper owning one board and its move history."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

from chessrules.config import RulesConfig
from chessrules.core.board import Board, BoardState
from chessrules.core.enums import Color, Outcome, PieceKind
from chessrules.core.errors import GameOver
from chessrules.core.move import Move
from chessrules.core.notation import STARTING_FEN, board_from_fen

_LOGGER = logging.getLogger(__name__)

GameState = BoardState
"""Result of :meth:`Game.make_move`: ``ONGOING``, ``DRAW`` or ``checkmate(winner)``."""


@dataclass
class MoveRecord:
    """A single entry in the move history."""

    move: Move
    fen_after: str
    state: GameState
    was_capture: bool = False
    was_check: bool = False


@dataclass
class Game:
    """Thin owner of a :class:`Board`.

    Example::

        game = Game()
        while True:
            move = get_move()
            if game.missing_promotion(move):
                move = move.with_promotion(get_promotion())
            state = game.make_move(move)
            if state.is_over:
                break
    """

    board: Board = field(default_factory=Board.initial)
    history: list[MoveRecord] = field(default_factory=list, init=False)
    _snapshots: list[Board] = field(default_factory=list, init=False, repr=False)

    @classmethod
    def from_fen(cls, fen: str = STARTING_FEN, rules: RulesConfig | None = None) -> Game:
        return cls(board_from_fen(fen, rules))

    def to_fen(self) -> str:
        return self.board.to_fen()

    # ── Move application ─────────────────────────────────────────────────

    def make_move(self, move: Move) -> GameState:
        """Apply *move* and record it.

        Raises the board's move errors unchanged, or :class:`GameOver` once
        the game has ended.
        """
        if self.is_over:
            raise GameOver()

        board = self.board
        mover = board[move.from_sq]
        was_capture = board[move.to_sq] is not None or (
            mover is not None
            and mover.kind == PieceKind.PAWN
            and move.to_sq == board.en_passant_square
        )

        snapshot = board.copy()
        state = board.make_move(move)
        self._snapshots.append(snapshot)

        record = MoveRecord(
            move=move,
            fen_after=board.to_fen(),
            state=state,
            was_capture=was_capture,
            was_check=board.is_in_check(),
        )
        self.history.append(record)

        if state.is_over:
            _LOGGER.info("Game over after %d plies: %s", self.ply_count, state)
        return state

    def undo_last_move(self) -> Move | None:
        """Undo the last move. Returns the undone Move, or None if empty."""
        if not self.history:
            return None
        record = self.history.pop()
        self.board = self._snapshots.pop()
        return record.move

    # ── Forwarded queries ────────────────────────────────────────────────

    def all_legal_moves(self) -> Iterator[Move]:
        return self.board.all_legal_moves()

    def is_legal_move(self, move: Move) -> bool:
        return self.board.is_legal_move(move)

    def missing_promotion(self, move: Move) -> bool:
        return self.board.missing_promotion(move)

    def is_in_check(self) -> bool:
        return self.board.is_in_check()

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self.board.state

    @property
    def is_over(self) -> bool:
        return self.board.state.is_over

    @property
    def winner(self) -> Color | None:
        state = self.board.state
        return state.winner if state.outcome == Outcome.CHECKMATE else None

    @property
    def side_to_move(self) -> Color:
        return self.board.next_to_move

    @property
    def ply_count(self) -> int:
        """Number of half-moves played through this game."""
        return len(self.history)
