"""Game layer: a board owner with move history.

Quick start::

    from chessrules.game import Game
    from chessrules.core import Move

    game = Game()
    state = game.make_move(Move.parse("e2e4"))
"""

from chessrules.game.game import Game, GameState, MoveRecord

__all__ = [
    "Game",
    "GameState",
    "MoveRecord",
]
