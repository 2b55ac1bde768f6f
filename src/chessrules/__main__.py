"""Perft command line entry point (``chessrules-perft`` / ``python -m chessrules``)."""

from __future__ import annotations

import argparse
import logging
import sys
import time

from chessrules.core.errors import ChessError
from chessrules.core.notation import STARTING_FEN, board_from_fen
from chessrules.core.perft import divide, perft

_LOGGER = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chessrules-perft",
        description="Run perft on a given FEN and depth",
    )
    parser.add_argument(
        "--fen", type=str, default=STARTING_FEN, help="FEN string (default: startpos)"
    )
    parser.add_argument("--depth", type=int, default=3, help="Perft depth (default: 3)")
    parser.add_argument(
        "--divide", action="store_true", help="Print node counts per root move"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        board = board_from_fen(args.fen)
    except ChessError as exc:
        _LOGGER.error("Invalid FEN %r: %s", args.fen, exc)
        return 2
    if args.depth < 1:
        _LOGGER.error("Depth must be at least 1, got %d", args.depth)
        return 2

    start = time.perf_counter()
    if args.divide:
        counts = divide(board, args.depth)
        for move_text in sorted(counts):
            print(f"{move_text}: {counts[move_text]}")
        nodes = sum(counts.values())
    else:
        nodes = perft(board, args.depth)
    dt = time.perf_counter() - start
    print(
        f"nodes={nodes} depth={args.depth} time_ms={int(dt * 1000)} "
        f"nps={int(nodes / max(dt, 1e-9))}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
