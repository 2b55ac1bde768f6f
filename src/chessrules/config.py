"""Rule parameters shared by boards and games."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RulesConfig:
    """Tunable rule parameters.

    ``halfmove_draw_limit`` is the halfmove-clock value at which a position
    that still has legal moves is classified as a draw.
    """

    halfmove_draw_limit: int = 50

    def __post_init__(self) -> None:
        if self.halfmove_draw_limit < 1:
            raise ValueError(
                f"halfmove_draw_limit must be positive, got {self.halfmove_draw_limit}"
            )


DEFAULT_RULES = RulesConfig()
