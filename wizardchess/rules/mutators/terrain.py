"""Terrain mark mutators.

Scorch:
    Every cell a dragon flies over (origin included, destination excluded)
    is scorched with the dragon's tag. A dragon's previous trail is erased
    each time it moves, and its whole trail goes when it is captured. A
    paladin landing on scorch clears that cell.

Guard light:
    Placed by a paladin that dies guarding a friend. It blocks the
    opposing side and lasts through the attacker's next turn: it is
    dropped at the start of the creating side's next turn that begins
    after the one in which it was placed. A paladin of either side landing
    on it clears it early.
"""

from __future__ import annotations

import logging
from typing import Iterable

from wizardchess.board_manager import Cell
from wizardchess.models import GameState, GuardLight, ScorchMark, Side
from wizardchess.rules.interfaces import Mutator

logger = logging.getLogger(__name__)


class ScorchMutator(Mutator):
    """Replaces a dragon's trail."""

    def apply(self, state: GameState, tag: str, side: Side, cells: Iterable[Cell]) -> None:
        self.erase(state, tag)
        for row, col in cells:
            state.scorch_marks.append(ScorchMark(row=row, col=col, tag=tag, created_by=side))

    def erase(self, state: GameState, tag: str) -> None:
        state.scorch_marks = [m for m in state.scorch_marks if m.tag != tag]

    def clear_at(self, state: GameState, cell: Cell) -> None:
        state.scorch_marks = [m for m in state.scorch_marks if (m.row, m.col) != cell]


class GuardLightMutator(Mutator):
    """Places, clears and expires guard lights."""

    def apply(self, state: GameState, cell: Cell, side: Side) -> None:
        self.clear_at(state, cell)
        state.guard_lights.append(
            GuardLight(row=cell[0], col=cell[1], created_by=side, placed_on_turn=state.turn_number)
        )

    def clear_at(self, state: GameState, cell: Cell) -> None:
        state.guard_lights = [g for g in state.guard_lights if (g.row, g.col) != cell]

    def expire(self, state: GameState, starting_side: Side) -> None:
        """Drop ``starting_side``'s lights at the start of its turn.

        Lights placed during the turn that just ended survive one more
        round so that they actually block the opponent's next move.
        """
        just_ended = state.turn_number - 1
        kept = [
            g for g in state.guard_lights
            if g.created_by != starting_side or g.placed_on_turn >= just_ended
        ]
        dropped = len(state.guard_lights) - len(kept)
        if dropped:
            logger.debug(f"Expired {dropped} guard light(s) of {starting_side.value}")
        state.guard_lights = kept
