"""Relocation mutator.

Moves a piece and applies everything that follows from where it lands:
assassin stealth, dragon scorch trails, and the paladin's terrain clearing
and reveal aura.
"""

from __future__ import annotations

import logging
from typing import List

from wizardchess.board_manager import Cell
from wizardchess.models import GameState, Piece, PieceType
from wizardchess.rules.core import geometry_for
from wizardchess.rules.interfaces import Mutator
from wizardchess.rules.mutators.terrain import GuardLightMutator, ScorchMutator
from wizardchess.rules.stealth import (
    reveal,
    reveal_if_in_opposing_zone,
    reveal_in_paladin_zone,
    update_stealth,
)

logger = logging.getLogger(__name__)


def flight_path(state: GameState, origin: Cell, dest: Cell) -> List[Cell]:
    """Cells a straight flight from ``origin`` covers, destination excluded."""
    geometry = geometry_for(state)
    line = geometry.line_direction(origin, dest)
    if line is None:
        return [origin]
    direction, distance = line
    return [geometry.offset(origin, direction, i) for i in range(distance)]


class RelocationMutator(Mutator):
    def __init__(self):
        self.scorch = ScorchMutator()
        self.lights = GuardLightMutator()

    def apply(
        self,
        state: GameState,
        piece: Piece,
        dest: Cell,
        *,
        forced_reveal: bool = False,
        scorch: bool = True,
    ) -> None:
        """Move ``piece`` to ``dest``.

        Args:
            forced_reveal: the move was a capture or swap, which always
                exposes an assassin
            scorch: leave a dragon trail (off for swaps and guard exchanges)
        """
        origin = piece.cell
        piece.row, piece.col = dest

        if piece.type is PieceType.ASSASSIN:
            update_stealth(piece, origin, dest)
            if forced_reveal:
                reveal(piece)
            else:
                reveal_if_in_opposing_zone(state, piece)

        elif piece.type is PieceType.DRAGON and scorch and piece.dragon_tag:
            self.scorch.apply(state, piece.dragon_tag, piece.side, flight_path(state, origin, dest))

        elif piece.type is PieceType.PALADIN:
            self.scorch.clear_at(state, dest)
            self.lights.clear_at(state, dest)
            revealed = reveal_in_paladin_zone(state, piece)
            if revealed:
                logger.debug(f"Paladin {piece.id} revealed {revealed} assassin(s)")
