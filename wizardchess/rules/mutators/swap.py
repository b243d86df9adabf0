"""Swap mutator.

Exchanges the cells of two pieces. Swapping is always visible: an assassin
taking part is revealed. An apprentice that trades places with its wizard
spends its one swap, whichever of the two initiated it.
"""

from __future__ import annotations

import logging

from wizardchess.models import ApprenticeTraits, GameState, Piece, PieceType
from wizardchess.rules.interfaces import Mutator
from wizardchess.rules.mutators.movement import RelocationMutator

logger = logging.getLogger(__name__)


class SwapMutator(Mutator):
    def __init__(self):
        self.relocation = RelocationMutator()

    def apply(self, state: GameState, first: Piece, second: Piece) -> None:
        first_cell, second_cell = first.cell, second.cell
        self.relocation.apply(state, first, second_cell, forced_reveal=True, scorch=False)
        self.relocation.apply(state, second, first_cell, forced_reveal=True, scorch=False)

        types = {first.type, second.type}
        if types == {PieceType.APPRENTICE, PieceType.WIZARD}:
            apprentice = first if first.type is PieceType.APPRENTICE else second
            if isinstance(apprentice.traits, ApprenticeTraits):
                apprentice.traits.swap_used = True

        logger.debug(f"Swapped {first.id} <-> {second.id}")
