"""Capture mutator."""

from __future__ import annotations

import logging

from wizardchess.models import BardTraits, GameState, Piece, PieceType
from wizardchess.rules.interfaces import Mutator
from wizardchess.rules.mutators.terrain import ScorchMutator

logger = logging.getLogger(__name__)


def activate_bards(state: GameState) -> int:
    """Wake every bard on the board. Returns how many changed."""
    woken = 0
    for piece in state.pieces.values():
        if isinstance(piece.traits, BardTraits) and not piece.traits.activated:
            piece.traits.activated = True
            woken += 1
    if woken:
        logger.info(f"First blood on turn {state.turn_number}: {woken} bard(s) activated")
    return woken


class CaptureMutator(Mutator):
    """Removes a piece from the arena.

    Bards cannot be captured; ``apply`` returns False and leaves the state
    untouched. A captured dragon takes its scorch trail with it.
    """

    def __init__(self):
        self.scorch = ScorchMutator()

    def apply(self, state: GameState, target: Piece) -> bool:
        if target.type is PieceType.BARD:
            return False
        if state.pieces.pop(target.id, None) is None:
            return False

        state.captured.setdefault(target.side, []).append(target.type)
        if target.dragon_tag:
            self.scorch.erase(state, target.dragon_tag)
        activate_bards(state)
        logger.debug(f"Captured {target.id} at {target.cell}")
        return True
