"""Guard exchange mutator.

When the defender accepts a guard:

1. the chosen paladin is captured in place of the target
2. the target relocates to the paladin's former cell
3. a melee attacker advances into the target's original cell; a beam
   attacker stays where it is
4. a guard light of the defending side is left on the target's original
   cell

Relocated assassins are re-evaluated for stealth like any other move. A
guarded dragon leaves no scorch trail and keeps its existing one.
"""

from __future__ import annotations

import logging

from wizardchess.models import GameState, PendingGuard, Piece
from wizardchess.rules.interfaces import Mutator
from wizardchess.rules.mutators.capture import CaptureMutator
from wizardchess.rules.mutators.movement import RelocationMutator
from wizardchess.rules.mutators.terrain import GuardLightMutator

logger = logging.getLogger(__name__)


class GuardMutator(Mutator):
    def __init__(self):
        self.capture = CaptureMutator()
        self.relocation = RelocationMutator()
        self.lights = GuardLightMutator()

    def apply(
        self,
        state: GameState,
        pending: PendingGuard,
        attacker: Piece,
        target: Piece,
        paladin: Piece,
    ) -> None:
        target_cell = target.cell
        paladin_cell = paladin.cell

        self.capture.apply(state, paladin)
        self.relocation.apply(state, target, paladin_cell, scorch=False)
        if pending.melee:
            self.relocation.apply(state, attacker, target_cell, forced_reveal=True)
        self.lights.apply(state, target_cell, pending.defending_side)

        logger.debug(
            f"{paladin.id} guarded {target.id} against {attacker.id}; light at {target_cell}"
        )
