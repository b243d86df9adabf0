from typing import Optional

from wizardchess.models import GameState, Side, TurnPhase
from wizardchess.rules.interfaces import Validator


class TurnValidator(Validator):
    """Checks game status, phase and, when known, who is asking."""

    def validate(
        self,
        state: GameState,
        phases: tuple,
        as_side: Optional[Side] = None,
    ) -> bool:
        # 1. Game Over Check
        if state.game_over:
            return False

        # 2. Phase Check
        if state.phase not in phases:
            return False

        # 3. Turn Check
        if as_side is not None and as_side != state.current_side:
            return False

        return True


class GuardDecisionValidator(Validator):
    """The guard decision belongs to the defender, not the side to move."""

    def validate(self, state: GameState, as_side: Optional[Side] = None) -> bool:
        if state.game_over or state.phase != TurnPhase.AWAITING_GUARD_DECISION:
            return False
        if as_side is None:
            return True
        return as_side == state.turn.pending.defending_side
