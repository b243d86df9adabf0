"""Win detection.

A side wins as soon as it is the only one with a wizard on the board. If
both wizards are gone the game is over with no winner.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from wizardchess.models import GameState, Side
from wizardchess.rules.core import wizard_of

logger = logging.getLogger(__name__)


def check_winner(state: GameState) -> Tuple[bool, Optional[Side]]:
    """Return ``(game_over, winner)`` for the current position."""
    white = wizard_of(state, Side.WHITE) is not None
    black = wizard_of(state, Side.BLACK) is not None
    if white and black:
        return False, None
    if white:
        return True, Side.WHITE
    if black:
        return True, Side.BLACK
    return True, None


def apply_victory(state: GameState) -> bool:
    """Record the result on ``state``. Returns True if the game just ended."""
    if state.game_over:
        return False
    over, winner = check_winner(state)
    if not over:
        return False
    state.game_over = True
    state.winner = winner
    if winner is None:
        logger.info(f"Game over on turn {state.turn_number}: both wizards captured, no winner")
    else:
        logger.info(f"Game over on turn {state.turn_number}: {winner.value} wins")
    return True
