"""Assassin stealth transitions.

Stealth follows the direction of travel. The signed sum of the square-frame
deltas between origin and destination is -1 when white advances and +1
when it retreats (reversed for black):

    advance  -> enter stealth
    retreat  -> leave stealth, hidden for a grace period
    other    -> unchanged

Leaving stealth by retreating does not expose the assassin straight away:
``stealth_expires_on_side`` is set to the opponent and the piece stays
hidden from it until the handoff that follows the opponent's next turn.
Forced reveals (opposing protection zone, swap, capture) clear both the flag
and the grace marker at once.
"""

from __future__ import annotations

import logging
from typing import Iterable

from wizardchess.board_manager import BoardManager, Cell
from wizardchess.models import AssassinTraits, GameState, Piece, PieceType, Side
from wizardchess.rules.core import geometry_for, in_protection_zone, protection_zone

logger = logging.getLogger(__name__)

STEALTH_ENTER_DELTA = {Side.WHITE: -1, Side.BLACK: 1}


def update_stealth(piece: Piece, origin: Cell, dest: Cell) -> Piece:
    """Apply the directional stealth rule to ``piece`` in place and return it."""
    traits = piece.traits
    if not isinstance(traits, AssassinTraits) or piece.side not in STEALTH_ENTER_DELTA:
        return piece
    dx, dy = BoardManager.geometry().delta(origin, dest)
    delta_sum = dx + dy
    enter = STEALTH_ENTER_DELTA[piece.side]
    if delta_sum == enter:
        traits.stealthed = True
        traits.stealth_expires_on_side = None
    elif delta_sum == -enter and traits.stealthed:
        traits.stealthed = False
        traits.stealth_expires_on_side = piece.side.opponent
    return piece


def reveal(piece: Piece) -> bool:
    """Force ``piece`` fully visible. Returns True if anything changed."""
    traits = piece.traits
    if not isinstance(traits, AssassinTraits):
        return False
    changed = traits.stealthed or traits.stealth_expires_on_side is not None
    traits.stealthed = False
    traits.stealth_expires_on_side = None
    if changed:
        logger.debug(f"Assassin {piece.id} revealed")
    return changed


def reveal_if_in_opposing_zone(state: GameState, piece: Piece) -> bool:
    if piece.type is not PieceType.ASSASSIN:
        return False
    if in_protection_zone(state, piece.cell, piece.side.opponent):
        return reveal(piece)
    return False


def reveal_in_paladin_zone(state: GameState, paladin: Piece) -> int:
    """Reveal every enemy assassin standing in ``paladin``'s protection zone."""
    zone = protection_zone(paladin, geometry_for(state))
    revealed = 0
    for piece in state.pieces.values():
        if (
            piece.type is PieceType.ASSASSIN
            and piece.side == paladin.side.opponent
            and piece.cell in zone
            and reveal(piece)
        ):
            revealed += 1
    return revealed


def expire_grace(pieces: Iterable[Piece], completed_side: Side) -> None:
    """Drop grace markers that end when ``completed_side`` finishes its turn."""
    for piece in pieces:
        traits = piece.traits
        if isinstance(traits, AssassinTraits) and traits.stealth_expires_on_side == completed_side:
            traits.stealth_expires_on_side = None
