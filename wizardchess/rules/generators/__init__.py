"""Candidate action generators, one per archetype.

Generators:
- ApprenticeGenerator: forward steps, one-time swap with the wizard
- WizardGenerator: steps, apprentice swaps, conductor beam attack
- DragonGenerator: straight flights that leave scorch
- RangerGenerator: king steps plus cannon jumps
- GriffinGenerator: row glides plus vertical hops
- AssassinGenerator: parallelogram-diagonal leaps
- PaladinGenerator: king steps, may stop on scorch
- BardGenerator: steps and single jumps once activated

Architecture Note:
    ``generate_candidates`` is the single dispatch point used by the
    engine and the REST surface. It resolves the acting side for the
    neutral bard and drops duplicate cells.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from wizardchess.models import CandidateAction, GameState, PieceType, Side
from wizardchess.rules.generators.apprentice import ApprenticeGenerator
from wizardchess.rules.generators.assassin import AssassinGenerator
from wizardchess.rules.generators.bard import BardGenerator
from wizardchess.rules.generators.dragon import DragonGenerator
from wizardchess.rules.generators.griffin import GriffinGenerator
from wizardchess.rules.generators.paladin import PaladinGenerator
from wizardchess.rules.generators.ranger import RangerGenerator
from wizardchess.rules.generators.wizard import WizardGenerator
from wizardchess.rules.interfaces import Generator

GENERATORS: Dict[PieceType, Generator] = {
    gen.piece_type: gen
    for gen in (
        ApprenticeGenerator(),
        WizardGenerator(),
        DragonGenerator(),
        RangerGenerator(),
        GriffinGenerator(),
        AssassinGenerator(),
        PaladinGenerator(),
        BardGenerator(),
    )
}


def acting_side(state: GameState, piece_side: Side) -> Side:
    """Neutral pieces are moved by whichever side is to play."""
    if piece_side is Side.NEUTRAL:
        return state.current_side
    return piece_side


def generate_candidates(
    state: GameState,
    piece_id: str,
    side: Optional[Side] = None,
) -> List[CandidateAction]:
    """Candidate actions for ``piece_id`` at its current position."""
    piece = state.pieces.get(piece_id)
    if piece is None:
        return []
    side = side or acting_side(state, piece.side)

    seen = set()
    unique: List[CandidateAction] = []
    for action in GENERATORS[piece.type].generate(state, piece, side):
        key = (action.type, action.row, action.col)
        if key not in seen:
            seen.add(key)
            unique.append(action)
    return unique


__all__ = [
    "ApprenticeGenerator",
    "AssassinGenerator",
    "BardGenerator",
    "DragonGenerator",
    "GENERATORS",
    "GriffinGenerator",
    "PaladinGenerator",
    "RangerGenerator",
    "WizardGenerator",
    "acting_side",
    "generate_candidates",
]
