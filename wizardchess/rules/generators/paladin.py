"""Paladin move generator.

Paladins step like a king and are the only archetype allowed to stop on
scorch. Their protection zone drives the guard mechanic and stealth
reveals; see :func:`wizardchess.rules.core.protection_zone`.
"""

from __future__ import annotations

from typing import List

from wizardchess.models import CandidateAction, GameState, Piece, PieceType, Side
from wizardchess.rules.core import BoardView
from wizardchess.rules.interfaces import Generator


class PaladinGenerator(Generator):
    piece_type = PieceType.PALADIN

    def generate(self, state: GameState, piece: Piece, side: Side) -> List[CandidateAction]:
        view = BoardView(state)
        return self._step(view, piece, side, sorted(view.geometry.neighbours(piece.cell)))
