"""Apprentice move generator.

Apprentices only ever advance: white toward smaller rows, black toward
larger rows. Each apprentice may swap with its own wizard exactly once.
"""

from __future__ import annotations

from typing import List

from wizardchess.models import ActionType, CandidateAction, GameState, Piece, PieceType, Side
from wizardchess.rules.core import BoardView, wizard_of
from wizardchess.rules.interfaces import Generator


def is_forward(side: Side, from_row: int, to_row: int) -> bool:
    if side is Side.WHITE:
        return to_row < from_row
    if side is Side.BLACK:
        return to_row > from_row
    return False


class ApprenticeGenerator(Generator):
    piece_type = PieceType.APPRENTICE

    def generate(self, state: GameState, piece: Piece, side: Side) -> List[CandidateAction]:
        view = BoardView(state)
        forward = [
            cell for cell in sorted(view.geometry.neighbours(piece.cell))
            if is_forward(side, piece.row, cell[0])
        ]
        actions = self._step(view, piece, side, forward)

        wizard = wizard_of(state, side)
        if wizard is not None and not piece.swap_used:
            actions.append(CandidateAction(type=ActionType.SWAP, row=wizard.row, col=wizard.col))
        return actions
