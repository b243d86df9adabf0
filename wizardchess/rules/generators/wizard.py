"""Wizard move generator.

Per-turn options:
- one step to any open adjacent cell (no melee from a plain step)
- swap with any friendly apprentice that has not used its swap
- at most one attack: the unique target of the conductor beam
"""

from __future__ import annotations

from typing import List

from wizardchess.models import ActionType, CandidateAction, GameState, Piece, PieceType, Side
from wizardchess.rules.beam import trace_beam
from wizardchess.rules.core import BoardView
from wizardchess.rules.interfaces import Generator


class WizardGenerator(Generator):
    piece_type = PieceType.WIZARD

    def generate(self, state: GameState, piece: Piece, side: Side) -> List[CandidateAction]:
        view = BoardView(state)
        actions = self._step(
            view, piece, side, sorted(view.geometry.neighbours(piece.cell)), allow_attack=False
        )

        for other in state.pieces.values():
            if (
                other.side == side
                and other.type is PieceType.APPRENTICE
                and not other.swap_used
            ):
                actions.append(CandidateAction(type=ActionType.SWAP, row=other.row, col=other.col))

        beam = trace_beam(state, piece.id)
        if beam.target is not None:
            actions.append(
                CandidateAction(type=ActionType.ATTACK, row=beam.target[0], col=beam.target[1])
            )
        return actions
