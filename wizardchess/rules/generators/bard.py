"""Bard move generator.

The bard is inert until the first capture of the game activates it. Once
active, whichever side is to move may step it to an open neighbour or jump
it once over an adjacent piece. The bard never attacks; a stealthed enemy
assassin looks like an open cell and is caught when the bard lands on it.
Every bard move is followed by a forced swap (handled by the engine).
"""

from __future__ import annotations

from typing import List

from wizardchess.board_manager import DIRECTIONS
from wizardchess.models import ActionType, CandidateAction, GameState, Piece, PieceType, Side
from wizardchess.rules.core import BoardView
from wizardchess.rules.interfaces import Generator


class BardGenerator(Generator):
    piece_type = PieceType.BARD

    def generate(self, state: GameState, piece: Piece, side: Side) -> List[CandidateAction]:
        if not piece.activated:
            return []
        view = BoardView(state)
        actions = self._step(
            view, piece, side, sorted(view.geometry.neighbours(piece.cell)), allow_attack=False
        )

        for direction in DIRECTIONS:
            over = view.geometry.offset(piece.cell, direction)
            if over is None or not view.can_enter(over, side):
                continue
            jumped = view.piece_at(over, side)
            if jumped is None or jumped.stealthed:
                continue
            if jumped.type is PieceType.BARD and not jumped.activated:
                continue
            landing = view.geometry.offset(over, direction)
            if landing is None:
                continue
            if view.is_open(landing, side) and view.can_stop(landing, side, piece.type):
                actions.append(CandidateAction(type=ActionType.MOVE, row=landing[0], col=landing[1]))
        return actions
