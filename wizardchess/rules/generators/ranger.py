"""Ranger move generator.

Rangers step like a king and also fire a cannon along each lattice
direction: the first visible piece on the ray is the screen, and a
visible enemy directly behind it may be captured by jumping.

Guard lights and stealthed enemy assassins are transparent to the scan.
An unactivated bard cannot act as a screen.
"""

from __future__ import annotations

from typing import List, Optional

from wizardchess.board_manager import DIRECTIONS, Direction
from wizardchess.models import ActionType, CandidateAction, GameState, Piece, PieceType, Side
from wizardchess.rules.core import BoardView, is_enemy
from wizardchess.rules.interfaces import Generator


class RangerGenerator(Generator):
    piece_type = PieceType.RANGER

    def generate(self, state: GameState, piece: Piece, side: Side) -> List[CandidateAction]:
        view = BoardView(state)
        actions = self._step(view, piece, side, sorted(view.geometry.neighbours(piece.cell)))
        for direction in DIRECTIONS:
            jump = self._cannon(view, piece, side, direction)
            if jump is not None:
                actions.append(jump)
        return actions

    def _cannon(
        self,
        view: BoardView,
        piece: Piece,
        side: Side,
        direction: Direction,
    ) -> Optional[CandidateAction]:
        for cell in view.geometry.ray(piece.cell, direction):
            screen = view.piece_at(cell, side)
            if screen is None:
                continue
            if screen.type is PieceType.BARD and not screen.activated:
                return None
            target_cell = view.geometry.offset(cell, direction)
            if target_cell is None:
                return None
            target = view.piece_at(target_cell, side)
            if (
                target is not None
                and is_enemy(target, side)
                and target.type is not PieceType.BARD
                and view.can_stop(target_cell, side, piece.type)
            ):
                return CandidateAction(
                    type=ActionType.ATTACK, row=target_cell[0], col=target_cell[1]
                )
            return None
        return None
