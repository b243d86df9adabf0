"""Assassin move generator.

An assassin lands on the far corner of the parallelogram spanned by its
cell and two mutually adjacent neighbours that lie on different rows.
Entering or leaving stealth is decided at resolution time from the
direction of travel, not offered as a separate action.
"""

from __future__ import annotations

from typing import List, Tuple

from wizardchess.board_manager import DIRECTIONS, Direction
from wizardchess.models import CandidateAction, GameState, Piece, PieceType, Side
from wizardchess.rules.core import BoardView
from wizardchess.rules.interfaces import Generator


def _parallelogram_offsets() -> Tuple[Direction, ...]:
    offsets = []
    for i, a in enumerate(DIRECTIONS):
        for b in DIRECTIONS[i + 1:]:
            mutually_adjacent = (a[0] - b[0], a[1] - b[1]) in DIRECTIONS
            # row index is x + y in the square frame
            different_rows = sum(a) != sum(b)
            if mutually_adjacent and different_rows:
                offsets.append((a[0] + b[0], a[1] + b[1]))
    return tuple(offsets)


ASSASSIN_OFFSETS: Tuple[Direction, ...] = _parallelogram_offsets()


class AssassinGenerator(Generator):
    piece_type = PieceType.ASSASSIN

    def generate(self, state: GameState, piece: Piece, side: Side) -> List[CandidateAction]:
        view = BoardView(state)
        targets = [view.geometry.offset(piece.cell, offset) for offset in ASSASSIN_OFFSETS]
        return self._step(view, piece, side, [c for c in targets if c is not None])
