"""Griffin move generator.

Griffins glide without limit along their own row (constant ``x + y``) and
may hop a single step to the node directly above or below, which is
``(x - 1, y - 1)`` / ``(x + 1, y + 1)`` in the square frame.
"""

from __future__ import annotations

from typing import List

from wizardchess.board_manager import ROW_DIRECTIONS, TRUE_DIAGONAL_DIRECTIONS
from wizardchess.models import CandidateAction, GameState, Piece, PieceType, Side
from wizardchess.rules.core import BoardView
from wizardchess.rules.interfaces import Generator


class GriffinGenerator(Generator):
    piece_type = PieceType.GRIFFIN

    def generate(self, state: GameState, piece: Piece, side: Side) -> List[CandidateAction]:
        view = BoardView(state)
        actions: List[CandidateAction] = []
        for direction in ROW_DIRECTIONS:
            actions.extend(self._slide(view, piece, side, direction))

        hops = [view.geometry.offset(piece.cell, d) for d in TRUE_DIAGONAL_DIRECTIONS]
        actions.extend(self._step(view, piece, side, [c for c in hops if c is not None]))
        return actions
