"""Dragon move generator.

Dragons fly in a straight line along any of the six lattice directions and
stop at the first piece. Occupancy is physical: a stealthed assassin in the
way is burned like any other enemy. Bards are never captured.
"""

from __future__ import annotations

from typing import List

from wizardchess.board_manager import DIRECTIONS
from wizardchess.models import CandidateAction, GameState, Piece, PieceType, Side
from wizardchess.rules.core import BoardView, Visibility
from wizardchess.rules.interfaces import Generator


class DragonGenerator(Generator):
    piece_type = PieceType.DRAGON

    def generate(self, state: GameState, piece: Piece, side: Side) -> List[CandidateAction]:
        view = BoardView(state)
        actions: List[CandidateAction] = []
        for direction in DIRECTIONS:
            actions.extend(self._slide(view, piece, side, direction, mode=Visibility.PHYSICAL))
        return actions
