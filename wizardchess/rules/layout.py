"""Initial piece layout.

White occupies the contracting half (rows 10-16); black is the mirror
image across the middle row. The neutral bard starts on the centre node.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from wizardchess.board_manager import BOARD_SIZE
from wizardchess.models import (
    ApprenticeTraits,
    AssassinTraits,
    BardTraits,
    DragonTraits,
    GameState,
    Piece,
    PieceType,
    Side,
)

# (type, row, col) for the white side
WHITE_HOME: Tuple[Tuple[PieceType, int, int], ...] = (
    (PieceType.WIZARD, 16, 0),
    (PieceType.DRAGON, 14, 1),
    (PieceType.GRIFFIN, 14, 0),
    (PieceType.GRIFFIN, 14, 2),
    (PieceType.RANGER, 13, 0),
    (PieceType.RANGER, 13, 3),
    (PieceType.PALADIN, 13, 1),
    (PieceType.PALADIN, 13, 2),
    (PieceType.ASSASSIN, 12, 1),
    (PieceType.ASSASSIN, 12, 3),
    (PieceType.APPRENTICE, 10, 0),
    (PieceType.APPRENTICE, 10, 1),
    (PieceType.APPRENTICE, 10, 2),
    (PieceType.APPRENTICE, 10, 3),
    (PieceType.APPRENTICE, 10, 4),
    (PieceType.APPRENTICE, 10, 5),
    (PieceType.APPRENTICE, 10, 6),
)

BARD_HOME = (BOARD_SIZE, BOARD_SIZE // 2)


def make_piece(
    piece_type: PieceType,
    side: Side,
    row: int,
    col: int,
    piece_id: Optional[str] = None,
    **traits,
) -> Piece:
    """Build a piece with the payload its archetype requires."""
    piece_id = piece_id or f"{side.value}-{piece_type.value}-{row}-{col}"
    payload = None
    if piece_type is PieceType.ASSASSIN:
        payload = AssassinTraits(**traits)
    elif piece_type is PieceType.BARD:
        payload = BardTraits(**traits)
    elif piece_type is PieceType.APPRENTICE:
        payload = ApprenticeTraits(**traits)
    elif piece_type is PieceType.DRAGON:
        payload = DragonTraits(tag=traits.get("tag", piece_id))
    return Piece(id=piece_id, type=piece_type, side=side, row=row, col=col, traits=payload)


def initial_pieces(size: int = BOARD_SIZE) -> List[Piece]:
    pieces: List[Piece] = []
    counters: Dict[Tuple[Side, PieceType], int] = {}

    def next_id(side: Side, piece_type: PieceType) -> str:
        n = counters.get((side, piece_type), 0) + 1
        counters[(side, piece_type)] = n
        return f"{side.value}-{piece_type.value}-{n}"

    for piece_type, row, col in WHITE_HOME:
        pieces.append(make_piece(piece_type, Side.WHITE, row, col, next_id(Side.WHITE, piece_type)))
    for piece_type, row, col in WHITE_HOME:
        pieces.append(
            make_piece(piece_type, Side.BLACK, 2 * size - row, col, next_id(Side.BLACK, piece_type))
        )
    pieces.append(make_piece(PieceType.BARD, Side.NEUTRAL, *BARD_HOME, piece_id="neutral-bard"))
    return pieces


def initial_state() -> GameState:
    return GameState(pieces={p.id: p for p in initial_pieces()})
