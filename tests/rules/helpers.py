"""Board-building helpers for rules tests.

Positions are given in the rotated square frame ``(x, y)`` because straight
lines are easy to read there. Both wizards are added in far corners
(white at (8, 8), black at (0, 0)) unless the test places its own.
"""

from typing import Iterable, Optional, Set

from wizardchess.board_manager import Cell, square_to_lattice
from wizardchess.models import ActionType, CandidateAction, GameState, Piece, PieceType, Side
from wizardchess.rules.layout import make_piece


def at(x: int, y: int) -> Cell:
    return square_to_lattice(x, y)


def place(
    piece_type: PieceType,
    side: Side,
    x: int,
    y: int,
    piece_id: Optional[str] = None,
    **traits,
) -> Piece:
    row, col = at(x, y)
    piece_id = piece_id or f"{side.value}-{piece_type.value}-{x}-{y}"
    return make_piece(piece_type, side, row, col, piece_id, **traits)


def make_state(
    *pieces: Piece,
    current_side: Side = Side.WHITE,
    with_wizards: bool = True,
    **fields,
) -> GameState:
    all_pieces = list(pieces)
    if with_wizards:
        present = {(p.type, p.side) for p in all_pieces}
        if (PieceType.WIZARD, Side.WHITE) not in present:
            all_pieces.append(place(PieceType.WIZARD, Side.WHITE, 8, 8, "white-wizard"))
        if (PieceType.WIZARD, Side.BLACK) not in present:
            all_pieces.append(place(PieceType.WIZARD, Side.BLACK, 0, 0, "black-wizard"))
    return GameState(
        pieces={p.id: p for p in all_pieces},
        current_side=current_side,
        **fields,
    )


def cells(actions: Iterable[CandidateAction], action_type: Optional[ActionType] = None) -> Set[Cell]:
    return {a.cell for a in actions if action_type is None or a.type is action_type}
