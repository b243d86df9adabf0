"""Coordinate labels and move-record text.

Cells are written as a file letter (square x, from ``A``) followed by a
1-indexed rank (square y + 1). The white wizard starts on ``I9``.

Record text:

    move     ``Wizard I9 → H9``
    capture  ``Dragon G7 ⚔ Ranger G3``
    swap     ``Wizard I9 ⇄ Apprentice E5``
    no-op    ``Ranger E5 attacks Bard E4 (no effect)``
    guard    ``Ranger E5 → E4 (Paladin F4 guards Assassin)``
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional, Set

from wizardchess.board_manager import BOARD_SIZE, Cell, BoardManager, coordinate_label
from wizardchess.models import MoveRecord, PieceType, Side

PIECE_NAMES = {
    PieceType.WIZARD: "Wizard",
    PieceType.APPRENTICE: "Apprentice",
    PieceType.DRAGON: "Dragon",
    PieceType.RANGER: "Ranger",
    PieceType.GRIFFIN: "Griffin",
    PieceType.ASSASSIN: "Assassin",
    PieceType.PALADIN: "Paladin",
    PieceType.BARD: "Bard",
}

HIDDEN_TEXT = "(hidden move)"

_LABEL_RE = re.compile(r"^([A-Za-z])(\d+)$")


def position_to_algebraic(cell: Cell, size: int = BOARD_SIZE) -> str:
    return coordinate_label(cell[0], cell[1], size)


def algebraic_to_position(label: str, size: int = BOARD_SIZE) -> Cell:
    """Parse ``label`` back to a lattice cell.

    Raises:
        ValueError: if the label is malformed or off the board
    """
    match = _LABEL_RE.match(label.strip())
    if not match:
        raise ValueError(f"Invalid coordinate: {label!r}")
    x = ord(match.group(1).upper()) - ord("A")
    y = int(match.group(2)) - 1
    cell = BoardManager.geometry(size).from_square(x, y)
    if cell is None:
        raise ValueError(f"Coordinate off board: {label!r}")
    return cell


def piece_name(piece_type: PieceType) -> str:
    return PIECE_NAMES[piece_type]


def move_text(piece_type: PieceType, origin: Cell, dest: Cell) -> str:
    return f"{piece_name(piece_type)} {position_to_algebraic(origin)} → {position_to_algebraic(dest)}"


def capture_text(piece_type: PieceType, origin: Cell, target_type: PieceType, target: Cell) -> str:
    return (
        f"{piece_name(piece_type)} {position_to_algebraic(origin)} ⚔ "
        f"{piece_name(target_type)} {position_to_algebraic(target)}"
    )


def swap_text(piece_type: PieceType, origin: Cell, partner_type: PieceType, partner: Cell) -> str:
    return (
        f"{piece_name(piece_type)} {position_to_algebraic(origin)} ⇄ "
        f"{piece_name(partner_type)} {position_to_algebraic(partner)}"
    )


def no_effect_text(piece_type: PieceType, origin: Cell, target: Cell) -> str:
    return (
        f"{piece_name(piece_type)} {position_to_algebraic(origin)} attacks "
        f"{piece_name(PieceType.BARD)} {position_to_algebraic(target)} (no effect)"
    )


def guard_text(
    piece_type: PieceType,
    origin: Cell,
    target: Cell,
    paladin: Cell,
    target_type: PieceType,
    ranged: bool = False,
) -> str:
    """Record for a guarded attack. A ``ranged`` attacker gets no move arrow."""
    guard = f"(Paladin {position_to_algebraic(paladin)} guards"
    if ranged:
        return (
            f"{piece_name(piece_type)} {position_to_algebraic(origin)} attacks "
            f"{piece_name(target_type)} {position_to_algebraic(target)} {guard})"
        )
    return (
        f"{piece_name(piece_type)} {position_to_algebraic(origin)} → {position_to_algebraic(target)} "
        f"{guard} {piece_name(target_type)})"
    )


def make_record(text: str, hidden_from: Optional[Set[Side]] = None) -> MoveRecord:
    """Build a record, redacting the variant of every side in ``hidden_from``."""
    hidden_from = hidden_from or set()
    return MoveRecord(
        full=text,
        white_view=HIDDEN_TEXT if Side.WHITE in hidden_from else text,
        black_view=HIDDEN_TEXT if Side.BLACK in hidden_from else text,
    )


def moves_to_notation_list(records: Iterable[MoveRecord], viewer: Optional[Side] = None) -> List[str]:
    """Numbered history lines as ``viewer`` may see them."""
    return [f"{i}. {record.for_viewer(viewer)}" for i, record in enumerate(records, start=1)]
